"""Ports: protocol interfaces between the domain and adapters."""

from automate.ports.outbound import ExecutorPort, LLMPort, PromptPart, TranscriberPort

__all__ = [
    "ExecutorPort",
    "LLMPort",
    "PromptPart",
    "TranscriberPort",
]
