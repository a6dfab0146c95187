"""LLM adapters: Gemini REST client."""

from automate.adapters.llm.gemini_adapter import GeminiAdapter

__all__ = [
    "GeminiAdapter",
]
