"""Outbound ports: interfaces for external system adapters."""

from typing import List, Protocol, Union, runtime_checkable

from automate.domain.commands import ImageCommand
from automate.domain.models import ExecutionOutcome, Plan

PromptPart = Union[str, ImageCommand]


@runtime_checkable
class LLMPort(Protocol):
    """Interface for language-model backends.

    ``parts`` make up a single user turn: text directives and, for image
    commands, the image itself. Implementations raise GenerationError on
    any failure.
    """

    async def generate(self, parts: List[PromptPart]) -> str: ...


@runtime_checkable
class ExecutorPort(Protocol):
    """Interface for running an approved plan against the store backend."""

    async def execute(self, plan: Plan) -> ExecutionOutcome: ...


@runtime_checkable
class TranscriberPort(Protocol):
    """Interface for speech-to-text."""

    async def transcribe(self, audio: bytes) -> str: ...
