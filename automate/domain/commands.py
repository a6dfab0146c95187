"""Command inputs and the precedence policy between them."""

import base64
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from automate.domain.errors import AmbiguousInputError


@dataclass(frozen=True)
class VoiceCommand:
    transcript: str

    kind = "voice"

    @property
    def is_empty(self) -> bool:
        return not self.transcript.strip()

    def describe(self) -> str:
        return self.transcript


@dataclass(frozen=True)
class TextCommand:
    content: str

    kind = "text"

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()

    def describe(self) -> str:
        return self.content


@dataclass(frozen=True)
class ImageCommand:
    data: bytes
    mime_type: str = "image/jpeg"

    kind = "image"

    @property
    def is_empty(self) -> bool:
        return not self.data

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def describe(self) -> str:
        return f"[image {self.mime_type}, {len(self.data)} bytes]"


@dataclass(frozen=True)
class ActionSelection:
    """Bare quick-action click with no payload."""

    domain_area: str

    kind = "action"

    @property
    def is_empty(self) -> bool:
        return not self.domain_area.strip()

    def describe(self) -> str:
        return self.domain_area


CommandInput = Union[VoiceCommand, TextCommand, ImageCommand]
AnyInput = Union[VoiceCommand, TextCommand, ImageCommand, ActionSelection]

DEFAULT_PRIORITY: Sequence[str] = ("voice", "image", "text", "action")


def _present(candidates: Iterable[Optional[AnyInput]]) -> List[AnyInput]:
    return [c for c in candidates if c is not None and not c.is_empty]


def resolve_input_priority(
    candidates: Iterable[Optional[AnyInput]],
    order: Sequence[str] = DEFAULT_PRIORITY,
) -> AnyInput:
    """Pick the single input to act on when several are present.

    ``None`` and blank inputs are ignored. Among the rest, the first kind in
    ``order`` wins; within one kind the first candidate wins.
    """
    present = _present(candidates)
    if not present:
        raise ValueError("no command input provided")
    rank = {kind: i for i, kind in enumerate(order)}
    ranked = [c for c in present if c.kind in rank]
    if not ranked:
        raise ValueError(f"no input kind matches priority order {list(order)}")
    return min(ranked, key=lambda c: rank[c.kind])


def ensure_single_input(candidates: Iterable[Optional[AnyInput]]) -> AnyInput:
    """Strict variant: exactly one non-empty input or AmbiguousInputError."""
    present = _present(candidates)
    if not present:
        raise ValueError("no command input provided")
    if len(present) > 1:
        kinds = ", ".join(c.kind for c in present)
        raise AmbiguousInputError(f"expected one command input, got: {kinds}")
    return present[0]
