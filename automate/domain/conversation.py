"""Append-only conversation log shown next to the command panel."""

import itertools
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

ROLES = ("user", "assistant")

WELCOME_MESSAGE = (
    "Welcome to AutoMate AI! I can help you manage your business operations "
    "through voice commands and image processing. What would you like to do today?"
)


@dataclass(frozen=True)
class ConversationMessage:
    id: int
    role: str  # "user" | "assistant"
    content: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


class ConversationLog:
    """Ordered messages with monotonically increasing ids starting at 1."""

    def __init__(self, welcome: bool = True):
        self._messages: List[ConversationMessage] = []
        self._ids = itertools.count(1)
        if welcome:
            self.assistant(WELCOME_MESSAGE)

    def append(self, role: str, content: str) -> ConversationMessage:
        if role not in ROLES:
            raise ValueError(f"unknown role: {role!r}")
        msg = ConversationMessage(id=next(self._ids), role=role, content=content)
        self._messages.append(msg)
        return msg

    def user(self, content: str) -> ConversationMessage:
        return self.append("user", content)

    def assistant(self, content: str) -> ConversationMessage:
        return self.append("assistant", content)

    def messages(self) -> List[ConversationMessage]:
        return list(self._messages)

    def to_list(self) -> List[Dict[str, Any]]:
        return [m.to_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)
