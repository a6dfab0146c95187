"""AutoMate: command-to-action assistant for the store backend."""

from automate.config import CONFIG, AppConfig
from automate.domain import (
    ActionGenerator,
    ActionPlan,
    ApiCallSpec,
    ConsentGate,
    ConversationLog,
    ExecutionOutcome,
    ImagePlan,
    build_catalog,
)
from automate.adapters.http.backend_executor import BackendExecutor
from automate.adapters.llm.gemini_adapter import GeminiAdapter
from automate.session import CommandSession, SessionRegistry

__all__ = [
    "CONFIG",
    "AppConfig",
    "ActionGenerator",
    "ActionPlan",
    "ApiCallSpec",
    "ConsentGate",
    "ConversationLog",
    "ExecutionOutcome",
    "ImagePlan",
    "build_catalog",
    "BackendExecutor",
    "GeminiAdapter",
    "CommandSession",
    "SessionRegistry",
]
