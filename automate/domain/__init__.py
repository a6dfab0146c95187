"""Domain layer: pure Python, no framework dependencies."""

from automate.domain.catalog import (
    DOMAIN_AREAS,
    QUICK_ACTIONS,
    EndpointDescriptor,
    build_catalog,
    catalog_slice,
)
from automate.domain.commands import (
    ActionSelection,
    ImageCommand,
    TextCommand,
    VoiceCommand,
    ensure_single_input,
    resolve_input_priority,
)
from automate.domain.consent import ConsentGate
from automate.domain.conversation import ConversationLog, ConversationMessage
from automate.domain.errors import (
    AmbiguousInputError,
    AutoMateError,
    ExecutionTransportError,
    GenerationError,
    NoDomainSelectedError,
    NoPendingPlanError,
    SchemaCoercionError,
)
from automate.domain.generator import ActionGenerator
from automate.domain.models import (
    ActionPlan,
    ApiCallSpec,
    CallResult,
    ExecutionOutcome,
    ImagePlan,
)

__all__ = [
    "DOMAIN_AREAS",
    "QUICK_ACTIONS",
    "EndpointDescriptor",
    "build_catalog",
    "catalog_slice",
    "ActionSelection",
    "ImageCommand",
    "TextCommand",
    "VoiceCommand",
    "ensure_single_input",
    "resolve_input_priority",
    "ConsentGate",
    "ConversationLog",
    "ConversationMessage",
    "AmbiguousInputError",
    "AutoMateError",
    "ExecutionTransportError",
    "GenerationError",
    "NoDomainSelectedError",
    "NoPendingPlanError",
    "SchemaCoercionError",
    "ActionGenerator",
    "ActionPlan",
    "ApiCallSpec",
    "CallResult",
    "ExecutionOutcome",
    "ImagePlan",
]
