"""Domain data models: pure Python dataclasses."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from automate.domain.errors import SchemaCoercionError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")


def normalize_method(method: Any) -> str:
    """Upper-case an HTTP verb, rejecting anything outside HTTP_METHODS."""
    if not isinstance(method, str) or method.strip().upper() not in HTTP_METHODS:
        raise SchemaCoercionError(f"unsupported HTTP method: {method!r}")
    return method.strip().upper()


@dataclass(frozen=True)
class ApiCallSpec:
    """One concrete backend call proposed by the model."""

    endpoint: str
    method: str
    payload: Any = None

    def __post_init__(self):
        if not isinstance(self.endpoint, str) or not self.endpoint.strip():
            raise SchemaCoercionError("api call without endpoint")
        object.__setattr__(self, "endpoint", self.endpoint.strip())
        object.__setattr__(self, "method", normalize_method(self.method))

    def to_dict(self) -> Dict[str, Any]:
        return {"endpoint": self.endpoint, "method": self.method, "payload": self.payload}


@dataclass
class ActionPlan:
    """Plan for a voice or text command."""

    intent: str
    action: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    api_call: Optional[ApiCallSpec] = None
    response_text: str = ""

    kind = "command"

    @property
    def api_calls(self) -> List[ApiCallSpec]:
        return [self.api_call] if self.api_call is not None else []

    @property
    def has_api_calls(self) -> bool:
        return self.api_call is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "intent": self.intent,
            "action": self.action,
            "parameters": dict(self.parameters),
            "apiCall": self.api_call.to_dict() if self.api_call else None,
            "responseText": self.response_text,
        }


@dataclass
class ImagePlan:
    """Plan for an image command; may carry several calls."""

    analysis: str
    extracted_data: Dict[str, Any] = field(default_factory=dict)
    suggested_actions: List[str] = field(default_factory=list)
    api_calls: List[ApiCallSpec] = field(default_factory=list)
    response_text: str = ""

    kind = "image"

    @property
    def has_api_calls(self) -> bool:
        return bool(self.api_calls)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "analysis": self.analysis,
            "extractedData": dict(self.extracted_data),
            "suggestedActions": list(self.suggested_actions),
            "apiCalls": [c.to_dict() for c in self.api_calls],
            "responseText": self.response_text,
        }


Plan = Union[ActionPlan, ImagePlan]


@dataclass
class CallResult:
    """What happened to a single ApiCallSpec."""

    call: ApiCallSpec
    http_status: Optional[int] = None
    response_body: Any = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        if self.error is not None:
            return False
        if self.http_status is not None and self.http_status >= 400:
            return False
        # The store API reports application-level failures in the body
        if isinstance(self.response_body, dict) and self.response_body.get("success") is False:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "call": self.call.to_dict(),
            "httpStatus": self.http_status,
            "responseBody": self.response_body,
            "error": self.error,
            "success": self.success,
        }


@dataclass
class ExecutionOutcome:
    """Result of executing an approved plan.

    ``http_status``/``response_body``/``error`` mirror the first failed call,
    or the last call when every call succeeded. A plan without calls yields
    an outcome where all three are ``None``.
    """

    plan: Plan
    results: List[CallResult] = field(default_factory=list)

    def _headline(self) -> Optional[CallResult]:
        if not self.results:
            return None
        for r in self.results:
            if not r.success:
                return r
        return self.results[-1]

    @property
    def http_status(self) -> Optional[int]:
        head = self._headline()
        return head.http_status if head else None

    @property
    def response_body(self) -> Any:
        head = self._headline()
        return head.response_body if head else None

    @property
    def error(self) -> Optional[str]:
        head = self._headline()
        return head.error if head else None

    @property
    def executed(self) -> bool:
        return bool(self.results)

    @property
    def success(self) -> bool:
        return all(r.success for r in self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan": self.plan.to_dict(),
            "executed": self.executed,
            "success": self.success,
            "httpStatus": self.http_status,
            "responseBody": self.response_body,
            "error": self.error,
            "results": [r.to_dict() for r in self.results],
        }
