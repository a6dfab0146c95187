"""Model output -> ActionPlan / ImagePlan coercion.

Pure Python, no framework dependencies.
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from automate.domain.errors import SchemaCoercionError
from automate.domain.models import ActionPlan, ApiCallSpec, ImagePlan

FENCED_JSON_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)

COMMAND_FALLBACK_TEXT = (
    "I had trouble understanding your request. Please try again with a clearer command."
)
IMAGE_FALLBACK_TEXT = (
    "I had trouble analyzing the image. Please try uploading a clearer image."
)


def extract_json_text(raw: str) -> Optional[str]:
    """Locate the JSON document in model output.

    A fenced ```json block wins; otherwise the span from the first ``{`` to
    the last ``}``. Returns None when neither exists.
    """
    if not raw:
        return None
    fenced = FENCED_JSON_RE.search(raw)
    if fenced:
        return fenced.group(1)
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end <= start:
        return None
    return raw[start:end + 1]


def _load_object(raw: str) -> Dict[str, Any]:
    text = extract_json_text(raw)
    if text is None:
        raise SchemaCoercionError("No JSON found in response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaCoercionError(f"Invalid JSON in response: {e}") from e
    if not isinstance(data, dict):
        raise SchemaCoercionError("Response JSON is not an object")
    return data


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _as_mapping(value: Any) -> Dict[str, Any]:
    # Models sometimes echo the schema hint ("extracted parameters") verbatim
    return dict(value) if isinstance(value, dict) else {}


def _response_text(data: Dict[str, Any]) -> str:
    return _as_text(data.get("responseText", data.get("response")))


def coerce_api_call(value: Any) -> Optional[ApiCallSpec]:
    """dict -> ApiCallSpec; null/absent/"null" -> None; anything malformed raises."""
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "null", "none")):
        return None
    if not isinstance(value, dict):
        raise SchemaCoercionError(f"apiCall must be an object, got {type(value).__name__}")
    return ApiCallSpec(
        endpoint=value.get("endpoint", ""),
        method=value.get("method", ""),
        payload=value.get("payload"),
    )


def coerce_action_plan(data: Dict[str, Any]) -> ActionPlan:
    if "intent" not in data and "action" not in data:
        raise SchemaCoercionError("plan has neither intent nor action")
    return ActionPlan(
        intent=_as_text(data.get("intent")) or "unknown",
        action=_as_text(data.get("action")),
        parameters=_as_mapping(data.get("parameters")),
        api_call=coerce_api_call(data.get("apiCall")),
        response_text=_response_text(data),
    )


def coerce_image_plan(data: Dict[str, Any]) -> ImagePlan:
    if "analysis" not in data:
        raise SchemaCoercionError("image plan has no analysis")
    raw_calls = data.get("apiCalls") or []
    if not isinstance(raw_calls, list):
        raise SchemaCoercionError("apiCalls must be a list")
    calls: List[ApiCallSpec] = []
    for raw in raw_calls:
        call = coerce_api_call(raw)
        if call is not None:
            calls.append(call)
    suggested = data.get("suggestedActions") or []
    if isinstance(suggested, str):
        suggested = [suggested]
    if not isinstance(suggested, list):
        raise SchemaCoercionError("suggestedActions must be a list")
    return ImagePlan(
        analysis=_as_text(data.get("analysis")),
        extracted_data=_as_mapping(data.get("extractedData")),
        suggested_actions=[_as_text(s) for s in suggested],
        api_calls=calls,
        response_text=_response_text(data),
    )


def parse_action_plan(raw: str) -> ActionPlan:
    return coerce_action_plan(_load_object(raw))


def parse_image_plan(raw: str) -> ImagePlan:
    return coerce_image_plan(_load_object(raw))


def fallback_action_plan() -> ActionPlan:
    """Terminal safety net for voice/text commands."""
    return ActionPlan(
        intent="unknown",
        action="parse_error",
        parameters={},
        api_call=None,
        response_text=COMMAND_FALLBACK_TEXT,
    )


def fallback_image_plan() -> ImagePlan:
    """Terminal safety net for image commands."""
    return ImagePlan(
        analysis="Image analysis failed",
        extracted_data={},
        suggested_actions=[],
        api_calls=[],
        response_text=IMAGE_FALLBACK_TEXT,
    )
