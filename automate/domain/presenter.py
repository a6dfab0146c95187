"""User-facing text for plans and execution outcomes."""

import json
from typing import Any

from automate.domain.models import CallResult, ExecutionOutcome, ImagePlan, Plan

MAX_BODY_CHARS = 500


def _short_body(body: Any) -> str:
    if body is None:
        return ""
    text = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False)
    if len(text) <= MAX_BODY_CHARS:
        return text
    return text[: MAX_BODY_CHARS - 3] + "..."


def describe_plan(plan: Plan) -> str:
    """Response text plus the calls waiting for approval."""
    lines = [plan.response_text] if plan.response_text else []
    if isinstance(plan, ImagePlan) and plan.suggested_actions:
        lines.append("Suggested actions:")
        lines.extend(f"- {s}" for s in plan.suggested_actions)
    if plan.has_api_calls:
        lines.append("Proposed API calls (approve to run):")
        lines.extend(f"- {c.method} {c.endpoint}" for c in plan.api_calls)
    return "\n".join(lines)


def describe_call(result: CallResult) -> str:
    head = f"{result.call.method} {result.call.endpoint}"
    if result.error is not None:
        return f"{head}: failed to reach the server ({result.error})"
    mark = "ok" if result.success else "error"
    body = _short_body(result.response_body)
    line = f"{head}: {result.http_status} {mark}"
    return f"{line}\n{body}" if body else line


def describe_outcome(outcome: ExecutionOutcome) -> str:
    """Summary appended to the conversation after approval."""
    if not outcome.executed:
        return outcome.plan.response_text or "Done. No API call was needed."
    header = "Executed successfully." if outcome.success else "Execution finished with errors."
    return "\n".join([header] + [describe_call(r) for r in outcome.results])
