"""Store backend executor using aiohttp: implements ExecutorPort.

Runs the calls of an approved plan one after another, in plan order.
A transport failure is recorded on that call and the next call still runs.
HTTP error statuses are results, not failures.
"""

import asyncio
import json
from datetime import datetime
from typing import Any

import aiohttp

from automate.domain.errors import ExecutionTransportError
from automate.domain.models import ApiCallSpec, CallResult, ExecutionOutcome, Plan

JSON_HEADERS = {"Content-Type": "application/json"}


def _parse_body(raw: str) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class BackendExecutor:
    def __init__(self, timeout_seconds: float = 30.0):
        self.timeout_seconds = timeout_seconds

    async def _send(self, session, call: ApiCallSpec) -> CallResult:
        kwargs = {"headers": dict(JSON_HEADERS)}
        if call.payload is not None:
            kwargs["json"] = call.payload
        try:
            async with session.request(call.method, call.endpoint, **kwargs) as resp:
                raw = await resp.text(errors="replace")
                return CallResult(call=call, http_status=resp.status, response_body=_parse_body(raw))
        except asyncio.TimeoutError as e:
            raise ExecutionTransportError(f"Timeout ({self.timeout_seconds:g}s)") from e
        except (aiohttp.ClientError, OSError) as e:
            raise ExecutionTransportError(f"{type(e).__name__}: {e}") from e

    async def execute(self, plan: Plan) -> ExecutionOutcome:
        calls = plan.api_calls
        outcome = ExecutionOutcome(plan=plan)
        if not calls:
            return outcome

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            for call in calls:
                print(f"[{datetime.now().isoformat()}] {call.method} {call.endpoint}")
                try:
                    result = await self._send(session, call)
                except ExecutionTransportError as e:
                    print(f"[{datetime.now().isoformat()}] Backend call failed: {e}")
                    result = CallResult(call=call, error=str(e))
                else:
                    print(f"[{datetime.now().isoformat()}] -> {result.http_status}")
                outcome.results.append(result)
        return outcome
