"""Tests for the per-session command pipeline."""

import json

import pytest

from automate.domain.catalog import build_catalog
from automate.domain.commands import ActionSelection, ImageCommand, TextCommand, VoiceCommand
from automate.domain.errors import NoDomainSelectedError, NoPendingPlanError
from automate.domain.generator import ActionGenerator
from automate.domain.models import CallResult, ExecutionOutcome
from automate.session import CommandSession, SessionRegistry

BASE = "https://api.example"


class FakeLLM:
    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def generate(self, parts):
        self.calls.append(parts)
        return self.replies.pop(0)


class FakeExecutor:
    def __init__(self):
        self.executed = []

    async def execute(self, plan):
        self.executed.append(plan)
        results = [CallResult(call=c, http_status=200, response_body={"success": True}) for c in plan.api_calls]
        return ExecutionOutcome(plan=plan, results=results)


def _reply(endpoint=None, method="GET", response="On it."):
    api_call = {"endpoint": endpoint, "method": method, "payload": None} if endpoint else None
    return json.dumps({"intent": "i", "action": "a", "parameters": {}, "apiCall": api_call, "response": response})


def _session(*replies):
    llm = FakeLLM(*replies)
    executor = FakeExecutor()
    session = CommandSession(ActionGenerator(llm), executor, build_catalog(BASE))
    return session, llm, executor


class TestSelectDomain:
    def test_logs_exchange(self):
        session, _, _ = _session()
        session.select_domain("purchase-orders")
        msgs = session.log.messages()
        assert msgs[-2].role == "user"
        assert msgs[-2].content == "I want to work with purchase orders"
        assert msgs[-1].role == "assistant"
        assert "purchase orders" in msgs[-1].content

    def test_unknown_area(self):
        session, _, _ = _session()
        with pytest.raises(ValueError):
            session.select_domain("spaceships")

    def test_non_quick_action_area_rejected(self):
        session, _, _ = _session()
        with pytest.raises(ValueError):
            session.select_domain("dashboard")


class TestSubmit:
    @pytest.mark.asyncio
    async def test_requires_domain(self):
        session, llm, _ = _session(_reply())
        with pytest.raises(NoDomainSelectedError):
            await session.submit(TextCommand("list products"))
        assert llm.calls == []

    @pytest.mark.asyncio
    async def test_plan_is_held_not_executed(self):
        session, _, executor = _session(_reply(f"{BASE}/products/3", "DELETE", "Delete product 3?"))
        session.select_domain("products")
        plan = await session.submit(TextCommand("delete product 3"))
        assert session.gate.pending is plan
        assert executor.executed == []
        assert "DELETE" in session.log.messages()[-1].content

    @pytest.mark.asyncio
    async def test_catalog_slice_follows_domain(self):
        session, llm, _ = _session(_reply())
        session.select_domain("sales")
        await session.submit(TextCommand("today's orders"))
        directive = llm.calls[0][0]
        assert f"{BASE}/orders/{{id}}/payments" in directive
        assert f"{BASE}/products/search" not in directive

    @pytest.mark.asyncio
    async def test_voice_wins_over_text(self):
        session, llm, _ = _session(_reply())
        session.select_domain("products")
        await session.submit(TextCommand("typed"), VoiceCommand("spoken"))
        assert 'Voice command: "spoken"' in llm.calls[0][0]

    @pytest.mark.asyncio
    async def test_image_logged_without_bytes(self):
        reply = json.dumps({"analysis": "receipt", "apiCalls": [], "response": "A receipt."})
        session, _, _ = _session(reply)
        session.select_domain("finance")
        await session.submit(ImageCommand(b"\xff\xd8"))
        contents = [m.content for m in session.log.messages()]
        assert "Uploaded an image for finance" in contents

    @pytest.mark.asyncio
    async def test_bare_action_switches_domain(self):
        session, llm, _ = _session()
        result = await session.submit(ActionSelection("customers"))
        assert result is None
        assert session.domain_area == "customers"
        assert llm.calls == []

    @pytest.mark.asyncio
    async def test_second_proposal_replaces_first(self):
        session, _, executor = _session(
            _reply(f"{BASE}/products/1", "DELETE"),
            _reply(f"{BASE}/products", "GET"),
        )
        session.select_domain("products")
        await session.submit(TextCommand("delete 1"))
        second = await session.submit(TextCommand("never mind, list them"))
        outcome = await session.approve()
        assert outcome.plan is second
        assert [p.api_call.method for p in executor.executed] == ["GET"]


class TestApproveAndDiscard:
    @pytest.mark.asyncio
    async def test_approve_empty(self):
        session, _, _ = _session()
        with pytest.raises(NoPendingPlanError):
            await session.approve()

    @pytest.mark.asyncio
    async def test_approve_executes(self):
        session, _, executor = _session(_reply(f"{BASE}/products"))
        session.select_domain("products")
        await session.submit(TextCommand("list products"))
        outcome = await session.approve()
        assert len(executor.executed) == 1
        assert outcome.http_status == 200
        assert "Executed successfully." in session.log.messages()[-1].content

    @pytest.mark.asyncio
    async def test_approve_without_call_skips_executor(self):
        session, _, executor = _session("no json at all")
        session.select_domain("products")
        plan = await session.submit(TextCommand("gibberish"))
        assert plan.action == "parse_error"
        outcome = await session.approve()
        assert executor.executed == []
        assert outcome.executed is False
        assert outcome.error is None
        assert session.log.messages()[-1].content == plan.response_text

    @pytest.mark.asyncio
    async def test_executor_crash_still_reports(self):
        class BrokenExecutor:
            async def execute(self, plan):
                raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

        llm = FakeLLM(_reply(f"{BASE}/products"))
        session = CommandSession(ActionGenerator(llm), BrokenExecutor(), build_catalog(BASE))
        session.select_domain("products")
        await session.submit(TextCommand("list"))
        outcome = await session.approve()
        assert outcome.success is False
        assert "invalid start byte" in outcome.error
        assert outcome.results[0].call.endpoint == f"{BASE}/products"
        last = session.log.messages()[-1]
        assert last.role == "assistant"
        assert "Execution finished with errors." in last.content

    @pytest.mark.asyncio
    async def test_discard(self):
        session, _, executor = _session(_reply(f"{BASE}/products"))
        session.select_domain("products")
        await session.submit(TextCommand("list"))
        session.discard()
        with pytest.raises(NoPendingPlanError):
            await session.approve()
        assert executor.executed == []
        assert "Nothing was executed" in session.log.messages()[-1].content


class TestSessionRegistry:
    def test_create_get_drop(self):
        registry = SessionRegistry(ActionGenerator(FakeLLM()), FakeExecutor(), build_catalog(BASE))
        session = registry.create()
        assert registry.get(session.id) is session
        assert len(registry) == 1
        assert registry.drop(session.id) is True
        assert registry.drop(session.id) is False
        with pytest.raises(KeyError):
            registry.get(session.id)
