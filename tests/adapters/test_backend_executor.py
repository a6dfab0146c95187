"""Unit tests for BackendExecutor with a recording fake aiohttp session."""

import asyncio

import aiohttp
import pytest
from unittest.mock import patch

from automate.adapters.http.backend_executor import BackendExecutor
from automate.domain.models import ActionPlan, ApiCallSpec, ImagePlan
from automate.domain.plan_parser import fallback_action_plan
from automate.ports.outbound import ExecutorPort

SESSION_PATH = "automate.adapters.http.backend_executor.aiohttp.ClientSession"


def _recording_session(responses, log):
    """Fake aiohttp.ClientSession.

    responses: url -> (status, body) or an exception to raise; body is str or bytes.
    log: list receiving (method, url, kwargs) in call order.
    """

    class FakeResponse:
        def __init__(self, status, body):
            self.status = status
            self._body = body.encode("utf-8") if isinstance(body, str) else body

        async def text(self, encoding=None, errors="strict"):
            return self._body.decode(encoding or "utf-8", errors)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def __init__(self, *args, **kwargs):
            self.kwargs = kwargs

        def request(self, method, url, **kwargs):
            log.append((method, url, kwargs))
            outcome = responses[url]
            if isinstance(outcome, BaseException):
                raise outcome
            status, body = outcome
            return FakeResponse(status, body)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


def _image_plan(*calls):
    return ImagePlan(analysis="invoice", api_calls=list(calls), response_text="ok")


def test_implements_port():
    assert isinstance(BackendExecutor(), ExecutorPort)


class TestNoCalls:
    @pytest.mark.asyncio
    async def test_null_api_call_sends_nothing(self):
        log = []
        with patch(SESSION_PATH, _recording_session({}, log)):
            outcome = await BackendExecutor().execute(fallback_action_plan())
        assert log == []
        assert outcome.http_status is None
        assert outcome.error is None
        assert outcome.response_body is None
        assert outcome.executed is False

    @pytest.mark.asyncio
    async def test_empty_image_calls_send_nothing(self):
        log = []
        with patch(SESSION_PATH, _recording_session({}, log)):
            outcome = await BackendExecutor().execute(_image_plan())
        assert log == []
        assert outcome.results == []


class TestSingleCall:
    @pytest.mark.asyncio
    async def test_get_products(self):
        log = []
        url = "https://api.example/products"
        plan = ActionPlan(intent="list", action="list", api_call=ApiCallSpec(url, "GET"))
        responses = {url: (200, '[{"id": 1, "stock": 4}]')}
        with patch(SESSION_PATH, _recording_session(responses, log)):
            outcome = await BackendExecutor().execute(plan)
        assert len(log) == 1
        method, called_url, kwargs = log[0]
        assert (method, called_url) == ("GET", url)
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert "json" not in kwargs
        assert outcome.http_status == 200
        assert outcome.response_body == [{"id": 1, "stock": 4}]
        assert outcome.success is True

    @pytest.mark.asyncio
    async def test_payload_sent_as_json(self):
        log = []
        url = "https://api.example/products"
        call = ApiCallSpec(url, "POST", {"name": "Tea"})
        plan = ActionPlan(intent="create", action="create", api_call=call)
        with patch(SESSION_PATH, _recording_session({url: (201, '{"success": true}')}, log)):
            outcome = await BackendExecutor().execute(plan)
        assert log[0][2]["json"] == {"name": "Tea"}
        assert outcome.success is True

    @pytest.mark.asyncio
    async def test_http_error_is_not_a_failure(self):
        log = []
        url = "https://api.example/products/9"
        plan = ActionPlan(intent="del", action="del", api_call=ApiCallSpec(url, "DELETE"))
        body = '{"success": false, "message": "Product not found"}'
        with patch(SESSION_PATH, _recording_session({url: (404, body)}, log)):
            outcome = await BackendExecutor().execute(plan)
        assert outcome.http_status == 404
        assert outcome.error is None
        assert outcome.response_body["message"] == "Product not found"
        assert outcome.success is False

    @pytest.mark.asyncio
    async def test_non_json_body_kept_raw(self):
        log = []
        url = "https://api.example/settings/backup"
        plan = ActionPlan(intent="b", action="b", api_call=ApiCallSpec(url, "POST"))
        with patch(SESSION_PATH, _recording_session({url: (500, "Internal Server Error")}, log)):
            outcome = await BackendExecutor().execute(plan)
        assert outcome.response_body == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_binary_body_does_not_raise(self):
        log = []
        url = "https://api.example/analytics/export"
        plan = ActionPlan(intent="e", action="e", api_call=ApiCallSpec(url, "GET"))
        with patch(SESSION_PATH, _recording_session({url: (200, b"\xff\xfe\x00binary")}, log)):
            outcome = await BackendExecutor().execute(plan)
        assert outcome.http_status == 200
        assert outcome.error is None
        assert isinstance(outcome.response_body, str)
        assert outcome.response_body.endswith("binary")

    @pytest.mark.asyncio
    async def test_connection_refused_contained(self):
        log = []
        url = "https://api.example/products"
        plan = ActionPlan(intent="l", action="l", api_call=ApiCallSpec(url, "GET"))
        responses = {url: aiohttp.ClientConnectionError("Connection refused")}
        with patch(SESSION_PATH, _recording_session(responses, log)):
            outcome = await BackendExecutor().execute(plan)
        assert "Connection refused" in outcome.error
        assert outcome.http_status is None
        assert outcome.response_body is None
        assert outcome.success is False


class TestMultiCall:
    @pytest.mark.asyncio
    async def test_calls_run_in_plan_order(self):
        log = []
        x = ApiCallSpec("https://api.example/suppliers", "POST", {"name": "ACME"})
        y = ApiCallSpec("https://api.example/purchase-orders", "POST", {"supplier": "ACME"})
        responses = {x.endpoint: (201, "{}"), y.endpoint: (201, "{}")}
        with patch(SESSION_PATH, _recording_session(responses, log)):
            outcome = await BackendExecutor().execute(_image_plan(x, y))
        assert [entry[1] for entry in log] == [x.endpoint, y.endpoint]
        assert [r.call for r in outcome.results] == [x, y]

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_later_calls(self):
        log = []
        x = ApiCallSpec("https://api.example/suppliers", "POST")
        y = ApiCallSpec("https://api.example/purchase-orders", "POST")
        responses = {x.endpoint: asyncio.TimeoutError(), y.endpoint: (201, '{"id": 3}')}
        with patch(SESSION_PATH, _recording_session(responses, log)):
            outcome = await BackendExecutor(timeout_seconds=2).execute(_image_plan(x, y))
        assert len(log) == 2
        first, second = outcome.results
        assert first.error == "Timeout (2s)"
        assert second.http_status == 201
        assert second.response_body == {"id": 3}
        # headline fields point at the failed call
        assert outcome.error == "Timeout (2s)"
        assert outcome.success is False
