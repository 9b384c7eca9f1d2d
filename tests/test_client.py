"""
Alert Service Client Tests
==========================

Uses httpx.MockTransport; no network access.

Every failure mode must come back as a FetchResult, never an exception.
"""

import asyncio

import httpx
import pytest

from alertgraph.contracts.base import ErrorCode
from alertgraph.ingestion.client import AlertServiceClient, Endpoint, FetchStatus

from .fixtures import ALERT_RAW, SCENARIO_RAW

BASE_URL = "http://alerts.test"


def _service(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/alert/7":
        return httpx.Response(200, json=ALERT_RAW)
    if path == "/api/network/7":
        return httpx.Response(200, json=SCENARIO_RAW)
    if path == "/api/alert":
        return httpx.Response(200, json={"alerts": [ALERT_RAW]})
    if path == "/api/network/garbled":
        return httpx.Response(200, content=b"<html>oops</html>")
    if path.startswith("/api/network/boom"):
        return httpx.Response(500, text="internal error")
    return httpx.Response(404)


def _client(handler=_service) -> AlertServiceClient:
    transport = httpx.MockTransport(handler)
    return AlertServiceClient(BASE_URL + "/", transport=transport, async_transport=transport)


class TestSyncFetch:

    def test_fetch_alert(self):
        result = _client().fetch_alert_sync("7")

        assert result.success
        assert result.endpoint is Endpoint.ALERT
        assert result.url == f"{BASE_URL}/alert/7"
        assert result.payload["severity"] == "High"
        assert result.to_error() is None

    def test_fetch_network(self):
        result = _client().fetch_network_sync("7")

        assert result.success
        assert result.payload == SCENARIO_RAW
        assert result.duration_ms >= 0

    def test_fetch_alert_list(self):
        result = _client().fetch_alert_list_sync()

        assert result.success
        assert result.alert_id is None
        assert len(result.payload["alerts"]) == 1

    def test_http_error(self):
        result = _client().fetch_network_sync("boom")

        assert result.status is FetchStatus.HTTP_ERROR
        assert result.http_status == 500
        assert result.to_error().code is ErrorCode.SERVICE_HTTP_ERROR

    def test_not_found(self):
        result = _client().fetch_alert_sync("404")

        assert result.status is FetchStatus.HTTP_ERROR
        assert result.http_status == 404

    def test_not_json(self):
        result = _client().fetch_network_sync("garbled")

        assert result.status is FetchStatus.PARSE_ERROR
        assert result.to_error().code is ErrorCode.RESPONSE_NOT_JSON

    def test_timeout(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = _client(slow).fetch_alert_sync("7")

        assert result.status is FetchStatus.TIMEOUT
        assert result.to_error().code is ErrorCode.SERVICE_TIMEOUT

    def test_connection_refused(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _client(refuse).fetch_network_sync("7")

        assert result.status is FetchStatus.NETWORK_ERROR
        assert "refused" in result.error_message
        assert result.to_error().code is ErrorCode.SERVICE_UNREACHABLE

    def test_alert_id_is_escaped(self):
        seen = []

        def record(request):
            seen.append(request.url.raw_path)
            return httpx.Response(404)

        _client(record).fetch_alert_sync("a/b")
        assert seen == [b"/alert/a%2Fb"]


class TestAsyncFetch:

    def test_fetch_alert(self):
        result = asyncio.run(_client().fetch_alert("7"))

        assert result.success
        assert result.payload["id"] == 7

    def test_fetch_network_failure(self):
        result = asyncio.run(_client().fetch_network("boom"))

        assert not result.success
        assert result.http_status == 500

    def test_timeout(self):
        def slow(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        result = asyncio.run(_client(slow).fetch_network("7"))
        assert result.status is FetchStatus.TIMEOUT

    @pytest.mark.parametrize("alert_id", ["7", "boom", "missing"])
    def test_never_raises(self, alert_id):
        result = asyncio.run(_client().fetch_network(alert_id))
        assert result.status in set(FetchStatus)
