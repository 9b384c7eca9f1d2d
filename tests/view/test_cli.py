"""
CLI Tests
"""

import json
import logging

import httpx
import pytest

from alertgraph.ingestion.client import AlertServiceClient
from alertview import LOGGER_NAMES, cli

from ..fixtures import ALERT_LIST_RAW, MIXED_RAW, SCENARIO_RAW


@pytest.fixture(autouse=True)
def restore_logging():
    """main() installs handlers on the package loggers; drop them afterwards."""
    loggers = [logging.getLogger(name) for name in LOGGER_NAMES]
    saved = [(list(lg.handlers), lg.level) for lg in loggers]
    yield
    for lg, (handlers, level) in zip(loggers, saved):
        for handler in lg.handlers[:]:
            if handler not in handlers:
                lg.removeHandler(handler)
        lg.setLevel(level)


@pytest.fixture
def network_file(tmp_path):
    path = tmp_path / "network.json"
    path.write_text(json.dumps(MIXED_RAW), encoding="utf-8")
    return path


class TestLayoutCommand:

    def test_prints_projected_graph(self, network_file, capsys):
        assert cli.main(["layout", str(network_file), "--alert-id", "9"]) == 0

        body = json.loads(capsys.readouterr().out)
        assert body["alert_id"] == "9"
        assert {n["id"] for n in body["nodes"]} == {"winword", "ps", "sock"}

    def test_show_transparent(self, network_file, capsys):
        cli.main(["layout", str(network_file), "--show-transparent"])

        body = json.loads(capsys.readouterr().out)
        assert len(body["nodes"]) == 5

    def test_legacy_offset(self, tmp_path, capsys):
        path = tmp_path / "scenario.json"
        path.write_text(json.dumps(SCENARIO_RAW), encoding="utf-8")

        cli.main(["layout", str(path), "--legacy-offset"])

        body = json.loads(capsys.readouterr().out)
        p1 = next(n for n in body["nodes"] if n["id"] == "p1")
        assert p1["y"] == -50.0

    def test_unreadable_file(self, tmp_path, capsys):
        assert cli.main(["layout", str(tmp_path / "missing.json")]) == 1
        assert "Cannot read" in capsys.readouterr().err


class TestFetchCommand:

    @pytest.fixture
    def mock_service(self, monkeypatch):
        def handler(request):
            if request.url.path == "/api/network/7":
                return httpx.Response(200, json=SCENARIO_RAW)
            return httpx.Response(503)

        def make_client(base_url, timeout):
            return AlertServiceClient(base_url, timeout=timeout, transport=httpx.MockTransport(handler))

        monkeypatch.setattr(cli, "AlertServiceClient", make_client)

    def test_fetch(self, mock_service, capsys):
        assert cli.main(["fetch", "7", "--service-url", "http://alerts.test"]) == 0

        body = json.loads(capsys.readouterr().out)
        assert [n["id"] for n in body["nodes"]] == ["p1", "f1"]

    def test_fetch_failure(self, mock_service, capsys):
        assert cli.main(["fetch", "8", "--service-url", "http://alerts.test"]) == 2
        assert "http_error" in capsys.readouterr().err


class TestAlertsCommand:

    @pytest.fixture
    def mock_service(self, monkeypatch):
        def make_client(base_url, timeout):
            transport = httpx.MockTransport(
                lambda request: httpx.Response(200, json=ALERT_LIST_RAW)
                if request.url.path == "/api/alert" else httpx.Response(404)
            )
            return AlertServiceClient(base_url, timeout=timeout, transport=transport)

        monkeypatch.setattr(cli, "AlertServiceClient", make_client)

    def test_lists_most_severe_first(self, mock_service, capsys):
        assert cli.main(["alerts", "--service-url", "http://alerts.test"]) == 0

        body = json.loads(capsys.readouterr().out)
        assert [(a["id"], a["severity"]) for a in body["alerts"]] == [
            ("2", "Critical"), ("4", "High"), ("7", "High"), ("1", "Low"),
        ]
        assert body["quarantined"][0]["index"] == 2

    def test_unreachable_service(self, monkeypatch, capsys):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        monkeypatch.setattr(cli, "AlertServiceClient", lambda base_url, timeout: AlertServiceClient(
            base_url, timeout=timeout, transport=httpx.MockTransport(refuse),
        ))

        assert cli.main(["alerts", "--service-url", "http://alerts.test"]) == 2
        assert "network_error" in capsys.readouterr().err
