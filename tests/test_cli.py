"""Tests for the Typer CLI."""

import json
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from forecast_relay.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.setenv("MARKETING_TEAM_EMAIL", "team@conag.example.com")
    monkeypatch.setenv("PORT", "4100")
    from forecast_relay.common.config import get_settings
    from forecast_relay.deps import reset_singletons

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_singletons()


class TestRenderReport:
    def test_prints_html(self, tmp_path):
        report = tmp_path / "report.json"
        report.write_text(json.dumps({
            "userName": "Dana",
            "userEmail": "dana@e.com",
            "avgSaleValue": 1234.6,
            "serviceInputs": {"websiteMaintenanceSelected": True},
        }))

        result = runner.invoke(app, ["render-report", str(report)])

        assert result.exit_code == 0
        assert "Average Sale Value: $1,235" in result.output
        assert "Website Maintenance: Yes" in result.output
        assert "team@conag.example.com" in result.output

    def test_invalid_json(self, tmp_path):
        report = tmp_path / "report.json"
        report.write_text("{not json")
        result = runner.invoke(app, ["render-report", str(report)])
        assert result.exit_code == 1
        assert "Invalid report" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["render-report", str(tmp_path / "nope.json")])
        assert result.exit_code != 0


class TestServe:
    def test_uses_configured_port(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve"])
        assert result.exit_code == 0
        _, kwargs = mock_run.call_args
        assert kwargs["port"] == 4100
        assert kwargs["host"] == "0.0.0.0"

    def test_port_option_overrides(self):
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(app, ["serve", "--port", "9000", "--host", "127.0.0.1"])
        assert result.exit_code == 0
        _, kwargs = mock_run.call_args
        assert kwargs["port"] == 9000
        assert kwargs["host"] == "127.0.0.1"


class TestHealth:
    def test_reports_status(self):
        resp = MagicMock()
        resp.json.return_value = {"status": "ok", "version": "0.1.0"}
        with patch("httpx.get", return_value=resp) as mock_get:
            result = runner.invoke(app, ["health", "--url", "http://relay:3001"])
        assert result.exit_code == 0
        assert "ok" in result.output
        mock_get.assert_called_once_with("http://relay:3001/health", timeout=5)

    def test_unreachable(self):
        with patch("httpx.get", side_effect=ConnectionError("refused")):
            result = runner.invoke(app, ["health"])
        assert result.exit_code == 1
        assert "Error" in result.output
