"""Integration tests for the cross-origin allow-list and health check."""

import pytest

from tests.conftest import ALLOWED_ORIGIN

ROUTES = ["/api/log-forecast-usage", "/api/send-forecast-report", "/api/gemini-proxy"]


class TestOriginGuard:
    @pytest.mark.parametrize("route", ROUTES)
    async def test_disallowed_origin_rejected(
        self, client, fake_crm, fake_sheet, fake_email, gemini_upstream, route,
    ):
        resp = await client.post(
            route,
            json={"userEmail": "d@e.com", "prompt": "p"},
            headers={"Origin": "https://evil.example.com"},
        )
        assert resp.status_code == 403
        assert resp.json() == {"message": "Origin not allowed"}
        assert fake_crm.calls == []
        assert fake_sheet.rows == []
        assert fake_email.calls == []
        assert gemini_upstream.requests == []

    async def test_allowed_origin_gets_cors_headers(self, client, origin_headers):
        resp = await client.post(
            "/api/log-forecast-usage", json={"userEmail": "d@e.com"}, headers=origin_headers,
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    async def test_no_origin_allowed(self, client):
        resp = await client.post("/api/log-forecast-usage", json={"userEmail": "d@e.com"})
        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers

    async def test_preflight_allowed(self, client):
        resp = await client.options(
            "/api/gemini-proxy",
            headers={
                "Origin": ALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    async def test_preflight_disallowed(self, client):
        resp = await client.options(
            "/api/gemini-proxy",
            headers={
                "Origin": "https://evil.example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 403

    async def test_trailing_slash_origin(self, client):
        resp = await client.post(
            "/api/log-forecast-usage",
            json={"userEmail": "d@e.com"},
            headers={"Origin": ALLOWED_ORIGIN + "/"},
        )
        assert resp.status_code == 200


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": "0.1.0", "service": "forecast-relay"}


class TestWildcardOrigins:
    @pytest.fixture
    def settings(self):
        from tests.conftest import make_settings
        return make_settings(cors_origins=["*"])

    async def test_any_origin_allowed(self, client):
        resp = await client.post(
            "/api/log-forecast-usage",
            json={"userEmail": "d@e.com"},
            headers={"Origin": "https://anywhere.example.com"},
        )
        assert resp.status_code == 200
