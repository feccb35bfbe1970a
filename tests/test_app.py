from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from salonbook.api.middleware.rate_limit_middleware import RateLimitMiddleware
from salonbook.core.middleware import client_ip
from salonbook.config.settings import Settings


def limited_app(limit):
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, requests_per_minute=limit)

    @app.post("/api/v1/public/profiles/x/bookings")
    async def submit():
        return {"ok": True}

    @app.get("/api/v1/public/profiles/x/slots")
    async def slots():
        return {"ok": True}

    return app


class TestRateLimit:

    def test_posts_over_limit_are_rejected(self):
        client = TestClient(limited_app(2))
        assert client.post("/api/v1/public/profiles/x/bookings").status_code == 200
        assert client.post("/api/v1/public/profiles/x/bookings").status_code == 200

        response = client.post("/api/v1/public/profiles/x/bookings")
        assert response.status_code == 429
        assert response.json()["reason"] == "rate_limited"
        assert "Retry-After" in response.headers

    def test_browsing_slots_is_not_limited(self):
        client = TestClient(limited_app(1))
        for _ in range(5):
            assert client.get("/api/v1/public/profiles/x/slots").status_code == 200


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_detailed_health_checks_database(self, client):
        body = client.get("/health/detailed").json()
        assert body["database"] == "healthy"
        assert body["overall"] == "healthy"

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
        assert response.headers["X-Correlation-ID"] == "abc-123"


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SLOT_GRANULARITY_MINUTES", raising=False)
        settings = Settings(_env_file=None)
        assert settings.SLOT_GRANULARITY_MINUTES == 30
        assert settings.BOOKING_WINDOW_DAYS == 60
        assert settings.DEFAULT_TIMEZONE == "Europe/Bratislava"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SLOT_GRANULARITY_MINUTES", "15")
        monkeypatch.setenv("NOTIFICATIONS_ENABLED", "true")
        settings = Settings(_env_file=None)
        assert settings.SLOT_GRANULARITY_MINUTES == 15
        assert settings.NOTIFICATIONS_ENABLED is True


class TestClientIp:

    def _request(self, headers):
        return Request({
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
            "client": ("10.0.0.5", 50000),
        })

    def test_socket_peer(self):
        assert client_ip(self._request({})) == "10.0.0.5"

    def test_first_forwarded_hop(self):
        request = self._request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})
        assert client_ip(request) == "203.0.113.7"
