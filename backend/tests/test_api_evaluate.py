"""Evaluation endpoint tests

FastAPI TestClient with DB / storage / limiter overrides (see conftest).
"""

from app.api.dependencies import get_rate_limiter
from app.config import settings
from app.main import app
from app.services.rate_limit import RateLimiter
from app.services.rules import RULES, RULESET_VERSION


class _Clock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "rulesetVersion": RULESET_VERSION}


class TestRuleset:
    def test_lists_catalog_in_order(self, client):
        resp = client.get("/api/ruleset")
        assert resp.status_code == 200
        data = resp.json()
        assert data["version"] == RULESET_VERSION
        assert [r["id"] for r in data["rules"]] == [r.id for r in RULES]
        assert data["rules"][0]["evidenceNeeded"] == ["usefulArea", "useCase"]


class TestEvaluate:
    def test_compliant_core_property(self, client, payload):
        resp = client.post("/api/evaluate", json=payload())
        assert resp.status_code == 200
        data = resp.json()
        assert data["rulesetVersion"] == RULESET_VERSION
        assert len(data["rules"]) == len(RULES)
        assert 0 <= data["confidence"] <= 100
        # detailed facility flags not given
        assert data["overallStatus"] == "fail"
        assert "hasRunningWater" in data["missingEvidence"]

    def test_fail_scenario(self, client, payload):
        body = payload(
            usefulArea=20,
            hasKitchen=False,
            hasBathroom=False,
            hasNaturalLight=False,
            hasVentilation=False,
            hasHeating=False,
        )
        for field in ("ceilingHeight", "numRooms", "intendedOccupancy", "numFloors"):
            body.pop(field)

        data = client.post("/api/evaluate", json=body).json()
        assert data["overallStatus"] == "fail"
        for field in ("ceilingHeight", "intendedOccupancy", "numRooms"):
            assert field in data["missingEvidence"]
        rules = {r["ruleId"]: r for r in data["rules"]}
        assert rules["min-useful-area"]["severity"] == "fail"
        assert rules["natural-light"]["severity"] == "risk"
        assert len(data["fixPlan"]) == sum(r["severity"] in ("fail", "risk") for r in data["rules"])

    def test_invalid_body_422(self, client, payload):
        resp = client.post("/api/evaluate", json=payload(usefulArea=-5))
        assert resp.status_code == 422

    def test_unknown_use_case_422(self, client, payload):
        resp = client.post("/api/evaluate", json=payload(useCase="turistic"))
        assert resp.status_code == 422


class TestRateLimit:
    def test_headers(self, client, payload):
        resp = client.post("/api/evaluate", json=payload())
        assert resp.headers["X-RateLimit-Limit"] == str(settings.RATE_LIMIT_MAX_REQUESTS)
        assert resp.headers["X-RateLimit-Remaining"] == str(settings.RATE_LIMIT_MAX_REQUESTS - 1)
        assert "X-RateLimit-Reset" in resp.headers

    def test_429_after_limit(self, client, payload, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT_MAX_REQUESTS", 2)
        assert client.post("/api/evaluate", json=payload()).status_code == 200
        assert client.post("/api/evaluate", json=payload()).status_code == 200

        resp = client.post("/api/evaluate", json=payload())
        assert resp.status_code == 429
        assert resp.headers["X-RateLimit-Remaining"] == "0"

    def test_limits_are_per_client_ip(self, client, payload, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT_MAX_REQUESTS", 1)
        assert client.post("/api/evaluate", json=payload()).status_code == 200
        assert client.post("/api/evaluate", json=payload()).status_code == 429

        other = client.post(
            "/api/evaluate", json=payload(), headers={"X-Forwarded-For": "203.0.113.9"}
        )
        assert other.status_code == 200

    def test_idle_client_windows_are_swept(self, client):
        clock = _Clock()
        limiter = RateLimiter(clock=clock, purge_interval=settings.RATE_LIMIT_PURGE_SECONDS)
        app.dependency_overrides[get_rate_limiter] = lambda: limiter

        for i in range(300):
            ip = f"10.{i // 256}.{i % 256}.1"
            assert client.get("/api/cases", headers={"X-Forwarded-For": ip}).status_code == 200
        assert len(limiter) == 300

        clock.now += settings.RATE_LIMIT_WINDOW_SECONDS + 1
        client.get("/api/cases", headers={"X-Forwarded-For": "203.0.113.9"})
        assert len(limiter) == 1
