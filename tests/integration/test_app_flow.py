"""
End-to-end flow through the assembled application.

Flow: startup (rules, store, salt, retention) -> tracker beacons ->
dashboard stats -> restart with the same database.
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.adapters.sqlite_db import SQLiteEventStore
from src.api.deps import Settings
from src.api.main import create_app

PROJECT_ROOT = Path(__file__).parent.parent.parent

CHROME_ANDROID = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
AUTH = ("owner", "integration-pw")


@pytest.fixture
def settings(tmp_path):
    return Settings(
        db_path=str(tmp_path / "data" / "nanolytica.db"),
        rules_path=PROJECT_ROOT / "rules.yaml",
        username=AUTH[0],
        password=AUTH[1],
    )


def test_startup_creates_salt_and_reports_health(settings):
    with TestClient(create_app(settings)) as client:
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert [c["name"] for c in body["checks"]] == ["database"]

    store = SQLiteEventStore(settings.db_path)
    assert store.get_salt() is not None
    store.close()


def test_tracker_to_dashboard(settings):
    with TestClient(create_app(settings)) as client:
        headers = {"X-Forwarded-For": "198.51.100.23"}
        load = {
            "path": "/pricing",
            "referrer": "https://duckduckgo.com/",
            "screen_size": "412x915",
            "user_agent": CHROME_ANDROID,
            "duration_sec": 0,
        }
        leave = dict(load, duration_sec=75)

        assert client.post("/api/analytics/collect", json=load, headers=headers).status_code == 200
        assert client.post("/api/analytics/collect", json=leave, headers=headers).status_code == 200
        assert (
            client.post(
                "/api/analytics/collect",
                json={"path": "/pricing", "user_agent": "AhrefsBot/7.0"},
            ).status_code
            == 200
        )

        stats = client.get("/api/analytics/stats", params={"period": "week"}, auth=AUTH).json()
        assert stats["unique_visitors"] == 1
        assert stats["page_views"] == 1
        assert stats["avg_duration_sec"] == 75.0
        assert stats["top_referrers"] == [{"label": "DuckDuckGo", "count": 1}]
        assert stats["browsers"] == [{"label": "Chrome", "count": 1}]
        assert stats["operating_systems"] == [{"label": "Android", "count": 1}]
        assert stats["devices"] == [{"label": "Mobile", "count": 1}]

        bots = client.get("/api/analytics/bot-stats", auth=AUTH).json()
        assert bots["total_hits"] == 1
        assert bots["top_bots"] == [{"label": "Ahrefs", "count": 1}]


def test_visitor_id_stable_across_restart(settings):
    beacon = {"path": "/", "user_agent": CHROME_ANDROID}
    headers = {"X-Forwarded-For": "198.51.100.77"}

    with TestClient(create_app(settings)) as client:
        client.post("/api/analytics/collect", json=beacon, headers=headers)
    with TestClient(create_app(settings)) as client:
        client.post("/api/analytics/collect", json=beacon, headers=headers)
        stats = client.get("/api/analytics/stats", auth=AUTH).json()

    assert stats["page_views"] == 2
    assert stats["unique_visitors"] == 1


def test_generated_dashboard_password(tmp_path, caplog, monkeypatch):
    monkeypatch.delenv("NANOLYTICA_USERNAME", raising=False)
    monkeypatch.delenv("NANOLYTICA_PASSWORD", raising=False)
    settings = Settings(
        db_path=str(tmp_path / "nanolytica.db"),
        rules_path=PROJECT_ROOT / "rules.yaml",
    )

    with caplog.at_level("WARNING"), TestClient(create_app(settings)) as client:
        authenticator = client.app.state.authenticator
        creds = authenticator.credentials
        response = client.get("/api/analytics/stats", auth=(creds.username, creds.password))
        assert response.status_code == 200

    assert creds.username == "admin"
    assert creds.password in caplog.text


def test_cors_allows_any_origin(settings):
    with TestClient(create_app(settings)) as client:
        response = client.options(
            "/api/analytics/collect",
            headers={
                "Origin": "https://customer-site.example",
                "Access-Control-Request-Method": "POST",
            },
        )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_oversized_body_rejected(settings):
    with TestClient(create_app(settings)) as client:
        response = client.post("/api/analytics/collect", json={"path": "/" + "a" * 20_000})
        stats = client.get("/api/analytics/stats", auth=AUTH).json()

    assert response.status_code == 413
    assert stats["page_views"] == 0


def _chunks(data: bytes, size: int = 1024):
    for i in range(0, len(data), size):
        yield data[i : i + size]


def test_oversized_chunked_body_rejected(settings):
    body = json.dumps({"path": "/" + "a" * 20_000}).encode()
    with TestClient(create_app(settings)) as client:
        response = client.post(
            "/api/analytics/collect",
            content=_chunks(body),
            headers={"Content-Type": "application/json"},
        )
        stats = client.get("/api/analytics/stats", auth=AUTH).json()

    assert response.status_code == 413
    assert stats["page_views"] == 0


def test_small_chunked_body_accepted(settings):
    body = json.dumps({"path": "/chunked", "user_agent": CHROME_ANDROID}).encode()
    with TestClient(create_app(settings)) as client:
        response = client.post(
            "/api/analytics/collect",
            content=_chunks(body, size=16),
            headers={"Content-Type": "application/json"},
        )
        stats = client.get("/api/analytics/stats", auth=AUTH).json()

    assert response.status_code == 200
    assert stats["top_pages"] == [{"label": "/chunked", "count": 1}]


@pytest.mark.parametrize("path", ["/health", "/api/analytics/stats"])
def test_security_headers(settings, path):
    with TestClient(create_app(settings)) as client:
        response = client.get(path)

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["x-xss-protection"] == "1; mode=block"
    assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"
    assert "frame-ancestors 'none'" in response.headers["content-security-policy"]
