"""
API endpoint tests for the SOC service
"""

import json

import pytest
from fastapi.testclient import TestClient

from solar_soc.config import Settings
from solar_soc.main import create_app


@pytest.fixture
def client():
    """Test client with a reproducible dataset and no background ticking"""
    app = create_app(Settings(auto_refresh=False, random_seed=42))
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["ok"] is True
    assert data["counts"] == {
        "threats": 500,
        "devices": 17,
        "firewall": 1000,
        "darkweb": 50,
        "incidents": 25,
    }


def test_dashboard_summary(client):
    data = client.get("/api/dashboard").json()
    assert data["threats"]["total"] == 500
    assert data["devices"]["total"] == 17
    assert sum(data["devices"]["by_status"].values()) == 17
    assert data["lastUpdate"].endswith("Z")


def test_threat_listing_is_newest_first(client):
    threats = client.get("/api/threats").json()
    assert len(threats) == 500
    stamps = [t["timestamp"] for t in threats]
    assert stamps == sorted(stamps, reverse=True)


def test_listing_limit(client):
    assert len(client.get("/api/threats", params={"limit": 5}).json()) == 5
    assert len(client.get("/api/firewall", params={"limit": 7}).json()) == 7
    assert client.get("/api/threats", params={"limit": 0}).status_code == 422


@pytest.mark.parametrize("path,size", [
    ("/api/devices", 17),
    ("/api/firewall", 1000),
    ("/api/darkweb", 50),
    ("/api/incidents", 25),
])
def test_collection_endpoints(client, path, size):
    response = client.get(path)
    assert response.status_code == 200
    assert len(response.json()) == size


@pytest.mark.parametrize("section", ["threats", "geo", "firewall", "darkweb", "devices", "incidents"])
def test_analytics_sections(client, section):
    response = client.get(f"/api/analytics/{section}")
    assert response.status_code == 200
    assert response.json()


def test_unknown_analytics_section(client):
    assert client.get("/api/analytics/weather").status_code == 422


def test_export_download(client):
    response = client.get("/api/export/devices")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")

    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="security-data-devices-')
    assert disposition.endswith('.json"')

    document = json.loads(response.text)
    assert set(document) == {"devices", "exportedAt"}
    assert len(document["devices"]) == 17


def test_export_rejects_unknown_scope(client):
    assert client.get("/api/export/everything").status_code == 422


def test_pause_and_resume(client):
    status = client.get("/api/simulation").json()
    assert status["auto_refresh"] is False
    assert status["paused"] is False
    assert status["interval_seconds"] == 7.0

    assert client.post("/api/simulation/pause").json() == {"paused": True}
    assert client.get("/api/simulation").json()["paused"] is True

    assert client.post("/api/simulation/resume").json() == {"paused": False}
    assert client.get("/api/simulation").json()["paused"] is False


def test_manual_tick(client):
    data = client.post("/api/simulation/tick").json()
    assert set(data) == {"threat", "alert", "devices_updated"}

    counts = client.get("/api/health").json()["counts"]
    assert counts["threats"] == 500 + (data["threat"] is not None)
    assert counts["firewall"] == 1000 + (data["alert"] is not None)


def test_background_loop_starts_and_stops():
    app = create_app(Settings(auto_refresh=True, tick_interval_seconds=3600, random_seed=1))
    with TestClient(app) as test_client:
        assert test_client.get("/api/simulation").json()["auto_refresh"] is True
    assert app.state.loop_task.cancelled() or app.state.loop_task.done()
