"""
Tests for export documents and record serialization
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from solar_soc.modules.export import ExportScope, export_filename
from solar_soc.modules.serializers import serialize_threat, to_iso

COLLECTION_KEYS = {"threats", "devices", "firewall", "darkweb", "incidents"}


def test_devices_scope_contains_only_devices(simulator):
    """Test that unrequested collections are absent, not empty"""
    artifact = simulator.export_data(ExportScope.DEVICES)
    assert set(artifact.document) == {"devices", "exportedAt"}
    assert len(artifact.document["devices"]) == 17


@pytest.mark.parametrize("scope", [s for s in ExportScope if s is not ExportScope.ALL])
def test_single_scope_exports(simulator, scope):
    artifact = simulator.export_data(scope)
    assert set(artifact.document) == {scope.value, "exportedAt"}


def test_all_scope_exports_everything(simulator):
    document = simulator.export_data(ExportScope.ALL).document
    assert set(document) == COLLECTION_KEYS | {"exportedAt"}
    assert len(document["threats"]) == 500
    assert len(document["firewall"]) == 1000
    assert len(document["darkweb"]) == 50
    assert len(document["incidents"]) == 25


def test_scope_accepts_plain_string(simulator):
    artifact = simulator.export_data("firewall")
    assert set(artifact.document) == {"firewall", "exportedAt"}


def test_unknown_scope_is_rejected(simulator):
    with pytest.raises(ValueError):
        simulator.export_data("everything")


def test_filename_and_timestamp(simulator):
    artifact = simulator.export_data(ExportScope.THREATS)
    assert artifact.filename == "security-data-threats-2026-10-19.json"
    assert artifact.document["exportedAt"] == "2026-10-19T12:00:00.000Z"


def test_filename_uses_utc_date():
    late = datetime(2026, 12, 31, 23, 30, tzinfo=timezone.utc)
    assert export_filename(ExportScope.ALL, late) == "security-data-all-2026-12-31.json"


def test_to_json_round_trips_document(simulator):
    artifact = simulator.export_data(ExportScope.INCIDENTS)
    text = artifact.to_json()
    assert json.loads(text) == artifact.document
    assert text.startswith("{\n  ")


def test_threat_serialization_shape(simulator):
    event = simulator.get_threat_events()[0]
    data = serialize_threat(event)

    assert set(data) == {
        "id", "timestamp", "type", "severity", "sourceIP", "targetDevice",
        "deviceType", "location", "description", "status", "riskScore", "suggestions",
    }
    assert set(data["location"]) == {"country", "city", "lat", "lng"}
    assert data["type"] == event.type.value
    assert data["timestamp"].endswith("Z")
    assert isinstance(data["suggestions"], list)


def test_serialized_device_fields(simulator):
    device = simulator.export_data(ExportScope.DEVICES).document["devices"][0]
    assert set(device) == {
        "id", "name", "type", "status", "lastSeen", "authAttempts",
        "failedLogins", "location", "ipAddress",
    }
    assert device["id"] == "device-0"
    assert device["name"] == "INV-001"
    assert device["type"] == "Solar Inverter"


def test_to_iso_normalizes_to_utc():
    local = datetime(2026, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_iso(local) == "2026-01-01T07:00:00.000Z"
