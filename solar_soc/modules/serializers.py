from datetime import datetime, timezone
from typing import Any, Dict

from solar_soc.modules.models import (
    DarkWebThreat,
    DeviceStatus,
    FirewallAlert,
    Incident,
    Location,
    ThreatEvent,
)


def to_iso(dt: datetime) -> str:
    """
    ISO-8601 in UTC with millisecond precision and a "Z" suffix.
    """
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize_location(loc: Location) -> Dict[str, Any]:
    return {
        "country": loc.country,
        "city": loc.city,
        "lat": loc.lat,
        "lng": loc.lng,
    }


def serialize_threat(e: ThreatEvent) -> Dict[str, Any]:
    return {
        "id": e.id,
        "timestamp": to_iso(e.timestamp),
        "type": e.type.value,
        "severity": e.severity.value,
        "sourceIP": e.source_ip,
        "targetDevice": e.target_device,
        "deviceType": e.device_type.value,
        "location": serialize_location(e.location),
        "description": e.description,
        "status": e.status.value,
        "riskScore": e.risk_score,
        "suggestions": list(e.suggestions),
    }


def serialize_device(d: DeviceStatus) -> Dict[str, Any]:
    return {
        "id": d.id,
        "name": d.name,
        "type": d.type.value,
        "status": d.status.value,
        "lastSeen": to_iso(d.last_seen),
        "authAttempts": d.auth_attempts,
        "failedLogins": d.failed_logins,
        "location": d.location,
        "ipAddress": d.ip_address,
    }


def serialize_firewall_alert(a: FirewallAlert) -> Dict[str, Any]:
    return {
        "id": a.id,
        "timestamp": to_iso(a.timestamp),
        "action": a.action.value,
        "sourceIP": a.source_ip,
        "destIP": a.dest_ip,
        "port": a.port,
        "protocol": a.protocol.value,
        "rule": a.rule,
        "severity": a.severity.value,
    }


def serialize_dark_web_threat(t: DarkWebThreat) -> Dict[str, Any]:
    return {
        "id": t.id,
        "timestamp": to_iso(t.timestamp),
        "type": t.type.value,
        "target": t.target,
        "severity": t.severity.value,
        "description": t.description,
        "source": t.source,
        "indicators": list(t.indicators),
    }


def serialize_incident(i: Incident) -> Dict[str, Any]:
    return {
        "id": i.id,
        "title": i.title,
        "description": i.description,
        "severity": i.severity.value,
        "status": i.status.value,
        "assignee": i.assignee,
        "createdAt": to_iso(i.created_at),
        "updatedAt": to_iso(i.updated_at),
        "relatedEvents": list(i.related_events),
        "actions": list(i.actions),
    }
