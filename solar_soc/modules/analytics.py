# analytics.py
#
# Dashboard aggregations.
# Pure logic over snapshot lists. No simulator state, no I/O.
#
# Every function takes the lists returned by the simulator getters and
# returns JSON-ready dicts/lists for the chart and card views.

from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, List, Sequence

from solar_soc.modules.models import (
    DarkWebThreat,
    DarkWebType,
    DeviceState,
    DeviceStatus,
    DeviceType,
    FirewallAction,
    FirewallAlert,
    Incident,
    IncidentStatus,
    Protocol,
    Severity,
    ThreatEvent,
    ThreatStatus,
    ThreatType,
)

# Devices with more failed logins than this are flagged
FAILED_LOGIN_RISK_THRESHOLD = 5


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------

def _hour_buckets(now: datetime, hours: int) -> List[datetime]:
    """
    Start of each of the last `hours` clock hours, oldest first.
    The current (partial) hour is the last bucket.
    """
    current = now.replace(minute=0, second=0, microsecond=0)
    return [current - timedelta(hours=i) for i in range(hours - 1, -1, -1)]


def _label(hour_start: datetime) -> str:
    return f"{hour_start.hour:02d}:00"


# ------------------------------------------------------------
# Overview
# ------------------------------------------------------------

def dashboard_summary(
    threats: Sequence[ThreatEvent],
    devices: Sequence[DeviceStatus],
    alerts: Sequence[FirewallAlert],
    dark_web: Sequence[DarkWebThreat],
    incidents: Sequence[Incident],
) -> Dict[str, Any]:
    """
    Header cards + critical banner counts.
    """
    severity_counts = Counter(e.severity for e in threats)
    critical_active = sum(
        1 for e in threats
        if e.severity is Severity.CRITICAL and e.status is ThreatStatus.ACTIVE
    )

    return {
        "threats": {
            "total": len(threats),
            "active": sum(1 for e in threats if e.status is ThreatStatus.ACTIVE),
            "critical_active": critical_active,
            "by_severity": {s.value: severity_counts.get(s, 0) for s in Severity},
        },
        "devices": {
            "total": len(devices),
            "by_status": device_status_counts(devices),
        },
        "firewall": {
            "total": len(alerts),
            "blocked": sum(1 for a in alerts if a.action is FirewallAction.BLOCK),
        },
        "darkweb": {
            "total": len(dark_web),
            "critical": sum(1 for t in dark_web if t.severity is Severity.CRITICAL),
        },
        "incidents": {
            "total": len(incidents),
            "open": sum(1 for i in incidents if i.status is IncidentStatus.OPEN),
        },
    }


# ------------------------------------------------------------
# Threats
# ------------------------------------------------------------

def threat_timeline(
    threats: Sequence[ThreatEvent],
    now: datetime,
    hours: int = 24,
) -> List[Dict[str, Any]]:
    timeline = []
    for start in _hour_buckets(now, hours):
        end = start + timedelta(hours=1)
        in_hour = [e for e in threats if start <= e.timestamp < end]
        counts = Counter(e.severity for e in in_hour)
        timeline.append({
            "time": _label(start),
            "threats": len(in_hour),
            "critical": counts.get(Severity.CRITICAL, 0),
            "high": counts.get(Severity.HIGH, 0),
            "medium": counts.get(Severity.MEDIUM, 0),
            "low": counts.get(Severity.LOW, 0),
        })
    return timeline


def threat_type_distribution(threats: Sequence[ThreatEvent]) -> List[Dict[str, Any]]:
    counts = Counter(e.type for e in threats)
    return [{"name": t.value, "value": counts.get(t, 0)} for t in ThreatType]


def severity_distribution(threats: Sequence[ThreatEvent]) -> List[Dict[str, Any]]:
    # Highest severity first, the order the dashboard charts use
    counts = Counter(e.severity for e in threats)
    return [{"name": s.value, "value": counts.get(s, 0)} for s in reversed(list(Severity))]


def threats_by_country(threats: Sequence[ThreatEvent]) -> List[Dict[str, Any]]:
    """
    Per-origin-country totals with severity breakdown, busiest country first.
    """
    by_country: Dict[str, Dict[str, Any]] = {}

    for e in threats:
        loc = e.location
        row = by_country.setdefault(loc.country, {
            "country": loc.country,
            "city": loc.city,
            "lat": loc.lat,
            "lng": loc.lng,
            "total": 0,
            "critical": 0,
            "high": 0,
            "medium": 0,
            "low": 0,
        })
        row["total"] += 1
        row[e.severity.value.lower()] += 1

    return sorted(by_country.values(), key=lambda r: r["total"], reverse=True)


def recent_threats(
    threats: Sequence[ThreatEvent],
    now: datetime,
    window: timedelta = timedelta(hours=24),
    limit: int = 20,
) -> List[ThreatEvent]:
    cutoff = now - window
    recent = [e for e in threats if e.timestamp > cutoff]
    return sorted(recent, key=lambda e: e.timestamp, reverse=True)[:limit]


# ------------------------------------------------------------
# Firewall
# ------------------------------------------------------------

def firewall_timeline(
    alerts: Sequence[FirewallAlert],
    now: datetime,
    hours: int = 24,
) -> List[Dict[str, Any]]:
    timeline = []
    for start in _hour_buckets(now, hours):
        end = start + timedelta(hours=1)
        in_hour = [a for a in alerts if start <= a.timestamp < end]
        counts = Counter(a.action for a in in_hour)
        timeline.append({
            "time": _label(start),
            "total": len(in_hour),
            "blocked": counts.get(FirewallAction.BLOCK, 0),
            "dropped": counts.get(FirewallAction.DROP, 0),
            "allowed": counts.get(FirewallAction.ALLOW, 0),
        })
    return timeline


def top_blocked_ports(alerts: Sequence[FirewallAlert], limit: int = 10) -> List[Dict[str, int]]:
    counts = Counter(a.port for a in alerts if a.action is FirewallAction.BLOCK)
    return [{"port": port, "count": count} for port, count in counts.most_common(limit)]


def protocol_distribution(alerts: Sequence[FirewallAlert]) -> List[Dict[str, Any]]:
    counts = Counter(a.protocol for a in alerts)
    return [{"name": p.value, "value": counts.get(p, 0)} for p in Protocol]


def firewall_action_counts(alerts: Sequence[FirewallAlert]) -> Dict[str, int]:
    counts = Counter(a.action for a in alerts)
    return {a.value: counts.get(a, 0) for a in FirewallAction}


# ------------------------------------------------------------
# Dark web
# ------------------------------------------------------------

def dark_web_type_stats(dark_web: Sequence[DarkWebThreat]) -> List[Dict[str, Any]]:
    stats = []
    for t in DarkWebType:
        of_type = [d for d in dark_web if d.type is t]
        stats.append({
            "type": t.value,
            "count": len(of_type),
            "critical": sum(1 for d in of_type if d.severity is Severity.CRITICAL),
        })
    return stats


def critical_dark_web_threats(dark_web: Sequence[DarkWebThreat], limit: int = 5) -> List[DarkWebThreat]:
    critical = [d for d in dark_web if d.severity is Severity.CRITICAL]
    return sorted(critical, key=lambda d: d.timestamp, reverse=True)[:limit]


def dark_web_source_stats(dark_web: Sequence[DarkWebThreat]) -> List[Dict[str, Any]]:
    counts = Counter(d.source for d in dark_web)
    return [{"source": source, "count": count} for source, count in counts.most_common()]


# ------------------------------------------------------------
# Devices
# ------------------------------------------------------------

def device_status_counts(devices: Sequence[DeviceStatus]) -> Dict[str, int]:
    counts = Counter(d.status for d in devices)
    return {s.value: counts.get(s, 0) for s in DeviceState}


def high_risk_devices(devices: Sequence[DeviceStatus]) -> List[DeviceStatus]:
    """
    Critical or Offline devices, plus anything with repeated failed logins.
    """
    return [
        d for d in devices
        if d.status in (DeviceState.CRITICAL, DeviceState.OFFLINE)
        or d.failed_logins > FAILED_LOGIN_RISK_THRESHOLD
    ]


def device_type_health(devices: Sequence[DeviceStatus]) -> List[Dict[str, Any]]:
    health = []
    for t in DeviceType:
        of_type = [d for d in devices if d.type is t]
        health.append({
            "type": t.value,
            "total": len(of_type),
            "online": sum(1 for d in of_type if d.status is DeviceState.ONLINE),
        })
    return health


# ------------------------------------------------------------
# Incidents
# ------------------------------------------------------------

def incident_stats(incidents: Sequence[Incident]) -> Dict[str, int]:
    counts = Counter(i.status for i in incidents)
    return {
        "open": counts.get(IncidentStatus.OPEN, 0),
        "in_progress": counts.get(IncidentStatus.IN_PROGRESS, 0),
        "resolved": counts.get(IncidentStatus.RESOLVED, 0),
        "closed": counts.get(IncidentStatus.CLOSED, 0),
        "critical": sum(1 for i in incidents if i.severity is Severity.CRITICAL),
    }


def recent_incidents(incidents: Sequence[Incident], limit: int = 10) -> List[Incident]:
    return sorted(incidents, key=lambda i: i.created_at, reverse=True)[:limit]
