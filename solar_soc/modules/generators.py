import math
import random
import string
from datetime import datetime, timedelta
from typing import List

from solar_soc.lib.ip_utils import random_grid_ip, random_grid_port, random_ip
from solar_soc.modules import catalog
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

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LEN = 9


def make_id(prefix: str, rng: random.Random, now: datetime) -> str:
    """
    "<prefix>-<epoch ms>-<9 char base36 suffix>", e.g. "threat-1760000000000-k3j9x0a1b".
    """
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LEN))
    return f"{prefix}-{int(now.timestamp() * 1000)}-{suffix}"


def random_timestamp_between(rng: random.Random, start: datetime, end: datetime) -> datetime:
    return start + (end - start) * rng.random()


# ------------------------------------------------------------
# Threat policy
# ------------------------------------------------------------

def pick_severity(rng: random.Random) -> Severity:
    """
    Weighted severity draw: 30% Low, 30% Medium, 30% High, 10% Critical.
    """
    roll = rng.random()
    for threshold, severity in catalog.SEVERITY_THRESHOLDS:
        if roll < threshold:
            return severity
    return Severity.CRITICAL


def calculate_risk_score(threat_type: ThreatType, severity: Severity) -> float:
    """
    base(type) x multiplier(severity), rounded half-up to one decimal, capped at 10.
    """
    raw = catalog.THREAT_BASE_SCORES[threat_type] * catalog.SEVERITY_MULTIPLIERS[severity]
    return min(catalog.MAX_RISK_SCORE, math.floor(raw * 10 + 0.5) / 10)


def generate_suggestions(threat_type: ThreatType, severity: Severity) -> List[str]:
    suggestions = list(catalog.THREAT_SUGGESTIONS[threat_type])
    if severity is Severity.CRITICAL:
        suggestions = list(catalog.CRITICAL_ESCALATIONS) + suggestions
    return suggestions


def describe_threat(threat_type: ThreatType, device: str) -> str:
    return catalog.THREAT_DESCRIPTIONS[threat_type].format(device=device)


def generate_threat_event(rng: random.Random, timestamp: datetime, now: datetime) -> ThreatEvent:
    """
    Build one ThreatEvent stamped at `timestamp`.
    `now` only feeds the id; seeded history is stamped in the past.
    """
    threat_type = rng.choice(list(ThreatType))
    severity = pick_severity(rng)
    location = rng.choice(catalog.LOCATIONS)
    device = rng.choice(catalog.DEVICE_NAMES)
    device_type = rng.choice(list(DeviceType))

    return ThreatEvent(
        id=make_id("threat", rng, now),
        timestamp=timestamp,
        type=threat_type,
        severity=severity,
        source_ip=random_ip(rng),
        target_device=device,
        device_type=device_type,
        location=location,
        description=describe_threat(threat_type, device),
        status=rng.choice(list(ThreatStatus)),
        risk_score=calculate_risk_score(threat_type, severity),
        suggestions=tuple(generate_suggestions(threat_type, severity)),
    )


# ------------------------------------------------------------
# Other record types
# ------------------------------------------------------------

def generate_firewall_alert(rng: random.Random, timestamp: datetime, now: datetime) -> FirewallAlert:
    return FirewallAlert(
        id=make_id("fw", rng, now),
        timestamp=timestamp,
        action=rng.choice(list(FirewallAction)),
        source_ip=random_ip(rng),
        dest_ip=random_grid_ip(rng),
        port=random_grid_port(rng),
        protocol=rng.choice(list(Protocol)),
        rule=f"RULE-{rng.randrange(catalog.FIREWALL_RULE_COUNT)}",
        severity=rng.choice(list(Severity)),
    )


def generate_dark_web_threat(rng: random.Random, timestamp: datetime, now: datetime) -> DarkWebThreat:
    dw_type = rng.choice(list(DarkWebType))
    return DarkWebThreat(
        id=make_id("dw", rng, now),
        timestamp=timestamp,
        type=dw_type,
        target=catalog.DARK_WEB_TARGET,
        severity=rng.choice(list(Severity)),
        description=catalog.DARK_WEB_DESCRIPTIONS[dw_type],
        source=rng.choice(catalog.DARK_WEB_SOURCES),
        indicators=catalog.DARK_WEB_INDICATORS[dw_type],
    )


def generate_incident(rng: random.Random, created_at: datetime, now: datetime) -> Incident:
    """
    Incidents are created once at seed time; updated_at lands within 24h of created_at.
    """
    return Incident(
        id=make_id("inc", rng, now),
        title=rng.choice(catalog.INCIDENT_TITLES),
        description=catalog.INCIDENT_DESCRIPTION,
        severity=rng.choice(list(Severity)),
        status=rng.choice(list(IncidentStatus)),
        assignee=rng.choice(catalog.INCIDENT_ASSIGNEES),
        created_at=created_at,
        updated_at=created_at + timedelta(days=1) * rng.random(),
        related_events=(),
        actions=catalog.INCIDENT_ACTIONS,
    )


def build_device_roster(rng: random.Random, now: datetime) -> List[DeviceStatus]:
    """
    One DeviceStatus per roster name, types cycling through DeviceType.
    ~90% start Online; the rest are spread over Warning/Critical/Offline.
    """
    device_types = list(DeviceType)
    degraded = [DeviceState.WARNING, DeviceState.CRITICAL, DeviceState.OFFLINE]
    devices: List[DeviceStatus] = []

    for index, name in enumerate(catalog.DEVICE_NAMES):
        status = DeviceState.ONLINE if rng.random() > 0.1 else rng.choice(degraded)
        devices.append(
            DeviceStatus(
                id=f"device-{index}",
                name=name,
                type=device_types[index % len(device_types)],
                status=status,
                last_seen=now - timedelta(hours=1) * rng.random(),
                auth_attempts=rng.randrange(50),
                failed_logins=rng.randrange(10),
                location=rng.choice(catalog.DEVICE_ZONES),
                ip_address=random_grid_ip(rng),
            )
        )

    return devices
