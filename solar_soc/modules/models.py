from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple


class ThreatType(str, Enum):
    MALWARE = "Malware"
    DOS = "DoS"
    SPOOFING = "Spoofing"
    ACCESS_VIOLATION = "Access Violation"
    PORT_SCAN = "Port Scan"
    BRUTE_FORCE = "Brute Force"


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ThreatStatus(str, Enum):
    ACTIVE = "Active"
    INVESTIGATING = "Investigating"
    RESOLVED = "Resolved"
    BLOCKED = "Blocked"


class DeviceType(str, Enum):
    SOLAR_INVERTER = "Solar Inverter"
    TRANSFORMER = "Transformer"
    SCADA = "SCADA"
    SMART_METER = "Smart Meter"
    GATEWAY = "Gateway"
    HMI = "HMI"
    RTU = "RTU"
    PLC = "PLC"
    WEATHER_STATION = "Weather Station"
    ENERGY_STORAGE = "Energy Storage"


class DeviceState(str, Enum):
    ONLINE = "Online"
    WARNING = "Warning"
    CRITICAL = "Critical"
    OFFLINE = "Offline"


class FirewallAction(str, Enum):
    BLOCK = "BLOCK"
    ALLOW = "ALLOW"
    DROP = "DROP"


class Protocol(str, Enum):
    TCP = "TCP"
    UDP = "UDP"
    ICMP = "ICMP"


class DarkWebType(str, Enum):
    CREDENTIAL_DUMP = "Credential Dump"
    EXPLOIT_KIT = "Exploit Kit"
    TARGETED_CAMPAIGN = "Targeted Campaign"
    MALWARE_SAMPLE = "Malware Sample"
    VULNERABILITY_INTEL = "Vulnerability Intel"


class IncidentStatus(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


@dataclass(frozen=True)
class Location:
    country: str
    city: str
    lat: float
    lng: float


@dataclass(frozen=True)
class ThreatEvent:
    id: str
    timestamp: datetime
    type: ThreatType
    severity: Severity
    source_ip: str
    target_device: str
    device_type: DeviceType
    location: Location
    description: str
    status: ThreatStatus
    risk_score: float
    suggestions: Tuple[str, ...] = ()


@dataclass
class DeviceStatus:
    # Mutated in place by SecurityDataSimulator.update_device_status()
    id: str
    name: str
    type: DeviceType
    status: DeviceState
    last_seen: datetime
    auth_attempts: int
    failed_logins: int
    location: str           # "Zone A" .. "Zone D"
    ip_address: str


@dataclass(frozen=True)
class FirewallAlert:
    id: str
    timestamp: datetime
    action: FirewallAction
    source_ip: str
    dest_ip: str
    port: int
    protocol: Protocol
    rule: str
    severity: Severity


@dataclass(frozen=True)
class DarkWebThreat:
    id: str
    timestamp: datetime
    type: DarkWebType
    target: str
    severity: Severity
    description: str
    source: str
    indicators: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Incident:
    id: str
    title: str
    description: str
    severity: Severity
    status: IncidentStatus
    assignee: str
    created_at: datetime
    updated_at: datetime
    related_events: Tuple[str, ...] = ()
    actions: Tuple[str, ...] = ()
