# catalog.py
#
# Fixed lookup tables for the solar-grid simulation.
# Every enum-keyed table covers its whole enum; generators index them directly.

from typing import Dict, Tuple

from solar_soc.modules.models import (
    DarkWebType,
    DeviceType,
    Location,
    Severity,
    ThreatType,
)


# ------------------------------------------------------------
# Geography + roster
# ------------------------------------------------------------

LOCATIONS: Tuple[Location, ...] = (
    Location("China", "Beijing", 39.9042, 116.4074),
    Location("Russia", "Moscow", 55.7558, 37.6176),
    Location("USA", "New York", 40.7128, -74.006),
    Location("Iran", "Tehran", 35.6892, 51.389),
    Location("North Korea", "Pyongyang", 39.0392, 125.7625),
    Location("Brazil", "São Paulo", -23.5505, -46.6333),
    Location("India", "Mumbai", 19.076, 72.8777),
)

DEVICE_NAMES: Tuple[str, ...] = (
    "INV-001",
    "INV-002",
    "TRANS-A1",
    "TRANS-B2",
    "SCADA-MAIN",
    "SCADA-BACKUP",
    "METER-001",
    "METER-002",
    "METER-003",
    "GW-NORTH",
    "GW-SOUTH",
    "HMI-CTRL1",
    "RTU-FIELD1",
    "RTU-FIELD2",
    "PLC-MAIN",
    "WEATHER-01",
    "STORAGE-BANK1",
)

DEVICE_ZONES: Tuple[str, ...] = ("Zone A", "Zone B", "Zone C", "Zone D")


# ------------------------------------------------------------
# Threat scoring
# ------------------------------------------------------------

# Cumulative thresholds: 30% Low, 30% Medium, 30% High, 10% Critical
SEVERITY_THRESHOLDS: Tuple[Tuple[float, Severity], ...] = (
    (0.3, Severity.LOW),
    (0.6, Severity.MEDIUM),
    (0.9, Severity.HIGH),
    (1.0, Severity.CRITICAL),
)

THREAT_BASE_SCORES: Dict[ThreatType, int] = {
    ThreatType.MALWARE: 8,
    ThreatType.DOS: 7,
    ThreatType.SPOOFING: 6,
    ThreatType.ACCESS_VIOLATION: 9,
    ThreatType.PORT_SCAN: 4,
    ThreatType.BRUTE_FORCE: 7,
}

SEVERITY_MULTIPLIERS: Dict[Severity, float] = {
    Severity.LOW: 0.25,
    Severity.MEDIUM: 0.5,
    Severity.HIGH: 0.75,
    Severity.CRITICAL: 1.0,
}

MAX_RISK_SCORE = 10.0


# ------------------------------------------------------------
# Threat text
# ------------------------------------------------------------

THREAT_SUGGESTIONS: Dict[ThreatType, Tuple[str, ...]] = {
    ThreatType.MALWARE: (
        "Run full system scan",
        "Isolate affected device",
        "Update antivirus signatures",
    ),
    ThreatType.DOS: (
        "Enable rate limiting",
        "Block source IP",
        "Scale up resources",
    ),
    ThreatType.SPOOFING: (
        "Verify device certificates",
        "Enable MAC address filtering",
        "Review authentication logs",
    ),
    ThreatType.ACCESS_VIOLATION: (
        "Reset user credentials",
        "Review access permissions",
        "Enable MFA",
    ),
    ThreatType.PORT_SCAN: (
        "Block scanning IP",
        "Review firewall rules",
        "Monitor for follow-up attacks",
    ),
    ThreatType.BRUTE_FORCE: (
        "Lock user account",
        "Implement account lockout policy",
        "Enable CAPTCHA",
    ),
}

CRITICAL_ESCALATIONS: Tuple[str, ...] = (
    "Notify SOC immediately",
    "Escalate to security team",
)

THREAT_DESCRIPTIONS: Dict[ThreatType, str] = {
    ThreatType.MALWARE: "Suspicious executable detected on {device}",
    ThreatType.DOS: "High volume of requests targeting {device}",
    ThreatType.SPOOFING: "MAC address spoofing attempt detected on {device}",
    ThreatType.ACCESS_VIOLATION: "Unauthorized access attempt to {device}",
    ThreatType.PORT_SCAN: "Port scanning activity detected targeting {device}",
    ThreatType.BRUTE_FORCE: "Multiple failed login attempts on {device}",
}


# ------------------------------------------------------------
# Firewall
# ------------------------------------------------------------

# Includes ICS ports: Modbus (502), MQTT (1883), IEC 104 (2404)
FIREWALL_PORTS: Tuple[int, ...] = (22, 23, 80, 443, 502, 1883, 2404, 8080)

FIREWALL_RULE_COUNT = 100


# ------------------------------------------------------------
# Dark web intelligence
# ------------------------------------------------------------

DARK_WEB_TARGET = "Energy Sector"

DARK_WEB_SOURCES: Tuple[str, ...] = (
    "TOR Market",
    "Underground Forum",
    "Telegram Channel",
    "Discord Server",
)

DARK_WEB_DESCRIPTIONS: Dict[DarkWebType, str] = {
    DarkWebType.CREDENTIAL_DUMP: "Energy sector credentials found in underground marketplace",
    DarkWebType.EXPLOIT_KIT: "New exploit targeting SCADA systems discovered",
    DarkWebType.TARGETED_CAMPAIGN: "APT group planning attacks on renewable energy infrastructure",
    DarkWebType.MALWARE_SAMPLE: "Industrial control system malware sample identified",
    DarkWebType.VULNERABILITY_INTEL: "Zero-day vulnerability in energy management systems reported",
}

DARK_WEB_INDICATORS: Dict[DarkWebType, Tuple[str, ...]] = {
    DarkWebType.CREDENTIAL_DUMP: ("admin@solarplant.com", "scada_user", "maintenance_acc"),
    DarkWebType.EXPLOIT_KIT: ("CVE-2023-1234", "modbus_exploit.py", "scada_backdoor.exe"),
    DarkWebType.TARGETED_CAMPAIGN: ("APT-Energy", "Operation SolarStorm", "GreenGrid Campaign"),
    DarkWebType.MALWARE_SAMPLE: ("SHA256: abc123...", "C2: malicious-domain.com", "Port: 4444"),
    DarkWebType.VULNERABILITY_INTEL: ("CVE-2023-5678", "Schneider Electric", "Remote Code Execution"),
}


# ------------------------------------------------------------
# Incidents
# ------------------------------------------------------------

INCIDENT_TITLES: Tuple[str, ...] = (
    "Suspicious Network Activity Detected",
    "Multiple Failed Authentication Attempts",
    "Potential Malware Infection",
    "Unauthorized Access Attempt",
    "DDoS Attack in Progress",
    "Critical System Offline",
    "Security Policy Violation",
    "Anomalous Device Behavior",
)

INCIDENT_DESCRIPTION = "Automated incident created from threat detection system"

INCIDENT_ASSIGNEES: Tuple[str, ...] = (
    "SOC Analyst 1",
    "SOC Analyst 2",
    "Security Engineer",
    "Incident Commander",
)

INCIDENT_ACTIONS: Tuple[str, ...] = (
    "Initial assessment completed",
    "Containment measures applied",
    "Investigation ongoing",
)
