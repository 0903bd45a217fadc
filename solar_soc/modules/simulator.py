import dataclasses
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from solar_soc.modules import generators
from solar_soc.modules.export import ExportArtifact, ExportScope, build_export
from solar_soc.modules.models import (
    DarkWebThreat,
    DeviceState,
    DeviceStatus,
    FirewallAlert,
    Incident,
    ThreatEvent,
)

logger = logging.getLogger(__name__)

# Live-update odds per tick
THREAT_EVENT_PROBABILITY: float = 0.2
FIREWALL_ALERT_PROBABILITY: float = 0.4
STATUS_CHANGE_PROBABILITY: float = 0.1
FAILED_LOGIN_PROBABILITY: float = 0.05

RETENTION: timedelta = timedelta(days=30)


@dataclass(frozen=True)
class SeedCounts:
    threats: int = 500
    firewall: int = 1000
    darkweb: int = 50
    incidents: int = 25


@dataclass(frozen=True)
class TickResult:
    threat: Optional[ThreatEvent]
    alert: Optional[FirewallAlert]
    devices_updated: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_probability(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be within [0, 1], got {value!r}")
    return value


class SecurityDataSimulator:
    """
    In-memory state engine for the SOC dashboard.

    Owns the five collections, seeds 30 days of history on construction and
    mutates them on each tick. Readers only ever get copies.

    `rng` and `clock` are injection points: pass a seeded random.Random and a
    fixed clock to get reproducible sequences.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        *,
        threat_probability: float = THREAT_EVENT_PROBABILITY,
        firewall_probability: float = FIREWALL_ALERT_PROBABILITY,
        status_change_probability: float = STATUS_CHANGE_PROBABILITY,
        failed_login_probability: float = FAILED_LOGIN_PROBABILITY,
        retention: timedelta = RETENTION,
        seed_counts: Optional[SeedCounts] = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock if clock is not None else _utcnow

        self.threat_probability = _check_probability("threat_probability", threat_probability)
        self.firewall_probability = _check_probability("firewall_probability", firewall_probability)
        self.status_change_probability = _check_probability(
            "status_change_probability", status_change_probability
        )
        self.failed_login_probability = _check_probability(
            "failed_login_probability", failed_login_probability
        )
        self.retention = retention

        self._threat_events: List[ThreatEvent] = []
        self._devices: List[DeviceStatus] = []
        self._firewall_alerts: List[FirewallAlert] = []
        self._dark_web_threats: List[DarkWebThreat] = []
        self._incidents: List[Incident] = []

        self._initialize_devices()
        self._generate_historical_data(seed_counts or SeedCounts())

    # ------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------

    def _initialize_devices(self) -> None:
        self._devices = generators.build_device_roster(self._rng, self._clock())

    def _generate_historical_data(self, counts: SeedCounts) -> None:
        """
        Backfill each event collection with timestamps spread uniformly
        over the trailing retention window.
        """
        now = self._clock()
        start = now - self.retention
        rng = self._rng

        def stamp() -> datetime:
            return generators.random_timestamp_between(rng, start, now)

        self._threat_events = [
            generators.generate_threat_event(rng, stamp(), now) for _ in range(counts.threats)
        ]
        self._firewall_alerts = [
            generators.generate_firewall_alert(rng, stamp(), now) for _ in range(counts.firewall)
        ]
        self._dark_web_threats = [
            generators.generate_dark_web_threat(rng, stamp(), now) for _ in range(counts.darkweb)
        ]
        self._incidents = [
            generators.generate_incident(rng, stamp(), now) for _ in range(counts.incidents)
        ]

        logger.info(
            "Seeded simulator: %d threats, %d firewall alerts, %d dark web threats, "
            "%d incidents, %d devices",
            len(self._threat_events),
            len(self._firewall_alerts),
            len(self._dark_web_threats),
            len(self._incidents),
            len(self._devices),
        )

    # ------------------------------------------------------------
    # Live updates
    # ------------------------------------------------------------

    def _cutoff(self, now: datetime) -> datetime:
        return now - self.retention

    def generate_new_threat_event(self) -> Optional[ThreatEvent]:
        """
        Most ticks produce nothing. When one fires, the event is stamped now,
        prepended, and the collection is pruned to the retention window.
        """
        if self._rng.random() >= self.threat_probability:
            return None

        now = self._clock()
        event = generators.generate_threat_event(self._rng, now, now)
        self._threat_events.insert(0, event)

        cutoff = self._cutoff(now)
        self._threat_events = [e for e in self._threat_events if e.timestamp > cutoff]
        return event

    def generate_new_firewall_alert(self) -> Optional[FirewallAlert]:
        if self._rng.random() >= self.firewall_probability:
            return None

        now = self._clock()
        alert = generators.generate_firewall_alert(self._rng, now, now)
        self._firewall_alerts.insert(0, alert)

        cutoff = self._cutoff(now)
        self._firewall_alerts = [a for a in self._firewall_alerts if a.timestamp > cutoff]
        return alert

    def update_device_status(self) -> int:
        """
        Per device, two independent draws:
          • status change  → uniform new status, last_seen = now
          • failed login   → failed_logins += 1, auth_attempts += 1
        Returns the number of devices that changed.
        """
        now = self._clock()
        statuses = list(DeviceState)
        changed = 0

        for device in self._devices:
            touched = False

            if self._rng.random() < self.status_change_probability:
                device.status = self._rng.choice(statuses)
                device.last_seen = now
                touched = True

            if self._rng.random() < self.failed_login_probability:
                device.failed_logins += 1
                device.auth_attempts += 1
                touched = True

            if touched:
                changed += 1

        return changed

    def tick(self) -> TickResult:
        """
        One timer interval: maybe a threat, maybe a firewall alert, always a device pass.
        """
        threat = self.generate_new_threat_event()
        alert = self.generate_new_firewall_alert()
        devices_updated = self.update_device_status()

        logger.debug(
            "Tick: threat=%s alert=%s devices_updated=%d",
            threat.id if threat else None,
            alert.id if alert else None,
            devices_updated,
        )
        return TickResult(threat=threat, alert=alert, devices_updated=devices_updated)

    # ------------------------------------------------------------
    # Snapshot reads
    # ------------------------------------------------------------

    def get_threat_events(self) -> List[ThreatEvent]:
        return sorted(self._threat_events, key=lambda e: e.timestamp, reverse=True)

    def get_devices(self) -> List[DeviceStatus]:
        # Roster order; records are copied since ticks mutate them in place.
        return [dataclasses.replace(d) for d in self._devices]

    def get_firewall_alerts(self) -> List[FirewallAlert]:
        return sorted(self._firewall_alerts, key=lambda a: a.timestamp, reverse=True)

    def get_dark_web_threats(self) -> List[DarkWebThreat]:
        return sorted(self._dark_web_threats, key=lambda t: t.timestamp, reverse=True)

    def get_incidents(self) -> List[Incident]:
        return sorted(self._incidents, key=lambda i: i.created_at, reverse=True)

    def counts(self) -> Dict[str, int]:
        return {
            "threats": len(self._threat_events),
            "devices": len(self._devices),
            "firewall": len(self._firewall_alerts),
            "darkweb": len(self._dark_web_threats),
            "incidents": len(self._incidents),
        }

    # ------------------------------------------------------------
    # Export
    # ------------------------------------------------------------

    def export_data(self, scope: ExportScope) -> ExportArtifact:
        """
        Build the downloadable export for `scope` ("threats", ..., or "all").
        Only the requested collections appear in the document.
        """
        scope = ExportScope(scope)
        artifact = build_export(
            scope,
            exported_at=self._clock(),
            threats=self.get_threat_events,
            devices=self.get_devices,
            firewall=self.get_firewall_alerts,
            darkweb=self.get_dark_web_threats,
            incidents=self.get_incidents,
        )
        logger.info("Exported %s as %s", scope.value, artifact.filename)
        return artifact
