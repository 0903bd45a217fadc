import asyncio
import logging
import random
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import Response

from solar_soc.config import Settings, settings as default_settings
from solar_soc.modules import analytics
from solar_soc.modules.export import ExportScope
from solar_soc.modules.serializers import (
    serialize_dark_web_threat,
    serialize_device,
    serialize_firewall_alert,
    serialize_incident,
    serialize_threat,
    to_iso,
)
from solar_soc.modules.simulator import SecurityDataSimulator, TickResult

logger = logging.getLogger(__name__)


class AnalyticsSection(str, Enum):
    THREATS = "threats"
    GEO = "geo"
    FIREWALL = "firewall"
    DARKWEB = "darkweb"
    DEVICES = "devices"
    INCIDENTS = "incidents"


def build_simulator(cfg: Settings) -> SecurityDataSimulator:
    """
    Construct the simulator from settings. A fixed random_seed makes the
    whole dataset reproducible.
    """
    rng = random.Random(cfg.random_seed) if cfg.random_seed is not None else None
    return SecurityDataSimulator(
        rng,
        threat_probability=cfg.threat_probability,
        firewall_probability=cfg.firewall_probability,
        status_change_probability=cfg.status_change_probability,
        failed_login_probability=cfg.failed_login_probability,
        retention=timedelta(days=cfg.retention_days),
    )


def _serialize_tick(result: TickResult) -> dict:
    return {
        "threat": serialize_threat(result.threat) if result.threat else None,
        "alert": serialize_firewall_alert(result.alert) if result.alert else None,
        "devices_updated": result.devices_updated,
    }


def _limited(items: List, limit: Optional[int]) -> List:
    return items if limit is None else items[:limit]


# ------------------------------------------------------------
# BACKGROUND TASKS
# ------------------------------------------------------------

async def simulation_loop(app: FastAPI):
    """
    Every tick_interval_seconds:
      - skip if paused
      - otherwise run one simulator tick (new threat / alert / device pass)
    A tick is synchronous, so it is applied whole or not at all.
    """
    interval = app.state.settings.tick_interval_seconds
    while True:
        await asyncio.sleep(interval)
        if app.state.paused:
            continue
        try:
            app.state.simulator.tick()
        except Exception:
            # Keep the loop alive; the dashboard should not freeze on one bad tick.
            logger.exception("Simulation tick failed")


# ------------------------------------------------------------
# APP FACTORY
# ------------------------------------------------------------

def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    cfg = cfg or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.simulator = build_simulator(cfg)
        app.state.paused = False
        app.state.loop_task = None

        if cfg.auto_refresh:
            app.state.loop_task = asyncio.create_task(simulation_loop(app))
            logger.info("Live simulation started (every %.1fs)", cfg.tick_interval_seconds)

        yield

        task = app.state.loop_task
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("Live simulation stopped")

    app = FastAPI(
        title=cfg.app_name,
        description="Simulated security telemetry for a solar-grid SOC dashboard",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg

    # ------------------------------------------------------------
    # API ROUTES
    # ------------------------------------------------------------

    @app.get("/api/health")
    async def health(request: Request):
        return {"ok": True, "counts": request.app.state.simulator.counts()}

    @app.get("/api/dashboard")
    async def dashboard(request: Request):
        sim = request.app.state.simulator
        summary = analytics.dashboard_summary(
            sim.get_threat_events(),
            sim.get_devices(),
            sim.get_firewall_alerts(),
            sim.get_dark_web_threats(),
            sim.get_incidents(),
        )
        return {**summary, "lastUpdate": to_iso(datetime.now(timezone.utc))}

    @app.get("/api/threats")
    async def threats(request: Request, limit: Optional[int] = Query(None, ge=1)):
        events = request.app.state.simulator.get_threat_events()
        return [serialize_threat(e) for e in _limited(events, limit)]

    @app.get("/api/devices")
    async def devices(request: Request):
        return [serialize_device(d) for d in request.app.state.simulator.get_devices()]

    @app.get("/api/firewall")
    async def firewall(request: Request, limit: Optional[int] = Query(None, ge=1)):
        alerts = request.app.state.simulator.get_firewall_alerts()
        return [serialize_firewall_alert(a) for a in _limited(alerts, limit)]

    @app.get("/api/darkweb")
    async def darkweb(request: Request, limit: Optional[int] = Query(None, ge=1)):
        items = request.app.state.simulator.get_dark_web_threats()
        return [serialize_dark_web_threat(t) for t in _limited(items, limit)]

    @app.get("/api/incidents")
    async def incidents(request: Request, limit: Optional[int] = Query(None, ge=1)):
        items = request.app.state.simulator.get_incidents()
        return [serialize_incident(i) for i in _limited(items, limit)]

    @app.get("/api/analytics/{section}")
    async def analytics_section(section: AnalyticsSection, request: Request):
        sim = request.app.state.simulator
        now = datetime.now(timezone.utc)

        if section is AnalyticsSection.THREATS:
            events = sim.get_threat_events()
            return {
                "timeline": analytics.threat_timeline(events, now),
                "types": analytics.threat_type_distribution(events),
                "severities": analytics.severity_distribution(events),
            }

        if section is AnalyticsSection.GEO:
            events = sim.get_threat_events()
            return {
                "countries": analytics.threats_by_country(events),
                "recent": [serialize_threat(e) for e in analytics.recent_threats(events, now)],
            }

        if section is AnalyticsSection.FIREWALL:
            alerts = sim.get_firewall_alerts()
            return {
                "timeline": analytics.firewall_timeline(alerts, now),
                "top_blocked_ports": analytics.top_blocked_ports(alerts),
                "protocols": analytics.protocol_distribution(alerts),
                "actions": analytics.firewall_action_counts(alerts),
            }

        if section is AnalyticsSection.DARKWEB:
            items = sim.get_dark_web_threats()
            return {
                "types": analytics.dark_web_type_stats(items),
                "critical": [
                    serialize_dark_web_threat(t)
                    for t in analytics.critical_dark_web_threats(items)
                ],
                "sources": analytics.dark_web_source_stats(items),
            }

        if section is AnalyticsSection.DEVICES:
            devs = sim.get_devices()
            return {
                "status": analytics.device_status_counts(devs),
                "high_risk": [serialize_device(d) for d in analytics.high_risk_devices(devs)],
                "types": analytics.device_type_health(devs),
            }

        items = sim.get_incidents()
        return {
            "stats": analytics.incident_stats(items),
            "recent": [serialize_incident(i) for i in analytics.recent_incidents(items)],
        }

    @app.get("/api/export/{scope}")
    async def export(scope: ExportScope, request: Request):
        artifact = request.app.state.simulator.export_data(scope)
        return Response(
            content=artifact.to_json(),
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
        )

    # ------------------------------------------------------------
    # SIMULATION CONTROL
    # ------------------------------------------------------------

    @app.get("/api/simulation")
    async def simulation_status(request: Request):
        state = request.app.state
        return {
            "auto_refresh": state.loop_task is not None,
            "paused": state.paused,
            "interval_seconds": cfg.tick_interval_seconds,
            "counts": state.simulator.counts(),
        }

    @app.post("/api/simulation/pause")
    async def pause(request: Request):
        request.app.state.paused = True
        logger.info("Live simulation paused")
        return {"paused": True}

    @app.post("/api/simulation/resume")
    async def resume(request: Request):
        request.app.state.paused = False
        logger.info("Live simulation resumed")
        return {"paused": False}

    @app.post("/api/simulation/tick")
    async def manual_tick(request: Request):
        return _serialize_tick(request.app.state.simulator.tick())

    return app


logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
