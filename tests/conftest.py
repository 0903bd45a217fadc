"""
PyTest configuration and fixtures
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from solar_soc.modules.simulator import SecurityDataSimulator

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock; call it to read the current instant."""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def simulator(rng, clock):
    """Simulator with a seeded random source and a frozen clock"""
    return SecurityDataSimulator(rng, clock)


@pytest.fixture
def eager_simulator(rng, clock):
    """Simulator whose live updates always fire"""
    return SecurityDataSimulator(
        rng,
        clock,
        threat_probability=1.0,
        firewall_probability=1.0,
    )
