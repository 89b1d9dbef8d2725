# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - fixed_now        → a fixed "current time" (Monday 2024-01-15 12:00)
# - normalizer       → RecordNormalizer whose clock returns fixed_now
# - make_record      → factory for TrafficRecord with sensible defaults
# - sample_csv       → small well-formed CSV upload
# - app_config       → AppConfig with seeded, delay-free simulation
# - dashboard        → TrafficDashboard wired to app_config + fixed_now
#
# ==============================================

from datetime import datetime

import pytest

from traffic_dashboard.config import AppConfig, DashboardConfig, SimulationConfig
from traffic_dashboard.dashboard import TrafficDashboard
from traffic_dashboard.normalization import RecordNormalizer, TrafficRecord


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture
def normalizer(fixed_now) -> RecordNormalizer:
    return RecordNormalizer(clock=lambda: fixed_now)


@pytest.fixture
def make_record():
    """Return a factory building TrafficRecords from keyword overrides."""
    counter = {"n": 0}

    def _make(timestamp: str = "2024-01-15 08:00:00", **overrides) -> TrafficRecord:
        counter["n"] += 1
        fields = {
            "id": f"rec-{counter['n']}",
            "timestamp": datetime.strptime(timestamp, "%Y-%m-%d %H:%M:%S"),
            "volume": 100,
            "speed": 50.0,
            "occupancy": 40.0,
            "location": "Highway 101",
        }
        fields.update(overrides)
        return TrafficRecord(**fields)

    return _make


@pytest.fixture
def sample_csv() -> str:
    return (
        "timestamp,location,volume,speed,occupancy,weather\n"
        "2024-01-15 08:00:00,Highway 101,120,45,80,clear\n"
        "2024-01-15 08:30:00,Highway 101,80,55,60,clear\n"
        "2024-01-15 17:00:00,Interstate 5,150,30,90,rain\n"
    )


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        dashboard=DashboardConfig(sample_record_count=48, sample_seed=7),
        simulation=SimulationConfig(seed=42, training_steps=10),
    )


@pytest.fixture
def dashboard(app_config, fixed_now) -> TrafficDashboard:
    return TrafficDashboard(app_config, clock=lambda: fixed_now)
