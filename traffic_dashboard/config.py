# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - IngestionConfig (dataclass)
#     delimiter: str             (default ",")
#     encoding: str              (default "utf-8")
#
# - DashboardConfig (dataclass)
#     recent_activity_limit: int (default 10)
#     peak_hours_count: int      (default 3)
#     sample_record_count: int   (default 1000)
#     sample_seed: int | None    (default None)
#
# - SimulationConfig (dataclass)
#     seed: int | None           (default None)
#     training_steps: int        (default 50)
#     step_delay_seconds: float  (default 0.0)
#     prediction_delay_seconds: float (default 0.0)
#
# - AppConfig (dataclass)
#     ingestion: IngestionConfig
#     dashboard: DashboardConfig
#     simulation: SimulationConfig
#     log_level: str             (default "INFO")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from traffic_dashboard.config import get_config
#   config = get_config()
#   print(config.ingestion.delimiter)
#   print(config.dashboard.recent_activity_limit)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class IngestionConfig:
    """CSV ingestion configuration."""
    delimiter: str = ","
    encoding: str = "utf-8"


@dataclass
class DashboardConfig:
    """Dashboard view configuration."""
    recent_activity_limit: int = 10
    peak_hours_count: int = 3
    sample_record_count: int = 1000
    sample_seed: Optional[int] = None


@dataclass
class SimulationConfig:
    """Simulated training / prediction configuration."""
    seed: Optional[int] = None
    training_steps: int = 50
    step_delay_seconds: float = 0.0
    prediction_delay_seconds: float = 0.0


@dataclass
class AppConfig:
    """Main application configuration."""
    ingestion: IngestionConfig = field(default_factory=IngestionConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    ingestion_config = IngestionConfig(
        delimiter=os.getenv("CSV_DELIMITER", ","),
        encoding=os.getenv("CSV_ENCODING", "utf-8")
    )

    dashboard_config = DashboardConfig(
        recent_activity_limit=int(os.getenv("RECENT_ACTIVITY_LIMIT", "10")),
        peak_hours_count=int(os.getenv("PEAK_HOURS_COUNT", "3")),
        sample_record_count=int(os.getenv("SAMPLE_RECORD_COUNT", "1000")),
        sample_seed=_optional_int(os.getenv("SAMPLE_SEED"))
    )

    simulation_config = SimulationConfig(
        seed=_optional_int(os.getenv("SIMULATION_SEED")),
        training_steps=int(os.getenv("TRAINING_STEPS", "50")),
        step_delay_seconds=float(os.getenv("TRAINING_STEP_DELAY_SECONDS", "0.0")),
        prediction_delay_seconds=float(os.getenv("PREDICTION_DELAY_SECONDS", "0.0"))
    )

    _config_instance = AppConfig(
        ingestion=ingestion_config,
        dashboard=dashboard_config,
        simulation=simulation_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )

    return _config_instance
