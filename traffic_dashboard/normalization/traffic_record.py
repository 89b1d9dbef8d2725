# ==============================================
# TrafficRecord
# ==============================================
#
# PURPOSE:
#   The canonical, typed form of one traffic observation. Every
#   chart and aggregate downstream reads these, never raw rows.
#
# CLASS: TrafficRecord (frozen dataclass)
# ---------------------------------------
#   Stored attributes:
#   ------------------
#   - id: str
#   - timestamp: datetime
#   - volume: int              → vehicles counted, >= 0
#   - speed: float             → mean speed, >= 0
#   - occupancy: float         → percent of time the sensor is occupied
#   - location: str            (default "Unknown")
#   - weather: str             (default "clear")
#   - temperature: float | None
#   - visibility: float | None
#   - road_type: str           (default "highway")
#   - is_holiday: bool
#
#   Derived properties (pure functions of timestamp):
#   -------------------------------------------------
#   - date         → "YYYY-MM-DD"
#   - time         → "HH:MM"
#   - day_of_week  → "Sunday" .. "Saturday"
#   - is_weekend   → Saturday or Sunday
#   - hour         → 0..23
#   - month        → 1..12
#   - month_key    → "YYYY-MM"
#   - season       → Winter (12,1,2) / Spring (3-5) / Summer (6-8) / Fall (9-11)
#
#   Methods:
#   --------
#   - to_dict()     → flattened record, derived fields included
#   - to_raw_row()  → the record as CSV cell text; normalizing it
#                     yields an equal record
#
# ==============================================

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


DAYS_OF_WEEK = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
SEASONS = ("Winter", "Spring", "Summer", "Fall")

DEFAULT_LOCATION = "Unknown"
DEFAULT_WEATHER = "clear"
DEFAULT_ROAD_TYPE = "highway"


def day_of_week(moment: datetime) -> str:
    """Weekday name for a datetime, using a Sunday-first week."""
    # datetime.weekday() is Monday=0
    return DAYS_OF_WEEK[(moment.weekday() + 1) % 7]


def season_for_month(month: int) -> str:
    """Meteorological season for a 1-based month number."""
    if month in (12, 1, 2):
        return "Winter"
    if month in (3, 4, 5):
        return "Spring"
    if month in (6, 7, 8):
        return "Summer"
    return "Fall"


@dataclass(frozen=True)
class TrafficRecord:
    """One normalized traffic observation."""

    id: str
    timestamp: datetime
    volume: int = 0
    speed: float = 0.0
    occupancy: float = 0.0
    location: str = DEFAULT_LOCATION
    weather: str = DEFAULT_WEATHER
    temperature: Optional[float] = None
    visibility: Optional[float] = None
    road_type: str = DEFAULT_ROAD_TYPE
    is_holiday: bool = False

    @property
    def date(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d")

    @property
    def time(self) -> str:
        return self.timestamp.strftime("%H:%M")

    @property
    def day_of_week(self) -> str:
        return day_of_week(self.timestamp)

    @property
    def is_weekend(self) -> bool:
        return self.day_of_week in ("Saturday", "Sunday")

    @property
    def hour(self) -> int:
        return self.timestamp.hour

    @property
    def month(self) -> int:
        return self.timestamp.month

    @property
    def month_key(self) -> str:
        return f"{self.timestamp.year:04d}-{self.timestamp.month:02d}"

    @property
    def season(self) -> str:
        return season_for_month(self.timestamp.month)

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten the record, derived fields included, for tables and export.

        Returns:
            A JSON-serializable dictionary
        """
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "date": self.date,
            "time": self.time,
            "volume": self.volume,
            "speed": self.speed,
            "occupancy": self.occupancy,
            "location": self.location,
            "weather": self.weather,
            "temperature": self.temperature,
            "visibility": self.visibility,
            "road_type": self.road_type,
            "day_of_week": self.day_of_week,
            "is_holiday": self.is_holiday,
            "is_weekend": self.is_weekend,
            "hour": self.hour,
            "month": self.month,
            "season": self.season,
        }

    def to_raw_row(self) -> Dict[str, str]:
        """Stored fields as cell text, keyed like a CSV header."""
        def text(value: Optional[float]) -> str:
            return "" if value is None else str(value)

        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "volume": str(self.volume),
            "speed": str(self.speed),
            "occupancy": str(self.occupancy),
            "location": self.location,
            "weather": self.weather,
            "temperature": text(self.temperature),
            "visibility": text(self.visibility),
            "roadType": self.road_type,
            "isHoliday": "true" if self.is_holiday else "false",
        }
