# ==============================================
# AggregateBucket
# ==============================================
#
# PURPOSE:
#   Data class that holds the running totals for ONE group key
#   within one dimension (one location, one hour, one weekday...).
#
# WHY THIS CLASS EXISTS:
#   Every chart is a fold over the same records with a different
#   grouping key. The fold itself is identical; only the key and
#   a few extras change. This class is the shared accumulator.
#
# CLASS: AggregateBucket (dataclass)
# ----------------------------------
#   Attributes:
#   -----------
#   - key: Any              → The dimension value (e.g. "Highway 101", 8)
#   - volume_sum: int
#   - speed_sum: float
#   - occupancy_sum: float
#   - count: int            → Number of contributing records
#
#   Computed Properties:
#   --------------------
#   - avg_volume / avg_speed / avg_occupancy -> int
#       Half-up rounded mean, or 0 when count == 0.
#
#   Methods:
#   --------
#   - update(record: TrafficRecord) -> None
#   - to_dict(key_field: str) -> dict      → chart row
#
# CLASS: LocationBucket (AggregateBucket)
# ---------------------------------------
#   Adds peak_volume and peak_time: the highest single-record volume
#   seen and the "HH:MM" of the record that set it. The first record
#   to reach the maximum keeps it (strict >).
#
# ==============================================

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from traffic_dashboard.normalization import TrafficRecord


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2).

    Not the same as round(), which rounds halves to even.
    """
    return int(math.floor(value + 0.5))


def round_fixed(value: float, digits: int = 1) -> float:
    """
    Round to a fixed number of decimals with halves away from zero
    (0.25 -> 0.3, -0.25 -> -0.3), like a display value with fixed decimals.
    """
    scale = 10 ** digits
    rounded = math.floor(abs(value) * scale + 0.5) / scale
    return -rounded if value < 0 and rounded else rounded


def safe_mean(total: float, count: int) -> int:
    """Rounded mean, or 0 for an empty group."""
    if count <= 0:
        return 0
    return round_half_up(total / count)


@dataclass
class AggregateBucket:
    """
    Running totals for a single group key.
    """

    key: Any
    volume_sum: int = 0
    speed_sum: float = 0.0
    occupancy_sum: float = 0.0
    count: int = 0

    # ======================================
    # Update logic
    # ======================================
    def update(self, record: TrafficRecord) -> None:
        """
        Fold one record into the running totals.

        Args:
            record: The record to accumulate
        """
        self.volume_sum += record.volume
        self.speed_sum += record.speed
        self.occupancy_sum += record.occupancy
        self.count += 1

    # ======================================
    # Computed properties
    # ======================================
    @property
    def avg_volume(self) -> int:
        return safe_mean(self.volume_sum, self.count)

    @property
    def avg_speed(self) -> int:
        return safe_mean(self.speed_sum, self.count)

    @property
    def avg_occupancy(self) -> int:
        return safe_mean(self.occupancy_sum, self.count)

    # ======================================
    # Serialization
    # ======================================
    def to_dict(self, key_field: str = "key") -> Dict[str, Any]:
        """
        Shape the bucket as a chart row.

        Args:
            key_field: Name to give the key column (e.g. "location", "hour")

        Returns:
            A JSON-serializable dictionary
        """
        return {
            key_field: self.key,
            "total_volume": self.volume_sum,
            "avg_volume": self.avg_volume,
            "avg_speed": self.avg_speed,
            "avg_occupancy": self.avg_occupancy,
            "count": self.count,
        }


@dataclass
class LocationBucket(AggregateBucket):
    """
    Running totals for one location, plus its single busiest reading.
    """

    peak_volume: int = 0
    peak_time: Optional[str] = None

    def update(self, record: TrafficRecord) -> None:
        super().update(record)
        if self.peak_time is None or record.volume > self.peak_volume:
            self.peak_volume = record.volume
            self.peak_time = record.time

    def to_dict(self, key_field: str = "location") -> Dict[str, Any]:
        row = super().to_dict(key_field)
        row["peak_volume"] = self.peak_volume
        row["peak_time"] = self.peak_time
        return row
