# ==============================================
# Trends (Data Classes + Derivations)
# ==============================================
#
# PURPOSE:
#   Comparisons built ON TOP of finished buckets: month-over-month
#   growth, weather impact relative to clear conditions, and the
#   traffic-level labels the dashboard shows next to averages.
#
# ENUMS:
# ------
# - Trend(Enum): INCREASING, DECREASING, STABLE, UNDEFINED
#
# CLASSES:
# --------
# - GrowthMetrics (dataclass)
#     - latest_month / previous_month: str
#     - volume_growth: float | None   → percent, one decimal
#     - speed_change: float | None    → percent, one decimal
#     - trend: Trend
#
# FUNCTIONS:
# ----------
# - percent_change(latest, previous) -> float | None
#     None when previous == 0 (undefined growth, never inf/NaN).
# - growth_metrics(month_buckets) -> GrowthMetrics | None
#     None when fewer than two months exist.
# - weather_impact(weather_buckets, baseline="clear") -> list[dict]
# - congestion_level(avg_occupancy) -> str
# - volume_level(volume) -> str
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .bucket import AggregateBucket, round_fixed


class Trend(Enum):
    """Direction of month-over-month volume change."""
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    UNDEFINED = "undefined"


@dataclass
class GrowthMetrics:
    """
    Change between the two most recent months.
    """

    latest_month: str
    previous_month: str
    volume_growth: Optional[float]
    speed_change: Optional[float]
    trend: Trend

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latest_month": self.latest_month,
            "previous_month": self.previous_month,
            "volume_growth": self.volume_growth,
            "speed_change": self.speed_change,
            "trend": self.trend.value,
        }


def percent_change(latest: float, previous: float) -> Optional[float]:
    """
    Percentage change from previous to latest, rounded to one decimal.

    Returns:
        None when previous is zero
    """
    if previous == 0:
        return None
    return round_fixed((latest - previous) * 100 / previous, 1)


def growth_metrics(month_buckets: Dict[str, AggregateBucket]) -> Optional[GrowthMetrics]:
    """
    Compare the latest month against the one before it.

    Args:
        month_buckets: Result of TrafficAggregator.by_month (sorted ascending)

    Returns:
        GrowthMetrics, or None with fewer than two months of data
    """
    if len(month_buckets) < 2:
        return None

    keys = sorted(month_buckets)
    previous = month_buckets[keys[-2]]
    latest = month_buckets[keys[-1]]

    volume_growth = percent_change(latest.avg_volume, previous.avg_volume)
    speed_change = percent_change(latest.avg_speed, previous.avg_speed)

    if volume_growth is None:
        trend = Trend.UNDEFINED
    elif volume_growth > 0:
        trend = Trend.INCREASING
    elif volume_growth < 0:
        trend = Trend.DECREASING
    else:
        trend = Trend.STABLE

    return GrowthMetrics(
        latest_month=latest.key,
        previous_month=previous.key,
        volume_growth=volume_growth,
        speed_change=speed_change,
        trend=trend,
    )


def weather_impact(
    weather_buckets: Dict[str, AggregateBucket],
    baseline: str = "clear"
) -> List[Dict[str, Any]]:
    """
    Percent difference of each weather condition against the baseline.

    Args:
        weather_buckets: Result of TrafficAggregator.by_weather
        baseline: Weather condition to compare against

    Returns:
        One row per condition with volume_impact / speed_impact added;
        empty when the baseline condition is absent
    """
    reference = weather_buckets.get(baseline)
    if reference is None:
        return []

    rows = []
    for bucket in weather_buckets.values():
        row = bucket.to_dict("weather")
        row["volume_impact"] = percent_change(bucket.avg_volume, reference.avg_volume)
        row["speed_impact"] = percent_change(bucket.avg_speed, reference.avg_speed)
        rows.append(row)
    return rows


def congestion_level(avg_occupancy: float) -> str:
    if avg_occupancy > 80:
        return "Congested"
    if avg_occupancy > 60:
        return "Moderate"
    return "Free Flow"


def volume_level(volume: float) -> str:
    if volume > 100:
        return "High"
    if volume > 50:
        return "Medium"
    return "Low"
