# ==============================================
# ANALYSIS & AGGREGATION
# ==============================================
#
# This package folds canonical records into grouped statistics
# for the dashboard charts.
#
# Two-step process:
#   Step 1 (Fold):     Scan records once → running totals per key
#   Step 2 (Finalize): Running totals → rounded means / chart rows
#
# Modules:
# --------
# - bucket.py      → AggregateBucket / LocationBucket running totals
# - aggregator.py  → TrafficAggregator: one fold per dimension + views
# - trends.py      → Growth, weather impact and traffic-level labels
#
# ==============================================

from .bucket import AggregateBucket, LocationBucket, round_fixed, round_half_up
from .aggregator import TrafficAggregator, Dimension, TIME_RANGES
from .trends import (
    GrowthMetrics,
    Trend,
    growth_metrics,
    percent_change,
    weather_impact,
    congestion_level,
    volume_level,
)

__all__ = [
    "AggregateBucket",
    "LocationBucket",
    "round_half_up",
    "round_fixed",
    "TrafficAggregator",
    "Dimension",
    "TIME_RANGES",
    "GrowthMetrics",
    "Trend",
    "growth_metrics",
    "percent_change",
    "weather_impact",
    "congestion_level",
    "volume_level",
]
