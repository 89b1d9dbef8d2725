"""
Synthetic traffic data for demos and for running the dashboard
before a file has been uploaded.

Readings are hourly, going back from ``now``, with a morning and an
evening rush, quieter nights and lighter weekends. Rows are built as raw
CSV-style dictionaries and passed through the RecordNormalizer, so sample
records obey exactly the same rules as uploaded ones.
"""

import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from traffic_dashboard.normalization import RecordNormalizer, TrafficRecord


SAMPLE_LOCATIONS = ["Highway 101", "Interstate 5", "Route 280", "Highway 85", "Interstate 880"]
SAMPLE_WEATHER = ["clear", "cloudy", "rain", "fog"]


def base_volume(hour: int, is_weekend: bool) -> float:
    """Typical vehicle count for an hour of the day."""
    if 7 <= hour <= 9:
        volume = 120.0
    elif 17 <= hour <= 19:
        volume = 110.0
    elif 10 <= hour <= 16:
        volume = 80.0
    elif hour >= 22 or hour <= 5:
        volume = 20.0
    else:
        volume = 50.0

    if is_weekend:
        volume *= 0.7
    return volume


def generate_sample_rows(
    count: int = 1000,
    now: Optional[datetime] = None,
    seed: Optional[int] = None
) -> List[Dict[str, str]]:
    """
    Build raw rows, one per hour going back from now.

    Args:
        count: Number of rows
        now: Timestamp of the newest row (defaults to the current hour)
        seed: Seed for reproducible output

    Returns:
        Rows keyed like a CSV header, newest first
    """
    rng = random.Random(seed)
    now = now or datetime.now().replace(minute=0, second=0, microsecond=0)
    rows = []

    for i in range(count):
        timestamp = now - timedelta(hours=i)
        is_weekend = timestamp.weekday() >= 5

        volume = round(base_volume(timestamp.hour, is_weekend) + (rng.random() - 0.5) * 30)
        speed = round(65 - (volume / 150) * 30 + (rng.random() - 0.5) * 10)
        occupancy = round((volume / 150) * 100 + (rng.random() - 0.5) * 20)

        rows.append({
            "id": f"traffic-{i}",
            "timestamp": timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "volume": str(max(0, volume)),
            "speed": str(max(25, min(80, speed))),
            "occupancy": str(max(0, min(100, occupancy))),
            "location": rng.choice(SAMPLE_LOCATIONS),
            "weather": rng.choice(SAMPLE_WEATHER),
            "temperature": str(round(60 + (rng.random() - 0.5) * 40)),
            "visibility": str(round(8 + rng.random() * 2)),
            "roadType": "highway",
            "isHoliday": "true" if rng.random() < 0.05 else "false",
        })

    return rows


def generate_sample_data(
    count: int = 1000,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
    normalizer: Optional[RecordNormalizer] = None
) -> List[TrafficRecord]:
    """
    Sample rows normalized into records, newest first.
    """
    normalizer = normalizer or RecordNormalizer()
    return normalizer.normalize_batch(generate_sample_rows(count, now, seed))
