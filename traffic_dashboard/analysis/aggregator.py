# ==============================================
# TrafficAggregator
# ==============================================
#
# PURPOSE:
#   Fold a set of TrafficRecords into AggregateBuckets along one
#   grouping dimension. This is the engine behind every chart.
#
# WHY THIS CLASS EXISTS:
#   Location, hour, weekday, month, season and weather charts are all
#   the same fold with a different key function. One class owns the
#   fold so the six views cannot drift apart.
#
# CLASS: TrafficAggregator
# ------------------------
#   Stateless. Every call takes the full record set and scans it once.
#
#   Methods (one per dimension):
#   ----------------------------
#   - by_location(records)    -> {location: LocationBucket}   data-driven
#   - by_hour(records)        -> {0..23: AggregateBucket}     always 24 keys
#   - by_day_of_week(records) -> {"Sunday".."Saturday": ...}  always 7 keys
#   - by_month(records)       -> {"YYYY-MM": ...}             sorted ascending
#   - by_season(records)      -> {"Winter".."Fall": ...}      always 4 keys
#   - by_weather(records)     -> {weather: AggregateBucket}   data-driven
#   - aggregate(records, dimension) → dispatch to the above
#
#   Dashboard views:
#   ----------------
#   - to_rows(buckets, dimension) -> list[dict]   chart-ready rows
#   - summary_stats(records) -> dict
#   - heatmap(records) -> 7 x 24 matrix of mean volume
#   - time_series(records, time_range, now) -> list[dict]
#   - peak_hours(hour_buckets, n) -> list[AggregateBucket]
#   - recent_activity(records, limit) -> list[TrafficRecord]
#   - temperature_points(records) -> list[dict]
#
# EMPTY INPUT:
#   Never raises. Fixed-shape dimensions come back with count == 0 in
#   every bucket; data-driven dimensions come back as {}.
#
# ==============================================

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

from traffic_dashboard.normalization import TrafficRecord, DAYS_OF_WEEK, SEASONS
from .bucket import AggregateBucket, LocationBucket, round_fixed, round_half_up, safe_mean


class Dimension(Enum):
    """
    Grouping axes the aggregator understands.

    The value doubles as the key column name in chart rows.
    """
    LOCATION = "location"
    HOUR = "hour"
    DAY_OF_WEEK = "day"
    MONTH = "month"
    SEASON = "season"
    WEATHER = "weather"


TIME_RANGES = {
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}


class TrafficAggregator:
    """
    Computes grouped statistics over canonical traffic records.

    Holds no state between calls; identical input gives identical output.
    """

    def aggregate(
        self,
        records: Iterable[TrafficRecord],
        dimension: Dimension
    ) -> Dict[Any, AggregateBucket]:
        """
        Aggregate records along the given dimension.

        Args:
            records: Canonical records
            dimension: Grouping axis

        Returns:
            Mapping of group key → bucket
        """
        folds: Dict[Dimension, Callable[[Iterable[TrafficRecord]], Dict[Any, AggregateBucket]]] = {
            Dimension.LOCATION: self.by_location,
            Dimension.HOUR: self.by_hour,
            Dimension.DAY_OF_WEEK: self.by_day_of_week,
            Dimension.MONTH: self.by_month,
            Dimension.SEASON: self.by_season,
            Dimension.WEATHER: self.by_weather,
        }
        return folds[dimension](records)

    # ======================================
    # Dimensions
    # ======================================
    def by_location(self, records: Iterable[TrafficRecord]) -> Dict[str, LocationBucket]:
        return self._fold(records, lambda r: r.location, {}, LocationBucket)

    def by_hour(self, records: Iterable[TrafficRecord]) -> Dict[int, AggregateBucket]:
        buckets = {hour: AggregateBucket(key=hour) for hour in range(24)}
        return self._fold(records, lambda r: r.hour, buckets)

    def by_day_of_week(self, records: Iterable[TrafficRecord]) -> Dict[str, AggregateBucket]:
        buckets = {day: AggregateBucket(key=day) for day in DAYS_OF_WEEK}
        return self._fold(records, lambda r: r.day_of_week, buckets)

    def by_month(self, records: Iterable[TrafficRecord]) -> Dict[str, AggregateBucket]:
        buckets = self._fold(records, lambda r: r.month_key, {})
        return dict(sorted(buckets.items()))

    def by_season(self, records: Iterable[TrafficRecord]) -> Dict[str, AggregateBucket]:
        buckets = {season: AggregateBucket(key=season) for season in SEASONS}
        return self._fold(records, lambda r: r.season, buckets)

    def by_weather(self, records: Iterable[TrafficRecord]) -> Dict[str, AggregateBucket]:
        return self._fold(records, lambda r: r.weather, {})

    def _fold(
        self,
        records: Iterable[TrafficRecord],
        key_fn: Callable[[TrafficRecord], Any],
        buckets: Dict[Any, AggregateBucket],
        bucket_cls: Type[AggregateBucket] = AggregateBucket
    ) -> Dict[Any, AggregateBucket]:
        """
        Single pass over the records, creating buckets on first sight.

        Args:
            records: Records to scan
            key_fn: Extracts the group key from a record
            buckets: Pre-populated buckets (may be empty)
            bucket_cls: Bucket type for keys not pre-populated

        Returns:
            The same buckets mapping, updated in place
        """
        for record in records:
            key = key_fn(record)
            if key not in buckets:
                buckets[key] = bucket_cls(key=key)
            buckets[key].update(record)
        return buckets

    # ======================================
    # Chart rows
    # ======================================
    def to_rows(
        self,
        buckets: Dict[Any, AggregateBucket],
        dimension: Dimension
    ) -> List[Dict[str, Any]]:
        """
        Shape buckets as rows for direct chart consumption.

        Args:
            buckets: Result of one of the by_* methods
            dimension: The dimension the buckets were built on

        Returns:
            One dict per bucket, in bucket order
        """
        rows = []
        for bucket in buckets.values():
            row = bucket.to_dict(dimension.value)
            if dimension is Dimension.HOUR:
                row["label"] = f"{bucket.key}:00"
            elif dimension is Dimension.DAY_OF_WEEK:
                row["label"] = bucket.key[:3]
            rows.append(row)
        return rows

    # ======================================
    # Dashboard views
    # ======================================
    def summary_stats(self, records: List[TrafficRecord]) -> Dict[str, Any]:
        """
        Headline figures for the dashboard cards.

        The peak time is the time of the single highest-volume record;
        on ties the later record in the sequence wins.

        Args:
            records: Canonical records

        Returns:
            total_volume, avg_speed (one decimal), peak_time, location_count,
            record_count
        """
        total_volume = sum(r.volume for r in records)
        avg_speed = round_fixed(sum(r.speed for r in records) / len(records), 1) if records else 0.0

        peak_time = "N/A"
        if records:
            peak = records[0]
            for record in records[1:]:
                if not peak.volume > record.volume:
                    peak = record
            peak_time = peak.time

        return {
            "total_volume": total_volume,
            "avg_speed": avg_speed,
            "peak_time": peak_time,
            "location_count": len({r.location for r in records}),
            "record_count": len(records),
        }

    def heatmap(self, records: Iterable[TrafficRecord]) -> List[List[int]]:
        """
        Mean volume per (weekday, hour) cell.

        Returns:
            7 rows (Sunday first) of 24 rounded means; 0 where empty
        """
        totals = [[0] * 24 for _ in DAYS_OF_WEEK]
        counts = [[0] * 24 for _ in DAYS_OF_WEEK]

        for record in records:
            day = DAYS_OF_WEEK.index(record.day_of_week)
            totals[day][record.hour] += record.volume
            counts[day][record.hour] += 1

        return [
            [safe_mean(totals[day][hour], counts[day][hour]) for hour in range(24)]
            for day in range(len(DAYS_OF_WEEK))
        ]

    def time_series(
        self,
        records: Iterable[TrafficRecord],
        time_range: str = "24h",
        now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Hourly means for records inside a trailing window.

        Args:
            records: Canonical records
            time_range: One of "24h", "7d", "30d"
            now: End of the window (defaults to the current time)

        Returns:
            Rows of {time, volume, speed, occupancy} for hours that have
            data, in order of first appearance

        Raises:
            ValueError: Unknown time_range
        """
        if time_range not in TIME_RANGES:
            raise ValueError(f"Unknown time range '{time_range}', expected one of {sorted(TIME_RANGES)}")

        window = TIME_RANGES[time_range]
        now = now or datetime.now()

        in_window = (r for r in records if now - r.timestamp <= window)
        buckets = self._fold(in_window, lambda r: f"{r.hour}:00", {})

        return [
            {
                "time": key,
                "volume": bucket.avg_volume,
                "speed": bucket.avg_speed,
                "occupancy": bucket.avg_occupancy,
            }
            for key, bucket in buckets.items()
        ]

    def peak_hours(
        self,
        hour_buckets: Dict[int, AggregateBucket],
        n: int = 3
    ) -> List[AggregateBucket]:
        """
        The n busiest hours by mean volume (earlier hour first on ties).
        """
        ranked = sorted(hour_buckets.values(), key=lambda b: b.avg_volume, reverse=True)
        return ranked[:n]

    def recent_activity(
        self,
        records: Iterable[TrafficRecord],
        limit: int = 10
    ) -> List[TrafficRecord]:
        """Newest records first."""
        return sorted(records, key=lambda r: r.timestamp, reverse=True)[:limit]

    def temperature_points(self, records: Iterable[TrafficRecord]) -> List[Dict[str, Any]]:
        """Scatter points for records that carry a temperature."""
        return [
            {"temperature": r.temperature, "volume": r.volume, "speed": r.speed}
            for r in records
            if r.temperature is not None
        ]

    def average_temperature(self, records: Iterable[TrafficRecord]) -> Optional[int]:
        """Rounded mean temperature, or None when no record has one."""
        points = self.temperature_points(records)
        if not points:
            return None
        return round_half_up(sum(p["temperature"] for p in points) / len(points))
