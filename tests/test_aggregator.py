# ==============================================
# Tests for TrafficAggregator
# ==============================================
#
# TEST CASES:
# -----------
# - TestBuckets        → running totals and rounding
# - TestDimensions     → fixed-shape vs data-driven grouping
# - TestDashboardViews → summary, heatmap, time series, peaks
#
# ==============================================

from datetime import datetime

import pytest

from traffic_dashboard.analysis import (
    AggregateBucket,
    Dimension,
    LocationBucket,
    TrafficAggregator,
    round_fixed,
    round_half_up,
)


@pytest.fixture
def aggregator() -> TrafficAggregator:
    return TrafficAggregator()


class TestBuckets:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2

    def test_round_fixed_halves_away_from_zero(self):
        assert round_fixed(0.25) == 0.3
        assert round_fixed(-0.25) == -0.3
        assert round_fixed(45.25) == 45.3
        assert round_fixed(-0.01) == 0.0

    def test_empty_bucket_averages_are_zero(self):
        bucket = AggregateBucket(key=3)
        assert bucket.avg_volume == 0
        assert bucket.avg_speed == 0
        assert bucket.avg_occupancy == 0

    def test_update_and_means(self, make_record):
        bucket = AggregateBucket(key="x")
        bucket.update(make_record(volume=1, speed=40.0, occupancy=10.0))
        bucket.update(make_record(volume=2, speed=45.0, occupancy=11.0))
        assert bucket.count == 2
        assert bucket.volume_sum == 3
        assert bucket.avg_volume == 2
        assert bucket.avg_speed == 43
        assert bucket.avg_occupancy == 11

    def test_location_peak_keeps_first_maximum(self, make_record):
        bucket = LocationBucket(key="Highway 101")
        bucket.update(make_record("2024-01-15 07:00:00", volume=50))
        bucket.update(make_record("2024-01-15 08:00:00", volume=90))
        bucket.update(make_record("2024-01-15 09:00:00", volume=90))
        assert bucket.peak_volume == 90
        assert bucket.peak_time == "08:00"

    def test_location_peak_set_by_zero_volume(self, make_record):
        bucket = LocationBucket(key="Route 280")
        bucket.update(make_record("2024-01-15 03:15:00", volume=0))
        assert bucket.peak_volume == 0
        assert bucket.peak_time == "03:15"

    def test_to_dict_shape(self, make_record):
        bucket = LocationBucket(key="Highway 101")
        bucket.update(make_record(volume=10))
        row = bucket.to_dict()
        assert row["location"] == "Highway 101"
        assert row["total_volume"] == 10
        assert row["peak_volume"] == 10
        assert row["count"] == 1


class TestDimensions:
    def test_hour_buckets_always_24(self, aggregator):
        buckets = aggregator.by_hour([])
        assert list(buckets) == list(range(24))
        assert all(b.count == 0 and b.avg_volume == 0 for b in buckets.values())

    def test_fixed_shape_dimensions_on_empty_input(self, aggregator):
        assert list(aggregator.by_day_of_week([])) == [
            "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
        ]
        assert list(aggregator.by_season([])) == ["Winter", "Spring", "Summer", "Fall"]

    def test_data_driven_dimensions_on_empty_input(self, aggregator):
        assert aggregator.by_location([]) == {}
        assert aggregator.by_weather([]) == {}
        assert aggregator.by_month([]) == {}

    def test_hour_eight_average(self, aggregator, make_record):
        records = [
            make_record("2024-01-15 08:00:00", volume=120),
            make_record("2024-01-15 08:30:00", volume=80),
        ]
        bucket = aggregator.by_hour(records)[8]
        assert bucket.count == 2
        assert bucket.avg_volume == 100

    @pytest.mark.parametrize("dimension", list(Dimension))
    def test_counts_are_conserved(self, aggregator, make_record, dimension):
        records = [
            make_record("2024-01-15 08:00:00", location="A", weather="rain"),
            make_record("2024-03-02 17:00:00", location="B"),
            make_record("2024-07-04 23:00:00", location="A", weather="fog"),
        ]
        buckets = aggregator.aggregate(records, dimension)
        assert sum(b.count for b in buckets.values()) == len(records)
        assert sum(b.volume_sum for b in buckets.values()) == sum(r.volume for r in records)

    def test_months_sorted_ascending(self, aggregator, make_record):
        records = [
            make_record("2024-03-01 08:00:00"),
            make_record("2023-12-01 08:00:00"),
            make_record("2024-01-01 08:00:00"),
        ]
        assert list(aggregator.by_month(records)) == ["2023-12", "2024-01", "2024-03"]

    def test_rows_carry_labels(self, aggregator, make_record):
        records = [make_record("2024-01-15 08:00:00")]
        hour_rows = aggregator.to_rows(aggregator.by_hour(records), Dimension.HOUR)
        day_rows = aggregator.to_rows(aggregator.by_day_of_week(records), Dimension.DAY_OF_WEEK)

        assert hour_rows[8]["hour"] == 8
        assert hour_rows[8]["label"] == "8:00"
        assert day_rows[1]["day"] == "Monday"
        assert day_rows[1]["label"] == "Mon"
        assert day_rows[1]["count"] == 1


class TestDashboardViews:
    def test_summary_of_empty_dataset(self, aggregator):
        summary = aggregator.summary_stats([])
        assert summary == {
            "total_volume": 0,
            "avg_speed": 0.0,
            "peak_time": "N/A",
            "location_count": 0,
            "record_count": 0,
        }

    def test_summary_stats(self, aggregator, make_record):
        records = [
            make_record("2024-01-15 08:00:00", volume=100, speed=45.0, location="A"),
            make_record("2024-01-15 09:00:00", volume=100, speed=50.0, location="B"),
            make_record("2024-01-15 10:00:00", volume=20, speed=52.0, location="A"),
        ]
        summary = aggregator.summary_stats(records)
        assert summary["total_volume"] == 220
        assert summary["avg_speed"] == 49.0
        assert summary["peak_time"] == "09:00"
        assert summary["location_count"] == 2

    def test_summary_speed_rounds_half_up(self, aggregator, make_record):
        records = [make_record(speed=45.0), make_record(speed=45.5)]
        assert aggregator.summary_stats(records)["avg_speed"] == 45.3

    def test_heatmap(self, aggregator, make_record):
        records = [
            make_record("2024-01-15 08:00:00", volume=120),
            make_record("2024-01-15 08:45:00", volume=80),
        ]
        grid = aggregator.heatmap(records)
        assert len(grid) == 7
        assert all(len(row) == 24 for row in grid)
        assert grid[1][8] == 100
        assert sum(sum(row) for row in grid) == 100

    def test_time_series_windows(self, aggregator, make_record, fixed_now):
        records = [
            make_record("2024-01-15 08:00:00", volume=100),
            make_record("2024-01-10 08:00:00", volume=50),
            make_record("2023-12-01 08:00:00", volume=10),
        ]
        day = aggregator.time_series(records, "24h", now=fixed_now)
        week = aggregator.time_series(records, "7d", now=fixed_now)
        month = aggregator.time_series(records, "30d", now=fixed_now)

        assert day == [{"time": "8:00", "volume": 100, "speed": 50, "occupancy": 40}]
        assert week[0]["volume"] == 75
        assert month == week

    def test_time_series_unknown_range(self, aggregator):
        with pytest.raises(ValueError):
            aggregator.time_series([], "1y", now=datetime(2024, 1, 1))

    def test_peak_hours_prefers_earlier_hour_on_ties(self, aggregator, make_record):
        records = [
            make_record("2024-01-15 17:00:00", volume=90),
            make_record("2024-01-15 08:00:00", volume=90),
            make_record("2024-01-15 12:00:00", volume=30),
        ]
        peaks = aggregator.peak_hours(aggregator.by_hour(records), 2)
        assert [b.key for b in peaks] == [8, 17]

    def test_recent_activity(self, aggregator, make_record):
        records = [make_record(f"2024-01-15 {hour:02d}:00:00", volume=hour) for hour in range(15)]
        recent = aggregator.recent_activity(records, 10)
        assert len(recent) == 10
        assert recent[0].volume == 14
        assert recent[-1].volume == 5

    def test_average_temperature(self, aggregator, make_record):
        records = [
            make_record(temperature=60.0),
            make_record(temperature=None),
            make_record(temperature=65.0),
        ]
        assert len(aggregator.temperature_points(records)) == 2
        assert aggregator.average_temperature(records) == 63
        assert aggregator.average_temperature([]) is None
