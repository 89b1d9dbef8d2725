import logging
from collections import Counter
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from traffic_dashboard.exceptions import RecordValidationError
from .field_normalizer import FieldNormalizer
from .traffic_record import (
    TrafficRecord,
    DEFAULT_LOCATION,
    DEFAULT_WEATHER,
    DEFAULT_ROAD_TYPE,
)
from .value_parser import ValueParser


logger = logging.getLogger(__name__)


class RecordNormalizer:
    def __init__(
        self,
        field_normalizer: Optional[FieldNormalizer] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.field_normalizer = field_normalizer or FieldNormalizer()
        self.value_parser = ValueParser
        self.clock = clock or datetime.now
        # field name -> cells that fell back to the default in the last batch
        self.coercion_failures: Counter = Counter()

    def normalize(self, raw_row: Dict[str, str], index: int) -> TrafficRecord:
        if not isinstance(raw_row, dict):
            raise ValueError("Row must be a dictionary")

        row = self.field_normalizer.normalize_row(raw_row)
        timestamp = self._resolve_timestamp(row, index)

        return TrafficRecord(
            id=self._text(row, "id", f"parsed-{index}"),
            timestamp=timestamp,
            volume=self._non_negative(row, "volume", self.value_parser.parse_int, 0),
            speed=self._non_negative(row, "speed", self.value_parser.parse_float, 0.0),
            occupancy=self._number(row, "occupancy", self.value_parser.parse_float, 0.0),
            location=self._text(row, "location", DEFAULT_LOCATION),
            weather=self._text(row, "weather", DEFAULT_WEATHER),
            temperature=self._number(row, "temperature", self.value_parser.parse_float, None),
            visibility=self._number(row, "visibility", self.value_parser.parse_float, None),
            road_type=self._text(row, "road_type", DEFAULT_ROAD_TYPE),
            is_holiday=self.value_parser.parse_flag(row.get("is_holiday")),
        )

    def normalize_batch(self, rows: Iterable[Dict[str, str]]) -> List[TrafficRecord]:
        self.coercion_failures = Counter()
        return [self.normalize(row, index) for index, row in enumerate(rows)]

    def _resolve_timestamp(self, row: Dict[str, str], index: int) -> datetime:
        raw_timestamp = row.get("timestamp", "").strip()
        raw_date = row.get("date", "").strip()
        raw_time = row.get("time", "").strip()

        if raw_timestamp:
            candidate = raw_timestamp
        elif raw_date:
            candidate = f"{raw_date} {raw_time}".strip()
        else:
            return self.clock()

        parsed = self.value_parser.parse_datetime(candidate)
        if parsed is None:
            raise RecordValidationError(index, candidate)
        return parsed

    def _text(self, row: Dict[str, str], key: str, default: str) -> str:
        value = row.get(key, "").strip()
        return value or default

    def _number(self, row: Dict[str, str], key: str, parse, default):
        raw = row.get(key)
        if self.value_parser.is_blank(raw):
            return default
        parsed = parse(raw)
        if parsed is None:
            self._record_failure(key, raw)
            return default
        return parsed

    def _non_negative(self, row: Dict[str, str], key: str, parse, default):
        value = self._number(row, key, parse, default)
        if value < 0:
            self._record_failure(key, row.get(key))
            return default
        return value

    def _record_failure(self, key: str, raw: Optional[str]) -> None:
        self.coercion_failures[key] += 1
        logger.debug("Could not coerce %s=%r, using default", key, raw)
