import re
import math
from datetime import datetime
from typing import Optional


class ValueParser:
    NULL_VARIANTS = {"null", "none", "nil", "nan", "undefined", ""}
    TRUE_VALUE = "true"

    # Leading-number patterns: "45 mph" -> 45, "12.7" -> 12 (int), "1e3" -> 1 (int)
    INT_PREFIX = re.compile(r'^[+-]?\d+')
    FLOAT_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

    DATETIME_FORMATS = [
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%dT%H:%M:%S.%fZ",
        "%Y-%m-%dT%H:%MZ",
        "%Y-%m-%d %H:%M:%S",
        "%Y-%m-%d %H:%M:%S.%f",
        "%Y-%m-%d %H:%M",
        "%Y-%m-%d %I:%M %p",
        "%Y-%m-%d %I:%M:%S %p",
        "%Y-%m-%d",
        "%Y/%m/%d %H:%M:%S",
        "%Y/%m/%d %H:%M",
        "%Y/%m/%d",
        "%m/%d/%Y %H:%M:%S",
        "%m/%d/%Y %H:%M",
        "%m/%d/%Y %I:%M %p",
        "%m/%d/%Y",
    ]

    @classmethod
    def is_blank(cls, value: Optional[str]) -> bool:
        return value is None or value.strip().lower() in cls.NULL_VARIANTS

    @classmethod
    def parse_int(cls, value: Optional[str]) -> Optional[int]:
        if cls.is_blank(value):
            return None
        match = cls.INT_PREFIX.match(value.strip())
        if not match:
            return None
        return int(match.group(0))

    @classmethod
    def parse_float(cls, value: Optional[str]) -> Optional[float]:
        if cls.is_blank(value):
            return None
        match = cls.FLOAT_PREFIX.match(value.strip())
        if not match:
            return None
        try:
            parsed = float(match.group(0))
        except (ValueError, OverflowError):
            return None
        if not math.isfinite(parsed):
            return None
        return parsed

    @classmethod
    def parse_flag(cls, value: Optional[str]) -> bool:
        if value is None:
            return False
        return value.strip().lower() == cls.TRUE_VALUE

    @classmethod
    def parse_datetime(cls, value: Optional[str]) -> Optional[datetime]:
        if cls.is_blank(value):
            return None
        value = value.strip()

        for fmt in cls.DATETIME_FORMATS:
            try:
                return datetime.strptime(value, fmt)
            except ValueError:
                continue

        # ISO 8601 with offsets, e.g. "2024-01-15T08:00:00+02:00"
        iso_value = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            parsed = datetime.fromisoformat(iso_value)
        except ValueError:
            return None
        # Wall-clock time as written; the offset is dropped
        return parsed.replace(tzinfo=None)
