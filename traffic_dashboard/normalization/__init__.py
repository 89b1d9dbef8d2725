# ==============================================
# NORMALIZATION
# ==============================================
#
# This package turns raw CSV rows (header -> cell text) into
# canonical TrafficRecord objects BEFORE anything is aggregated.
#
# Modules:
# --------
# - field_normalizer.py  → Resolve header spellings to canonical field names
# - value_parser.py      → Lenient number / flag / timestamp parsing
# - traffic_record.py    → The TrafficRecord dataclass and calendar helpers
# - record_normalizer.py → Normalize a full row with defaults and derived fields
#
# ==============================================

from .field_normalizer import FieldNormalizer
from .value_parser import ValueParser
from .traffic_record import TrafficRecord, DAYS_OF_WEEK, SEASONS
from .record_normalizer import RecordNormalizer

__all__ = [
    "FieldNormalizer",
    "ValueParser",
    "TrafficRecord",
    "DAYS_OF_WEEK",
    "SEASONS",
    "RecordNormalizer",
]
