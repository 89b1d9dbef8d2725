# ==============================================
# FieldNormalizer
# ==============================================
#
# PURPOSE:
#   Convert CSV header names to the canonical keys the record
#   normalizer understands, so that "Volume", " volume " and
#   "VOLUME" all resolve to the same field.
#
# WHY THIS CLASS EXISTS:
#   Uploaded files come from different sensor exports and the same
#   logical column shows up under different spellings:
#     - "roadType", "RoadType", "road_type"
#     - "isHoliday", "is_holiday", "ISHOLIDAY"
#   Without one place that resolves these, every lookup in the
#   normalizer would need its own case handling.
#
# CLASS: FieldNormalizer
# ----------------------
#   Methods:
#   --------
#   - normalize(name: str) -> str | None
#       Lowercase + trim, then resolve aliases. Returns None for
#       columns that are not recognized.
#
#   - normalize_row(row: dict) -> dict
#       Re-key a raw row by canonical field name, dropping unknown
#       columns. When two headers resolve to the same field, the
#       first non-blank value wins.
#
# RULES:
# ------
#   1. Header matching is case-insensitive and whitespace-trimmed
#   2. roadtype | road_type       → road_type
#   3. isholiday | is_holiday     → is_holiday
#   4. Any other column is ignored
#
# ==============================================

from typing import Dict, Optional


class FieldNormalizer:
    """
    Resolves raw header names to canonical field names.
    Holds no state; the alias table is the only lookup.
    """

    RECOGNIZED_FIELDS = {
        "id": "id",
        "timestamp": "timestamp",
        "date": "date",
        "time": "time",
        "volume": "volume",
        "speed": "speed",
        "occupancy": "occupancy",
        "location": "location",
        "weather": "weather",
        "temperature": "temperature",
        "visibility": "visibility",
        "roadtype": "road_type",
        "road_type": "road_type",
        "isholiday": "is_holiday",
        "is_holiday": "is_holiday",
    }

    def normalize(self, name: str) -> Optional[str]:
        """
        Resolve a header name to its canonical field name.

        Args:
            name: Raw header name (e.g., " Volume", "roadType")

        Returns:
            Canonical field name (e.g., "volume", "road_type"), or None
            when the column is not recognized
        """
        if name is None:
            return None

        return self.RECOGNIZED_FIELDS.get(name.strip().lower())

    def normalize_row(self, row: Dict[str, Optional[str]]) -> Dict[str, str]:
        """
        Re-key a raw row by canonical field name.

        Args:
            row: Mapping of raw header → raw cell text

        Returns:
            Mapping of canonical field → cell text (unknown columns dropped)
        """
        normalized: Dict[str, str] = {}
        for key, value in row.items():
            canonical = self.normalize(key)
            if canonical is None or value is None:
                continue
            if normalized.get(canonical, "").strip():
                continue
            normalized[canonical] = value if isinstance(value, str) else str(value)
        return normalized
