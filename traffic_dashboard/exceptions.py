# ==============================================
# Exceptions
# ==============================================
#
# PURPOSE:
#   One hierarchy for every failure the dashboard core can surface.
#   Callers catch TrafficDashboardError to handle any of them.
#
# CLASSES:
# --------
# - TrafficDashboardError         → base class
# - StructuralParseError          → CSV text is not valid tabular data
# - EmptyDatasetError             → no header or no data rows
# - UnsupportedFileError          → upload is not a .csv file
# - RecordValidationError         → a row's timestamp cannot be parsed
# - SimulationConfigError         → invalid training configuration
#
# NOTE:
#   A single cell that fails numeric coercion is NOT an error.
#   The normalizer replaces it with the field default.
#
# ==============================================

from typing import Optional


class TrafficDashboardError(Exception):
    """Base exception for the traffic dashboard core."""
    pass


class StructuralParseError(TrafficDashboardError):
    """Raised when uploaded text cannot be parsed as delimited tabular data."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        super().__init__(f"CSV parsing error: {message}")


class EmptyDatasetError(TrafficDashboardError):
    """Raised when the upload contains no data rows."""
    pass


class UnsupportedFileError(TrafficDashboardError):
    """Raised when a file other than a CSV file is uploaded."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"Please upload a CSV file (got '{filename}')")


class RecordValidationError(TrafficDashboardError, ValueError):
    """Raised when a row's timestamp does not resolve to a valid date."""

    def __init__(self, index: int, value: str):
        self.index = index
        self.value = value
        super().__init__(f"Row {index}: invalid timestamp '{value}'")


class SimulationConfigError(TrafficDashboardError, ValueError):
    """Raised for an invalid model training configuration."""
    pass
