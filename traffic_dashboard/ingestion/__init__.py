# ==============================================
# INGESTION
# ==============================================
#
# Boundary between uploaded files and the normalizer.
#
# Modules:
# --------
# - csv_ingestor.py → CSV text / file → raw rows → TrafficRecord list
#
# ==============================================

from .csv_ingestor import CsvIngestor

__all__ = ["CsvIngestor"]
