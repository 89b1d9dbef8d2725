# ==============================================
# CsvIngestor
# ==============================================
#
# PURPOSE:
#   The ingestion boundary. Turns uploaded CSV text into raw rows
#   (header -> cell text) and hands them to the RecordNormalizer.
#
# WHY THIS CLASS EXISTS:
#   Structural problems (unterminated quotes, rows with more cells
#   than the header, undecodable bytes) must fail the WHOLE upload
#   before a single row is normalized. Cell-level problems must not.
#   Keeping the structural parse here lets the normalizer assume it
#   always gets a well-formed mapping.
#
# CLASS: CsvIngestor
# ------------------
#   Constructor:
#   ------------
#   - __init__(config: IngestionConfig | None, normalizer: RecordNormalizer | None)
#
#   Methods:
#   --------
#   - read_rows(text: str) -> list[dict[str, str]]
#       pandas.read_csv with every cell kept as text. Blank lines are
#       skipped; short rows are padded with "".
#       Raises StructuralParseError / EmptyDatasetError.
#
#   - parse_text(text: str) -> list[TrafficRecord]
#       read_rows() + RecordNormalizer.normalize_batch()
#
#   - load_file(path) -> list[TrafficRecord]
#       Check the .csv extension, decode the file, parse_text().
#
# ==============================================

import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from traffic_dashboard.config import IngestionConfig
from traffic_dashboard.exceptions import (
    EmptyDatasetError,
    StructuralParseError,
    TrafficDashboardError,
    UnsupportedFileError,
)
from traffic_dashboard.normalization import RecordNormalizer, TrafficRecord


logger = logging.getLogger(__name__)


class CsvIngestor:
    """
    Parses delimiter-separated text into canonical traffic records.
    """

    SUPPORTED_EXTENSION = ".csv"

    def __init__(
        self,
        config: Optional[IngestionConfig] = None,
        normalizer: Optional[RecordNormalizer] = None
    ):
        """
        Initialize the ingestor.

        Args:
            config: Optional ingestion settings (delimiter, encoding)
            normalizer: Optional RecordNormalizer. If not provided,
                        a new one will be created.
        """
        self.config = config or IngestionConfig()
        self.normalizer = normalizer or RecordNormalizer()

    def read_rows(self, text: str) -> List[Dict[str, str]]:
        """
        Parse CSV text into raw rows, one dict per data line.

        Args:
            text: Full file contents including the header row

        Returns:
            List of {header: cell text} dictionaries in file order

        Raises:
            EmptyDatasetError: No header, or a header with no data rows
            StructuralParseError: The text is not valid tabular data
        """
        if text is None or not text.strip():
            raise EmptyDatasetError("No data found in upload")

        try:
            frame = pd.read_csv(
                io.StringIO(text),
                sep=self.config.delimiter,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                on_bad_lines="error",
            )
        except pd.errors.EmptyDataError as e:
            raise EmptyDatasetError("No data found in upload") from e
        except pd.errors.ParserError as e:
            raise StructuralParseError(str(e)) from e

        if frame.empty:
            raise EmptyDatasetError("CSV file has a header but no data rows")

        # pandas turns a leading extra column into the index instead of failing
        if not isinstance(frame.index, pd.RangeIndex):
            raise StructuralParseError(
                f"data rows have more fields than the header ({len(frame.columns)} columns)"
            )

        # Rows shorter than the header come back as NaN
        frame = frame.fillna("")
        rows = frame.to_dict(orient="records")

        logger.debug("Read %d rows with columns %s", len(rows), list(frame.columns))
        return rows

    def parse_text(self, text: str) -> List[TrafficRecord]:
        """
        Parse CSV text all the way to normalized records.

        Args:
            text: Full file contents including the header row

        Returns:
            Records in input row order
        """
        rows = self.read_rows(text)
        records = self.normalizer.normalize_batch(rows)
        logger.info("Parsed %d traffic records", len(records))
        return records

    def load_file(self, path: Union[str, Path]) -> List[TrafficRecord]:
        """
        Read and parse a CSV file from disk.

        Args:
            path: Path to a .csv file

        Returns:
            Records in file order

        Raises:
            UnsupportedFileError: The file does not have a .csv extension
            StructuralParseError: The file cannot be decoded or parsed
            TrafficDashboardError: The file cannot be read
        """
        path = Path(path)
        if path.suffix.lower() != self.SUPPORTED_EXTENSION:
            raise UnsupportedFileError(path.name)

        try:
            text = path.read_text(encoding=self.config.encoding)
        except UnicodeDecodeError as e:
            raise StructuralParseError(f"{path.name} is not {self.config.encoding} text") from e
        except OSError as e:
            raise TrafficDashboardError(f"Could not read {path.name}: {e.strerror or e}") from e

        # Spreadsheet exports often start with a byte-order mark
        return self.parse_text(text.lstrip("\ufeff"))
