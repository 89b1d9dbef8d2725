# ==============================================
# Tests for CSV Ingestion
# ==============================================
#
# TEST CASES:
# -----------
# - TestReadRows  → pandas-backed structural parsing
# - TestParseText → rows all the way to TrafficRecords
# - TestLoadFile  → extension check, decoding, byte-order mark
#
# ==============================================

import pytest

from traffic_dashboard.config import IngestionConfig
from traffic_dashboard.exceptions import (
    EmptyDatasetError,
    RecordValidationError,
    StructuralParseError,
    TrafficDashboardError,
    UnsupportedFileError,
)
from traffic_dashboard.ingestion import CsvIngestor


@pytest.fixture
def ingestor(normalizer) -> CsvIngestor:
    return CsvIngestor(normalizer=normalizer)


class TestReadRows:
    def test_cells_stay_text(self, ingestor, sample_csv):
        rows = ingestor.read_rows(sample_csv)
        assert len(rows) == 3
        assert rows[0]["volume"] == "120"
        assert rows[2]["location"] == "Interstate 5"

    @pytest.mark.parametrize("text", ["", "   \n\n", None])
    def test_empty_input(self, ingestor, text):
        with pytest.raises(EmptyDatasetError):
            ingestor.read_rows(text)

    def test_header_only(self, ingestor):
        with pytest.raises(EmptyDatasetError):
            ingestor.read_rows("timestamp,volume\n")

    def test_blank_lines_skipped(self, ingestor):
        text = "timestamp,volume\n2024-01-15 08:00:00,10\n\n2024-01-15 09:00:00,20\n"
        assert len(ingestor.read_rows(text)) == 2

    def test_short_row_padded_with_empty_text(self, ingestor):
        rows = ingestor.read_rows("timestamp,volume,speed\n2024-01-15 08:00:00,10\n")
        assert rows[0]["speed"] == ""

    def test_extra_fields_fail_whole_upload(self, ingestor):
        text = "timestamp,volume\n2024-01-15 08:00:00,10\n2024-01-15 09:00:00,20,99\n"
        with pytest.raises(StructuralParseError) as exc_info:
            ingestor.read_rows(text)
        assert str(exc_info.value).startswith("CSV parsing error:")

    def test_extra_field_on_every_row(self, ingestor):
        """A consistent extra column must not shift cells under the wrong headers."""
        text = (
            "timestamp,volume\n"
            "2024-01-15 08:00:00,10,99\n"
            "2024-01-15 09:00:00,20,98\n"
        )
        with pytest.raises(StructuralParseError):
            ingestor.read_rows(text)

    def test_extra_field_on_single_row_file(self, ingestor):
        with pytest.raises(StructuralParseError):
            ingestor.parse_text("location,volume\nHighway 101,120,7\n")

    def test_unterminated_quote(self, ingestor):
        text = 'timestamp,location\n2024-01-15 08:00:00,"Highway 101\n'
        with pytest.raises(StructuralParseError):
            ingestor.read_rows(text)

    def test_custom_delimiter(self, normalizer):
        ingestor = CsvIngestor(IngestionConfig(delimiter=";"), normalizer)
        rows = ingestor.read_rows("timestamp;volume\n2024-01-15 08:00:00;10\n")
        assert rows == [{"timestamp": "2024-01-15 08:00:00", "volume": "10"}]


class TestParseText:
    def test_records_in_row_order(self, ingestor, sample_csv):
        records = ingestor.parse_text(sample_csv)
        assert [r.volume for r in records] == [120, 80, 150]
        assert records[2].weather == "rain"

    def test_short_row_numeric_defaults(self, ingestor):
        records = ingestor.parse_text("timestamp,volume,speed\n2024-01-15 08:00:00,10\n")
        assert records[0].speed == 0.0

    def test_invalid_timestamp_propagates(self, ingestor):
        with pytest.raises(RecordValidationError):
            ingestor.parse_text("timestamp,volume\nnever,10\n")

    def test_errors_share_base_class(self, ingestor):
        with pytest.raises(TrafficDashboardError):
            ingestor.parse_text("")


class TestLoadFile:
    def test_load_csv_file(self, ingestor, sample_csv, tmp_path):
        path = tmp_path / "traffic.csv"
        path.write_text(sample_csv, encoding="utf-8")
        assert len(ingestor.load_file(path)) == 3

    def test_byte_order_mark_is_ignored(self, ingestor, sample_csv, tmp_path):
        path = tmp_path / "export.CSV"
        path.write_text("\ufeff" + sample_csv, encoding="utf-8")
        records = ingestor.load_file(path)
        assert records[0].location == "Highway 101"
        assert records[0].hour == 8

    def test_rejects_other_extensions(self, ingestor, sample_csv, tmp_path):
        path = tmp_path / "traffic.txt"
        path.write_text(sample_csv, encoding="utf-8")
        with pytest.raises(UnsupportedFileError):
            ingestor.load_file(path)

    def test_undecodable_bytes(self, ingestor, tmp_path):
        path = tmp_path / "binary.csv"
        path.write_bytes(b"timestamp,volume\n\xff\xfe\xfa,1\n")
        with pytest.raises(StructuralParseError):
            ingestor.load_file(path)
