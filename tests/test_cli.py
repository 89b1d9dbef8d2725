# ==============================================
# Tests for the Command Line Interface
# ==============================================

import json

import pytest

from traffic_dashboard.cli import build_parser, main, run


def _run(dashboard, argv):
    args = build_parser().parse_args(argv)
    return run(args, dashboard)


class TestCli:
    def test_summary_from_file(self, dashboard, sample_csv, tmp_path, capsys):
        path = tmp_path / "traffic.csv"
        path.write_text(sample_csv, encoding="utf-8")

        assert _run(dashboard, ["--json", "summary", "--file", str(path)]) == 0

        out = capsys.readouterr().out
        payload = json.loads(out[out.index("{"):])
        assert payload["total_volume"] == 350
        assert payload["location_count"] == 2

    def test_analyze_prints_table(self, dashboard, capsys):
        assert _run(dashboard, ["analyze", "season"]) == 0
        out = capsys.readouterr().out
        assert "season" in out
        assert "Winter" in out

    def test_bad_file_exits_non_zero(self, dashboard, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("hello", encoding="utf-8")

        assert _run(dashboard, ["summary", "--file", str(path)]) == 1
        assert "✗" in capsys.readouterr().out

    def test_unknown_dimension_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["analyze", "planet"])

    def test_predict_via_main(self, capsys):
        assert main(["--json", "predict", "--date", "2024-01-16", "--time", "08:00"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert 50 <= payload["predicted"] <= 150
