"""End-to-end tests for the command-line pipeline and the data generator."""

from __future__ import annotations

import datetime
import logging
from unittest.mock import patch

import pytest

import pipeline
from src.analysis.entries import normalize
from src.scripts.generate_test_data import format_date, generate_rows, write_rows
from src.extraction.loader import fetch_rows


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep the pipeline from installing file handlers during tests."""
    with patch("pipeline.setup_logging", return_value=logging.getLogger("test.pipeline")):
        yield


class TestPipeline:
    def test_builds_every_option(self, tmp_path, sample_csv, capsys) -> None:
        out = tmp_path / "docs"
        assert pipeline.main(["--data", sample_csv, "--output-dir", str(out)]) == 0
        for folder in ["All", "A", "B"]:
            assert (out / folder / "games_donut.png").exists()
        assert "3 filter options" in capsys.readouterr().out

    def test_single_participant(self, tmp_path, sample_csv) -> None:
        out = tmp_path / "docs"
        pipeline.main(["--data", sample_csv, "--output-dir", str(out), "--participant", "A"])
        assert (out / "A" / "summary.txt").exists()
        assert not (out / "B").exists()

    def test_missing_dataset_renders_placeholders(self, tmp_path) -> None:
        out = tmp_path / "docs"
        assert pipeline.main(["--data", str(tmp_path / "missing.csv"), "--output-dir", str(out)]) == 0
        assert "Unable to load data" in (out / "All" / "summary.txt").read_text()

    def test_corrupt_workbook_renders_placeholders(self, tmp_path) -> None:
        data = tmp_path / "log.xlsx"
        data.write_bytes(b"PK\x03\x04garbage")
        out = tmp_path / "docs"
        assert pipeline.main(["--data", str(data), "--output-dir", str(out)]) == 0
        assert "Unable to load data" in (out / "All" / "summary.txt").read_text()

    def test_show_opens_dashboard(self, sample_csv) -> None:
        with patch("pipeline.show_dashboard") as show:
            pipeline.main(["--data", sample_csv, "--show", "--participant", "B"])
        entries, participant = show.call_args.args
        assert participant == "B"
        assert len(entries) == 3
        assert show.call_args.kwargs["load_failed"] is False

    def test_show_after_load_failure(self, tmp_path) -> None:
        with patch("pipeline.show_dashboard") as show:
            pipeline.main(["--data", str(tmp_path / "missing.csv"), "--show"])
        assert show.call_args.args == ([], "All")
        assert show.call_args.kwargs["load_failed"] is True


class TestGenerateTestData:
    def test_format_date_has_no_leading_zeros(self) -> None:
        assert format_date(datetime.date(2025, 1, 5)) == "1/5/2025"

    def test_seeded_output_is_reproducible(self) -> None:
        start = datetime.date(2025, 1, 1)
        assert generate_rows(start, days=10, seed=3) == generate_rows(start, days=10, seed=3)

    def test_generated_rows_normalize_cleanly(self, tmp_path) -> None:
        rows = generate_rows(datetime.date(2025, 1, 1), days=14, seed=7)
        path = write_rows(rows, str(tmp_path / "puzzles.csv"))
        entries = normalize(fetch_rows(path))
        assert len(entries) == len(rows)
        assert all(datetime.date(2025, 1, 1) <= e.date <= datetime.date(2025, 1, 14) for e in entries)
