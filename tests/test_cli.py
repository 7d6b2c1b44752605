"""Tests for the command line entry point."""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from stockchart.cli import build_settings, main, parse_args
from stockchart.models import Granularity, PriceShape


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """main() installs a root handler on the captured stream; drop it after each test."""
    yield
    logging.getLogger().handlers.clear()


def _write_quotes(tmp_path: Path) -> Path:
    path = tmp_path / "quotes.csv"
    path.write_text(
        "Date,Open,High,Low,Close,Volume\n"
        "2002-01-02,10,12,9,11,1000\n"
        "2002-01-03,11,13,10,12,1200\n"
        "2002-01-04,12,14,11,13,900\n"
        "2002-01-07,13,15,12,14,1100\n"
    )
    return path


class TestArguments:
    """Command line options override settings."""

    def test_overrides(self) -> None:
        args = parse_args(
            ["in.csv", "out.svg", "--by", "weeks", "--shape", "close", "--show-lines", "--heading", "Test"]
        )
        settings = build_settings(args)
        assert settings.dates.by is Granularity.WEEKLY_SLOT
        assert settings.price.shape is PriceShape.CLOSE
        assert settings.grid.show_lines
        assert settings.heading == "Test"

    def test_log_format_choices(self) -> None:
        assert parse_args(["in.csv", "out.svg", "--log-format", "json"]).log_format == "json"
        assert parse_args(["in.csv", "out.svg"]).log_format is None
        with pytest.raises(SystemExit):
            parse_args(["in.csv", "out.svg", "--log-format", "xml"])

    def test_no_overrides_keeps_defaults(self) -> None:
        settings = build_settings(parse_args(["in.csv", "out.svg"]))
        assert settings.dates.by is Granularity.RAW_DATA
        assert not settings.grid.show_lines


class TestMain:
    """Exit codes and output files."""

    def test_writes_chart(self, tmp_path: Path) -> None:
        output = tmp_path / "chart.svg"
        assert main([str(_write_quotes(tmp_path)), str(output), "--epic", "TEST"]) == 0
        assert output.exists()

    def test_json_logs(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        output = tmp_path / "chart.svg"
        assert main([str(_write_quotes(tmp_path)), str(output), "--log-format", "json"]) == 0

        lines = capsys.readouterr().err.splitlines()
        events = [json.loads(line)["event"] for line in lines if line.startswith("{")]
        assert "chart_saved" in events
        assert events[-1] == "chart_written"

    def test_weekly_chart(self, tmp_path: Path) -> None:
        output = tmp_path / "weekly.pdf"
        assert main([str(_write_quotes(tmp_path)), str(output), "--by", "weeks"]) == 0
        assert output.exists()

    def test_missing_input(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.csv"), str(tmp_path / "chart.svg")]) == 1

    def test_unusable_input(self, tmp_path: Path) -> None:
        path = tmp_path / "junk.csv"
        path.write_text("not,a,quote\nfile,at,all\n")
        assert main([str(path), str(tmp_path / "chart.svg")]) == 1

    def test_unsupported_output(self, tmp_path: Path) -> None:
        assert main([str(_write_quotes(tmp_path)), str(tmp_path / "chart.png")]) == 1
