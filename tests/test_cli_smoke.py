"""
CLI smoke tests: commands are wired up and render fetched state.

The treasury fetch is replaced with an in-memory fetcher; no API key needed.
"""
from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from yieldscope.curve.models import YieldRecord
from yieldscope.data.treasury import TreasuryStatusError
from yieldscope.viewer.state import CurveSession

runner = CliRunner()

A = YieldRecord(date="2024-09-16", month1=5.0, year10=4.0)
B = YieldRecord(date="2024-09-13", month1=4.0, year10=5.0)


@pytest.fixture
def use_fetcher(monkeypatch, settings):
    from yieldscope.cli_commands import curve_cmd

    def install(fetcher):
        monkeypatch.setattr(
            curve_cmd,
            "make_session",
            lambda tolerance=None: CurveSession(
                settings,
                fetcher=fetcher,
                day_fetcher=lambda day: next(iter(fetcher(day, day)), None),
                tolerance=tolerance,
            ),
        )

    return install


class TestCLIStructure:
    def test_main_help(self):
        from yieldscope.cli import app

        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "yieldscope" in result.output

    @pytest.mark.parametrize("command", ["curve", "compare", "range", "tenors", "version"])
    def test_command_help(self, command: str):
        from yieldscope.cli import app

        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0

    def test_tenors_lists_all(self):
        from yieldscope.cli import app

        result = runner.invoke(app, ["tenors"])
        assert result.exit_code == 0
        assert "month1" in result.output and "year30" in result.output


class TestCurveCommands:
    def test_curve_json(self, use_fetcher):
        from yieldscope.cli import app

        use_fetcher(lambda start, end: [A])
        result = runner.invoke(app, ["curve", "--date", "2024-09-16", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["mode"] == "single"
        assert data["classification"]["shape"] == "inverted"
        assert data["records"][0]["points"] == [
            {"maturity": "1M", "yield": 5.0},
            {"maturity": "10Y", "yield": 4.0},
        ]

    def test_curve_insufficient_json_has_null_averages(self, use_fetcher):
        from yieldscope.cli import app

        use_fetcher(lambda start, end: [YieldRecord(date="2024-09-16", year2=3.6)])
        result = runner.invoke(app, ["curve", "--date", "2024-09-16", "--json"])
        data = json.loads(result.output)
        assert data["classification"]["shape"] == "insufficient_data"
        assert data["classification"]["short_avg"] is None

    def test_curve_panel_and_chart(self, use_fetcher, tmp_path):
        from yieldscope.cli import app

        use_fetcher(lambda start, end: [A])
        chart = tmp_path / "curve.png"
        result = runner.invoke(app, ["curve", "-d", "2024-09-16", "--chart", str(chart)])
        assert result.exit_code == 0
        assert "Inverted Yield Curve" in result.output
        assert chart.exists()

    def test_curve_http_error_exits_1(self, use_fetcher):
        from yieldscope.cli import app

        def fetcher(start, end):
            raise TreasuryStatusError(403)

        use_fetcher(fetcher)
        result = runner.invoke(app, ["curve", "--date", "2024-09-16"])
        assert result.exit_code == 1
        assert "403" in result.output

    def test_curve_no_rows(self, use_fetcher):
        from yieldscope.cli import app

        use_fetcher(lambda start, end: [])
        result = runner.invoke(app, ["curve", "--date", "2024-09-14"])
        assert result.exit_code == 0
        assert "No treasury data" in result.output

    def test_curve_bad_date(self):
        from yieldscope.cli import app

        result = runner.invoke(app, ["curve", "--date", "09/16/2024"])
        assert result.exit_code != 0

    def test_compare_json(self, use_fetcher):
        from yieldscope.cli import app

        by_day = {"2024-09-16": [A], "2024-09-13": [B]}
        use_fetcher(lambda start, end: by_day[start.isoformat()])
        result = runner.invoke(
            app, ["compare", "--first", "2024-09-16", "--second", "2024-09-13", "--json"]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [r["date"] for r in data["records"]] == ["2024-09-16", "2024-09-13"]
        assert data["classification"] is None

    def test_range_json(self, use_fetcher):
        from yieldscope.cli import app

        use_fetcher(lambda start, end: [B, A])
        result = runner.invoke(app, ["range", "--start", "2024-09-09", "--end", "2024-09-16", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["mode"] == "range"
        assert data["classification"]["shape"] == "normal"

    def test_range_rejects_reversed_dates(self):
        from yieldscope.cli import app

        result = runner.invoke(app, ["range", "--start", "2024-09-16", "--end", "2024-09-09"])
        assert result.exit_code != 0

    def test_compare_reports_date_without_row(self, use_fetcher):
        from yieldscope.cli import app

        by_day = {"2024-09-16": [A], "2024-09-14": []}
        use_fetcher(lambda start, end: by_day[start.isoformat()])
        result = runner.invoke(app, ["compare", "--first", "2024-09-16", "--second", "2024-09-14"])
        assert result.exit_code == 0
        assert "No treasury data for 2024-09-14" in result.output
        assert "No treasury data for 2024-09-16" not in result.output

    def test_curve_json_classification_tags(self, use_fetcher):
        from yieldscope.cli import app

        use_fetcher(lambda start, end: [A])
        result = runner.invoke(app, ["curve", "--date", "2024-09-16", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)["classification"]["tags"] == ["curve", "inverted"]
