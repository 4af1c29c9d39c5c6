"""Tests for the command-line entry point."""

import importlib
import io
import json
import logging
import os
from pathlib import Path

import pytest

import sheet_lister


def run(argv, capsys):
    code = sheet_lister.main(["--host", "openpyxl", *argv])
    return code, capsys.readouterr().out


class TestMain:
    def test_lists_sheets_to_stdout(self, report_workbook: Path, capsys) -> None:
        code, out = run([str(report_workbook)], capsys)
        assert code == 0
        records = json.loads(out)
        assert [r["sheet_name"] for r in records] == ["Summary", "Data", "Empty"]
        assert records[0]["file"]["name"] == "report.xlsx"

    def test_cell_lookups(self, report_workbook: Path, capsys) -> None:
        code, out = run(
            [
                str(report_workbook),
                "--last-cell",
                "--position",
                "Title=B1",
                "--left-title",
                "Author=BY",
            ],
            capsys,
        )
        assert code == 0
        summary = json.loads(out)[0]
        assert summary["fields"] == {
            "LastRow": 3,
            "LastColumn": 5,
            "Title": "Hello",
            "Author": "Zono",
        }

    def test_output_file(self, report_workbook: Path, tmp_path: Path, capsys) -> None:
        target = tmp_path / "out.json"
        code, out = run([str(report_workbook), "-o", str(target)], capsys)
        assert code == 0
        assert out == ""
        assert len(json.loads(target.read_text(encoding="utf-8"))) == 3

    def test_missing_file_sets_exit_status(
        self, report_workbook: Path, tmp_path: Path, capsys
    ) -> None:
        code, out = run([str(tmp_path / "missing.xlsx"), str(report_workbook)], capsys)
        assert code == 1
        assert len(json.loads(out)) == 3

    def test_paths_from_stdin(
        self, report_workbook: Path, capsys, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(f"\n{report_workbook}\n\n"))
        code, out = run([], capsys)
        assert code == 0
        assert len(json.loads(out)) == 3

    def test_malformed_lookup(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            sheet_lister.main(["a.xlsx", "--position", "B1"])
        assert exc_info.value.code == 2

    def test_invalid_coordinate(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            sheet_lister.main(["a.xlsx", "--position", "Title=B0"])
        assert exc_info.value.code == 2

    def test_duplicate_field_name(self, capsys) -> None:
        with pytest.raises(SystemExit):
            sheet_lister.main(["a.xlsx", "--position", "T=A1", "--position", "T=B1"])

    def test_host_start_failure(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        def broken_factory(kind=None):
            raise RuntimeError("Excel is not installed")

        monkeypatch.setattr(sheet_lister, "get_spreadsheet_host", broken_factory)
        assert sheet_lister.main(["a.xlsx"]) == 2

    def test_last_cell_name_collision(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            sheet_lister.main(["a.xlsx", "--last-cell", "--position", "LastRow=A1"])
        assert exc_info.value.code == 2
        assert "Duplicate field name" in capsys.readouterr().err

    def test_flat_rows(self, report_workbook: Path, capsys) -> None:
        code, out = run([str(report_workbook), "--flat", "--position", "Title=B1"], capsys)
        assert code == 0
        rows = json.loads(out)
        assert rows[0] == {
            "SheetName": "Summary",
            "File": str(report_workbook.resolve()),
            "Title": "Hello",
        }
        assert [r["SheetName"] for r in rows] == ["Summary", "Data", "Empty"]
        assert rows[2]["Title"] is None


class TestConfiguration:
    def test_dotenv_in_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        # setenv first so the variable is removed again on teardown
        monkeypatch.setenv("SHEET_HOST", "openpyxl")
        monkeypatch.delenv("SHEET_HOST")
        (tmp_path / ".env").write_text("SHEET_HOST=lotus\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        importlib.reload(sheet_lister)

        assert os.environ["SHEET_HOST"] == "lotus"
        assert sheet_lister.main(["a.xlsx"]) == 2

    def test_log_level_names(self) -> None:
        assert sheet_lister.resolve_log_level("debug") == logging.DEBUG
        assert sheet_lister.resolve_log_level(" WARNING ") == logging.WARNING
        assert sheet_lister.resolve_log_level(None) == logging.INFO

    def test_unknown_log_level_falls_back_to_info(self) -> None:
        assert sheet_lister.resolve_log_level("bogus") == logging.INFO
        assert sheet_lister.resolve_log_level("") == logging.INFO
