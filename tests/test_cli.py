from __future__ import annotations

import json

import pytest

from crosssums.tools import cli


def test_generate_and_validate_round_trip(tmp_path, capsys) -> None:
    out = tmp_path / "puzzle.json"
    assert cli.main(["generate", "--difficulty", "Easy", "--level", "1", "--out", str(out)]) == 0
    payload = json.loads(out.read_text("utf-8"))
    assert payload["id"] == "easy-1"
    assert payload["exact"] is True

    assert cli.main(["validate", str(out)]) == 0
    assert "easy-1: unique" in capsys.readouterr().out


def test_generate_fast_to_stdout(capsys) -> None:
    assert cli.main(["generate", "--difficulty", "hard", "--level", "3", "--fast"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["exact"] is False
    assert len(payload["grid"]) == 5


def test_generate_daily(capsys) -> None:
    assert cli.main(["generate", "--date", "2024-03-01", "--fast"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["id"] == "daily-2024-03-01"


def test_unknown_difficulty_exits_non_zero(capsys) -> None:
    assert cli.main(["generate", "--difficulty", "Nonexistent"]) == 1
    assert "Unknown difficulty" in capsys.readouterr().err


def test_validate_reports_malformed_file(tmp_path, capsys) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"id": "x"}), encoding="utf-8")
    assert cli.main(["validate", str(bad)]) == 2
    assert "malformed" in capsys.readouterr().out


def test_generate_writes_journal(tmp_path) -> None:
    journal_dir = tmp_path / "journal"
    assert cli.main(["generate", "--level", "2", "--journal", str(journal_dir), "--out", str(tmp_path / "p.json")]) == 0
    assert list(journal_dir.glob("*/generation_*.jsonl"))


@pytest.mark.parametrize(("raw", "expected"), [("3", [3]), ("1-3", [1, 2, 3]), ("2..4", [2, 3, 4]), ("-2", [-2])])
def test_level_ranges(raw: str, expected: list[int]) -> None:
    assert cli._parse_levels(raw) == expected


def test_export_pdf(tmp_path) -> None:
    pytest.importorskip("matplotlib")
    out = tmp_path / "sheet.pdf"
    assert cli.main(["export", "--difficulty", "Easy", "--levels", "1-2", "--fast", "--out", str(out)]) == 0
    assert out.read_bytes().startswith(b"%PDF")
