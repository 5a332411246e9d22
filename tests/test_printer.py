from __future__ import annotations

import pytest

from crosssums.engine.fallback import synthesize_fast

pytest.importorskip("matplotlib")

from crosssums.printer.sheet import render_sheet  # noqa: E402


def test_sheet_spans_pages(tmp_path) -> None:
    puzzles = [synthesize_fast("Medium", level) for level in range(1, 8)]
    out = render_sheet(puzzles, tmp_path / "nested" / "sheet.pdf", solutions=True)
    data = out.read_bytes()
    assert data.startswith(b"%PDF")
    assert out.stat().st_size > 1000


def test_empty_sheet_is_rejected(tmp_path) -> None:
    with pytest.raises(ValueError):
        render_sheet([], tmp_path / "empty.pdf")
