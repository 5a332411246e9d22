"""Printable PDF sheets of Cross Sums puzzles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Sequence

from ..contracts.puzzle import Puzzle
from ..project_config import get_section

__all__ = ["render_sheet"]

_LOGGER = logging.getLogger(__name__)

INCH_PER_CM = 1 / 2.54


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _draw_puzzle(ax, puzzle: Puzzle, *, solutions: bool, font_scale: float, size_in: float, shade: str) -> None:
    from matplotlib.patches import Rectangle

    n = puzzle.size
    span = n + 1
    ax.set_xlim(0, span)
    ax.set_ylim(0, span)
    ax.set_aspect("equal")
    ax.axis("off")

    for idx in range(n + 1):
        ax.plot([idx, idx], [1, span], color="k", linewidth=1.2)
        ax.plot([0, n], [idx + 1, idx + 1], color="k", linewidth=1.2)

    font_size = max(1, int(font_scale * size_in * 72 / span))
    for r in range(n):
        y = span - r - 0.5
        for c in range(n):
            if solutions and puzzle.solution[r][c]:
                ax.add_patch(Rectangle((c, span - r - 1), 1, 1, facecolor=shade, edgecolor="none", zorder=0))
            ax.text(c + 0.5, y, str(puzzle.grid[r][c]), ha="center", va="center", fontsize=font_size)
        ax.text(n + 0.5, y, str(puzzle.row_sums[r]), ha="center", va="center", fontsize=font_size, fontweight="bold")
    for c in range(n):
        ax.text(c + 0.5, 0.5, str(puzzle.column_sums[c]), ha="center", va="center", fontsize=font_size, fontweight="bold")

    label = puzzle.id if puzzle.exact else f"{puzzle.id} (unverified)"
    ax.set_title(label, fontsize=max(6, font_size * 0.7))


def render_sheet(puzzles: Sequence[Puzzle], out_path: str | Path, *, solutions: bool = False) -> Path:
    """Lay ``puzzles`` out on as many pages as needed and write a PDF."""

    if not puzzles:
        raise ValueError("render_sheet needs at least one puzzle")

    from matplotlib.backends.backend_pdf import PdfPages
    import matplotlib.pyplot as plt

    pdf_cfg = _as_dict(get_section("pdf", {}))
    page_cfg = _as_dict(pdf_cfg.get("page"))
    layout_cfg = _as_dict(pdf_cfg.get("layout"))
    render_cfg = _as_dict(pdf_cfg.get("rendering"))

    page_w_in = float(page_cfg.get("width_cm", 21.0)) * INCH_PER_CM
    page_h_in = float(page_cfg.get("height_cm", 29.7)) * INCH_PER_CM
    margin_in = float(page_cfg.get("margin_cm", 1.5)) * INCH_PER_CM
    gap_in = float(page_cfg.get("gap_cm", 1.0)) * INCH_PER_CM
    rows = max(1, int(layout_cfg.get("rows", 3)))
    cols = max(1, int(layout_cfg.get("cols", 2)))
    font_scale = float(render_cfg.get("font_scale", 0.45))
    shade = str(render_cfg.get("solution_shade", "#c8e6c9"))

    avail_w = page_w_in - 2 * margin_in - gap_in * (cols - 1)
    avail_h = page_h_in - 2 * margin_in - gap_in * (rows - 1)
    cell_in = min(avail_w / cols, avail_h / rows)
    per_page = rows * cols

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    pages = (len(puzzles) + per_page - 1) // per_page

    with PdfPages(out) as pdf:
        for page_num in range(pages):
            fig = plt.figure(figsize=(page_w_in, page_h_in))
            page_puzzles = puzzles[page_num * per_page:(page_num + 1) * per_page]
            for idx, puzzle in enumerate(page_puzzles):
                row, col = divmod(idx, cols)
                left = margin_in + col * (cell_in + gap_in)
                bottom = page_h_in - margin_in - (row + 1) * cell_in - row * gap_in
                ax = fig.add_axes(
                    [left / page_w_in, bottom / page_h_in, cell_in / page_w_in, cell_in / page_h_in],
                    frameon=False,
                )
                _draw_puzzle(ax, puzzle, solutions=solutions, font_scale=font_scale, size_in=cell_in, shade=shade)
            fig.text(0.5, margin_in / 2 / page_h_in, f"Page {page_num + 1} / {pages}", ha="center", va="bottom", fontsize=8)
            pdf.savefig(fig)
            plt.close(fig)

    _LOGGER.info("wrote %d puzzles on %d pages to %s", len(puzzles), pages, out)
    return out
