"""Reveal-one-cell assistance for a partially marked player mask."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..contracts.puzzle import PlayerMask, Puzzle
from .rng import SeededStream

__all__ = ["reveal_cell"]


def reveal_cell(puzzle: Puzzle, player_mask: PlayerMask, seed: int) -> Optional[Tuple[int, int, bool]]:
    """Pick an unmarked cell and return ``(row, column, kept)`` for it.

    Cells marked ``None`` count as unmarked.  Returns ``None`` when every cell
    is already marked.
    """

    unmarked: List[Tuple[int, int]] = []
    for r in range(puzzle.row_count):
        for c in range(puzzle.column_count):
            marked = player_mask[r][c] if r < len(player_mask) and c < len(player_mask[r]) else None
            if marked is None:
                unmarked.append((r, c))
    if not unmarked:
        return None
    row, column = SeededStream(seed).choice(unmarked)
    return row, column, puzzle.solution[row][column]
