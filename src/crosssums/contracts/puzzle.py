"""Immutable puzzle value object and the player-facing helpers around it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

Grid = Tuple[Tuple[int, ...], ...]
Mask = Tuple[Tuple[bool, ...], ...]
PlayerMask = Sequence[Sequence[Optional[bool]]]


def freeze_grid(rows: Sequence[Sequence[int]]) -> Grid:
    return tuple(tuple(int(value) for value in row) for row in rows)


def freeze_mask(rows: Sequence[Sequence[bool]]) -> Mask:
    return tuple(tuple(bool(value) for value in row) for row in rows)


@dataclass(frozen=True)
class Puzzle:
    """A grid, its canonical keep/discard mask and the published sums.

    ``exact`` is ``True`` only for puzzles whose uniqueness was proven by
    enumeration.  It defaults to ``False``; the exact attempt loop is the one
    place that sets it.
    """

    id: str
    difficulty: str
    grid: Grid
    solution: Mask
    row_sums: Tuple[int, ...]
    column_sums: Tuple[int, ...]
    exact: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "grid", freeze_grid(self.grid))
        object.__setattr__(self, "solution", freeze_mask(self.solution))
        object.__setattr__(self, "row_sums", tuple(int(v) for v in self.row_sums))
        object.__setattr__(self, "column_sums", tuple(int(v) for v in self.column_sums))

    @property
    def row_count(self) -> int:
        return len(self.grid)

    @property
    def column_count(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def size(self) -> int:
        return self.row_count

    @property
    def is_empty(self) -> bool:
        return self.row_count == 0

    @property
    def kept_count(self) -> int:
        return sum(sum(1 for kept in row if kept) for row in self.solution)

    def number_at(self, row: int, column: int) -> Optional[int]:
        if 0 <= row < self.row_count and 0 <= column < len(self.grid[row]):
            return self.grid[row][column]
        return None

    def solution_state_at(self, row: int, column: int) -> Optional[bool]:
        if 0 <= row < len(self.solution) and 0 <= column < len(self.solution[row]):
            return self.solution[row][column]
        return None

    def _fits(self, mask: PlayerMask) -> bool:
        return len(mask) == self.row_count and all(
            len(mask[r]) == len(self.grid[r]) for r in range(self.row_count)
        )

    def row_sum_for(self, mask: PlayerMask, row: int) -> Optional[int]:
        """Sum of the cells a player currently keeps in ``row``."""

        if not self._fits(mask) or not 0 <= row < self.row_count:
            return None
        return sum(value for value, state in zip(self.grid[row], mask[row]) if state is True)

    def column_sum_for(self, mask: PlayerMask, column: int) -> Optional[int]:
        if not self._fits(mask) or not 0 <= column < self.column_count:
            return None
        return sum(
            self.grid[r][column]
            for r in range(self.row_count)
            if column < len(self.grid[r]) and mask[r][column] is True
        )

    def is_valid_solution(self, mask: PlayerMask) -> bool:
        """Return ``True`` when ``mask`` reproduces every published sum."""

        if not self._fits(mask):
            return False
        for r in range(self.row_count):
            if self.row_sum_for(mask, r) != self.row_sums[r]:
                return False
        for c in range(self.column_count):
            if self.column_sum_for(mask, c) != self.column_sums[c]:
                return False
        return True


__all__ = ["Grid", "Mask", "PlayerMask", "Puzzle", "freeze_grid", "freeze_mask"]
