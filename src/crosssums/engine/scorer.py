"""Heuristic complexity score used to calibrate puzzles to a difficulty band."""

from __future__ import annotations

from typing import Sequence, Tuple

from .grid import column_sums, kept_count, row_sums

__all__ = ["score", "in_band", "population_variance"]


def population_variance(values: Sequence[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((value - mean) ** 2 for value in values) / len(values)


def _alternations(mask: Sequence[Sequence[bool]]) -> int:
    size = len(mask)
    changes = 0
    for r in range(size):
        for c in range(size):
            if c + 1 < size and mask[r][c] != mask[r][c + 1]:
                changes += 1
            if r + 1 < size and mask[r][c] != mask[r + 1][c]:
                changes += 1
    return changes


def score(grid: Sequence[Sequence[int]], solution: Sequence[Sequence[bool]]) -> int:
    """Complexity of ``grid`` under ``solution``.

    Sum of five terms: the cell count, twice the number of distinct line sums,
    a balance bonus ``max(0, 10 - |kept - removed|)``, a tenth of the
    population variance of the line sums (truncated) and the number of
    adjacent cell pairs whose keep state differs.
    """

    size = len(grid)
    cells = size * size
    sums = list(row_sums(grid, solution)) + list(column_sums(grid, solution))
    kept = kept_count(solution)
    removed = cells - kept

    total = cells
    total += 2 * len(set(sums))
    total += max(0, 10 - abs(kept - removed))
    total += int(population_variance(sums) / 10)
    total += _alternations(solution)
    return total


def in_band(value: int, band: Tuple[int, int]) -> bool:
    low, high = band
    return low <= value <= high
