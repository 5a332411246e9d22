"""Grid synthesis and the mask arithmetic shared by the search and the scorer."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..contracts.puzzle import Grid, Mask
from .rng import SeededStream

__all__ = [
    "column_sums",
    "draw_grid",
    "kept_count",
    "mask_from_bits",
    "mask_to_bits",
    "row_sums",
    "synthesize_grid",
]


def draw_grid(stream: SeededStream, size: int, value_range: Tuple[int, int]) -> Grid:
    """Fill a ``size`` x ``size`` grid row-major from ``stream``."""

    lo, hi = value_range
    rows: List[Tuple[int, ...]] = []
    for _ in range(size):
        rows.append(tuple(stream.randint(lo, hi) for _ in range(size)))
    return tuple(rows)


def synthesize_grid(size: int, value_range: Tuple[int, int], seed: int) -> Grid:
    return draw_grid(SeededStream(seed), size, value_range)


def row_sums(grid: Sequence[Sequence[int]], mask: Sequence[Sequence[bool]]) -> Tuple[int, ...]:
    return tuple(
        sum(value for value, kept in zip(grid_row, mask_row) if kept)
        for grid_row, mask_row in zip(grid, mask)
    )


def column_sums(grid: Sequence[Sequence[int]], mask: Sequence[Sequence[bool]]) -> Tuple[int, ...]:
    width = len(grid[0]) if grid else 0
    return tuple(
        sum(grid[r][c] for r in range(len(grid)) if mask[r][c])
        for c in range(width)
    )


def kept_count(mask: Sequence[Sequence[bool]]) -> int:
    return sum(1 for row in mask for kept in row if kept)


def mask_from_bits(bits: int, size: int) -> Mask:
    """Bit ``i`` of ``bits`` maps to ``mask[i // size][i % size]``."""

    return tuple(
        tuple(bool((bits >> (r * size + c)) & 1) for c in range(size))
        for r in range(size)
    )


def mask_to_bits(mask: Sequence[Sequence[bool]]) -> int:
    size = len(mask)
    bits = 0
    for r, row in enumerate(mask):
        for c, kept in enumerate(row):
            if kept:
                bits |= 1 << (r * size + c)
    return bits
