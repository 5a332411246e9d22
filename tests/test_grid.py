from __future__ import annotations

from crosssums.engine.grid import (
    column_sums,
    kept_count,
    mask_from_bits,
    mask_to_bits,
    row_sums,
    synthesize_grid,
)

GRID = ((1, 2, 3), (4, 5, 6), (7, 8, 9))
CORNERS_AND_CENTER = ((True, False, True), (False, True, False), (True, False, True))


def test_synthesized_grid_shape_range_and_determinism() -> None:
    grid = synthesize_grid(4, (1, 15), seed=99)
    assert len(grid) == 4 and all(len(row) == 4 for row in grid)
    assert all(1 <= value <= 15 for row in grid for value in row)
    assert grid == synthesize_grid(4, (1, 15), seed=99)
    assert grid != synthesize_grid(4, (1, 15), seed=100)


def test_line_sums() -> None:
    assert row_sums(GRID, CORNERS_AND_CENTER) == (4, 5, 16)
    assert column_sums(GRID, CORNERS_AND_CENTER) == (8, 5, 12)
    assert kept_count(CORNERS_AND_CENTER) == 5


def test_bit_layout_is_row_major() -> None:
    mask = mask_from_bits(0b10, 3)
    assert mask[0][1] is True
    assert kept_count(mask) == 1
    mask = mask_from_bits(1 << 3, 3)
    assert mask[1][0] is True
    assert mask_to_bits(CORNERS_AND_CENTER) == 0b101010101
    assert mask_from_bits(mask_to_bits(CORNERS_AND_CENTER), 3) == CORNERS_AND_CENTER
