"""Fast heuristic puzzle synthesis that skips the uniqueness proof."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..contracts.profiles import Difficulty, get_profile
from ..contracts.puzzle import Puzzle
from ..contracts.validator import assert_well_formed
from .grid import column_sums, draw_grid, row_sums
from .patterns import PatternSettings, alternating_mask, load_pattern_settings, minimum_kept, repair_mask
from .rng import SeededStream
from .seeds import derive_seed

__all__ = ["build_fast_puzzle", "make_puzzle_id", "synthesize_fast"]

_LOGGER = logging.getLogger(__name__)


def make_puzzle_id(difficulty: Difficulty, level_index: int) -> str:
    return f"{difficulty.slug}-{level_index}"


def build_fast_puzzle(
    size: int,
    value_range: Tuple[int, int],
    seed: int,
    *,
    puzzle_id: str,
    difficulty: str,
    settings: Optional[PatternSettings] = None,
) -> Puzzle:
    """Grid plus a perturbed alternating mask, repaired to a sane kept count."""

    settings = settings or load_pattern_settings()
    stream = SeededStream(seed)
    grid = draw_grid(stream, size, value_range)
    mask = alternating_mask(stream, size, settings)
    mask = repair_mask(mask, stream, minimum_kept(size, settings))

    puzzle = Puzzle(
        id=puzzle_id,
        difficulty=difficulty,
        grid=grid,
        solution=mask,
        row_sums=row_sums(grid, mask),
        column_sums=column_sums(grid, mask),
        exact=False,
    )
    assert_well_formed(puzzle)
    return puzzle


def synthesize_fast(difficulty: Difficulty | str, level_index: int) -> Puzzle:
    """O(N^2) puzzle for ``(difficulty, level_index)``; uniqueness is not proven."""

    tier = Difficulty.parse(difficulty)
    profile = get_profile(tier)
    puzzle = build_fast_puzzle(
        profile.grid_size,
        profile.value_range,
        derive_seed(tier, level_index),
        puzzle_id=make_puzzle_id(tier, level_index),
        difficulty=tier.value,
    )
    _LOGGER.info("fast puzzle %s built with %d kept cells", puzzle.id, puzzle.kept_count)
    return puzzle
