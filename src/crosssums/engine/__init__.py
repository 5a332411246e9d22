"""Deterministic synthesis primitives and the solution-space search."""

from .enumerator import (
    SumRangeRule,
    TargetSumRule,
    count_admissible_masks,
    enumerate_admissible_masks,
    validate_unique,
)
from .fallback import build_fast_puzzle, synthesize_fast
from .grid import synthesize_grid
from .hints import reveal_cell
from .rng import SeededStream
from .scorer import score
from .seeds import derive_seed, level_index_for_date

__all__ = [
    "SeededStream",
    "SumRangeRule",
    "TargetSumRule",
    "build_fast_puzzle",
    "count_admissible_masks",
    "derive_seed",
    "enumerate_admissible_masks",
    "level_index_for_date",
    "reveal_cell",
    "score",
    "synthesize_fast",
    "synthesize_grid",
    "validate_unique",
]
