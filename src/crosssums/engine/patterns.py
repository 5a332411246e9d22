"""Candidate mask patterns drawn from the seeded stream."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from ..contracts.puzzle import Mask
from ..project_config import get_section
from .rng import SeededStream

__all__ = ["PatternSettings", "alternating_mask", "load_pattern_settings", "minimum_kept", "repair_mask"]


@dataclass(frozen=True)
class PatternSettings:
    keep_probability_on: float = 0.7
    keep_probability_off: float = 0.3
    min_kept_divisor: int = 3


def load_pattern_settings() -> PatternSettings:
    block = get_section("fallback", {})
    defaults = PatternSettings()
    return PatternSettings(
        keep_probability_on=float(block.get("keep_probability_on", defaults.keep_probability_on)),
        keep_probability_off=float(block.get("keep_probability_off", defaults.keep_probability_off)),
        min_kept_divisor=max(1, int(block.get("min_kept_divisor", defaults.min_kept_divisor))),
    )


def minimum_kept(size: int, settings: PatternSettings) -> int:
    cells = size * size
    return min(cells - 1, max(1, math.ceil(cells / settings.min_kept_divisor)))


def alternating_mask(stream: SeededStream, size: int, settings: PatternSettings) -> Mask:
    """Checkerboard bias: "on" squares are mostly kept, "off" squares mostly removed."""

    rows = []
    for r in range(size):
        row = []
        for c in range(size):
            on = (r + c) % 2 == 0
            chance = settings.keep_probability_on if on else settings.keep_probability_off
            row.append(stream.random() < chance)
        rows.append(tuple(row))
    return tuple(rows)


def repair_mask(mask: Sequence[Sequence[bool]], stream: SeededStream, min_kept: int) -> Mask:
    """Keep at least ``min_kept`` cells and never all of them."""

    size = len(mask)
    cells = size * size
    target = min(cells - 1, max(1, min_kept))
    cells_state: List[List[bool]] = [list(row) for row in mask]
    removed = [(r, c) for r in range(size) for c in range(size) if not cells_state[r][c]]
    kept = cells - len(removed)

    while kept < target and removed:
        r, c = removed.pop(stream.below(len(removed)))
        cells_state[r][c] = True
        kept += 1

    if kept == cells:
        r, c = divmod(stream.below(cells), size)
        cells_state[r][c] = False

    return tuple(tuple(row) for row in cells_state)
