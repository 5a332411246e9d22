"""Seed derivation from difficulty labels, level indices and calendar days."""

from __future__ import annotations

import hashlib
from datetime import date

from ..contracts.profiles import Difficulty

__all__ = [
    "DAILY_DIFFICULTY",
    "LEVEL_STRIDE",
    "attempt_seed",
    "daily_puzzle_id",
    "derive_daily_seed",
    "derive_seed",
    "level_index_for_date",
    "stable_hash",
]

LEVEL_STRIDE = 31
DAILY_DIFFICULTY = Difficulty.MEDIUM
_MASK64 = (1 << 64) - 1


def stable_hash(label: str) -> int:
    """Process-independent 64-bit hash of a label."""

    digest = hashlib.sha256(label.strip().lower().encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def derive_seed(difficulty: Difficulty | str, level_index: int) -> int:
    """Base seed for ``(difficulty, level_index)``; negative levels are folded."""

    tier = Difficulty.parse(difficulty)
    return (stable_hash(tier.value) + abs(int(level_index)) * LEVEL_STRIDE) & _MASK64


def attempt_seed(base_seed: int, attempt: int) -> int:
    return (base_seed + attempt) & _MASK64


def level_index_for_date(day: date) -> int:
    """Level index used by the daily puzzle: ``day_of_year % 100 + 1``."""

    return day.timetuple().tm_yday % 100 + 1


def derive_daily_seed(day: date, difficulty: Difficulty | str = DAILY_DIFFICULTY) -> int:
    return derive_seed(difficulty, level_index_for_date(day))


def daily_puzzle_id(day: date) -> str:
    return f"daily-{day.isoformat()}"
