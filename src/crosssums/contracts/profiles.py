"""Difficulty tiers and their static generation profiles."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from ..project_config import get_section
from .errors import UnknownDifficulty


class Difficulty(str, Enum):
    """Closed set of difficulty tiers."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    EXTRA_HARD = "Extra Hard"

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "-")

    @classmethod
    def parse(cls, label: "Difficulty | str") -> "Difficulty":
        """Resolve a user supplied label, ignoring case and separators."""

        if isinstance(label, Difficulty):
            return label
        if not isinstance(label, str):
            raise UnknownDifficulty(label)
        key = "".join(ch for ch in label.lower() if ch.isalnum())
        member = _ALIASES.get(key)
        if member is None:
            raise UnknownDifficulty(label)
        return member


_ALIASES: Dict[str, Difficulty] = {
    "easy": Difficulty.EASY,
    "medium": Difficulty.MEDIUM,
    "hard": Difficulty.HARD,
    "extrahard": Difficulty.EXTRA_HARD,
}


@dataclass(frozen=True)
class DifficultyProfile:
    """Generation parameters for one difficulty tier."""

    grid_size: int
    value_range: Tuple[int, int]
    max_attempts: int
    complexity_band: Tuple[int, int]

    def __post_init__(self) -> None:
        lo, hi = self.value_range
        band_min, band_max = self.complexity_band
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be >= 2, got {self.grid_size}")
        if not 1 <= lo <= hi:
            raise ValueError(f"value_range must satisfy 1 <= lo <= hi, got {self.value_range}")
        if self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")
        if band_min > band_max:
            raise ValueError(f"complexity_band must satisfy min <= max, got {self.complexity_band}")

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size


_DEFAULTS: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        grid_size=3, value_range=(1, 9), max_attempts=100, complexity_band=(5, 50)
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        grid_size=4, value_range=(1, 15), max_attempts=200, complexity_band=(10, 80)
    ),
    Difficulty.HARD: DifficultyProfile(
        grid_size=5, value_range=(1, 20), max_attempts=300, complexity_band=(20, 120)
    ),
    Difficulty.EXTRA_HARD: DifficultyProfile(
        grid_size=6, value_range=(1, 25), max_attempts=500, complexity_band=(30, 200)
    ),
}


def _pair(value: Any, fallback: Tuple[int, int]) -> Tuple[int, int]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return int(value[0]), int(value[1])
    return fallback


def _apply_overrides(profile: DifficultyProfile, block: Mapping[str, Any]) -> DifficultyProfile:
    changes: Dict[str, Any] = {}
    if "grid_size" in block:
        changes["grid_size"] = int(block["grid_size"])
    if "max_attempts" in block:
        changes["max_attempts"] = int(block["max_attempts"])
    if "value_range" in block:
        changes["value_range"] = _pair(block["value_range"], profile.value_range)
    if "complexity_band" in block:
        changes["complexity_band"] = _pair(block["complexity_band"], profile.complexity_band)
    return replace(profile, **changes) if changes else profile


def _build_profiles() -> Dict[Difficulty, DifficultyProfile]:
    overrides = get_section("profiles", {})
    profiles: Dict[Difficulty, DifficultyProfile] = {}
    for difficulty, default in _DEFAULTS.items():
        block = overrides.get(difficulty.slug) if isinstance(overrides, dict) else None
        profiles[difficulty] = _apply_overrides(default, block) if isinstance(block, dict) else default
    return profiles


_PROFILES: Dict[Difficulty, DifficultyProfile] = _build_profiles()


def get_profile(difficulty: Difficulty | str) -> DifficultyProfile:
    """Return the profile for *difficulty* (enum member or label)."""

    return _PROFILES[Difficulty.parse(difficulty)]


def available_difficulties() -> List[Difficulty]:
    return list(Difficulty)


__all__ = ["Difficulty", "DifficultyProfile", "available_difficulties", "get_profile"]
