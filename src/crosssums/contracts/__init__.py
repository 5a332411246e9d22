"""Cross Sums data contracts: puzzle value object, profiles, errors and codec."""

from __future__ import annotations

from .errors import (
    CrossSumsError,
    GenerationCancelled,
    GenerationExhausted,
    MalformedPuzzle,
    UnknownDifficulty,
    ValidationIssue,
    ValidationReport,
)
from .profiles import Difficulty, DifficultyProfile, available_difficulties, get_profile
from .puzzle import Puzzle
from .validator import assert_well_formed, check_puzzle

__all__ = [
    "CrossSumsError",
    "Difficulty",
    "DifficultyProfile",
    "GenerationCancelled",
    "GenerationExhausted",
    "MalformedPuzzle",
    "Puzzle",
    "UnknownDifficulty",
    "ValidationIssue",
    "ValidationReport",
    "assert_well_formed",
    "available_difficulties",
    "check_puzzle",
    "get_profile",
]
