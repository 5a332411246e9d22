"""Cross Sums puzzle synthesis and solution-uniqueness validation engine."""

from __future__ import annotations

from .contracts import (
    CrossSumsError,
    Difficulty,
    DifficultyProfile,
    GenerationCancelled,
    GenerationExhausted,
    MalformedPuzzle,
    Puzzle,
    UnknownDifficulty,
    get_profile,
)
from .engine import reveal_cell, synthesize_fast
from .orchestrator import (
    GenerationOrchestrator,
    PuzzleCache,
    PuzzleService,
    Strategy,
    synthesize,
    synthesize_with,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "CrossSumsError",
    "Difficulty",
    "DifficultyProfile",
    "GenerationCancelled",
    "GenerationExhausted",
    "GenerationOrchestrator",
    "MalformedPuzzle",
    "Puzzle",
    "PuzzleCache",
    "PuzzleService",
    "Strategy",
    "UnknownDifficulty",
    "get_profile",
    "reveal_cell",
    "synthesize",
    "synthesize_fast",
    "synthesize_with",
    "validate",
]
