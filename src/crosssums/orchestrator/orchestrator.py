"""Exact generation pipeline: seed → grid → candidate → uniqueness → score → puzzle."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..contracts.codec import puzzle_digest
from ..contracts.errors import GenerationExhausted, UnknownDifficulty
from ..contracts.profiles import Difficulty, DifficultyProfile, get_profile
from ..contracts.puzzle import Puzzle
from ..contracts.validator import assert_shape, assert_well_formed
from ..engine.enumerator import (
    UNIQUENESS_TARGET_SUMS,
    AdmissibilityRule,
    SumRangeRule,
    TargetSumRule,
    build_rule,
    enumerate_admissible_masks,
    validate_unique,
)
from ..engine.fallback import make_puzzle_id, synthesize_fast
from ..engine.grid import column_sums, draw_grid, row_sums
from ..engine.patterns import PatternSettings, alternating_mask, load_pattern_settings, minimum_kept, repair_mask
from ..engine.rng import SeededStream
from ..engine.scorer import in_band, score
from ..engine.seeds import attempt_seed, derive_seed
from .journal import GenerationJournal
from .policy import EnginePolicy, resolve_policy

_LOGGER = logging.getLogger(__name__)

STATUS_ACCEPTED = "accepted"
STATUS_NO_SOLUTION = "no_solution"
STATUS_AMBIGUOUS = "ambiguous"
STATUS_OUT_OF_BAND = "out_of_band"


class Strategy(str, Enum):
    """How a caller wants its puzzle produced."""

    EXACT = "exact"
    FAST = "fast"


@dataclass(frozen=True)
class AttemptOutcome:
    attempt: int
    seed: int
    status: str
    admissible: int
    score: Optional[int] = None
    puzzle: Optional[Puzzle] = None


class GenerationOrchestrator:
    """Bounded retry loop over seeded attempts for one difficulty profile."""

    def __init__(
        self,
        policy: Optional[EnginePolicy] = None,
        *,
        journal: Optional[GenerationJournal] = None,
        pattern_settings: Optional[PatternSettings] = None,
    ) -> None:
        self.policy = policy or resolve_policy()
        self.journal = journal
        self.pattern_settings = pattern_settings or load_pattern_settings()

    def _record(self, event: Dict[str, Any]) -> None:
        if self.journal is not None:
            self.journal.append_event(event)

    def _search_kwargs(self, cancel: Optional[threading.Event]) -> Dict[str, Any]:
        return {
            "cancel": cancel,
            "check_every": self.policy.cancel_check_interval,
            "exhaustive_max_cells": self.policy.exhaustive_max_cells,
        }

    def _attempt_rule(
        self, stream: SeededStream, grid: Tuple[Tuple[int, ...], ...], profile: DifficultyProfile
    ) -> AdmissibilityRule:
        if self.policy.uniqueness != UNIQUENESS_TARGET_SUMS:
            return SumRangeRule.for_profile(profile.value_range, profile.grid_size)
        size = profile.grid_size
        candidate = alternating_mask(stream, size, self.pattern_settings)
        candidate = repair_mask(candidate, stream, minimum_kept(size, self.pattern_settings))
        return TargetSumRule.for_mask(grid, candidate, profile.value_range)

    def run_attempt(
        self,
        difficulty: Difficulty,
        level_index: int,
        profile: DifficultyProfile,
        attempt: int,
        *,
        cancel: Optional[threading.Event] = None,
    ) -> AttemptOutcome:
        """Execute attempt ``attempt`` (1-indexed) and report what happened."""

        seed = attempt_seed(derive_seed(difficulty, level_index), attempt)
        stream = SeededStream(seed)
        grid = draw_grid(stream, profile.grid_size, profile.value_range)
        rule = self._attempt_rule(stream, grid, profile)

        masks = enumerate_admissible_masks(grid, rule, **self._search_kwargs(cancel))
        if len(masks) != 1:
            status = STATUS_NO_SOLUTION if not masks else STATUS_AMBIGUOUS
            return AttemptOutcome(attempt=attempt, seed=seed, status=status, admissible=len(masks))

        solution = masks[0]
        value = score(grid, solution)
        if not in_band(value, profile.complexity_band):
            return AttemptOutcome(
                attempt=attempt, seed=seed, status=STATUS_OUT_OF_BAND, admissible=1, score=value
            )

        puzzle = Puzzle(
            id=make_puzzle_id(difficulty, level_index),
            difficulty=difficulty.value,
            grid=grid,
            solution=solution,
            row_sums=row_sums(grid, solution),
            column_sums=column_sums(grid, solution),
            exact=True,
        )
        assert_well_formed(puzzle)
        return AttemptOutcome(
            attempt=attempt, seed=seed, status=STATUS_ACCEPTED, admissible=1, score=value, puzzle=puzzle
        )

    def synthesize(
        self,
        difficulty: Difficulty | str,
        level_index: int,
        *,
        max_attempts: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Puzzle:
        """Return the first attempt whose puzzle is unique and inside the band.

        Raises :class:`GenerationExhausted` after ``max_attempts`` (the
        profile's budget unless overridden) rejected attempts.
        """

        tier = Difficulty.parse(difficulty)
        profile = get_profile(tier)
        budget = profile.max_attempts if max_attempts is None else int(max_attempts)
        if budget <= 0:
            raise ValueError(f"max_attempts must be positive, got {budget}")

        for attempt in range(1, budget + 1):
            outcome = self.run_attempt(tier, level_index, profile, attempt, cancel=cancel)
            _LOGGER.debug(
                "%s level %s attempt %d seed %d: %s (admissible=%d score=%s)",
                tier.value,
                level_index,
                attempt,
                outcome.seed,
                outcome.status,
                outcome.admissible,
                outcome.score,
            )
            self._record(
                {
                    "event": "attempt",
                    "difficulty": tier.value,
                    "level_index": level_index,
                    "attempt": attempt,
                    "seed": outcome.seed,
                    "status": outcome.status,
                    "admissible": outcome.admissible,
                    "score": outcome.score,
                    "uniqueness": self.policy.uniqueness,
                }
            )
            if outcome.puzzle is not None:
                _LOGGER.info(
                    "puzzle %s accepted on attempt %d with score %d", outcome.puzzle.id, attempt, outcome.score
                )
                self._record(
                    {
                        "event": "accepted",
                        "puzzle_id": outcome.puzzle.id,
                        "attempt": attempt,
                        "score": outcome.score,
                        "digest": puzzle_digest(outcome.puzzle),
                    }
                )
                return outcome.puzzle

        _LOGGER.warning("%s level %s exhausted %d attempts", tier.value, level_index, budget)
        self._record(
            {"event": "exhausted", "difficulty": tier.value, "level_index": level_index, "attempts": budget}
        )
        raise GenerationExhausted(tier.value, level_index, budget)

    def validate(self, puzzle: Puzzle, *, cancel: Optional[threading.Event] = None) -> bool:
        """Re-check a puzzle: sums, non-degeneracy and uniqueness of its solution.

        Shape defects raise :class:`MalformedPuzzle`; every other failure
        returns ``False``.
        """

        report = assert_shape(puzzle)
        if not report.ok:
            _LOGGER.warning("puzzle %s failed checks: %s", puzzle.id, ", ".join(report.codes()))
            return False
        rule = build_rule(
            self.policy.uniqueness,
            puzzle.size,
            _value_range_for(puzzle),
            row_sums=puzzle.row_sums,
            column_sums=puzzle.column_sums,
        )
        solution = validate_unique(puzzle.grid, rule, **self._search_kwargs(cancel))
        if solution != puzzle.solution:
            _LOGGER.info("puzzle %s does not have a unique admissible solution", puzzle.id)
            return False
        return True


def _value_range_for(puzzle: Puzzle) -> Tuple[int, int]:
    values = [value for row in puzzle.grid for value in row]
    low, high = max(1, min(values)), max(values)
    try:
        profile = get_profile(puzzle.difficulty)
    except UnknownDifficulty:
        return low, high
    lo, hi = profile.value_range
    return min(lo, low), max(hi, high)


def synthesize(
    difficulty: Difficulty | str,
    level_index: int,
    *,
    max_attempts: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> Puzzle:
    return GenerationOrchestrator().synthesize(
        difficulty, level_index, max_attempts=max_attempts, cancel=cancel
    )


def synthesize_with(strategy: Strategy | str, difficulty: Difficulty | str, level_index: int) -> Puzzle:
    """Dispatch to the exact or the fast path as chosen by the caller."""

    chosen = Strategy(strategy)
    if chosen is Strategy.FAST:
        return synthesize_fast(difficulty, level_index)
    return synthesize(difficulty, level_index)


def validate(puzzle: Puzzle) -> bool:
    return GenerationOrchestrator().validate(puzzle)


__all__ = [
    "AttemptOutcome",
    "GenerationOrchestrator",
    "STATUS_ACCEPTED",
    "STATUS_AMBIGUOUS",
    "STATUS_NO_SOLUTION",
    "STATUS_OUT_OF_BAND",
    "Strategy",
    "synthesize",
    "synthesize_fast",
    "synthesize_with",
    "validate",
]
