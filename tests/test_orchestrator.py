from __future__ import annotations

import json

import pytest

from crosssums import synthesize, synthesize_with, validate
from crosssums.contracts.errors import GenerationExhausted, UnknownDifficulty
from crosssums.contracts.profiles import Difficulty, get_profile
from crosssums.engine.enumerator import TargetSumRule, count_admissible_masks
from crosssums.engine.grid import column_sums, row_sums
from crosssums.engine.scorer import in_band, score
from crosssums.orchestrator.journal import GenerationJournal
from crosssums.orchestrator.orchestrator import (
    STATUS_ACCEPTED,
    GenerationOrchestrator,
    Strategy,
)
from crosssums.orchestrator.policy import EnginePolicy


def test_easy_level_one() -> None:
    puzzle = synthesize("Easy", 1)
    assert puzzle.id == "easy-1"
    assert puzzle.difficulty == "Easy"
    assert puzzle.exact is True
    assert len(puzzle.grid) == 3 and all(len(row) == 3 for row in puzzle.grid)
    assert 1 <= puzzle.kept_count <= 8
    assert len(puzzle.row_sums) == len(puzzle.column_sums) == 3
    assert all(1 <= s <= 27 for s in puzzle.row_sums + puzzle.column_sums)


def test_medium_is_deterministic() -> None:
    first = synthesize("Medium", 7)
    second = synthesize("Medium", 7)
    assert first.grid == second.grid
    assert first.solution == second.solution
    assert first == second


def test_unknown_difficulty_raises() -> None:
    with pytest.raises(UnknownDifficulty):
        synthesize("Nonexistent", 1)


@pytest.mark.parametrize(
    ("difficulty", "level"),
    [("Easy", 2), ("Easy", 3), ("Medium", 1), ("Hard", 4), ("Extra Hard", 2)],
)
def test_exact_puzzles_hold_their_invariants(difficulty: str, level: int) -> None:
    puzzle = synthesize(difficulty, level)
    profile = get_profile(difficulty)
    assert puzzle.size == profile.grid_size
    assert puzzle.row_sums == row_sums(puzzle.grid, puzzle.solution)
    assert puzzle.column_sums == column_sums(puzzle.grid, puzzle.solution)
    assert 1 <= puzzle.kept_count <= profile.cell_count - 1
    assert in_band(score(puzzle.grid, puzzle.solution), profile.complexity_band)
    rule = TargetSumRule.for_mask(puzzle.grid, puzzle.solution, profile.value_range)
    assert count_admissible_masks(puzzle.grid, rule) == 1
    assert validate(puzzle)


def test_negative_level_matches_positive_grid() -> None:
    assert synthesize("Easy", -5).grid == synthesize("Easy", 5).grid
    assert synthesize("Easy", -5).id == "easy--5"


def test_attempt_budget_is_respected() -> None:
    orchestrator = GenerationOrchestrator(EnginePolicy(uniqueness="sum_range"))
    with pytest.raises(GenerationExhausted) as excinfo:
        orchestrator.synthesize("Easy", 1, max_attempts=4)
    assert excinfo.value.attempts == 4
    assert excinfo.value.difficulty == "Easy"


def test_loose_rule_exhausts_the_profile_budget() -> None:
    orchestrator = GenerationOrchestrator(EnginePolicy(uniqueness="sum_range"))
    with pytest.raises(GenerationExhausted) as excinfo:
        orchestrator.synthesize(Difficulty.EASY, 3)
    assert excinfo.value.attempts == get_profile("Easy").max_attempts


def test_zero_budget_is_rejected() -> None:
    with pytest.raises(ValueError):
        GenerationOrchestrator().synthesize("Easy", 1, max_attempts=0)


def test_run_attempt_reports_outcome() -> None:
    orchestrator = GenerationOrchestrator()
    profile = get_profile("Easy")
    outcomes = []
    for attempt in range(1, profile.max_attempts + 1):
        outcomes.append(orchestrator.run_attempt(Difficulty.EASY, 1, profile, attempt))
        if outcomes[-1].status == STATUS_ACCEPTED:
            break
    assert [o.attempt for o in outcomes] == list(range(1, len(outcomes) + 1))
    for outcome in outcomes:
        if outcome.status == STATUS_ACCEPTED:
            assert outcome.puzzle is not None and outcome.admissible == 1
        else:
            assert outcome.puzzle is None
    puzzle = synthesize("Easy", 1)
    assert outcomes[-1].puzzle == puzzle


def test_journal_records_attempts(tmp_path) -> None:
    journal = GenerationJournal(tmp_path / "journal")
    GenerationOrchestrator(journal=journal).synthesize("Easy", 1)
    path = journal.current_path
    assert path is not None and path.name == "generation_00.jsonl"
    events = [json.loads(line) for line in path.read_text("utf-8").splitlines()]
    assert events[-1]["event"] == "accepted"
    assert events[-1]["puzzle_id"] == "easy-1"
    assert events[-1]["digest"].startswith("sha256-")
    assert all("ts" in event for event in events)
    assert [e["attempt"] for e in events if e["event"] == "attempt"] == list(range(1, len(events)))


def test_strategy_dispatch() -> None:
    assert synthesize_with(Strategy.FAST, "Easy", 1).exact is False
    assert synthesize_with("exact", "Easy", 1).exact is True
    with pytest.raises(ValueError):
        synthesize_with("sloppy", "Easy", 1)
