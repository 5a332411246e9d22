from __future__ import annotations

import pytest

from crosssums import validate
from crosssums.contracts.errors import MalformedPuzzle
from crosssums.contracts.puzzle import Puzzle
from crosssums.contracts.validator import assert_well_formed, check_puzzle


def _two_by_two(solution) -> Puzzle:
    grid = ((1, 2), (3, 4))
    rows = [sum(v for v, k in zip(grid[r], solution[r]) if k) for r in range(2)]
    cols = [sum(grid[r][c] for r in range(2) if solution[r][c]) for c in range(2)]
    return Puzzle(id="t", difficulty="Easy", grid=grid, solution=solution, row_sums=rows, column_sums=cols)


def test_all_kept_mask_is_degenerate() -> None:
    report = check_puzzle(_two_by_two(((True, True), (True, True))))
    assert not report.ok
    assert report.codes() == ["mask.degenerate"]


def test_nothing_kept_is_degenerate() -> None:
    puzzle = _two_by_two(((False, False), (False, False)))
    assert "mask.degenerate" in check_puzzle(puzzle).codes()
    with pytest.raises(MalformedPuzzle) as excinfo:
        assert_well_formed(puzzle)
    assert excinfo.value.report is not None


def test_diagonal_mask_is_valid_and_unique() -> None:
    puzzle = _two_by_two(((True, False), (False, True)))
    assert check_puzzle(puzzle).ok
    assert validate(puzzle)


def test_wrong_sums_fail_validation_without_raising() -> None:
    puzzle = Puzzle(
        id="t",
        difficulty="Easy",
        grid=((1, 2), (3, 4)),
        solution=((True, False), (False, True)),
        row_sums=(1, 5),
        column_sums=(1, 4),
    )
    assert check_puzzle(puzzle).codes() == ["sums.row"]
    assert validate(puzzle) is False


def test_mismatched_dimensions_raise() -> None:
    puzzle = Puzzle(
        id="t",
        difficulty="Easy",
        grid=((1, 2, 3), (4, 5, 6)),
        solution=((True, False, True), (False, True, False)),
        row_sums=(4, 5),
        column_sums=(1, 5, 3),
    )
    assert any(code.startswith("shape.") for code in check_puzzle(puzzle).codes())
    with pytest.raises(MalformedPuzzle):
        validate(puzzle)


def test_ambiguous_puzzle_is_rejected() -> None:
    solution = ((True, True, False), (False, True, True), (True, False, True))
    puzzle = Puzzle(
        id="twos",
        difficulty="Easy",
        grid=((2, 2, 2),) * 3,
        solution=solution,
        row_sums=(4, 4, 4),
        column_sums=(4, 4, 4),
    )
    assert check_puzzle(puzzle).ok
    assert validate(puzzle) is False
