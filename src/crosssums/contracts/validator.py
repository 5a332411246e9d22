"""Structural and arithmetic invariant checks for puzzles."""

from __future__ import annotations

import logging
from typing import List

from .errors import MalformedPuzzle, ValidationIssue, ValidationReport, make_error
from .puzzle import Puzzle

_LOGGER = logging.getLogger(__name__)

SHAPE_PREFIX = "shape."


def _shape_checks(puzzle: Puzzle) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    size = len(puzzle.row_sums)
    if puzzle.row_count == 0:
        issues.append(make_error("shape.empty", "grid has no rows", "$.grid"))
        return issues
    if puzzle.row_count != size:
        issues.append(
            make_error("shape.rows", f"grid has {puzzle.row_count} rows, expected {size}", "$.grid")
        )
    for r, row in enumerate(puzzle.grid):
        if len(row) != puzzle.row_count:
            issues.append(make_error("shape.jagged", f"row {r} has {len(row)} cells", f"$.grid[{r}]"))
    if len(puzzle.column_sums) != puzzle.row_count:
        issues.append(
            make_error(
                "shape.column_sums",
                f"{len(puzzle.column_sums)} column sums for {puzzle.row_count} columns",
                "$.columnSums",
            )
        )
    if len(puzzle.solution) != puzzle.row_count:
        issues.append(
            make_error("shape.solution_rows", "solution row count differs from grid", "$.solution")
        )
    for r, row in enumerate(puzzle.solution):
        if r < puzzle.row_count and len(row) != len(puzzle.grid[r]):
            issues.append(
                make_error("shape.solution_jagged", f"solution row {r} has {len(row)} cells", f"$.solution[{r}]")
            )
    return issues


def _content_checks(puzzle: Puzzle) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    cells = puzzle.row_count * puzzle.column_count
    kept = puzzle.kept_count
    if not 0 < kept < cells:
        issues.append(
            make_error("mask.degenerate", f"{kept} of {cells} cells kept", "$.solution")
        )
    for r in range(puzzle.row_count):
        actual = puzzle.row_sum_for(puzzle.solution, r)
        if actual != puzzle.row_sums[r]:
            issues.append(
                make_error("sums.row", f"row {r} sums to {actual}, published {puzzle.row_sums[r]}", f"$.rowSums[{r}]")
            )
    for c in range(puzzle.column_count):
        actual = puzzle.column_sum_for(puzzle.solution, c)
        if actual != puzzle.column_sums[c]:
            issues.append(
                make_error(
                    "sums.column",
                    f"column {c} sums to {actual}, published {puzzle.column_sums[c]}",
                    f"$.columnSums[{c}]",
                )
            )
    return issues


def check_puzzle(puzzle: Puzzle) -> ValidationReport:
    """Run every invariant check; arithmetic checks only run on a sound shape."""

    errors = _shape_checks(puzzle)
    if not errors:
        errors.extend(_content_checks(puzzle))
    return ValidationReport(ok=not errors, errors=errors, warnings=[])


def has_shape_errors(report: ValidationReport) -> bool:
    return any(issue.code.startswith(SHAPE_PREFIX) for issue in report.errors)


def assert_well_formed(puzzle: Puzzle) -> ValidationReport:
    """Raise :class:`MalformedPuzzle` unless every invariant holds."""

    report = check_puzzle(puzzle)
    if report.ok:
        return report
    codes = ", ".join(report.codes())
    _LOGGER.error("puzzle %s is malformed: %s", puzzle.id, codes)
    raise MalformedPuzzle(f"Puzzle {puzzle.id!r} is malformed: {codes}", report)


def assert_shape(puzzle: Puzzle) -> ValidationReport:
    """Raise :class:`MalformedPuzzle` on shape defects only."""

    report = check_puzzle(puzzle)
    if has_shape_errors(report):
        codes = ", ".join(report.codes())
        _LOGGER.error("puzzle %s has an invalid shape: %s", puzzle.id, codes)
        raise MalformedPuzzle(f"Puzzle {puzzle.id!r} has an invalid shape: {codes}", report)
    return report


__all__ = ["assert_shape", "assert_well_formed", "check_puzzle", "has_shape_errors"]
