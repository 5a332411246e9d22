"""Solution-space enumeration and the uniqueness check built on top of it.

A mask over an ``N`` x ``N`` grid is encoded as an integer in
``[0, 2**(N*N))`` where bit ``i`` keeps cell ``(i // N, i % N)``.  Whether a
mask counts as a solution is decided by an admissibility rule:

* :class:`SumRangeRule` only bounds every row and column sum by
  ``[lo, hi * N]`` and rejects the empty and the full mask.  With ``lo >= 1``
  it admits every mask that keeps a cell in each row and column, so it can
  never single out one mask.
* :class:`TargetSumRule` additionally requires the mask to reproduce one
  committed vector of row and column sums.  This is the rule a player solves
  against.

Two walkers produce the admissible set.  The exhaustive walker visits every
integer encoding.  The pruned walker descends row by row, only trying row
subsets that hit the row target and cutting branches whose column partial sums
overshoot or can no longer reach their targets.  Both return the same masks in
the same (integer) order and neither stops early, so counts are exact.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..contracts.errors import GenerationCancelled
from ..contracts.puzzle import Mask
from .grid import column_sums, mask_from_bits, row_sums

__all__ = [
    "DEFAULT_CHECK_EVERY",
    "DEFAULT_EXHAUSTIVE_MAX_CELLS",
    "METHOD_AUTO",
    "METHOD_EXHAUSTIVE",
    "METHOD_PRUNED",
    "UNIQUENESS_SUM_RANGE",
    "UNIQUENESS_TARGET_SUMS",
    "SumRangeRule",
    "TargetSumRule",
    "build_rule",
    "count_admissible_masks",
    "enumerate_admissible_masks",
    "validate_unique",
]

UNIQUENESS_TARGET_SUMS = "target_sums"
UNIQUENESS_SUM_RANGE = "sum_range"

METHOD_AUTO = "auto"
METHOD_EXHAUSTIVE = "exhaustive"
METHOD_PRUNED = "pruned"

DEFAULT_CHECK_EVERY = 4096
DEFAULT_EXHAUSTIVE_MAX_CELLS = 16

Sums = Tuple[int, ...]


@dataclass(frozen=True)
class SumRangeRule:
    """Every line sum inside ``[low, high]`` and ``0 < kept < N*N``."""

    low: int
    high: int

    @classmethod
    def for_profile(cls, value_range: Tuple[int, int], size: int) -> "SumRangeRule":
        lo, hi = value_range
        return cls(low=lo, high=hi * size)

    @property
    def targets(self) -> Optional[Tuple[Sums, Sums]]:
        return None

    def rows_ok(self, rows: Sums) -> bool:
        low, high = self.low, self.high
        return all(low <= value <= high for value in rows)

    def admits(self, rows: Sums, columns: Sums, kept: int, cells: int) -> bool:
        if not 0 < kept < cells:
            return False
        low, high = self.low, self.high
        return self.rows_ok(rows) and all(low <= value <= high for value in columns)


@dataclass(frozen=True)
class TargetSumRule:
    """Loose bounds plus an exact match of a committed sum vector."""

    bounds: SumRangeRule
    row_sums: Sums
    column_sums: Sums

    @classmethod
    def for_mask(
        cls,
        grid: Sequence[Sequence[int]],
        mask: Sequence[Sequence[bool]],
        value_range: Tuple[int, int],
    ) -> "TargetSumRule":
        return cls(
            bounds=SumRangeRule.for_profile(value_range, len(grid)),
            row_sums=row_sums(grid, mask),
            column_sums=column_sums(grid, mask),
        )

    @property
    def targets(self) -> Optional[Tuple[Sums, Sums]]:
        return self.row_sums, self.column_sums

    def rows_ok(self, rows: Sums) -> bool:
        return rows == self.row_sums

    def admits(self, rows: Sums, columns: Sums, kept: int, cells: int) -> bool:
        return (
            rows == self.row_sums
            and columns == self.column_sums
            and self.bounds.admits(rows, columns, kept, cells)
        )


AdmissibilityRule = SumRangeRule | TargetSumRule


def build_rule(
    uniqueness: str,
    size: int,
    value_range: Tuple[int, int],
    *,
    row_sums: Optional[Sequence[int]] = None,
    column_sums: Optional[Sequence[int]] = None,
) -> AdmissibilityRule:
    """Construct the rule named by an engine policy."""

    bounds = SumRangeRule.for_profile(value_range, size)
    if uniqueness == UNIQUENESS_SUM_RANGE:
        return bounds
    if uniqueness == UNIQUENESS_TARGET_SUMS:
        if row_sums is None or column_sums is None:
            raise ValueError("target_sums rule requires row and column sums")
        return TargetSumRule(
            bounds=bounds,
            row_sums=tuple(int(v) for v in row_sums),
            column_sums=tuple(int(v) for v in column_sums),
        )
    raise ValueError(f"Unknown uniqueness rule: {uniqueness!r}")


def _square_size(grid: Sequence[Sequence[int]]) -> int:
    size = len(grid)
    if size == 0 or any(len(row) != size for row in grid):
        raise ValueError("grid must be a non-empty square matrix")
    return size


def _row_tables(
    grid: Sequence[Sequence[int]], size: int
) -> Tuple[List[List[int]], List[List[Tuple[int, ...]]]]:
    """Per row, the sum and per-column contribution of every subset."""

    sums: List[List[int]] = []
    contributions: List[List[Tuple[int, ...]]] = []
    for row in grid:
        row_contrib = [
            tuple(row[c] if (bits >> c) & 1 else 0 for c in range(size))
            for bits in range(1 << size)
        ]
        contributions.append(row_contrib)
        sums.append([sum(values) for values in row_contrib])
    return sums, contributions


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise GenerationCancelled("enumeration cancelled")


def _exhaustive_bits(
    grid: Sequence[Sequence[int]],
    size: int,
    rule: AdmissibilityRule,
    cancel: Optional[threading.Event],
    check_every: int,
) -> List[int]:
    cells = size * size
    row_mask = (1 << size) - 1
    shifts = [r * size for r in range(size)]
    sums, contributions = _row_tables(grid, size)

    found: List[int] = []
    for combination in range(1 << cells):
        if combination % check_every == 0:
            _check_cancel(cancel)
        parts = [(combination >> shift) & row_mask for shift in shifts]
        rows = tuple(sums[r][part] for r, part in enumerate(parts))
        if not rule.rows_ok(rows):
            continue
        columns = tuple(
            sum(col) for col in zip(*(contributions[r][part] for r, part in enumerate(parts)))
        )
        if rule.admits(rows, columns, combination.bit_count(), cells):
            found.append(combination)
    return found


def _pruned_bits(
    grid: Sequence[Sequence[int]],
    size: int,
    rule: TargetSumRule,
    cancel: Optional[threading.Event],
    check_every: int,
) -> List[int]:
    cells = size * size
    target_rows, target_columns = rule.row_sums, rule.column_sums
    if len(target_rows) != size or len(target_columns) != size:
        return []
    sums, contributions = _row_tables(grid, size)

    options = [
        [bits for bits in range(1 << size) if sums[r][bits] == target_rows[r]]
        for r in range(size)
    ]
    # remaining[r][c]: largest amount rows r.. can still add to column c
    remaining = [[0] * size for _ in range(size + 1)]
    for r in range(size - 1, -1, -1):
        for c in range(size):
            remaining[r][c] = remaining[r + 1][c] + grid[r][c]

    found: List[int] = []
    visited = 0

    def walk(r: int, partial: Tuple[int, ...], encoded: int) -> None:
        nonlocal visited
        if r == size:
            if rule.admits(target_rows, partial, encoded.bit_count(), cells):
                found.append(encoded)
            return
        for bits in options[r]:
            visited += 1
            if visited % check_every == 0:
                _check_cancel(cancel)
            contribution = contributions[r][bits]
            columns = tuple(p + v for p, v in zip(partial, contribution))
            if any(
                columns[c] > target_columns[c]
                or columns[c] + remaining[r + 1][c] < target_columns[c]
                for c in range(size)
            ):
                continue
            walk(r + 1, columns, encoded | (bits << (r * size)))

    _check_cancel(cancel)
    walk(0, (0,) * size, 0)
    found.sort()
    return found


def _resolve_method(
    grid: Sequence[Sequence[int]], size: int, rule: AdmissibilityRule, method: str, max_cells: int
) -> str:
    prunable = isinstance(rule, TargetSumRule) and all(v >= 0 for row in grid for v in row)
    if method == METHOD_AUTO:
        return METHOD_PRUNED if prunable and size * size > max_cells else METHOD_EXHAUSTIVE
    if method == METHOD_PRUNED and not prunable:
        raise ValueError("pruned search needs a target_sums rule over non-negative values")
    if method not in (METHOD_EXHAUSTIVE, METHOD_PRUNED):
        raise ValueError(f"Unknown enumeration method: {method!r}")
    return method


def _admissible_bits(
    grid: Sequence[Sequence[int]],
    rule: AdmissibilityRule,
    method: str,
    cancel: Optional[threading.Event],
    check_every: int,
    exhaustive_max_cells: int,
) -> Tuple[int, List[int]]:
    size = _square_size(grid)
    if check_every <= 0:
        raise ValueError(f"check_every must be positive, got {check_every}")
    chosen = _resolve_method(grid, size, rule, method, exhaustive_max_cells)
    if chosen == METHOD_PRUNED:
        return size, _pruned_bits(grid, size, rule, cancel, check_every)  # type: ignore[arg-type]
    return size, _exhaustive_bits(grid, size, rule, cancel, check_every)


def enumerate_admissible_masks(
    grid: Sequence[Sequence[int]],
    rule: AdmissibilityRule,
    *,
    method: str = METHOD_AUTO,
    cancel: Optional[threading.Event] = None,
    check_every: int = DEFAULT_CHECK_EVERY,
    exhaustive_max_cells: int = DEFAULT_EXHAUSTIVE_MAX_CELLS,
) -> List[Mask]:
    """Return every mask ``rule`` admits for ``grid``, ordered by encoding.

    Raises :class:`GenerationCancelled` when ``cancel`` is set; the event is
    polled every ``check_every`` masks (or search nodes).
    """

    size, found = _admissible_bits(grid, rule, method, cancel, check_every, exhaustive_max_cells)
    return [mask_from_bits(bits, size) for bits in found]


def count_admissible_masks(
    grid: Sequence[Sequence[int]],
    rule: AdmissibilityRule,
    *,
    method: str = METHOD_AUTO,
    cancel: Optional[threading.Event] = None,
    check_every: int = DEFAULT_CHECK_EVERY,
    exhaustive_max_cells: int = DEFAULT_EXHAUSTIVE_MAX_CELLS,
) -> int:
    _, found = _admissible_bits(grid, rule, method, cancel, check_every, exhaustive_max_cells)
    return len(found)


def validate_unique(
    grid: Sequence[Sequence[int]],
    rule: AdmissibilityRule,
    *,
    method: str = METHOD_AUTO,
    cancel: Optional[threading.Event] = None,
    check_every: int = DEFAULT_CHECK_EVERY,
    exhaustive_max_cells: int = DEFAULT_EXHAUSTIVE_MAX_CELLS,
) -> Optional[Mask]:
    """Return the only admissible mask, or ``None`` when there are 0 or 2+."""

    size, found = _admissible_bits(grid, rule, method, cancel, check_every, exhaustive_max_cells)
    if len(found) != 1:
        return None
    return mask_from_bits(found[0], size)
