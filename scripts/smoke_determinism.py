#!/usr/bin/env python3
"""Smoke-test deterministic behaviour of the puzzle synthesis paths."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from crosssums import Difficulty, synthesize, synthesize_fast, validate
from crosssums.contracts.codec import puzzle_digest


def _check_exact(difficulty: Difficulty) -> bool:
    first = synthesize(difficulty, 1)
    second = synthesize(difficulty, 1)
    if puzzle_digest(first) != puzzle_digest(second):
        print(f"determinism failed for {first.id}: {puzzle_digest(first)} vs {puzzle_digest(second)}")
        return False
    if not validate(first):
        print(f"{first.id} does not re-validate")
        return False
    other = synthesize(difficulty, 2)
    if other.grid == first.grid:
        print(f"different level produced identical grid for {difficulty.value}")
        return False
    return True


def _check_fast(difficulty: Difficulty) -> bool:
    first = synthesize_fast(difficulty, 1)
    second = synthesize_fast(difficulty, 1)
    if puzzle_digest(first) != puzzle_digest(second):
        print(f"fast determinism failed for {first.id}")
        return False
    return True


def main() -> int:
    for difficulty in Difficulty:
        if not (_check_exact(difficulty) and _check_fast(difficulty)):
            return 1
        print(f"  {difficulty.value}: ok")

    print("Determinism smoke-test passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
