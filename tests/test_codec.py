from __future__ import annotations

import json

import pytest

from crosssums.contracts import codec
from crosssums.contracts.errors import MalformedPuzzle
from crosssums.engine.fallback import synthesize_fast


def test_canonical_bytes_are_order_independent() -> None:
    assert codec.canonical_dump({"b": 2, "a": 1.0}) == codec.canonical_dump({"a": 1, "b": 2})
    assert codec.canonical_dump({"a": (1, 2)}) == b'{"a":[1,2]}'


def test_canonical_rejects_nan() -> None:
    with pytest.raises(ValueError):
        codec.canonical_dump({"value": float("nan")})


def test_wire_form_uses_camel_case_fields() -> None:
    puzzle = synthesize_fast("Easy", 3)
    payload = json.loads(codec.dumps(puzzle))
    assert sorted(payload) == ["columnSums", "difficulty", "exact", "grid", "id", "rowSums", "solution"]
    assert payload["rowSums"] == list(puzzle.row_sums)
    assert codec.loads(codec.dumps(puzzle, indent=2)) == puzzle


def test_digest_is_stable() -> None:
    puzzle = synthesize_fast("Medium", 8)
    assert codec.puzzle_digest(puzzle) == codec.puzzle_digest(synthesize_fast("Medium", 8))
    assert codec.puzzle_digest(puzzle).startswith("sha256-")


def test_missing_field_is_malformed() -> None:
    payload = codec.puzzle_to_dict(synthesize_fast("Easy", 1))
    del payload["rowSums"]
    with pytest.raises(MalformedPuzzle) as excinfo:
        codec.puzzle_from_dict(payload)
    assert excinfo.value.report is not None
    assert "schema.required" in excinfo.value.report.codes()


def test_wrong_cell_type_points_at_the_cell() -> None:
    payload = codec.puzzle_to_dict(synthesize_fast("Easy", 1))
    payload["grid"][1][2] = True
    with pytest.raises(MalformedPuzzle) as excinfo:
        codec.puzzle_from_dict(payload)
    paths = [issue.path for issue in excinfo.value.report.errors]
    assert "$.grid[1][2]" in paths


def test_exact_defaults_to_false_on_input() -> None:
    payload = codec.puzzle_to_dict(synthesize_fast("Easy", 1))
    del payload["exact"]
    assert codec.puzzle_from_dict(payload).exact is False


def test_invalid_json_is_malformed() -> None:
    with pytest.raises(MalformedPuzzle):
        codec.loads("{not json")
