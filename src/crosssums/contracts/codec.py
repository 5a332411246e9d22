"""Wire format for puzzles: canonical JSON bytes plus schema-checked decoding.

Canonical bytes follow the subset of RFC 8785 the puzzle payload needs:
dictionary keys are sorted recursively, tuples become arrays and the output
is UTF-8 without insignificant whitespace.  Decoding validates the payload
against ``schemas/puzzle.schema.json`` before a :class:`Puzzle` is built.
"""

from __future__ import annotations

import hashlib
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from .errors import MalformedPuzzle, ValidationIssue, ValidationReport, make_error
from .puzzle import Puzzle

__all__ = [
    "canonical_dump",
    "canonical_sha256",
    "dumps",
    "load_schema",
    "loads",
    "puzzle_digest",
    "puzzle_from_dict",
    "puzzle_to_dict",
]

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "puzzle.schema.json"


def _canonicalize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, float):
        if obj != obj or obj in (float("inf"), float("-inf")):
            raise ValueError("NaN and Infinity are not permitted in canonical payloads")
        return int(obj) if obj.is_integer() else obj
    if isinstance(obj, (list, tuple)):
        return [_canonicalize(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): _canonicalize(obj[key]) for key in sorted(obj.keys(), key=str)}
    raise TypeError(f"Unsupported type for canonical JSON: {type(obj)!r}")


def canonical_dump(obj: Any) -> bytes:
    """Return canonical UTF-8 JSON bytes for ``obj``."""

    dumped = json.dumps(
        _canonicalize(obj),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )
    return dumped.encode("utf-8")


def canonical_sha256(obj: Any) -> str:
    return f"sha256-{hashlib.sha256(canonical_dump(obj)).hexdigest()}"


def puzzle_to_dict(puzzle: Puzzle) -> Dict[str, Any]:
    return {
        "id": puzzle.id,
        "difficulty": puzzle.difficulty,
        "grid": [list(row) for row in puzzle.grid],
        "solution": [list(row) for row in puzzle.solution],
        "rowSums": list(puzzle.row_sums),
        "columnSums": list(puzzle.column_sums),
        "exact": puzzle.exact,
    }


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    return json.loads(_SCHEMA_PATH.read_text("utf-8"))


@lru_cache(maxsize=1)
def _validator() -> jsonschema.Draft202012Validator:
    schema = load_schema()
    jsonschema.Draft202012Validator.check_schema(schema)
    return jsonschema.Draft202012Validator(schema)


def _error_path(error: jsonschema.ValidationError) -> str:
    components: List[str] = ["$"]
    for part in error.absolute_path:
        if isinstance(part, int):
            components.append(f"[{part}]")
        else:
            components.append(f".{part}")
    return "".join(components)


def _schema_issues(payload: Any) -> List[ValidationIssue]:
    errors = sorted(_validator().iter_errors(payload), key=lambda e: list(map(str, e.absolute_path)))
    return [make_error(f"schema.{error.validator}", error.message, _error_path(error)) for error in errors]


def puzzle_from_dict(payload: Any) -> Puzzle:
    """Build a :class:`Puzzle` from its wire form, rejecting schema violations."""

    issues = _schema_issues(payload)
    if issues:
        report = ValidationReport(ok=False, errors=issues, warnings=[])
        codes = ", ".join(f"{issue.code}@{issue.path}" for issue in issues)
        raise MalformedPuzzle(f"Puzzle payload does not match schema: {codes}", report)
    return Puzzle(
        id=payload["id"],
        difficulty=payload["difficulty"],
        grid=payload["grid"],
        solution=payload["solution"],
        row_sums=payload["rowSums"],
        column_sums=payload["columnSums"],
        exact=bool(payload.get("exact", False)),
    )


def dumps(puzzle: Puzzle, *, indent: int | None = None) -> str:
    if indent is None:
        return canonical_dump(puzzle_to_dict(puzzle)).decode("utf-8")
    return json.dumps(puzzle_to_dict(puzzle), indent=indent, sort_keys=True, ensure_ascii=False)


def loads(text: str | bytes) -> Puzzle:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        issue = make_error("json.decode", str(exc), "$")
        raise MalformedPuzzle(f"Puzzle payload is not valid JSON: {exc}", ValidationReport(ok=False, errors=[issue])) from exc
    return puzzle_from_dict(payload)


def puzzle_digest(puzzle: Puzzle) -> str:
    """``sha256-<hex>`` of the canonical wire bytes."""

    return canonical_sha256(puzzle_to_dict(puzzle))
