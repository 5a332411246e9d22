"""Error taxonomy and validation findings shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

SEVERITY_ERROR = "ERROR"
SEVERITY_WARN = "WARN"


@dataclass(frozen=True)
class ValidationIssue:
    """Single finding produced while checking a puzzle."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of checking a puzzle against its invariants."""

    ok: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    def codes(self) -> List[str]:
        return [issue.code for issue in self.errors]


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


def make_warning(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct a warning-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_WARN)


class CrossSumsError(Exception):
    """Base class for every error raised by the engine."""


class UnknownDifficulty(CrossSumsError, ValueError):
    """Raised when a difficulty label does not name a registered profile."""

    def __init__(self, label: object) -> None:
        super().__init__(f"Unknown difficulty: {label!r}")
        self.label = label


class GenerationExhausted(CrossSumsError):
    """Raised when every attempt of the exact path was rejected."""

    def __init__(self, difficulty: str, level_index: int, attempts: int) -> None:
        super().__init__(
            f"No unique puzzle for {difficulty} level {level_index} after {attempts} attempts"
        )
        self.difficulty = difficulty
        self.level_index = level_index
        self.attempts = attempts


class GenerationCancelled(CrossSumsError):
    """Raised when a cancellation request was observed mid-enumeration."""


class MalformedPuzzle(CrossSumsError):
    """Raised when a puzzle violates its structural invariants."""

    def __init__(self, message: str, report: ValidationReport | None = None) -> None:
        super().__init__(message)
        self.report = report


__all__ = [
    "SEVERITY_ERROR",
    "SEVERITY_WARN",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
    "make_warning",
    "CrossSumsError",
    "UnknownDifficulty",
    "GenerationExhausted",
    "GenerationCancelled",
    "MalformedPuzzle",
]
