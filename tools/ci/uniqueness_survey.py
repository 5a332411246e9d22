#!/usr/bin/env python3
"""Measure how often a single exact-path attempt yields an acceptable puzzle."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from crosssums.contracts.profiles import Difficulty, get_profile
from crosssums.orchestrator.orchestrator import STATUS_ACCEPTED, GenerationOrchestrator
from crosssums.orchestrator.policy import resolve_policy

REPORT_DEFAULT = ROOT / "reports" / "uniqueness_survey" / "report.json"


def survey(difficulty: Difficulty, samples: int, uniqueness: Optional[str] = None) -> Dict[str, object]:
    env = {"CLI_CROSSSUMS_UNIQUENESS": uniqueness} if uniqueness else {}
    orchestrator = GenerationOrchestrator(resolve_policy(env))
    profile = get_profile(difficulty)

    statuses: Counter[str] = Counter()
    scores: List[int] = []
    for level in range(1, samples + 1):
        outcome = orchestrator.run_attempt(difficulty, level, profile, 1)
        statuses[outcome.status] += 1
        if outcome.score is not None:
            scores.append(outcome.score)

    accepted = statuses.get(STATUS_ACCEPTED, 0)
    return {
        "difficulty": difficulty.value,
        "uniqueness": orchestrator.policy.uniqueness,
        "samples": samples,
        "statuses": dict(sorted(statuses.items())),
        "acceptance_rate": round(accepted / samples, 4) if samples else 0.0,
        "expected_attempts": round(samples / accepted, 2) if accepted else None,
        "score_min": min(scores) if scores else None,
        "score_max": max(scores) if scores else None,
        "complexity_band": list(profile.complexity_band),
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--difficulty", action="append", default=None, help="Repeatable; defaults to every tier")
    parser.add_argument("--samples", type=int, default=50)
    parser.add_argument("--uniqueness", choices=["target_sums", "sum_range"], default=None)
    parser.add_argument("--out", type=Path, default=REPORT_DEFAULT)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.samples <= 0:
        print("--samples must be positive")
        return 2
    tiers = [Difficulty.parse(label) for label in args.difficulty] if args.difficulty else list(Difficulty)
    report = [survey(tier, args.samples, args.uniqueness) for tier in tiers]

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    for entry in report:
        print(f"{entry['difficulty']}: acceptance {entry['acceptance_rate']} over {entry['samples']} samples")
    print(f"Report written to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
