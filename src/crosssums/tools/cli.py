"""Command line entry point for generating, validating and printing puzzles."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from ..contracts import codec
from ..contracts.errors import CrossSumsError, MalformedPuzzle
from ..contracts.profiles import available_difficulties
from ..engine.fallback import synthesize_fast
from ..orchestrator.cache import PuzzleCache
from ..orchestrator.journal import GenerationJournal
from ..orchestrator.orchestrator import GenerationOrchestrator, Strategy
from ..orchestrator.policy import resolve_policy
from ..orchestrator.service import PuzzleService

_LEVELS_RE = re.compile(r"^(-?\d+)(?:\.\.|-)?(-?\d+)?$")


def _cli_env(args: argparse.Namespace) -> Dict[str, str]:
    env: Dict[str, str] = {str(k): str(v) for k, v in os.environ.items()}
    if getattr(args, "uniqueness", None):
        env["CLI_CROSSSUMS_UNIQUENESS"] = args.uniqueness
    return env


def _orchestrator(args: argparse.Namespace) -> GenerationOrchestrator:
    journal = GenerationJournal.from_config(args.journal) if getattr(args, "journal", None) else None
    return GenerationOrchestrator(resolve_policy(_cli_env(args)), journal=journal)


def _parse_levels(raw: str) -> List[int]:
    match = _LEVELS_RE.match(raw.strip())
    if match is None:
        raise argparse.ArgumentTypeError(f"invalid level range {raw!r}")
    first = int(match.group(1))
    last = int(match.group(2)) if match.group(2) is not None else first
    if last < first:
        raise argparse.ArgumentTypeError(f"empty level range {raw!r}")
    return list(range(first, last + 1))


def _emit(text: str, out: Optional[str]) -> None:
    if out:
        path = Path(out)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding="utf-8")
        print(f"Puzzle written to {path}")
    else:
        print(text)


def cmd_generate(args: argparse.Namespace) -> int:
    strategy = Strategy.FAST if args.fast else Strategy.EXACT
    service = PuzzleService(
        PuzzleCache(),
        orchestrator=_orchestrator(args),
        timeout_s=args.timeout if args.timeout and args.timeout > 0 else None,
        allow_fallback=not args.no_fallback,
    )
    with service:
        if args.date:
            puzzle = service.daily_puzzle(date.fromisoformat(args.date), strategy)
        else:
            puzzle = service.get_puzzle(args.difficulty, args.level, strategy)
    _emit(codec.dumps(puzzle, indent=2), args.out)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    text = Path(args.file).read_text(encoding="utf-8")
    try:
        puzzle = codec.loads(text)
        ok = _orchestrator(args).validate(puzzle)
    except MalformedPuzzle as exc:
        print(f"malformed: {exc}")
        return 2
    print(f"{puzzle.id}: {'unique' if ok else 'NOT unique'} ({codec.puzzle_digest(puzzle)})")
    return 0 if ok else 1


def cmd_export(args: argparse.Namespace) -> int:
    from ..printer.sheet import render_sheet

    levels = _parse_levels(args.levels)
    orchestrator = _orchestrator(args)
    puzzles = []
    for level in levels:
        if args.fast:
            puzzles.append(synthesize_fast(args.difficulty, level))
        else:
            puzzles.append(orchestrator.synthesize(args.difficulty, level))
        print(f"  -> {puzzles[-1].id} ready")
    out = render_sheet(puzzles, args.out, solutions=args.solutions)
    print(f"PDF with {len(puzzles)} puzzles saved to: {out.resolve()}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    labels = ", ".join(d.value for d in available_difficulties())
    parser = argparse.ArgumentParser(prog="crosssums", description="Cross Sums puzzle engine")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument(
        "--uniqueness",
        choices=["target_sums", "sum_range"],
        default=None,
        help="Override the uniqueness rule for this run",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate one puzzle and print it as JSON")
    generate.add_argument("--difficulty", default="Easy", help=f"One of: {labels}")
    generate.add_argument("--level", type=int, default=1)
    generate.add_argument("--date", default=None, help="Daily puzzle for YYYY-MM-DD")
    generate.add_argument("--fast", action="store_true", help="Skip the uniqueness proof")
    generate.add_argument("--timeout", type=float, default=None, help="Seconds before falling back")
    generate.add_argument("--no-fallback", action="store_true", help="Fail instead of falling back")
    generate.add_argument("--journal", default=None, help="Directory for the JSONL generation journal")
    generate.add_argument("--out", default=None)
    generate.set_defaults(func=cmd_generate)

    validate = sub.add_parser("validate", help="Check a puzzle JSON file")
    validate.add_argument("file")
    validate.set_defaults(func=cmd_validate)

    export = sub.add_parser("export", help="Print a range of levels to PDF")
    export.add_argument("--difficulty", default="Easy", help=f"One of: {labels}")
    export.add_argument("--levels", default="1-6", help="Level or inclusive range, e.g. 1-6")
    export.add_argument("--out", required=True)
    export.add_argument("--fast", action="store_true")
    export.add_argument("--solutions", action="store_true", help="Shade kept cells")
    export.add_argument("--journal", default=None)
    export.set_defaults(func=cmd_export)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except CrossSumsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
