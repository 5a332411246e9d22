"""JSONL journal of generation attempts with size-based rotation."""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from ..project_config import get_section

__all__ = ["GenerationJournal"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_DEFAULT_DIR = "logs/generation"


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


class GenerationJournal:
    """Append-only event log, one JSON object per line."""

    def __init__(self, base_dir: str | Path, *, max_bytes: int | None = None) -> None:
        self._base_dir = Path(base_dir)
        self._max_bytes = max_bytes or _DEFAULT_MAX_BYTES
        self._current: Path | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, base_dir: str | Path | None = None) -> "GenerationJournal":
        block = get_section("journal", {})
        directory = base_dir or block.get("dir", _DEFAULT_DIR)
        return cls(directory, max_bytes=int(block.get("max_bytes", _DEFAULT_MAX_BYTES)))

    @property
    def current_path(self) -> Path | None:
        return self._current

    def _resolve_path(self) -> Path:
        date_dir = self._base_dir / _date_prefix()
        date_dir.mkdir(parents=True, exist_ok=True)

        current = self._current
        if current is not None and current.parent == date_dir and current.exists():
            if current.stat().st_size < self._max_bytes:
                return current

        counter = 0
        while True:
            candidate = date_dir / f"generation_{counter:02d}.jsonl"
            if not candidate.exists() or candidate.stat().st_size < self._max_bytes:
                self._current = candidate
                return candidate
            counter += 1

    def append_event(self, event: Dict[str, Any]) -> Path:
        """Append ``event`` to the active file and return the file path."""

        payload = dict(event)
        payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

        line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
        with self._lock:
            path = self._resolve_path()
            with path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")
        return path
