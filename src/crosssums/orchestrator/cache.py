"""In-memory puzzle cache keyed by ``(difficulty, level_index, strategy)``.

Exact and fast puzzles for the same level live under different keys, so a
request for a proven puzzle never reads back an unproven one.

Concurrent misses on one key are single-flight: the first caller computes the
puzzle while later callers block until it lands in the cache and then read
it.  If the computing caller fails, its waiters wake up and the next one in
line takes over the computation.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..contracts.profiles import Difficulty
from ..contracts.puzzle import Puzzle
from .orchestrator import Strategy

CacheKey = Tuple[Difficulty, int, Strategy]


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    computations: int
    size: int


class PuzzleCache:
    """Thread-safe store of finished puzzles."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[CacheKey, Puzzle] = {}
        self._inflight: Dict[CacheKey, threading.Event] = {}
        self._hits = 0
        self._misses = 0
        self._computations = 0

    @staticmethod
    def key(
        difficulty: Difficulty | str,
        level_index: int,
        strategy: Strategy | str = Strategy.EXACT,
    ) -> CacheKey:
        return Difficulty.parse(difficulty), int(level_index), Strategy(strategy)

    def get(self, key: CacheKey) -> Optional[Puzzle]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, puzzle: Puzzle) -> None:
        with self._lock:
            self._entries[key] = puzzle

    def get_or_compute(self, key: CacheKey, compute: Callable[[], Puzzle]) -> Puzzle:
        """Return the cached puzzle for ``key``, computing it at most once at a time."""

        while True:
            with self._lock:
                cached = self._entries.get(key)
                if cached is not None:
                    self._hits += 1
                    return cached
                waiting = self._inflight.get(key)
                if waiting is None:
                    pending = threading.Event()
                    self._inflight[key] = pending
                    self._misses += 1
            if waiting is not None:
                waiting.wait()
                continue

            try:
                puzzle = compute()
            except BaseException:
                with self._lock:
                    del self._inflight[key]
                pending.set()
                raise

            with self._lock:
                self._entries[key] = puzzle
                self._computations += 1
                del self._inflight[key]
            pending.set()
            return puzzle

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                computations=self._computations,
                size=len(self._entries),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


__all__ = ["CacheKey", "CacheStats", "PuzzleCache"]
