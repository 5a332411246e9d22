"""Caching puzzle service with a time-boxed exact path and a fast fallback."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import replace
from datetime import date
from typing import Optional

from ..contracts.errors import GenerationCancelled, GenerationExhausted
from ..contracts.profiles import Difficulty
from ..contracts.puzzle import Puzzle
from ..engine.fallback import synthesize_fast
from ..engine.seeds import DAILY_DIFFICULTY, daily_puzzle_id, level_index_for_date
from ..project_config import get_section
from .cache import PuzzleCache
from .orchestrator import GenerationOrchestrator, Strategy

_LOGGER = logging.getLogger(__name__)

_UNSET = object()


def _configured_timeout() -> Optional[float]:
    raw = get_section("service", {}).get("timeout_s", 0)
    value = float(raw or 0)
    return value if value > 0 else None


def _configured_fallback() -> bool:
    return bool(get_section("service", {}).get("allow_fallback", True))


class PuzzleService:
    """Hands out puzzles per ``(difficulty, level_index, strategy)``, computing each once.

    The exact path runs on a worker thread.  When ``timeout_s`` expires the
    worker is asked to stop through its cancellation event and the fast path
    answers instead; the same happens on :class:`GenerationExhausted` while
    ``allow_fallback`` is set.  A fallback puzzle is cached under the fast
    key only, so a later exact request retries the exact path.
    """

    def __init__(
        self,
        cache: Optional[PuzzleCache] = None,
        *,
        orchestrator: Optional[GenerationOrchestrator] = None,
        timeout_s: Optional[float] | object = _UNSET,
        allow_fallback: Optional[bool] = None,
        max_workers: int = 2,
    ) -> None:
        self.cache = cache if cache is not None else PuzzleCache()
        self.orchestrator = orchestrator or GenerationOrchestrator()
        self.timeout_s = _configured_timeout() if timeout_s is _UNSET else timeout_s
        self.allow_fallback = _configured_fallback() if allow_fallback is None else allow_fallback
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="crosssums")

    def __enter__(self) -> "PuzzleService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def get_puzzle(
        self,
        difficulty: Difficulty | str,
        level_index: int,
        strategy: Strategy | str = Strategy.EXACT,
    ) -> Puzzle:
        key = PuzzleCache.key(difficulty, level_index, strategy)
        tier, level, chosen = key
        if chosen is Strategy.FAST:
            return self._fast(tier, level)
        try:
            return self.cache.get_or_compute(key, lambda: self._produce_exact(tier, level))
        except (GenerationCancelled, GenerationExhausted) as exc:
            if not self.allow_fallback:
                raise
            _LOGGER.warning("%s level %s falls back to the fast path: %s", tier.value, level, exc)
            return self._fast(tier, level)

    def daily_puzzle(self, day: date, strategy: Strategy | str = Strategy.EXACT) -> Puzzle:
        """The puzzle of ``day``, relabelled with its ``daily-YYYY-MM-DD`` id."""

        puzzle = self.get_puzzle(DAILY_DIFFICULTY, level_index_for_date(day), strategy)
        return replace(puzzle, id=daily_puzzle_id(day))

    def _fast(self, tier: Difficulty, level_index: int) -> Puzzle:
        key = PuzzleCache.key(tier, level_index, Strategy.FAST)
        return self.cache.get_or_compute(key, lambda: synthesize_fast(tier, level_index))

    def _produce_exact(self, tier: Difficulty, level_index: int) -> Puzzle:
        cancel = threading.Event()
        future = self._executor.submit(self.orchestrator.synthesize, tier, level_index, cancel=cancel)
        try:
            return future.result(timeout=self.timeout_s)
        except FutureTimeout:
            cancel.set()
            raise GenerationCancelled(
                f"{tier.value} level {level_index} timed out after {self.timeout_s}s"
            ) from None


__all__ = ["PuzzleService"]
