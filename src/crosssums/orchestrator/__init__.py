"""Generation orchestration: attempt loop, cache, service and journal."""

from .cache import PuzzleCache
from .journal import GenerationJournal
from .orchestrator import GenerationOrchestrator, Strategy, synthesize, synthesize_with, validate
from .policy import EnginePolicy, resolve_policy
from .service import PuzzleService

__all__ = [
    "EnginePolicy",
    "GenerationJournal",
    "GenerationOrchestrator",
    "PuzzleCache",
    "PuzzleService",
    "Strategy",
    "resolve_policy",
    "synthesize",
    "synthesize_with",
    "validate",
]
