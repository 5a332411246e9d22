"""Engine policy resolution with config, environment and CLI precedence."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..engine.enumerator import (
    DEFAULT_CHECK_EVERY,
    DEFAULT_EXHAUSTIVE_MAX_CELLS,
    UNIQUENESS_SUM_RANGE,
    UNIQUENESS_TARGET_SUMS,
)
from ..project_config import get_section

SUPPORTED_RULES = {UNIQUENESS_TARGET_SUMS, UNIQUENESS_SUM_RANGE}


class PolicyError(ValueError):
    """Raised when a configured engine policy value is not usable."""


@dataclass(frozen=True)
class EnginePolicy:
    """Knobs of the exact path and where they were decided."""

    uniqueness: str = UNIQUENESS_TARGET_SUMS
    exhaustive_max_cells: int = DEFAULT_EXHAUSTIVE_MAX_CELLS
    cancel_check_interval: int = DEFAULT_CHECK_EVERY
    decision_source: str = "default"


def _normalise_env(env: Mapping[str, str]) -> Dict[str, str]:
    return {str(k).upper(): str(v) for k, v in env.items()}


def _positive_int(raw: Any, name: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise PolicyError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise PolicyError(f"{name} must be positive, got {value}")
    return value


def resolve_policy(env: Optional[Mapping[str, str]] = None) -> EnginePolicy:
    """Resolve the policy: ``[engine]`` config, then ``CROSSSUMS_*``, then ``CLI_CROSSSUMS_*``."""

    engine_cfg = get_section("engine", {})
    env_map = _normalise_env(os.environ if env is None else env)

    values: Dict[str, Any] = {
        "uniqueness": engine_cfg.get("uniqueness", UNIQUENESS_TARGET_SUMS),
        "exhaustive_max_cells": engine_cfg.get("exhaustive_max_cells", DEFAULT_EXHAUSTIVE_MAX_CELLS),
        "cancel_check_interval": engine_cfg.get("cancel_check_interval", DEFAULT_CHECK_EVERY),
    }
    decision_source = "config" if engine_cfg else "default"

    for prefix, source in (("CROSSSUMS_", "env"), ("CLI_CROSSSUMS_", "cli")):
        for key in values:
            raw = env_map.get(f"{prefix}{key.upper()}")
            if raw:
                values[key] = raw
                decision_source = source

    uniqueness = str(values["uniqueness"]).strip().lower()
    if uniqueness not in SUPPORTED_RULES:
        raise PolicyError(f"Unsupported uniqueness rule {uniqueness!r}")

    return EnginePolicy(
        uniqueness=uniqueness,
        exhaustive_max_cells=_positive_int(values["exhaustive_max_cells"], "exhaustive_max_cells"),
        cancel_check_interval=_positive_int(values["cancel_check_interval"], "cancel_check_interval"),
        decision_source=decision_source,
    )


__all__ = ["EnginePolicy", "PolicyError", "SUPPORTED_RULES", "resolve_policy"]
