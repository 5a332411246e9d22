from __future__ import annotations

import pytest

from crosssums.orchestrator.policy import PolicyError, resolve_policy


def test_config_defaults() -> None:
    policy = resolve_policy({})
    assert policy.uniqueness == "target_sums"
    assert policy.exhaustive_max_cells == 16
    assert policy.cancel_check_interval == 4096
    assert policy.decision_source == "config"


def test_environment_overrides_toml() -> None:
    policy = resolve_policy({"CROSSSUMS_UNIQUENESS": "sum_range", "CROSSSUMS_EXHAUSTIVE_MAX_CELLS": "9"})
    assert policy.uniqueness == "sum_range"
    assert policy.exhaustive_max_cells == 9
    assert policy.decision_source == "env"


def test_cli_overrides_environment() -> None:
    env = {
        "CROSSSUMS_UNIQUENESS": "sum_range",
        "CLI_CROSSSUMS_UNIQUENESS": "target_sums",
    }
    policy = resolve_policy(env)
    assert policy.uniqueness == "target_sums"
    assert policy.decision_source == "cli"


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(PolicyError):
        resolve_policy({"CROSSSUMS_UNIQUENESS": "vibes"})
    with pytest.raises(PolicyError):
        resolve_policy({"CROSSSUMS_CANCEL_CHECK_INTERVAL": "0"})
