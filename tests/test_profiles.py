from __future__ import annotations

import pytest

from crosssums.contracts.errors import UnknownDifficulty
from crosssums.contracts.profiles import Difficulty, DifficultyProfile, available_difficulties, get_profile


def test_profile_table() -> None:
    easy = get_profile("Easy")
    assert (easy.grid_size, easy.value_range, easy.max_attempts, easy.complexity_band) == (3, (1, 9), 100, (5, 50))
    hardest = get_profile(Difficulty.EXTRA_HARD)
    assert hardest.grid_size == 6
    assert hardest.value_range == (1, 25)
    assert hardest.max_attempts == 500


@pytest.mark.parametrize("label", ["extra hard", "ExtraHard", "EXTRA_HARD", "extra-hard", "Extra Hard"])
def test_label_aliases(label: str) -> None:
    assert Difficulty.parse(label) is Difficulty.EXTRA_HARD


def test_unknown_difficulty() -> None:
    with pytest.raises(UnknownDifficulty) as excinfo:
        get_profile("Nonexistent")
    assert excinfo.value.label == "Nonexistent"
    assert isinstance(excinfo.value, ValueError)


def test_every_tier_has_a_profile() -> None:
    sizes = [get_profile(d).grid_size for d in available_difficulties()]
    assert sizes == [3, 4, 5, 6]


def test_profile_constraints() -> None:
    with pytest.raises(ValueError):
        DifficultyProfile(grid_size=1, value_range=(1, 9), max_attempts=10, complexity_band=(0, 10))
    with pytest.raises(ValueError):
        DifficultyProfile(grid_size=3, value_range=(0, 9), max_attempts=10, complexity_band=(0, 10))
    with pytest.raises(ValueError):
        DifficultyProfile(grid_size=3, value_range=(1, 9), max_attempts=0, complexity_band=(0, 10))
    with pytest.raises(ValueError):
        DifficultyProfile(grid_size=3, value_range=(1, 9), max_attempts=10, complexity_band=(20, 10))


def test_slugs() -> None:
    assert [d.slug for d in Difficulty] == ["easy", "medium", "hard", "extra-hard"]
