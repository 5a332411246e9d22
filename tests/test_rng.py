from __future__ import annotations

import pytest

from crosssums.engine.rng import INCREMENT, MULTIPLIER, SeededStream


def test_next_applies_the_recurrence() -> None:
    stream = SeededStream(1)
    assert stream.next() == MULTIPLIER + INCREMENT
    assert SeededStream(0).next() == INCREMENT


def test_state_wraps_at_64_bits() -> None:
    stream = SeededStream(2**64 - 1)
    value = stream.next()
    assert 0 <= value < 2**64
    assert value == ((2**64 - 1) * MULTIPLIER + INCREMENT) % 2**64


def test_same_seed_same_sequence() -> None:
    first = SeededStream(42)
    second = SeededStream(42)
    assert [first.randint(1, 9) for _ in range(50)] == [second.randint(1, 9) for _ in range(50)]


def test_bounded_draws_stay_in_range_and_cover_it() -> None:
    stream = SeededStream(7)
    draws = [stream.randint(1, 9) for _ in range(2000)]
    assert min(draws) == 1
    assert max(draws) == 9
    assert len(set(draws)) == 9


def test_small_ranges_do_not_alternate() -> None:
    stream = SeededStream(3)
    bits = [stream.below(2) for _ in range(64)]
    alternating = all(bits[i] != bits[i + 1] for i in range(len(bits) - 1))
    assert not alternating


def test_random_is_unit_interval() -> None:
    stream = SeededStream(11)
    values = [stream.random() for _ in range(500)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_invalid_bounds_raise() -> None:
    stream = SeededStream(1)
    with pytest.raises(ValueError):
        stream.below(0)
    with pytest.raises(ValueError):
        stream.randrange(5, 5)
    with pytest.raises(IndexError):
        stream.choice([])
