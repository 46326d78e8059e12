"""Tests for the listing limiter."""

import random

import pytest

from kvalue.core.exceptions import ValidationError
from kvalue.core.limiter import apply_limits, limiter_options

KEYS = [f"k{i}" for i in range(10)]


def test_no_options_returns_copy():
    """Test no options leaves the order alone."""
    result = apply_limits(KEYS)

    assert result == KEYS
    assert result is not KEYS


def test_limit_truncates():
    """Test limit keeps the first n items."""
    assert apply_limits(KEYS, limiter_options(limit=3)) == KEYS[:3]
    assert apply_limits(KEYS, limiter_options(limit=50)) == KEYS


def test_limit_zero_is_empty():
    """Test limit=0 yields no results."""
    assert apply_limits(KEYS, limiter_options(limit=0)) == []


def test_randomize_shuffles_whole_list_before_limit():
    """Test a limited random listing samples from every key."""
    rng = random.Random(7)
    seen = set()
    for _ in range(200):
        seen.update(apply_limits(KEYS, limiter_options(limit=2, randomize=True), rng))

    assert seen == set(KEYS)


def test_randomize_is_permutation():
    """Test shuffling keeps every item exactly once."""
    result = apply_limits(KEYS, limiter_options(randomize=True), random.Random(1))

    assert sorted(result) == sorted(KEYS)


def test_randomize_does_not_mutate_input():
    """Test the input list keeps its order."""
    original = list(KEYS)
    apply_limits(original, limiter_options(randomize=True), random.Random(3))

    assert original == KEYS


@pytest.mark.parametrize("limit", [-1, 2.5, "3", True])
def test_invalid_limit(limit):
    """Test limit must be a non-negative integer."""
    with pytest.raises(ValidationError):
        limiter_options(limit=limit)
