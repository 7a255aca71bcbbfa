"""Index cycler arithmetic tests."""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.index_cycler import next_index


@pytest.mark.parametrize("length", [1, 2, 3, 5])
def test_cycling_forward_returns_to_start(length: int) -> None:
    """Stepping forward ``length`` times lands back on the starting index."""

    for start in range(length):
        index = start
        for _ in range(length):
            index = next_index(length, index, 1)
        assert index == start


def test_cycling_wraps_in_both_directions() -> None:
    assert next_index(3, 2, 1) == 0
    assert next_index(3, 0, -1) == 2
    assert next_index(4, 1, 1) == 2


@pytest.mark.parametrize("delta", [-7, -4, 5, 11])
def test_large_deltas_stay_in_range(delta: int) -> None:
    """Any integer delta yields a valid, non-negative index."""

    result = next_index(4, 1, delta)
    assert 0 <= result < 4
    assert result == (1 + delta) % 4


@pytest.mark.parametrize("current", [0, 5, -3, None, math.nan])
@pytest.mark.parametrize("delta", [-1, 1, 9])
def test_empty_length_always_returns_zero(current, delta: int) -> None:
    assert next_index(0, current, delta) == 0
    assert next_index(-2, current, delta) == 0


@pytest.mark.parametrize("current", [None, math.nan, math.inf, -math.inf, "2", object()])
def test_non_finite_current_is_treated_as_zero(current) -> None:
    assert next_index(4, current, 1) == 1


def test_finite_float_current_is_truncated() -> None:
    assert next_index(5, 2.0, 1) == 3
