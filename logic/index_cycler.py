"""Circular index arithmetic shared by outfit composition and browsing."""

from __future__ import annotations

import math
from numbers import Real
from typing import Any


def _coerce_index(value: Any) -> int:
    """Return ``value`` as an int, or 0 when it is absent or not finite."""

    if isinstance(value, bool) or not isinstance(value, Real):
        return 0
    if isinstance(value, int):
        return value
    as_float = float(value)
    if not math.isfinite(as_float):
        return 0
    return int(as_float)


def next_index(length: int, current: Any, delta: int) -> int:
    """Return the position ``delta`` steps from ``current`` in a circular list.

    A non-positive ``length`` has no valid position and yields 0; callers treat
    that as "nothing to show". Any integer ``delta`` wraps in either direction.
    """

    if length <= 0:
        return 0
    return (_coerce_index(current) + int(delta)) % length


__all__ = ["next_index"]
