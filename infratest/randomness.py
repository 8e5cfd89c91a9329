"""Random helpers for naming and picking test resources."""

from __future__ import annotations

import random
import string
import time
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

BASE62_CHARS = string.digits + string.ascii_uppercase + string.ascii_lowercase
UNIQUE_ID_LENGTH = 6  # 62^6 = 56+ billion combinations


def _new_rand() -> random.Random:
    """Return a generator seeded with the current time."""
    return random.Random(time.time_ns())


def random_between(min_value: int, max_value: int) -> int:
    """Return a random integer between min_value and max_value, inclusive."""
    if max_value < min_value:
        raise ValueError(
            f"invalid range: max {max_value} is smaller than min {min_value}"
        )
    return _new_rand().randint(min_value, max_value)


def _pick(elements: Sequence[T]) -> T:
    if not elements:
        raise ValueError("cannot pick a random element from an empty sequence")
    return elements[random_between(0, len(elements) - 1)]


def random_int(elements: Sequence[int]) -> int:
    """Pick a random element from a sequence of ints."""
    return _pick(elements)


def random_string(elements: Sequence[str]) -> str:
    """Pick a random element from a sequence of strings."""
    return _pick(elements)


def unique_id() -> str:
    """Return a short base-62 identifier unlikely to collide between parallel tests."""
    generator = _new_rand()
    return "".join(generator.choice(BASE62_CHARS) for _ in range(UNIQUE_ID_LENGTH))