"""
Random helpers for tile placement and identifiers.

Shuffles use stdlib random.Random: uniformity matters for fairness, but the
layouts are not security sensitive and no seed is exposed to players. A
Random instance can be injected so tests can make layouts reproducible.
"""

import random
import secrets
import time
import uuid
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """
    Return a uniformly shuffled copy of items (Fisher-Yates, back to front).

    For i in n-1..1: swap result[i] with result[randint(0, i)].
    """
    rng = rng or random.Random()  # noqa: S311
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def shuffled_range(n: int, rng: random.Random | None = None) -> list[int]:
    """Return a random permutation of 0..n-1."""
    return fisher_yates_shuffle(range(n), rng)


def generate_tile_id() -> str:
    return uuid.uuid4().hex


def generate_session_id() -> str:
    """Session ids embed creation time so they sort roughly by age."""
    return f"session_{time.time_ns() // 1_000_000}_{secrets.token_hex(4)}"
