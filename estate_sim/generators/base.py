"""Base generator class and random helpers."""

from __future__ import annotations

import math
import random
from abc import ABC
from typing import Callable, Sequence, TypeVar

from faker import Faker

T = TypeVar("T")

# Zero-argument source of uniform floats in [0, 1)
RandomFn = Callable[[], float]


class BaseGenerator(ABC):
    """Base class for all generators.

    Provides common initialization: Faker instance creation and
    seed-based reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
    ) -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)


def seeded_random(seed: int | None = None) -> RandomFn:
    """Return a ``rand()`` bound to a private ``random.Random`` instance."""
    return random.Random(seed).random


def random_int(rand: RandomFn, minimum: float, maximum: float) -> int:
    """Uniform integer in ``[minimum, maximum]`` inclusive."""
    lower = math.ceil(minimum)
    upper = math.floor(maximum)
    if upper <= lower:
        return lower
    value = lower + math.floor(rand() * (upper - lower + 1))
    return min(value, upper)


def random_number(rand: RandomFn, minimum: float, maximum: float, precision: int = 2) -> float:
    """Uniform float in ``[minimum, maximum]`` rounded to ``precision`` places."""
    if maximum <= minimum:
        return round(minimum, precision)
    return round(minimum + rand() * (maximum - minimum), precision)


def pick_random(rand: RandomFn, items: Sequence[T]) -> T:
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    return items[min(math.floor(rand() * len(items)), len(items) - 1)]


def select_subset(
    rand: RandomFn,
    pool: Sequence[T],
    min_size: int = 2,
    max_size: int = 4,
) -> tuple[T, ...]:
    """Sample between ``min_size`` and ``max_size`` items without replacement."""
    upper = min(max_size, len(pool))
    lower = min(min_size, upper)
    count = random_int(rand, lower, upper)
    remaining = list(pool)
    chosen: list[T] = []
    for _ in range(count):
        index = min(math.floor(rand() * len(remaining)), len(remaining) - 1)
        chosen.append(remaining.pop(index))
    return tuple(chosen)
