"""Uniform random primitives shared by the generators and combat engine."""

from __future__ import annotations

import math
import random
from typing import Sequence, TypeVar

from engine.errors import InvalidArgumentError

T = TypeVar("T")


class RandomGenerator:
    """Random float/int/element draws over an injectable source.

    Every draw is made through ``rng.random()``, so a seeded or scripted
    ``random.Random`` fully determines the sequence of outcomes.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def random_float(self, min_value: float, max_value: float) -> float:
        """Return a uniform float in [min_value, max_value)."""
        return min_value + self.draw() * (max_value - min_value)

    def random_int(self, min_value: int, max_value: int) -> int:
        """Return a uniform integer in [min_value, max_value)."""
        return math.floor(self.random_float(min_value, max_value))

    def pick_one(self, items: Sequence[T]) -> T:
        """Return a uniformly selected element of a non-empty sequence.

        Raises:
            InvalidArgumentError: If the sequence is empty.
        """
        if not items:
            raise InvalidArgumentError("Cannot pick from an empty sequence")
        return items[self.random_int(0, len(items))]

    def draw(self) -> float:
        """Return a single uniform draw in [0, 1)."""
        return self.rng.random()

    def chance(self, probability: float) -> bool:
        """Return True with the given probability (draw < probability)."""
        return self.draw() < probability
