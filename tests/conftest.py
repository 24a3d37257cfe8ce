"""Pytest configuration and shared fixtures."""

import random

import pytest


class ScriptedRandom(random.Random):
    """A Random whose random() returns a fixed queue of draws, in order.

    Running out of draws fails the test, which also proves no extra draws
    were made.
    """

    def __init__(self, *values: float) -> None:
        super().__init__(0)
        self.values = list(values)

    def random(self) -> float:
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of draws")
        return self.values.pop(0)


@pytest.fixture
def scripted():
    """Factory fixture: ``scripted(0.1, 0.9)`` builds a ScriptedRandom."""
    return ScriptedRandom
