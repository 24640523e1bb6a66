"""
Shared fixtures for the Light Cycle tests.
"""

import pytest


class PinnedRandom:
    """
    Random source with fixed answers.

    random() always returns ``value``; choice() always picks the first item.
    """

    def __init__(self, value: float = 0.99) -> None:
        self.value = value

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[0]

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.value


@pytest.fixture
def no_luck() -> PinnedRandom:
    """Random source that never triggers a probabilistic action"""
    return PinnedRandom(0.99)


@pytest.fixture
def always_lucky() -> PinnedRandom:
    """Random source that triggers every probabilistic action"""
    return PinnedRandom(0.0)
