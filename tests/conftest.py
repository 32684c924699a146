"""Core test fixtures for dice expression tests."""

import os

import pytest

from gurgle.config import get_settings


class SequenceRandom:
    """Random source that returns preset values in order.

    Each value must fit the requested range, so a test fails loudly if
    the roller asks for the wrong die.
    """

    def __init__(self, values):
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        if not self.values:
            raise AssertionError(f"SequenceRandom exhausted on randint({a}, {b})")
        value = self.values.pop(0)
        assert a <= value <= b, f"{value} not in [{a}, {b}]"
        self.calls.append((a, b))
        return value


@pytest.fixture
def sequence_rng():
    """Factory for SequenceRandom sources."""
    return SequenceRandom


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from GURGLE_* variables and cached settings."""
    for key in list(os.environ):
        if key.upper().startswith("GURGLE_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
