"""Shared fixtures for tick-state tests."""
from __future__ import annotations

import pytest


class FakeTime:
    """Monotonic stand-in; ``advance`` moves time forward in seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()
