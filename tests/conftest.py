"""Pytest configuration for nanodemag.

Cache expiry is tested against a manually advanced clock instead of sleeping.
"""

from __future__ import annotations

import pytest

from nanodemag.core.types import MaterialProperties


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def material() -> MaterialProperties:
    """CoFeB-like defaults: 1000 kA/m, 0.8 MJ/m^3, 15 pJ/m, 300 K."""
    return MaterialProperties.from_display_units(1000.0, 0.8, 15.0, 300.0)
