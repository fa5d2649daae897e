"""
Pytest fixtures for rotbar tests.

The rotating widget takes its clock as a callable, so tests drive time with
FakeClock instead of sleeping.
"""

import pytest

from rotbar.utils.theme_manager import load_theme
from rotbar.widgets.rotatingtext import RotatingText


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def theme():
    return load_theme("solarized-dark", "none")


@pytest.fixture
def make_widget(clock, theme):
    def _make(width=5, interval=10.0, speed=0.5):
        return RotatingText(interval, speed, width, theme, clock=clock)
    return _make
