"""
Shared fixtures for the waveform generator tests.

Usage in tests:
    def test_something(handler, unit_sine):
        result = handler.execute("sine 2")
"""

from math import pi

import pytest

from wavegen.shell import CommandHandler, SessionState
from wavegen.wavetables import Sawtooth, Sine, Square, Triangle


# Float comparisons between analytically equal expressions
TOLERANCE = 1e-9


@pytest.fixture
def unit_sine():
    return Sine(frequency=1.0, amplitude=1.0, phase=0.0)


@pytest.fixture
def quarter_phase_sine():
    return Sine(frequency=1.0, amplitude=1.0, phase=pi / 2)


@pytest.fixture
def all_waves():
    """One instance of every kind at 1 Hz, amplitude 2."""
    return [
        Sine(frequency=1.0, amplitude=2.0),
        Square(frequency=1.0, amplitude=2.0),
        Triangle(frequency=1.0, amplitude=2.0),
        Sawtooth(frequency=1.0, amplitude=2.0),
    ]


@pytest.fixture
def state():
    return SessionState()


@pytest.fixture
def handler(state):
    return CommandHandler(state)
