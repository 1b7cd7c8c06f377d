"""Base waveform generators.

Each waveform kind is its own frozen dataclass carrying only the parameters
it uses. All generators map a time in seconds to an instantaneous amplitude.
Times may be a single float or a numpy array; an array yields an array of the
same shape, so a whole period is evaluated in one call.

Frequency-dependent kinds (square, triangle, sawtooth) return 0.0 for a
non-positive frequency instead of raising, so any caller always gets a
well-formed (flat) signal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from ..constants import WaveDefaults


# Time in seconds: one instant or a grid of them
Times = Union[float, np.ndarray]


class WaveKind(Enum):
    """Periodic function families."""
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def clamp_duty(value: float) -> float:
    """Clamp a duty cycle into [0, 1]."""
    return max(0.0, min(value, 1.0))


def zero_signal(t: Times) -> Times:
    """0.0 for every time in t (a scalar for a scalar t)."""
    return np.zeros(np.shape(t))[()]


def cycle_position(t: Times, frequency: float) -> Times:
    """Fraction of the current period elapsed at time t.

    Uses the floating remainder (sign of dividend), so the result is in
    [0, 1) for every t >= 0.

    Args:
        t: Time(s) in seconds
        frequency: Frequency in Hz, must be > 0

    Returns:
        Position within the period
    """
    period = 1.0 / frequency
    return np.fmod(t, period) / period


# =============================================================================
# Waveform Base Class
# =============================================================================

@dataclass(frozen=True)
class Waveform(ABC):
    """Abstract base class for periodic waveforms."""

    frequency: float = WaveDefaults.FREQUENCY
    amplitude: float = WaveDefaults.AMPLITUDE

    @property
    @abstractmethod
    def kind(self) -> WaveKind:
        """Kind tag of this variant."""
        pass

    @abstractmethod
    def sample(self, t: Times) -> Times:
        """Instantaneous value(s) at time(s) t (seconds)."""
        pass

    @property
    def period(self) -> float:
        """One period in seconds (only meaningful for frequency > 0)."""
        return 1.0 / self.frequency


# =============================================================================
# Concrete Waveforms
# =============================================================================

@dataclass(frozen=True)
class Sine(Waveform):
    """amplitude * sin(2*pi*f*t + phase)."""

    phase: float = WaveDefaults.PHASE

    @property
    def kind(self) -> WaveKind:
        return WaveKind.SINE

    def sample(self, t: Times) -> Times:
        return self.amplitude * np.sin(2.0 * np.pi * self.frequency * t + self.phase)

    @property
    def time_shift(self) -> float:
        """Phase expressed as a time offset, used to shift the plot."""
        if self.frequency == 0.0:
            return 0.0
        return self.phase / (2.0 * np.pi * self.frequency)


@dataclass(frozen=True)
class Square(Waveform):
    """+amplitude for the first duty_cycle of each period, -amplitude after."""

    duty_cycle: float = WaveDefaults.DUTY_CYCLE

    def __post_init__(self):
        object.__setattr__(self, "duty_cycle", clamp_duty(self.duty_cycle))

    @property
    def kind(self) -> WaveKind:
        return WaveKind.SQUARE

    def sample(self, t: Times) -> Times:
        if self.frequency <= 0.0:
            return zero_signal(t)
        pos = cycle_position(t, self.frequency)
        return np.where(pos < self.duty_cycle, self.amplitude, -self.amplitude)[()]


@dataclass(frozen=True)
class Triangle(Waveform):
    """Rises from -amplitude to +amplitude over the first half period, then falls."""

    @property
    def kind(self) -> WaveKind:
        return WaveKind.TRIANGLE

    def sample(self, t: Times) -> Times:
        if self.frequency <= 0.0:
            return zero_signal(t)
        amp = self.amplitude
        pos = cycle_position(t, self.frequency)
        rising = -amp + 4.0 * amp * pos
        falling = 3.0 * amp - 4.0 * amp * pos
        return np.where(pos < 0.5, rising, falling)[()]


@dataclass(frozen=True)
class Sawtooth(Waveform):
    """Linear ramp from -amplitude to +amplitude, then a jump back down.

    The slope is kept as configuration only; sampling ignores it.
    """

    slope: float = WaveDefaults.SLOPE

    @property
    def kind(self) -> WaveKind:
        return WaveKind.SAWTOOTH

    def sample(self, t: Times) -> Times:
        if self.frequency <= 0.0:
            return zero_signal(t)
        frac = cycle_position(t, self.frequency)
        return -self.amplitude + 2.0 * self.amplitude * frac


WAVEFORM_TYPES = {
    WaveKind.SINE: Sine,
    WaveKind.SQUARE: Square,
    WaveKind.TRIANGLE: Triangle,
    WaveKind.SAWTOOTH: Sawtooth,
}


# =============================================================================
# Convenience Functions
# =============================================================================

def sample_base(wave: Waveform, t: Times) -> Times:
    """Sample a base (unmodulated) waveform at time(s) t."""
    return wave.sample(t)


def default_waveform(kind: WaveKind) -> Waveform:
    """Build a waveform of the given kind with session defaults."""
    return WAVEFORM_TYPES[kind]()
