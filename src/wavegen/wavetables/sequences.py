"""Evenly spaced sample sequences over one period.

Two resolutions are produced per signal: a small table (TABLE_SAMPLES points)
for printing and a dense plot (PLOT_SAMPLES points) for the ASCII canvas.
Both span exactly one period of the driving frequency, half-open: the last
point is one step short of the period.
"""

from dataclasses import dataclass

import numpy as np
from loguru import logger

from ..constants import PLOT_SAMPLES, TABLE_SAMPLES
from .generators import Sine, Waveform
from .modulation import ModulationRequest, display_scale, modulate, modulation_period


class FrequencyError(ValueError):
    """Primary waveform has no usable period (frequency <= 0 or too low)."""


@dataclass(frozen=True)
class SampleSet:
    """Paired time (s) and value arrays."""
    times: np.ndarray
    values: np.ndarray

    def __len__(self) -> int:
        return len(self.times)

    def rows(self):
        """Iterate (time, value) pairs as Python floats."""
        for t, y in zip(self.times, self.values):
            yield float(t), float(y)


@dataclass(frozen=True)
class Trace:
    """Table and plot sequences for one signal, plus its plot scale."""
    table: SampleSet
    plot: SampleSet
    scale: float


def sample_times(period: float, count: int) -> np.ndarray:
    """Return t_i = i * (period / count) for i in 0..count-1.

    Args:
        period: Span in seconds
        count: Number of points, must be > 0

    Returns:
        Float64 array of length count
    """
    if count <= 0:
        raise ValueError(f"Sample count must be > 0, got {count}")
    step = period / count
    return np.arange(count, dtype=np.float64) * step


def _require_positive_frequency(wave: Waveform):
    if wave.frequency <= 0.0:
        raise FrequencyError(
            f"{wave.kind.label} frequency must be > 0, got {wave.frequency}"
        )
    if not np.isfinite(wave.period):
        raise FrequencyError(
            f"{wave.kind.label} frequency {wave.frequency:g} Hz is too low, "
            f"its period overflows"
        )


# =============================================================================
# Primary (unmodulated) sequences
# =============================================================================

def table_samples(wave: Waveform, count: int = TABLE_SAMPLES) -> SampleSet:
    """Table sequence of a primary waveform (phase stays in the angle)."""
    _require_positive_frequency(wave)
    times = sample_times(wave.period, count)
    return SampleSet(times, wave.sample(times))


def plot_samples(wave: Waveform, count: int = PLOT_SAMPLES) -> SampleSet:
    """Plot sequence of a primary waveform.

    A sine is drawn phase-free and shifted in time by phase/(2*pi*f) instead
    of carrying phase in the angle, so the reported times are the unshifted
    grid while the values come from t + shift.
    """
    _require_positive_frequency(wave)
    times = sample_times(wave.period, count)
    if isinstance(wave, Sine):
        shift = wave.time_shift
        carrier = Sine(frequency=wave.frequency, amplitude=wave.amplitude)
        values = carrier.sample(times + shift)
    else:
        values = wave.sample(times)
    return SampleSet(times, values)


def trace(wave: Waveform) -> Trace:
    """Table and plot for a primary waveform, scaled by its amplitude.

    Raises:
        FrequencyError: If the waveform frequency is <= 0 or its period overflows
    """
    logger.debug(f"Sampling {wave}")
    return Trace(table_samples(wave), plot_samples(wave), wave.amplitude)


# =============================================================================
# Modulated sequences
# =============================================================================

def _modulated(request: ModulationRequest, count: int) -> SampleSet:
    times = sample_times(modulation_period(request), count)
    return SampleSet(times, modulate(request, times))


def modulated_table(request: ModulationRequest, count: int = TABLE_SAMPLES) -> SampleSet:
    """Table sequence over one carrier period."""
    return _modulated(request, count)


def modulated_plot(request: ModulationRequest, count: int = PLOT_SAMPLES) -> SampleSet:
    """Plot sequence over one carrier period."""
    return _modulated(request, count)


def modulated_trace(request: ModulationRequest) -> Trace:
    """Table and plot for a modulated signal; never raises on frequency."""
    logger.debug(f"Modulating {request.base.kind.label} with {request.type.label}")
    return Trace(
        modulated_table(request),
        modulated_plot(request),
        display_scale(request),
    )
