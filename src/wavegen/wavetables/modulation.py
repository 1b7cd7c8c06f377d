"""Analog modulation (AM, FM, PWM) over a base waveform.

The base waveform acts as the message signal. Its instantaneous value is
normalized by its own amplitude to roughly [-1, 1] before it drives the
carrier:

  AM:   Ac * (1 + m * x) * sin(2*pi*fc*t)
  FM:   Ac * sin(2*pi*fc*t + beta * x)       (phase-deviation form, no integral)
  PWM:  +Ac if x > tri(t) else -Ac           (tri: rising ramp -1..1 at fpwm)

None of these raise on a non-positive carrier frequency; the period falls
back to 1 second. Like the base generators, every function accepts a single
time or a numpy time grid.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

import numpy as np

from .generators import Times, Waveform, sample_base, zero_signal


class ModulationType(Enum):
    """Supported modulation schemes."""
    AM = "am"
    FM = "fm"
    PWM = "pwm"

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class ModulationRequest:
    """Carrier configuration applied over a base waveform.

    Fields:
        type: AM, FM or PWM
        carrier_amplitude: Ac (PWM: output high level)
        carrier_frequency: fc for AM/FM, switching frequency for PWM
        index: AM gain m, FM deviation beta (rad); unused by PWM
        base: Message waveform
    """
    type: ModulationType
    carrier_amplitude: float
    carrier_frequency: float
    index: float
    base: Waveform


def normalized_base(wave: Waveform, t: Times) -> Times:
    """Base value divided by its amplitude (0.0 when the amplitude is 0)."""
    if wave.amplitude == 0.0:
        return zero_signal(t)
    return sample_base(wave, t) / wave.amplitude


def modulation_period(request: ModulationRequest) -> float:
    """Period of the carrier, or 1.0 when there is no usable carrier period.

    That covers a carrier frequency <= 0 and one so small that its period
    overflows to infinity.
    """
    if request.carrier_frequency > 0.0:
        period = 1.0 / request.carrier_frequency
        if np.isfinite(period):
            return period
    return 1.0


# =============================================================================
# Scheme Implementations
# =============================================================================

def _am(request: ModulationRequest, t: Times) -> Times:
    x = normalized_base(request.base, t)
    envelope = 1.0 + request.index * x
    carrier = np.sin(2.0 * np.pi * request.carrier_frequency * t)
    return request.carrier_amplitude * envelope * carrier


def _fm(request: ModulationRequest, t: Times) -> Times:
    x = normalized_base(request.base, t)
    inst_phase = 2.0 * np.pi * request.carrier_frequency * t + request.index * x
    return request.carrier_amplitude * np.sin(inst_phase)


def _pwm(request: ModulationRequest, t: Times) -> Times:
    x = normalized_base(request.base, t)
    period = modulation_period(request)
    carrier_frac = np.fmod(t, period) / period
    triangle_ref = -1.0 + 2.0 * carrier_frac
    high = request.carrier_amplitude
    return np.where(x > triangle_ref, high, -high)[()]


MODULATORS: Dict[ModulationType, Callable[[ModulationRequest, Times], Times]] = {
    ModulationType.AM: _am,
    ModulationType.FM: _fm,
    ModulationType.PWM: _pwm,
}


def modulate(request: ModulationRequest, t: Times) -> Times:
    """Modulated output at time(s) t."""
    return MODULATORS[request.type](request, t)


def display_scale(request: ModulationRequest) -> float:
    """Peak amplitude used to scale the plot of a modulated signal."""
    if request.type == ModulationType.AM:
        return request.carrier_amplitude * (1.0 + abs(request.index))
    return request.carrier_amplitude
