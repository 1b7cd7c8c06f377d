"""Table / plot sequence generation tests."""

import numpy as np
import pytest

from conftest import TOLERANCE
from wavegen.constants import PLOT_SAMPLES, TABLE_SAMPLES
from wavegen.wavetables import (
    FrequencyError,
    ModulationRequest,
    ModulationType,
    Sine,
    Square,
    Triangle,
    modulate,
    modulated_plot,
    modulated_table,
    modulated_trace,
    plot_samples,
    sample_times,
    table_samples,
    trace,
)


def test_sample_times_half_open():
    times = sample_times(1.0, 8)
    assert list(times) == [i * 0.125 for i in range(8)]
    assert times[-1] < 1.0


def test_sample_times_rejects_empty():
    with pytest.raises(ValueError):
        sample_times(1.0, 0)


def test_fixed_resolutions(all_waves):
    for wave in all_waves:
        assert len(table_samples(wave)) == TABLE_SAMPLES == 8
        assert len(plot_samples(wave)) == PLOT_SAMPLES == 100


def test_sequences_span_one_period():
    wave = Triangle(frequency=2.0, amplitude=1.0)
    table = table_samples(wave)
    plot = plot_samples(wave)
    assert table.times[1] == pytest.approx(0.5 / 8)
    assert table.times[-1] == pytest.approx(7 * 0.5 / 8)
    assert plot.times[-1] == pytest.approx(99 * 0.5 / 100)


@pytest.mark.parametrize("frequency", [0.0, -1.0])
def test_primary_frequency_precondition(frequency):
    wave = Square(frequency=frequency, amplitude=1.0)
    for fn in (table_samples, plot_samples, trace):
        with pytest.raises(FrequencyError):
            fn(wave)
    assert issubclass(FrequencyError, ValueError)


def test_overflowing_period_is_rejected():
    wave = Square(frequency=1e-320, amplitude=1.0)
    for fn in (table_samples, plot_samples, trace):
        with pytest.raises(FrequencyError, match="period overflows"):
            fn(wave)


def test_sine_table_keeps_phase_in_angle(quarter_phase_sine):
    table = table_samples(quarter_phase_sine)
    assert table.values[0] == pytest.approx(1.0, abs=TOLERANCE)
    # t = 0.25: sin(pi/2 + pi/2) = 0
    assert table.values[2] == pytest.approx(0.0, abs=TOLERANCE)


def test_sine_plot_shifts_time(quarter_phase_sine):
    plot = plot_samples(quarter_phase_sine)
    assert plot.times[0] == 0.0
    assert plot.values[0] == pytest.approx(1.0, abs=TOLERANCE)
    assert plot.values[25] == pytest.approx(0.0, abs=TOLERANCE)


def test_non_sine_plot_has_no_shift():
    wave = Square(frequency=1.0, amplitude=1.0, duty_cycle=0.3)
    plot = plot_samples(wave)
    expected = np.array([wave.sample(t) for t in plot.times])
    assert np.array_equal(plot.values, expected)


def test_trace_scale_is_amplitude():
    result = trace(Sine(frequency=3.0, amplitude=-2.0))
    assert result.scale == -2.0
    assert len(result.table) == 8
    assert len(result.plot) == 100


def test_sample_set_rows_are_floats(unit_sine):
    rows = list(table_samples(unit_sine).rows())
    assert len(rows) == 8
    assert all(isinstance(t, float) and isinstance(y, float) for t, y in rows)


# =============================================================================
# Modulated sequences
# =============================================================================

def test_modulated_sequences_follow_carrier_period(unit_sine):
    request = ModulationRequest(
        type=ModulationType.FM,
        carrier_amplitude=1.0,
        carrier_frequency=4.0,
        index=1.0,
        base=unit_sine,
    )
    assert modulated_table(request).times[1] == pytest.approx(0.25 / 8)
    assert modulated_plot(request).times[-1] == pytest.approx(99 * 0.25 / 100)


def test_modulated_trace_never_raises_on_frequency():
    request = ModulationRequest(
        type=ModulationType.AM,
        carrier_amplitude=2.0,
        carrier_frequency=0.0,
        index=0.5,
        base=Square(frequency=0.0, amplitude=1.0),
    )
    result = modulated_trace(request)
    assert result.scale == 3.0
    # Fallback period of 1 second
    assert result.table.times[1] == 0.125
    # A zero carrier frequency leaves sin(0) everywhere
    assert not result.plot.values.any()


def test_modulated_plot_matches_pointwise_modulation():
    request = ModulationRequest(
        type=ModulationType.PWM,
        carrier_amplitude=1.0,
        carrier_frequency=50.0,
        index=0.0,
        base=Triangle(frequency=1.0, amplitude=2.0),
    )
    plot = modulated_plot(request)
    expected = [modulate(request, float(t)) for t in plot.times]
    assert np.array_equal(plot.values, expected)
