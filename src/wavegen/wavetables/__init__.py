"""Waveform sampling, modulation and sequence generation."""

from .generators import (
    Sawtooth,
    Sine,
    Square,
    Triangle,
    Waveform,
    WaveKind,
    WAVEFORM_TYPES,
    clamp_duty,
    default_waveform,
    sample_base,
)
from .modulation import (
    ModulationRequest,
    ModulationType,
    display_scale,
    modulate,
    modulation_period,
    normalized_base,
)
from .sequences import (
    FrequencyError,
    SampleSet,
    Trace,
    modulated_plot,
    modulated_table,
    modulated_trace,
    plot_samples,
    sample_times,
    table_samples,
    trace,
)

__all__ = [
    "Sawtooth",
    "Sine",
    "Square",
    "Triangle",
    "Waveform",
    "WaveKind",
    "WAVEFORM_TYPES",
    "clamp_duty",
    "default_waveform",
    "sample_base",
    "ModulationRequest",
    "ModulationType",
    "display_scale",
    "modulate",
    "modulation_period",
    "normalized_base",
    "FrequencyError",
    "SampleSet",
    "Trace",
    "modulated_plot",
    "modulated_table",
    "modulated_trace",
    "plot_samples",
    "sample_times",
    "table_samples",
    "trace",
]
