"""Text blocks printed by the shell: settings boxes, sample tables, plots.

Every function returns a list of lines; nothing here prints.
"""

from typing import List

from .constants import PLOT_SAMPLES, TABLE_SAMPLES
from .render import CharacterSet, render
from .wavetables import (
    ModulationRequest,
    ModulationType,
    SampleSet,
    Sawtooth,
    Sine,
    Square,
    Trace,
    Waveform,
)


RULE_WIDTH = 45


def _title(text: str) -> str:
    return f"========== {text} =========="


def settings_box(wave: Waveform) -> List[str]:
    """Current parameters of a waveform, one per line."""
    name = wave.kind.value
    if isinstance(wave, Sawtooth):
        fields = [
            ("jump amplitude", f"{wave.amplitude:.6f} V"),
            ("slope", f"{wave.slope:.6f}"),
            ("frequency", f"{wave.frequency:.6f} Hz"),
        ]
    else:
        fields = [
            ("frequency", f"{wave.frequency:.6f} Hz"),
            ("amplitude", f"{wave.amplitude:.6f} V"),
        ]
        if isinstance(wave, Sine):
            fields.append(("phase", f"{wave.phase:.6f} rad"))
        elif isinstance(wave, Square):
            fields.append(("duty cycle", f"{wave.duty_cycle:.6f}"))

    width = max(len(label) for label, _ in fields) + 1
    lines = [f"----------- {name} settings -----------"]
    for idx, (label, value) in enumerate(fields, start=1):
        lines.append(f"| {idx}. {label + ':':{width}s} {value}")
    lines.append("-" * 37)
    return lines


def parameter_echo(wave: Waveform) -> str:
    """One-line parameter summary shown under a table title."""
    if isinstance(wave, Sine):
        return (f"Frequency = {wave.frequency:.6f} Hz, Amplitude = {wave.amplitude:.6f}, "
                f"Phase = {wave.phase:.6f} rad")
    if isinstance(wave, Square):
        return (f"Frequency = {wave.frequency:.6f} Hz, Amplitude = {wave.amplitude:.6f}, "
                f"Duty = {wave.duty_cycle:.6f}")
    if isinstance(wave, Sawtooth):
        return (f"Frequency = {wave.frequency:.6f} Hz, Jump Amp = {wave.amplitude:.6f}, "
                f"Slope = {wave.slope:.6f}")
    return f"Frequency = {wave.frequency:.6f} Hz, Amplitude = {wave.amplitude:.6f}"


def modulation_echo(request: ModulationRequest) -> str:
    """One-line carrier summary for a modulated table."""
    if request.type == ModulationType.PWM:
        return (f"fpwm = {request.carrier_frequency:.6f} Hz, "
                f"Ac = {request.carrier_amplitude:.6f}")
    index_name = "m" if request.type == ModulationType.AM else "beta"
    return (f"Ac = {request.carrier_amplitude:.6f}, fc = {request.carrier_frequency:.6f} Hz, "
            f"{index_name} = {request.index:.6f}")


def sample_table(samples: SampleSet) -> List[str]:
    """Header plus one tab-separated (t, y) row per sample."""
    lines = ["t(sec)\t\ty"]
    lines.extend(f"{t:.6f}\t{y:.6f}" for t, y in samples.rows())
    return lines


def plot_block(title: str, samples: SampleSet, scale: float,
               charset: CharacterSet = CharacterSet.ASCII) -> List[str]:
    """Title, rendered canvas rows and a closing rule."""
    lines = [_title(title)]
    lines.extend(render(samples.values, scale, charset=charset))
    lines.append("=" * RULE_WIDTH)
    return lines


def waveform_report(wave: Waveform, result: Trace,
                    charset: CharacterSet = CharacterSet.ASCII) -> List[str]:
    """Table and plot for a primary waveform."""
    label = wave.kind.label
    lines = [_title(f"{label} Wave Table (One Period, {TABLE_SAMPLES} Samples)"),
             parameter_echo(wave), ""]
    lines.extend(sample_table(result.table))
    lines.append("")
    lines.extend(plot_block(f"{label} Wave ASCII Plot", result.plot, result.scale, charset))
    return lines


def modulation_report(request: ModulationRequest, result: Trace,
                      charset: CharacterSet = CharacterSet.ASCII) -> List[str]:
    """Table and plot for a modulated signal."""
    label = request.type.label
    lines = [
        _title(f"{label} Sample Table (One Period, {TABLE_SAMPLES} Samples)"),
        f"Base: {request.base.kind.label}, {modulation_echo(request)}",
        "",
    ]
    lines.extend(sample_table(result.table))
    lines.append("")
    lines.extend(plot_block(f"{label} ASCII Plot ({PLOT_SAMPLES} Samples)",
                            result.plot, result.scale, charset))
    return lines
