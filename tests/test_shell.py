"""Command handler and CLI tests."""

from math import pi

import pytest

from wavegen.shell import main
from wavegen.wavetables import ModulationType, Square, WaveKind


def _canvas_rows(message: str):
    return [line for line in message.splitlines() if len(line) == 100]


# =============================================================================
# Command dispatch
# =============================================================================

def test_empty_line_is_noop(handler):
    result = handler.execute("   ")
    assert result.success
    assert result.message == ""


def test_unknown_command(handler):
    result = handler.execute("cosine 1")
    assert not result.success
    assert "Unknown command" in result.message


def test_help_lists_commands(handler):
    result = handler.execute("help")
    for name in ("sine", "square", "triangle", "sawtooth", "am", "fm", "pwm", "show", "quit"):
        assert name in result.message


def test_quit_requests_exit(handler):
    assert handler.execute("QUIT").exit


# =============================================================================
# Waveform commands
# =============================================================================

def test_sine_configures_and_plots(handler, state):
    result = handler.execute("sine 2 3 90deg")
    assert result.success
    wave = state.waves[WaveKind.SINE]
    assert wave.frequency == 2.0
    assert wave.amplitude == 3.0
    assert wave.phase == pytest.approx(pi / 2)
    assert "Sine Wave Table (One Period, 8 Samples)" in result.message
    assert "t(sec)\t\ty" in result.message
    assert "Sine Wave ASCII Plot" in result.message
    assert len(_canvas_rows(result.message)) == 21


def test_omitted_arguments_keep_session_values(handler, state):
    handler.execute("triangle 5 4")
    handler.execute("triangle 2")
    wave = state.waves[WaveKind.TRIANGLE]
    assert (wave.frequency, wave.amplitude) == (2.0, 4.0)


def test_square_duty_cycle_clamped(handler, state):
    handler.execute("square 1 1 1.7")
    assert state.waves[WaveKind.SQUARE].duty_cycle == 1.0
    assert state.selected == WaveKind.SQUARE


def test_sawtooth_argument_order(handler, state):
    result = handler.execute("sawtooth 2.5 3 4")
    wave = state.waves[WaveKind.SAWTOOTH]
    assert (wave.amplitude, wave.slope, wave.frequency) == (2.5, 3.0, 4.0)
    assert "jump amplitude" in result.message


def test_non_positive_frequency_fails(handler, state):
    result = handler.execute("sine 0")
    assert not result.success
    assert "Frequency must be > 0!" in result.message
    assert state.waves[WaveKind.SINE].frequency == 0.0
    assert _canvas_rows(result.message) == []


@pytest.mark.parametrize("kind", ["sine", "square", "triangle"])
def test_frequency_with_overflowing_period_fails(handler, state, kind):
    result = handler.execute(f"{kind} 1e-320")
    assert not result.success
    assert "period overflows" in result.message
    assert _canvas_rows(result.message) == []
    assert state.waves[WaveKind(kind)].frequency == 1e-320


def test_invalid_input_leaves_state(handler, state):
    result = handler.execute("sine abc")
    assert not result.success
    assert "Invalid frequency" in result.message
    assert state.waves[WaveKind.SINE].frequency == 1.0

    result = handler.execute("sine 1 1 ninety")
    assert not result.success
    assert "phase" in result.message


def test_too_many_arguments(handler):
    result = handler.execute("triangle 1 2 3")
    assert not result.success
    assert result.message.startswith("Usage: triangle")


# =============================================================================
# Modulation commands
# =============================================================================

def test_pwm_over_current_square(handler, state):
    handler.execute("square 1 2 0.25")
    result = handler.execute("pwm 50")
    assert result.success
    request = state.last_modulation
    assert request.type == ModulationType.PWM
    assert request.carrier_frequency == 50.0
    assert request.carrier_amplitude == 1.0
    assert request.base == Square(frequency=1.0, amplitude=2.0, duty_cycle=0.25)
    assert "PWM Sample Table (One Period, 8 Samples)" in result.message
    assert len(_canvas_rows(result.message)) == 21


def test_am_defaults(handler, state):
    result = handler.execute("am")
    assert result.success
    request = state.last_modulation
    assert (request.carrier_amplitude, request.carrier_frequency, request.index) == (1.0, 1.0, 0.5)
    assert request.base.kind == WaveKind.SINE


def test_fm_arguments(handler, state):
    handler.execute("fm 2 5 0.3")
    request = state.last_modulation
    assert (request.carrier_amplitude, request.carrier_frequency, request.index) == (2.0, 5.0, 0.3)


def test_modulation_bad_number(handler, state):
    result = handler.execute("am 1 fast")
    assert not result.success
    assert "carrier frequency" in result.message
    assert state.last_modulation is None


def test_show_reports_modulation(handler):
    handler.execute("am 1 10 0.5")
    result = handler.execute("show")
    assert "sine settings" in result.message
    assert "Modulation: AM" in result.message


def test_show_omits_index_for_pwm(handler):
    handler.execute("pwm 50 2")
    result = handler.execute("show")
    assert "Modulation: PWM (fpwm = 50.000000 Hz, Ac = 2.000000)" in result.message
    assert "index" not in result.message
    assert "beta" not in result.message


def test_tiny_carrier_frequency_falls_back_to_unit_period(handler):
    result = handler.execute("am 1 1e-320")
    assert result.success
    assert len(_canvas_rows(result.message)) == 21
    assert "0.125000\t" in result.message


# =============================================================================
# CLI
# =============================================================================

def test_cli_plot(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["plot", "sine", "--frequency", "2", "--phase", "d:45"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Sine Wave ASCII Plot" in out
    assert len(_canvas_rows(out)) == 21


def test_cli_plot_with_modulation(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["plot", "square", "--duty", "0.3", "--modulation", "pwm", "--carrier-frequency", "50"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "PWM Sample Table" in out
    assert len(_canvas_rows(out)) == 42


def test_cli_rejects_zero_frequency(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["plot", "triangle", "--frequency", "0"])
    assert exc.value.code == 1
    assert "Frequency must be > 0!" in capsys.readouterr().out


def test_cli_rejects_non_finite_number(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["plot", "square", "--frequency", "inf"])
    assert exc.value.code == 2
    assert "Invalid frequency" in capsys.readouterr().err


def test_cli_reports_overflowing_period(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["plot", "sawtooth", "--frequency", "1e-320"])
    assert exc.value.code == 1
    assert "too low" in capsys.readouterr().out


@pytest.mark.parametrize("argv, message", [
    (["plot", "square", "--phase", "90deg"], "--phase applies to sine only"),
    (["plot", "sine", "--duty", "0.3"], "--duty applies to square only"),
    (["plot", "triangle", "--slope", "2"], "--slope applies to sawtooth only"),
    (["plot", "sine", "--index", "0.5"], "--index requires --modulation"),
    (["plot", "sine", "--modulation", "pwm", "--index", "0.5"], "--index does not apply to pwm"),
])
def test_cli_rejects_inapplicable_options(capsys, argv, message):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
    assert message in capsys.readouterr().err
