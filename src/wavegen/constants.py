"""
Waveform Generator Constants - Single Source of Truth
=====================================================

Sample counts, canvas geometry and marker characters are part of the
external contract: the printed tables and any golden plots depend on them.

Session defaults mirror the values a fresh session starts with.
"""

# ==============================================================================
# Sequence Resolution
# ==============================================================================

TABLE_SAMPLES = 8     # Points per period in the numeric table
PLOT_SAMPLES = 100    # Points per period in the ASCII plot (= canvas columns)


# ==============================================================================
# Canvas Geometry
# ==============================================================================

CANVAS_ROWS = 21      # Odd height puts the zero line on an exact middle row

BLANK = " "
SIGNAL_MARKER = "*"
AXIS_MARKER = "-"


# ==============================================================================
# Session Defaults
# ==============================================================================

class WaveDefaults:
    """Initial waveform parameters for a new session."""

    FREQUENCY  = 1.0   # Hz
    AMPLITUDE  = 1.0   # V
    PHASE      = 0.0   # rad (sine only)
    DUTY_CYCLE = 0.5   # 0..1 (square only)
    SLOPE      = 1.0   # sawtooth only, echoed but not sampled


class ModulationDefaults:
    """Carrier parameters used when a modulation command omits them."""

    AM_CARRIER_AMPLITUDE = 1.0
    AM_CARRIER_FREQUENCY = 1.0
    AM_INDEX             = 0.5   # 0..1 recommended

    FM_CARRIER_AMPLITUDE = 1.0
    FM_CARRIER_FREQUENCY = 1.0
    FM_BETA              = 1.0   # rad of phase deviation

    PWM_SWITCHING_FREQUENCY = 50.0
    PWM_OUTPUT_AMPLITUDE    = 1.0
