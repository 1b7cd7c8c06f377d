"""Waveform generator: periodic signals, analog modulation and ASCII plots."""

__version__ = "0.3.0"
