"""Terminal waveform rendering on a fixed character canvas."""

from .canvas import (
    render,
    value_to_row,
    MARKER_SETS,
    Canvas,
    CharacterSet,
    MarkerSet,
)

__all__ = [
    "render",
    "value_to_row",
    "MARKER_SETS",
    "Canvas",
    "CharacterSet",
    "MarkerSet",
]
