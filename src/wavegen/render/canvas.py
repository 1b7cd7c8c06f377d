"""ASCII line plots of sampled waveforms.

A value sequence is mapped onto a fixed rows x cols character grid:

  row 0          +amp
  row rows//2    zero line (axis)
  row rows-1     -amp

Each column holds exactly one signal marker. The axis row is filled with the
axis marker wherever no signal marker landed on it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from ..constants import AXIS_MARKER, BLANK, CANVAS_ROWS, SIGNAL_MARKER


# =============================================================================
# Marker Sets
# =============================================================================

class CharacterSet(Enum):
    """Available marker sets."""
    ASCII = "ascii"
    UNICODE = "unicode"


@dataclass(frozen=True)
class MarkerSet:
    """Characters used to draw a canvas."""
    name: str
    signal: str
    axis: str
    blank: str = BLANK


MARKER_SETS = {
    CharacterSet.ASCII: MarkerSet(name="ASCII", signal=SIGNAL_MARKER, axis=AXIS_MARKER),
    CharacterSet.UNICODE: MarkerSet(name="Unicode", signal="•", axis="─"),
}


def value_to_row(value: float, amp: float, rows: int) -> int:
    """Map a value to a row index (0 = top = +amp).

    A zero amplitude centers everything on the middle row.

    Args:
        value: Sample value
        amp: Peak amplitude of the plot
        rows: Canvas height

    Returns:
        Row index in [0, rows-1]
    """
    frac = 0.5
    if amp != 0.0:
        frac = (amp - value) / (2.0 * amp)
    frac = max(0.0, min(frac, 1.0))
    # Round half up (frac is never negative here)
    row = int(frac * (rows - 1) + 0.5)
    return max(0, min(row, rows - 1))


# =============================================================================
# Canvas: Owned Character Buffer
# =============================================================================

@dataclass
class Canvas:
    """Fixed-size character grid backed by one contiguous buffer.

    Coordinates:
        - row: 0 to rows-1, top to bottom
        - col: 0 to cols-1, left to right
    """
    cols: int
    rows: int = CANVAS_ROWS
    markers: MarkerSet = MARKER_SETS[CharacterSet.ASCII]

    data: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(
                f"Canvas dimensions must be positive, got {self.rows}x{self.cols}"
            )
        self.data = np.full((self.rows, self.cols), self.markers.blank, dtype="<U1")

    def axis_row(self, amp: float) -> int:
        """Row of the zero line; always the middle row."""
        return value_to_row(0.0, amp, self.rows)

    def plot(self, values: Sequence[float], amp: float):
        """Mark one point per column, then draw the axis under the signal."""
        if len(values) != self.cols:
            raise ValueError(
                f"Expected {self.cols} values, got {len(values)}"
            )
        for col, value in enumerate(values):
            self.data[value_to_row(float(value), amp, self.rows), col] = self.markers.signal

        axis = self.data[self.axis_row(amp)]
        axis[axis == self.markers.blank] = self.markers.axis

    def get_rows(self) -> List[str]:
        """Rows as strings, top to bottom."""
        return ["".join(row) for row in self.data]

    def to_text(self) -> str:
        """All rows as newline-terminated text."""
        return "".join(f"{row}\n" for row in self.get_rows())


# =============================================================================
# Convenience Functions
# =============================================================================

def render(
    values: Sequence[float],
    amp: float,
    rows: int = CANVAS_ROWS,
    cols: Optional[int] = None,
    charset: CharacterSet = CharacterSet.ASCII,
) -> List[str]:
    """Render a value sequence as rows of text (top to bottom).

    Args:
        values: Samples, one per column
        amp: Peak amplitude mapped to the top row
        rows: Canvas height
        cols: Canvas width, defaults to len(values)
        charset: Marker set

    Returns:
        List of row strings, each cols characters wide

    Raises:
        ValueError: On an empty sequence, non-positive dimensions or a
            width that does not match the sequence length
    """
    if len(values) == 0:
        raise ValueError("Cannot render an empty sequence")
    if cols is None:
        cols = len(values)
    canvas = Canvas(cols=cols, rows=rows, markers=MARKER_SETS[charset])
    canvas.plot(values, amp)
    return canvas.get_rows()
