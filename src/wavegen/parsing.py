"""
User input parsing for the waveform shell.

Phase accepts several notations, all converted to radians:

    1.57        plain radians
    r:1.57      explicit radians
    d:90        explicit degrees
    90deg       degree suffix
    90d         short degree suffix
    3.14/2      fraction (radians)
"""

from math import isfinite, radians


def _to_float(text: str) -> float:
    value = float(text)
    if not isfinite(value):
        raise ValueError(f"not a finite number: {text!r}")
    return value


def parse_number(text: str, name: str = "value") -> float:
    """Parse a finite float, naming the parameter in the error."""
    try:
        return _to_float(text.strip())
    except ValueError:
        raise ValueError(f"Invalid {name}: {text!r}") from None


def parse_phase(text: str) -> float:
    """Parse a phase string to radians.

    Args:
        text: Phase in any notation listed in the module docstring

    Returns:
        Phase in radians

    Raises:
        ValueError: If the text matches no notation
    """
    s = text.strip()
    lowered = s.lower()
    try:
        if lowered.startswith("r:"):
            return _to_float(s[2:])
        if lowered.startswith("d:"):
            return radians(_to_float(s[2:]))
        if lowered.endswith("deg"):
            return radians(_to_float(s[:-3]))
        if lowered.endswith("d"):
            return radians(_to_float(s[:-1]))
        if "/" in s:
            numerator, denominator = s.split("/", 1)
            den = _to_float(denominator)
            if den == 0.0:
                raise ValueError("zero denominator")
            return _to_float(numerator) / den
        return _to_float(s)
    except ValueError:
        raise ValueError(f"Failed to parse phase: {text!r}") from None
