"""
Color helpers for poster styling.

Handles:
1. Validating #RRGGBB strings coming from the customizer
2. Lightening a base color for gradient headers and footer tints
3. Converting hex strings to RGB tuples for Pillow
"""

import math
import re
from typing import Tuple

HEX_COLOR_PATTERN = re.compile(r'^#[0-9a-fA-F]{6}$')


class InvalidColorFormat(ValueError):
    """Raised when a color is not a well-formed #RRGGBB string."""

    def __init__(self, color):
        self.color = color
        super().__init__(f"Invalid color {color!r}, expected #RRGGBB")


def is_valid_hex(color) -> bool:
    """Check whether a value is a #RRGGBB string."""
    return isinstance(color, str) and bool(HEX_COLOR_PATTERN.match(color))


def normalize_hex(color: str) -> str:
    """Validate and lowercase a #RRGGBB string."""
    if not is_valid_hex(color):
        raise InvalidColorFormat(color)
    return color.lower()


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse #RRGGBB to an (r, g, b) tuple."""
    value = int(normalize_hex(color)[1:], 16)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def _clamp_channel(value: int) -> int:
    if value < 1:
        return 0
    if value >= 255:
        return 255
    return value


def adjust(color: str, percent: float) -> str:
    """
    Shift every channel of a color by the same amount.

    The shift is round(2.55 * percent), added to R, G and B and clamped
    to [0, 255]. Positive percents lighten; 100 always gives white.

    Args:
        color: Base color as #RRGGBB
        percent: Adjustment in percent (0-100)

    Returns:
        Adjusted color as lowercase #rrggbb

    Examples:
        >>> adjust("#2563eb", 20)
        '#5896ff'
        >>> adjust("#2563eb", 0)
        '#2563eb'
    """
    r, g, b = hex_to_rgb(color)
    # Half-up rounding, so 0.5 steps match what the web preview shows
    amount = math.floor(2.55 * percent + 0.5)

    r = _clamp_channel(r + amount)
    g = _clamp_channel(g + amount)
    b = _clamp_channel(b + amount)

    return f"#{r:02x}{g:02x}{b:02x}"
