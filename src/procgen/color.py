"""
Hex colour helpers shared by feature derivation and texture synthesis.
"""

import re
from typing import Tuple

import numpy as np

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-f]{6}$")

RGB = Tuple[int, int, int]


def hex_to_rgb(hex_color: str) -> RGB:
    """Parse '#rrggbb' (case-insensitive, '#' optional) into an RGB triple."""
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a 6-digit hex colour, got {hex_color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    """Format an RGB triple as lowercase '#rrggbb', clamping each channel."""
    r, g, b = (max(0, min(255, int(c))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_array(hex_color: str) -> np.ndarray:
    """RGB triple as a uint8 array, ready to broadcast into an image buffer."""
    return np.array(hex_to_rgb(hex_color), dtype=np.uint8)


def shift_color(hex_color: str, percent: float) -> str:
    """
    Brighten the red and green channels by `percent` percent.

    Each channel is multiplied by (1 + percent / 100), floored and clamped
    to 255. Blue is left untouched.
    """

    r, g, b = hex_to_rgb(hex_color)
    factor = 1 + percent / 100
    new_r = min(255, int(np.floor(r * factor)))
    new_g = min(255, int(np.floor(g * factor)))
    return rgb_to_hex((new_r, new_g, b))


def is_hex_color(value: str) -> bool:
    return bool(HEX_COLOR_PATTERN.match(value))
