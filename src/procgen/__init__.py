"""
Procedural generation primitives.

This package provides the building blocks shared by the planet pipeline:
- Stable string hashing for seed derivation
- Seeded OpenSimplex noise and octave blending
- Hex colour helpers
- Parameter range specifications
"""

from .seeding import stable_hash
from .noise import (
    Octave, SeededNoise2D, fractal_grid, terrain_value, height_value,
    land_threshold, TERRAIN_OCTAVES, HEIGHT_OCTAVES
)
from .color import hex_to_rgb, rgb_to_hex, shift_color, is_hex_color
from .parameters import ParameterSpec, FEATURE_PARAMETERS

__all__ = [
    "stable_hash",
    "Octave", "SeededNoise2D", "fractal_grid", "terrain_value", "height_value",
    "land_threshold", "TERRAIN_OCTAVES", "HEIGHT_OCTAVES",
    "hex_to_rgb", "rgb_to_hex", "shift_color", "is_hex_color",
    "ParameterSpec", "FEATURE_PARAMETERS",
]
