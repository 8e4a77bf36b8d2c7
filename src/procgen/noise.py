"""
Seeded coherent noise for planet textures.

OpenSimplex-based implementations of:
- A seeded 2D noise generator, queried at scalars or over coordinate grids
- Multi-octave blending over a (u, v) texture grid
- The land/water threshold mapping
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from opensimplex import OpenSimplex


@dataclass(frozen=True)
class Octave:
    """One octave of a fractal blend: frequency multiplier and weight."""
    multiplier: float
    weight: float


# Land/water classification: {2, 4, 8} x 1.5 with weights {0.6, 0.3, 0.1}
TERRAIN_FREQUENCY = 1.5
TERRAIN_OCTAVES: Tuple[Octave, ...] = (
    Octave(2.0, 0.6),
    Octave(4.0, 0.3),
    Octave(8.0, 0.1),
)

# Height: {5, 10, 20} x (2 * roughness), weights {0.5, 0.25, 0.125}
HEIGHT_FREQUENCY_SCALE = 2.0
HEIGHT_OCTAVES: Tuple[Octave, ...] = (
    Octave(5.0, 0.5),
    Octave(10.0, 0.25),
    Octave(20.0, 0.125),
)


class SeededNoise2D:
    """
    Deterministic 2D coherent noise bound to an explicit seed.

    Two instances built from the same seed return identical values; the
    generator holds no mutable state after construction, so it can be
    shared between row bands.
    """

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._simplex = OpenSimplex(seed=self.seed)

    def sample(self, x: float, y: float) -> float:
        """Noise value in [-1, 1] at a single point."""
        value = self._simplex.noise2(float(x), float(y))
        return float(min(1.0, max(-1.0, value)))

    def grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Evaluate noise over the Cartesian product of two coordinate axes.

        Args:
            xs: 1-D array of x coordinates (columns)
            ys: 1-D array of y coordinates (rows)

        Returns:
            Array of shape (len(ys), len(xs)) with values in [-1, 1]
        """

        xs = np.ascontiguousarray(xs, dtype=np.float64)
        ys = np.ascontiguousarray(ys, dtype=np.float64)
        values = self._simplex.noise2array(xs, ys)
        return np.clip(values, -1.0, 1.0)

    def __call__(self, x: float, y: float) -> float:
        return self.sample(x, y)

    def __repr__(self) -> str:
        return f"SeededNoise2D(seed={self.seed})"


def fractal_grid(
    noise: SeededNoise2D,
    u: np.ndarray,
    v: np.ndarray,
    frequency: float,
    octaves: Sequence[Octave],
    normalize: bool = False
) -> np.ndarray:
    """
    Blend several octaves of the same generator over a (u, v) grid.

        value = sum_i N(u * frequency * m_i, v * frequency * m_i) * w_i

    Args:
        noise: Base generator (shared by every octave)
        u: 1-D horizontal texture coordinates in [0, 1)
        v: 1-D vertical texture coordinates in [0, 1)
        frequency: Base frequency applied before the octave multipliers
        octaves: Multiplier/weight pairs
        normalize: Divide by the weight sum to bring the result back to ~[-1, 1]

    Returns:
        Array of shape (len(v), len(u))
    """

    total = np.zeros((len(v), len(u)), dtype=np.float64)
    weight_sum = 0.0

    for octave in octaves:
        scale = frequency * octave.multiplier
        total += noise.grid(u * scale, v * scale) * octave.weight
        weight_sum += octave.weight

    if normalize and weight_sum > 0.0:
        total /= weight_sum

    return total


def terrain_value(noise: SeededNoise2D, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Blended noise used for land/water classification."""
    return fractal_grid(noise, u, v, TERRAIN_FREQUENCY, TERRAIN_OCTAVES)


def height_value(
    noise: SeededNoise2D,
    u: np.ndarray,
    v: np.ndarray,
    terrain_roughness: float
) -> np.ndarray:
    """Blended, weight-normalized noise used for elevation."""
    frequency = HEIGHT_FREQUENCY_SCALE * terrain_roughness
    return fractal_grid(noise, u, v, frequency, HEIGHT_OCTAVES, normalize=True)


def land_threshold(land_mass_percentage: float) -> float:
    """Map a land percentage (0-100) onto a noise threshold in [-1, 1]."""
    return (land_mass_percentage / 100.0) * 2.0 - 1.0
