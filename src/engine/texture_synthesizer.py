"""
Procedural texture synthesis for planet surfaces.

Produces equirectangular colour, displacement and normal maps from a
FeatureSet. Pass 1 (colour and height) runs over independent row bands;
Pass 2 (normals) starts only once the whole height field exists, since any
pixel may read any neighbour.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

import numpy as np
from tqdm import tqdm

from ..procgen import SeededNoise2D, terrain_value, height_value, land_threshold
from ..procgen.color import hex_to_array
from .features import FeatureSet
from .normal_map import compute_normal_map, DEFAULT_NORMAL_STRENGTH

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 512
TEXTURE_KINDS = ("color", "displacement", "normal")


@dataclass
class TextureBuffers:
    """
    Output of one synthesis run.

    Attributes:
        color: uint8 (rows, cols, 3) land/water colours
        displacement: uint8 (rows, cols, 3) grayscale elevation
        normal: uint8 (rows, cols, 3) encoded unit normals
        heightfield: float32 (rows, cols) elevation in [0, 1]
    """
    color: np.ndarray
    displacement: np.ndarray
    normal: np.ndarray
    heightfield: np.ndarray

    @property
    def width(self) -> int:
        return self.color.shape[1]

    @property
    def height(self) -> int:
        return self.color.shape[0]

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def textures(self) -> Dict[str, np.ndarray]:
        """The three image buffers keyed by texture kind."""
        return {kind: getattr(self, kind) for kind in TEXTURE_KINDS}


@dataclass
class _Band:
    color: np.ndarray
    heightfield: np.ndarray
    displacement: np.ndarray


class TextureSynthesizer:
    """
    Seeded texture generator for a fixed resolution.

    Two generators are built per run: one seeded with `seed` for land/water
    classification, one seeded with `seed + 1` for elevation.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        normal_strength: float = DEFAULT_NORMAL_STRENGTH,
        band_rows: int = 64,
        show_progress: bool = False
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Texture size must be positive, got {width}x{height}")
        if band_rows <= 0:
            raise ValueError(f"band_rows must be positive, got {band_rows}")

        self.width = width
        self.height = height
        self.normal_strength = normal_strength
        self.band_rows = band_rows
        self.show_progress = show_progress

    def synthesize(self, features: FeatureSet) -> TextureBuffers:
        """
        Generate colour, displacement and normal maps.

        Args:
            features: Derived planet features

        Returns:
            TextureBuffers of shape (height, width)
        """

        terrain_noise = SeededNoise2D(features.seed)
        height_noise = SeededNoise2D(features.seed + 1)

        u = np.arange(self.width, dtype=np.float64) / self.width
        v = np.arange(self.height, dtype=np.float64) / self.height

        color = np.empty((self.height, self.width, 3), dtype=np.uint8)
        displacement = np.empty((self.height, self.width, 3), dtype=np.uint8)
        heightfield = np.empty((self.height, self.width), dtype=np.float32)

        # Pass 1: colour and height, band by band
        for start, stop in self._bands():
            band = self._synthesize_band(features, terrain_noise, height_noise, u, v[start:stop])
            color[start:stop] = band.color
            heightfield[start:stop] = band.heightfield
            displacement[start:stop] = band.displacement

        # Pass 2: normals from the complete height field
        normal = compute_normal_map(heightfield, self.normal_strength)

        return TextureBuffers(
            color=color,
            displacement=displacement,
            normal=normal,
            heightfield=heightfield
        )

    def _bands(self) -> Iterable[Tuple[int, int]]:
        bands = [
            (start, min(start + self.band_rows, self.height))
            for start in range(0, self.height, self.band_rows)
        ]
        if self.show_progress:
            return tqdm(bands, desc="Synthesizing textures", unit="band")
        return bands

    @staticmethod
    def _synthesize_band(
        features: FeatureSet,
        terrain_noise: SeededNoise2D,
        height_noise: SeededNoise2D,
        u: np.ndarray,
        v: np.ndarray
    ) -> _Band:
        """Colour and elevation for the rows at vertical coordinates `v`."""

        threshold = land_threshold(features.land_mass_percentage)
        is_land = terrain_value(terrain_noise, u, v) > threshold

        color = np.where(
            is_land[..., None],
            hex_to_array(features.land_color),
            hex_to_array(features.water_color)
        ).astype(np.uint8)

        elevation = height_value(height_noise, u, v, features.terrain_roughness)
        heightfield = (elevation * 0.5 + 0.5).astype(np.float32)

        gray = np.floor(heightfield.astype(np.float64) * 255.0)
        gray = np.clip(gray, 0, 255).astype(np.uint8)
        displacement = np.repeat(gray[..., None], 3, axis=-1)

        return _Band(color=color, heightfield=heightfield, displacement=displacement)


def synthesize(
    features: FeatureSet,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT
) -> TextureBuffers:
    """Synthesize textures with default settings."""
    return TextureSynthesizer(width=width, height=height).synthesize(features)
