"""
Analysis of synthesized planet textures.

Summarizes generated maps for the CLI and API: elevation and slope
statistics, measured land coverage versus the requested percentage, and
landmass counts that respect the horizontal wrap of an equirectangular map.
"""

import numpy as np
from typing import Any, Dict, Optional
from scipy.ndimage import label

from ..procgen.color import hex_to_array
from .features import FeatureSet
from .texture_synthesizer import TextureBuffers


class TextureAnalyzer:
    """
    Computes statistics over a TextureBuffers instance.
    """

    def __init__(self, steep_percentile: float = 80.0):
        self.steep_percentile = steep_percentile

    def analyze(self, buffers: TextureBuffers, features: FeatureSet) -> Dict[str, Any]:
        """
        Full texture analysis.

        Args:
            buffers: Output of TextureSynthesizer.synthesize
            features: The feature set the buffers were generated from

        Returns:
            Dictionary with elevation, slope and landmass sections
        """

        land_mask = self.land_mask(buffers, features)

        elevation_stats = self._analyze_elevation(buffers.heightfield)
        slope_analysis = self._analyze_slopes(buffers.heightfield)
        landmass_analysis = self._analyze_landmasses(land_mask, features)

        return {
            "elevation_stats": elevation_stats,
            "slope_analysis": slope_analysis,
            "landmass_analysis": landmass_analysis,
            "surface_classification": self._classify_surface(landmass_analysis),
            "analysis_metadata": {
                "width": buffers.width,
                "height": buffers.height,
                "seed": features.seed
            }
        }

    @staticmethod
    def land_mask(buffers: TextureBuffers, features: FeatureSet) -> np.ndarray:
        """Boolean mask of pixels painted with the land colour."""
        land_rgb = hex_to_array(features.land_color)
        return np.all(buffers.color == land_rgb, axis=-1)

    def _analyze_elevation(self, heightfield: np.ndarray) -> Dict[str, float]:
        """Analyze elevation statistics."""

        flat = heightfield.astype(np.float64).ravel()

        return {
            "min": float(np.min(flat)),
            "max": float(np.max(flat)),
            "mean": float(np.mean(flat)),
            "median": float(np.median(flat)),
            "std": float(np.std(flat)),
            "range": float(np.max(flat) - np.min(flat))
        }

    def _analyze_slopes(self, heightfield: np.ndarray) -> Dict[str, float]:
        """Analyze slope characteristics."""

        grad_y, grad_x = np.gradient(heightfield.astype(np.float64))
        slope_magnitude = np.sqrt(grad_x**2 + grad_y**2)

        steep_threshold = np.percentile(slope_magnitude, self.steep_percentile)

        return {
            "max_slope": float(np.max(slope_magnitude)),
            "mean_slope": float(np.mean(slope_magnitude)),
            "slope_std": float(np.std(slope_magnitude)),
            "steep_threshold": float(steep_threshold)
        }

    def _analyze_landmasses(
        self,
        land_mask: np.ndarray,
        features: FeatureSet
    ) -> Dict[str, Any]:
        """Measured land coverage and wrap-aware landmass count."""

        land_fraction = float(np.mean(land_mask)) if land_mask.size else 0.0
        labeled, count = label(land_mask)
        sizes = np.bincount(labeled.ravel())[1:] if count else np.array([], dtype=np.int64)

        merged = _merge_wrapped_labels(labeled, count)
        if merged:
            merged_sizes: Dict[int, int] = {}
            for original, root in merged.items():
                merged_sizes[root] = merged_sizes.get(root, 0) + int(sizes[original - 1])
            landmass_sizes = sorted(merged_sizes.values(), reverse=True)
        else:
            landmass_sizes = []

        return {
            "requested_land_percentage": float(features.land_mass_percentage),
            "measured_land_percentage": land_fraction * 100.0,
            "landmass_count": len(landmass_sizes),
            "largest_landmass": int(landmass_sizes[0]) if landmass_sizes else 0,
            "average_landmass_size": float(np.mean(landmass_sizes)) if landmass_sizes else 0.0
        }

    def _classify_surface(self, landmass_analysis: Dict[str, Any]) -> str:
        """Coarse label for the land/water layout."""

        measured = landmass_analysis["measured_land_percentage"]
        if measured < 5.0:
            return "ocean_world"
        if measured > 95.0:
            return "land_world"
        if landmass_analysis["landmass_count"] > 20:
            return "archipelago"
        return "continental"


def _merge_wrapped_labels(labeled: np.ndarray, count: int) -> Optional[Dict[int, int]]:
    """
    Union component labels that touch across the left/right seam.

    Returns a mapping label -> representative label, or None when there are
    no components.
    """

    if count == 0:
        return None

    parent = list(range(count + 1))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    left = labeled[:, 0]
    right = labeled[:, -1]
    for a, b in zip(left, right):
        if a and b:
            root_a, root_b = find(int(a)), find(int(b))
            if root_a != root_b:
                parent[max(root_a, root_b)] = min(root_a, root_b)

    return {i: find(i) for i in range(1, count + 1)}
