"""
Scene description consumed by the external renderer.

The renderer owns cameras, lights and materials; this module only decides
their parameters from a FeatureSet so every client draws the same planet.
"""

import math
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Tuple

from .features import FeatureSet
from .mesh import DISPLACEMENT_SCALE_FACTOR

ATMOSPHERE_VISIBILITY_THRESHOLD = 0.1
RING_COLOR = "#d3c3a1"


@dataclass(frozen=True)
class SurfaceMaterial:
    displacement_scale: float
    normal_scale: Tuple[float, float] = (0.8, 0.8)
    shininess: float = 10.0
    # Longitude repeats, latitude clamps; the normal pass clamps at the poles
    wrap_s: str = "repeat"
    wrap_t: str = "clamp"
    sphere_segments: Tuple[int, int] = (128, 128)


@dataclass(frozen=True)
class AtmosphereLayer:
    visible: bool
    color: str
    opacity: float
    scale: float = 1.02
    sphere_segments: Tuple[int, int] = (64, 64)
    side: str = "back"


@dataclass(frozen=True)
class RingLayer:
    visible: bool
    inner_radius: float = 1.4
    outer_radius: float = 2.2
    segments: int = 64
    tilt: float = math.pi / 6
    color: str = RING_COLOR
    opacity: float = 0.6
    roughness: float = 0.8


@dataclass(frozen=True)
class CameraSettings:
    position: Tuple[float, float, float] = (0.0, 0.0, 2.8)
    fov: float = 50.0
    min_distance: float = 1.5
    max_distance: float = 5.0
    rotation_speed: float = 0.1  # radians per second about the Y axis


@dataclass(frozen=True)
class LightSettings:
    ambient_intensity: float = 0.2
    point_position: Tuple[float, float, float] = (5.0, 5.0, 5.0)
    point_intensity: float = 1.8
    point_color: str = "#fff7e8"


@dataclass(frozen=True)
class PlanetScene:
    surface: SurfaceMaterial
    atmosphere: AtmosphereLayer
    rings: RingLayer
    camera: CameraSettings = field(default_factory=CameraSettings)
    lights: LightSettings = field(default_factory=LightSettings)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_scene(features: FeatureSet) -> PlanetScene:
    """Map derived features onto renderer parameters."""

    return PlanetScene(
        surface=SurfaceMaterial(
            displacement_scale=DISPLACEMENT_SCALE_FACTOR * features.mountainousness
        ),
        atmosphere=AtmosphereLayer(
            visible=features.atmosphere_density > ATMOSPHERE_VISIBILITY_THRESHOLD,
            color=features.atmosphere_color,
            opacity=0.3 * features.atmosphere_density
        ),
        rings=RingLayer(visible=features.has_rings)
    )
