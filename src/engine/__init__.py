"""
Planet generation engine.

Turns catalog records into renderable planets:
- Feature derivation (colours, terrain statistics, flags, seed)
- Texture synthesis (colour, displacement and normal maps)
- Texture analysis, sphere/ring meshes and scene parameters
"""

from .features import PlanetRecord, FeatureSet, derive_features, temperature_band
from .texture_synthesizer import TextureSynthesizer, TextureBuffers, synthesize, TEXTURE_KINDS
from .normal_map import compute_normal_map, decode_normal_map
from .texture_analyzer import TextureAnalyzer
from .mesh import Mesh, build_sphere_mesh, build_ring_mesh
from .scene import PlanetScene, build_scene

__all__ = [
    "PlanetRecord", "FeatureSet", "derive_features", "temperature_band",
    "TextureSynthesizer", "TextureBuffers", "synthesize", "TEXTURE_KINDS",
    "compute_normal_map", "decode_normal_map",
    "TextureAnalyzer",
    "Mesh", "build_sphere_mesh", "build_ring_mesh",
    "PlanetScene", "build_scene",
]
