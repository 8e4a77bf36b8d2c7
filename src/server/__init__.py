"""
Serving components for the exoplanet of the day:
- FastAPI server exposing features and textures
- PNG export helpers
- Command-line renderer
"""

from .export import buffer_to_image, buffer_to_png_bytes, buffer_to_base64, save_textures
from .api import create_app, main

__all__ = [
    "buffer_to_image", "buffer_to_png_bytes", "buffer_to_base64", "save_textures",
    "create_app", "main",
]
