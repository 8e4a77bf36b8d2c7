"""
PNG export of synthesized textures.
"""

import base64
import io
from pathlib import Path
from typing import Dict, Union

import numpy as np
from PIL import Image

from ..engine.texture_synthesizer import TextureBuffers


def buffer_to_image(buffer: np.ndarray) -> Image.Image:
    """Wrap a uint8 (rows, cols[, 3]) buffer in a PIL image (RGB or L)."""

    array = np.ascontiguousarray(buffer, dtype=np.uint8)
    if array.ndim == 2 or (array.ndim == 3 and array.shape[2] == 3):
        return Image.fromarray(array)
    raise ValueError(f"Unsupported buffer shape {array.shape}")


def buffer_to_png_bytes(buffer: np.ndarray) -> bytes:
    image = buffer_to_image(buffer)

    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


def buffer_to_base64(buffer: np.ndarray) -> str:
    """Encode a buffer as a PNG data URL."""
    image_base64 = base64.b64encode(buffer_to_png_bytes(buffer)).decode("utf-8")
    return f"data:image/png;base64,{image_base64}"


def save_textures(
    buffers: TextureBuffers,
    output_dir: Union[str, Path],
    stem: str = "planet"
) -> Dict[str, Path]:
    """
    Write color/displacement/normal maps as `<stem>_<kind>.png`.

    Returns:
        Mapping of texture kind -> written path
    """

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {}
    for kind, buffer in buffers.textures().items():
        path = output_dir / f"{stem}_{kind}.png"
        buffer_to_image(buffer).save(path, format="PNG")
        paths[kind] = path

    return paths
