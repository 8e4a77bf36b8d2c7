"""
Normal-map derivation from a height field.
"""

import numpy as np

DEFAULT_NORMAL_STRENGTH = 5.0


def compute_normal_map(height: np.ndarray, strength: float = DEFAULT_NORMAL_STRENGTH) -> np.ndarray:
    """
    Encode per-pixel surface normals of a [0, 1] height field as RGB bytes.

    Central differences against the four axis neighbours, with coordinates
    clamped at the borders (no wraparound):

        nx = (h[x-1] - h[x+1]) * strength
        ny = (h[y-1] - h[y+1]) * strength
        nz = 1

    The normalized vector is mapped from [-1, 1] to a byte with
    floor((c * 0.5 + 0.5) * 255).

    Args:
        height: Array of shape (rows, cols) with values in [0, 1]
        strength: Scale applied to the height differences

    Returns:
        uint8 array of shape (rows, cols, 3)
    """

    h = np.asarray(height, dtype=np.float64)
    padded = np.pad(h, 1, mode="edge")

    left = padded[1:-1, :-2]
    right = padded[1:-1, 2:]
    down = padded[:-2, 1:-1]
    up = padded[2:, 1:-1]

    nx = (left - right) * strength
    ny = (down - up) * strength
    nz = np.ones_like(h)

    length = np.sqrt(nx * nx + ny * ny + nz * nz)
    normals = np.stack([nx / length, ny / length, nz / length], axis=-1)

    encoded = np.floor((normals * 0.5 + 0.5) * 255.0)
    return np.clip(encoded, 0, 255).astype(np.uint8)


def decode_normal_map(normal: np.ndarray) -> np.ndarray:
    """Map encoded bytes back to vector components in [-1, 1]."""
    return np.asarray(normal, dtype=np.float64) / 255.0 * 2.0 - 1.0
