"""
Sphere and ring geometry for the planet renderer.

Vertex layout and winding follow the usual UV-sphere / flat-ring
construction of WebGL scene graphs, so the arrays can be uploaded directly.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

DISPLACEMENT_SCALE_FACTOR = 0.05


@dataclass
class Mesh:
    positions: np.ndarray  # float32 (N, 3)
    normals: np.ndarray  # float32 (N, 3)
    uvs: np.ndarray  # float32 (N, 2)
    indices: np.ndarray  # uint32 (M, 3)

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0])


def sample_displacement(displacement: np.ndarray, u: np.ndarray, v: np.ndarray) -> np.ndarray:
    """
    Nearest-pixel lookup of a displacement texture in [0, 1].

    `u` wraps around the horizontal axis; `v` (0 = top row) is clamped.
    """

    rows, cols = displacement.shape[:2]
    channel = displacement[..., 0] if displacement.ndim == 3 else displacement

    col = np.floor(u * cols).astype(np.int64) % cols
    row = np.clip(np.floor(v * rows).astype(np.int64), 0, rows - 1)
    return channel[row, col].astype(np.float64) / 255.0


def build_sphere_mesh(
    width_segments: int = 128,
    height_segments: int = 128,
    radius: float = 1.0,
    displacement: Optional[np.ndarray] = None,
    displacement_scale: float = 0.0
) -> Mesh:
    """
    UV sphere, optionally displaced along its normals.

    Args:
        width_segments: Segments around the equator (>= 3)
        height_segments: Segments pole to pole (>= 2)
        radius: Sphere radius
        displacement: Optional displacement texture (rows, cols[, 3]) as bytes
        displacement_scale: Offset at full displacement intensity

    Returns:
        Mesh with (width_segments + 1) * (height_segments + 1) vertices
    """

    if width_segments < 3 or height_segments < 2:
        raise ValueError("Sphere needs at least 3 width and 2 height segments")

    u = np.arange(width_segments + 1, dtype=np.float64) / width_segments
    v = np.arange(height_segments + 1, dtype=np.float64) / height_segments
    uu, vv = np.meshgrid(u, v)

    phi = uu * 2.0 * np.pi
    theta = vv * np.pi

    normals = np.stack([
        -np.cos(phi) * np.sin(theta),
        np.cos(theta),
        np.sin(phi) * np.sin(theta)
    ], axis=-1).reshape(-1, 3)

    offsets = np.full(normals.shape[0], radius, dtype=np.float64)
    if displacement is not None and displacement_scale:
        offsets += sample_displacement(displacement, uu.ravel(), vv.ravel()) * displacement_scale

    positions = normals * offsets[:, None]
    uvs = np.stack([uu.ravel(), 1.0 - vv.ravel()], axis=-1)

    grid = np.arange((width_segments + 1) * (height_segments + 1)).reshape(
        height_segments + 1, width_segments + 1
    )
    faces = []
    for iy in range(height_segments):
        a = grid[iy, 1:]
        b = grid[iy, :-1]
        c = grid[iy + 1, :-1]
        d = grid[iy + 1, 1:]
        # Degenerate triangles at the poles are skipped
        if iy != 0:
            faces.append(np.stack([a, b, d], axis=-1))
        if iy != height_segments - 1:
            faces.append(np.stack([b, c, d], axis=-1))

    return Mesh(
        positions=positions.astype(np.float32),
        normals=normals.astype(np.float32),
        uvs=uvs.astype(np.float32),
        indices=np.concatenate(faces).astype(np.uint32)
    )


def build_ring_mesh(
    inner_radius: float = 1.4,
    outer_radius: float = 2.2,
    segments: int = 64
) -> Mesh:
    """Flat annulus in the XY plane, facing +Z."""

    if segments < 3:
        raise ValueError("Ring needs at least 3 segments")
    if not 0 <= inner_radius < outer_radius:
        raise ValueError(f"Invalid ring radii: {inner_radius}, {outer_radius}")

    angles = np.arange(segments + 1, dtype=np.float64) / segments * 2.0 * np.pi
    radii = np.array([inner_radius, outer_radius])
    rr, aa = np.meshgrid(radii, angles, indexing="ij")

    x = (rr * np.cos(aa)).ravel()
    y = (rr * np.sin(aa)).ravel()
    positions = np.stack([x, y, np.zeros_like(x)], axis=-1)
    normals = np.tile([0.0, 0.0, 1.0], (positions.shape[0], 1))
    uvs = np.stack([(x / outer_radius + 1) / 2, (y / outer_radius + 1) / 2], axis=-1)

    seg = np.arange(segments)
    a = seg
    b = seg + segments + 1
    c = seg + segments + 2
    d = seg + 1
    indices = np.concatenate([
        np.stack([a, b, d], axis=-1),
        np.stack([b, c, d], axis=-1)
    ])

    return Mesh(
        positions=positions.astype(np.float32),
        normals=normals.astype(np.float32),
        uvs=uvs.astype(np.float32),
        indices=indices.astype(np.uint32)
    )
