"""
Tests for texture synthesis, normal maps and texture analysis.
"""

import dataclasses

import numpy as np
import pytest

from src.engine import (
    PlanetRecord, TextureSynthesizer, TextureAnalyzer, derive_features, synthesize,
    compute_normal_map, decode_normal_map
)
from src.engine.texture_analyzer import _merge_wrapped_labels
from src.procgen import SeededNoise2D, terrain_value, height_value, land_threshold, hex_to_rgb


def _features(name="Kepler-22 b", mass=9.1, eqt=262):
    return derive_features(PlanetRecord(pl_name=name, pl_masse=mass, pl_eqt=eqt))


def test_buffer_shape_default_resolution():
    buffers = synthesize(_features(), width=1024, height=512)

    assert buffers.pixel_count == 1024 * 512
    assert (buffers.width, buffers.height) == (1024, 512)
    for kind, buffer in buffers.textures().items():
        assert buffer.shape == (512, 1024, 3), kind
        assert buffer.dtype == np.uint8, kind
    assert buffers.heightfield.shape == (512, 1024)


def test_synthesis_is_deterministic():
    synthesizer = TextureSynthesizer(width=128, height=64)
    features = _features()

    a = synthesizer.synthesize(features)
    b = synthesizer.synthesize(features)

    for kind in ("color", "displacement", "normal", "heightfield"):
        assert np.array_equal(getattr(a, kind), getattr(b, kind)), kind


def test_band_partitioning_does_not_change_output():
    features = _features("TRAPPIST-1 e", 0.69, 250)
    whole = TextureSynthesizer(width=96, height=48, band_rows=48).synthesize(features)
    banded = TextureSynthesizer(width=96, height=48, band_rows=7).synthesize(features)

    for kind in ("color", "displacement", "normal", "heightfield"):
        assert np.array_equal(getattr(whole, kind), getattr(banded, kind)), kind


def test_color_buffer_uses_land_and_water_colors():
    features = _features()
    buffers = TextureSynthesizer(width=128, height=64).synthesize(features)

    land = np.array(hex_to_rgb(features.land_color), dtype=np.uint8)
    water = np.array(hex_to_rgb(features.water_color), dtype=np.uint8)
    is_land = np.all(buffers.color == land, axis=-1)
    is_water = np.all(buffers.color == water, axis=-1)
    assert np.all(is_land | is_water)

    # Classification follows the seeded terrain blend
    u = np.arange(128) / 128
    v = np.arange(64) / 64
    expected = terrain_value(SeededNoise2D(features.seed), u, v) > land_threshold(
        features.land_mass_percentage
    )
    assert np.array_equal(is_land, expected)


def test_land_percentage_extremes():
    base = _features()
    water = features_with(base, land_mass_percentage=100.0)
    land = features_with(base, land_mass_percentage=-25.0)

    synthesizer = TextureSynthesizer(width=64, height=32)
    water_rgb = np.array(hex_to_rgb(base.water_color), dtype=np.uint8)
    land_rgb = np.array(hex_to_rgb(base.land_color), dtype=np.uint8)

    # Threshold +1 can never be exceeded; threshold -1.5 always is
    assert np.all(synthesizer.synthesize(water).color == water_rgb)
    assert np.all(synthesizer.synthesize(land).color == land_rgb)


def features_with(features, **changes):
    return dataclasses.replace(features, **changes)


def test_height_uses_separate_generator():
    features = _features()
    buffers = TextureSynthesizer(width=64, height=32).synthesize(features)

    u = np.arange(64) / 64
    v = np.arange(32) / 32
    expected = height_value(SeededNoise2D(features.seed + 1), u, v, features.terrain_roughness)
    assert np.array_equal(buffers.heightfield, (expected * 0.5 + 0.5).astype(np.float32))

    same_seed = height_value(SeededNoise2D(features.seed), u, v, features.terrain_roughness)
    assert not np.allclose(expected, same_seed)


def test_displacement_matches_heightfield():
    buffers = TextureSynthesizer(width=80, height=40).synthesize(_features())

    assert np.all(buffers.heightfield >= 0.0) and np.all(buffers.heightfield <= 1.0)
    gray = buffers.displacement[..., 0]
    assert np.array_equal(gray, buffers.displacement[..., 1])
    assert np.array_equal(gray, buffers.displacement[..., 2])
    expected = np.floor(buffers.heightfield.astype(np.float64) * 255).astype(np.uint8)
    assert np.array_equal(gray, expected)


def test_normal_map_unit_length():
    buffers = TextureSynthesizer(width=128, height=64).synthesize(_features())
    decoded = decode_normal_map(buffers.normal)
    lengths = np.linalg.norm(decoded, axis=-1)

    assert np.allclose(lengths, 1.0, atol=0.02)
    # Mostly blue: z is the dominant component
    assert np.all(buffers.normal[..., 2] >= 127)


def test_normal_map_flat_and_sloped():
    flat = compute_normal_map(np.full((4, 6), 0.5))
    assert np.all(flat == np.array([127, 127, 255], dtype=np.uint8))

    # Height rising to the right tilts normals towards -x
    ramp = np.tile(np.linspace(0.0, 0.5, 6), (4, 1))
    normals = decode_normal_map(compute_normal_map(ramp, strength=5.0))
    assert np.all(normals[:, 1:-1, 0] < 0)
    assert np.allclose(normals[..., 1], normals[0, 0, 1], atol=1e-9)

    # Edges clamp: the first column only sees one neighbour difference
    inner = compute_normal_map(ramp)[0, 2, 0]
    edge = compute_normal_map(ramp)[0, 0, 0]
    assert edge > inner


def test_normal_map_rows_increasing_downwards():
    ramp = np.tile(np.linspace(0.0, 0.5, 5)[:, None], (1, 3))
    normals = decode_normal_map(compute_normal_map(ramp))
    # ny = (h[y-1] - h[y+1]) * strength is negative when height grows with y
    assert np.all(normals[1:-1, :, 1] < 0)


def test_invalid_resolution():
    with pytest.raises(ValueError):
        TextureSynthesizer(width=0, height=10)
    with pytest.raises(ValueError):
        TextureSynthesizer(width=10, height=10, band_rows=0)


def test_analyzer_reports_land_fraction():
    features = _features()
    buffers = TextureSynthesizer(width=128, height=64).synthesize(features)
    analysis = TextureAnalyzer().analyze(buffers, features)

    landmasses = analysis["landmass_analysis"]
    measured = landmasses["measured_land_percentage"]
    mask = TextureAnalyzer.land_mask(buffers, features)

    assert measured == pytest.approx(mask.mean() * 100.0)
    assert 0.0 <= measured <= 100.0
    assert landmasses["requested_land_percentage"] == features.land_mass_percentage
    assert analysis["elevation_stats"]["min"] >= 0.0
    assert analysis["elevation_stats"]["max"] <= 1.0
    assert analysis["surface_classification"] in {
        "ocean_world", "land_world", "archipelago", "continental"
    }
    if mask.any():
        assert landmasses["landmass_count"] >= 1


def test_landmasses_merge_across_horizontal_seam():
    from scipy.ndimage import label

    mask = np.zeros((4, 8), dtype=bool)
    mask[1:3, 0:2] = True
    mask[1:3, 6:8] = True
    mask[0, 4] = True

    labeled, count = label(mask)
    assert count == 3

    merged = _merge_wrapped_labels(labeled, count)
    assert len(set(merged.values())) == 2
    assert _merge_wrapped_labels(np.zeros((2, 2), dtype=int), 0) is None


def main():
    """Run texture tests."""
    tests = [(name, func) for name, func in globals().items() if name.startswith("test_")]
    passed = 0
    for name, func in tests:
        try:
            func()
            passed += 1
            print(f"{name}: ✓ PASS")
        except AssertionError as e:
            print(f"{name}: ✗ FAIL {e}")
    print(f"\nTexture tests: {passed}/{len(tests)} passed")


if __name__ == "__main__":
    main()
