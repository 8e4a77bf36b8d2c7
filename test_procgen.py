"""
Tests for seeding, noise, colour and parameter helpers.
"""

import numpy as np

from src.procgen import (
    stable_hash, SeededNoise2D, fractal_grid, terrain_value, height_value,
    land_threshold, Octave, TERRAIN_OCTAVES, HEIGHT_OCTAVES,
    hex_to_rgb, rgb_to_hex, shift_color, is_hex_color, FEATURE_PARAMETERS
)


def test_stable_hash_reference_values():
    """Hash values must match the reference set exactly."""
    reference = {
        "Kepler-22 b": 1423503852,
        "Test-1b": 242147660,
        "TRAPPIST-1 e": 1309672400,
        "51 Peg b": 589201872,
        "Proxima Cen b": 1481445408,
        "a": 97,
        "ab": 97 * 31 + 98,
    }
    for name, expected in reference.items():
        assert stable_hash(name) == expected, name


def test_stable_hash_empty_and_range():
    assert stable_hash("") == 0
    for name in ["x" * 200, "HD 209458 b", "Gliese 581 g", "étoile"]:
        value = stable_hash(name)
        assert 0 <= value <= 2**31


def test_noise_is_deterministic_per_seed():
    a = SeededNoise2D(1234)
    b = SeededNoise2D(1234)
    c = SeededNoise2D(1235)

    points = [(0.1, 0.2), (1.0, 1.0), (2.0, 2.0), (13.37, -4.2)]
    assert [a(x, y) for x, y in points] == [b(x, y) for x, y in points]
    assert [a(x, y) for x, y in points] != [c(x, y) for x, y in points]


def test_noise_grid_matches_scalar_samples():
    noise = SeededNoise2D(42)
    xs = np.array([0.0, 0.25, 1.5, 3.75])
    ys = np.array([0.5, 2.0, 7.25])

    grid = noise.grid(xs, ys)

    assert grid.shape == (3, 4)
    for row, y in enumerate(ys):
        for col, x in enumerate(xs):
            assert np.isclose(grid[row, col], noise.sample(x, y))


def test_noise_range_and_smoothness():
    noise = SeededNoise2D(7)
    xs = np.linspace(0.0, 10.0, 400)
    values = noise.grid(xs, np.array([0.3]))[0]

    assert np.all(values >= -1.0) and np.all(values <= 1.0)
    # Coherent noise: neighbouring samples differ by far less than the range
    assert np.max(np.abs(np.diff(values))) < 0.5


def test_fractal_grid_weights_and_normalization():
    noise = SeededNoise2D(99)
    u = np.arange(16) / 16
    v = np.arange(8) / 8

    single = fractal_grid(noise, u, v, 3.0, [Octave(1.0, 1.0)])
    assert np.allclose(single, noise.grid(u * 3.0, v * 3.0))

    doubled = fractal_grid(noise, u, v, 3.0, [Octave(1.0, 2.0)], normalize=True)
    assert np.allclose(doubled, single)


def test_terrain_and_height_blends():
    noise = SeededNoise2D(5)
    u = np.arange(32) / 32
    v = np.arange(16) / 16

    terrain = terrain_value(noise, u, v)
    expected = sum(
        noise.grid(u * 1.5 * o.multiplier, v * 1.5 * o.multiplier) * o.weight
        for o in TERRAIN_OCTAVES
    )
    assert np.allclose(terrain, expected)

    height = height_value(noise, u, v, 0.5)
    assert height.shape == (16, 32)
    assert np.all(np.abs(height) <= 1.0 + 1e-9)
    assert sum(o.weight for o in HEIGHT_OCTAVES) == 0.875


def test_land_threshold_mapping():
    assert land_threshold(0) == -1.0
    assert land_threshold(50) == 0.0
    assert land_threshold(100) == 1.0
    assert land_threshold(44) == (44 / 100) * 2 - 1


def test_shift_color():
    assert shift_color("#4f7942", 20) == "#5e9142"
    assert shift_color("#a3c7d6", 20) == "#c3eed6"
    assert shift_color("#8b4513", 20) == "#a65213"
    # Clamped at 255, blue untouched
    assert shift_color("#f0f0f0", 20) == "#fffff0"
    assert shift_color("#4f7942", 20)[-2:] == "42"


def test_color_helpers():
    assert hex_to_rgb("#0077be") == (0, 0x77, 0xbe)
    assert hex_to_rgb("A6C8FF") == (0xa6, 0xc8, 0xff)
    assert rgb_to_hex((1, 2, 300)) == "#0102ff"
    assert is_hex_color("#d3c3a1")
    assert not is_hex_color("#D3C3A1")
    assert not is_hex_color("d3c3a1")


def test_feature_parameter_spec():
    values = {
        "landMassPercentage": 44.0,
        "mountainousness": 0.65,
        "terrainRoughness": 0.5,
        "atmosphereDensity": 0.4,
    }
    assert FEATURE_PARAMETERS.validate(values)

    values["atmosphereDensity"] = 1.5
    problems = FEATURE_PARAMETERS.violations(values)
    assert len(problems) == 1 and problems[0].startswith("atmosphereDensity")
    assert FEATURE_PARAMETERS.clamp(values)["atmosphereDensity"] == 1.0


def test_feature_parameter_ranges_and_defaults():
    ranges = FEATURE_PARAMETERS.get_param_ranges()
    defaults = FEATURE_PARAMETERS.get_defaults()

    assert set(ranges) == set(defaults) == {
        "landMassPercentage", "mountainousness", "terrainRoughness", "atmosphereDensity"
    }
    assert ranges["landMassPercentage"] == (0.0, 100.0)
    assert defaults["terrainRoughness"] == 0.5
    for name, (min_val, max_val) in ranges.items():
        assert min_val <= defaults[name] <= max_val, name
    assert FEATURE_PARAMETERS.clamp({}) == defaults


def main():
    """Run procgen tests."""
    tests = [(name, func) for name, func in globals().items() if name.startswith("test_")]
    passed = 0
    for name, func in tests:
        try:
            func()
            passed += 1
            print(f"{name}: ✓ PASS")
        except AssertionError as e:
            print(f"{name}: ✗ FAIL {e}")
    print(f"\nProcgen tests: {passed}/{len(tests)} passed")


if __name__ == "__main__":
    main()
