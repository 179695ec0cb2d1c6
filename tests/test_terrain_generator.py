"""
Tests for island terrain generation.
"""

import numpy as np
import pytest

from py_garden.core.alea_prng import AleaPRNG
from py_garden.core.features import DEFAULT_FEATURES
from py_garden.core.noise import SimplexNoise
from py_garden.core.palette import palette_from_valence
from py_garden.core.terrain_generator import (
    ZONE_THRESHOLDS,
    HeightField,
    TerrainConfig,
    TerrainGenerator,
    TerrainZone,
    classify_height,
    classify_heights,
    generate_terrain,
    plane_vertices,
)


class ConstantNoise:
    name = "constant"

    def __init__(self, value=1.0):
        self.value = value

    def noise(self, x, y):
        return np.full(np.broadcast(np.asarray(x), np.asarray(y)).shape, self.value)


class TestClassification:
    """Test height to zone bucketing."""

    @pytest.mark.parametrize(
        "height,zone",
        [
            (-5.0, TerrainZone.SAND),
            (0.0, TerrainZone.SAND),
            (0.49, TerrainZone.SAND),
            (0.5, TerrainZone.GRASS),
            (3.99, TerrainZone.GRASS),
            (4.0, TerrainZone.GRASS2),
            (8.0, TerrainZone.ROCK),
            (12.0, TerrainZone.MOUNTAIN),
            (15.99, TerrainZone.MOUNTAIN),
            (16.0, TerrainZone.SNOW),
            (40.0, TerrainZone.SNOW),
        ],
    )
    def test_boundaries(self, height, zone):
        """A height equal to a threshold belongs to the zone above it."""
        assert classify_height(height) == zone

    def test_vectorized_matches_scalar(self):
        heights = np.array([-1.0, 0.5, 2.0, 4.0, 7.9, 8.0, 12.0, 16.0, 25.0] + list(ZONE_THRESHOLDS))
        zones = classify_heights(heights)

        assert [int(z) for z in zones] == [int(classify_height(h)) for h in heights]

    def test_palette_slots(self):
        assert [zone.palette_slot for zone in TerrainZone] == [
            "sand", "grass", "grass2", "rock", "mountain", "snow",
        ]


class TestPlaneVertices:
    """Test vertex layout."""

    def test_vertex_count(self):
        x, y = plane_vertices(200.0, 16)
        assert x.shape == y.shape == (17 * 17,)

    def test_row_order(self):
        """Rows start at +y; x runs left to right within a row."""
        x, y = plane_vertices(200.0, 4)

        assert (x[0], y[0]) == (-100.0, 100.0)
        assert (x[1], y[1]) == (-50.0, 100.0)
        assert (x[5], y[5]) == (-100.0, 50.0)
        assert (x[-1], y[-1]) == (100.0, -100.0)

    def test_center_vertex(self):
        x, y = plane_vertices(200.0, 4)
        assert (x[12], y[12]) == (0.0, 0.0)


class TestTerrainGenerator:
    """Test terrain generation."""

    @pytest.fixture
    def config(self):
        return TerrainConfig(segments=32)

    @pytest.fixture
    def palette(self):
        return palette_from_valence(DEFAULT_FEATURES.valence)

    def test_field_shape(self, config, palette):
        field = TerrainGenerator(config).generate(DEFAULT_FEATURES, palette, SimplexNoise(AleaPRNG("shape")))

        assert isinstance(field, HeightField)
        assert field.vertex_count == 33 * 33
        assert field.heights.shape == field.zones.shape == (33 * 33,)
        assert field.colors.shape == (33 * 33, 3)
        assert field.height_grid().shape == (33, 33)
        assert sum(field.zone_counts().values()) == field.vertex_count

    def test_deterministic(self, config, palette):
        gen = TerrainGenerator(config)
        a = gen.generate(DEFAULT_FEATURES, palette, SimplexNoise(AleaPRNG("repeat")))
        b = gen.generate(DEFAULT_FEATURES, palette, SimplexNoise(AleaPRNG("repeat")))

        assert np.array_equal(a.heights, b.heights)
        assert np.array_equal(a.colors, b.colors)

    def test_zero_energy_is_flat_sand(self, config, palette):
        features = DEFAULT_FEATURES.with_values(energy=0.0)
        field = TerrainGenerator(config).generate(features, palette, SimplexNoise(AleaPRNG("flat")))

        assert np.all(field.heights == 0.0)
        assert np.all(field.zones == TerrainZone.SAND)
        assert np.allclose(field.colors, palette.sand)

    def test_outside_island_is_zero(self, config, palette):
        gen = TerrainGenerator(config)
        field = gen.generate(DEFAULT_FEATURES, palette, SimplexNoise(AleaPRNG("edge")))

        dist = np.sqrt(field.x ** 2 + field.y ** 2)
        outside = dist >= gen.island_radius(DEFAULT_FEATURES.loudness)
        assert outside.any()
        assert np.all(field.heights[outside] == 0.0)

    def test_island_radius(self, config):
        gen = TerrainGenerator(config)

        assert gen.island_radius(0.0) == pytest.approx(100.0)
        assert gen.island_radius(-30.0) == pytest.approx(50.0)
        # Very quiet input is floored rather than collapsing to zero
        assert gen.island_radius(-100.0) == pytest.approx(1.0)

    def test_very_quiet_stays_finite(self, config, palette):
        features = DEFAULT_FEATURES.with_values(loudness=-200.0)
        field = TerrainGenerator(config).generate(features, palette, SimplexNoise(AleaPRNG("quiet")))

        assert np.all(np.isfinite(field.heights))

    def test_falloffs_at_center(self, config):
        edge, center = TerrainGenerator(config).falloffs(np.array([0.0]), DEFAULT_FEATURES.loudness)
        assert edge[0] == pytest.approx(1.0)
        assert center[0] == pytest.approx(1.0)

    def test_constant_noise_peak(self, config, palette):
        """With constant noise the center reaches the full fractal sum."""
        field = TerrainGenerator(config).generate(DEFAULT_FEATURES, palette, ConstantNoise(1.0))
        center = field.vertex_count // 2

        assert field.heights[center] == pytest.approx(1.9375 * 30.0 * DEFAULT_FEATURES.energy)
        assert field.zones[center] == TerrainZone.SNOW

    def test_low_heights_squashed(self, config, palette):
        """Heights below 1 are scaled by a quarter."""
        features = DEFAULT_FEATURES.with_values(energy=0.01)
        field = TerrainGenerator(config).generate(features, palette, ConstantNoise(1.0))
        center = field.vertex_count // 2

        assert field.heights[center] == pytest.approx(1.9375 * 30.0 * 0.01 * 0.25)

    def test_colors_follow_zones(self, config, palette):
        field = TerrainGenerator(config).generate(DEFAULT_FEATURES, palette, SimplexNoise(AleaPRNG("colors")))

        for zone in TerrainZone:
            mask = field.zones == zone
            if mask.any():
                assert np.allclose(field.colors[mask], getattr(palette, zone.palette_slot))

    def test_energy_scales_heights(self, config, palette):
        low = TerrainGenerator(config).generate(
            DEFAULT_FEATURES.with_values(energy=0.2), palette, SimplexNoise(AleaPRNG("energy"))
        )
        high = TerrainGenerator(config).generate(
            DEFAULT_FEATURES.with_values(energy=0.9), palette, SimplexNoise(AleaPRNG("energy"))
        )
        assert high.heights.max() > low.heights.max()

    def test_generate_terrain_accepts_dict_config(self, palette):
        field = generate_terrain(DEFAULT_FEATURES, palette, ConstantNoise(0.5), {"segments": 8})
        assert field.segments == 8
        assert field.vertex_count == 81
