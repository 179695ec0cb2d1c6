"""
Island terrain generation.

This module builds the garden's height-and-color field: a square plane of
(segments + 1)² vertices whose heights come from fractal noise shaped by
radial falloffs, then bucketed into color zones by fixed thresholds.
Loudness sets the island radius, energy sets its height.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional, Union

import numpy as np
import structlog

from .features import FeatureVector
from .noise import NoiseSource, fractal_noise
from .palette import ColorPalette

logger = structlog.get_logger()


@dataclass
class TerrainConfig:
    """Configuration for terrain generation."""

    size: float = 200.0
    segments: int = 128

    # Fractal noise
    octaves: int = 5
    base_frequency: float = 0.015
    lacunarity: float = 2.1
    persistence: float = 0.5

    height_scale: float = 30.0

    # Falloff shaping, fixed design constants
    min_loudness_scale: float = 0.01
    epsilon: float = 1e-6
    edge_exponent: float = 2.2
    edge_power: float = 1.2
    center_exponent: float = 2.5

    # Low-lying heights are squashed rather than clamped
    low_height_threshold: float = 1.0
    low_height_factor: float = 0.25


class TerrainZone(IntEnum):
    """Height buckets, lowest first."""

    SAND = 0
    GRASS = 1
    GRASS2 = 2
    ROCK = 3
    MOUNTAIN = 4
    SNOW = 5

    @property
    def palette_slot(self) -> str:
        return self.name.lower()


# Exclusive upper bound of every zone below SNOW
ZONE_THRESHOLDS = (0.5, 4.0, 8.0, 12.0, 16.0)


def classify_height(height: float) -> TerrainZone:
    """Return the first zone whose upper bound is strictly above height."""
    for zone, threshold in zip(TerrainZone, ZONE_THRESHOLDS):
        if height < threshold:
            return zone
    return TerrainZone.SNOW


def classify_heights(heights: np.ndarray) -> np.ndarray:
    """Vectorized classify_height; returns an array of zone ids."""
    # side="right" puts a value equal to a threshold in the zone above it
    return np.searchsorted(np.asarray(ZONE_THRESHOLDS), heights, side="right").astype(np.int8)


@dataclass
class HeightField:
    """
    Per-vertex terrain data.

    Vertices are stored row by row, starting at y = +size/2 and walking
    down to y = -size/2, with x running from -size/2 to +size/2 in each row.
    """

    size: float
    segments: int
    x: np.ndarray
    y: np.ndarray
    heights: np.ndarray
    zones: np.ndarray
    colors: np.ndarray  # (n, 3) float RGB

    @property
    def vertex_count(self) -> int:
        return int(self.heights.shape[0])

    @property
    def shape(self):
        side = self.segments + 1
        return (side, side)

    def height_grid(self) -> np.ndarray:
        return self.heights.reshape(self.shape)

    def zone_counts(self) -> Dict[str, int]:
        counts = np.bincount(self.zones, minlength=len(TerrainZone))
        return {zone.palette_slot: int(counts[zone]) for zone in TerrainZone}


def plane_vertices(size: float, segments: int):
    """Vertex coordinates of a centered square plane, in row-major order."""
    segment_size = size / segments
    half = size / 2.0
    steps = np.arange(segments + 1, dtype=np.float64) * segment_size
    xs = steps - half
    ys = half - steps
    grid_x, grid_y = np.meshgrid(xs, ys)
    return grid_x.ravel(), grid_y.ravel()


class TerrainGenerator:
    """Generates island height fields from listening features."""

    def __init__(self, config: Optional[TerrainConfig] = None):
        self.config = config or TerrainConfig()

    def island_radius(self, loudness: float) -> float:
        """Radius at which the island has tapered to nothing."""
        cfg = self.config
        loudness_norm = (loudness + 60.0) / 60.0
        return cfg.size * 0.5 * max(cfg.min_loudness_scale, loudness_norm)

    def falloffs(self, dist: np.ndarray, loudness: float):
        """
        Radial shaping terms.

        Returns:
            Tuple of (edge_falloff, center_falloff). The center term goes
            negative past the island radius, where the edge term is zero.
        """
        cfg = self.config
        max_dist = max(cfg.epsilon, self.island_radius(loudness))
        norm_dist = dist / max_dist

        edge = np.power(np.maximum(0.0, 1.0 - np.power(norm_dist, cfg.edge_exponent)), cfg.edge_power)
        center = 1.0 - np.power(norm_dist, cfg.center_exponent)
        return edge, center

    def compute_heights(self, x: np.ndarray, y: np.ndarray, features: FeatureVector, noise_source: NoiseSource) -> np.ndarray:
        cfg = self.config
        dist = np.sqrt(x * x + y * y)
        edge_falloff, center_falloff = self.falloffs(dist, features.loudness)

        noise_sum = fractal_noise(
            noise_source,
            x,
            y,
            octaves=cfg.octaves,
            frequency=cfg.base_frequency,
            lacunarity=cfg.lacunarity,
            persistence=cfg.persistence,
        )

        heights = noise_sum * edge_falloff * cfg.height_scale * features.energy * center_falloff
        low = heights < cfg.low_height_threshold
        heights[low] *= cfg.low_height_factor
        return heights

    def generate(self, features: FeatureVector, palette: ColorPalette, noise_source: NoiseSource) -> HeightField:
        """
        Build the full height-and-color field.

        Args:
            features: Listening features (loudness and energy are used)
            palette: Colors for each terrain zone
            noise_source: Seeded 2D noise

        Returns:
            HeightField with heights, zone ids and RGB colors per vertex
        """
        cfg = self.config
        logger.info("Generating terrain", size=cfg.size, segments=cfg.segments, loudness=features.loudness, energy=features.energy)

        x, y = plane_vertices(cfg.size, cfg.segments)
        heights = self.compute_heights(x, y, features, noise_source)
        zones = classify_heights(heights)

        zone_colors = np.array([getattr(palette, zone.palette_slot) for zone in TerrainZone], dtype=np.float64)
        colors = zone_colors[zones]

        field = HeightField(
            size=cfg.size,
            segments=cfg.segments,
            x=x,
            y=y,
            heights=heights,
            zones=zones,
            colors=colors,
        )

        logger.debug(
            "Terrain generated",
            min_height=float(heights.min()),
            max_height=float(heights.max()),
            zones=field.zone_counts(),
        )
        return field


def generate_terrain(
    features: FeatureVector,
    palette: ColorPalette,
    noise_source: NoiseSource,
    config: Optional[Union[TerrainConfig, dict]] = None,
) -> HeightField:
    """Convenience wrapper around TerrainGenerator.generate."""
    if isinstance(config, dict):
        config = TerrainConfig(**config)
    return TerrainGenerator(config).generate(features, palette, noise_source)
