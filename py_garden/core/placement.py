"""
Deterministic placement of trees and fireflies.

Both passes walk the terrain vertices in order and draw from the garden's
seeded stream, so a given seed always yields the same scene. Fireflies
carry fixed animation parameters; their displayed pose is recomputed from
elapsed time alone.
"""

import math
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import structlog

from .alea_prng import AleaPRNG
from .features import FeatureVector
from .palette import PALETTE_ENDPOINTS, Color, ColorPalette
from .terrain_generator import HeightField

logger = structlog.get_logger()

Vector3 = Tuple[float, float, float]

# Terrain-local frame: height runs along z
TERRAIN_UP: Vector3 = (0.0, 0.0, 1.0)

TREE_DENSITY = 0.3
TREE_MIN_HEIGHT = 1.0
TREE_MAX_HEIGHT = 6.0  # exclusive
TREE_BASE_OFFSET = 1.0
TREE_HUE_JITTER = 0.05
TREE_LIGHTNESS_JITTER = 0.1

FIREFLY_DENSITY = 0.2
FIREFLY_MIN_HEIGHT = 1.0
FIREFLY_MAX_HEIGHT = 10.0  # inclusive
FIREFLY_BASE_OFFSET = 0.5

FLUTTER_AMPLITUDE = 0.1
DRIFT_AMPLITUDE = 0.2
PULSE_RATE = 2.0


@dataclass(frozen=True)
class Tree:
    position: Vector3
    color: Color
    rotation: float  # yaw, radians


class EntityPose(NamedTuple):
    position: Vector3
    opacity: float
    scale: float


@dataclass(frozen=True)
class Firefly:
    """A glowing particle with fixed animation parameters."""

    position: Vector3
    phase: float
    speed: float
    drift_direction: Vector3
    drift_speed: float

    def flutter(self, t: float) -> float:
        """Vertical bob along the up axis."""
        return math.sin(t * self.speed + self.phase) * FLUTTER_AMPLITUDE

    def drift(self, t: float) -> Tuple[float, float]:
        """Forward/back and sideways wander offsets."""
        angle = t * self.drift_speed + self.phase
        return math.sin(angle) * DRIFT_AMPLITUDE, math.cos(angle) * DRIFT_AMPLITUDE

    def pulse(self, t: float) -> float:
        return 0.5 + 0.5 * math.sin(t * PULSE_RATE + self.phase)

    def pose(self, t: float, up: Sequence[float] = TERRAIN_UP) -> EntityPose:
        """Position, opacity and scale at elapsed time t."""
        up_vec = _normalize(np.asarray(up, dtype=np.float64))
        direction = np.asarray(self.drift_direction, dtype=np.float64)

        # Keep the wander in the plane perpendicular to up
        horizontal = _normalize(direction - up_vec * np.dot(direction, up_vec))
        perpendicular = _normalize(np.cross(up_vec, horizontal))

        forward, side = self.drift(t)
        position = (
            np.asarray(self.position, dtype=np.float64)
            + up_vec * self.flutter(t)
            + horizontal * forward
            + perpendicular * side
        )

        pulse = self.pulse(t)
        return EntityPose(
            position=tuple(float(c) for c in position),
            opacity=0.5 + 0.5 * pulse,
            scale=1.0 + 0.3 * pulse,
        )


@dataclass
class Placement:
    trees: List[Tree] = field(default_factory=list)
    fireflies: List[Firefly] = field(default_factory=list)


def _normalize(vector: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0:
        return vector
    return vector / length


def _drift_direction(prng: AleaPRNG) -> Vector3:
    dx = prng.jitter(2.0)
    dy = prng.jitter(2.0)
    length = math.hypot(dx, dy)
    if length == 0.0:
        return (1.0, 0.0, 0.0)
    return (dx / length, dy / length, 0.0)


def place_trees(height_field: HeightField, acousticness: float, base_color: Color, prng: AleaPRNG) -> List[Tree]:
    """One draw per vertex; higher acousticness means a denser forest."""
    threshold = TREE_DENSITY * acousticness
    trees = []

    for x, y, z in zip(height_field.x, height_field.y, height_field.heights):
        if prng.random() >= threshold:
            continue
        if z < TREE_MIN_HEIGHT or z >= TREE_MAX_HEIGHT:
            continue

        color = base_color.offset_hsl(prng.jitter(TREE_HUE_JITTER), 0.0, prng.jitter(TREE_LIGHTNESS_JITTER))
        trees.append(
            Tree(
                position=(float(x), float(y), float(z) + TREE_BASE_OFFSET),
                color=color,
                rotation=prng.angle(),
            )
        )

    return trees


def place_fireflies(height_field: HeightField, liveness: float, prng: AleaPRNG) -> List[Firefly]:
    """Fresh draw per vertex; fireflies hover over mid to high ground."""
    threshold = FIREFLY_DENSITY * liveness
    fireflies = []

    for x, y, z in zip(height_field.x, height_field.y, height_field.heights):
        if prng.random() >= threshold:
            continue
        if z < FIREFLY_MIN_HEIGHT or z > FIREFLY_MAX_HEIGHT:
            continue

        direction = _drift_direction(prng)
        fireflies.append(
            Firefly(
                position=(float(x), float(y), float(z) + FIREFLY_BASE_OFFSET),
                phase=prng.angle(),
                speed=prng.uniform(0.5, 1.5),
                drift_direction=direction,
                drift_speed=prng.uniform(0.05, 0.1),
            )
        )

    return fireflies


def place_entities(
    height_field: HeightField,
    features: FeatureVector,
    prng: AleaPRNG,
    palette: Optional[ColorPalette] = None,
) -> Placement:
    """
    Place trees, then fireflies, consuming the stream in that order.

    Args:
        height_field: Generated terrain
        features: Listening features (acousticness and liveness are used)
        prng: Seeded stream shared with terrain generation
        palette: Source of the base tree color; defaults to the cold tree color

    Returns:
        Placement with trees and fireflies
    """
    base_color = palette.tree if palette is not None else PALETTE_ENDPOINTS["tree"][0]

    trees = place_trees(height_field, features.acousticness, base_color, prng)
    fireflies = place_fireflies(height_field, features.liveness, prng)

    logger.info("Entities placed", trees=len(trees), fireflies=len(fireflies), draws=prng.call_count)
    return Placement(trees=trees, fireflies=fireflies)


def animate_fireflies(fireflies: Sequence[Firefly], t: float, up: Sequence[float] = TERRAIN_UP) -> List[EntityPose]:
    """Poses for every firefly at time t."""
    return [firefly.pose(t, up) for firefly in fireflies]
