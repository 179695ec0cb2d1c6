"""
Garden scene generation.

Ties the pieces together: features and seed in, a complete scene out.
Generation runs once, start to finish; the only per-frame work left for a
renderer is evaluating wave heights and firefly poses for elapsed time.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

import structlog

from .seed import create_stream, resolve_seed
from .features import FeatureVector, resolve_features
from .noise import create_noise_source
from .palette import ColorPalette, palette_from_valence
from .placement import Firefly, Tree, place_entities
from .terrain_generator import HeightField, TerrainConfig, TerrainGenerator
from .waves import OceanSurface, WaveParams

logger = structlog.get_logger()


class GardenGenerationError(RuntimeError):
    """Generation failed; the scene cannot be shown."""


@dataclass
class GardenScene:
    """Everything a renderer needs to draw a garden."""

    seed: str
    features: FeatureVector
    palette: ColorPalette
    height_field: HeightField
    wave_params: WaveParams
    ocean: OceanSurface
    trees: List[Tree]
    fireflies: List[Firefly]
    noise_source: str = "simplex"

    def summary(self) -> Dict[str, Any]:
        heights = self.height_field.heights
        return {
            "seed": self.seed,
            "noise_source": self.noise_source,
            "vertices": self.height_field.vertex_count,
            "min_height": float(heights.min()),
            "max_height": float(heights.max()),
            "zones": self.height_field.zone_counts(),
            "trees": len(self.trees),
            "fireflies": len(self.fireflies),
        }


class GardenGenerator:
    """
    Builds garden scenes.

    Each call to generate() owns a fresh seeded stream, so scenes are
    independent and reproducible.
    """

    def __init__(
        self,
        terrain_config: Optional[TerrainConfig] = None,
        noise_source: str = "simplex",
        ocean_segments: int = 32,
    ):
        self.terrain_config = terrain_config or TerrainConfig()
        self.noise_kind = noise_source
        self.ocean_segments = ocean_segments

    @classmethod
    def from_settings(cls, settings) -> "GardenGenerator":
        return cls(
            terrain_config=settings.terrain_config(),
            noise_source=settings.noise_source,
            ocean_segments=settings.ocean_segments,
        )

    def generate(
        self,
        features: Optional[Union[FeatureVector, Mapping[str, Any]]] = None,
        identity: Optional[str] = None,
    ) -> GardenScene:
        """
        Generate a complete scene.

        Args:
            features: Listening features; absent fields use defaults
            identity: Stable user identity for seeding; a feature
                fingerprint is used when missing

        Returns:
            GardenScene

        Raises:
            GardenGenerationError: if any stage fails
        """
        start = time.perf_counter()
        log = logger

        try:
            resolved = resolve_features(features)
            seed = resolve_seed(identity, resolved)
            log = logger.bind(seed=seed)

            prng = create_stream(seed)
            palette = palette_from_valence(resolved.valence)
            noise = create_noise_source(self.noise_kind, prng)

            height_field = TerrainGenerator(self.terrain_config).generate(resolved, palette, noise)

            wave_params = WaveParams.from_danceability(resolved.danceability)
            ocean = OceanSurface(wave_params, size=self.terrain_config.size, segments=self.ocean_segments)

            placement = place_entities(height_field, resolved, prng, palette)
        except Exception as e:
            log.error("Garden generation failed", error=str(e))
            raise GardenGenerationError(str(e)) from e

        scene = GardenScene(
            seed=seed,
            features=resolved,
            palette=palette,
            height_field=height_field,
            wave_params=wave_params,
            ocean=ocean,
            trees=placement.trees,
            fireflies=placement.fireflies,
            noise_source=getattr(noise, "name", type(noise).__name__),
        )

        log.info("Garden generated", elapsed_seconds=round(time.perf_counter() - start, 4), **scene.summary())
        return scene


def generate_garden(
    features: Optional[Union[FeatureVector, Mapping[str, Any]]] = None,
    identity: Optional[str] = None,
    terrain_config: Optional[TerrainConfig] = None,
    noise_source: str = "simplex",
) -> GardenScene:
    """Generate a scene with a one-off GardenGenerator."""
    return GardenGenerator(terrain_config, noise_source=noise_source).generate(features, identity)
