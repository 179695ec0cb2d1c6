"""
Core garden generation functionality.
"""

from .alea_prng import AleaPRNG
from .features import DEFAULT_FEATURES, FeatureVector, average_features, load_features, resolve_features
from .seed import create_stream, feature_fingerprint, resolve_seed
from .palette import Color, ColorPalette, palette_from_valence
from .noise import RandomNoise, SimplexNoise, create_noise_source
from .terrain_generator import HeightField, TerrainConfig, TerrainGenerator, TerrainZone, generate_terrain
from .waves import OceanSurface, WaveParams, wave_height
from .placement import EntityPose, Firefly, Placement, Tree, animate_fireflies, place_entities
from .garden import GardenGenerationError, GardenGenerator, GardenScene, generate_garden

__all__ = ['AleaPRNG', 'DEFAULT_FEATURES', 'FeatureVector', 'average_features', 'load_features',
           'resolve_features', 'create_stream', 'feature_fingerprint', 'resolve_seed', 'Color', 'ColorPalette', 'palette_from_valence',
           'RandomNoise', 'SimplexNoise', 'create_noise_source',
           'HeightField', 'TerrainConfig', 'TerrainGenerator', 'TerrainZone', 'generate_terrain',
           'OceanSurface', 'WaveParams', 'wave_height',
           'EntityPose', 'Firefly', 'Placement', 'Tree', 'animate_fireflies', 'place_entities',
           'GardenGenerationError', 'GardenGenerator', 'GardenScene', 'generate_garden']
