#!/usr/bin/env python3
"""
Simple demo script showing garden generation.
"""

import math

from py_garden.core import DEFAULT_FEATURES, GardenGenerator, TerrainConfig, animate_fireflies


def main():
    """Demonstrate garden generation for a few listening profiles."""
    print("Py-Garden Generation Demo")
    print("=" * 40)

    generator = GardenGenerator(TerrainConfig(segments=64))

    profiles = {
        "defaults": DEFAULT_FEATURES,
        "acoustic": DEFAULT_FEATURES.with_values(acousticness=0.9, energy=0.3, valence=0.2),
        "party": DEFAULT_FEATURES.with_values(danceability=0.95, energy=0.9, liveness=0.6, valence=0.9),
        "quiet": DEFAULT_FEATURES.with_values(loudness=-40.0),
    }

    for name, features in profiles.items():
        print(f"\n{name.upper()} profile:")
        print("-" * 30)

        scene = generator.generate(features, identity=f"demo-{name}")
        summary = scene.summary()

        print(f"  Seed: {scene.seed}")
        print(f"  Height range: {summary['min_height']:.2f} to {summary['max_height']:.2f}")
        print(f"  Trees: {summary['trees']}, fireflies: {summary['fireflies']}")
        print(f"  Sky: {scene.palette.sky.to_hex()}, ocean: {scene.palette.ocean.to_hex()}")

        total = scene.height_field.vertex_count
        for zone, count in summary["zones"].items():
            bar = "#" * int(count / total * 40)
            print(f"  {zone:>8}: {bar} {count}")

        waves = scene.ocean.update(t=1.0)
        print(f"  Ocean crest at t=1s: {waves.max():.2f}")

        if scene.fireflies:
            pose = animate_fireflies(scene.fireflies[:1], t=math.pi)[0]
            print(f"  First firefly at t=pi: opacity {pose.opacity:.2f}, scale {pose.scale:.2f}")


if __name__ == "__main__":
    main()
