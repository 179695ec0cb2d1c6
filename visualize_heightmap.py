#!/usr/bin/env python3
"""
Visualize a generated garden.
Renders the island height field in palette colors with tree and firefly
markers, next to a plain height map with zone contours.
"""

import argparse
import json
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

sys.path.append(str(Path(__file__).parent))

from py_garden.core.features import DEFAULT_FEATURES, load_features
from py_garden.core.garden import GardenGenerator
from py_garden.core.terrain_generator import ZONE_THRESHOLDS, TerrainConfig
from py_garden.utils.logging_config import configure_logging


def visualize_garden(scene, output_file=None, show=True):
    """
    Plot a garden scene.

    Args:
        scene: GardenScene to draw
        output_file: PNG path; defaults to garden_<seed>.png
        show: Open an interactive window after saving
    """
    field = scene.height_field
    side = field.segments + 1
    half = field.size / 2
    extent = (-half, half, -half, half)

    # Rows run from +y down to -y, which is imshow's default orientation
    colors = np.clip(field.colors.reshape(side, side, 3), 0.0, 1.0)
    heights = field.height_grid()

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(16, 8))
    fig.patch.set_facecolor(tuple(np.clip(scene.palette.sky, 0.0, 1.0)))

    # Left plot: palette colors with entities
    ax1.imshow(colors, extent=extent, origin="upper")
    ocean = np.zeros((side, side, 4))
    ocean[..., :3] = np.clip(scene.palette.ocean, 0.0, 1.0)
    ocean[..., 3] = np.where(heights < scene.ocean.base_level, 0.85, 0.0)
    ax1.imshow(ocean, extent=extent, origin="upper")

    if scene.trees:
        tree_xy = np.array([tree.position[:2] for tree in scene.trees])
        tree_colors = np.clip([tree.color for tree in scene.trees], 0.0, 1.0)
        ax1.scatter(tree_xy[:, 0], tree_xy[:, 1], c=tree_colors, marker="^", s=12, label="Trees")

    if scene.fireflies:
        ff_xy = np.array([ff.position[:2] for ff in scene.fireflies])
        ax1.scatter(ff_xy[:, 0], ff_xy[:, 1], c="#eabc3a", s=4, alpha=0.8, label="Fireflies")

    ax1.set_xlim(-half, half)
    ax1.set_ylim(-half, half)
    ax1.set_aspect("equal")
    ax1.set_title(f"Garden - {len(scene.trees)} trees, {len(scene.fireflies)} fireflies")
    ax1.legend(loc="upper right", fontsize=9)

    # Right plot: raw heights with zone boundaries
    im = ax2.imshow(heights, extent=extent, origin="upper", cmap="terrain")
    xs = np.linspace(-half, half, side)
    ys = np.linspace(half, -half, side)
    levels = [level for level in ZONE_THRESHOLDS if heights.min() < level < heights.max()]
    if levels:
        contours = ax2.contour(xs, ys, heights, levels=levels, colors="black", linewidths=0.5, alpha=0.5)
        ax2.clabel(contours, inline=True, fontsize=8)
    plt.colorbar(im, ax=ax2, label="Height")
    ax2.set_title("Height field (zone thresholds as contours)")
    ax2.set_xlabel("X")
    ax2.set_ylabel("Y")

    fig.suptitle(f"Garden Visualization - Seed: {scene.seed}", fontsize=14)
    plt.tight_layout()

    if output_file is None:
        safe_seed = "".join(c if c.isalnum() else "_" for c in scene.seed)[:40]
        output_file = f"garden_{safe_seed}.png"
    plt.savefig(output_file, dpi=200, bbox_inches="tight")
    print(f"Visualization saved to: {output_file}")

    if show:
        plt.show()
    return output_file


def main():
    """Main function."""
    parser = argparse.ArgumentParser(description="Visualize a generated garden")
    parser.add_argument("--identity", help="User identity used as the seed")
    parser.add_argument("--features", help="JSON file with a feature record or a list of per-track records")
    parser.add_argument("--segments", type=int, default=128, help="Terrain cells per axis")
    parser.add_argument("--noise", default="simplex", help="Noise source (simplex or random)")
    parser.add_argument("--output", help="Output PNG path")
    parser.add_argument("--no-show", action="store_true", help="Do not open a window")
    args = parser.parse_args()

    configure_logging("INFO", "console")

    if args.features:
        path = Path(args.features)
        features = load_features(lambda: json.loads(path.read_text()))
    else:
        features = DEFAULT_FEATURES

    generator = GardenGenerator(TerrainConfig(segments=args.segments), noise_source=args.noise)
    scene = generator.generate(features, args.identity)

    summary = scene.summary()
    print(f"Heights: {summary['min_height']:.2f} to {summary['max_height']:.2f}")
    for zone, count in summary["zones"].items():
        print(f"  {zone:>8}: {count}")

    visualize_garden(scene, args.output, show=not args.no_show)


if __name__ == "__main__":
    main()
