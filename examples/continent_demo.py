#!/usr/bin/env python3
"""
Demo script showing continent generation and region overlays.
"""

import matplotlib.pyplot as plt

from py_landmass.core import ContinentParams, VoronoiOptions, build_continent, build_voronoi_overlay
from py_landmass.core.land_mask import render_ascii


def main():
    width, height = 400, 300
    seeds = [42, 7, 1234, 2024]

    plt.figure(figsize=(16, 12))

    for i, seed in enumerate(seeds, 1):
        print(f"\nGenerating continent with seed {seed}...")

        params = ContinentParams(seed=seed, erosion_iterations=3)
        continent = build_continent(width, height, params)

        print(f"  Land: {continent.land_percent:.1f}%")
        print(f"  Land pixels: {continent.land_pixel_count}")

        overlay = build_voronoi_overlay(
            continent.land_mask, width, height, VoronoiOptions(count=8, seed=seed)
        )
        print(f"  Regions: {len(overlay.regions)}")

        # Visualize
        plt.subplot(2, 2, i)
        plt.imshow(continent.land_mask, cmap="terrain_r", origin="upper")
        for segment in overlay.segments:
            xs = [p.x for p in segment.points()]
            ys = [p.y for p in segment.points()]
            plt.plot(xs, ys, color="black", linewidth=0.8)
        plt.scatter([s.x for s in overlay.sites], [s.y for s in overlay.sites], s=8, color="red")
        plt.xlim(0, width)
        plt.ylim(height, 0)
        plt.title(f"Seed {seed} ({continent.land_percent:.1f}% land)")

    plt.tight_layout()
    plt.savefig("continent_examples.png", dpi=150)
    print("\nSaved visualization to continent_examples.png")

    # Quick text preview of the last continent
    print("\nASCII preview:")
    for row in render_ascii(continent.land_mask, step=8):
        print(row)


if __name__ == "__main__":
    main()
