"""
Continent generation pipeline.

Runs the shaping stages in order and returns a single-landmass mask:

1. Metaball continent shape
2. Edge-aware noise, threshold and largest component
3. Controlled coastline erosion

Every stochastic stage is seeded from ``ContinentParams.seed``.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import structlog

from .components import keep_largest_component
from .edge_noise import EdgeNoiseApplicator
from .erosion import erode_coastline
from .land_mask import land_statistics
from .metaballs import build_continent_shape
from .noise import NoiseSource
from .random_stream import RandomStream

logger = structlog.get_logger()

# Seed offsets for the three noise sources
OVERLAY_SEED_OFFSET = 1000
EDGE_SEED_OFFSET = 2000


@dataclass
class ContinentParams:
    """Continent shaping parameters."""

    island_size: float = 0.8  # Base radius as a share of 0.4 * min(width, height)
    blob_complexity: int = 12  # Number of metaballs
    noise_scale: float = 3.0  # Noise features across the map
    noise_strength: float = 0.4  # Noise blend weight on coastal cells
    erosion_iterations: int = 2
    vertical_stretch: float = 1.5  # Spine height relative to the scaled diameter
    scale_factor: float = 1.0
    seed: int = 42


@dataclass
class ContinentResult:
    """A generated continent."""

    land_mask: np.ndarray
    land_pixel_count: int
    land_fraction: float
    width: int
    height: int
    seed: int

    @property
    def land_percent(self) -> float:
        """Land coverage in percent, rounded to one decimal."""
        return round(self.land_fraction * 100, 1)


class ContinentGenerator:
    """Generates single-landmass continents on a fixed grid."""

    def __init__(self, width: int, height: int):
        """
        Args:
            width: Grid width in cells
            height: Grid height in cells
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

    def base_radius(self, params: ContinentParams) -> float:
        """Unscaled metaball radius for the requested island size."""
        return min(self.width, self.height) * params.island_size * 0.4

    def generate(self, params: Optional[ContinentParams] = None) -> ContinentResult:
        """
        Run the full shaping pipeline.

        Args:
            params: Shaping parameters; defaults are used when omitted

        Returns:
            ContinentResult whose mask holds exactly one 4-connected landmass
            (or no land at all)
        """
        params = params or ContinentParams()
        logger.info(
            "Generating continent",
            width=self.width,
            height=self.height,
            seed=params.seed,
        )

        # Stage 1: metaball shape
        rng = RandomStream(params.seed)
        field = build_continent_shape(
            self.width,
            self.height,
            self.width / 2,
            self.height / 2,
            self.base_radius(params),
            params.blob_complexity,
            params.vertical_stretch,
            params.scale_factor,
            rng,
        )

        # Stage 2: edge-aware noise and connectivity
        applicator = EdgeNoiseApplicator(
            noise_scale=params.noise_scale,
            noise_strength=params.noise_strength,
            scale_factor=params.scale_factor,
            interior_noise=NoiseSource(params.seed),
            overlay_noise=NoiseSource(params.seed + OVERLAY_SEED_OFFSET),
            edge_noise=NoiseSource(params.seed + EDGE_SEED_OFFSET),
        )
        land_mask = applicator.apply(field)

        # Stage 3: erosion; a pass can pinch off a narrow isthmus, so the
        # largest component is extracted again afterwards
        if erode_coastline(land_mask, params.erosion_iterations):
            land_mask = keep_largest_component(land_mask)

        land_pixels, land_fraction = land_statistics(land_mask)
        logger.info(
            "Continent generated",
            land_pixels=land_pixels,
            land_fraction=round(land_fraction, 4),
        )

        return ContinentResult(
            land_mask=land_mask,
            land_pixel_count=land_pixels,
            land_fraction=land_fraction,
            width=self.width,
            height=self.height,
            seed=params.seed,
        )


def build_continent(
    width: int, height: int, params: Optional[ContinentParams] = None
) -> ContinentResult:
    """Generate a continent on a width x height grid."""
    return ContinentGenerator(width, height).generate(params)
