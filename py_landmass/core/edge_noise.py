"""
Edge-aware noise perturbation of the continent field.

Coastal ("edge") cells and interior cells get different noise so that the
coastline becomes ragged while the interior keeps its broad shape:

- edge cells: 5 isotropic octaves, frequency x2.2 per octave
- interior cells: 4 octaves with the vertical frequency halved
- every cell: a fine-grain overlay (amplitude 0.2, frequency 4)

The perturbed field is thresholded into a land mask and reduced to its
largest connected component.
"""

import math
from typing import Tuple

import numpy as np
import structlog

from .components import keep_largest_component
from .noise import NoiseSource

logger = structlog.get_logger()

EDGE_THRESHOLD = 0.6
LAND_THRESHOLD = 0.35
INTERIOR_DAMPING = 0.7

EDGE_OCTAVES = 5
EDGE_LACUNARITY = 2.2
INTERIOR_OCTAVES = 4
INTERIOR_LACUNARITY = 2.0
INTERIOR_VERTICAL_FACTOR = 0.5
OVERLAY_AMPLITUDE = 0.2
OVERLAY_FREQUENCY = 4.0


class EdgeNoiseApplicator:
    """Perturbs a continent field and thresholds it into a land mask."""

    def __init__(
        self,
        noise_scale: float,
        noise_strength: float,
        scale_factor: float,
        interior_noise: NoiseSource,
        overlay_noise: NoiseSource,
        edge_noise: NoiseSource,
    ):
        """
        Args:
            noise_scale: Number of base noise features across the map
            noise_strength: Blend weight of the noise on edge cells
            scale_factor: Continent scale; larger continents get coarser noise
            interior_noise: Source for the directional interior octaves
            overlay_noise: Source for the fine-grain overlay
            edge_noise: Source for the isotropic coastal octaves
        """
        self.noise_scale = noise_scale
        self.noise_strength = noise_strength
        self.scale_factor = scale_factor
        self.interior_noise = interior_noise
        self.overlay_noise = overlay_noise
        self.edge_noise = edge_noise

    def _base_axes(self, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        """Column and row coordinates divided by the per-axis noise wavelength."""
        adjusted_scale = self.noise_scale / math.sqrt(self.scale_factor)
        xs = np.arange(width, dtype=np.float64) / (width / adjusted_scale)
        ys = np.arange(height, dtype=np.float64) / (height / adjusted_scale)
        return xs, ys

    @staticmethod
    def _octaves(
        source: NoiseSource,
        xs: np.ndarray,
        ys: np.ndarray,
        octaves: int,
        lacunarity: float,
        y_factor: float = 1.0,
    ) -> Tuple[np.ndarray, float]:
        """Sum octaves with halving amplitude; return (noise, max amplitude)."""
        total = np.zeros((len(ys), len(xs)))
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        for _ in range(octaves):
            total += source.noise2d_grid(xs * frequency, ys * frequency * y_factor) * amplitude
            max_value += amplitude
            amplitude *= 0.5
            frequency *= lacunarity
        return total, max_value

    def perturb(self, field: np.ndarray) -> np.ndarray:
        """
        Blend noise into every positive cell of the field, in place.

        Returns:
            The same field array
        """
        max_value = float(field.max()) if field.size else 0.0
        if max_value <= 0 or self.noise_scale <= 0 or self.scale_factor <= 0:
            logger.warning(
                "Skipping edge noise",
                max_value=max_value,
                noise_scale=self.noise_scale,
                scale_factor=self.scale_factor,
            )
            return field

        height, width = field.shape
        xs, ys = self._base_axes(width, height)

        positive = field > 0
        is_edge = positive & (field / max_value < EDGE_THRESHOLD)

        edge_total, edge_max = self._octaves(
            self.edge_noise, xs, ys, EDGE_OCTAVES, EDGE_LACUNARITY
        )
        interior_total, interior_max = self._octaves(
            self.interior_noise, xs, ys, INTERIOR_OCTAVES, INTERIOR_LACUNARITY,
            y_factor=INTERIOR_VERTICAL_FACTOR,
        )
        overlay = self.overlay_noise.noise2d_grid(
            xs * OVERLAY_FREQUENCY, ys * OVERLAY_FREQUENCY
        ) * OVERLAY_AMPLITUDE

        noise_value = np.where(
            is_edge,
            (edge_total + overlay) / (edge_max + OVERLAY_AMPLITUDE),
            (interior_total + overlay) / (interior_max + OVERLAY_AMPLITUDE),
        )
        noise_value = (noise_value + 1) * 0.5

        strength = np.where(is_edge, self.noise_strength, self.noise_strength * INTERIOR_DAMPING)
        blended = field * (1 - strength) + field * noise_value * strength
        field[positive] = blended[positive]

        logger.debug(
            "Edge noise applied",
            edge_cells=int(is_edge.sum()),
            interior_cells=int((positive & ~is_edge).sum()),
        )
        return field

    def threshold(self, field: np.ndarray) -> np.ndarray:
        """Land where the field exceeds the land threshold, largest component only."""
        raw_mask = field > LAND_THRESHOLD
        land_mask = keep_largest_component(raw_mask)
        logger.info(
            "Land mask thresholded",
            raw_land=int(raw_mask.sum()),
            kept_land=int(land_mask.sum()),
        )
        return land_mask

    def apply(self, field: np.ndarray) -> np.ndarray:
        """Perturb the field in place and return the single-landmass mask."""
        return self.threshold(self.perturb(field))
