"""
Metaball continent shaping.

The base continent is a cluster of weighted disks ("metaballs") whose
influence falls off with the cube of normalized distance. Three groups are
placed around the map center:

- a vertical spine with sinusoidal sway that elongates the landmass
- bulges pushed out to either side of the spine
- small detail blobs scattered around the center

The accumulated field is an unbounded sum; it is normalized later by the
edge-aware noise stage.
"""

import math
from dataclasses import dataclass
from typing import List

import numpy as np
import structlog

from .random_stream import RandomStream

logger = structlog.get_logger()

SPINE_SHARE = 0.6
BULGE_SHARE = 0.3
DETAIL_Y_STRETCH = 1.5


@dataclass
class Metaball:
    """A weighted disk contributing to the continent field."""

    x: float
    y: float
    radius: float
    strength: float


def place_metaballs(
    center_x: float,
    center_y: float,
    radius: float,
    complexity: int,
    vertical_stretch: float,
    scale_factor: float,
    rng: RandomStream,
) -> List[Metaball]:
    """
    Place the spine, bulge and detail metaballs.

    Args:
        center_x, center_y: Continent center in grid coordinates
        radius: Base radius before scaling
        complexity: Total number of metaballs
        vertical_stretch: Spine height as a multiple of the scaled diameter
        scale_factor: Multiplier applied to the base radius
        rng: Random stream; draws are consumed in placement order

    Returns:
        Metaballs in placement order (spine, bulges, details)
    """
    radius = radius * scale_factor
    complexity = max(0, int(complexity))
    metaballs: List[Metaball] = []

    spine_count = int(math.floor(complexity * SPINE_SHARE))
    spine_height = radius * vertical_stretch * 2

    for i in range(spine_count):
        t = i / max(1, spine_count - 1)
        y = center_y - spine_height / 2 + spine_height * t

        x_offset = math.sin(t * math.pi * 3 + rng.next() * 2) * radius * 0.3
        size_variation = 0.6 + rng.next() * 0.6

        metaballs.append(
            Metaball(
                x=center_x + x_offset + (rng.next() - 0.5) * radius * 0.2,
                y=y + (rng.next() - 0.5) * radius * 0.1,
                radius=radius * size_variation * (0.7 + math.sin(t * math.pi) * 0.3),
                strength=0.8 + rng.next() * 0.2,
            )
        )

    bulge_count = int(math.floor(complexity * BULGE_SHARE))
    for _ in range(bulge_count):
        t = rng.next()
        y = center_y - spine_height / 2 + spine_height * t
        side = 1 if rng.next() > 0.5 else -1
        metaballs.append(
            Metaball(
                x=center_x + side * radius * (0.5 + rng.next() * 0.5),
                y=y,
                radius=radius * (0.4 + rng.next() * 0.4),
                strength=0.6 + rng.next() * 0.3,
            )
        )

    detail_count = max(0, complexity - spine_count - bulge_count)
    for _ in range(detail_count):
        angle = rng.next() * math.pi * 2
        distance = radius * (0.3 + rng.next() * 0.7)
        metaballs.append(
            Metaball(
                x=center_x + math.cos(angle) * distance,
                y=center_y + math.sin(angle) * distance * DETAIL_Y_STRETCH,
                radius=radius * (0.2 + rng.next() * 0.3),
                strength=0.5 + rng.next() * 0.3,
            )
        )

    logger.debug(
        "Metaballs placed",
        spine=spine_count,
        bulges=bulge_count,
        details=detail_count,
    )
    return metaballs


def accumulate_field(width: int, height: int, metaballs: List[Metaball]) -> np.ndarray:
    """
    Sum the cubic-falloff influence of every metaball over the grid.

    A ball contributes ``strength * (1 - d / (2 * radius)) ** 3`` to every
    cell closer than twice its radius. Only the bounding window of each ball
    is visited.

    Returns:
        Field of shape (height, width)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

    field = np.zeros((height, width), dtype=np.float64)

    for ball in metaballs:
        reach = ball.radius * 2
        if reach <= 0:
            continue

        x_lo = max(0, int(math.floor(ball.x - reach)))
        x_hi = min(width, int(math.ceil(ball.x + reach)) + 1)
        y_lo = max(0, int(math.floor(ball.y - reach)))
        y_hi = min(height, int(math.ceil(ball.y + reach)) + 1)
        if x_lo >= x_hi or y_lo >= y_hi:
            continue

        xs = np.arange(x_lo, x_hi, dtype=np.float64)
        ys = np.arange(y_lo, y_hi, dtype=np.float64)
        dx = xs[None, :] - ball.x
        dy = ys[:, None] - ball.y
        normalized = np.sqrt(dx * dx + dy * dy) / reach

        inside = normalized < 1
        contribution = np.where(inside, ball.strength * (1 - normalized) ** 3, 0.0)
        field[y_lo:y_hi, x_lo:x_hi] += contribution

    return field


def build_continent_shape(
    width: int,
    height: int,
    center_x: float,
    center_y: float,
    radius: float,
    complexity: int,
    vertical_stretch: float,
    scale_factor: float,
    rng: RandomStream,
) -> np.ndarray:
    """Place metaballs and accumulate their field in one step."""
    metaballs = place_metaballs(
        center_x, center_y, radius, complexity, vertical_stretch, scale_factor, rng
    )
    field = accumulate_field(width, height, metaballs)
    logger.info(
        "Continent shape accumulated",
        metaballs=len(metaballs),
        max_value=float(field.max()) if field.size else 0.0,
    )
    return field
