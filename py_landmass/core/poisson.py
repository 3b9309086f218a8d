"""
Poisson-disk sampling inside an acceptance mask (Bridson's algorithm).

A background grid with cell size ``min_dist / sqrt(2)`` holds at most one
point per cell, so the spacing check only has to look at the 5x5 block of
cells around a candidate.
"""

import math
from typing import Callable, List, Optional

import structlog

from .geometry import Point
from .random_stream import RandomStream

logger = structlog.get_logger()

SEED_ATTEMPTS = 500
DEFAULT_ATTEMPTS = 30


def _accept_all(x: float, y: float) -> bool:
    return True


def poisson_disk_sample(
    width: float,
    height: float,
    min_dist: float,
    rng: RandomStream,
    k: int = DEFAULT_ATTEMPTS,
    accept: Optional[Callable[[float, float], bool]] = None,
) -> List[Point]:
    """
    Sample points no closer than ``min_dist`` to each other.

    Args:
        width, height: Sampling area [0, width) x [0, height)
        min_dist: Minimum distance between any two points
        rng: Random stream driving every draw
        k: Candidate attempts around an active point before retiring it
        accept: Predicate every returned point satisfies; all points by default

    Returns:
        Points in insertion order; empty if no acceptable seed point was
        found within SEED_ATTEMPTS draws
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Sampling area must be positive, got {width}x{height}")
    if min_dist <= 0:
        logger.warning("Non-positive Poisson distance, returning no samples", min_dist=min_dist)
        return []

    accept = accept or _accept_all
    cell_size = min_dist / math.sqrt(2)
    grid_w = int(math.ceil(width / cell_size))
    grid_h = int(math.ceil(height / cell_size))
    grid: List[Optional[int]] = [None] * (grid_w * grid_h)
    min_dist_sq = min_dist * min_dist

    points: List[Point] = []
    active: List[int] = []

    def grid_index(x: float, y: float) -> int:
        return int(x // cell_size) + int(y // cell_size) * grid_w

    def crowded(x: float, y: float) -> bool:
        gx = int(x // cell_size)
        gy = int(y // cell_size)
        for ny in range(max(0, gy - 2), min(grid_h, gy + 3)):
            for nx in range(max(0, gx - 2), min(grid_w, gx + 3)):
                idx = grid[nx + ny * grid_w]
                if idx is None:
                    continue
                px, py = points[idx]
                if (px - x) ** 2 + (py - y) ** 2 < min_dist_sq:
                    return True
        return False

    def add(x: float, y: float) -> None:
        grid[grid_index(x, y)] = len(points)
        points.append(Point(x, y))
        active.append(len(points) - 1)

    # First seed at a random acceptable location
    for _ in range(SEED_ATTEMPTS):
        x = rng.next() * width
        y = rng.next() * height
        if accept(x, y):
            add(x, y)
            break

    if not points:
        logger.info("No acceptable seed point found", attempts=SEED_ATTEMPTS)
        return points

    while active:
        slot = rng.randint(len(active))
        cx, cy = points[active[slot]]
        placed = False

        for _ in range(k):
            r = min_dist * (1 + rng.next())
            theta = rng.next() * math.pi * 2
            x = cx + r * math.cos(theta)
            y = cy + r * math.sin(theta)

            if x < 0 or x >= width or y < 0 or y >= height:
                continue
            if not accept(x, y) or crowded(x, y):
                continue

            add(x, y)
            placed = True
            break

        if not placed:
            active.pop(slot)

    logger.debug("Poisson sampling complete", points=len(points), min_dist=min_dist)
    return points
