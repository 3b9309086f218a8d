"""Helpers for working with a finished land mask."""

import math
from typing import Callable, Tuple

import numpy as np

LandPredicate = Callable[[float, float], bool]

LAND_CHAR = "#"
WATER_CHAR = "."


def make_land_predicate(land_mask: np.ndarray) -> LandPredicate:
    """
    Build an acceptance predicate over a land mask.

    Coordinates are floored to the containing cell; anything outside the
    grid is rejected.
    """
    height, width = land_mask.shape

    def accept(x: float, y: float) -> bool:
        if not (0 <= x < width and 0 <= y < height):
            return False
        return bool(land_mask[int(math.floor(y)), int(math.floor(x))])

    return accept


def land_statistics(land_mask: np.ndarray) -> Tuple[int, float]:
    """Return (land pixel count, land fraction)."""
    count = int(np.count_nonzero(land_mask))
    return count, count / land_mask.size if land_mask.size else 0.0


def validate_land_mask(land_mask: np.ndarray, width: int, height: int) -> None:
    """Raise ValueError unless the mask is a (height, width) grid."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    if land_mask.shape != (height, width):
        raise ValueError(
            f"Land mask shape {land_mask.shape} does not match grid {height}x{width}"
        )


def render_ascii(land_mask: np.ndarray, step: int = 1) -> list:
    """
    Render the mask as text rows, sampling every ``step`` cells.

    Returns:
        List of strings using '#' for land and '.' for water
    """
    step = max(1, int(step))
    sampled = land_mask[::step, ::step]
    return ["".join(LAND_CHAR if cell else WATER_CHAR for cell in row) for row in sampled]
