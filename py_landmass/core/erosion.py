"""
Coastline erosion.

Each iteration removes interior land cells that are mostly surrounded by
water. Early iterations use a stricter water-neighbour threshold, later
ones ease off. All removals of an iteration are decided from the mask as it
was at the start of that iteration.
"""

import numpy as np
import structlog
from scipy import ndimage

logger = structlog.get_logger()

EARLY_THRESHOLD = 5
LATE_THRESHOLD = 4

# 8-neighbourhood, center excluded
_NEIGHBOR_KERNEL = np.array(
    [[1, 1, 1],
     [1, 0, 1],
     [1, 1, 1]],
    dtype=np.int32,
)


def erode_coastline(land_mask: np.ndarray, iterations: int) -> int:
    """
    Erode the land mask in place.

    A land cell away from the 1-pixel grid border erodes when at least
    ``threshold`` of its 8 neighbours are water and at least one is land.
    The threshold is 5 while ``iteration < iterations / 2`` and 4 after.
    Zero or negative iteration counts leave the mask untouched.

    Args:
        land_mask: Boolean array of shape (height, width), modified in place
        iterations: Number of erosion passes

    Returns:
        Number of cells eroded
    """
    height, width = land_mask.shape
    if iterations <= 0 or height < 3 or width < 3:
        return 0

    interior = np.zeros_like(land_mask, dtype=bool)
    interior[1:-1, 1:-1] = True

    eroded_total = 0
    for iteration in range(iterations):
        land_neighbors = ndimage.convolve(
            land_mask.astype(np.int32), _NEIGHBOR_KERNEL, mode="constant", cval=0
        )
        water_neighbors = 8 - land_neighbors
        threshold = EARLY_THRESHOLD if iteration < iterations / 2 else LATE_THRESHOLD

        to_erode = (
            land_mask
            & interior
            & (water_neighbors >= threshold)
            & (land_neighbors >= 1)
        )
        land_mask[to_erode] = False
        eroded_total += int(to_erode.sum())

    logger.info("Coastline eroded", iterations=iterations, cells_eroded=eroded_total)
    return eroded_total
