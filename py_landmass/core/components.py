"""
Connected land components.

Land cells are grouped into 4-connected components (north, south, east and
west neighbours only). Flood fill uses an explicit stack so large grids do
not hit the recursion limit.
"""

from typing import List, Tuple

import numpy as np
import structlog

logger = structlog.get_logger()

Cell = Tuple[int, int]

_NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def find_components(land_mask: np.ndarray) -> List[List[Cell]]:
    """
    Find every 4-connected component of true cells.

    Components are returned in discovery order: a row-major scan starts a
    new flood fill at the first unvisited land cell.

    Args:
        land_mask: Boolean array of shape (height, width)

    Returns:
        List of components, each a list of (x, y) cells
    """
    height, width = land_mask.shape
    visited = np.zeros_like(land_mask, dtype=bool)
    components: List[List[Cell]] = []

    # np.nonzero walks the array in row-major order
    for start_y, start_x in zip(*np.nonzero(land_mask)):
        if visited[start_y, start_x]:
            continue

        component: List[Cell] = []
        visited[start_y, start_x] = True
        stack = [(int(start_x), int(start_y))]

        while stack:
            x, y = stack.pop()
            component.append((x, y))

            for dx, dy in _NEIGHBOR_OFFSETS:
                nx, ny = x + dx, y + dy
                if nx < 0 or nx >= width or ny < 0 or ny >= height:
                    continue
                if visited[ny, nx] or not land_mask[ny, nx]:
                    continue
                visited[ny, nx] = True
                stack.append((nx, ny))

        components.append(component)

    return components


def find_largest_component(land_mask: np.ndarray) -> List[Cell]:
    """
    Return the cells of the largest 4-connected land component.

    Ties go to the component discovered first in row-major order. An
    all-water mask yields an empty list.
    """
    largest: List[Cell] = []
    components = find_components(land_mask)
    for component in components:
        if len(component) > len(largest):
            largest = component

    logger.debug(
        "Connected components found",
        components=len(components),
        largest=len(largest),
    )
    return largest


def keep_largest_component(land_mask: np.ndarray) -> np.ndarray:
    """Return a new mask holding only the largest land component."""
    result = np.zeros_like(land_mask, dtype=bool)
    largest = find_largest_component(land_mask)
    if largest:
        xs, ys = zip(*largest)
        result[list(ys), list(xs)] = True
    return result
