"""
Delaunay triangulation by incremental Bowyer-Watson insertion.

Sites are inserted one at a time into a triangulation seeded with a large
super-triangle. Each insertion removes the triangles whose circumcircle
contains the new site and re-triangulates the resulting cavity around it.
Triangles that still touch a super-triangle vertex are dropped at the end.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import structlog

from .geometry import Point, circumcircle, distance_sq

logger = structlog.get_logger()

SUPER_TRIANGLE_MARGIN = 10


@dataclass
class Triangle:
    """Triangle over vertex indices with its cached circumcircle."""

    a: int
    b: int
    c: int
    circumcenter: Point
    radius_sq: float

    @property
    def vertices(self) -> Tuple[int, int, int]:
        return (self.a, self.b, self.c)

    def edges(self) -> Tuple[Tuple[int, int], Tuple[int, int], Tuple[int, int]]:
        """Directed edges a->b, b->c, c->a."""
        return ((self.a, self.b), (self.b, self.c), (self.c, self.a))

    def circumcircle_contains(self, p: Point) -> bool:
        """Strict in-circle test; degenerate triangles contain nothing."""
        if math.isinf(self.radius_sq):
            return False
        return distance_sq(self.circumcenter, p) < self.radius_sq


def make_triangle(vertices: Sequence[Point], a: int, b: int, c: int) -> Triangle:
    center, radius_sq = circumcircle(vertices[a], vertices[b], vertices[c])
    return Triangle(a, b, c, center, radius_sq)


def super_triangle(width: float, height: float) -> List[Point]:
    """Three vertices enclosing the map with a wide margin."""
    m = max(width, height) * SUPER_TRIANGLE_MARGIN
    cx = width / 2
    cy = height / 2
    return [
        Point(cx - 2 * m, cy - m),
        Point(cx + 2 * m, cy - m),
        Point(cx, cy + 2 * m),
    ]


def _cavity_boundary(bad: List[Triangle]) -> List[Tuple[int, int]]:
    """
    Boundary of the union of bad triangles.

    Edges shared by two bad triangles appear once in each orientation and
    cancel; the edges left over outline the cavity.
    """
    boundary: Dict[Tuple[int, int], Tuple[int, int]] = {}
    for tri in bad:
        for u, v in tri.edges():
            key = (u, v) if u < v else (v, u)
            if key in boundary:
                del boundary[key]
            else:
                boundary[key] = (u, v)
    return list(boundary.values())


def triangulate(sites: Sequence[Point], width: float, height: float) -> List[Triangle]:
    """
    Triangulate sites inside a width x height map.

    Args:
        sites: Points to triangulate; triangle indices refer to this sequence
        width, height: Map dimensions, used to size the super-triangle

    Returns:
        Triangles whose vertices are all input sites
    """
    n = len(sites)
    vertices: List[Point] = [Point(float(x), float(y)) for x, y in sites]
    vertices.extend(super_triangle(width, height))

    triangles = [make_triangle(vertices, n, n + 1, n + 2)]

    for index in range(n):
        site = vertices[index]

        bad = [tri for tri in triangles if tri.circumcircle_contains(site)]
        if not bad:
            # Only possible for duplicate or degenerate input
            logger.debug("Site outside every circumcircle, skipped", site=index)
            continue

        boundary = _cavity_boundary(bad)
        bad_ids = {id(tri) for tri in bad}
        triangles = [tri for tri in triangles if id(tri) not in bad_ids]
        for u, v in boundary:
            triangles.append(make_triangle(vertices, u, v, index))

    result = [tri for tri in triangles if max(tri.vertices) < n]
    logger.info("Triangulation complete", sites=n, triangles=len(result))
    return result
