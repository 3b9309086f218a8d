"""Planar geometry primitives shared by the sampling and Voronoi stages."""

import math
from typing import NamedTuple, Tuple


class Point(NamedTuple):
    """A point in map coordinates."""
    x: float
    y: float


def distance_sq(p: Point, q: Point) -> float:
    """Squared Euclidean distance."""
    dx = p[0] - q[0]
    dy = p[1] - q[1]
    return dx * dx + dy * dy


def circumcircle(a: Point, b: Point, c: Point) -> Tuple[Point, float]:
    """
    Circumcenter and squared circumradius of triangle abc.

    Collinear (or coincident) vertices have no finite circumcircle; for those
    the centroid is returned together with an infinite radius.
    """
    ax, ay = a
    bx, by = b
    cx, cy = c
    d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) < 1e-12:
        return Point((ax + bx + cx) / 3.0, (ay + by + cy) / 3.0), math.inf

    a_sq = ax * ax + ay * ay
    b_sq = bx * bx + by * by
    c_sq = cx * cx + cy * cy
    ux = (a_sq * (by - cy) + b_sq * (cy - ay) + c_sq * (ay - by)) / d
    uy = (a_sq * (cx - bx) + b_sq * (ax - cx) + c_sq * (bx - ax)) / d
    center = Point(ux, uy)
    return center, distance_sq(center, a)


def polar_angle(p: Point, origin: Point) -> float:
    """Angle of p around origin in radians, in (-pi, pi]."""
    return math.atan2(p[1] - origin[1], p[0] - origin[0])
