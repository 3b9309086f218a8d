"""
Voronoi region overlay for a land mask.

Sites are Poisson-sampled on land, triangulated, and the Voronoi diagram is
read off the triangulation as its dual:

- an edge shared by two triangles becomes a segment between their
  circumcenters
- a convex-hull edge becomes a ray from its triangle's circumcenter,
  pointing away from the hull and clipped to the map rectangle; rays that
  never cross the map are dropped
- the region of a site is the polygon of circumcenters of its incident
  triangles, ordered by angle around the site

Hull regions are left open (not clipped to the map); only segments are
clipped.
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np
import structlog

from .delaunay import Triangle, triangulate
from .geometry import Point, polar_angle
from .land_mask import make_land_predicate, validate_land_mask
from .noise import NoiseSource
from .poisson import DEFAULT_ATTEMPTS, poisson_disk_sample
from .random_stream import RandomStream

logger = structlog.get_logger()

MIN_SITES = 3
MAX_SAMPLING_ATTEMPTS = 5
SPACING_FACTOR = 0.85
COUNT_TOLERANCE = 0.2


@dataclass
class VoronoiOptions:
    """Options for the region overlay."""

    count: int = 8  # Target number of regions
    segment_noise_amp: float = 1.8  # Boundary jitter amplitude; 0 disables
    segment_noise_scale: float = 24.0  # Boundary jitter wavelength in pixels
    k: int = DEFAULT_ATTEMPTS  # Poisson attempts per active point
    seed: int = 42

    # Accepted for forward compatibility; they do not affect the overlay
    variety: float = 0.5
    metric_noise_amp: float = 0.08
    metric_noise_scale: float = 80.0
    max_area_ratio: float = 0.5

    _ALIASES = {
        "segmentNoiseAmp": "segment_noise_amp",
        "segmentNoiseScale": "segment_noise_scale",
        "metricNoiseAmp": "metric_noise_amp",
        "metricNoiseScale": "metric_noise_scale",
        "maxAreaRatio": "max_area_ratio",
    }

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "VoronoiOptions":
        """Build options from snake_case or camelCase keys; unknown keys are ignored."""
        known = set(cls.__dataclass_fields__)
        values = {}
        for key, value in options.items():
            name = cls._ALIASES.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)


@dataclass
class Segment:
    """A Voronoi boundary edge."""

    a: Point
    b: Point
    polyline: Optional[List[Point]] = None  # Jittered path from a to b
    hull: bool = False  # True for rays clipped at the map boundary

    def points(self) -> List[Point]:
        """Path to draw: the polyline when present, else the straight edge."""
        return self.polyline if self.polyline else [self.a, self.b]


@dataclass
class Region:
    """The Voronoi cell of one site."""

    index: int
    center: Point
    polygon: List[Point] = field(default_factory=list)


@dataclass
class VoronoiOverlay:
    """Segments and regions of an overlay, with the sites and triangles behind them."""

    segments: List[Segment] = field(default_factory=list)
    regions: List[Region] = field(default_factory=list)
    sites: List[Point] = field(default_factory=list)
    triangles: List[Triangle] = field(default_factory=list)


def sample_sites(
    land_mask: np.ndarray,
    width: int,
    height: int,
    options: VoronoiOptions,
    rng: RandomStream,
) -> List[Point]:
    """
    Sample roughly ``options.count`` well-spaced sites on land.

    The Poisson distance starts at ``sqrt(land_area / count) * 0.85`` and is
    rescaled by ``sqrt(actual / target)`` until the yield is within 20% of the
    target or MAX_SAMPLING_ATTEMPTS samples were drawn.
    """
    land_area = int(np.count_nonzero(land_mask))
    if land_area == 0 or options.count <= 0:
        return []

    accept = make_land_predicate(land_mask)
    target = options.count
    min_dist = math.sqrt(land_area / target) * SPACING_FACTOR
    sites: List[Point] = []

    for attempt in range(MAX_SAMPLING_ATTEMPTS):
        sites = poisson_disk_sample(width, height, min_dist, rng, k=options.k, accept=accept)
        actual = len(sites)
        logger.debug("Site sampling attempt", attempt=attempt, min_dist=min_dist, sites=actual)

        if (1 - COUNT_TOLERANCE) * target <= actual <= (1 + COUNT_TOLERANCE) * target:
            break
        if actual == 0:
            break
        min_dist *= math.sqrt(actual / target)

    logger.info("Sites sampled", sites=len(sites), target=target, draws=rng.call_count)
    return sites


def _edge_map(triangles: List[Triangle]) -> Dict[Tuple[int, int], List[int]]:
    """Undirected Delaunay edge -> indices of the triangles using it."""
    edges: Dict[Tuple[int, int], List[int]] = defaultdict(list)
    for t_index, tri in enumerate(triangles):
        for u, v in tri.edges():
            edges[(u, v) if u < v else (v, u)].append(t_index)
    return edges


def clip_ray(
    origin: Point, direction: Tuple[float, float], width: float, height: float
) -> Optional[Point]:
    """
    Point where a ray leaves the [0, width] x [0, height] box.

    The ray is clipped against both slabs of the box (Liang-Barsky) and the
    far end of the part inside the box is returned. An origin outside the
    box works as long as the ray passes through it.

    Returns:
        The exit point on the box boundary; the origin itself for a zero
        direction; None when the ray never touches the box
    """
    ox, oy = origin
    dx, dy = direction
    if dx == 0 and dy == 0:
        return origin

    t_enter, t_exit = 0.0, math.inf
    for start, step, upper in ((ox, dx, width), (oy, dy, height)):
        if step == 0:
            if start < 0 or start > upper:
                return None
            continue
        t0 = -start / step
        t1 = (upper - start) / step
        if t0 > t1:
            t0, t1 = t1, t0
        t_enter = max(t_enter, t0)
        t_exit = min(t_exit, t1)

    if t_exit < 0 or t_enter > t_exit:
        return None
    return Point(ox + dx * t_exit, oy + dy * t_exit)


def _hull_segment(
    tri: Triangle, u: int, v: int, sites: List[Point], width: float, height: float
) -> Optional[Segment]:
    """
    Ray from the circumcenter perpendicular to hull edge uv, away from the hull.

    None when the circumcenter lies off the map and the ray never reaches it.
    """
    p, q = sites[u], sites[v]
    ex, ey = q.x - p.x, q.y - p.y
    nx, ny = -ey, ex

    # Point the normal away from the triangle's third vertex
    opposite = next(sites[w] for w in tri.vertices if w != u and w != v)
    mid_x, mid_y = (p.x + q.x) / 2, (p.y + q.y) / 2
    if nx * (mid_x - opposite.x) + ny * (mid_y - opposite.y) < 0:
        nx, ny = -nx, -ny

    far = clip_ray(tri.circumcenter, (nx, ny), width, height)
    if far is None:
        return None
    return Segment(a=tri.circumcenter, b=far, hull=True)


def jitter_segment(segment: Segment, noise: NoiseSource, amp: float, scale: float) -> List[Point]:
    """
    Sample a segment and displace interior samples along its normal.

    Uses ``max(2, length / scale)`` steps; the endpoints stay fixed.
    """
    a, b = segment.a, segment.b
    dx, dy = b.x - a.x, b.y - a.y
    length = math.hypot(dx, dy)
    if length == 0:
        return [a, b]

    nx, ny = -dy / length, dx / length
    steps = max(2, int(length / scale))
    polyline = [a]
    for i in range(1, steps):
        t = i / steps
        x = a.x + dx * t
        y = a.y + dy * t
        offset = noise.noise2d(x / scale, y / scale) * amp
        polyline.append(Point(x + nx * offset, y + ny * offset))
    polyline.append(b)
    return polyline


def build_segments(
    triangles: List[Triangle], sites: List[Point], width: float, height: float
) -> List[Segment]:
    """
    Voronoi edges dual to the Delaunay edges.

    Hull rays that lie entirely off the map are dropped.
    """
    segments = []
    dropped = 0
    for (u, v), owners in _edge_map(triangles).items():
        if len(owners) == 2:
            first, second = triangles[owners[0]], triangles[owners[1]]
            segments.append(Segment(a=first.circumcenter, b=second.circumcenter))
        elif len(owners) == 1:
            segment = _hull_segment(triangles[owners[0]], u, v, sites, width, height)
            if segment is None:
                dropped += 1
            else:
                segments.append(segment)
    if dropped:
        logger.debug("Off-map hull rays dropped", dropped=dropped)
    return segments


def build_regions(triangles: List[Triangle], sites: List[Point]) -> List[Region]:
    """
    Region polygons from the circumcenters around each site.

    Sites with fewer than three incident triangles get an empty polygon.
    """
    incident: Dict[int, List[Point]] = defaultdict(list)
    for tri in triangles:
        for vertex in tri.vertices:
            incident[vertex].append(tri.circumcenter)

    regions = []
    for index, site in enumerate(sites):
        centers = incident.get(index, [])
        polygon = sorted(centers, key=lambda p: polar_angle(p, site)) if len(centers) >= 3 else []
        regions.append(Region(index=index, center=site, polygon=polygon))
    return regions


def build_voronoi_overlay(
    land_mask: np.ndarray,
    width: int,
    height: int,
    options: Optional[VoronoiOptions] = None,
) -> VoronoiOverlay:
    """
    Build the region overlay for a land mask.

    The mask is only read. Fewer than three sites (including the no-land
    case) produce an empty overlay.

    Args:
        land_mask: Boolean array of shape (height, width)
        width, height: Map dimensions
        options: Overlay options; defaults are used when omitted

    Returns:
        VoronoiOverlay with segments and regions
    """
    validate_land_mask(land_mask, width, height)
    options = options or VoronoiOptions()
    rng = RandomStream(options.seed)

    sites = sample_sites(land_mask, width, height, options, rng)
    if len(sites) < MIN_SITES:
        logger.warning("Too few sites for a Voronoi overlay", sites=len(sites))
        return VoronoiOverlay()

    triangles = triangulate(sites, width, height)
    segments = build_segments(triangles, sites, width, height)

    if options.segment_noise_amp > 0 and options.segment_noise_scale > 0:
        noise = NoiseSource(rng.derive_seed())
        for segment in segments:
            segment.polyline = jitter_segment(
                segment, noise, options.segment_noise_amp, options.segment_noise_scale
            )

    regions = build_regions(triangles, sites)
    logger.info(
        "Voronoi overlay built",
        sites=len(sites),
        triangles=len(triangles),
        segments=len(segments),
        regions=len(regions),
    )
    return VoronoiOverlay(segments=segments, regions=regions, sites=sites, triangles=triangles)
