"""
Core continent and region generation functionality.
"""

from .random_stream import RandomStream
from .noise import NoiseSource
from .geometry import Point
from .continent import ContinentGenerator, ContinentParams, ContinentResult, build_continent
from .components import find_largest_component, keep_largest_component
from .erosion import erode_coastline
from .poisson import poisson_disk_sample
from .delaunay import Triangle, triangulate
from .voronoi_overlay import (
    Region, Segment, VoronoiOptions, VoronoiOverlay, build_voronoi_overlay
)
from .region_graph import region_adjacency, dfs_connect, graph_distances

__all__ = ['RandomStream', 'NoiseSource', 'Point',
           'ContinentGenerator', 'ContinentParams', 'ContinentResult', 'build_continent',
           'find_largest_component', 'keep_largest_component', 'erode_coastline',
           'poisson_disk_sample', 'Triangle', 'triangulate',
           'Region', 'Segment', 'VoronoiOptions', 'VoronoiOverlay', 'build_voronoi_overlay',
           'region_adjacency', 'dfs_connect', 'graph_distances']
