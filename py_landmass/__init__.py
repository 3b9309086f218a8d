"""Procedural single-landmass continents with Voronoi region overlays."""

__version__ = "0.1.0"
