"""Tests for Bowyer-Watson triangulation."""

import math

import pytest
import numpy as np
from scipy.spatial import Delaunay
from py_landmass.core.delaunay import Triangle, super_triangle, triangulate
from py_landmass.core.geometry import Point, circumcircle, distance_sq
from py_landmass.core.poisson import poisson_disk_sample
from py_landmass.core.random_stream import RandomStream


def _random_sites(n, width=100, height=100, seed=1):
    rng = RandomStream(seed)
    return [Point(rng.next() * width, rng.next() * height) for _ in range(n)]


class TestCircumcircle:
    """Test circumcircle computation."""

    def test_right_triangle(self):
        """Test the circumcenter of a right triangle is the hypotenuse midpoint."""
        center, radius_sq = circumcircle(Point(0, 0), Point(10, 0), Point(0, 10))
        assert center.x == pytest.approx(5.0)
        assert center.y == pytest.approx(5.0)
        assert radius_sq == pytest.approx(50.0)

    def test_collinear_is_infinite(self):
        """Test that collinear points get an infinite radius."""
        _, radius_sq = circumcircle(Point(0, 0), Point(5, 0), Point(10, 0))
        assert math.isinf(radius_sq)

    def test_degenerate_contains_nothing(self):
        """Test that a degenerate triangle is never selected for removal."""
        tri = Triangle(0, 1, 2, Point(5, 0), math.inf)
        assert not tri.circumcircle_contains(Point(5, 0))


class TestTriangulate:
    """Test triangulation output."""

    def test_single_triangle(self):
        """Test three sites give one triangle with circumcenter (5, 5)."""
        triangles = triangulate([(0, 0), (10, 0), (0, 10)], 10, 10)
        assert len(triangles) == 1
        tri = triangles[0]
        assert sorted(tri.vertices) == [0, 1, 2]
        assert tri.circumcenter.x == pytest.approx(5.0)
        assert tri.circumcenter.y == pytest.approx(5.0)

    def test_square(self):
        """Test a convex quadrilateral gives two triangles."""
        triangles = triangulate([(0, 0), (10, 0), (11, 7), (0, 6)], 12, 8)
        assert len(triangles) == 2

    def test_indices_valid(self):
        """Test indices are distinct and refer to input sites only."""
        sites = _random_sites(40)
        for tri in triangulate(sites, 100, 100):
            assert len(set(tri.vertices)) == 3
            assert all(0 <= v < len(sites) for v in tri.vertices)

    def test_empty_circumcircle(self):
        """Test the Delaunay property for every triangle."""
        sites = _random_sites(60, seed=2)
        triangles = triangulate(sites, 100, 100)
        assert triangles
        for tri in triangles:
            for index, site in enumerate(sites):
                if index in tri.vertices:
                    continue
                assert distance_sq(tri.circumcenter, site) >= tri.radius_sq * (1 - 1e-9)

    def test_matches_scipy(self):
        """Test every triangle also appears in scipy's triangulation."""
        sites = _random_sites(50, seed=3)
        reference = {tuple(sorted(s)) for s in Delaunay(np.array(sites)).simplices}
        triangles = triangulate(sites, 100, 100)
        assert len(triangles) >= 0.8 * len(reference)
        for tri in triangles:
            assert tuple(sorted(tri.vertices)) in reference

    def test_poisson_sites(self):
        """Test triangulation of well-spaced sampled sites."""
        sites = poisson_disk_sample(300, 200, 40.0, RandomStream(4))
        triangles = triangulate(sites, 300, 200)
        used = {v for tri in triangles for v in tri.vertices}
        assert used == set(range(len(sites)))

    def test_collinear_sites(self):
        """Test collinear input does not crash."""
        triangles = triangulate([(0, 0), (5, 0), (10, 0)], 10, 10)
        for tri in triangles:
            assert len(set(tri.vertices)) == 3

    def test_too_few_sites(self):
        """Test fewer than three sites give no triangles."""
        assert triangulate([], 10, 10) == []
        assert triangulate([(1, 1), (2, 2)], 10, 10) == []

    def test_circumcenters_cached(self):
        """Test cached circumcircles match a fresh computation."""
        sites = _random_sites(20, seed=5)
        for tri in triangulate(sites, 100, 100):
            center, radius_sq = circumcircle(sites[tri.a], sites[tri.b], sites[tri.c])
            assert tri.circumcenter.x == pytest.approx(center.x)
            assert tri.circumcenter.y == pytest.approx(center.y)
            assert tri.radius_sq == pytest.approx(radius_sq)


class TestSuperTriangle:
    """Test the enclosing super-triangle."""

    def test_encloses_map(self):
        """Test every map corner lies inside the super-triangle."""
        a, b, c = super_triangle(400, 300)

        def sign(p, q, r):
            return (p.x - r.x) * (q.y - r.y) - (q.x - r.x) * (p.y - r.y)

        for corner in [Point(0, 0), Point(400, 0), Point(0, 300), Point(400, 300)]:
            d1, d2, d3 = sign(corner, a, b), sign(corner, b, c), sign(corner, c, a)
            assert (d1 > 0 and d2 > 0 and d3 > 0) or (d1 < 0 and d2 < 0 and d3 < 0)
