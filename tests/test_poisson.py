"""Tests for Poisson-disk sampling."""

import pytest
import numpy as np
from scipy.spatial.distance import pdist
from py_landmass.core.land_mask import make_land_predicate
from py_landmass.core.poisson import poisson_disk_sample
from py_landmass.core.random_stream import RandomStream


class TestPoissonDiskSample:
    """Test spacing and acceptance guarantees."""

    def test_min_distance(self):
        """Test that no two points are closer than min_dist."""
        points = poisson_disk_sample(200, 150, 12.0, RandomStream(1))
        assert len(points) > 50
        distances = pdist(np.array(points))
        assert distances.min() >= 12.0 - 1e-9

    def test_points_in_bounds(self):
        """Test that every point lies inside the sampling area."""
        points = poisson_disk_sample(100, 60, 7.0, RandomStream(2))
        for x, y in points:
            assert 0 <= x < 100
            assert 0 <= y < 60

    def test_accept_predicate(self):
        """Test that every point satisfies the predicate."""
        mask = np.zeros((80, 120), dtype=bool)
        mask[10:70, 20:60] = True
        accept = make_land_predicate(mask)
        points = poisson_disk_sample(120, 80, 6.0, RandomStream(3), accept=accept)
        assert len(points) > 10
        assert all(accept(x, y) for x, y in points)
        assert all(20 <= x < 60 and 10 <= y < 70 for x, y in points)

    def test_no_acceptable_area(self):
        """Test that a predicate rejecting everything yields nothing."""
        rng = RandomStream(4)
        points = poisson_disk_sample(50, 50, 5.0, rng, accept=lambda x, y: False)
        assert points == []
        # x and y per seed attempt
        assert rng.call_count == 1000

    def test_deterministic(self):
        """Test that the same seed reproduces the same points."""
        a = poisson_disk_sample(90, 90, 9.0, RandomStream("same"))
        b = poisson_disk_sample(90, 90, 9.0, RandomStream("same"))
        assert a == b

    def test_dense_coverage(self):
        """Test that sampling fills the area rather than stopping early."""
        points = poisson_disk_sample(100, 100, 10.0, RandomStream(5), k=30)
        # Maximal Poisson-disk packings cover roughly 0.6-0.7 points per r^2
        assert 40 <= len(points) <= 116

    def test_non_positive_distance(self):
        """Test that a non-positive distance degrades to no samples."""
        assert poisson_disk_sample(10, 10, 0.0, RandomStream(6)) == []

    def test_invalid_area(self):
        """Test that a non-positive area fails fast."""
        with pytest.raises(ValueError):
            poisson_disk_sample(0, 10, 1.0, RandomStream(7))


class TestLandPredicate:
    """Test the land acceptance predicate."""

    def test_floor_lookup(self):
        """Test coordinates map to the containing cell."""
        mask = np.zeros((3, 4), dtype=bool)
        mask[1, 2] = True
        accept = make_land_predicate(mask)
        assert accept(2.0, 1.0)
        assert accept(2.99, 1.99)
        assert not accept(1.99, 1.5)
        assert not accept(3.0, 1.0)

    def test_out_of_range_rejected(self):
        """Test that coordinates outside the grid are rejected."""
        accept = make_land_predicate(np.ones((3, 4), dtype=bool))
        assert not accept(-0.1, 1)
        assert not accept(4.0, 1)
        assert not accept(1, 3.0)
        assert not accept(1, -2)
