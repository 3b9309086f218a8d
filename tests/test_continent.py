"""Tests for the continent generation pipeline."""

import pytest
import numpy as np
from scipy import ndimage
from py_landmass.core.continent import (
    ContinentGenerator, ContinentParams, ContinentResult, build_continent
)

TEST_WIDTH = 160
TEST_HEIGHT = 120


@pytest.fixture(scope="module")
def continent():
    return build_continent(TEST_WIDTH, TEST_HEIGHT, ContinentParams(seed=7))


class TestBuildContinent:
    """Test end-to-end continent generation."""

    def test_result_shape(self, continent):
        """Test the mask layout and bookkeeping."""
        assert isinstance(continent, ContinentResult)
        assert continent.land_mask.shape == (TEST_HEIGHT, TEST_WIDTH)
        assert continent.land_mask.dtype == bool
        assert continent.width == TEST_WIDTH
        assert continent.height == TEST_HEIGHT
        assert continent.seed == 7

    def test_land_statistics(self, continent):
        """Test the land count and fraction."""
        assert continent.land_pixel_count == int(continent.land_mask.sum())
        assert continent.land_pixel_count > 0
        assert continent.land_fraction == pytest.approx(
            continent.land_pixel_count / (TEST_WIDTH * TEST_HEIGHT)
        )
        assert continent.land_percent == round(continent.land_fraction * 100, 1)

    def test_single_landmass(self, continent):
        """Test that the mask holds exactly one 4-connected landmass."""
        _, count = ndimage.label(continent.land_mask)
        assert count == 1

    def test_single_landmass_across_seeds(self):
        """Test connectivity for several seeds and erosion settings."""
        for seed in range(5):
            for erosion in (0, 3):
                result = build_continent(
                    96, 80, ContinentParams(seed=seed, erosion_iterations=erosion, noise_strength=0.7)
                )
                _, count = ndimage.label(result.land_mask)
                assert count <= 1
                assert count == (1 if result.land_pixel_count else 0)

    def test_deterministic(self):
        """Test that the same seed reproduces the same mask."""
        a = build_continent(80, 64, ContinentParams(seed=99))
        b = build_continent(80, 64, ContinentParams(seed=99))
        np.testing.assert_array_equal(a.land_mask, b.land_mask)

    def test_different_seeds(self):
        """Test that different seeds give different masks."""
        a = build_continent(80, 64, ContinentParams(seed=1))
        b = build_continent(80, 64, ContinentParams(seed=2))
        assert not np.array_equal(a.land_mask, b.land_mask)

    def test_erosion_only_shrinks(self):
        """Test that more erosion never adds land for the same seed."""
        plain = build_continent(96, 80, ContinentParams(seed=5, erosion_iterations=0))
        eroded = build_continent(96, 80, ContinentParams(seed=5, erosion_iterations=4))
        assert eroded.land_pixel_count <= plain.land_pixel_count
        assert not (eroded.land_mask & ~plain.land_mask).any()

    def test_bigger_island_more_land(self):
        """Test that island size drives land coverage."""
        small = build_continent(120, 100, ContinentParams(seed=3, island_size=0.4))
        large = build_continent(120, 100, ContinentParams(seed=3, island_size=1.0))
        assert large.land_pixel_count > small.land_pixel_count

    def test_defaults(self):
        """Test that parameters are optional."""
        result = build_continent(64, 48)
        assert result.seed == ContinentParams().seed

    def test_invalid_dimensions(self):
        """Test that non-positive dimensions fail fast."""
        with pytest.raises(ValueError):
            build_continent(0, 10)
        with pytest.raises(ValueError):
            ContinentGenerator(10, -1)


class TestContinentGenerator:
    """Test the generator class."""

    def test_base_radius(self):
        """Test the base radius formula."""
        generator = ContinentGenerator(200, 100)
        assert generator.base_radius(ContinentParams(island_size=0.5)) == pytest.approx(20.0)

    def test_reusable(self):
        """Test that one generator serves several runs independently."""
        generator = ContinentGenerator(80, 60)
        first = generator.generate(ContinentParams(seed=4))
        generator.generate(ContinentParams(seed=5))
        again = generator.generate(ContinentParams(seed=4))
        np.testing.assert_array_equal(first.land_mask, again.land_mask)
