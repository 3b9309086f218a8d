"""Seeded 2-D coherent noise using OpenSimplex."""

import numpy as np
from opensimplex import OpenSimplex


class NoiseSource:
    """Deterministic noise generator with a fixed seed, values in [-1, 1]."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._simplex = OpenSimplex(seed=self.seed)

    def noise2d(self, x: float, y: float) -> float:
        """Sample noise at a single point."""
        value = self._simplex.noise2(float(x), float(y))
        return min(1.0, max(-1.0, value))

    def noise2d_grid(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Sample noise on the grid spanned by two coordinate axes.

        Args:
            xs: 1-D x coordinates (columns)
            ys: 1-D y coordinates (rows)

        Returns:
            Array of shape (len(ys), len(xs)) where ``grid[j, i]`` is the
            noise at ``(xs[i], ys[j])``
        """
        xs = np.ascontiguousarray(xs, dtype=np.float64).ravel()
        ys = np.ascontiguousarray(ys, dtype=np.float64).ravel()
        return np.clip(self._simplex.noise2array(xs, ys), -1.0, 1.0)
