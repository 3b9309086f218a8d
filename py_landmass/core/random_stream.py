"""
Seeded random stream used by every stochastic stage of the pipeline.

Based on Johannes Baagøe's Alea algorithm. Every generator is created from
an explicit seed, so continent shapes, site samples and boundary jitter are
reproducible. Python's random and NumPy's global random state are never
used by the generation code.
"""

from typing import Sequence, TypeVar, Union

T = TypeVar("T")

Seed = Union[int, str]


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class RandomStream:
    """
    Deterministic stream of floats in [0, 1).

    The same seed always yields the same sequence; ``str(seed)`` is mashed
    into the generator state, so ``RandomStream(7)`` and ``RandomStream("7")``
    are equivalent.
    """

    def __init__(self, seed: Seed):
        """Initialize with seed string or number."""
        self.seed = seed
        self.call_count = 0

        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            for char in str(data):
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self._s0 = mash(" ")
        self._s1 = mash(" ")
        self._s2 = mash(" ")
        self._c = 1

        self._s0 -= mash(seed)
        if self._s0 < 0:
            self._s0 += 1
        self._s1 -= mash(seed)
        if self._s1 < 0:
            self._s1 += 1
        self._s2 -= mash(seed)
        if self._s2 < 0:
            self._s2 += 1

    def next(self) -> float:
        """Return the next value in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self._s0 + self._c * 2.3283064365386963e-10  # 2^-32
        self._s0 = self._s1
        self._s1 = self._s2
        self._c = int(t)
        self._s2 = t - self._c
        return self._s2

    def uniform(self, low: float, high: float) -> float:
        """Return a float in [low, high)."""
        return low + (high - low) * self.next()

    def randint(self, upper: int) -> int:
        """Return an integer in [0, upper)."""
        return int(self.next() * upper)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randint(len(seq))]

    def derive_seed(self) -> int:
        """Draw a 31-bit integer seed for a dependent generator."""
        return self.randint(2**31 - 1)
