"""Seeded source of uniform random numbers shared by one synthesis run."""

from typing import Optional

import numpy as np


class RandomStream:
    """Uniform random draws in :math:`[0, 1)` with an explicit seeding contract.

    A seed of ``0`` requests an unpredictable seed taken from the operating system; any other value seeds the
    underlying ``np.random.Generator`` with exactly that value, so two streams built from the same non-zero seed
    produce the same sequence.

    The stream is mutated by every draw and must not be shared between concurrent synthesis runs.
    """

    def __init__(self, seed: int = 0):
        """
        Parameters
        ----------
        seed : int, optional
            Seed of the stream, by default 0 (unpredictable).
        """
        self.draw_count = 0
        self.seed(seed)

    def seed(self, value: int = 0):
        """Reseed the stream.

        Parameters
        ----------
        value : int, optional
            New seed; 0 selects an unpredictable seed, by default 0.

        Raises
        ------
        ValueError
            If ``value`` is negative.
        """
        if value < 0:
            raise ValueError("Seed must be a non-negative integer.")

        self._seed = int(value)
        self._rng = np.random.default_rng(None if value == 0 else int(value))

    @property
    def seed_value(self) -> Optional[int]:
        """Seed supplied by the user, or None if the stream is unpredictable."""
        return self._seed or None

    def draw(self) -> float:
        """Draw a single value uniformly from :math:`[0, 1)`."""
        self.draw_count += 1
        return float(self._rng.random())

    def draw_many(self, count: int) -> np.ndarray:
        """Draw ``count`` values at once.

        The values are the same, in the same order, as ``count`` successive calls of :py:meth:`draw`.
        """
        self.draw_count += count
        return self._rng.random(count)
