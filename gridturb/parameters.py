"""Dataclasses that make it easy to pass around grid parameters."""

from dataclasses import dataclass, field
from typing import Union

import numpy as np

__all__ = ["GridProperties"]


#######################################################################################################
# 	Grid parameters
#######################################################################################################


@dataclass
class GridProperties:
    r"""Define the geometry of the grid on which a turbulent field is synthesized.

    Args
    ----
    n : Union[int, tuple[int, int, int]]
        Number of cells along each axis. A scalar is broadcast to all three axes.
    spacing : Union[float, tuple[float, float, float]]
        Cell size along each axis. A scalar is broadcast to all three axes.
    origin : Union[tuple[float, float, float], np.ndarray]
        Position of the lower corner of the grid, by default the coordinate origin.

    Raises
    ------
    ValueError
        If a vector argument does not have length 3, or if a cell count or spacing is not positive.
    """

    n: Union[int, tuple[int, int, int], "np.ndarray", list[int]]
    spacing: Union[float, tuple[float, float, float], "np.ndarray", list[float]]
    origin: Union[tuple[float, float, float], "np.ndarray", list[float]] = field(
        default_factory=lambda: np.zeros(3)
    )

    def __post_init__(self):
        self.n = self._as_triple(self.n, "Cell counts", dtype=int)
        self.spacing = self._as_triple(self.spacing, "Grid spacing", dtype=float)
        self.origin = self._as_triple(self.origin, "Grid origin", dtype=float)

        if np.any(self.n <= 0):
            raise ValueError("Cell counts must be positive.")
        if np.any(self.spacing <= 0):
            raise ValueError("Grid spacing must be positive.")

    @staticmethod
    def _as_triple(value, name: str, dtype) -> np.ndarray:
        if np.isscalar(value):
            return np.full(3, value, dtype=dtype)

        arr = np.asarray(value, dtype=dtype)
        if arr.shape != (3,):
            raise ValueError(f"{name} must be a scalar or of length 3.")
        return arr

    @property
    def nx(self) -> int:
        return int(self.n[0])

    @property
    def ny(self) -> int:
        return int(self.n[1])

    @property
    def nz(self) -> int:
        return int(self.n[2])

    @property
    def shape(self) -> tuple[int, int, int]:
        """Number of cells per axis as a tuple."""
        return (self.nx, self.ny, self.nz)
