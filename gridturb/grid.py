"""
Cell-centred 3D grid of vectors, the container in which turbulent fields are synthesized.
"""

from typing import Union

import numpy as np
from scipy.ndimage import map_coordinates

from .parameters import GridProperties


class Grid3d:
    r"""
    Regular grid of 3-vectors with periodic boundaries.

    The value of cell :math:`(i, j, k)` is located at

    .. math::
        \boldsymbol{x}_{ijk} = \boldsymbol{x}_0 + \left( (i, j, k) + \tfrac{1}{2} \right) h

    where :math:`\boldsymbol{x}_0` is the grid origin and :math:`h` the spacing. The values are stored in a numpy array
    of shape ``(nx, ny, nz, 3)`` which is exposed through :py:attr:`values` and may be modified in place.
    """

    def __init__(self, properties: GridProperties):
        """
        Parameters
        ----------
        properties : GridProperties
            Number of cells, spacing and origin of the grid.
        """
        self.properties = properties
        self.values = np.zeros(properties.shape + (3,), dtype=np.float64)

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.properties.shape

    @property
    def n(self) -> np.ndarray:
        return self.properties.n

    @property
    def spacing(self) -> np.ndarray:
        return self.properties.spacing

    @property
    def origin(self) -> np.ndarray:
        return self.properties.origin

    def get(self, ix: int, iy: int, iz: int) -> np.ndarray:
        """Return a view of the vector stored in cell ``(ix, iy, iz)``."""
        return self.values[ix, iy, iz]

    def set(self, ix: int, iy: int, iz: int, value) -> None:
        """Overwrite the vector stored in cell ``(ix, iy, iz)``."""
        self.values[ix, iy, iz] = value

    def interpolate(self, positions: Union[np.ndarray, list[float]]) -> np.ndarray:
        """Trilinear interpolation of the grid at arbitrary positions.

        The grid is repeated periodically, so positions outside of the grid volume are valid.

        Parameters
        ----------
        positions : Union[np.ndarray, list[float]]
            A single position of shape ``(3,)`` or several positions of shape ``(m, 3)``.

        Returns
        -------
        np.ndarray
            Interpolated vectors, of shape ``(3,)`` or ``(m, 3)`` matching the input.

        Raises
        ------
        ValueError
            If the last dimension of ``positions`` is not 3.
        """
        positions = np.asarray(positions, dtype=np.float64)
        single = positions.ndim == 1
        positions = np.atleast_2d(positions)
        if positions.shape[-1] != 3:
            raise ValueError("Positions must have a last dimension of length 3.")

        # fractional cell indices, measured from the first cell centre
        coords = ((positions - self.origin) / self.spacing - 0.5).T

        result = np.stack(
            [map_coordinates(self.values[..., i], coords, order=1, mode="grid-wrap") for i in range(3)],
            axis=-1,
        )
        return result[0] if single else result
