"""Statistics of vector grids, used to check and normalize synthesized fields.

All functions take the grid explicitly and, apart from :py:func:`scale_grid`, do not modify it.
"""

import numpy as np

from ..grid import Grid3d


def mean_field_vector(grid: Grid3d) -> np.ndarray:
    """Mean vector over all grid cells."""
    return grid.values.reshape(-1, 3).mean(axis=0)


def mean_field_strength(grid: Grid3d) -> float:
    """Mean of the vector norm over all grid cells."""
    return float(np.linalg.norm(grid.values, axis=-1).mean())


def rms_field_strength(grid: Grid3d) -> float:
    r"""Root-mean-square field strength :math:`\sqrt{\langle |\boldsymbol{B}|^2 \rangle}`."""
    return float(np.sqrt(np.mean(np.sum(grid.values**2, axis=-1))))


def rms_field_strength_per_axis(grid: Grid3d) -> np.ndarray:
    r"""Root-mean-square of each vector component, :math:`\sqrt{\langle B_i^2 \rangle}` for :math:`i = x, y, z`."""
    return np.sqrt(np.mean(grid.values.reshape(-1, 3) ** 2, axis=0))


def scale_grid(grid: Grid3d, factor: float) -> None:
    """Multiply every vector of the grid in place by ``factor``."""
    grid.values *= factor


def evaluate_divergence(grid: Grid3d) -> np.ndarray:
    r"""Evaluate the point-wise divergence of the vector field stored in ``grid``.

    The grid is periodic, so second-order central differences are taken everywhere, wrapping around at the faces
    with ``np.roll``. This approximates

    .. math::
        \operatorname{div} \boldsymbol{B} = \frac{\partial B_x}{\partial x} +
        \frac{\partial B_y}{\partial y} + \frac{\partial B_z}{\partial z}.

    Parameters
    ----------
    grid : Grid3d
        Grid holding the vector field.

    Returns
    -------
    np.ndarray
        Point-wise divergence of the vector field, of shape ``(nx, ny, nz)``. To gather further information
        about the divergence, consider using ``.max()``, ``.sum()`` or ``.mean()``.
    """
    spacing = grid.spacing
    return np.ufunc.reduce(
        np.add,
        [
            (np.roll(grid.values[..., i], -1, axis=i) - np.roll(grid.values[..., i], 1, axis=i)) / (2 * spacing[i])
            for i in range(3)
        ],
    )
