"""Geometric requirements a grid must satisfy before a turbulent field is synthesized on it."""

from typing import Union

from ..exceptions import GeometryError
from ..grid import Grid3d
from ..loggers import gridturb_log
from ..parameters import GridProperties


def check_grid_requirements(grid: Union[GridProperties, Grid3d], lmin: float, lmax: float) -> None:
    r"""Check that the grid can represent turbulence between the scales ``lmin`` and ``lmax``.

    The grid must be cubic with isotropic spacing :math:`h`, must resolve the smallest scale
    (:math:`l_{\min} \geq 2h`, the Nyquist limit) and must contain the largest scale
    (:math:`l_{\max} \leq N h`).

    Parameters
    ----------
    grid : Union[GridProperties, Grid3d]
        Grid, or the properties of the grid, to check.
    lmin : float
        Minimum turbulence scale.
    lmax : float
        Maximum turbulence scale.

    Raises
    ------
    GeometryError
        On the first violated requirement, with ``constraint`` set to one of ``"cubic"``, ``"spacing"``,
        ``"lmin"`` or ``"lmax"``.
    """
    properties = grid.properties if isinstance(grid, Grid3d) else grid
    nx, ny, nz = properties.shape
    spacing = properties.spacing

    if nx != ny or ny != nz:
        raise GeometryError("cubic", f"turbulentField: only cubic grid supported, got {nx}x{ny}x{nz}")
    if spacing[0] != spacing[1] or spacing[1] != spacing[2]:
        raise GeometryError("spacing", f"turbulentField: only equal spacing supported, got {tuple(spacing)}")
    if lmin < 2 * spacing[0]:
        raise GeometryError("lmin", f"turbulentField: lMin < 2 * spacing ({lmin} < {2 * spacing[0]})")
    # NOTE: this bound was once the stricter lmax > nx * spacing / 2
    if lmax > nx * spacing[0]:
        raise GeometryError("lmax", f"turbulentField: lMax > size ({lmax} > {nx * spacing[0]})")

    gridturb_log.debug(f"Grid of {nx}^3 cells with spacing {spacing[0]} accepted for scales [{lmin}, {lmax}]")
