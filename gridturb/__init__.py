"""
Synthetic turbulent vector fields on regular grids.

gridturb synthesizes statistically isotropic, transverse random vector fields on cubic grids whose power spectrum
follows a prescribed turbulence spectrum, normalized to a target RMS amplitude. The resulting grids are intended as
random magnetic-field realizations for charged-particle propagation, read through periodic interpolation.
"""

from .exceptions import AllocationError, GeometryError
from .grid import Grid3d
from .parameters import GridProperties
from .random_stream import RandomStream
from .spectrum import (
    BendoverSpectrum,
    FunctionSpectrum,
    PowerLawSpectrum,
    TurbulenceSpectrum,
    turbulent_correlation_length,
)
from .turbulent_field import (
    GridTurbulence,
    HelicalGridTurbulence,
    check_grid_requirements,
    mean_field_strength,
    mean_field_vector,
    plot_field_components,
    plot_field_magnitude,
    rms_field_strength,
    rms_field_strength_per_axis,
)

__all__ = [
    # Exceptions
    "AllocationError",
    "GeometryError",
    # Grid
    "Grid3d",
    "GridProperties",
    "RandomStream",
    # Spectra
    "BendoverSpectrum",
    "FunctionSpectrum",
    "PowerLawSpectrum",
    "TurbulenceSpectrum",
    "turbulent_correlation_length",
    # Turbulent Field
    "GridTurbulence",
    "HelicalGridTurbulence",
    "check_grid_requirements",
    "mean_field_strength",
    "mean_field_vector",
    "rms_field_strength",
    "rms_field_strength_per_axis",
    "plot_field_components",
    "plot_field_magnitude",
]
