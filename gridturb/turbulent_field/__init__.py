__all__ = [
    "GridTurbulence",
    "HelicalGridTurbulence",
    "check_grid_requirements",
    "transverse_basis",
    "wavenumbers",
    "sample_spectrum",
    "synthesize_coefficients",
    "Polarization",
    "TransversePolarization",
    "HelicalPolarization",
    "SpectralBuffers",
    "spectral_buffers",
    "padded_index",
    "execute_inverse_transform",
    "mean_field_vector",
    "mean_field_strength",
    "rms_field_strength",
    "rms_field_strength_per_axis",
    "scale_grid",
    "evaluate_divergence",
    "create_grid",
    "format_field",
    "plot_field_components",
    "plot_field_magnitude",
]

from .basis import transverse_basis
from .field_plot import create_grid, format_field, plot_field_components, plot_field_magnitude
from .geometry import check_grid_requirements
from .grid_turbulence import GridTurbulence, HelicalGridTurbulence
from .statistics import (evaluate_divergence, mean_field_strength,
                         mean_field_vector, rms_field_strength,
                         rms_field_strength_per_axis, scale_grid)
from .synthesis import (HelicalPolarization, Polarization,
                        TransversePolarization, sample_spectrum,
                        synthesize_coefficients, wavenumbers)
from .transforms import (SpectralBuffers, execute_inverse_transform,
                         padded_index, spectral_buffers)
