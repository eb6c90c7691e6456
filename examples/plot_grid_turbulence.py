"""
=============================
Turbulent Magnetic Field Grid
=============================

This example synthesizes a turbulent magnetic field on a periodic cubic grid, following a Kolmogorov spectrum with
a bend-over at large scales. ``gridturb`` normalizes the field to the requested RMS strength, and provides utilities
for plotting the result through Plotly as well as for saving it to VTK for downstream analysis.

.. warning::
    This example may take a few seconds to load. Please be patient, Plotly requires some time to render 3D graphics.
"""

#######################################################################################
# Import packages
# ---------------
#
# First, we import the packages we need for this example.
from pathlib import Path

import numpy as np

from gridturb import (
    BendoverSpectrum,
    GridProperties,
    GridTurbulence,
    HelicalGridTurbulence,
    plot_field_magnitude,
)

path = Path().resolve()

#######################################################################################
# Setting the Grid and the Spectrum
# ---------------------------------
# The grid is a cube of :math:`64^3` cells of unit spacing. The turbulence spans scales from two cells, the smallest
# scale the grid can resolve, up to the grid size; the spectrum bends over at a quarter of the grid.
grid_properties = GridProperties(n=64, spacing=1.0)

spectrum = BendoverSpectrum(brms=1.0, lmin=2.0, lmax=64.0, lbendover=16.0)

seed = 9000

#######################################################################################
# Synthesizing the Field
# ----------------------
# The whole synthesis runs in the constructor: the Fourier modes are drawn, transformed to real space with FFTW and
# the grid is scaled to the RMS strength of the spectrum.
turbulence = GridTurbulence(spectrum, grid_properties, seed=seed, progress=True)

print(f"RMS field strength: {turbulence.get_rms_field_strength():.6f}")
print(f"RMS per axis: {turbulence.get_rms_field_strength_per_axis()}")
print(f"Mean field vector: {turbulence.get_mean_field_vector()}")
print(f"Correlation length: {turbulence.get_correlation_length():.3f}")

#######################################################################################
# Evaluating the Field
# --------------------
# Between the grid points, the field is linearly interpolated on the periodic grid, so that it can be evaluated at
# any position, including positions outside of the box.
positions = np.array([[0.5, 0.5, 0.5], [10.0, 20.0, 30.0], [-5.0, 100.0, 64.5]])
print(turbulence.get_field(positions))

#######################################################################################
# Helical Turbulence
# ------------------
# With a fractional helicity, the Fourier modes are given a preferred handedness; the spectrum and normalization
# are unchanged.
helical = HelicalGridTurbulence(spectrum, grid_properties, helicity=0.8, seed=seed)
print(f"Helical RMS field strength: {helical.get_rms_field_strength():.6f}")

#######################################################################################
# Plotting the Field Magnitude
# ----------------------------
# Finally, the magnitude of the field is rendered with Plotly.
fig = plot_field_magnitude(turbulence.grid.spacing, turbulence.grid.values, surf_count=25, transparent=True)

# this is a Plotly figure, which can be visualized with the ``.show()`` method in different contexts.
fig  # .show("browser")

#######################################################################################
# Saving the Field to VTK
# -----------------------
# The field can also be saved as cell data of a VTK image, to be opened in ParaView, for example.
turbulence.save_to_vtk(path / "turbulent_field")
