"""
This module implements the turbulent field synthesis forward facing API
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..grid import Grid3d
from ..loggers import format_banner, gridturb_log
from ..parameters import GridProperties
from ..random_stream import RandomStream
from ..spectrum import TurbulenceSpectrum
from .geometry import check_grid_requirements
from .statistics import (
    evaluate_divergence,
    mean_field_strength,
    mean_field_vector,
    rms_field_strength,
    rms_field_strength_per_axis,
    scale_grid,
)
from .synthesis import HelicalPolarization, Polarization, TransversePolarization, synthesize_coefficients
from .transforms import METHOD_FFTW, TRANSFORM_METHODS, execute_inverse_transform, spectral_buffers


class GridTurbulence:
    r"""
    Turbulent vector field on a cubic grid with a prescribed energy spectrum.

    The field is synthesized in Fourier space: each wavevector :math:`\boldsymbol{k}` with
    :math:`h / l_{\max} \leq |\boldsymbol{k}| \leq h / l_{\min}` receives an amplitude
    :math:`\sqrt{E(k \lambda)}`, a random polarization transverse to :math:`\boldsymbol{k}` and a random phase. The
    three components are inverse-transformed to real space and the grid is finally scaled so that its RMS field
    strength equals :math:`B_{\text{rms}}` of the spectrum.

    The synthesis runs entirely in the constructor; either a fully populated and normalized grid results, or an
    exception is raised.
    """

    def __init__(
        self,
        spectrum: TurbulenceSpectrum,
        grid_properties: GridProperties,
        seed: int = 0,
        random_stream: Optional[RandomStream] = None,
        transform: str = METHOD_FFTW,
        progress: bool = False,
        polarization: Optional[Polarization] = None,
    ):
        """
        Parameters
        ----------
        spectrum : TurbulenceSpectrum
            Spectrum of the turbulence, providing the scales and the target RMS amplitude.
        grid_properties : GridProperties
            Geometry of the grid; must describe a cube with isotropic spacing.
        seed : int, optional
            Random seed, by default 0 which selects an unpredictable seed.
        random_stream : Optional[RandomStream], optional
            Stream of random numbers to consume instead of one created from ``seed``, by default None.
        transform : str, optional
            Inverse transform backend, ``"fftw"`` or ``"scipy"``, by default ``"fftw"``.
        progress : bool, optional
            Show a progress bar during the synthesis, by default False.
        polarization : Optional[Polarization], optional
            Polarization of the Fourier modes, by default :py:class:`TransversePolarization`.

        Raises
        ------
        ValueError
            If both a non-zero ``seed`` and a ``random_stream`` are given, the transform backend is unknown, or the
            spectrum carries no energy within the turbulence band.
        GeometryError
            If the grid cannot represent the turbulence band of the spectrum.
        AllocationError
            If the spectral buffers cannot be allocated.
        """
        if seed != 0 and random_stream is not None:
            raise ValueError("Pass either a seed or a random stream, not both.")
        if transform not in TRANSFORM_METHODS:
            raise ValueError(f'Unknown transform method "{transform}", expected one of {TRANSFORM_METHODS}.')

        check_grid_requirements(grid_properties, spectrum.lmin, spectrum.lmax)

        self.spectrum = spectrum
        self.seed = seed
        self.transform = transform
        self.progress = progress
        self.polarization = polarization if polarization is not None else TransversePolarization()
        self.random_stream = random_stream if random_stream is not None else RandomStream(seed)

        self.grid = Grid3d(grid_properties)
        self._init_turbulence()

    def _init_turbulence(self) -> None:
        n = self.grid.properties.nx
        spacing = float(self.grid.spacing[0])

        gridturb_log.info(format_banner(f"{self.spectrum!r} on {n}^3 grid", loc=self.__class__.__name__))

        with spectral_buffers(n) as buffers:
            synthesize_coefficients(
                self.spectrum,
                spacing,
                self.random_stream,
                buffers,
                polarization=self.polarization,
                progress=self.progress,
            )
            execute_inverse_transform(self.grid, buffers, method=self.transform)

        rms = rms_field_strength(self.grid)
        if rms == 0.0:
            raise ValueError(f"{self.spectrum!r} carries no energy within the turbulence band.")

        # normalize to Brms
        factor = self.spectrum.brms / rms
        scale_grid(self.grid, factor)
        gridturb_log.info(f"Grid scaled by {factor:.6g} to Brms = {self.spectrum.brms}")

    def get_grid(self) -> Grid3d:
        """Return the grid holding the field."""
        return self.grid

    def get_field(self, positions: Union[np.ndarray, list[float]]) -> np.ndarray:
        """Field at the given position(s), interpolated from the periodic grid, see :py:meth:`Grid3d.interpolate`."""
        return self.grid.interpolate(positions)

    def get_mean_field_vector(self) -> np.ndarray:
        """Evaluate the mean vector of all grid points"""
        return mean_field_vector(self.grid)

    def get_mean_field_strength(self) -> float:
        """Evaluate the mean of all grid points"""
        return mean_field_strength(self.grid)

    def get_rms_field_strength(self) -> float:
        """Evaluate the RMS of all grid points"""
        return rms_field_strength(self.grid)

    def get_rms_field_strength_per_axis(self) -> np.ndarray:
        """Evaluate the RMS of all grid points per axis"""
        return rms_field_strength_per_axis(self.grid)

    def get_correlation_length(self) -> float:
        """Correlation length of the spectrum.

        Raises
        ------
        NotImplementedError
            If the spectrum does not define a correlation length.
        """
        if not hasattr(self.spectrum, "correlation_length"):
            raise NotImplementedError(f"{self.spectrum!r} does not define a correlation length.")
        return self.spectrum.correlation_length()

    def evaluate_divergence(self) -> np.ndarray:
        """Point-wise divergence of the field, see :py:func:`evaluate_divergence`."""
        return evaluate_divergence(self.grid)

    def save_to_vtk(self, filepath: Union[str, Path] = "./turbulent_field") -> str:
        """Save the synthesized field in VTK format to specified filepath.

        Parameters
        ----------
        filepath : Union[str, Path]
           Filepath, without extension, to which to save the field.

        Returns
        -------
        str
            Full path of the written file, as returned by pyevtk.
        """
        from pyevtk.hl import imageToVTK

        cellData = {"field": tuple(np.copy(self.grid.values[..., i], order="C") for i in range(3))}

        return imageToVTK(
            str(filepath),
            origin=tuple(float(x) for x in self.grid.origin),
            spacing=tuple(float(x) for x in self.grid.spacing),
            cellData=cellData,
        )


class HelicalGridTurbulence(GridTurbulence):
    r"""
    Turbulent field as :py:class:`GridTurbulence`, with a fractional helicity :math:`H \in [-1, 1]`.

    Only the polarization of the Fourier modes differs, see :py:class:`HelicalPolarization`; at :math:`H = 0` the
    synthesized field coincides with the one of :py:class:`GridTurbulence` for the same seed.
    """

    def __init__(
        self,
        spectrum: TurbulenceSpectrum,
        grid_properties: GridProperties,
        helicity: float,
        seed: int = 0,
        random_stream: Optional[RandomStream] = None,
        transform: str = METHOD_FFTW,
        progress: bool = False,
    ):
        """
        Parameters
        ----------
        helicity : float
            Fractional helicity :math:`H`, between -1 and 1.

        See :py:class:`GridTurbulence` for the other parameters.

        Raises
        ------
        ValueError
            If ``helicity`` lies outside of [-1, 1].
        """
        self.helicity = helicity
        super().__init__(
            spectrum,
            grid_properties,
            seed=seed,
            random_stream=random_stream,
            transform=transform,
            progress=progress,
            polarization=HelicalPolarization(helicity),
        )
