r"""Turbulence spectra consumed by the grid synthesis.

Only the evaluation contract matters to the synthesis: a spectrum maps a dimensionless wavenumber to a
non-negative spectral energy density and carries the scales :math:`l_{\min}`, :math:`l_{\max}`,
:math:`l_{\text{bendover}}` and the target amplitude :math:`B_{\text{rms}}`.
"""

from abc import ABC, abstractmethod
from typing import Callable, Union

import numpy as np

__all__ = [
    "TurbulenceSpectrum",
    "BendoverSpectrum",
    "PowerLawSpectrum",
    "FunctionSpectrum",
    "turbulent_correlation_length",
]

ArrayLike = Union[float, np.ndarray]


def turbulent_correlation_length(lmin: float, lmax: float, sindex: float = 5.0 / 3.0) -> float:
    r"""Correlation length of an isotropic power-law turbulence between :math:`l_{\min}` and :math:`l_{\max}`.

    .. math::
        L_c = \frac{l_{\max}}{2} \frac{s - 1}{s} \frac{1 - r^s}{1 - r^{s - 1}}, \quad r = l_{\min} / l_{\max}

    Parameters
    ----------
    lmin : float
        Minimum turbulence scale.
    lmax : float
        Maximum turbulence scale.
    sindex : float, optional
        Spectral index :math:`s` of the inertial range, by default 5/3 (Kolmogorov).

    Returns
    -------
    float
        Correlation length.
    """
    r = lmin / lmax
    return lmax / 2 * (sindex - 1) / sindex * (1 - r**sindex) / (1 - r ** (sindex - 1))


class TurbulenceSpectrum(ABC):
    r"""
    Generic turbulence spectrum metaclass.

    Subclasses must implement:
    - `energy_spectrum()`: Evaluate the spectral energy density at a dimensionless wavenumber.
    """

    def __init__(self, brms: float, lmin: float, lmax: float, lbendover: float = 1.0):
        """
        Parameters
        ----------
        brms : float
            Target root-mean-square amplitude of the synthesized field.
        lmin : float
            Minimum turbulence scale.
        lmax : float
            Maximum turbulence scale.
        lbendover : float, optional
            Bend-over scale of the spectrum, by default 1.0.

        Raises
        ------
        ValueError
            If the scales are not positive and ordered, or if ``brms`` is negative.
        """
        if lmin <= 0:
            raise ValueError("lmin must be positive.")
        if lmax < lmin:
            raise ValueError("lmax must not be smaller than lmin.")
        if lbendover <= 0:
            raise ValueError("lbendover must be positive.")
        if brms < 0:
            raise ValueError("brms must be non-negative.")

        self.brms = brms
        self.lmin = lmin
        self.lmax = lmax
        self.lbendover = lbendover

    @abstractmethod
    def energy_spectrum(self, k: ArrayLike) -> ArrayLike:
        """
        Evaluate the spectral energy density.

        Parameters
        ----------
        k : Union[float, np.ndarray]
            Dimensionless wavenumber(s); implementations must broadcast over numpy arrays.

        Returns
        -------
        Union[float, np.ndarray]
            Non-negative spectral energy density, of the same shape as ``k``.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(brms={self.brms}, lmin={self.lmin}, "
            f"lmax={self.lmax}, lbendover={self.lbendover})"
        )


class BendoverSpectrum(TurbulenceSpectrum):
    r"""
    Spectrum with an energy-containing range below the bend-over scale and a power-law inertial range above it.

    .. math::
        E(k) = \frac{k^q}{\left(1 + k^2\right)^{(s + q)/2 + 1}}

    where :math:`s` is the inertial-range index (5/3 for Kolmogorov) and :math:`q` the energy-range index (4 for
    Batchelor-like behaviour at large scales).
    """

    def __init__(
        self,
        brms: float,
        lmin: float,
        lmax: float,
        lbendover: float = 1.0,
        sindex: float = 5.0 / 3.0,
        qindex: float = 4.0,
    ):
        super().__init__(brms, lmin, lmax, lbendover)
        self.sindex = sindex
        self.qindex = qindex

    def energy_spectrum(self, k: ArrayLike) -> ArrayLike:
        s, q = self.sindex, self.qindex
        return k**q / (1.0 + k**2) ** ((s + q) / 2.0 + 1.0)

    def correlation_length(self) -> float:
        """Correlation length in the inertial-range limit, see :py:func:`turbulent_correlation_length`."""
        return turbulent_correlation_length(self.lmin, self.lmax, self.sindex)


class PowerLawSpectrum(TurbulenceSpectrum):
    r"""
    Pure power-law spectrum, the large-:math:`k` limit of :py:class:`BendoverSpectrum`.

    .. math::
        E(k) = k^{-(s + 2)}
    """

    def __init__(self, brms: float, lmin: float, lmax: float, sindex: float = 5.0 / 3.0):
        super().__init__(brms, lmin, lmax, lbendover=1.0)
        self.sindex = sindex

    def energy_spectrum(self, k: ArrayLike) -> ArrayLike:
        return k ** (-(self.sindex + 2.0))

    def correlation_length(self) -> float:
        """Correlation length, see :py:func:`turbulent_correlation_length`."""
        return turbulent_correlation_length(self.lmin, self.lmax, self.sindex)


class FunctionSpectrum(TurbulenceSpectrum):
    """
    Spectrum given by an arbitrary scalar function of the dimensionless wavenumber.

    The function is wrapped with ``np.vectorize`` so that it may be written for scalars only.
    """

    def __init__(
        self,
        function: Callable[[float], float],
        brms: float,
        lmin: float,
        lmax: float,
        lbendover: float = 1.0,
    ):
        super().__init__(brms, lmin, lmax, lbendover)
        self.function = function
        self._vectorized = np.vectorize(function, otypes=[float])

    def energy_spectrum(self, k: ArrayLike) -> ArrayLike:
        if np.isscalar(k):
            return float(self.function(k))
        return self._vectorized(k)
