r"""
Synthesis of the Fourier coefficients of a transverse random vector field.

Every discrete wavevector :math:`\boldsymbol{k}` of the half-space layout whose magnitude lies within the turbulence
band :math:`[h / l_{\max}, h / l_{\min}]` receives the coefficient

.. math::
    \widehat{\boldsymbol{B}}(\boldsymbol{k}) = \sqrt{E(k \lambda)} \, \boldsymbol{p}(\boldsymbol{k}, \theta)
    \, e^{i \varphi}, \qquad \lambda = 2 \pi \, l_{\text{bendover}} / h,

where :math:`\boldsymbol{p}` is a unit polarization transverse to :math:`\boldsymbol{k}` built from a random angle
:math:`\theta` and :math:`\varphi` is a random phase, both uniform in :math:`[0, 2\pi)`. All other coefficients are
exactly zero.
"""

import warnings
from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np
from numpy.fft import fftfreq
from tqdm import tqdm

from ..exceptions import GeometryError
from ..loggers import gridturb_log
from ..random_stream import RandomStream
from ..spectrum import TurbulenceSpectrum
from .basis import transverse_basis
from .transforms import SpectralBuffers

# below this many modes the synthesized field is hardly random
MIN_MODES = 10


def wavenumbers(n: int) -> np.ndarray:
    """The ``n`` discrete wavenumbers of an ``n``-cell axis, in units of the inverse spacing.

    Index ``i`` maps to ``i / n``, folded to ``i / n - 1`` for ``i >= n / 2``. For even ``n`` the Nyquist index
    ``n / 2`` maps to ``-1/2``; for odd ``n`` there is no Nyquist index and the folding starts at ``(n + 1) / 2``,
    as in ``numpy.fft.fftfreq``.
    """
    return fftfreq(n)


def sample_spectrum(
    spectrum: TurbulenceSpectrum, k: Union[float, np.ndarray], spacing: float
) -> Union[float, np.ndarray]:
    r"""Evaluate the spectral energy density at discrete wavenumber(s) ``k``.

    Parameters
    ----------
    spectrum : TurbulenceSpectrum
        The turbulence spectrum.
    k : Union[float, np.ndarray]
        Wavenumber magnitude(s) in units of the inverse grid spacing.
    spacing : float
        Grid spacing :math:`h`.

    Returns
    -------
    Union[float, np.ndarray]
        :math:`E(k \lambda)` with :math:`\lambda = 2\pi l_{\text{bendover}} / h`.

    Raises
    ------
    ValueError
        If the spectrum evaluates to a negative value.
    """
    lam = spectrum.lbendover / spacing * 2 * np.pi
    energy = spectrum.energy_spectrum(k * lam)
    if np.any(np.asarray(energy) < 0):
        raise ValueError(f"{spectrum!r} returned a negative spectral energy density.")
    return energy


class Polarization(ABC):
    """
    Generic polarization metaclass: turns a transverse basis and two random angles into complex unit vectors.

    Subclasses must implement:
    - `__call__()`: Build the complex polarization vectors.
    """

    @abstractmethod
    def __call__(self, e1: np.ndarray, e2: np.ndarray, theta: np.ndarray, phase: np.ndarray) -> np.ndarray:
        """
        Parameters
        ----------
        e1, e2 : np.ndarray
            Orthonormal transverse basis vectors, of shape ``(m, 3)``.
        theta : np.ndarray
            Polarization angles, of shape ``(m,)``.
        phase : np.ndarray
            Phases, of shape ``(m,)``.

        Returns
        -------
        np.ndarray
            Complex vectors of unit norm, of shape ``(m, 3)``.
        """
        raise NotImplementedError("Subclasses must implement this method.")


class TransversePolarization(Polarization):
    r"""Linear polarization :math:`(\boldsymbol{e}_1 \cos\theta + \boldsymbol{e}_2 \sin\theta) e^{i\varphi}`."""

    def __call__(self, e1, e2, theta, phase):
        b = e1 * np.cos(theta)[:, None] + e2 * np.sin(theta)[:, None]
        return b * np.cos(phase)[:, None] + 1j * (b * np.sin(phase)[:, None])


class HelicalPolarization(Polarization):
    r"""Polarization with a prescribed fractional helicity :math:`H \in [-1, 1]`.

    The field is a superposition of the two circularly polarized modes
    :math:`\boldsymbol{h}_\mp = \boldsymbol{e}_1 \mp i \boldsymbol{e}_2`,

    .. math::
        \boldsymbol{p} = \frac{e^{i\varphi}}{\sqrt{2}} \left( \sqrt{\tfrac{1 + H}{2}} \boldsymbol{h}_- e^{i\theta}
        + \sqrt{\tfrac{1 - H}{2}} \boldsymbol{h}_+ e^{-i\theta} \right)

    which has unit norm for every :math:`H` and reduces to :py:class:`TransversePolarization` at :math:`H = 0`.
    """

    def __init__(self, helicity: float):
        if not -1.0 <= helicity <= 1.0:
            raise ValueError(f"Helicity must lie in [-1, 1], got {helicity}.")
        self.helicity = helicity

    def __call__(self, e1, e2, theta, phase):
        h_minus = e1 - 1j * e2
        h_plus = e1 + 1j * e2
        a_minus = np.sqrt((1 + self.helicity) / 2) * np.exp(1j * theta)[:, None]
        a_plus = np.sqrt((1 - self.helicity) / 2) * np.exp(-1j * theta)[:, None]
        return (a_minus * h_minus + a_plus * h_plus) * (np.exp(1j * phase)[:, None] / np.sqrt(2))


def synthesize_coefficients(
    spectrum: TurbulenceSpectrum,
    spacing: float,
    stream: RandomStream,
    buffers: SpectralBuffers,
    polarization: Optional[Polarization] = None,
    progress: bool = False,
) -> int:
    """Fill ``buffers`` with the random Fourier coefficients of a turbulent field.

    Wavevectors are visited with x outermost and z innermost, each in-band wavevector consuming first a polarization
    angle then a phase from ``stream``; for a fixed seed the coefficients are therefore reproducible.

    Parameters
    ----------
    spectrum : TurbulenceSpectrum
        Spectrum providing the amplitudes and the band :math:`[l_{\\min}, l_{\\max}]`.
    spacing : float
        Grid spacing.
    stream : RandomStream
        Source of the random angles and phases.
    buffers : SpectralBuffers
        Zero-initialized coefficient buffers, filled in place.
    polarization : Polarization, optional
        Polarization strategy, by default :py:class:`TransversePolarization`.
    progress : bool, optional
        Show a progress bar over the x-slabs, by default False.

    Returns
    -------
    int
        Number of wavevectors within the turbulence band.

    Raises
    ------
    GeometryError
        If no wavevector lies within the band; raised before any random draw.
    """
    if polarization is None:
        polarization = TransversePolarization()

    n, n2 = buffers.n, buffers.n_half
    K = wavenumbers(n)

    kMin = spacing / spectrum.lmax
    kMax = spacing / spectrum.lmin

    # wavevectors of one x-slab of the half-space layout
    ky, kz = np.meshgrid(K, K[:n2], indexing="ij")
    k_perp2 = ky**2 + kz**2

    in_band = np.empty((n, n, n2), dtype=bool)
    for ix in range(n):
        k = np.sqrt(K[ix] ** 2 + k_perp2)
        in_band[ix] = (k >= kMin) & (k <= kMax)

    n_modes = int(in_band.sum())
    if n_modes == 0:
        raise GeometryError(
            "band", f"No wavevector of the {n}^3 grid lies within the turbulence band [{kMin}, {kMax}]"
        )
    if n_modes < MIN_MODES:
        warnings.warn(f"Only {n_modes} wave modes lie within the turbulence band, the field will be far from random.")

    gridturb_log.info(f"Synthesizing {n_modes} wave modes in [{kMin:.4g}, {kMax:.4g}]")

    Bkx, Bky, Bkz = buffers.coefficients
    for Bk in (Bkx, Bky, Bkz):
        Bk[...] = 0.0

    for ix in tqdm(range(n), desc="Synthesizing", disable=not progress):
        mask = in_band[ix]
        m = int(mask.sum())
        if m == 0:
            continue

        ek = np.stack([np.full(m, K[ix]), ky[mask], kz[mask]], axis=-1)
        k = np.linalg.norm(ek, axis=-1)

        e1, e2 = transverse_basis(ek)

        draws = 2 * np.pi * stream.draw_many(2 * m)
        theta, phase = draws[0::2], draws[1::2]

        b = polarization(e1, e2, theta, phase)
        b *= np.sqrt(sample_spectrum(spectrum, k, spacing))[:, None]

        Bkx[ix][mask] = b[:, 0]
        Bky[ix][mask] = b[:, 1]
        Bkz[ix][mask] = b[:, 2]

    return n_modes
