"""Inverse transforms from the half-space spectral layout to a real-valued vector grid.

The spectral coefficients of each vector component live inside a real buffer padded along the last axis, as
required by in-place complex-to-real FFTs: a real buffer of shape :math:`(N, N, 2(N/2+1))` is viewed as a complex
array of shape :math:`(N, N, N/2+1)`. After the inverse transform the first :math:`N` entries of each row hold the
real samples; the trailing padding is never read.
"""

import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Union

import numpy as np
import scipy.fft

from ..exceptions import AllocationError
from ..grid import Grid3d
from ..loggers import gridturb_log

METHOD_FFTW = "fftw"
METHOD_SCIPY = "scipy"

TRANSFORM_METHODS = (METHOD_FFTW, METHOD_SCIPY)


@dataclass
class SpectralBuffers:
    """Three padded real buffers, one per vector component, with their complex views."""

    n: int
    padded: list[np.ndarray]

    @property
    def n_half(self) -> int:
        return self.n // 2 + 1

    @property
    def coefficients(self) -> list[np.ndarray]:
        """Complex views of shape ``(n, n, n // 2 + 1)``; writing to them writes to the padded buffers."""
        return [buf.view(np.complex128) for buf in self.padded]

    @property
    def samples(self) -> list[np.ndarray]:
        """Real views of shape ``(n, n, n)`` excluding the padding."""
        return [buf[..., : self.n] for buf in self.padded]


def padded_index(ix: Union[int, np.ndarray], iy: Union[int, np.ndarray], iz: Union[int, np.ndarray], n: int):
    """Flat index of the real sample ``(ix, iy, iz)`` in a padded buffer of an ``n``-cell grid."""
    n2 = n // 2 + 1
    return ix * n * 2 * n2 + iy * 2 * n2 + iz


@contextmanager
def spectral_buffers(n: int) -> Iterator[SpectralBuffers]:
    """Allocate the coefficient buffers for an ``n``-cell cubic grid for the duration of a ``with`` block.

    Parameters
    ----------
    n : int
        Number of cells per axis.

    Yields
    ------
    SpectralBuffers
        Zero-initialized buffers, released when the block exits, whether normally or through an exception.

    Raises
    ------
    AllocationError
        If the buffers cannot be allocated.
    """
    shape = (n, n, 2 * (n // 2 + 1))
    try:
        buffers = SpectralBuffers(n=n, padded=[np.zeros(shape, dtype=np.float64) for _ in range(3)])
    except MemoryError as e:
        raise AllocationError(f"Could not allocate spectral buffers of shape 3 x {shape}") from e

    try:
        yield buffers
    finally:
        buffers.padded.clear()
        del buffers


def _inverse_fftw(buf: np.ndarray, n: int) -> None:
    import pyfftw

    # WARN: User might have OMP_NUM_THREADS set to something invalid here
    n_cpu = int(os.environ.get("OMP_NUM_THREADS", 1))

    plan = pyfftw.FFTW(
        buf.view(np.complex128),
        buf[..., :n],
        axes=(0, 1, 2),
        direction="FFTW_BACKWARD",
        flags=("FFTW_ESTIMATE", "FFTW_UNALIGNED"),
        threads=n_cpu,
    )
    try:
        plan()
    finally:
        del plan


def _inverse_scipy(buf: np.ndarray, n: int) -> None:
    samples = scipy.fft.irfftn(buf.view(np.complex128), s=(n, n, n), axes=(0, 1, 2))
    buf[..., :n] = samples


def execute_inverse_transform(grid: Grid3d, buffers: SpectralBuffers, method: str = METHOD_FFTW) -> None:
    """Inverse-transform the three coefficient arrays and write the real samples into ``grid``.

    Each component is transformed in place inside its padded buffer; the sample of cell ``(ix, iy, iz)`` is then
    read at :py:func:`padded_index` and stored in the grid, overwriting its previous contents. The coefficient
    contents of ``buffers`` are destroyed.

    Parameters
    ----------
    grid : Grid3d
        Cubic grid receiving the field; its cell count must match ``buffers.n``.
    buffers : SpectralBuffers
        Coefficients in half-space layout.
    method : str, optional
        One of ``"fftw"`` (pyFFTW) or ``"scipy"`` (``scipy.fft``), by default ``"fftw"``.

    Raises
    ------
    ValueError
        If ``method`` is unknown or the grid does not match the buffers.
    """
    if method == METHOD_FFTW:
        inverse = _inverse_fftw
    elif method == METHOD_SCIPY:
        inverse = _inverse_scipy
    else:
        raise ValueError(f'Unknown transform method "{method}", expected one of {TRANSFORM_METHODS}.')

    n = buffers.n
    if grid.shape != (n, n, n):
        raise ValueError(f"Grid of shape {grid.shape} does not match spectral buffers for {n}^3 cells.")

    ix, iy, iz = np.meshgrid(np.arange(n), np.arange(n), np.arange(n), indexing="ij")
    index = padded_index(ix, iy, iz, n)

    for axis, buf in enumerate(buffers.padded):
        inverse(buf, n)
        grid.values[..., axis] = buf.reshape(-1)[index]

    gridturb_log.debug(f"Inverse {method} transform of {n}^3 grid done")
