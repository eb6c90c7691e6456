"""Test the synthesis of the Fourier coefficients."""

import numpy as np
import pytest

from gridturb.exceptions import GeometryError
from gridturb.random_stream import RandomStream
from gridturb.spectrum import BendoverSpectrum, FunctionSpectrum
from gridturb.turbulent_field.basis import transverse_basis
from gridturb.turbulent_field.synthesis import (
    HelicalPolarization,
    TransversePolarization,
    sample_spectrum,
    synthesize_coefficients,
    wavenumbers,
)
from gridturb.turbulent_field.transforms import spectral_buffers


def band_mask(n, kMin, kMax):
    """Boolean mask of the half-space wavevectors with kMin <= |k| <= kMax."""
    K = wavenumbers(n)
    kx, ky, kz = np.meshgrid(K, K, K[: n // 2 + 1], indexing="ij")
    k = np.sqrt(kx**2 + ky**2 + kz**2)
    return (k >= kMin) & (k <= kMax)


@pytest.mark.unit
@pytest.mark.turbulent_field
class TestWavenumbers:
    """Test the discrete wavenumbers."""

    @pytest.mark.parametrize("n", [2, 8, 32])
    def test_folding(self, n):
        """K[i] = i/n - i // (n/2) for even n."""
        expected = [i / n - i // (n // 2) for i in range(n)]

        np.testing.assert_allclose(wavenumbers(n), expected)

    def test_nyquist_is_negative(self):
        """The Nyquist index maps to -1/2."""
        assert wavenumbers(16)[8] == -0.5

    def test_odd_n(self):
        """Without a Nyquist index the upper half folds symmetrically into negative wavenumbers."""
        np.testing.assert_allclose(wavenumbers(5), [0.0, 0.2, 0.4, -0.4, -0.2])
        np.testing.assert_allclose(wavenumbers(3), [0.0, 1.0 / 3, -1.0 / 3])


@pytest.mark.unit
@pytest.mark.turbulent_field
class TestSampleSpectrum:
    """Test the evaluation of the spectrum at discrete wavenumbers."""

    def test_scaling(self):
        """The spectrum is evaluated at k * 2 pi lbendover / spacing."""
        seen = []
        spectrum = FunctionSpectrum(lambda x: seen.append(x) or 1.0, brms=1.0, lmin=2.0, lmax=16.0, lbendover=4.0)

        sample_spectrum(spectrum, 0.25, spacing=0.5)

        assert seen[0] == pytest.approx(0.25 * 4.0 / 0.5 * 2 * np.pi)

    def test_array_input(self):
        """Arrays of wavenumbers are evaluated element-wise."""
        spectrum = BendoverSpectrum(brms=1.0, lmin=2.0, lmax=16.0, lbendover=4.0)
        k = np.array([0.1, 0.2, 0.4])

        result = sample_spectrum(spectrum, k, spacing=1.0)

        np.testing.assert_allclose(result, spectrum.energy_spectrum(k * 8 * np.pi))

    def test_negative_spectrum(self):
        """A negative spectral energy density is an error."""
        spectrum = FunctionSpectrum(lambda x: -1.0, brms=1.0, lmin=2.0, lmax=16.0)

        with pytest.raises(ValueError):
            sample_spectrum(spectrum, 0.1, spacing=1.0)


@pytest.mark.unit
@pytest.mark.turbulent_field
class TestPolarization:
    """Test the polarization strategies."""

    @pytest.fixture
    def basis(self):
        """Transverse bases of random wavevectors, and random angles."""
        rng = np.random.default_rng(11)
        ek = rng.standard_normal((200, 3))
        e1, e2 = transverse_basis(ek)
        theta, phase = 2 * np.pi * rng.random((2, 200))
        return ek, e1, e2, theta, phase

    @pytest.mark.parametrize(
        "polarization",
        [TransversePolarization(), HelicalPolarization(0.0), HelicalPolarization(0.6), HelicalPolarization(-1.0)],
    )
    def test_unit_norm_and_transverse(self, basis, polarization):
        """Polarization vectors have unit norm and are orthogonal to the wavevector."""
        ek, e1, e2, theta, phase = basis

        p = polarization(e1, e2, theta, phase)

        np.testing.assert_allclose(np.sqrt(np.sum(np.abs(p) ** 2, axis=-1)), 1.0)
        np.testing.assert_allclose(np.abs(np.sum(p * ek, axis=-1)), 0.0, atol=1e-12)

    def test_transverse_formula(self, basis):
        """Linear polarization is (e1 cos theta + e2 sin theta) exp(i phase)."""
        _, e1, e2, theta, phase = basis

        p = TransversePolarization()(e1, e2, theta, phase)

        b = e1 * np.cos(theta)[:, None] + e2 * np.sin(theta)[:, None]
        np.testing.assert_allclose(p.real, b * np.cos(phase)[:, None])
        np.testing.assert_allclose(p.imag, b * np.sin(phase)[:, None])

    def test_zero_helicity_is_linear(self, basis):
        """Without helicity the helical polarization reduces to the linear one."""
        _, e1, e2, theta, phase = basis

        np.testing.assert_allclose(
            HelicalPolarization(0.0)(e1, e2, theta, phase),
            TransversePolarization()(e1, e2, theta, phase),
            atol=1e-14,
        )

    def test_maximal_helicity_is_circular(self, basis):
        """At |H| = 1 only one circular mode remains, whose real and imaginary parts have equal norm."""
        _, e1, e2, theta, phase = basis

        p = HelicalPolarization(1.0)(e1, e2, theta, phase)

        np.testing.assert_allclose(np.linalg.norm(p.real, axis=-1), np.linalg.norm(p.imag, axis=-1))
        np.testing.assert_allclose(np.sum(p.real * p.imag, axis=-1), 0.0, atol=1e-14)

    @pytest.mark.parametrize("helicity", [-1.5, 1.01])
    def test_invalid_helicity(self, helicity):
        """Helicity must lie in [-1, 1]."""
        with pytest.raises(ValueError):
            HelicalPolarization(helicity)


@pytest.mark.unit
@pytest.mark.turbulent_field
class TestSynthesizeCoefficients:
    """Test synthesize_coefficients."""

    n = 16
    spacing = 1.0

    @pytest.fixture
    def spectrum(self):
        """Band from 3 to 16 cells."""
        return BendoverSpectrum(brms=1.0, lmin=3.0, lmax=16.0, lbendover=4.0)

    def synthesize(self, spectrum, seed, polarization=None):
        with spectral_buffers(self.n) as buffers:
            stream = RandomStream(seed)
            n_modes = synthesize_coefficients(spectrum, self.spacing, stream, buffers, polarization=polarization)
            return n_modes, stream, [c.copy() for c in buffers.coefficients]

    def test_out_of_band_coefficients_are_zero(self, spectrum):
        """Wavevectors outside [kMin, kMax] get exactly zero coefficients, the others do not."""
        _, _, coefficients = self.synthesize(spectrum, seed=1)
        mask = band_mask(self.n, self.spacing / spectrum.lmax, self.spacing / spectrum.lmin)

        for c in coefficients:
            assert np.all(c[~mask].real == 0.0)
            assert np.all(c[~mask].imag == 0.0)

        magnitude = np.sqrt(sum(np.abs(c) ** 2 for c in coefficients))
        assert np.all(magnitude[mask] > 0.0)

    def test_dc_mode_is_zero(self, spectrum):
        """The DC coefficient never contributes."""
        _, _, coefficients = self.synthesize(spectrum, seed=1)

        for c in coefficients:
            assert c[0, 0, 0] == 0.0

    def test_two_draws_per_mode(self, spectrum):
        """Each in-band wavevector consumes exactly two draws."""
        n_modes, stream, _ = self.synthesize(spectrum, seed=1)
        mask = band_mask(self.n, self.spacing / spectrum.lmax, self.spacing / spectrum.lmin)

        assert n_modes == mask.sum()
        assert stream.draw_count == 2 * n_modes

    def test_amplitudes_follow_spectrum(self, spectrum):
        """The coefficient norm is the square root of the sampled spectrum."""
        _, _, coefficients = self.synthesize(spectrum, seed=2)
        K = wavenumbers(self.n)
        kx, ky, kz = np.meshgrid(K, K, K[: self.n // 2 + 1], indexing="ij")
        k = np.sqrt(kx**2 + ky**2 + kz**2)
        mask = band_mask(self.n, self.spacing / spectrum.lmax, self.spacing / spectrum.lmin)

        magnitude = np.sqrt(sum(np.abs(c) ** 2 for c in coefficients))

        np.testing.assert_allclose(magnitude[mask], np.sqrt(sample_spectrum(spectrum, k[mask], self.spacing)))

    def test_coefficients_are_transverse(self, spectrum):
        """k . B(k) vanishes for every wavevector."""
        _, _, (Bkx, Bky, Bkz) = self.synthesize(spectrum, seed=3)
        K = wavenumbers(self.n)
        kx, ky, kz = np.meshgrid(K, K, K[: self.n // 2 + 1], indexing="ij")

        np.testing.assert_allclose(np.abs(kx * Bkx + ky * Bky + kz * Bkz), 0.0, atol=1e-12)

    def test_draw_order(self, spectrum):
        """The first in-band wavevector in row-major order consumes the first angle, then the first phase."""
        _, _, (Bkx, Bky, Bkz) = self.synthesize(spectrum, seed=4)

        # with lmax = n * spacing the first in-band wavevector is (0, 0, 1/n)
        ek = np.array([0.0, 0.0, 1.0 / self.n])
        e1, e2 = transverse_basis(ek)
        reference = RandomStream(4)
        theta = 2 * np.pi * reference.draw()
        phase = 2 * np.pi * reference.draw()
        amplitude = np.sqrt(sample_spectrum(spectrum, 1.0 / self.n, self.spacing))

        expected = amplitude * (e1 * np.cos(theta) + e2 * np.sin(theta)) * np.exp(1j * phase)
        np.testing.assert_allclose([Bkx[0, 0, 1], Bky[0, 0, 1], Bkz[0, 0, 1]], expected)

    def test_deterministic(self, spectrum):
        """Same seed, same coefficients; different seed, different coefficients."""
        _, _, first = self.synthesize(spectrum, seed=5)
        _, _, second = self.synthesize(spectrum, seed=5)
        _, _, other = self.synthesize(spectrum, seed=6)

        for a, b, c in zip(first, second, other):
            np.testing.assert_array_equal(a, b)
            assert not np.array_equal(a, c)

    def test_helical_consumes_same_draws(self, spectrum):
        """The polarization strategy does not change the stream consumption."""
        n_modes, stream, _ = self.synthesize(spectrum, seed=7, polarization=HelicalPolarization(0.5))

        assert stream.draw_count == 2 * n_modes

    def test_empty_band(self):
        """A band holding no wavevector is rejected before any draw."""
        # |k| in [0.370, 0.417] lies between the n = 4 magnitudes 0.3536 (0.25 * sqrt 2) and 0.433 (0.25 * sqrt 3)
        spectrum = BendoverSpectrum(brms=1.0, lmin=2.4, lmax=2.7)
        stream = RandomStream(1)

        with spectral_buffers(4) as buffers:
            with pytest.raises(GeometryError) as excinfo:
                synthesize_coefficients(spectrum, 1.0, stream, buffers)

        assert excinfo.value.constraint == "band"
        assert stream.draw_count == 0

    def test_few_modes_warn(self):
        """A band holding only a handful of wavevectors triggers a warning."""
        # only the six axis wavevectors of magnitude 1/4 (five of them in the half space)
        spectrum = BendoverSpectrum(brms=1.0, lmin=3.9, lmax=4.1)

        with spectral_buffers(4) as buffers:
            with pytest.warns(UserWarning):
                synthesize_coefficients(spectrum, 1.0, RandomStream(1), buffers)
