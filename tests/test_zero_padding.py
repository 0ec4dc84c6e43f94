"""Tests for zero padding and the padded time / frequency axes."""

import numpy as np
import pytest

from qcorr2d.core.exceptions import PadTooLargeError
from qcorr2d.spectroscopy.zero_padding import (
    effective_pad_exponent,
    frequency_axis,
    interpt,
    zeropad,
)


class TestZeropad:
    def test_zero_exponent_is_identity(self):
        data = np.arange(9.0).reshape(3, 3)
        assert zeropad(data, 0) is data
        vec = np.array([1.0, 2.0])
        assert zeropad(vec, 0) is vec

    def test_matrix_padding(self):
        data = np.arange(9.0).reshape(3, 3) + 1.0
        padded = zeropad(data, 3)
        assert padded.shape == (8, 8)
        assert np.iscomplexobj(padded)
        np.testing.assert_array_equal(padded[:3, :3], data)
        mask = np.ones((8, 8), dtype=bool)
        mask[:3, :3] = False
        assert np.all(padded[mask] == 0)

    def test_vector_padding(self):
        data = np.array([1.0, -2.0, 3.0])
        padded = zeropad(data, 4)
        assert padded.shape == (16,)
        np.testing.assert_array_equal(padded[:3], data)
        assert np.all(padded[3:] == 0)

    def test_exponent_raised_to_cover_data(self):
        data = np.ones((5, 5))
        padded = zeropad(data, 1)
        assert padded.shape == (8, 8)
        np.testing.assert_array_equal(padded[:5, :5], data)

    def test_exact_power_of_two(self):
        data = np.ones((4, 4))
        assert zeropad(data, 2).shape == (4, 4)

    def test_too_large_exponent(self):
        with pytest.raises(PadTooLargeError):
            zeropad(np.ones(3), 4097)

    @pytest.mark.parametrize("n", [-1, 1.5])
    def test_invalid_exponent(self, n):
        with pytest.raises(ValueError):
            zeropad(np.ones(3), n)

    def test_rejects_3d_data(self):
        with pytest.raises(ValueError):
            zeropad(np.ones((2, 2, 2)), 2)


class TestEffectiveExponent:
    def test_values(self):
        assert effective_pad_exponent(100, 0) == 0
        assert effective_pad_exponent(100, 3) == 7
        assert effective_pad_exponent(100, 9) == 9
        assert effective_pad_exponent(128, 2) == 7


class TestInterpt:
    def test_unpadded_axis(self):
        times = np.array([0.0, 1.0, 2.0, 3.0])
        t_out, omega = interpt(times, 0)
        np.testing.assert_array_equal(t_out, times)
        np.testing.assert_allclose(omega, [-np.pi / 2, 0.0, np.pi / 2, np.pi])

    def test_padded_grid_keeps_spacing_and_start(self):
        times = np.array([2.0, 2.5, 3.0])
        t_out, omega = interpt(times, 3)
        assert t_out.size == 8
        np.testing.assert_allclose(t_out, 2.0 + 0.5 * np.arange(8))
        np.testing.assert_allclose(omega, frequency_axis(8, 0.5))

    def test_raised_exponent_matches_zeropad(self):
        times = np.arange(5.0)
        t_out, omega = interpt(times, 1)
        assert t_out.size == zeropad(np.ones((5, 5)), 1).shape[0] == 8
        assert omega.size == 8

    def test_frequency_axis_formula(self):
        L, dt = 6, 0.25
        k = np.arange(1, L + 1)
        np.testing.assert_allclose(frequency_axis(L, dt), (k - L / 2) * 2 * np.pi / (L * dt))

    def test_needs_two_points(self):
        with pytest.raises(ValueError):
            interpt([0.0], 0)
