"""Tests for text and npz persistence of spectra."""

import numpy as np
import pytest

from qcorr2d.spectroscopy import SpectrumSet
from qcorr2d.utils.data_io import load_2d, load_spectrum_set, save_2d, save_spectrum_set


def _spectrum_set(n=4, offset=0.0):
    omega = np.linspace(-1.0, 1.0, n)
    base = np.arange(n * n, dtype=float).reshape(n, n) + offset
    data = base + 1j * base[::-1]
    return SpectrumSet(omega, data, 0.5 * data, 0.5 * data, data, 0 * data, 0 * data)


class TestTextFormat:
    def test_file_layout(self, tmp_path):
        spectra = [_spectrum_set(), _spectrum_set(offset=1.0)]
        written = save_2d(spectra, [0.0, 25.0], tmp_path / "run")
        names = [p.name for p in written]
        assert names == ["T_steps.dat", "2Dspec_001.dat", "2Dspec_002.dat"]
        assert all(p.exists() for p in written)
        first_line = (tmp_path / "run" / "2Dspec_001.dat").read_text().splitlines()[0]
        assert first_line.count(",") == 3

    def test_roundtrip(self, tmp_path):
        spectra = [_spectrum_set(), _spectrum_set(offset=2.0)]
        save_2d(spectra, [0.0, 50.0], tmp_path)
        t_waits, mats = load_2d(tmp_path)
        np.testing.assert_allclose(t_waits, [0.0, 50.0])
        assert len(mats) == 2
        np.testing.assert_allclose(mats[1], np.real(spectra[1].full))

    def test_kind_and_name(self, tmp_path):
        spec = _spectrum_set()
        save_2d([spec], [10.0], tmp_path, kind="dispersive", name="full_r")
        t_waits, mats = load_2d(tmp_path)
        np.testing.assert_allclose(t_waits, [10.0])
        np.testing.assert_allclose(mats[0], np.imag(spec.full_r))

    def test_plain_arrays(self, tmp_path):
        save_2d([np.eye(3)], [0.0], tmp_path)
        _, mats = load_2d(tmp_path)
        np.testing.assert_allclose(mats[0], np.eye(3))

    def test_length_mismatch(self, tmp_path):
        with pytest.raises(ValueError):
            save_2d([_spectrum_set()], [0.0, 1.0], tmp_path)

    def test_unknown_kind(self, tmp_path):
        with pytest.raises(ValueError):
            save_2d([_spectrum_set()], [0.0], tmp_path, kind="phase")


class TestNpzArtifact:
    def test_roundtrip_with_metadata(self, tmp_path):
        spec = _spectrum_set()
        meta = {"method": "lindblad", "t_wait": np.float64(5.0), "t_waits": np.array([0.0, 5.0])}
        path = save_spectrum_set(spec, tmp_path / "out" / "spec", meta)
        assert path.suffix == ".npz"
        loaded, metadata = load_spectrum_set(path)
        assert metadata == {"method": "lindblad", "t_wait": 5.0, "t_waits": [0.0, 5.0]}
        np.testing.assert_array_equal(loaded.omega, spec.omega)
        for name in ("full", "full_r", "full_nr", "gsb", "se", "esa"):
            np.testing.assert_array_equal(getattr(loaded, name), getattr(spec, name))

    def test_not_an_artifact(self, tmp_path):
        path = tmp_path / "other.npz"
        np.savez(path, omega=np.zeros(2))
        with pytest.raises(ValueError, match="spectrum set"):
            load_spectrum_set(path)
