"""Tests for the spectrum assembler and the population-time scan."""

import numpy as np
import pytest

import qcorr2d.spectroscopy.spectra as spectra_module
from qcorr2d.core.exceptions import PadTooLargeError
from qcorr2d.core.propagator import Propagator
from qcorr2d.spectroscopy import (
    SpectrumSet,
    combine_branch,
    fold_rephasing,
    make_2d_spectra,
    scan_population_times,
)
from qcorr2d.spectroscopy.zero_padding import interpt


def _spectra(model, times, t_wait=0.0, **kwargs):
    return make_2d_spectra(
        times,
        model.rho0,
        model.H,
        model.c_ops,
        model.mu_ge,
        model.mu_ef,
        t_wait,
        **kwargs,
    )


def _assert_sums(spec):
    scale = max(1.0, float(np.max(np.abs(spec.full))))
    np.testing.assert_allclose(spec.full, spec.full_r + spec.full_nr, atol=1e-10 * scale)
    np.testing.assert_allclose(spec.full, spec.gsb + spec.se + spec.esa, atol=1e-10 * scale)


class TestFolding:
    def test_fold_rephasing(self):
        r = np.arange(8).reshape(2, 4)
        np.testing.assert_array_equal(fold_rephasing(r), [[0, 3, 2, 1], [4, 7, 6, 5]])

    def test_combine_branch(self):
        nr = np.ones((2, 4))
        r = np.arange(8.0).reshape(2, 4)
        np.testing.assert_array_equal(combine_branch(nr, r), 1.0 + fold_rephasing(r))


class TestMake2DSpectra:
    def test_two_level(self, two_level, times4):
        spec = _spectra(two_level, times4)
        assert isinstance(spec, SpectrumSet)
        assert spec.size == 4
        np.testing.assert_allclose(spec.omega, interpt(times4, 0)[1])
        assert np.allclose(spec.esa, 0.0)
        _assert_sums(spec)

    def test_three_level_with_padding(self, three_level, times4):
        spec = _spectra(three_level, times4, zero_pad=3)
        assert spec.size == 8
        assert spec.full.shape == (8, 8)
        assert not np.allclose(spec.esa, 0.0)
        _assert_sums(spec)

    def test_padding_exponent_raised(self, two_level, times4):
        # 2**1 does not cover 4 points, so the exponent becomes 2
        assert _spectra(two_level, times4, zero_pad=1).size == 4

    def test_progress_events(self, two_level, times4):
        events = []
        _spectra(two_level, [0.0, 1.0, 2.0], t_wait=0.0, progress=events.append)
        stages = [event.stage for event in events]
        assert stages.count("pathway_started") == 6
        assert stages.count("pathway_finished") == 6
        assert stages[-2:] == ["fourier_transform", "assembled"]
        finished = [e.pathway for e in events if e.stage == "pathway_finished"]
        assert finished == ["R_gsb", "NR_gsb", "R_se", "NR_se", "R_esa", "NR_esa"]

    def test_pad_too_large_fails_before_propagation(self, two_level, times4, monkeypatch):
        def _fail(*args, **kwargs):
            raise AssertionError("no pathway may be computed")

        monkeypatch.setattr(spectra_module, "compute_correlation", _fail)
        with pytest.raises(PadTooLargeError):
            _spectra(two_level, times4, zero_pad=5000)

    def test_failing_pathway_aborts(self, two_level, times4, monkeypatch):
        real = spectra_module.compute_correlation
        calls = []

        def _flaky(*args, **kwargs):
            pathway = args[7]
            calls.append(str(pathway))
            if str(pathway) == "R_se":
                raise RuntimeError("solver blew up")
            return real(*args, **kwargs)

        monkeypatch.setattr(spectra_module, "compute_correlation", _flaky)
        events = []
        with pytest.raises(RuntimeError, match="solver blew up"):
            _spectra(two_level, times4, progress=events.append)
        assert calls == ["R_gsb", "NR_gsb", "R_se"]
        assert "assembled" not in [e.stage for e in events]

    @pytest.mark.parametrize("max_workers", [0, 1.5])
    def test_invalid_max_workers(self, two_level, times4, max_workers):
        with pytest.raises(ValueError):
            _spectra(two_level, times4, max_workers=max_workers)

    def test_parallel_matches_sequential(self, three_level):
        times = [0.0, 1.0, 2.0]
        sequential = _spectra(three_level, times)
        parallel = _spectra(three_level, times, max_workers=2)
        np.testing.assert_allclose(parallel.full, sequential.full, atol=1e-8)
        np.testing.assert_allclose(parallel.esa, sequential.esa, atol=1e-8)

    def test_parallel_rejects_local_bath_spectrum(self, two_level, times4):
        events = []
        with pytest.raises(ValueError, match="dissipation.*max_workers=1"):
            make_2d_spectra(
                times4,
                two_level.rho0,
                two_level.H,
                [(two_level.mu_ge, lambda w: 0.0)],
                two_level.mu_ge,
                two_level.mu_ef,
                0.0,
                "redfield",
                max_workers=2,
                progress=events.append,
            )
        assert events == []

    def test_prebuilt_propagator_needs_one_worker(self, two_level, times4):
        prop = Propagator(two_level.H, two_level.c_ops)
        with pytest.raises(ValueError, match="max_workers=1"):
            _spectra(two_level, times4, max_workers=2, propagator=prop)

    def test_prebuilt_propagator_for_other_hamiltonian(self, two_level, times4):
        prop = Propagator(2.0 * two_level.H, two_level.c_ops)
        events = []
        with pytest.raises(ValueError, match="hamiltonian"):
            _spectra(two_level, times4, propagator=prop, progress=events.append)
        assert events == []


class TestScan:
    def test_one_spectrum_per_population_time(self, two_level, times4):
        t_waits = [0.0, 2.0, 1.0]
        results = scan_population_times(
            t_waits,
            times4,
            two_level.rho0,
            two_level.H,
            two_level.c_ops,
            two_level.mu_ge,
            two_level.mu_ef,
        )
        assert len(results) == len(t_waits)
        # undamped two-level: populations do not evolve during T
        for spec in results[1:]:
            np.testing.assert_allclose(spec.full, results[0].full, atol=1e-4)

    def test_progress_reports_each_population_time(self, two_level, times4):
        events = []
        scan_population_times(
            [0.0, 1.0],
            times4,
            two_level.rho0,
            two_level.H,
            two_level.c_ops,
            two_level.mu_ge,
            two_level.mu_ef,
            progress=events.append,
        )
        assembled = [e.t_wait for e in events if e.stage == "assembled"]
        assert assembled == [0.0, 1.0]

    @pytest.mark.parametrize("t_waits", [[], [0.0, -1.0]])
    def test_invalid_population_times(self, two_level, times4, t_waits):
        with pytest.raises(ValueError):
            scan_population_times(
                t_waits,
                times4,
                two_level.rho0,
                two_level.H,
                two_level.c_ops,
                two_level.mu_ge,
                two_level.mu_ef,
            )
