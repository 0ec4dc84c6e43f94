"""Tests for the simulation layer: time axes, system model and module runner."""

import logging

import numpy as np
import pytest
from qutip import Qobj

from qcorr2d.core.exceptions import DimensionMismatchError
from qcorr2d.core.simulation import (
    SimulationConfig,
    SimulationModule2D,
    SystemModel,
    check_time_grid,
    compute_times,
    ladder_model,
    population_grid,
)
from qcorr2d.spectroscopy import SpectrumSet
from qcorr2d.utils.logging_setup import PACKAGE_LOGGER, configure_logging


class TestTimeAxes:
    def test_compute_times(self):
        times = compute_times(SimulationConfig(t_max=3.0, dt=0.5))
        np.testing.assert_allclose(times, [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0])

    def test_compute_times_partial_step(self):
        times = compute_times(SimulationConfig(t_max=2.7, dt=1.0))
        np.testing.assert_allclose(times, [0.0, 1.0, 2.0])

    def test_population_grid(self):
        np.testing.assert_allclose(population_grid(0.0), [0.0])
        np.testing.assert_allclose(population_grid(3.0), [0.0, 1.0, 2.0, 3.0])
        grid = population_grid(2.5)
        assert grid[-1] == 2.5
        assert np.all(np.diff(grid) <= 1.0)
        with pytest.raises(ValueError):
            population_grid(-0.1)

    def test_check_time_grid(self):
        assert check_time_grid([0, 1, 2]).dtype == float
        for bad in ([1.0], [[0.0, 1.0]], [0.0, 0.0, 1.0], [-1.0, 0.0]):
            with pytest.raises(ValueError):
                check_time_grid(bad)


class TestSystemModel:
    def test_defaults(self, two_level):
        system = SystemModel(hamiltonian=two_level.H, dipole_ge=two_level.mu_ge)
        np.testing.assert_allclose(system.initial_state.full(), [[1, 0], [0, 0]])
        assert np.allclose(system.dipole_ef.full(), 0.0)
        assert system.dissipation == []
        system.validate_dimensions()
        assert system.summary().startswith("SystemModel Summary")
        assert system.to_dict()["dimension"] == 2

    def test_requires_qobj(self):
        with pytest.raises(TypeError):
            SystemModel(hamiltonian=np.eye(2), dipole_ge=np.eye(2))

    def test_dimension_mismatch(self, two_level, three_level):
        system = SystemModel(hamiltonian=three_level.H, dipole_ge=two_level.mu_ge)
        with pytest.raises(DimensionMismatchError, match="dipole_ge"):
            system.validate_dimensions()

    def test_ladder_model(self):
        system = ladder_model(
            frequencies_cm=(16000.0, 15000.0),
            dip_moments=(1.0, 1.4),
            decay_rates=(0.01, 0.02),
            dephasing_rates=(0.0, 0.05),
        )
        assert system.dimension == 3
        assert system.hamiltonian.isherm
        assert system.dipole_ge.isherm and system.dipole_ef.isherm
        assert system.dipole_ef.full()[2, 1] == pytest.approx(1.4)
        assert len(system.dissipation) == 3
        assert len(system.coupling_ops) == 2

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"frequencies_cm": (1.0, 2.0, 3.0), "dip_moments": (1.0, 1.0, 1.0)},
            {"frequencies_cm": (16000.0,), "dip_moments": (1.0, 2.0)},
        ],
    )
    def test_ladder_model_errors(self, kwargs):
        with pytest.raises(ValueError):
            ladder_model(**kwargs)


class TestSimulationModule2D:
    @pytest.fixture
    def sim(self, three_level):
        system = SystemModel(
            hamiltonian=three_level.H,
            dipole_ge=three_level.mu_ge,
            dipole_ef=three_level.mu_ef,
            dissipation=[float(np.sqrt(0.05)) * Qobj(np.diag([0.0, 1.0, 1.0]))],
        )
        config = SimulationConfig(t_max=3.0, dt=1.0, t_waits=[0.0, 2.0], zero_pad=3)
        return SimulationModule2D(simulation_config=config, system=system)

    def test_run(self, sim):
        spec = sim.run()
        assert isinstance(spec, SpectrumSet)
        assert spec.size == 8
        assert sim.times.size == 4

    def test_propagator_is_cached(self, sim):
        assert sim.propagator is sim.propagator

    def test_scan(self, sim):
        events = []
        results = sim.scan(progress=events.append)
        assert len(results) == 2
        assert [e.t_wait for e in events if e.stage == "assembled"] == [0.0, 2.0]
        # dephasing during T changes nothing for populations, but the
        # spectra must still be finite
        for spec in results:
            assert np.all(np.isfinite(spec.full))

    def test_dimension_check_on_construction(self, two_level, three_level):
        system = SystemModel(
            hamiltonian=three_level.H,
            dipole_ge=three_level.mu_ge,
            dissipation=[two_level.mu_ge],
        )
        with pytest.raises(DimensionMismatchError):
            SimulationModule2D(simulation_config=SimulationConfig(), system=system)


class TestLogging:
    def test_configure_logging(self):
        logger = configure_logging("DEBUG")
        try:
            assert logger.name == PACKAGE_LOGGER
            assert logger.level == logging.DEBUG
            n_handlers = len(logger.handlers)
            configure_logging(logging.INFO)
            assert len(logger.handlers) == n_handlers
        finally:
            logger.setLevel(logging.NOTSET)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging("CHATTY")
