"""Simulation module: binds a SimulationConfig to a SystemModel and runs it."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from ..pathways import Method
from ..propagator import Propagator
from .sim_config import SimulationConfig
from .system_model import SystemModel
from .time_axes import compute_times

if TYPE_CHECKING:
    from ...spectroscopy.spectra import SpectrumEvent
    from ...spectroscopy.spectrum_set import SpectrumSet


@dataclass
class SimulationModule2D:
    simulation_config: SimulationConfig
    system: SystemModel

    def __post_init__(self) -> None:
        self.system.validate_dimensions()

    @property
    def method(self) -> Method:
        return Method.from_value(self.simulation_config.method)

    @property
    def times(self) -> np.ndarray:
        """Shared coherence (tau) and detection (t) grid."""
        return compute_times(self.simulation_config)

    @cached_property
    def propagator(self) -> Propagator:
        """Generator built once and reused for every pathway and population time."""
        return Propagator(
            self.system.hamiltonian,
            self.system.dissipation,
            self.method,
            self.simulation_config.solver_options,
        )

    def _spectra_kwargs(self, progress: Optional[Callable[["SpectrumEvent"], None]]) -> dict:
        cfg = self.simulation_config
        kwargs = dict(
            zero_pad=cfg.zero_pad,
            solver_options=cfg.solver_options,
            t2_filter=cfg.t2_filter,
            conjugate_term=cfg.conjugate_term,
            max_workers=cfg.max_workers,
            progress=progress,
        )
        if cfg.max_workers == 1:
            kwargs["propagator"] = self.propagator
        return kwargs

    def run(
        self,
        t_wait: Optional[float] = None,
        progress: Optional[Callable[["SpectrumEvent"], None]] = None,
    ) -> "SpectrumSet":
        """2D spectra at one population time (default: ``simulation_config.t_wait``)."""
        from qcorr2d.spectroscopy.spectra import make_2d_spectra

        if t_wait is None:
            t_wait = self.simulation_config.t_wait
        sys = self.system
        return make_2d_spectra(
            self.times,
            sys.initial_state,
            sys.hamiltonian,
            sys.dissipation,
            sys.dipole_ge,
            sys.dipole_ef,
            t_wait,
            self.method,
            **self._spectra_kwargs(progress),
        )

    def scan(
        self,
        progress: Optional[Callable[["SpectrumEvent"], None]] = None,
    ) -> List["SpectrumSet"]:
        """2D spectra for every configured population time, in order."""
        return [self.run(T, progress) for T in self.simulation_config.population_times]
