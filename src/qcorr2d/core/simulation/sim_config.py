"""Simulation configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ...config.defaults import DT, METHOD, T_MAX, T_WAIT, ZERO_PAD


@dataclass
class SimulationConfig:
    """Run parameters for a 2D spectrum calculation (times in fs)."""

    method: str = METHOD
    solver_options: dict[str, float | int | str] = field(default_factory=lambda: {})

    t_max: float = T_MAX
    dt: float = DT
    t_wait: float = T_WAIT
    # population times for a scan; falls back to [t_wait]
    t_waits: Optional[List[float]] = None

    zero_pad: int = ZERO_PAD
    t2_filter: Optional[str] = None
    conjugate_term: str = "discard"

    max_workers: int = 1

    def __post_init__(self) -> None:
        self.method = str(self.method).lower().strip()
        self.t_max = float(self.t_max)
        self.dt = float(self.dt)
        self.t_wait = float(self.t_wait)
        if self.t_waits is not None:
            self.t_waits = [float(T) for T in self.t_waits]
        self.zero_pad = int(self.zero_pad)
        self.max_workers = int(self.max_workers)

    @property
    def population_times(self) -> List[float]:
        return list(self.t_waits) if self.t_waits else [self.t_wait]

    def summary(self) -> str:
        lines = [
            "SimulationConfig Summary:\n",
            "-------------------------------\n",
            "2D ELECTRONIC SPECTROSCOPY (RESPONSE FUNCTIONS)\n",
            "Time Parameters:\n",
            f"Coherence/Det. Max : {self.t_max} fs\n",
            f"Time Step (dt)     : {self.dt} fs\n",
            f"Wait Time(s)       : {self.population_times} fs\n",
            "-------------------------------\n",
            f"Method             : {self.method}\n",
            f"Solver Options     : {self.solver_options}\n",
            f"Zero Pad Exponent  : {self.zero_pad}\n",
            f"t2 Filter          : {self.t2_filter}\n",
            f"Conjugate Term     : {self.conjugate_term}\n",
            f"Max Workers        : {self.max_workers}\n",
            "-------------------------------\n",
        ]
        return "".join(lines)

    def to_dict(self) -> dict:
        result = {
            "method": self.method,
            "t_max": self.t_max,
            "dt": self.dt,
            "t_wait": self.t_wait,
            "zero_pad": self.zero_pad,
            "conjugate_term": self.conjugate_term,
            "max_workers": self.max_workers,
        }
        if self.t_waits is not None:
            result["t_waits"] = list(self.t_waits)
        if self.t2_filter is not None:
            result["t2_filter"] = self.t2_filter
        if self.solver_options:
            result["solver_options"] = dict(self.solver_options)
        return result

    def __str__(self) -> str:
        return self.summary()
