"""Time axis computation utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from .sim_config import SimulationConfig

__all__ = [
    "compute_times",
    "check_time_grid",
    "population_grid",
]


def compute_times(cfg: "SimulationConfig") -> np.ndarray:
    """Shared coherence / detection grid: [0, dt, 2 dt, ..., t_max]."""
    dt = float(cfg.dt)
    n_steps = int(np.floor(float(cfg.t_max) / dt + 1e-9)) + 1
    # Generate time grid: [0, dt, ..., t_max]
    return dt * np.arange(n_steps, dtype=float)


def check_time_grid(times: Sequence[float]) -> np.ndarray:
    """Return ``times`` as a float array or raise ValueError if it is not a usable grid."""
    times = np.asarray(times, dtype=float)
    if times.ndim != 1:
        raise ValueError(f"time grid must be 1D, got shape {times.shape}")
    if times.size < 2:
        raise ValueError("time grid needs at least two points")
    if np.any(times < 0):
        raise ValueError("time grid must be non-negative")
    if not np.all(np.diff(times) > 0):
        raise ValueError("time grid must be strictly increasing")
    return times


def population_grid(t_wait: float) -> np.ndarray:
    """Dense sub-grid for the population time propagation.

    For integer ``t_wait`` this is exactly ``[0, 1, ..., t_wait]``; for
    fractional values the step is at most one and the grid still ends on
    ``t_wait``. ``t_wait == 0`` gives ``[0.0]`` (no propagation).
    """
    t_wait = float(t_wait)
    if t_wait < 0:
        raise ValueError(f"population time must be >= 0, got {t_wait}")
    return np.linspace(0.0, t_wait, int(np.ceil(t_wait)) + 1)
