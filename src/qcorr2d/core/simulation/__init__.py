"""Simulation layer: run configuration, system model and the module runner."""

from .time_axes import check_time_grid, compute_times, population_grid
from .sim_config import SimulationConfig
from .system_model import SystemModel, ladder_model
from .simulation_class import SimulationModule2D

__all__ = [
    "SimulationConfig",
    "SystemModel",
    "SimulationModule2D",
    "ladder_model",
    "compute_times",
    "check_time_grid",
    "population_grid",
]
