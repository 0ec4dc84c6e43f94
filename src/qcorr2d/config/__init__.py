"""Configuration package.

This package exposes:
  - Run parameter validation helpers
  - Simple loaders: `load_simulation` (returns SimulationModule2D) and the
    per-section loaders it is built from
"""

from __future__ import annotations

from .validation import validate, validate_defaults
from ..utils.constants import HBAR
from .create_sim_obj import (
    load_simulation,
    load_simulation_bath,
    load_simulation_config,
    load_system_model,
)

__all__ = [
    # constants
    "HBAR",
    # validation
    "validate_defaults",
    "validate",
    # loaders
    "load_simulation",
    "load_simulation_config",
    "load_system_model",
    "load_simulation_bath",
]
