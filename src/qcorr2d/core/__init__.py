"""
Core module for qcorr2d.

Building blocks shared by every spectroscopy calculation:
- error taxonomy
- Method / Pathway enumerations (Feynman diagram bookkeeping as data)
- the master-equation Propagator (Lindblad or Redfield)

The simulation layer (configuration dataclasses, system model, module
runner) lives in :mod:`qcorr2d.core.simulation`.
"""

from .exceptions import (
    CropRangeError,
    DimensionMismatchError,
    InvalidMethodError,
    InvalidPathwayError,
    PadTooLargeError,
    Qcorr2DError,
)
from .pathways import BRANCHES, Method, Pathway, PathwayRule, Side
from .propagator import Propagator, check_dimensions, propagate

__all__ = [
    # Errors
    "Qcorr2DError",
    "InvalidMethodError",
    "InvalidPathwayError",
    "PadTooLargeError",
    "DimensionMismatchError",
    "CropRangeError",
    # Enumerations
    "Method",
    "Side",
    "Pathway",
    "PathwayRule",
    "BRANCHES",
    # Propagation
    "Propagator",
    "propagate",
    "check_dimensions",
]
