"""
QCorr2D - Third-order response functions and 2D spectra

A Python package for computing two-dimensional nonlinear optical spectra
of few-level open quantum systems from double-sided Feynman pathways.
This package provides tools for:

- Pathway correlation functions (GSB, SE, ESA; rephasing and non-rephasing)
  with Lindblad or Bloch-Redfield field-free propagation
- Zero padding, Fourier transform and branch assembly into 2D spectra
- Population time scans, cropping, text / npz export and plotting
- YAML configuration and validation

Main subpackages:
- config: Defaults, validation and the YAML loader
- core: Pathway / Method enumerations, Propagator, simulation dataclasses
- spectroscopy: Pathway engine, zero padding, spectrum assembly
- utils: File I/O, units and logging helpers
- visualization: Plotting tools
"""

__version__ = "1.0.0"

# Silence a specific QuTiP FutureWarning about keyword-only args in brmesolve
import warnings as _warnings

_warnings.filterwarnings(
    "ignore",
    category=FutureWarning,
    message=r".*c_ops, e_ops, args and options will be keyword only from qutip 5\.3.*",
    module=r"qutip\.solver\.brmesolve",
)


# EXPLICIT IMPORTS ONLY (no lazy imports)

# Config first: it pulls in core.simulation, which the spectroscopy layer builds on
from .config import load_simulation, validate

# Core exports
from .core import (
    CropRangeError,
    DimensionMismatchError,
    InvalidMethodError,
    InvalidPathwayError,
    Method,
    PadTooLargeError,
    Pathway,
    Propagator,
    Qcorr2DError,
    propagate,
)
from .core.simulation import SimulationConfig, SimulationModule2D, SystemModel, ladder_model

# Spectroscopy exports
from .spectroscopy import (
    SpectrumEvent,
    SpectrumSet,
    compute_correlation,
    crop_2d,
    interpt,
    make_2d_spectra,
    scan_population_times,
    zeropad,
)

from .utils.data_io import load_spectrum_set, save_2d, save_spectrum_set
from .utils.logging_setup import configure_logging, get_logger


# PUBLIC API - MOST COMMONLY USED
__all__ = [
    "__version__",
    # Enumerations and propagation
    "Method",
    "Pathway",
    "Propagator",
    "propagate",
    # Model and configuration
    "SimulationConfig",
    "SystemModel",
    "SimulationModule2D",
    "ladder_model",
    "load_simulation",
    "validate",
    # Pathway engine and assembly
    "compute_correlation",
    "make_2d_spectra",
    "scan_population_times",
    "SpectrumEvent",
    "SpectrumSet",
    "crop_2d",
    "zeropad",
    "interpt",
    # Data management
    "save_2d",
    "save_spectrum_set",
    "load_spectrum_set",
    # Logging
    "get_logger",
    "configure_logging",
    # Errors
    "Qcorr2DError",
    "InvalidMethodError",
    "InvalidPathwayError",
    "PadTooLargeError",
    "DimensionMismatchError",
    "CropRangeError",
]
