"""
Utilities for qcorr2d: unit conversion, logging helpers and file I/O.
"""

from .constants import HBAR, convert_cm_to_fs, convert_fs_to_cm
from .logging_setup import configure_logging, get_logger
from .data_io import load_2d, load_spectrum_set, save_2d, save_spectrum_set

__all__ = [
    # constants
    "HBAR",
    "convert_cm_to_fs",
    "convert_fs_to_cm",
    # logging
    "get_logger",
    "configure_logging",
    # data I/O
    "save_2d",
    "load_2d",
    "save_spectrum_set",
    "load_spectrum_set",
]
