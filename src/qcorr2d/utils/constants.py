"""Physical constants and unit conversion helpers.

Lightweight module: safe to import from any layer. Internally times are
in fs and angular frequencies in fs^-1 (HBAR = 1).
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

__all__ = [
    "HBAR",
    "convert_cm_to_fs",
    "convert_fs_to_cm",
]

HBAR: float = 1.0  # Reduced Planck constant

_C_CM_PER_FS: float = 2.998  # speed of light factor in (1e-5 * cm/fs)
_TWOPI: float = 2 * np.pi
_CM_TO_FS_FACTOR: float = _C_CM_PER_FS * _TWOPI * 1e-5
_FS_TO_CM_FACTOR: float = 1.0 / _CM_TO_FS_FACTOR


def _apply_conversion(obj: Any, factor: float) -> Any:
    """Scale scalars, arrays or sequences of numbers by ``factor``."""
    if isinstance(obj, (int, float, np.integer, np.floating)):
        return float(obj) * factor
    if isinstance(obj, np.ndarray):
        return obj.astype(float, copy=False) * factor
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        return np.asarray(obj, dtype=float) * factor
    raise TypeError(f"Unsupported type for conversion: {type(obj)!r}")


def convert_cm_to_fs(obj: Any) -> Any:
    """Convert wavenumbers (cm^-1) to angular frequencies (fs^-1)."""
    return _apply_conversion(obj, _CM_TO_FS_FACTOR)


def convert_fs_to_cm(obj: Any) -> Any:
    """Convert angular frequencies (fs^-1) to wavenumbers (cm^-1)."""
    return _apply_conversion(obj, _FS_TO_CM_FACTOR)
