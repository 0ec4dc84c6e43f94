"""Result container for one assembled 2D spectrum."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict

import numpy as np

from ..core.exceptions import CropRangeError
from ..utils.constants import convert_fs_to_cm

__all__ = ["SpectrumSet", "crop_2d", "MATRIX_NAMES", "REPRESENTATIONS"]

MATRIX_NAMES = ("full", "full_r", "full_nr", "gsb", "se", "esa")
REPRESENTATIONS = ("absorptive", "dispersive", "absolute")


def _frozen_array(values: Any, dtype: Any) -> np.ndarray:
    arr = np.array(values, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class SpectrumSet:
    """Frequency axis plus the six complex 2D spectra of one population time.

    ``full = full_r + full_nr = gsb + se + esa``. The arrays are private
    read-only copies; cropping builds a new instance.
    """

    omega: np.ndarray
    full: np.ndarray
    full_r: np.ndarray
    full_nr: np.ndarray
    gsb: np.ndarray
    se: np.ndarray
    esa: np.ndarray

    def __post_init__(self) -> None:
        omega = _frozen_array(self.omega, float)
        if omega.ndim != 1:
            raise ValueError(f"omega must be 1D, got shape {omega.shape}")
        object.__setattr__(self, "omega", omega)

        n = omega.size
        for name in MATRIX_NAMES:
            arr = _frozen_array(getattr(self, name), complex)
            if arr.shape != (n, n):
                raise ValueError(f"{name} has shape {arr.shape}, expected {(n, n)}")
            object.__setattr__(self, name, arr)

    # --- derived views ------------------------------------------------------------
    @property
    def size(self) -> int:
        return int(self.omega.size)

    @property
    def wavenumbers_cm(self) -> np.ndarray:
        return convert_fs_to_cm(self.omega)

    @property
    def absorptive(self) -> np.ndarray:
        return self.representation("full", "absorptive")

    @property
    def dispersive(self) -> np.ndarray:
        return self.representation("full", "dispersive")

    def representation(self, name: str = "full", kind: str = "absorptive") -> np.ndarray:
        """Real part, imaginary part or modulus of one of the six matrices."""
        if name not in MATRIX_NAMES:
            raise ValueError(f"unknown spectrum '{name}'. Supported: {list(MATRIX_NAMES)}")
        data = getattr(self, name)
        if kind == "absorptive":
            return np.real(data)
        if kind == "dispersive":
            return np.imag(data)
        if kind == "absolute":
            return np.abs(data)
        raise ValueError(f"unknown representation '{kind}'. Supported: {list(REPRESENTATIONS)}")

    # --- cropping -----------------------------------------------------------------
    def crop(self, w_min: float, w_max: float = 100.0, step: int = 1) -> "SpectrumSet":
        """New SpectrumSet restricted to [w_min, w_max] on both axes.

        Bounds snap to the nearest axis point and the slice includes both
        ends. Raises CropRangeError for an inverted window, a window that
        misses the axis completely or ``step < 1``.
        """
        if int(step) != step or step < 1:
            raise CropRangeError(f"crop step must be a positive integer, got {step}")
        if w_min >= w_max:
            raise CropRangeError(f"crop window is empty or inverted: [{w_min}, {w_max}]")
        omega = self.omega
        if w_max < omega[0] or w_min > omega[-1]:
            raise CropRangeError(
                f"crop window [{w_min}, {w_max}] lies outside the axis "
                f"[{omega[0]:.4g}, {omega[-1]:.4g}]"
            )

        i_min = int(np.argmin(np.abs(omega - w_min)))
        i_max = int(np.argmin(np.abs(omega - w_max)))
        sl = slice(i_min, i_max + 1, int(step))
        cropped = {name: getattr(self, name)[sl, sl] for name in MATRIX_NAMES}
        return SpectrumSet(omega=omega[sl], **cropped)

    # --- serialisation ------------------------------------------------------------
    def to_dict(self) -> Dict[str, np.ndarray]:
        return {f.name: np.array(getattr(self, f.name)) for f in fields(self)}

    def __repr__(self) -> str:
        if self.size:
            span = f"[{self.omega[0]:.4g}, {self.omega[-1]:.4g}] fs^-1"
        else:
            span = "[]"
        return f"SpectrumSet(size={self.size}, omega={span})"


def crop_2d(spectra: SpectrumSet, w_min: float, w_max: float = 100.0, step: int = 1) -> SpectrumSet:
    """Functional form of :meth:`SpectrumSet.crop`."""
    return spectra.crop(w_min, w_max=w_max, step=step)
