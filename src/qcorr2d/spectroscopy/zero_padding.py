"""Zero padding to a power of two and the matching time / frequency axes."""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from ..config.defaults import MAX_PAD_EXPONENT
from ..core.exceptions import PadTooLargeError
from ..utils.logging_setup import get_logger

__all__ = ["effective_pad_exponent", "zeropad", "interpt", "frequency_axis"]

logger = get_logger(__name__)


def effective_pad_exponent(extent: int, n: int) -> int:
    """Exponent actually used for padding ``extent`` points with request ``n``.

    ``n == 0`` means no padding and is returned unchanged. A positive ``n``
    too small to hold ``extent`` points is raised to ceil(log2(extent)).
    """
    if int(n) != n or n < 0:
        raise ValueError(f"zero pad exponent must be a non-negative integer, got {n}")
    n = int(n)
    if n == 0:
        return 0
    covering = int(np.ceil(np.log2(max(int(extent), 1))))
    if n < covering:
        logger.info("zero pad exponent raised from %d to %d (%d points)", n, covering, extent)
        n = covering
    if n > MAX_PAD_EXPONENT:
        raise PadTooLargeError(
            f"zero pad exponent {n} exceeds the ceiling of {MAX_PAD_EXPONENT}"
        )
    return n


def zeropad(data: np.ndarray, n: int) -> np.ndarray:
    """Embed ``data`` (vector or square matrix) in a zero array of size 2**n.

    ``n == 0`` returns ``data`` itself. Otherwise the result is complex,
    ``data`` occupies the leading block and every other entry is zero.
    """
    data = np.asarray(data)
    if data.ndim not in (1, 2):
        raise ValueError(f"zeropad expects a vector or a matrix, got shape {data.shape}")
    n = effective_pad_exponent(max(data.shape), n)
    if n == 0:
        return data

    size = 2**n
    padded = np.zeros((size,) * data.ndim, dtype=complex)
    padded[tuple(slice(0, k) for k in data.shape)] = data
    return padded


def frequency_axis(length: int, dt: float) -> np.ndarray:
    """Zero-centred angular frequencies (k - L/2) * 2 pi / (L dt), k = 1..L."""
    k = np.arange(1, length + 1, dtype=float)
    return (k - length / 2) * (2 * np.pi / (length * dt))


def interpt(times: Sequence[float], n: int) -> Tuple[np.ndarray, np.ndarray]:
    """Time grid extended to 2**n points and its frequency axis.

    The padded grid keeps the original spacing and first sample; for
    ``n == 0`` the grid is returned unchanged.
    """
    times = np.asarray(times, dtype=float)
    if times.ndim != 1 or times.size < 2:
        raise ValueError("interpt needs a 1D time grid with at least two points")
    dt = float(times[-1] - times[0]) / (times.size - 1)
    n = effective_pad_exponent(times.size, n)
    if n > 0:
        times = times[0] + dt * np.arange(2**n, dtype=float)
    return times, frequency_axis(times.size, dt)
