"""Error taxonomy for qcorr2d.

Every error derives from ``ValueError`` as well, so callers that already
guard spectroscopy runs with ``except ValueError`` keep working.
"""

from __future__ import annotations

__all__ = [
    "Qcorr2DError",
    "InvalidMethodError",
    "InvalidPathwayError",
    "PadTooLargeError",
    "DimensionMismatchError",
    "CropRangeError",
]


class Qcorr2DError(Exception):
    """Base class for all qcorr2d errors."""


class InvalidMethodError(Qcorr2DError, ValueError):
    """Unrecognized master-equation method (neither Lindblad nor Redfield)."""


class InvalidPathwayError(Qcorr2DError, ValueError):
    """Unrecognized Feynman pathway tag."""


class PadTooLargeError(Qcorr2DError, ValueError):
    """Requested or derived zero-pad exponent exceeds the safety ceiling."""


class DimensionMismatchError(Qcorr2DError, ValueError):
    """Caller-supplied operators live on different Hilbert spaces."""


class CropRangeError(Qcorr2DError, ValueError):
    """Frequency window for cropping is empty, inverted or off-axis."""
