"""
Data I/O operations for qcorr2d.

Two formats:
- delimited text: ``T_steps.dat`` plus one ``2Dspec_%03i.dat`` per
  population time (comma separated, one directory per run)
- ``.npz`` artifact: axis and all six spectra of one SpectrumSet with a
  JSON metadata entry
"""

from __future__ import annotations

# IMPORTS
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .logging_setup import get_logger

# Type checking imports to avoid circular imports
if TYPE_CHECKING:
    from qcorr2d.spectroscopy.spectrum_set import SpectrumSet

__all__ = [
    "save_2d",
    "load_2d",
    "save_spectrum_set",
    "load_spectrum_set",
]

logger = get_logger(__name__)

_META_KEY = "metadata_json"
_SPEC_PREFIX = "spectrum::"
_OMEGA_KEY = "omega"
_T_STEPS_FILE = "T_steps.dat"
_SPEC_FILE = "2Dspec_{:03d}.dat"


def _json_default(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    raise TypeError(f"Cannot serialize object of type {type(obj)!r}")


def _json_dumps(payload: Any) -> str:
    return json.dumps(payload, default=_json_default, sort_keys=True)


def _as_real(data: Any, kind: str) -> np.ndarray:
    data = np.asarray(data)
    if kind == "absorptive":
        return np.real(data)
    if kind == "dispersive":
        return np.imag(data)
    if kind == "absolute":
        return np.abs(data)
    raise ValueError(f"unknown kind '{kind}'. Supported: absorptive, dispersive, absolute")


def save_2d(
    spectra: Sequence[Any],
    t_waits: Sequence[float],
    out_dir: Path | str,
    kind: str = "absorptive",
    name: str = "full",
) -> List[Path]:
    """Write one comma-delimited matrix per population time plus ``T_steps.dat``.

    ``spectra`` holds SpectrumSet objects (``name`` selects the matrix) or
    plain 2D arrays; complex data is reduced with ``kind``.
    File ``2Dspec_001.dat`` belongs to ``t_waits[0]`` and so on.
    """
    if len(spectra) != len(t_waits):
        raise ValueError(
            f"got {len(spectra)} spectra but {len(t_waits)} population times"
        )
    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)

    t_path = directory / _T_STEPS_FILE
    np.savetxt(t_path, np.asarray(t_waits, dtype=float), delimiter=",")
    written = [t_path]

    for i, spec in enumerate(spectra, start=1):
        data = getattr(spec, name) if hasattr(spec, "omega") else spec
        path = directory / _SPEC_FILE.format(i)
        np.savetxt(path, _as_real(data, kind), delimiter=",")
        written.append(path)
        logger.info("File saved as: %s", path)

    logger.info("%d spectra saved to %s", len(spectra), directory)
    return written


def load_2d(out_dir: Path | str) -> Tuple[np.ndarray, List[np.ndarray]]:
    """Read back what :func:`save_2d` wrote: (population times, matrices)."""
    directory = Path(out_dir)
    t_waits = np.atleast_1d(np.loadtxt(directory / _T_STEPS_FILE, delimiter=","))
    mats = [
        np.atleast_2d(np.loadtxt(directory / _SPEC_FILE.format(i), delimiter=","))
        for i in range(1, t_waits.size + 1)
    ]
    return t_waits, mats


def save_spectrum_set(
    spectra: "SpectrumSet",
    path: Path | str,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Path:
    """Persist a SpectrumSet as a compressed ``.npz`` artifact."""
    from qcorr2d.spectroscopy.spectrum_set import MATRIX_NAMES

    abs_path = Path(path)
    if abs_path.suffix != ".npz":
        abs_path = abs_path.with_suffix(".npz")
    abs_path.parent.mkdir(parents=True, exist_ok=True)

    payload: dict[str, Any] = {
        _OMEGA_KEY: np.asarray(spectra.omega, dtype=float),
        _META_KEY: np.array(_json_dumps({**(metadata or {})}), dtype=np.str_),
    }
    for name in MATRIX_NAMES:
        payload[f"{_SPEC_PREFIX}{name}"] = np.asarray(getattr(spectra, name))

    np.savez_compressed(abs_path, **payload)
    logger.info("Spectrum set saved: %s", abs_path)
    return abs_path


def load_spectrum_set(path: Path | str) -> Tuple["SpectrumSet", dict]:
    """Load an artifact produced by :func:`save_spectrum_set` -> (spectra, metadata)."""
    from qcorr2d.spectroscopy.spectrum_set import MATRIX_NAMES, SpectrumSet

    path = Path(path)
    with np.load(path, allow_pickle=False) as bundle:
        contents = {key: bundle[key] for key in bundle.files}

    metadata = json.loads(str(contents.pop(_META_KEY).item())) if _META_KEY in contents else {}
    missing = [n for n in MATRIX_NAMES if f"{_SPEC_PREFIX}{n}" not in contents]
    if missing or _OMEGA_KEY not in contents:
        raise ValueError(f"{path} is not a spectrum set artifact (missing {missing or [_OMEGA_KEY]})")

    spectra = SpectrumSet(
        omega=contents[_OMEGA_KEY],
        **{name: contents[f"{_SPEC_PREFIX}{name}"] for name in MATRIX_NAMES},
    )
    return spectra, metadata
