"""Spectrum assembler: six pathways -> zero padding -> FFT -> SpectrumSet.

The six correlation matrices are independent, so they can be evaluated
sequentially (sharing one propagator) or in a process pool. There is no
partial result: the first failing pathway aborts the whole assembly.
Worker processes receive the model by pickle, so Redfield bath spectra
must be module-level functions or qutip environments when max_workers > 1.
"""

from __future__ import annotations

import pickle
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
from qutip import Qobj

from ..core.pathways import Method, Pathway
from ..core.propagator import Dissipation, Propagator, check_dimensions
from ..core.simulation.time_axes import check_time_grid
from ..utils.logging_setup import get_logger
from .correlations import compute_correlation
from .spectrum_set import SpectrumSet
from .zero_padding import effective_pad_exponent, interpt, zeropad

__all__ = [
    "SpectrumEvent",
    "combine_branch",
    "fold_rephasing",
    "make_2d_spectra",
    "scan_population_times",
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class SpectrumEvent:
    """Progress notification passed to the ``progress`` callback."""

    stage: str
    pathway: Optional[str]
    t_wait: float


ProgressCallback = Callable[[SpectrumEvent], None]


def _emit(progress: Optional[ProgressCallback], stage: str, pathway: Any, t_wait: float) -> None:
    if progress is not None:
        progress(SpectrumEvent(stage, None if pathway is None else str(pathway), float(t_wait)))


def fold_rephasing(r: np.ndarray) -> np.ndarray:
    """Reflect a rephasing spectrum along axis 1 and roll it by one index there."""
    return np.roll(np.flip(r, axis=1), 1, axis=1)


def combine_branch(nr: np.ndarray, r: np.ndarray) -> np.ndarray:
    """Branch total: NR + folded R."""
    return nr + fold_rephasing(r)


def _spectrum(corr: np.ndarray, zero_pad: int) -> np.ndarray:
    return np.fft.fftshift(np.fft.fft2(zeropad(corr, zero_pad)))


_WORKER_ARG_NAMES = ("times", "rho0", "hamiltonian", "dissipation", "mu_ge", "mu_ef", "t_wait")


def _check_picklable(args: tuple, kwargs: dict) -> None:
    """Name the first worker argument that cannot be sent to a process pool."""
    for name, value in list(zip(_WORKER_ARG_NAMES, args)) + list(kwargs.items()):
        try:
            pickle.dumps(value)
        except (pickle.PicklingError, AttributeError, TypeError) as exc:
            raise ValueError(
                f"{name} cannot be sent to worker processes ({exc}); "
                "use module-level spectrum functions or max_workers=1"
            ) from exc


def _pathway_worker(pathway: Pathway, args: tuple, kwargs: dict) -> tuple:
    """Process-pool entry point (builds its own propagator)."""
    return pathway, compute_correlation(*args, pathway, **kwargs)


def _correlations_parallel(
    args: tuple,
    kwargs: dict,
    max_workers: int,
    t_wait: float,
    progress: Optional[ProgressCallback],
) -> Dict[Pathway, np.ndarray]:
    corrs: Dict[Pathway, np.ndarray] = {}
    with ProcessPoolExecutor(max_workers=max_workers) as ex:
        futures = {}
        for pathway in Pathway:
            futures[ex.submit(_pathway_worker, pathway, args, kwargs)] = pathway
            _emit(progress, "pathway_started", pathway, t_wait)
        try:
            for fut in as_completed(futures):
                pathway, corr = fut.result()
                corrs[pathway] = corr
                _emit(progress, "pathway_finished", pathway, t_wait)
        except Exception:
            logger.error("pathway %s failed at T = %s fs; aborting", futures[fut], t_wait)
            for other in futures:
                other.cancel()
            raise
    return corrs


def make_2d_spectra(
    times: Sequence[float],
    rho0: Qobj,
    hamiltonian: Qobj,
    dissipation: Dissipation,
    mu_ge: Qobj,
    mu_ef: Qobj,
    t_wait: float,
    method: Union[Method, str] = Method.LINDBLAD,
    *,
    zero_pad: int = 0,
    solver_options: Optional[Mapping[str, Any]] = None,
    t2_filter: Optional[str] = None,
    conjugate_term: str = "discard",
    max_workers: int = 1,
    progress: Optional[ProgressCallback] = None,
    propagator: Optional[Propagator] = None,
) -> SpectrumSet:
    """Assemble the 2D spectra of all six pathways at population time ``t_wait``.

    Steps: correlation matrix per pathway (edge corrected), zero padding
    to 2**zero_pad, centred 2D FFT, rephasing branches reflected and
    rolled onto the non-rephasing axis, branch sums.

    A prebuilt ``propagator`` is reused for every pathway. It must match
    ``hamiltonian``, ``dissipation`` and ``method`` and is only accepted
    with ``max_workers=1``.

    Returns
    -------
    SpectrumSet
        ``full``, ``full_r``, ``full_nr``, ``gsb``, ``se``, ``esa`` on the
        frequency axis of the (padded) time grid.
    """
    method = Method.from_value(method)
    times = check_time_grid(times)
    check_dimensions(hamiltonian, {"rho0": rho0, "mu_ge": mu_ge, "mu_ef": mu_ef}, dissipation)
    if int(max_workers) != max_workers or max_workers < 1:
        raise ValueError(f"max_workers must be a positive integer, got {max_workers}")
    if propagator is not None and max_workers > 1:
        raise ValueError(
            "a prebuilt propagator cannot be shared with worker processes; use max_workers=1"
        )
    # fail before any propagation if the padding request is unusable
    effective_pad_exponent(times.size, zero_pad)

    args = (times, rho0, hamiltonian, dissipation, mu_ge, mu_ef, t_wait)
    kwargs = dict(
        method=method,
        solver_options=solver_options,
        t2_filter=t2_filter,
        conjugate_term=conjugate_term,
    )

    if max_workers > 1:
        _check_picklable(args, kwargs)
        corrs = _correlations_parallel(args, kwargs, int(max_workers), t_wait, progress)
    else:
        if propagator is None:
            propagator = Propagator(hamiltonian, dissipation, method, solver_options)
        else:
            propagator.check_compatible(hamiltonian, dissipation, method)
        corrs = {}
        for pathway in Pathway:
            _emit(progress, "pathway_started", pathway, t_wait)
            try:
                corrs[pathway] = compute_correlation(
                    *args, pathway, propagator=propagator, **kwargs
                )
            except Exception:
                logger.error("pathway %s failed at T = %s fs; aborting", pathway, t_wait)
                raise
            _emit(progress, "pathway_finished", pathway, t_wait)

    _emit(progress, "fourier_transform", None, t_wait)
    specs = {pathway: _spectrum(corr, zero_pad) for pathway, corr in corrs.items()}

    branches = {}
    rephasing = {}
    non_rephasing = {}
    for nr, r in Pathway.pairs():
        r_folded = fold_rephasing(specs[r])
        non_rephasing[nr.branch] = specs[nr]
        rephasing[r.branch] = r_folded
        branches[nr.branch] = specs[nr] + r_folded

    _, omega = interpt(times, zero_pad)
    spectra = SpectrumSet(
        omega=omega,
        full=sum(branches.values()),
        full_r=sum(rephasing.values()),
        full_nr=sum(non_rephasing.values()),
        gsb=branches["gsb"],
        se=branches["se"],
        esa=branches["esa"],
    )
    _emit(progress, "assembled", None, t_wait)
    logger.info("2D spectra assembled at T = %s fs (%d x %d)", t_wait, spectra.size, spectra.size)
    return spectra


def scan_population_times(
    t_waits: Sequence[float],
    times: Sequence[float],
    rho0: Qobj,
    hamiltonian: Qobj,
    dissipation: Dissipation,
    mu_ge: Qobj,
    mu_ef: Qobj,
    method: Union[Method, str] = Method.LINDBLAD,
    **kwargs: Any,
) -> List[SpectrumSet]:
    """One SpectrumSet per population time, in the order of ``t_waits``."""
    t_waits = [float(T) for T in t_waits]
    if not t_waits:
        raise ValueError("t_waits must not be empty")
    if any(T < 0 for T in t_waits):
        raise ValueError(f"population times must be >= 0, got {t_waits}")

    method = Method.from_value(method)
    if kwargs.get("max_workers", 1) == 1 and kwargs.get("propagator") is None:
        kwargs["propagator"] = Propagator(
            hamiltonian, dissipation, method, kwargs.get("solver_options")
        )

    results = []
    for T in t_waits:
        results.append(
            make_2d_spectra(
                times, rho0, hamiltonian, dissipation, mu_ge, mu_ef, T, method, **kwargs
            )
        )
    return results
