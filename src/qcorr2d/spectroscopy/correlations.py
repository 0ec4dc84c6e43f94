"""Pathway engine: third-order correlation matrix of one Feynman pathway.

For every coherence time tau the density matrix after the first
interaction is taken from a single propagation over the full grid; the
second interaction, the optional population-time propagation, the third
interaction and the detection-time propagation are then applied per
tau point. Row ``i`` of the result is Re <mu_det rho_i(t)*> over the
detection grid.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np
from qutip import Qobj, expect

from ..config.defaults import SUPPORTED_CONJUGATE_TERMS, SUPPORTED_T2_FILTERS
from ..core.pathways import Method, Pathway, PathwayRule
from ..core.propagator import Dissipation, Propagator, check_dimensions
from ..core.simulation.time_axes import check_time_grid, population_grid
from ..utils.logging_setup import get_logger

__all__ = [
    "compute_correlation",
    "apply_t2_filter",
    "edge_correct",
]

logger = get_logger(__name__)


def apply_t2_filter(rho: Qobj, t2_filter: Optional[str]) -> Qobj:
    """Keep only populations or only coherences of ``rho`` (None keeps everything)."""
    if t2_filter is None:
        return rho
    if t2_filter == "populations":
        return Qobj(np.diag(np.diag(rho.full())), dims=rho.dims)
    if t2_filter == "coherences":
        data = rho.full()
        return Qobj(data - np.diag(np.diag(data)), dims=rho.dims)
    raise ValueError(f"t2_filter '{t2_filter}' not in {SUPPORTED_T2_FILTERS}")


def edge_correct(corr: np.ndarray) -> np.ndarray:
    """Trapezoidal weight: halve row 0 and column 0 (corner ends up at 1/4)."""
    corr = np.array(corr, copy=True)
    corr[0, :] *= 0.5
    corr[:, 0] *= 0.5
    return corr


def _pathway_rows(
    rule: PathwayRule,
    rho0: Qobj,
    mu_ge: Qobj,
    mu_third: Qobj,
    mu_det: Qobj,
    times: np.ndarray,
    t_wait_grid: np.ndarray,
    propagator: Propagator,
    t2_filter: Optional[str],
    label: str,
) -> np.ndarray:
    """Correlation matrix of one side assignment (no edge correction)."""
    n_t = times.size
    corr = np.zeros((n_t, n_t), dtype=float)

    # first interaction and coherence time evolution
    rho_1 = rule.first.apply(mu_ge, rho0)
    rho_tau = propagator.evolve(times, rho_1)

    for i, rho_i in enumerate(rho_tau):
        # second interaction, optionally stripped before the population time
        rho_a = apply_t2_filter(rule.second.apply(mu_ge, rho_i), t2_filter)
        if t_wait_grid[-1] > 0:
            rho_a = propagator.evolve(t_wait_grid, rho_a)[-1]

        # third interaction and detection time evolution
        rho_b = rule.third.apply(mu_third, rho_a)
        rho_t = propagator.evolve(times, rho_b)
        corr[i, :] = np.real(expect(mu_det, [state.conj() for state in rho_t]))

        if i == 0:
            logger.debug("%s: rho after first interaction\n%s", label, rho_1)
            logger.debug("%s: rho after second interaction\n%s", label, rho_a)
            logger.debug("%s: rho after third interaction\n%s", label, rho_b)

    return corr


def compute_correlation(
    times: Sequence[float],
    rho0: Qobj,
    hamiltonian: Qobj,
    dissipation: Dissipation,
    mu_ge: Qobj,
    mu_ef: Qobj,
    t_wait: float,
    pathway: Union[Pathway, str],
    method: Union[Method, str] = Method.LINDBLAD,
    *,
    solver_options: Optional[Mapping[str, Any]] = None,
    t2_filter: Optional[str] = None,
    conjugate_term: str = "discard",
    edge_correction: bool = True,
    propagator: Optional[Propagator] = None,
) -> np.ndarray:
    """Real correlation matrix C[tau_i, t_j] of a single pathway.

    Parameters
    ----------
    times : sequence of float
        Shared coherence (tau) and detection (t) grid, strictly increasing.
    rho0 : Qobj
        Initial density matrix.
    hamiltonian, dissipation :
        Passed on to :class:`~qcorr2d.core.propagator.Propagator`.
    mu_ge, mu_ef : Qobj
        Ground-excited and excited-doubly-excited dipole operators.
    t_wait : float
        Population time T >= 0.
    pathway : Pathway or str
        One of R_gsb, NR_gsb, R_se, NR_se, R_esa, NR_esa.
    method : Method or str
        "lindblad" or "redfield".
    t2_filter : {None, "populations", "coherences"}
        Strip the density matrix before the population time.
    conjugate_term : {"discard", "add", "subtract"}
        How the mirrored diagram (all interactions on the opposite side)
        enters the result. "discard" does not compute it.
    edge_correction : bool
        Halve row 0 and column 0 of the final matrix.
    propagator : Propagator, optional
        Prebuilt propagator to reuse. It must have been built from the same
        ``hamiltonian``, ``dissipation`` and ``method``; its solver options
        replace ``solver_options``. Bath spectra are compared by identity.

    Returns
    -------
    np.ndarray
        Shape (len(times), len(times)), real.
    """
    pathway = Pathway.from_label(pathway)
    method = Method.from_value(method)
    times = check_time_grid(times)
    check_dimensions(
        hamiltonian,
        {"rho0": rho0, "mu_ge": mu_ge, "mu_ef": mu_ef},
        dissipation,
    )
    t_wait_grid = population_grid(t_wait)
    if t2_filter not in SUPPORTED_T2_FILTERS:
        raise ValueError(f"t2_filter '{t2_filter}' not in {SUPPORTED_T2_FILTERS}")
    if conjugate_term not in SUPPORTED_CONJUGATE_TERMS:
        raise ValueError(
            f"conjugate_term '{conjugate_term}' not in {SUPPORTED_CONJUGATE_TERMS}"
        )

    if propagator is None:
        propagator = Propagator(hamiltonian, dissipation, method, solver_options)
    else:
        propagator.check_compatible(hamiltonian, dissipation, method)

    rule = pathway.rule
    mu_third = mu_ef if rule.esa else mu_ge
    mu_det = pathway.detection_sign * mu_third

    logger.info("%s at T = %s fs ...", pathway, t_wait)
    args = (mu_ge, mu_third, mu_det, times, t_wait_grid, propagator, t2_filter)
    corr = _pathway_rows(rule, rho0, *args, label=str(pathway))

    if conjugate_term != "discard":
        corr_cc = _pathway_rows(rule.mirrored(), rho0, *args, label=f"{pathway} (cc)")
        corr = corr + corr_cc if conjugate_term == "add" else corr - corr_cc

    if edge_correction:
        corr = edge_correct(corr)
    logger.info("%s at T = %s fs done", pathway, t_wait)
    return corr
