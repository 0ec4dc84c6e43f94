"""Caller-supplied quantum model: Hamiltonian, dipoles, initial state, dissipation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
from qutip import Qobj, basis, ket2dm

from ...utils.constants import HBAR, convert_cm_to_fs
from ..propagator import Dissipation, check_dimensions

__all__ = ["SystemModel", "ladder_model"]


@dataclass
class SystemModel:
    hamiltonian: Qobj
    dipole_ge: Qobj
    dipole_ef: Optional[Qobj] = None  # zero operator if the system has no f manifold
    initial_state: Optional[Qobj] = None  # default: ground state |0><0|
    dissipation: Dissipation = field(default_factory=list)
    # system operators that couple to the bath (Redfield a_ops are built from these)
    coupling_ops: List[Qobj] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not isinstance(self.hamiltonian, Qobj):
            raise TypeError("hamiltonian must be a qutip.Qobj")
        if self.dipole_ef is None:
            self.dipole_ef = Qobj(np.zeros(self.hamiltonian.shape), dims=self.hamiltonian.dims)
        if self.initial_state is None:
            ground = ket2dm(basis(self.dimension, 0)).full()
            self.initial_state = Qobj(ground, dims=self.hamiltonian.dims)
        if self.dissipation is None:
            self.dissipation = []

    @property
    def dimension(self) -> int:
        return int(self.hamiltonian.shape[0])

    def validate_dimensions(self) -> None:
        """Raise DimensionMismatchError if any operator disagrees with the Hamiltonian."""
        operators = {
            "dipole_ge": self.dipole_ge,
            "dipole_ef": self.dipole_ef,
            "initial_state": self.initial_state,
        }
        for idx, op in enumerate(self.coupling_ops):
            operators[f"coupling_ops[{idx}]"] = op
        check_dimensions(self.hamiltonian, operators, self.dissipation)

    def summary(self) -> str:
        energies = np.real(self.hamiltonian.eigenenergies())
        n_diss = 1 if isinstance(self.dissipation, Qobj) else len(self.dissipation)
        lines = [
            "SystemModel Summary:\n",
            "-------------------------------\n",
            f"Dimension          : {self.dimension}\n",
            f"Eigenenergies      : {np.round(energies, 6).tolist()} fs^-1\n",
            f"Dissipation terms  : {n_diss}\n",
            f"Bath couplings     : {len(self.coupling_ops)}\n",
            "-------------------------------\n",
        ]
        return "".join(lines)

    def to_dict(self) -> dict:
        return {
            "dimension": self.dimension,
            "hamiltonian": self.hamiltonian.full().tolist(),
            "dipole_ge": self.dipole_ge.full().tolist(),
            "dipole_ef": self.dipole_ef.full().tolist(),
            "initial_state": self.initial_state.full().tolist(),
        }

    def __str__(self) -> str:
        return self.summary()


def ladder_model(
    frequencies_cm: Sequence[float] = (16000.0,),
    dip_moments: Sequence[float] = (1.0,),
    decay_rates: Optional[Sequence[float]] = None,
    dephasing_rates: Optional[Sequence[float]] = None,
) -> SystemModel:
    """Ground state plus one (two-level) or two (g, e, f ladder) excited levels.

    ``frequencies_cm`` are transition frequencies (g->e[, e->f]) in cm^-1,
    ``dip_moments`` the matching transition dipoles. Decay and pure
    dephasing rates (fs^-1, one per excited level) become Lindblad
    collapse operators; the projectors on the excited levels are kept as
    bath coupling operators.
    """
    n_trans = len(frequencies_cm)
    if n_trans not in (1, 2):
        raise ValueError(f"ladder_model supports 1 or 2 transitions, got {n_trans}")
    if len(dip_moments) != n_trans:
        raise ValueError(f"Expected {n_trans} dipole moments, got {len(dip_moments)}")

    dim = n_trans + 1
    states = [basis(dim, i) for i in range(dim)]
    energies = np.concatenate(([0.0], np.cumsum(convert_cm_to_fs(list(frequencies_cm)))))
    H = Qobj(np.diag(HBAR * energies))

    def transition(i: int, mu: float) -> Qobj:
        lower = states[i] * states[i + 1].dag()
        return float(mu) * (lower + lower.dag())

    dipole_ge = transition(0, dip_moments[0])
    dipole_ef = transition(1, dip_moments[1]) if n_trans == 2 else None

    c_ops = []
    for i, rate in enumerate(decay_rates or []):
        if rate > 0:
            c_ops.append(float(np.sqrt(rate)) * states[i] * states[i + 1].dag())
    for i, rate in enumerate(dephasing_rates or []):
        if rate > 0:
            c_ops.append(float(np.sqrt(rate)) * ket2dm(states[i + 1]))

    return SystemModel(
        hamiltonian=H,
        dipole_ge=dipole_ge,
        dipole_ef=dipole_ef,
        dissipation=c_ops,
        coupling_ops=[ket2dm(states[i]) for i in range(1, dim)],
    )
