"""Field-free master-equation propagation of density-matrix-like operators.

The operators propagated during a response calculation (e.g. mu * rho0)
are generally neither Hermitian nor trace one, so the QuTiP output
normalisation is always switched off. The Liouville-space generator is
built once per :class:`Propagator` and reused for every call to
:meth:`Propagator.evolve`; for Redfield dynamics this avoids recomputing
the relaxation tensor inside the tau loop.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np
from qutip import BosonicEnvironment, Qobj, liouvillian, mesolve
from qutip.core.blochredfield import bloch_redfield_tensor

from ..config.defaults import BUILD_OPTION_KEYS, SOLVER_OPTIONS
from .exceptions import DimensionMismatchError
from .pathways import Method

__all__ = [
    "Dissipation",
    "Propagator",
    "propagate",
    "check_dimensions",
]

# collapse operators (Lindblad), a relaxation tensor or (a_op, spectrum) pairs (Redfield)
Dissipation = Union[Sequence[Qobj], Qobj, Sequence[Sequence[Any]], None]


def _as_spectrum(spectrum: Any) -> Any:
    """Wrap a qutip environment into a plain S(w) callable for brterm."""
    if isinstance(spectrum, BosonicEnvironment):
        env = spectrum

        def power_spectrum(w):
            return float(np.real(env.power_spectrum(w)))

        return power_spectrum
    return spectrum


def _check_times(times: Sequence[float]) -> np.ndarray:
    times = np.asarray(times, dtype=float)
    if times.ndim != 1 or times.size == 0:
        raise ValueError("times must be a non-empty 1D sequence")
    if times.size > 1 and not np.all(np.diff(times) > 0):
        raise ValueError("times must be strictly increasing")
    return times


def check_dimensions(
    hamiltonian: Qobj,
    operators: Mapping[str, Qobj],
    dissipation: Dissipation = None,
) -> None:
    """Raise DimensionMismatchError unless every operator matches the Hamiltonian."""
    if not isinstance(hamiltonian, Qobj) or not hamiltonian.isoper:
        raise TypeError("hamiltonian must be a square Qobj operator")
    dims = hamiltonian.dims

    for name, op in operators.items():
        if not isinstance(op, Qobj):
            raise TypeError(f"{name} must be a Qobj, got {type(op)}")
        if op.dims != dims:
            raise DimensionMismatchError(
                f"{name} has dims {op.dims}, expected {dims} (from hamiltonian)"
            )

    if dissipation is None:
        return
    if isinstance(dissipation, Qobj):
        expected = [dims, dims] if dissipation.issuper else dims
        if dissipation.dims != expected:
            raise DimensionMismatchError(
                f"dissipation has dims {dissipation.dims}, expected {expected}"
            )
        return
    for idx, entry in enumerate(dissipation):
        op = entry if isinstance(entry, Qobj) else entry[0]
        if not isinstance(op, Qobj):
            raise TypeError(f"dissipation[{idx}] must be a Qobj or (Qobj, spectrum) pair")
        if op.dims != dims:
            raise DimensionMismatchError(
                f"dissipation[{idx}] has dims {op.dims}, expected {dims}"
            )


def _same_dissipation(first: Dissipation, second: Dissipation) -> bool:
    """Operators compare by value, bath spectra by identity."""
    first = [] if first is None else first
    second = [] if second is None else second
    if first is second:
        return True
    if isinstance(first, Qobj) or isinstance(second, Qobj):
        return isinstance(first, Qobj) and isinstance(second, Qobj) and first == second

    first, second = list(first), list(second)
    if len(first) != len(second):
        return False
    for a, b in zip(first, second):
        if isinstance(a, Qobj) or isinstance(b, Qobj):
            if not (isinstance(a, Qobj) and isinstance(b, Qobj) and a == b):
                return False
        elif not (a[0] == b[0] and a[1] is b[1]):
            return False
    return True


class Propagator:
    """Evolve operators under a fixed Lindblad or Redfield generator."""

    def __init__(
        self,
        hamiltonian: Qobj,
        dissipation: Dissipation = None,
        method: Union[Method, str] = Method.LINDBLAD,
        solver_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.hamiltonian = hamiltonian
        self.dissipation = [] if dissipation is None else dissipation
        self.method = Method.from_value(method)

        build_options, self.options = self._solver_split(solver_options)
        self.generator = self._build_generator(**build_options)

    # --- tiny, strict splitter ------------------------------------------------------
    def _solver_split(self, solver_options: Optional[Mapping[str, Any]]) -> tuple[dict, dict]:
        """
        Split defaults + caller options into:
        build   -> consumed while building the generator (sec_cutoff)
        options -> ODE options passed to mesolve
        """
        src = dict(SOLVER_OPTIONS[self.method.value])
        src.update(solver_options or {})
        build = {k: src.pop(k) for k in BUILD_OPTION_KEYS if k in src}
        src["store_states"] = True
        src["normalize_output"] = False
        return build, src

    def _build_generator(self, sec_cutoff: float = 0.1) -> Qobj:
        H = self.hamiltonian
        dissipation = self.dissipation

        if self.method is Method.LINDBLAD:
            if isinstance(dissipation, Qobj):
                if dissipation.issuper:
                    raise TypeError(
                        "Lindblad propagation expects collapse operators; "
                        "pass a relaxation tensor with method='redfield'"
                    )
                dissipation = [dissipation]
            return liouvillian(H, list(dissipation))

        # Redfield: precomputed tensor or (a_op, spectrum) pairs
        if isinstance(dissipation, Qobj):
            if not dissipation.issuper:
                raise TypeError("Redfield relaxation tensor must be a superoperator")
            return dissipation
        a_ops = [(pair[0], _as_spectrum(pair[1])) for pair in dissipation]
        return bloch_redfield_tensor(H, a_ops, sec_cutoff=sec_cutoff, fock_basis=True)

    def evolve(self, times: Sequence[float], rho: Qobj) -> List[Qobj]:
        """Return rho(t) for every t in ``times`` (rho is taken at times[0])."""
        times = _check_times(times)
        if times.size == 1:
            return [rho]
        result = mesolve(self.generator, rho, times, options=self.options)
        return list(result.states)

    def check_compatible(
        self,
        hamiltonian: Qobj,
        dissipation: Dissipation = None,
        method: Union[Method, str] = Method.LINDBLAD,
    ) -> None:
        """Raise ValueError unless this propagator was built from the given model."""
        method = Method.from_value(method)
        if self.method is not method:
            raise ValueError(
                f"propagator uses {self.method.value!r}, {method.value!r} was requested"
            )
        if self.hamiltonian != hamiltonian:
            raise ValueError("propagator was built for a different hamiltonian")
        if not _same_dissipation(self.dissipation, dissipation):
            raise ValueError("propagator was built for a different dissipation")

    def __repr__(self) -> str:
        return (
            f"Propagator(method={self.method.value!r}, "
            f"dims={self.hamiltonian.dims}, options={self.options})"
        )


def propagate(
    times: Sequence[float],
    rho: Qobj,
    hamiltonian: Qobj,
    dissipation: Dissipation = None,
    method: Union[Method, str] = Method.LINDBLAD,
    **solver_options: Any,
) -> List[Qobj]:
    """One-shot propagation: rho(t) for every t in ``times``, in input order."""
    propagator = Propagator(hamiltonian, dissipation, method, solver_options)
    return propagator.evolve(times, rho)
