"""Validation and sanity checks for qcorr2d run parameters."""

import warnings

from ..core.pathways import Method
from .defaults import (
    ALLOWED_SOLVER_OPTIONS,
    DT,
    MAX_PAD_EXPONENT,
    METHOD,
    SOLVER_OPTIONS,
    SUPPORTED_CONJUGATE_TERMS,
    SUPPORTED_METHODS,
    SUPPORTED_T2_FILTERS,
    T_MAX,
    T_WAIT,
    ZERO_PAD,
)

__all__ = ["validate", "validate_defaults"]


# VALIDATION AND SANITY CHECKS
def validate(params: dict) -> None:
    """Validate that a parameter dictionary is consistent and sensible."""
    # Extract parameters with defaults fallback
    # aliases such as "linblad" or "brmesolve" map onto the canonical names
    method = Method.from_value(params.get("method", METHOD)).value
    t_max = params.get("t_max", T_MAX)
    dt = params.get("dt", DT)
    t_wait = params.get("t_wait", T_WAIT)
    t_waits = params.get("t_waits")
    zero_pad = params.get("zero_pad", ZERO_PAD)
    t2_filter = params.get("t2_filter")
    conjugate_term = params.get("conjugate_term", "discard")
    max_workers = params.get("max_workers", 1)
    solver_options = params.get("solver_options")
    if solver_options is None:
        solver_options = SOLVER_OPTIONS.get(method, {})

    # Validate method
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"Invalid method '{method}'. Supported: {sorted(SUPPORTED_METHODS)}")

    # Basic time parameter checks
    if dt <= 0:
        raise ValueError("dt must be > 0")
    if t_max <= 0:
        raise ValueError("t_max must be > 0")
    if t_max < dt:
        raise ValueError("t_max must be >= dt (at least two time points)")
    if t_wait < 0:
        raise ValueError("t_wait must be >= 0")
    if t_waits is not None:
        if len(t_waits) == 0:
            raise ValueError("t_waits must not be empty when provided")
        if any(T < 0 for T in t_waits):
            raise ValueError("all t_waits must be >= 0")

    # Zero padding
    if int(zero_pad) != zero_pad or zero_pad < 0:
        raise ValueError("zero_pad must be a non-negative integer")
    if zero_pad > MAX_PAD_EXPONENT:
        raise ValueError(f"zero_pad must be <= {MAX_PAD_EXPONENT}")
    n_points = int(round(t_max / dt)) + 1
    if 0 < zero_pad and 2**zero_pad < n_points:
        warnings.warn(
            f"zero_pad={zero_pad} does not cover {n_points} time points; "
            "it will be raised to the covering exponent",
            stacklevel=2,
        )

    # Pathway engine switches
    if t2_filter not in SUPPORTED_T2_FILTERS:
        raise ValueError(f"t2_filter '{t2_filter}' not in {SUPPORTED_T2_FILTERS}")
    if conjugate_term not in SUPPORTED_CONJUGATE_TERMS:
        raise ValueError(
            f"conjugate_term '{conjugate_term}' not in {SUPPORTED_CONJUGATE_TERMS}"
        )
    if max_workers <= 0:
        raise ValueError("max_workers must be >= 1")

    # Solver options sanity
    if isinstance(solver_options, dict):
        atol = solver_options.get("atol")
        rtol = solver_options.get("rtol")
        nsteps = solver_options.get("nsteps")
        if atol is not None and atol <= 0:
            raise ValueError("solver_options.atol must be > 0")
        if rtol is not None and rtol <= 0:
            raise ValueError("solver_options.rtol must be > 0")
        if nsteps is not None and nsteps <= 0:
            raise ValueError("solver_options.nsteps must be > 0")

        allowed_keys = set(ALLOWED_SOLVER_OPTIONS.get(method, []))
        unknown_keys = set(solver_options) - allowed_keys
        if unknown_keys:
            raise ValueError(
                f"solver_options includes unsupported keys for {method}: {sorted(unknown_keys)}"
            )
    else:
        raise TypeError("solver_options must be a dict")


def validate_defaults():
    """Validate that all default values are consistent and sensible."""
    validate({})
