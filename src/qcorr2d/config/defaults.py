"""Central defaults for :mod:`qcorr2d.config`.

This module consolidates:
- time/grid defaults
- zero padding defaults
- supported option lists
- per-method solver options

Goal: fewer files, fewer cross-imports, less maintenance.
"""

from __future__ import annotations

# --- Generic defaults ---
METHOD = "lindblad"

# --- Time and grid defaults ---
T_MAX = 100.0  # Maximum coherence / detection time in fs
DT = 1.0  # Spacing between time grid points in fs
T_WAIT = 0.0  # Population time in fs

# --- Resolution enhancement ---
ZERO_PAD = 0  # 0 -> no zero padding, N -> pad up to 2^N
MAX_PAD_EXPONENT = 2**12  # sanity ceiling for N

# --- Built-in model (ground + excited [+ doubly excited] ladder) ---
FREQUENCIES_CM = [16000.0]  # transition frequencies g->e [, e->f] in cm^-1
DIP_MOMENTS = [1.0]  # matching transition dipoles
DECAY_RATES = [0.0]  # population decay per excited level in fs^-1
DEPHASING_RATES = [0.01]  # pure dephasing per excited level in fs^-1

# --- Bath defaults (multiples of the mean transition frequency) ---
BATH_TYPE = "ohmic"
BATH_CUTOFF = 1e2
BATH_TEMP = 1e-3
BATH_COUPLING = 1e-4

# --- Supported options ---
SUPPORTED_METHODS = ["lindblad", "redfield"]
SUPPORTED_T2_FILTERS = [None, "populations", "coherences"]
SUPPORTED_CONJUGATE_TERMS = ["discard", "add", "subtract"]
SUPPORTED_BATHS = ["ohmic", "drudelorentz"]

# --- Solver options passed to qutip ---
SOLVER_OPTIONS = {
    "lindblad": {
        "atol": 1e-8,
        "rtol": 1e-6,
        "nsteps": 200000,
        "method": "bdf",
    },
    "redfield": {
        "sec_cutoff": 0.1,
        "atol": 1e-8,
        "rtol": 1e-6,
        "nsteps": 200000,
        "method": "bdf",
    },
}

ALLOWED_SOLVER_OPTIONS = {
    "lindblad": [
        "atol",
        "rtol",
        "nsteps",
        "method",
        "max_step",
        "min_step",
        "progress_bar",
    ],
    "redfield": [
        "atol",
        "rtol",
        "nsteps",
        "method",
        "max_step",
        "min_step",
        "progress_bar",
        "sec_cutoff",
    ],
}

# options consumed while building the generator, never forwarded to mesolve
BUILD_OPTION_KEYS = ("sec_cutoff",)

__all__ = [
    "METHOD",
    "T_MAX",
    "DT",
    "T_WAIT",
    "ZERO_PAD",
    "MAX_PAD_EXPONENT",
    "FREQUENCIES_CM",
    "DIP_MOMENTS",
    "DECAY_RATES",
    "DEPHASING_RATES",
    "BATH_TYPE",
    "BATH_CUTOFF",
    "BATH_TEMP",
    "BATH_COUPLING",
    "SUPPORTED_METHODS",
    "SUPPORTED_T2_FILTERS",
    "SUPPORTED_CONJUGATE_TERMS",
    "SUPPORTED_BATHS",
    "SOLVER_OPTIONS",
    "ALLOWED_SOLVER_OPTIONS",
    "BUILD_OPTION_KEYS",
]
