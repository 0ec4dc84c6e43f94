"""Small QuTiP models shared by the test modules."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
from qutip import Qobj, basis, ket2dm, qeye


class Model:
    """Plain bundle of operators (H, dipoles, initial state, collapse ops)."""

    def __init__(self, H, mu_ge, mu_ef, rho0, c_ops=None):
        self.H = H
        self.mu_ge = mu_ge
        self.mu_ef = mu_ef
        self.rho0 = rho0
        self.c_ops = [] if c_ops is None else c_ops


@pytest.fixture
def trivial_model():
    """Zero Hamiltonian with identity dipoles: every correlation entry is exactly 1."""
    return Model(
        H=Qobj(np.zeros((2, 2))),
        mu_ge=qeye(2),
        mu_ef=qeye(2),
        rho0=ket2dm(basis(2, 0)),
    )


@pytest.fixture
def omega0():
    return 1.0


@pytest.fixture
def two_level(omega0):
    """Undamped two-level system with excited-state energy omega0, no f manifold."""
    g, e = basis(2, 0), basis(2, 1)
    return Model(
        H=omega0 * ket2dm(e),
        mu_ge=g * e.dag() + e * g.dag(),
        mu_ef=Qobj(np.zeros((2, 2))),
        rho0=ket2dm(g),
    )


@pytest.fixture
def three_level():
    """g-e-f ladder with an anharmonic f level."""
    g, e, f = basis(3, 0), basis(3, 1), basis(3, 2)
    return Model(
        H=1.0 * ket2dm(e) + 1.9 * ket2dm(f),
        mu_ge=g * e.dag() + e * g.dag(),
        mu_ef=1.2 * (e * f.dag() + f * e.dag()),
        rho0=ket2dm(g),
    )


@pytest.fixture
def times4():
    return np.array([0.0, 1.0, 2.0, 3.0])
