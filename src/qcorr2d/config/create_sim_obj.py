"""Configuration -> simulation factory.

Purpose:
    Load a YAML config (or fall back to defaults) and directly build a
    `SimulationModule2D` instance with the core objects:
        - SystemModel (Hamiltonian, dipoles, initial state, dissipation)
        - BosonicEnvironment (qutip, Redfield only)
        - SimulationConfig

Usage:
    from qcorr2d.config.create_sim_obj import load_simulation
    sim = load_simulation("scripts/simulation_configs/two_level.yaml")  # or None

YAML Schema (every key optional):

    config:
      method: lindblad          # or redfield
      t_max: 100.0              # fs, shared coherence / detection range
      dt: 1.0                   # fs
      t_wait: 0.0               # fs
      t_waits: [0, 50, 100]     # population time scan (overrides t_wait)
      zero_pad: 0               # pad to 2**zero_pad points (0 = off)
      t2_filter: null           # populations | coherences
      conjugate_term: discard   # add | subtract
      max_workers: 1
      solver_options: {atol: 1e-8, rtol: 1e-6}

    system:                     # either the ladder parameters ...
      frequencies_cm: [16000.0, 15500.0]
      dip_moments: [1.0, 1.4]
      decay_rates: [0.0, 0.0]
      dephasing_rates: [0.01, 0.01]
                                # ... or explicit matrices (nested lists,
                                # complex entries as [re, im] pairs)
      hamiltonian: [[0, 0], [0, 3.0]]
      dipole_ge: [[0, 1], [1, 0]]
      dipole_ef: ...
      initial_state: ...
      c_ops: [...]
      coupling_ops: [...]

    bath:                       # Redfield only, multiples of mean frequency
      bath_type: ohmic          # or drudelorentz
      temperature: 1e-3
      cutoff: 1e2
      coupling: 1e-4
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping, Optional

import numpy as np
import yaml
from qutip import DrudeLorentzEnvironment, OhmicEnvironment, Qobj
from qutip.core.environment import BosonicEnvironment

from ..core.pathways import Method
from ..core.simulation.sim_config import SimulationConfig
from ..core.simulation.simulation_class import SimulationModule2D
from ..core.simulation.system_model import SystemModel, ladder_model
from ..utils.constants import convert_cm_to_fs
from ..utils.logging_setup import get_logger
from .defaults import (
    ALLOWED_SOLVER_OPTIONS,
    BATH_COUPLING,
    BATH_CUTOFF,
    BATH_TEMP,
    BATH_TYPE,
    DECAY_RATES,
    DEPHASING_RATES,
    DIP_MOMENTS,
    DT,
    FREQUENCIES_CM,
    METHOD,
    SOLVER_OPTIONS,
    SUPPORTED_BATHS,
    T_MAX,
    T_WAIT,
    ZERO_PAD,
)
from .validation import validate

__all__ = [
    "load_simulation",
    "load_simulation_config",
    "load_system_model",
    "load_simulation_bath",
]

logger = get_logger(__name__)


# HELPERS
def _read_yaml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError("Top-level YAML must be a mapping/dict")
    return data


def _load_root(path: Optional[str | Path]) -> Mapping[str, Any]:
    return {} if path is None else _read_yaml(Path(path))


def _get_section(cfg: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    sec = cfg.get(name, {})
    return sec if isinstance(sec, Mapping) else {}


def _normalize_numbers(options: Mapping[str, Any]) -> dict[str, Any]:
    """Turn YAML numeric strings (e.g. "1e-6") into numbers."""
    normalized: dict[str, Any] = {}
    for key, value in options.items():
        if isinstance(value, str):
            text = value.strip()
            try:
                numeric_val = float(text)
            except ValueError:
                normalized[key] = value
            else:
                if numeric_val.is_integer() and "e" not in text.lower() and "." not in text:
                    normalized[key] = int(numeric_val)
                else:
                    normalized[key] = numeric_val
        else:
            normalized[key] = value
    return normalized


def _parse_matrix(value: Any, name: str, dims: Optional[list] = None) -> Qobj:
    """Nested lists -> Qobj; a trailing axis of length 2 holds [re, im] pairs."""
    data = np.asarray(value)
    if data.ndim == 3 and data.shape[-1] == 2:
        data = data[..., 0].astype(float) + 1j * data[..., 1].astype(float)
    if data.ndim != 2 or data.shape[0] != data.shape[1]:
        raise ValueError(f"system.{name} must be a square matrix, got shape {data.shape}")
    return Qobj(data.astype(complex), dims=dims)


def _parse_matrix_list(values: Any, name: str, dims: list) -> List[Qobj]:
    if values is None:
        return []
    return [_parse_matrix(v, f"{name}[{i}]", dims) for i, v in enumerate(values)]


def load_simulation_config(
    path: Optional[str | Path] = None,
) -> SimulationConfig:
    """Load only the SimulationConfig from a YAML file or defaults."""
    cfg_root = _load_root(path)
    config_cfg = _get_section(cfg_root, "config")

    method = Method.from_value(config_cfg.get("method", METHOD)).value
    solver_options = dict(SOLVER_OPTIONS.get(method, {}))
    solver_options_cfg = config_cfg.get("solver_options", {})
    if isinstance(solver_options_cfg, Mapping):
        solver_options.update(solver_options_cfg)
    solver_options = _normalize_numbers(solver_options)

    # Filter to only allowed options for the current method
    allowed_keys = ALLOWED_SOLVER_OPTIONS.get(method, [])
    dropped = sorted(set(solver_options) - set(allowed_keys))
    if dropped:
        logger.warning("ignoring solver options not supported by %s: %s", method, dropped)
    solver_options = {k: v for k, v in solver_options.items() if k in allowed_keys}

    t_waits = config_cfg.get("t_waits")
    return SimulationConfig(
        method=method,
        solver_options=solver_options,
        t_max=float(config_cfg.get("t_max", T_MAX)),
        dt=float(config_cfg.get("dt", DT)),
        t_wait=float(config_cfg.get("t_wait", T_WAIT)),
        t_waits=None if t_waits is None else [float(T) for T in t_waits],
        zero_pad=int(config_cfg.get("zero_pad", ZERO_PAD)),
        t2_filter=config_cfg.get("t2_filter"),
        conjugate_term=str(config_cfg.get("conjugate_term", "discard")),
        max_workers=int(config_cfg.get("max_workers", 1)),
    )


def load_simulation_bath(
    path: Optional[str | Path] = None,
) -> BosonicEnvironment:
    """Load the qutip BosonicEnvironment from a YAML file or defaults.

    Bath parameters are dimensionless multiples of the mean transition
    frequency w0 (in fs^-1): ``temperature`` = T/w0, ``cutoff`` = wc/w0,
    ``coupling`` = alpha/w0.
    """
    cfg_root = _load_root(path)
    bath_cfg = _get_section(cfg_root, "bath")
    system_cfg = _get_section(cfg_root, "system")

    temperature = float(bath_cfg.get("temperature", BATH_TEMP))
    cutoff = float(bath_cfg.get("cutoff", BATH_CUTOFF))
    coupling = float(bath_cfg.get("coupling", BATH_COUPLING))
    bath_type = str(bath_cfg.get("bath_type", BATH_TYPE))

    freqs_cm = list(system_cfg.get("frequencies_cm", FREQUENCIES_CM))
    if not freqs_cm:
        raise ValueError("Missing `system.frequencies_cm`; cannot determine w0 for bath scaling.")
    w0_bar_fs = float(np.mean(convert_cm_to_fs(freqs_cm)))

    temperature *= w0_bar_fs
    cutoff *= w0_bar_fs
    coupling *= w0_bar_fs

    if bath_type == "ohmic":
        return OhmicEnvironment(T=temperature, alpha=coupling, wc=cutoff, s=1.0, tag=bath_type)
    # lam = alpha * gamma / 2 matches the Ohmic bath at low frequencies
    if bath_type == "drudelorentz":
        return DrudeLorentzEnvironment(
            T=temperature, gamma=cutoff, lam=coupling * cutoff / 2, tag=bath_type
        )
    raise ValueError(f"Unsupported bath_type: {bath_type}. Supported: {SUPPORTED_BATHS}")


def load_system_model(
    path: Optional[str | Path] = None,
    method: Optional[str] = None,
) -> SystemModel:
    """Load the SystemModel from a YAML file or the built-in ladder model.

    For Redfield runs the dissipation becomes ``(coupling_op, bath)``
    pairs; for Lindblad runs it is the list of collapse operators.
    """
    cfg_root = _load_root(path)
    system_cfg = _get_section(cfg_root, "system")
    if method is None:
        method = _get_section(cfg_root, "config").get("method", METHOD)

    if "hamiltonian" in system_cfg:
        H = _parse_matrix(system_cfg["hamiltonian"], "hamiltonian")
        dims = H.dims
        if "dipole_ge" not in system_cfg:
            raise ValueError("system.dipole_ge is required together with system.hamiltonian")
        dipole_ef = system_cfg.get("dipole_ef")
        initial_state = system_cfg.get("initial_state")
        system = SystemModel(
            hamiltonian=H,
            dipole_ge=_parse_matrix(system_cfg["dipole_ge"], "dipole_ge", dims),
            dipole_ef=None if dipole_ef is None else _parse_matrix(dipole_ef, "dipole_ef", dims),
            initial_state=(
                None if initial_state is None
                else _parse_matrix(initial_state, "initial_state", dims)
            ),
            dissipation=_parse_matrix_list(system_cfg.get("c_ops"), "c_ops", dims),
            coupling_ops=_parse_matrix_list(system_cfg.get("coupling_ops"), "coupling_ops", dims),
        )
    else:
        system = ladder_model(
            frequencies_cm=list(system_cfg.get("frequencies_cm", FREQUENCIES_CM)),
            dip_moments=list(system_cfg.get("dip_moments", DIP_MOMENTS)),
            decay_rates=list(system_cfg.get("decay_rates", DECAY_RATES)),
            dephasing_rates=list(system_cfg.get("dephasing_rates", DEPHASING_RATES)),
        )

    if Method.from_value(method) is Method.REDFIELD:
        if not system.coupling_ops:
            raise ValueError("Redfield runs need system.coupling_ops (bath coupling operators)")
        if system.dissipation:
            logger.warning("collapse operators are ignored for Redfield runs")
        bath = load_simulation_bath(path)
        system.dissipation = [(op, bath) for op in system.coupling_ops]

    return system


def load_simulation(
    path: Optional[str | Path] = None,
    run_validation: bool = False,
) -> SimulationModule2D:
    """Create a `SimulationModule2D` directly from a YAML file or defaults.

    Parameters
    ----------
    path: str | Path | None
        YAML configuration file. If None, module defaults are used.
    run_validation: bool
        If True run parameter validation via `qcorr2d.config.validation.validate`.
    """
    sim_config = load_simulation_config(path)

    if run_validation:
        validate(sim_config.to_dict())

    system = load_system_model(path, method=sim_config.method)
    simulation = SimulationModule2D(simulation_config=sim_config, system=system)
    logger.info("simulation loaded from %s", path if path is not None else "defaults")
    return simulation
