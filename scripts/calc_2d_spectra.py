"""Compute 2D spectra for every configured population time and save them.

The run directory gets the delimited-text spectra (``T_steps.dat`` plus
``2Dspec_%03i.dat``), one ``.npz`` artifact per population time, a copy of
the YAML configuration and, with ``--plot``, one figure per population time.

Examples
--------
    python calc_2d_spectra.py
    python calc_2d_spectra.py --config simulation_configs/three_level_redfield.yaml --plot
    python calc_2d_spectra.py --crop 2.5 3.5 --log-level DEBUG
"""

from __future__ import annotations

import argparse
import shutil
from datetime import datetime
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from qcorr2d.config.create_sim_obj import load_simulation
from qcorr2d.spectroscopy import SpectrumEvent
from qcorr2d.utils.data_io import save_2d, save_spectrum_set
from qcorr2d.utils.logging_setup import configure_logging
from qcorr2d.visualization import plot_spectrum_set

SCRIPTS_DIR = Path(__file__).parent.resolve()
SIM_CONFIGS_DIR = SCRIPTS_DIR / "simulation_configs"
RUNS_ROOT = (SCRIPTS_DIR.parent / "data" / "runs").resolve()


def pick_config_yaml(config_dir: Path | None = None) -> Path | None:
    """Return the preferred YAML configuration from ``config_dir`` (None if empty).

    Files starting with an underscore win; otherwise the first in sorted order.
    """
    if config_dir is None:
        config_dir = SIM_CONFIGS_DIR
    candidates = sorted(config_dir.glob("*.yaml"))
    if not candidates:
        return None
    marked = [entry for entry in candidates if entry.name.startswith("_")]
    return marked[0] if marked else candidates[0]


def print_progress(event: SpectrumEvent) -> None:
    if event.stage == "pathway_finished":
        print(f"  {event.pathway:>7s} at T = {event.t_wait:g} fs done")
    elif event.stage == "assembled":
        print(f"✅ spectra assembled at T = {event.t_wait:g} fs")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compute 2D spectra (all six pathways) for each population time",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration (default: pick from scripts/simulation_configs)",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory (default: data/runs/<timestamp>)",
    )
    parser.add_argument("--plot", action="store_true", help="Save one figure per population time")
    parser.add_argument(
        "--crop",
        nargs=2,
        type=float,
        metavar=("WMIN", "WMAX"),
        default=None,
        help="Crop every spectrum to [WMIN, WMAX] (fs^-1) before saving",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level of the qcorr2d package",
    )
    args = parser.parse_args()
    configure_logging(args.log_level)

    config_path = args.config if args.config is not None else pick_config_yaml()
    if config_path is not None:
        config_path = config_path.resolve()

    print("=" * 80)
    print("2D SPECTRA FROM THIRD-ORDER RESPONSE FUNCTIONS")
    print(f"Config path: {config_path if config_path is not None else '(defaults)'}")

    sim = load_simulation(config_path, run_validation=True)
    print(sim.simulation_config)
    print(sim.system)

    out_dir = args.out
    if out_dir is None:
        out_dir = RUNS_ROOT / datetime.now().strftime("%Y%m%d_%H%M%S")
    out_dir.mkdir(parents=True, exist_ok=True)
    if config_path is not None:
        shutil.copy2(config_path, out_dir / config_path.name)

    t_waits = sim.simulation_config.population_times
    spectra = sim.scan(progress=print_progress)
    if args.crop is not None:
        w_min, w_max = args.crop
        spectra = [spec.crop(w_min, w_max) for spec in spectra]

    written = save_2d(spectra, t_waits, out_dir)
    metadata = sim.simulation_config.to_dict()
    for i, (T, spec) in enumerate(zip(t_waits, spectra), start=1):
        written.append(
            save_spectrum_set(spec, out_dir / f"spectrum_set_{i:03d}.npz", {**metadata, "t_wait": T})
        )
        if args.plot:
            fig = plot_spectrum_set(spec, normalize=True, t_wait=T)
            fig_path = out_dir / f"2Dspec_{i:03d}.png"
            fig.savefig(fig_path, dpi=150)
            plt.close(fig)
            written.append(fig_path)

    print(f"✅ {len(written)} files written to {out_dir}")


if __name__ == "__main__":
    main()
