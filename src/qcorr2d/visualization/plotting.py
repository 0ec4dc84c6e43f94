"""Contour plots of 2D spectra; consumers of SpectrumSet only."""

from __future__ import annotations

from typing import Literal, Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.colors import LinearSegmentedColormap

from ..spectroscopy.spectrum_set import MATRIX_NAMES, SpectrumSet

__all__ = ["create_colormap", "plot_2d_spectrum", "plot_spectrum_set"]

# most negative ... most positive, the zero colour is inserted in the middle
_NEGATIVE_COLORS = [(0.718, 0.0, 0.718), (0.516, 0.516, 0.991), (0.0, 0.559, 0.559)]
_POSITIVE_COLORS = [(0.0, 0.592, 0.0), (0.827, 0.827, 0.0), (0.947, 0.057, 0.057)]
_ZERO_COLORS = {"bright": (0.93, 0.93, 0.93), "dark": (0.03, 0.03, 0.03)}

_TITLES = {
    "full": r"$S_{\mathrm{total}}$",
    "full_r": r"$S_{\mathrm{R}}$",
    "full_nr": r"$S_{\mathrm{NR}}$",
    "gsb": r"$S_{\mathrm{GSB}}$",
    "se": r"$S_{\mathrm{SE}}$",
    "esa": r"$S_{\mathrm{ESA}}$",
}


def create_colormap(scheme: Literal["bright", "dark"] = "bright") -> LinearSegmentedColormap:
    """Seven-colour diverging colormap with a bright or dark zero level."""
    if scheme not in _ZERO_COLORS:
        raise ValueError(f"unknown colormap scheme '{scheme}'. Supported: {list(_ZERO_COLORS)}")
    colors = _NEGATIVE_COLORS + [_ZERO_COLORS[scheme]] + _POSITIVE_COLORS
    return LinearSegmentedColormap.from_list(f"qcorr2d_{scheme}", colors)


def _contour_levels(scaling: str) -> np.ndarray:
    """Normalised contour levels in [-1, 1] for the chosen z-scaling."""
    lvls = np.arange(-1.025, 1.025 + 1e-9, 0.05)
    if scaling == "lin":
        return lvls
    if scaling == "tan":
        lvls = np.tan(lvls)
        return lvls / np.max(lvls)
    if scaling == "cube":
        return lvls**3
    if scaling == "asinh":
        lvls = np.arcsinh(3 * lvls)
        return lvls / np.max(lvls)
    raise ValueError(f"unknown scaling '{scaling}'. Supported: lin, tan, cube, asinh")


def _representation(data: np.ndarray, repr: str) -> np.ndarray:
    if repr == "absorptive":
        return np.real(data)
    if repr == "dispersive":
        return np.imag(data)
    if repr == "absolute":
        return np.abs(data)
    raise ValueError(f"unknown representation '{repr}'. Supported: absorptive, dispersive, absolute")


def plot_2d_spectrum(
    omega: np.ndarray,
    data: np.ndarray,
    repr: Literal["absorptive", "dispersive", "absolute"] = "absorptive",
    normalize: bool = False,
    scaling: Literal["lin", "tan", "cube", "asinh"] = "lin",
    ax: Union[Axes, None] = None,
    scheme: Literal["bright", "dark"] = "bright",
    title: Optional[str] = None,
    show_colorbar: bool = True,
) -> plt.Figure:
    """
    Filled contour plot of one 2D spectrum.

    Parameters
    ----------
    omega : shared frequency axis (fs^-1); rows are w1, columns w3.
    data : complex (or real) square array matching ``omega``.
    repr : which part of the complex spectrum to show.
    normalize : divide by max |data| first (all-zero data raises ValueError).
    scaling : spacing of the contour levels ("lin", "tan", "cube", "asinh").
    """
    omega = np.asarray(omega, dtype=float)
    data = np.asarray(data)
    # VALIDATE INPUT
    if data.ndim != 2 or data.shape != (omega.size, omega.size):
        raise ValueError(
            f"Data shape {data.shape} does not match the frequency axis ({omega.size})."
        )

    data = _representation(data, repr)
    levels = _contour_levels(scaling)

    if normalize:
        max_abs = np.max(np.abs(data))
        if max_abs == 0:
            raise ValueError("Data array is all zeros, cannot normalize.")
        data = data / max_abs

    # rescale the levels to the data instead of the data to the levels
    vmax = float(np.max(np.abs(data)))
    if vmax > 0:
        levels = levels * vmax

    # GENERATE FIGURE
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    im_plot = ax.contourf(omega, omega, data, levels=levels, cmap=create_colormap(scheme))
    ax.plot([omega[0], omega[-1]], [omega[0], omega[-1]], "k--", linewidth=1.0)
    ax.set_xlabel(r"$\omega_3$ [fs$^{-1}$]")
    ax.set_ylabel(r"$\omega_1$ [fs$^{-1}$]")
    if title is not None:
        ax.set_title(title)
    if show_colorbar:
        fig.colorbar(im_plot, ax=ax)
    return fig


def plot_spectrum_set(
    spectra: SpectrumSet,
    repr: Literal["absorptive", "dispersive", "absolute"] = "absorptive",
    normalize: bool = False,
    scaling: Literal["lin", "tan", "cube", "asinh"] = "lin",
    names: Sequence[str] = MATRIX_NAMES,
    t_wait: Optional[float] = None,
) -> plt.Figure:
    """2 x 3 grid with the total, R, NR, GSB, SE and ESA spectra."""
    fig, axes = plt.subplots(2, 3, figsize=(13, 8), sharex=True, sharey=True)
    for ax, name in zip(axes.flat, names):
        data = getattr(spectra, name)
        # an identically zero branch (e.g. ESA of a two-level system) cannot be normalised
        plot_2d_spectrum(
            spectra.omega,
            data,
            repr=repr,
            normalize=normalize and bool(np.any(data)),
            scaling=scaling,
            ax=ax,
            title=_TITLES.get(name, name),
        )
    if t_wait is not None:
        fig.suptitle(rf"$T = {t_wait:.1f}\,$fs")
    fig.tight_layout()
    return fig
