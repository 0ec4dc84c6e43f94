"""Plotting helpers: consumers of SpectrumSet, never called by the core."""

from .plotting import create_colormap, plot_2d_spectrum, plot_spectrum_set

__all__ = [
    "create_colormap",
    "plot_2d_spectrum",
    "plot_spectrum_set",
]
