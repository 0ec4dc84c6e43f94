"""
Spectroscopy package for qcorr2d.

Main components:
- correlations: third-order correlation matrix of one Feynman pathway
- zero_padding: power-of-two zero padding and the matching axes
- spectra: assembly of the six pathways into 2D spectra, T scans
- spectrum_set: immutable result container and cropping
"""

# PATHWAY ENGINE
from .correlations import apply_t2_filter, compute_correlation, edge_correct

# RESOLUTION ENHANCEMENT
from .zero_padding import effective_pad_exponent, frequency_axis, interpt, zeropad

# RESULT CONTAINER
from .spectrum_set import SpectrumSet, crop_2d

# SPECTRUM ASSEMBLY
from .spectra import (
    SpectrumEvent,
    combine_branch,
    fold_rephasing,
    make_2d_spectra,
    scan_population_times,
)

__all__ = [
    # Pathway engine
    "compute_correlation",
    "apply_t2_filter",
    "edge_correct",
    # Zero padding
    "zeropad",
    "interpt",
    "frequency_axis",
    "effective_pad_exponent",
    # Results
    "SpectrumSet",
    "crop_2d",
    # Assembly
    "SpectrumEvent",
    "combine_branch",
    "fold_rephasing",
    "make_2d_spectra",
    "scan_population_times",
]
