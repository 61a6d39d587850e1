"""
Descriptive statistics module.

Single-sample moment and order statistics as reported by the desktop
tool's Descriptives and Distribution analyses.

Public API:
    describe(x)           - All moment and order statistics at once
    percentiles(x, probs) - Interpolated percentiles
    frequencies(x, bins)  - Equal-width frequency table
    distribution(x, ...)  - Percentiles + z-score outliers + frequencies
    z_scores(x)           - Standard scores
    standardize(x)        - z-score or min-max rescaling
"""

from irisstats.descriptive.design import SampleDesign
from irisstats.descriptive.solution import (
    DescriptiveParams,
    DescriptiveSolution,
    FrequencyTable,
    Outlier,
)
from irisstats.descriptive.solvers import (
    describe,
    percentiles,
    frequencies,
    distribution,
    z_scores,
    standardize,
)

__all__ = [
    "describe",
    "percentiles",
    "frequencies",
    "distribution",
    "z_scores",
    "standardize",
    "SampleDesign",
    "DescriptiveParams",
    "DescriptiveSolution",
    "FrequencyTable",
    "Outlier",
]
