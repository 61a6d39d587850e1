"""
irisstats: statistical computation engine for tabular data analysis.

Stateless numerical routines that turn numeric columns into immutable
results: descriptive statistics, correlation matrices with significance
flags, partial correlations, case distance matrices and OLS regression.

Submodules:
    descriptive: Moments, percentiles, frequencies, z-scores
    correlation: Pearson/Spearman and partial correlation
    distance: Case proximity matrices
    regression: Linear regression with inference
    output: Tagged union over all result types
"""

__version__ = "0.1.0"

from irisstats import descriptive
from irisstats import correlation
from irisstats import distance
from irisstats import regression
from irisstats import output
from irisstats.core import DataSource, IrisStatsError

__all__ = [
    "__version__",
    "descriptive",
    "correlation",
    "distance",
    "regression",
    "output",
    "DataSource",
    "IrisStatsError",
]
