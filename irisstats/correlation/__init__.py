"""
Correlation module.

Public API:
    cor(data, method=, tails=, use=)        - Pearson / Spearman matrix
    partial_cor(data, variables, controls)  - Partial correlations
    midranks(x)                             - Average-tie ranks
    t_critical_value(df, tails)             - Critical |t| at alpha = 0.05
"""

from irisstats.correlation.design import CorrelationDesign
from irisstats.correlation.solution import CorrelationParams, CorrelationSolution
from irisstats.correlation.solvers import cor, partial_cor
from irisstats.correlation._ranks import midranks
from irisstats.correlation._significance import (
    t_critical_value,
    is_significant,
    is_partial_significant,
)

__all__ = [
    "cor",
    "partial_cor",
    "midranks",
    "t_critical_value",
    "is_significant",
    "is_partial_significant",
    "CorrelationDesign",
    "CorrelationParams",
    "CorrelationSolution",
]
