"""
Linear regression module.

Public API:
    fit(y, x) - OLS with intercept, standard errors, t/p-values,
                confidence intervals and standardized betas
"""

from irisstats.regression.design import RegressionDesign
from irisstats.regression.solution import LinearParams, LinearSolution
from irisstats.regression.solvers import fit

__all__ = [
    "fit",
    "RegressionDesign",
    "LinearParams",
    "LinearSolution",
]
