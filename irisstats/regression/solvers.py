"""
Solver dispatch for linear regression.
"""

from __future__ import annotations

import warnings
from typing import Sequence
from numpy.typing import ArrayLike

from irisstats.core.datasource import DataSource
from irisstats.core.exceptions import ValidationError
from irisstats.regression.design import RegressionDesign
from irisstats.regression.solution import LinearSolution
from irisstats.regression.backends.cpu import CPUQRBackend


def fit(
    y: ArrayLike | str | RegressionDesign,
    x: ArrayLike | Sequence[ArrayLike] | Sequence[str] | None = None,
    *,
    data: DataSource | None = None,
    names: Sequence[str] | None = None,
) -> LinearSolution:
    """
    Ordinary least squares with an intercept.

    Usage:
        fit(y, X)                           # X is (n, k)
        fit(y, [x1, x2], names=['a', 'b'])  # predictor columns
        fit('score', ['hours', 'age'], data=ds)
        fit(design)

    With data=, `y` and `x` are column names and incomplete cases are
    dropped listwise first.

    Returns:
        LinearSolution with coefficients (intercept first), standard
        errors, t statistics, normal-approximation p-values, 95%
        confidence intervals, standardized betas, residuals, predicted
        values, r, r^2, adjusted r^2 and the standard error of the
        estimate.

    Raises:
        EmptyInputError: If y has no values
        DimensionError: If a predictor's length differs from y
        InsufficientDegreesOfFreedomError: If n <= k + 1
        SingularMatrixError: If the predictors are collinear

    Warns:
        RuntimeWarning: If the response is constant (R-squared and betas
            are degenerate); the warning text is also kept on the result
    """
    if isinstance(y, RegressionDesign):
        if x is not None or data is not None:
            raise ValidationError("fit(design) takes no further data arguments")
        design = y
    elif data is not None:
        if not isinstance(y, str) or x is None:
            raise ValidationError(
                "With data=, pass the response name and a list of predictor names"
            )
        design = RegressionDesign.from_datasource(data, y=y, x=x)
    else:
        if x is None:
            raise ValidationError("fit(y, x) requires predictors")
        design = RegressionDesign.from_arrays(y, x, names=names)

    result = CPUQRBackend().solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return LinearSolution(_result=result, _design=design)
