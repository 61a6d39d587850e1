"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from irisstats.core.result import Result

if TYPE_CHECKING:
    from irisstats.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for OLS regression.

    Per-coefficient arrays have length k+1 with the intercept first.
    confidence_intervals has shape (k+1, 2): lower, upper.
    """
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    confidence_intervals: NDArray[np.floating[Any]]
    betas: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    predicted: NDArray[np.floating[Any]]
    ss_total: float
    ss_residual: float
    ss_regression: float
    mse: float
    df_residual: int
    r: float
    r_squared: float
    adjusted_r_squared: float
    std_error_estimate: float
    rank: int


@dataclass
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and the design it was fitted on.
    """
    _result: Result[LinearParams]
    _design: 'RegressionDesign'

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def intercept(self) -> float:
        return float(self._result.params.coefficients[0])

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """SE(b) = sqrt(MSE * diag((X'X)^-1))."""
        return self._result.params.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided normal-approximation p-values, 2 * (1 - Phi(|t|))."""
        return self._result.params.p_values

    @property
    def confidence_intervals(self) -> NDArray[np.floating[Any]]:
        """95% intervals b +/- 1.96 * SE, shape (k+1, 2)."""
        return self._result.params.confidence_intervals

    @property
    def betas(self) -> NDArray[np.floating[Any]]:
        """Standardized coefficients; the intercept entry is 0.0."""
        return self._result.params.betas

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def predicted(self) -> NDArray[np.floating[Any]]:
        return self._result.params.predicted

    @property
    def ss_total(self) -> float:
        return self._result.params.ss_total

    @property
    def ss_residual(self) -> float:
        return self._result.params.ss_residual

    @property
    def ss_regression(self) -> float:
        return self._result.params.ss_regression

    @property
    def mse(self) -> float:
        return self._result.params.mse

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def r(self) -> float:
        return self._result.params.r

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    @property
    def std_error_estimate(self) -> float:
        return self._result.params.std_error_estimate

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def names(self) -> tuple[str, ...]:
        """Coefficient labels, '(Constant)' first."""
        return ('(Constant)',) + self._design.names

    @property
    def response(self) -> str:
        return self._design.response

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Model summary, ANOVA and coefficient tables as plain text."""
        k = self._design.k
        width = max(12, max(len(nm) for nm in self.names) + 2)
        lines = [
            f"Linear Regression: {self.response}",
            "=" * 78,
            f"R = {self.r:.4f}   R-squared = {self.r_squared:.4f}   "
            f"Adj. R-squared = {self.adjusted_r_squared:.4f}",
            f"Std. Error of the Estimate = {self.std_error_estimate:.4f}   N = {self.n}",
            "",
            "ANOVA",
            "-" * 78,
            f"{'':<12}{'Sum of Squares':>16}{'df':>8}{'Mean Square':>16}",
            f"{'Regression':<12}{self.ss_regression:>16.4f}{k:>8d}"
            f"{self.ss_regression / k:>16.4f}",
            f"{'Residual':<12}{self.ss_residual:>16.4f}{self.df_residual:>8d}"
            f"{self.mse:>16.4f}",
            f"{'Total':<12}{self.ss_total:>16.4f}{self.n - 1:>8d}",
            "",
            "Coefficients",
            "-" * 78,
            f"{'':<{width}}{'B':>11}{'Std.Error':>11}{'Beta':>9}{'t':>10}{'Sig.':>8}"
            f"{'95% CI':>20}",
        ]
        for i, nm in enumerate(self.names):
            beta = "" if i == 0 else f"{self.betas[i]:.3f}"
            lo, hi = self.confidence_intervals[i]
            lines.append(
                f"{nm:<{width}}{self.coefficients[i]:>11.4f}"
                f"{self.standard_errors[i]:>11.4f}{beta:>9}"
                f"{self.t_statistics[i]:>10.3f}{self.p_values[i]:>8.3f}"
                f"{f'[{lo:.3f}, {hi:.3f}]':>20}"
            )
        lines.append("-" * 78)
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self.n}, k={self._design.k}, "
            f"r_squared={self.r_squared:.4f})"
        )
