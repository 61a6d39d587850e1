"""
CPU backend for OLS linear regression.

Coefficients come from Householder QR (never from inverting X'X).
(X'X)^-1 is formed by LU only for the coefficient covariance.
Inference uses normal approximations: p = 2 * (1 - Phi(|t|)) and
95% intervals b +/- 1.96 * SE.
"""

from typing import Any
import math
import numpy as np
from numpy.typing import NDArray
from scipy.special import erf

from irisstats.core.result import Result
from irisstats.core.exceptions import InsufficientDegreesOfFreedomError
from irisstats.core.compute.timing import Timer
from irisstats.core.compute.tolerances import Z_TWO_TAILED
from irisstats.core.compute.linalg import qr_solve, lu_inverse
from irisstats.regression.design import RegressionDesign
from irisstats.regression.solution import LinearParams


def normal_cdf(x: NDArray) -> NDArray:
    """Standard normal CDF via erf."""
    return 0.5 * (1.0 + erf(np.asarray(x, dtype=np.float64) / math.sqrt(2.0)))


class CPUQRBackend:
    """
    CPU backend using QR decomposition.

    Implements RegressionDesign -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Fit OLS and compute inferential statistics.

        Algorithm:
            1. b = R^-1 Q'y on a scratch copy of X
            2. predicted = X b from the design's own copy of X
            3. sums of squares, R^2, adjusted R^2, MSE
            4. SE = sqrt(MSE * diag((X'X)^-1)), t, p, CI
            5. standardized betas b_i * sd(x_i) / sd(y)

        Raises:
            InsufficientDegreesOfFreedomError: If n <= k + 1
            SingularMatrixError: If X or X'X is singular
        """
        n = design.n
        k = design.k
        p = k + 1
        df_residual = n - p
        if df_residual <= 0:
            raise InsufficientDegreesOfFreedomError(
                f"Regression with {k} predictor(s) needs more than {p} cases, got {n}",
                n=n,
                n_params=p,
            )

        timer = Timer()
        timer.start()
        warnings_list: list[str] = []

        X = design.X
        y = design.y

        with timer.section('solve'):
            coefficients = qr_solve(X, y, check_rank=True)

        with timer.section('residuals'):
            predicted = X @ coefficients
            residuals = y - predicted

        with timer.section('statistics'):
            y_mean = float(np.mean(y))
            ss_total = float(np.sum((y - y_mean) ** 2))
            ss_residual = float(residuals @ residuals)
            ss_regression = ss_total - ss_residual

            if ss_total == 0:
                r_squared = 1.0 if ss_residual == 0 else 0.0
                warnings_list.append("Response has zero variance; R-squared is degenerate")
            else:
                r_squared = ss_regression / ss_total
            r = math.sqrt(max(r_squared, 0.0))
            adjusted_r_squared = 1.0 - (1.0 - r_squared) * (n - 1) / df_residual
            mse = ss_residual / df_residual
            std_error_estimate = math.sqrt(mse)

        with timer.section('inference'):
            xtx_inv = lu_inverse(design.XtX(), name="X'X")
            standard_errors = np.sqrt(mse * np.diag(xtx_inv))
            with np.errstate(divide='ignore', invalid='ignore'):
                t_statistics = coefficients / standard_errors
            p_values = 2.0 * (1.0 - normal_cdf(np.abs(t_statistics)))
            margin = Z_TWO_TAILED * standard_errors
            confidence_intervals = np.column_stack(
                [coefficients - margin, coefficients + margin]
            )

        with timer.section('betas'):
            betas = self._standardized(design, coefficients, warnings_list)

        timer.stop()

        for arr in (coefficients, standard_errors, t_statistics, p_values,
                    confidence_intervals, betas, residuals, predicted):
            arr.setflags(write=False)

        params = LinearParams(
            coefficients=coefficients,
            standard_errors=standard_errors,
            t_statistics=t_statistics,
            p_values=p_values,
            confidence_intervals=confidence_intervals,
            betas=betas,
            residuals=residuals,
            predicted=predicted,
            ss_total=ss_total,
            ss_residual=ss_residual,
            ss_regression=ss_regression,
            mse=mse,
            df_residual=df_residual,
            r=r,
            r_squared=r_squared,
            adjusted_r_squared=adjusted_r_squared,
            std_error_estimate=std_error_estimate,
            rank=p,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': p,
            'df_residual': df_residual,
            'df_regression': k,
            'inference': 'normal',
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _standardized(
        self,
        design: RegressionDesign,
        coefficients: NDArray,
        warnings_list: list[str],
    ) -> NDArray:
        """beta_i = b_i * sd(x_i) / sd(y) with n-1 sds; beta[0] = 0.0."""
        sd_y = float(np.std(design.y, ddof=1))
        betas = np.zeros(design.k + 1, dtype=np.float64)
        if sd_y == 0:
            warnings_list.append("Response has zero variance; standardized betas set to 0")
            return betas
        sd_x = np.std(design.predictors, axis=0, ddof=1)
        betas[1:] = coefficients[1:] * sd_x / sd_y
        return betas
