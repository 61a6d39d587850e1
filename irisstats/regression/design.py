"""
Regression Design.

Builds the intercept-augmented design matrix X = [1, x1, ..., xk] and the
response y. The design keeps its own read-only copy of X; the solver
works on a scratch copy, so fitted values are always formed from the
unmodified matrix held here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from irisstats.core.datasource import DataSource
from irisstats.core.exceptions import DimensionError, EmptyInputError, ValidationError
from irisstats.core.validation import (
    check_array, check_finite, check_1d, check_2d, check_consistent_length,
    check_names, stack_columns,
)


@dataclass(frozen=True)
class RegressionDesign:
    """
    OLS design: response plus intercept-augmented predictor matrix.

    Construction:
        RegressionDesign.from_arrays(y, X)                   # X is (n, k)
        RegressionDesign.from_arrays(y, [x1, x2])            # k columns
        RegressionDesign.from_datasource(ds, y='score', x=['hours', 'age'])
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _names: tuple[str, ...]
    _response: str
    _rows: NDArray[np.intp] | None = None

    @classmethod
    def from_arrays(
        cls,
        y: ArrayLike,
        x: ArrayLike | Sequence[ArrayLike],
        *,
        names: Sequence[str] | None = None,
        response: str = 'y',
    ) -> RegressionDesign:
        """
        Build from a response and predictors.

        `x` may be an (n, k) array, a single 1D predictor (array or flat
        list of numbers), or a list or tuple of k predictor columns.
        """
        y_arr = check_array(y, 'y')
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        check_1d(y_arr, 'y')
        if y_arr.shape[0] == 0:
            raise EmptyInputError("y: no cases")

        if isinstance(x, (list, tuple)) and len(x) > 0 and np.ndim(x[0]) >= 1:
            X_arr = stack_columns(x, 'predictor')
            check_consistent_length(y_arr, X_arr, names=('y', 'predictors'))
        else:
            X_arr = check_array(x, 'x')
            if X_arr.ndim == 1:
                X_arr = X_arr.reshape(-1, 1)

        return cls._build(y_arr, X_arr, names, response, rows=None)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        y: str,
        x: Sequence[str],
    ) -> RegressionDesign:
        """
        Build from named columns with listwise deletion over y and x.

        Raises:
            DimensionError: If a name does not resolve to a column
            EmptyInputError: If no complete case remains
        """
        if isinstance(x, str):
            x = [x]
        if len(x) == 0:
            raise ValidationError("At least one predictor is required")
        block, rows = source.complete([y, *x])
        if block.shape[0] == 0:
            raise EmptyInputError(
                f"No complete cases for {y} ~ {' + '.join(x)}"
            )
        return cls._build(block[:, 0], block[:, 1:], list(x), y, rows=rows)

    @classmethod
    def _build(
        cls,
        y: NDArray,
        X: NDArray,
        names: Sequence[str] | None,
        response: str,
        rows: NDArray[np.intp] | None,
    ) -> RegressionDesign:
        """Internal builder with validation."""
        check_2d(X, 'x')
        if X.shape[0] != y.shape[0]:
            raise DimensionError(
                f"Inconsistent lengths: y={y.shape[0]}, x={X.shape[0]}"
            )
        k = X.shape[1]
        if k == 0:
            raise ValidationError("At least one predictor is required")
        check_finite(y, 'y')
        check_finite(X, 'x')

        names = check_names(names, k, 'x')

        design = np.column_stack([np.ones(X.shape[0], dtype=np.float64), X])
        design.setflags(write=False)
        y = np.array(y, dtype=np.float64, copy=True)
        y.setflags(write=False)

        return cls(_X=design, _y=y, _names=names, _response=str(response), _rows=rows)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix with intercept column first (n x (k+1))."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def predictors(self) -> NDArray[np.floating[Any]]:
        """Predictor columns without the intercept (n x k)."""
        return self._X[:, 1:]

    @property
    def n(self) -> int:
        """Number of cases."""
        return int(self._X.shape[0])

    @property
    def k(self) -> int:
        """Number of predictors (excluding the intercept)."""
        return int(self._X.shape[1] - 1)

    @property
    def names(self) -> tuple[str, ...]:
        """Predictor names."""
        return self._names

    @property
    def response(self) -> str:
        return self._response

    @property
    def rows(self) -> NDArray[np.intp] | None:
        """Source row indices kept after listwise deletion, if built from a DataSource."""
        return self._rows

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X (for standard errors)."""
        return self._X.T @ self._X
