"""
CorrelationDesign: aligned variable block for correlation analyses.

Wraps an (n cases x k variables) matrix plus variable names. NaN cells
mark missing values; the missing-data policy is applied by the backend
(listwise or pairwise), not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from irisstats.core.datasource import DataSource
from irisstats.core.exceptions import ValidationError
from irisstats.core.validation import (
    check_array, check_no_inf, check_2d, check_names, stack_columns,
)


@dataclass(frozen=True)
class CorrelationDesign:
    """
    Design for correlation and partial correlation.

    Construction:
        CorrelationDesign.from_array(data, names=['a', 'b'])
        CorrelationDesign.from_columns([a, b, c], names=[...])
        CorrelationDesign.from_columns({'a': a, 'b': b})
        CorrelationDesign.from_datasource(ds, columns=['a', 'b'])
    """
    _data: NDArray[np.floating[Any]]
    _names: tuple[str, ...]

    @classmethod
    def from_array(
        cls, data: ArrayLike, names: Sequence[str] | None = None
    ) -> CorrelationDesign:
        """
        Build from an (n, k) matrix whose columns are variables.
        """
        arr = check_array(data, 'data')
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        return cls._build(arr, names)

    @classmethod
    def from_columns(
        cls,
        columns: Sequence[ArrayLike] | Mapping[str, ArrayLike],
        names: Sequence[str] | None = None,
    ) -> CorrelationDesign:
        """
        Build from per-variable columns (each of length n).

        A mapping supplies its own names; for a sequence, names default
        to V1..Vk.
        """
        if isinstance(columns, Mapping):
            if names is not None:
                raise ValidationError("names must not be given with a mapping of columns")
            names = [str(k) for k in columns.keys()]
            columns = list(columns.values())

        return cls._build(stack_columns(list(columns), 'variable'), names)

    @classmethod
    def from_datasource(
        cls, source: DataSource, *, columns: Sequence[str]
    ) -> CorrelationDesign:
        """
        Build from named DataSource columns. Missing cells stay NaN.

        Raises:
            DimensionError: If a name does not resolve to a column
        """
        return cls._build(source.select(columns), list(columns))

    @classmethod
    def _build(
        cls, data: NDArray, names: Sequence[str] | None
    ) -> CorrelationDesign:
        """Internal builder with validation."""
        check_2d(data, 'data')
        check_no_inf(data, 'data')

        n, k = data.shape
        if k < 1:
            raise ValidationError(f"Need at least 1 variable, got {k}")

        names = check_names(names, k, 'V')

        data = np.array(data, dtype=np.float64, copy=True)
        data.setflags(write=False)
        return cls(_data=data, _names=names)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Data matrix (n x k), may contain NaN."""
        return self._data

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def n(self) -> int:
        """Number of cases (rows), before any deletion."""
        return int(self._data.shape[0])

    @property
    def k(self) -> int:
        """Number of variables."""
        return int(self._data.shape[1])

    @property
    def has_missing(self) -> bool:
        return bool(np.any(np.isnan(self._data)))

    def __repr__(self) -> str:
        missing = ", missing" if self.has_missing else ""
        return f"CorrelationDesign(n={self.n}, k={self.k}{missing})"
