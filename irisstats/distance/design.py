"""
DistanceDesign: case-by-variable matrix for case distances.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from irisstats.core.datasource import DataSource
from irisstats.core.exceptions import EmptyInputError
from irisstats.core.validation import check_array, check_finite, check_2d, stack_columns


@dataclass(frozen=True)
class DistanceDesign:
    """
    Cases in rows, variables in columns. No missing values.

    Construction:
        DistanceDesign.from_array(X)                  # (n cases, k variables)
        DistanceDesign.from_columns([height, weight]) # k columns of length n
        DistanceDesign.from_datasource(ds, columns=['height', 'weight'])
    """
    _cases: NDArray[np.floating[Any]]

    @classmethod
    def from_array(cls, data: ArrayLike) -> DistanceDesign:
        arr = check_array(data, 'data')
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        return cls._build(arr)

    @classmethod
    def from_columns(
        cls, columns: Sequence[ArrayLike] | Mapping[str, ArrayLike]
    ) -> DistanceDesign:
        """Build from per-variable columns; the block is transposed to cases."""
        if isinstance(columns, Mapping):
            columns = list(columns.values())
        return cls._build(stack_columns(list(columns), 'variable'))

    @classmethod
    def from_datasource(
        cls, source: DataSource, *, columns: Sequence[str]
    ) -> DistanceDesign:
        """
        Use complete cases only; rows with a missing value in any of
        `columns` are dropped.
        """
        block, _ = source.complete(columns)
        return cls._build(block)

    @classmethod
    def _build(cls, cases: NDArray) -> DistanceDesign:
        check_2d(cases, 'data')
        n, k = cases.shape
        if n == 0:
            raise EmptyInputError("data: no cases")
        if k == 0:
            raise EmptyInputError("data: no variables")
        check_finite(cases, 'data')

        cases = np.array(cases, dtype=np.float64, copy=True)
        cases.setflags(write=False)
        return cls(_cases=cases)

    @property
    def cases(self) -> NDArray[np.floating[Any]]:
        """Case vectors (n x k)."""
        return self._cases

    @property
    def n(self) -> int:
        return int(self._cases.shape[0])

    @property
    def k(self) -> int:
        return int(self._cases.shape[1])
