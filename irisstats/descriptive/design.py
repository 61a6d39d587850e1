"""
SampleDesign: data wrapper for descriptive statistics.

Wraps one numeric sample and keeps its sorted copy alongside, since the
median, quartiles, percentiles and mode all read the sorted order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from irisstats.core.validation import (
    check_array, check_1d, check_finite, check_nonempty,
)


@dataclass(frozen=True)
class SampleDesign:
    """
    Design for descriptive statistics.

    Wraps a single non-empty sample of finite values. Missing values must
    be removed by the caller before construction. Immutable after
    construction.

    Construction:
        SampleDesign.from_array(values)
        SampleDesign.from_array(values, name='height')
    """
    _data: NDArray[np.floating[Any]]
    _sorted: NDArray[np.floating[Any]]
    _name: str

    @classmethod
    def from_array(cls, data: ArrayLike, name: str = 'x') -> SampleDesign:
        """
        Build SampleDesign from a 1D array-like.

        Raises:
            EmptyInputError: If the sample has no values
            DimensionError: If the input is not 1D
            ValidationError: If the sample contains NaN or Inf
        """
        arr = check_array(data, name)
        if arr.ndim == 2 and 1 in arr.shape:
            arr = arr.ravel()
        check_1d(arr, name)
        check_nonempty(arr, name)
        check_finite(arr, name)

        arr = arr.copy()
        arr.setflags(write=False)
        sorted_arr = np.sort(arr)
        sorted_arr.setflags(write=False)
        return cls(_data=arr, _sorted=sorted_arr, _name=name)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Sample values in original order."""
        return self._data

    @property
    def sorted(self) -> NDArray[np.floating[Any]]:
        """Sample values in ascending order."""
        return self._sorted

    @property
    def n(self) -> int:
        """Number of observations."""
        return int(self._data.shape[0])

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"SampleDesign(name={self._name!r}, n={self.n})"
