"""
Numerical rank from the diagonal of a triangular factor.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray


def numerical_rank(diagonal: NDArray[np.floating[Any]], dim: int) -> int:
    """
    Count diagonal entries above dim * eps * max|d|.

    A zero or non-finite diagonal has rank 0.
    """
    d = np.abs(np.asarray(diagonal, dtype=np.float64))
    if d.size == 0 or not np.all(np.isfinite(d)):
        return 0
    largest = float(d.max())
    if largest == 0.0:
        return 0
    tol = dim * np.finfo(np.float64).eps * largest
    return int(np.count_nonzero(d > tol))
