"""
Midrank transform used for Spearman correlation.

Spearman's rho is computed as Pearson correlation on midranks.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.stats import rankdata

from irisstats.core.validation import check_array, check_1d, check_finite


def midranks(x: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    1-based ranks with ties given the average of the ranks they occupy.

    Example:
        >>> midranks([10, 20, 20, 30])
        array([1. , 2.5, 2.5, 4. ])
    """
    arr = check_array(x, 'x')
    check_1d(arr, 'x')
    check_finite(arr, 'x')
    return rankdata(arr, method='average').astype(np.float64)
