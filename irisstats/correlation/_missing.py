"""
Missing-value policies for correlation.

- 'listwise': drop every row with NaN in any selected column, once
- 'pairwise': per (i, j) pair, use only rows where both values are present
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from irisstats.core.exceptions import InsufficientDataError


USE_POLICIES = ('listwise', 'pairwise')


def listwise_complete(data: NDArray) -> NDArray:
    """
    Rows of `data` with no NaN in any column.

    Raises
    ------
    InsufficientDataError
        If fewer than 2 complete rows remain.
    """
    keep = ~np.any(np.isnan(data), axis=1)
    n_complete = int(keep.sum())
    if n_complete < 2:
        raise InsufficientDataError(
            f"Listwise deletion left {n_complete} complete case(s) of "
            f"{data.shape[0]}; at least 2 are required. "
            f"Consider use='pairwise'.",
            n_available=n_complete,
            n_required=2,
        )
    return data[keep]


def pairwise_mask(xi: NDArray, xj: NDArray) -> NDArray:
    """True where both xi and xj are non-NaN."""
    return ~(np.isnan(xi) | np.isnan(xj))
