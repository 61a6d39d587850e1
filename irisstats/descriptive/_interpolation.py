"""
Order-statistic helpers shared by quartiles, percentiles and mode.

Percentiles use linear interpolation between order statistics at the
fractional rank (n - 1) * p, i.e. Hyndman & Fan type 7 (R's default).
"""

from __future__ import annotations

import math
import numpy as np
from numpy.typing import NDArray


def interpolated_percentile(sorted_x: NDArray, p: float) -> float:
    """
    Percentile of a sorted sample by linear interpolation.

    Parameters
    ----------
    sorted_x : NDArray
        1D ascending array, non-empty.
    p : float
        Probability in [0, 1].
    """
    n = len(sorted_x)
    index = (n - 1) * p
    lower = int(math.floor(index))
    upper = int(math.ceil(index))

    if lower == upper:
        return float(sorted_x[lower])

    fraction = index - lower
    return float(sorted_x[lower] * (1.0 - fraction) + sorted_x[upper] * fraction)


def interpolated_percentiles(sorted_x: NDArray, probs: NDArray) -> NDArray:
    """Vectorised interpolated_percentile over several probabilities."""
    return np.array(
        [interpolated_percentile(sorted_x, float(p)) for p in probs],
        dtype=np.float64,
    )


def mode_of_sorted(sorted_x: NDArray) -> float | None:
    """
    Most frequent value of a sorted sample, or None if all values are unique.

    Single pass; a value only replaces the current mode when its count
    strictly exceeds the best count so far, so ties go to the value that
    reached the max count first (the smallest one).
    """
    best_value: float | None = None
    best_count = 0
    run_value = None
    run_count = 0

    for value in sorted_x:
        if run_count and value == run_value:
            run_count += 1
        else:
            run_value = value
            run_count = 1
        if run_count > best_count:
            best_count = run_count
            best_value = float(value)

    return best_value if best_count > 1 else None
