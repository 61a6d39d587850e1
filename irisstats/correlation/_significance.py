"""
Significance decisions for correlation coefficients.

The test statistic is t = r * sqrt(df / (1 - r^2)). Ordinary correlations
compare |t| against the alpha = 0.05 critical-value table in
core.compute.tolerances (df = n - 2, one- or two-tailed). Partial
correlations compare against the fixed normal value 1.96.

The table is a piecewise approximation of the t quantiles and is part of
the observable contract; it is not replaced by a t-CDF.
"""

from __future__ import annotations

import math

from irisstats.core.compute.tolerances import (
    T_CRITICAL_TWO_TAILED_EXACT,
    T_CRITICAL_ONE_TAILED_EXACT,
    T_CRITICAL_TWO_TAILED_BANDS,
    T_CRITICAL_ONE_TAILED_BANDS,
    T_TABLE_MAX_DF,
    Z_TWO_TAILED,
    Z_ONE_TAILED,
)


def t_critical_value(df: int, tails: str = 'two') -> float:
    """
    Critical |t| at alpha = 0.05 from the lookup table.

    Falls back to 1.96 (two-tailed) or 1.645 (one-tailed) for df > 120.
    """
    if df < 1:
        raise ValueError(f"df must be >= 1, got {df}")

    two = tails == 'two'
    exact = T_CRITICAL_TWO_TAILED_EXACT if two else T_CRITICAL_ONE_TAILED_EXACT
    if df in exact:
        return exact[df]

    if df > T_TABLE_MAX_DF:
        return Z_TWO_TAILED if two else Z_ONE_TAILED

    bands = T_CRITICAL_TWO_TAILED_BANDS if two else T_CRITICAL_ONE_TAILED_BANDS
    for band in bands:
        if band.lo <= df <= band.hi:
            return band.value(df)

    raise AssertionError(f"df={df} not covered by critical-value table")


def correlation_t(r: float, df: int) -> float:
    """t statistic for a correlation with df degrees of freedom."""
    return r * math.sqrt(df / (1.0 - r * r))


def is_significant(r: float, n: int, tails: str = 'two') -> bool:
    """
    Decide significance of a Pearson/Spearman r computed from n cases.

    |r| >= 1 is always significant; n < 3 never is.
    """
    if abs(r) >= 1.0:
        return True
    if n < 3:
        return False

    df = n - 2
    t = correlation_t(r, df)
    return abs(t) > t_critical_value(df, tails)


def is_partial_significant(r: float, df: int) -> bool:
    """
    Decide significance of a partial correlation (df = n - 2 - controls).

    Degenerate cases (df <= 0, |r| >= 1, NaN) are reported as not
    significant.
    """
    if not math.isfinite(r) or abs(r) >= 1.0 or df <= 0:
        return False
    return abs(correlation_t(r, df)) > Z_TWO_TAILED
