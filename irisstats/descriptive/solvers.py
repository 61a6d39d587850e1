"""
Solver dispatch for descriptive statistics.

Provides describe() as the comprehensive entry point, plus individual
functions: percentiles(), frequencies(), distribution(), z_scores(),
standardize().
"""

from __future__ import annotations

from typing import Literal, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from irisstats.core.exceptions import ValidationError
from irisstats.core.validation import check_array, check_1d, check_choice
from irisstats.descriptive.design import SampleDesign
from irisstats.descriptive.solution import DescriptiveSolution
from irisstats.descriptive.backends.cpu import CPUDescriptiveBackend


StandardizeMethod = Literal['zscore', 'minmax']

DEFAULT_PERCENTILES = (0.05, 0.10, 0.25, 0.50, 0.75, 0.90, 0.95)


def _ensure_design(data: ArrayLike | SampleDesign, name: str) -> SampleDesign:
    """Convert raw array to SampleDesign if needed."""
    if isinstance(data, SampleDesign):
        return data
    return SampleDesign.from_array(data, name=name)


def _check_probs(probs: Sequence[float] | ArrayLike) -> NDArray:
    probs_arr = check_array(probs, 'probs')
    if probs_arr.ndim == 0:
        probs_arr = probs_arr.reshape(1)
    check_1d(probs_arr, 'probs')
    if probs_arr.size == 0:
        raise ValidationError("probs: at least one probability is required")
    if np.any(np.isnan(probs_arr)):
        raise ValidationError("probs: contains NaN")
    return probs_arr


def _check_bins(bins: int) -> int:
    if isinstance(bins, bool) or int(bins) != bins or bins < 1:
        raise ValidationError(f"bins must be a positive integer, got {bins!r}")
    return int(bins)


def describe(
    x: ArrayLike | SampleDesign,
    *,
    name: str = 'x',
) -> DescriptiveSolution:
    """
    Compute the full set of descriptive statistics for one sample.

    Computes: count, mean, median, mode, variance (n-1), standard
    deviation, range, min, max, skewness, excess kurtosis, q1, q2, q3
    and iqr.

    Parameters
    ----------
    x : array-like or SampleDesign
        Non-empty 1D sample with missing values already removed.
    name : str
        Variable name carried into the result.

    Returns
    -------
    DescriptiveSolution with all moment and order statistics populated.

    Raises
    ------
    EmptyInputError
        If the sample has no values.
    """
    design = _ensure_design(x, name)
    result = CPUDescriptiveBackend().solve(
        design,
        compute={'moments', 'quartiles', 'mode', 'shape'},
    )
    return DescriptiveSolution(_result=result, _design=design)


def percentiles(
    x: ArrayLike | SampleDesign,
    probs: Sequence[float] | ArrayLike = DEFAULT_PERCENTILES,
    *,
    name: str = 'x',
) -> DescriptiveSolution:
    """
    Compute percentiles by linear interpolation at rank (n - 1) * p.

    Parameters
    ----------
    x : array-like or SampleDesign
        Non-empty 1D sample.
    probs : sequence of float
        Probabilities; values outside [0, 1] are clamped. The result
        keeps them in the order given.

    Returns
    -------
    DescriptiveSolution with percentile_probs and percentiles populated.
    """
    design = _ensure_design(x, name)
    result = CPUDescriptiveBackend().solve(
        design,
        compute={'percentiles'},
        probs=_check_probs(probs),
    )
    return DescriptiveSolution(_result=result, _design=design)


def frequencies(
    x: ArrayLike | SampleDesign,
    bins: int = 10,
    *,
    name: str = 'x',
) -> DescriptiveSolution:
    """
    Equal-width frequency table spanning [min, max].

    Parameters
    ----------
    x : array-like or SampleDesign
        Non-empty 1D sample.
    bins : int
        Number of bins (>= 1).

    Returns
    -------
    DescriptiveSolution with frequencies populated.
    """
    design = _ensure_design(x, name)
    result = CPUDescriptiveBackend().solve(
        design,
        compute={'frequencies'},
        bins=_check_bins(bins),
    )
    return DescriptiveSolution(_result=result, _design=design)


def distribution(
    x: ArrayLike | SampleDesign,
    probs: Sequence[float] | ArrayLike = DEFAULT_PERCENTILES,
    *,
    outliers: bool = True,
    bins: int | None = None,
    name: str = 'x',
) -> DescriptiveSolution:
    """
    Distribution analysis: percentiles, z-score outliers, frequencies.

    Parameters
    ----------
    x : array-like or SampleDesign
        Non-empty 1D sample.
    probs : sequence of float
        Percentile probabilities.
    outliers : bool
        If True, list cases with |z| > 3 (population-sd z-scores).
    bins : int, optional
        If given, also build a frequency table with this many bins.
    """
    design = _ensure_design(x, name)
    compute = {'percentiles'}
    if outliers:
        compute.add('outliers')
    if bins is not None:
        bins = _check_bins(bins)
        compute.add('frequencies')

    result = CPUDescriptiveBackend().solve(
        design,
        compute=compute,
        probs=_check_probs(probs),
        bins=bins,
    )
    return DescriptiveSolution(_result=result, _design=design)


def z_scores(x: ArrayLike | SampleDesign) -> NDArray[np.floating]:
    """
    Standard scores (x - mean) / sd using the population (n) sd, so the
    scores have mean 0 and population sd 1.

    Returns all zeros for fewer than 2 values or a constant sample.
    """
    design = _ensure_design(x, 'x')
    result = CPUDescriptiveBackend().solve(design, compute={'z_scores'})
    return result.params.z_scores


def standardize(
    x: ArrayLike | SampleDesign,
    method: StandardizeMethod = 'zscore',
) -> NDArray[np.floating]:
    """
    Rescale a sample.

    Parameters
    ----------
    method : str
        'zscore': (x - mean) / sd with the population sd, as z_scores().
        'minmax': (x - min) / (max - min); all zeros for a constant sample.
    """
    check_choice(method, ('zscore', 'minmax'), 'method')
    design = _ensure_design(x, 'x')

    if method == 'zscore':
        return z_scores(design)

    lo = design.sorted[0]
    span = design.sorted[-1] - lo
    if span == 0:
        return np.zeros(design.n, dtype=np.float64)
    return (design.data - lo) / span
