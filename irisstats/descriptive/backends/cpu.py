"""
CPU backend for descriptive statistics.

Moments follow the desktop tool's reporting conventions: variance uses
the n-1 denominator, while skewness and kurtosis standardize the third
and fourth central moments by the population (n) standard deviation.
Z-scores also use the population sd.
"""

from __future__ import annotations

import math
import numpy as np
from numpy.typing import NDArray

from irisstats.core.result import Result
from irisstats.core.compute.timing import Timer
from irisstats.core.compute.tolerances import OUTLIER_Z, BIN_EDGE_EPSILON
from irisstats.descriptive.design import SampleDesign
from irisstats.descriptive.solution import DescriptiveParams, FrequencyTable, Outlier
from irisstats.descriptive._interpolation import (
    interpolated_percentile, interpolated_percentiles, mode_of_sorted,
)


VALID_COMPUTE = frozenset({
    'moments', 'quartiles', 'mode', 'shape',
    'percentiles', 'frequencies', 'z_scores', 'outliers',
})


class CPUDescriptiveBackend:
    """CPU backend for descriptive statistics."""

    @property
    def name(self) -> str:
        return 'cpu_descriptive'

    def solve(
        self,
        design: SampleDesign,
        *,
        compute: set[str],
        probs: NDArray | None = None,
        bins: int | None = None,
    ) -> Result[DescriptiveParams]:
        """
        Compute requested descriptive statistics.

        Parameters
        ----------
        design : SampleDesign
        compute : set of str
            Which statistics to compute. Valid entries:
            'moments', 'quartiles', 'mode', 'shape', 'percentiles',
            'frequencies', 'z_scores', 'outliers'
        probs : NDArray, optional
            Probabilities for 'percentiles'; each is clamped to [0, 1].
        bins : int, optional
            Bin count for 'frequencies'.
        """
        unknown = set(compute) - VALID_COMPUTE
        if unknown:
            raise ValueError(f"Unknown statistics requested: {sorted(unknown)}")

        timer = Timer()
        timer.start()

        x = design.data
        xs = design.sorted
        n = design.n
        warnings_list: list[str] = []
        fields: dict = {}

        # Mean and variance are needed by moments, shape and z-scores
        mean = float(np.mean(x))
        ss = float(np.sum((x - mean) ** 2))
        variance = ss / (n - 1) if n > 1 else 0.0

        if 'moments' in compute:
            with timer.section('moments'):
                fields.update(
                    count=n,
                    mean=mean,
                    variance=variance,
                    sd=math.sqrt(variance),
                    min=float(xs[0]),
                    max=float(xs[-1]),
                    range=float(xs[-1] - xs[0]),
                )

        if 'quartiles' in compute:
            with timer.section('quartiles'):
                q1 = interpolated_percentile(xs, 0.25)
                q2 = interpolated_percentile(xs, 0.5)
                q3 = interpolated_percentile(xs, 0.75)
                fields.update(median=q2, q1=q1, q3=q3, iqr=q3 - q1)

        if 'mode' in compute:
            with timer.section('mode'):
                fields['mode'] = mode_of_sorted(xs)

        if 'shape' in compute:
            with timer.section('shape'):
                skewness, kurtosis = self._shape(x, mean, ss, variance)
                fields.update(skewness=skewness, kurtosis=kurtosis)

        if 'percentiles' in compute:
            with timer.section('percentiles'):
                probs_arr = np.asarray(probs, dtype=np.float64)
                fields['percentile_probs'] = probs_arr
                fields['percentiles'] = interpolated_percentiles(
                    xs, np.clip(probs_arr, 0.0, 1.0)
                )

        if 'frequencies' in compute:
            with timer.section('frequencies'):
                fields['frequencies'] = self._frequencies(x, xs, bins)

        if 'z_scores' in compute or 'outliers' in compute:
            with timer.section('z_scores'):
                z = self._z_scores(x, mean, ss)
            if 'z_scores' in compute:
                fields['z_scores'] = z
            if 'outliers' in compute:
                fields['outliers'] = tuple(
                    Outlier(index=int(i), value=float(x[i]), z=float(z[i]))
                    for i in np.flatnonzero(np.abs(z) > OUTLIER_Z)
                )
                if n < 2 or variance == 0:
                    warnings_list.append(
                        "z-scores are all zero (fewer than 2 values or zero variance)"
                    )

        timer.stop()

        return Result(
            params=DescriptiveParams(**fields),
            info={'computed': sorted(compute), 'n': n},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    def _shape(
        self, x: NDArray, mean: float, ss: float, variance: float
    ) -> tuple[float, float]:
        """
        Skewness and excess kurtosis.

            skewness = (sum(d^3)/n) / s^3
            kurtosis = (sum(d^4)/n) / s^4 - 3
            s = sqrt(sum(d^2)/n)   (population sd)

        Both are 0.0 for a constant or single-value sample.
        """
        if variance <= 0:
            return 0.0, 0.0

        n = len(x)
        d = x - mean
        m3 = float(np.sum(d ** 3)) / n
        m4 = float(np.sum(d ** 4)) / n
        s = math.sqrt(ss / n)
        return m3 / s ** 3, m4 / s ** 4 - 3.0

    def _frequencies(self, x: NDArray, xs: NDArray, bins: int) -> FrequencyTable:
        """
        Equal-width bins over [min, max].

        The last edge is nudged past max so the maximum is inclusive;
        bin index floor((v - min) / width) is clamped to [0, bins - 1].
        """
        lo = float(xs[0])
        hi = float(xs[-1])

        if lo == hi:
            return FrequencyTable(
                counts=np.array([len(x)], dtype=np.int64),
                edges=np.array([lo, hi], dtype=np.float64),
            )

        span = hi - lo
        width = span / bins
        edges = lo + np.arange(bins + 1, dtype=np.float64) * width
        edges[bins] = hi + span * BIN_EDGE_EPSILON

        index = np.floor((x - lo) / width).astype(np.int64)
        index = np.clip(index, 0, bins - 1)
        counts = np.bincount(index, minlength=bins).astype(np.int64)

        return FrequencyTable(counts=counts, edges=edges)

    def _z_scores(self, x: NDArray, mean: float, ss: float) -> NDArray:
        """(x - mean) / sd with the population (n) sd; zeros when sd is 0 or n < 2."""
        n = len(x)
        if n < 2 or ss <= 0:
            return np.zeros(n, dtype=np.float64)
        return (x - mean) / math.sqrt(ss / n)
