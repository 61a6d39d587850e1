"""
Descriptive statistics solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from irisstats.core.result import Result

if TYPE_CHECKING:
    from irisstats.descriptive.design import SampleDesign


@dataclass(frozen=True)
class FrequencyTable:
    """
    Equal-width histogram.

    counts has one entry per bin; edges has len(counts) + 1 entries,
    except for a constant sample where it is [min, max] around one bin.
    """
    counts: NDArray[np.integer[Any]]
    edges: NDArray[np.floating[Any]]

    @property
    def bins(self) -> int:
        return int(len(self.counts))


@dataclass(frozen=True)
class Outlier:
    """A case whose |z| exceeds the outlier threshold."""
    index: int
    value: float
    z: float


@dataclass(frozen=True)
class DescriptiveParams:
    """
    Parameter payload for descriptive statistics.

    All fields are optional (None if not computed). describe() populates
    the moment and order statistics; percentiles(), frequencies() and
    distribution() populate only their specific fields.
    """
    count: int | None = None
    mean: float | None = None
    variance: float | None = None
    sd: float | None = None
    min: float | None = None
    max: float | None = None
    range: float | None = None
    skewness: float | None = None
    kurtosis: float | None = None

    median: float | None = None
    q1: float | None = None
    q3: float | None = None
    iqr: float | None = None
    mode: float | None = None

    percentile_probs: NDArray[np.floating[Any]] | None = None
    percentiles: NDArray[np.floating[Any]] | None = None

    frequencies: FrequencyTable | None = None

    z_scores: NDArray[np.floating[Any]] | None = None
    outliers: tuple[Outlier, ...] | None = None


@dataclass
class DescriptiveSolution:
    """
    User-facing descriptive statistics results.

    Wraps Result[DescriptiveParams] and provides convenient accessors.
    """
    _result: Result[DescriptiveParams]
    _design: 'SampleDesign'

    # --- Moments ---

    @property
    def count(self) -> int | None:
        return self._result.params.count

    @property
    def mean(self) -> float | None:
        return self._result.params.mean

    @property
    def variance(self) -> float | None:
        """Sample variance (n-1 denominator); 0.0 for a single value."""
        return self._result.params.variance

    @property
    def sd(self) -> float | None:
        return self._result.params.sd

    @property
    def standard_deviation(self) -> float | None:
        return self._result.params.sd

    @property
    def min(self) -> float | None:
        return self._result.params.min

    @property
    def max(self) -> float | None:
        return self._result.params.max

    @property
    def range(self) -> float | None:
        return self._result.params.range

    @property
    def skewness(self) -> float | None:
        """Third standardized moment using the population (n) sd."""
        return self._result.params.skewness

    @property
    def kurtosis(self) -> float | None:
        """Excess kurtosis using the population (n) sd."""
        return self._result.params.kurtosis

    # --- Order statistics ---

    @property
    def median(self) -> float | None:
        return self._result.params.median

    @property
    def q1(self) -> float | None:
        return self._result.params.q1

    @property
    def q2(self) -> float | None:
        return self._result.params.median

    @property
    def q3(self) -> float | None:
        return self._result.params.q3

    @property
    def iqr(self) -> float | None:
        return self._result.params.iqr

    @property
    def mode(self) -> float | None:
        """Most frequent value; None when every value is unique."""
        return self._result.params.mode

    # --- Distribution ---

    @property
    def percentile_probs(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.percentile_probs

    @property
    def percentiles(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.percentiles

    def percentile_dict(self) -> dict[float, float]:
        """Percentiles keyed by the probability the caller asked for."""
        probs = self.percentile_probs
        values = self.percentiles
        if probs is None or values is None:
            return {}
        return {float(p): float(v) for p, v in zip(probs, values)}

    @property
    def frequencies(self) -> FrequencyTable | None:
        return self._result.params.frequencies

    @property
    def z_scores(self) -> NDArray[np.floating[Any]] | None:
        return self._result.params.z_scores

    @property
    def outliers(self) -> tuple[Outlier, ...] | None:
        return self._result.params.outliers

    # --- Metadata ---

    @property
    def name(self) -> str:
        return self._design.name

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text statistics table."""
        p = self._result.params
        rows: list[tuple[str, Any]] = [
            ("N", p.count),
            ("Mean", p.mean),
            ("Median", p.median),
            ("Mode", p.mode),
            ("Std. Deviation", p.sd),
            ("Variance", p.variance),
            ("Skewness", p.skewness),
            ("Kurtosis", p.kurtosis),
            ("Range", p.range),
            ("Minimum", p.min),
            ("Maximum", p.max),
            ("25th Percentile", p.q1),
            ("75th Percentile", p.q3),
            ("IQR", p.iqr),
        ]
        lines = [f"Descriptive Statistics: {self.name}", "-" * 40]
        for label, value in rows:
            if label == "Mode" and p.count is not None and value is None:
                lines.append(f"{label:<20}{'none':>20}")
            elif value is None:
                continue
            elif isinstance(value, int):
                lines.append(f"{label:<20}{value:>20d}")
            else:
                lines.append(f"{label:<20}{value:>20.4f}")

        if p.percentiles is not None:
            lines.append("")
            lines.append("Percentiles:")
            for prob, value in zip(p.percentile_probs, p.percentiles):
                lines.append(f"  {prob * 100:>6.2f}%  {value:>14.4f}")

        if p.frequencies is not None:
            lines.append("")
            lines.append("Frequencies:")
            edges = p.frequencies.edges
            for i, count in enumerate(p.frequencies.counts):
                hi = edges[min(i + 1, len(edges) - 1)]
                lines.append(f"  [{edges[i]:.4f}, {hi:.4f}]  {int(count)}")

        if p.outliers is not None:
            lines.append("")
            lines.append(f"Outliers (|z| > threshold): {len(p.outliers)}")
            for o in p.outliers:
                lines.append(f"  case {o.index + 1}: value={o.value:.4f}, z={o.z:.3f}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        computed = sorted(self.info.get('computed', ()))
        stats_str = ", ".join(computed) if computed else "none"
        return (
            f"DescriptiveSolution(name={self.name!r}, n={self._design.n}, "
            f"computed=[{stats_str}])"
        )
