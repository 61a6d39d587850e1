"""
Distance solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from irisstats.core.result import Result


@dataclass(frozen=True)
class DistanceParams:
    """
    Symmetric n x n case-distance matrix with a zero diagonal.
    """
    matrix: NDArray[np.floating[Any]]
    metric: str


@dataclass
class DistanceSolution:
    """User-facing distance results. Wraps Result[DistanceParams]."""
    _result: Result[DistanceParams]

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        return self._result.params.matrix

    @property
    def metric(self) -> str:
        return self._result.params.metric

    @property
    def n(self) -> int:
        """Number of cases."""
        return int(self.matrix.shape[0])

    def nearest(self, case: int) -> int:
        """Index of the closest other case; ties go to the lowest index."""
        if self.n < 2:
            raise ValueError("nearest() needs at least 2 cases")
        row = self.matrix[case].copy()
        row[case] = np.inf
        return int(np.argmin(row))

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

    def summary(self, max_cases: int = 10) -> str:
        """Proximity matrix, truncated to the first `max_cases` cases."""
        shown = min(self.n, max_cases)
        label = self.metric.replace('_', ' ').title()
        lines = [
            f"Proximity Matrix ({label} distance, {self.n} cases)",
            "-" * (8 + 12 * shown),
            " " * 8 + "".join(f"{j + 1:>12d}" for j in range(shown)),
        ]
        for i in range(shown):
            row = "".join(f"{self.matrix[i, j]:>12.3f}" for j in range(shown))
            lines.append(f"{i + 1:<8d}{row}")
        if shown < self.n:
            lines.append(f"... {self.n - shown} more cases not shown")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"DistanceSolution(metric={self.metric!r}, n={self.n})"
