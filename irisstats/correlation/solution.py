"""
Correlation solution types.

Contains the parameter payload and user-facing solution wrapper shared by
ordinary and partial correlation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from irisstats.core.result import Result


@dataclass(frozen=True)
class CorrelationParams:
    """
    Parameter payload for a correlation matrix.

    matrix and significant are k x k, symmetric, with diagonal 1.0 / True.
    pairwise_n is populated only under pairwise deletion.
    """
    matrix: NDArray[np.floating[Any]]
    significant: NDArray[np.bool_]
    variables: tuple[str, ...]
    method: str
    tails: str
    n: int
    controls: tuple[str, ...] | None = None
    pairwise_n: NDArray[np.integer[Any]] | None = None


@dataclass
class CorrelationSolution:
    """
    User-facing correlation results.

    Wraps Result[CorrelationParams]. Matrix row/column order follows
    `variables`.
    """
    _result: Result[CorrelationParams]

    @property
    def matrix(self) -> NDArray[np.floating[Any]]:
        """Correlation coefficients (k x k)."""
        return self._result.params.matrix

    @property
    def significant(self) -> NDArray[np.bool_]:
        """Per-pair significance flags at alpha = 0.05 (k x k)."""
        return self._result.params.significant

    @property
    def variables(self) -> tuple[str, ...]:
        return self._result.params.variables

    @property
    def method(self) -> str:
        """'pearson' or 'spearman'."""
        return self._result.params.method

    @property
    def tails(self) -> str:
        """'two' or 'one'."""
        return self._result.params.tails

    @property
    def n(self) -> int:
        """Sample size used (rows after listwise deletion, or all rows for pairwise)."""
        return self._result.params.n

    @property
    def controls(self) -> tuple[str, ...] | None:
        """Control variables; None unless this is a partial correlation."""
        return self._result.params.controls

    @property
    def is_partial(self) -> bool:
        return self._result.params.controls is not None

    @property
    def pairwise_n(self) -> NDArray[np.integer[Any]] | None:
        """Per-pair sample sizes under pairwise deletion (k x k)."""
        return self._result.params.pairwise_n

    def get(self, a: str, b: str) -> float:
        """Coefficient for a named pair."""
        i = self._index(a)
        j = self._index(b)
        return float(self.matrix[i, j])

    def is_significant(self, a: str, b: str) -> bool:
        return bool(self.significant[self._index(a), self._index(b)])

    def _index(self, name: str) -> int:
        try:
            return self.variables.index(name)
        except ValueError:
            raise KeyError(
                f"No variable {name!r} in result. Available: {self.variables}"
            ) from None

    # --- Metadata ---

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
        """Lower-triangle correlation table; * marks p < .05."""
        title = "Partial Correlations" if self.is_partial else "Correlations"
        names = self.variables
        width = max(10, max(len(v) for v in names) + 2)
        lines = [
            f"{title} ({self.method.capitalize()}, {self.tails}-tailed, N = {self.n})",
        ]
        if self.is_partial:
            lines.append(f"Controlling for: {', '.join(self.controls)}")
        lines.append("-" * (width * (len(names) + 1)))
        lines.append(" " * width + "".join(v.rjust(width) for v in names))
        for i, row_name in enumerate(names):
            cells = []
            for j in range(len(names)):
                if j > i:
                    cells.append(" " * width)
                elif j == i:
                    cells.append("1.000 ".rjust(width))
                else:
                    star = "*" if self.significant[i, j] else " "
                    cells.append(f"{self.matrix[i, j]:.3f}{star}".rjust(width))
            lines.append(row_name.ljust(width) + "".join(cells))
        lines.append("* p < .05")
        return "\n".join(lines)

    def __repr__(self) -> str:
        kind = "partial" if self.is_partial else self.method
        return (
            f"CorrelationSolution({kind}, k={len(self.variables)}, n={self.n}, "
            f"tails={self.tails!r})"
        )
