"""
Result[P]: what every backend hands back.

The payload P is domain specific (a correlation matrix, regression
coefficients, a proximity matrix). Everything a report view needs besides
the numbers travels next to it: which backend ran, how long each step
took, what policy was applied and which degenerate cases were patched
over.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen envelope around a domain payload.

    Attributes:
        params: The payload (CorrelationParams, LinearParams, ...)
        info: Method tags and counts, e.g. {'method': 'spearman',
            'use': 'pairwise', 'n_dropped': 0}
        timing: Seconds per Timer section plus 'total_seconds'; None when
            the caller built the result by hand
        backend_name: 'cpu_correlation', 'cpu_qr', ...
        warnings: Human-readable notes about degenerate cases that were
            resolved without failing, e.g. a zero-variance pair
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in w for w in self.warnings)
