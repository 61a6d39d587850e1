"""
Closed union over analysis results.

An AnalysisOutput carries an explicit OutputKind tag next to its payload,
so consumers (report views, output collections) dispatch on the tag and
never on the payload's runtime type.

Usage:
    out = AnalysisOutput.correlation(cor(data))
    if out.kind is OutputKind.CORRELATION:
        table = out.as_correlation().matrix
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, Union

from irisstats.core.exceptions import ValidationError
from irisstats.correlation.solution import CorrelationSolution
from irisstats.descriptive.solution import DescriptiveSolution
from irisstats.distance.solution import DistanceSolution
from irisstats.regression.solution import LinearSolution


class OutputKind(Enum):
    """Kinds of analysis output."""
    DESCRIPTIVE = "descriptive"
    CORRELATION = "correlation"
    PARTIAL_CORRELATION = "partial_correlation"
    DISTRIBUTION = "distribution"
    DISTANCES = "distances"
    LINEAR_REGRESSION = "linear_regression"


DEFAULT_TITLES = {
    OutputKind.DESCRIPTIVE: "Descriptive Statistics",
    OutputKind.CORRELATION: "Correlations",
    OutputKind.PARTIAL_CORRELATION: "Partial Correlation",
    OutputKind.DISTRIBUTION: "Distribution Analysis",
    OutputKind.DISTANCES: "Distances",
    OutputKind.LINEAR_REGRESSION: "Linear Regression",
}

Payload = Union[
    DescriptiveSolution,
    CorrelationSolution,
    DistanceSolution,
    LinearSolution,
    tuple[DescriptiveSolution, ...],
]


@dataclass(frozen=True)
class AnalysisOutput:
    """
    One tagged analysis result.

    Build with the per-kind constructors, which check the payload once;
    read with the matching as_*() accessor.
    """
    kind: OutputKind
    title: str
    payload: Payload

    # === Constructors ===

    @classmethod
    def descriptive(
        cls, solution: DescriptiveSolution, title: str | None = None
    ) -> AnalysisOutput:
        return cls._make(OutputKind.DESCRIPTIVE, solution, DescriptiveSolution, title)

    @classmethod
    def correlation(
        cls, solution: CorrelationSolution, title: str | None = None
    ) -> AnalysisOutput:
        if solution.is_partial:
            raise ValidationError(
                "Partial correlation results use AnalysisOutput.partial_correlation()"
            )
        return cls._make(OutputKind.CORRELATION, solution, CorrelationSolution, title)

    @classmethod
    def partial_correlation(
        cls, solution: CorrelationSolution, title: str | None = None
    ) -> AnalysisOutput:
        if not solution.is_partial:
            raise ValidationError(
                "partial_correlation() needs a result that has control variables"
            )
        return cls._make(
            OutputKind.PARTIAL_CORRELATION, solution, CorrelationSolution, title
        )

    @classmethod
    def distribution(
        cls, solutions: Sequence[DescriptiveSolution], title: str | None = None
    ) -> AnalysisOutput:
        """One distribution analysis per variable."""
        solutions = tuple(solutions)
        if not solutions:
            raise ValidationError("distribution() needs at least one result")
        for s in solutions:
            if not isinstance(s, DescriptiveSolution):
                raise ValidationError(
                    f"distribution() takes DescriptiveSolution items, got {type(s).__name__}"
                )
        return cls(
            kind=OutputKind.DISTRIBUTION,
            title=title or DEFAULT_TITLES[OutputKind.DISTRIBUTION],
            payload=solutions,
        )

    @classmethod
    def distances(
        cls, solution: DistanceSolution, title: str | None = None
    ) -> AnalysisOutput:
        return cls._make(OutputKind.DISTANCES, solution, DistanceSolution, title)

    @classmethod
    def linear_regression(
        cls, solution: LinearSolution, title: str | None = None
    ) -> AnalysisOutput:
        return cls._make(OutputKind.LINEAR_REGRESSION, solution, LinearSolution, title)

    @classmethod
    def _make(
        cls, kind: OutputKind, payload: Any, expected: type, title: str | None
    ) -> AnalysisOutput:
        if not isinstance(payload, expected):
            raise ValidationError(
                f"{kind.value} output needs a {expected.__name__}, "
                f"got {type(payload).__name__}"
            )
        return cls(kind=kind, title=title or DEFAULT_TITLES[kind], payload=payload)

    # === Accessors ===

    def _expect(self, *kinds: OutputKind) -> None:
        if self.kind not in kinds:
            wanted = " or ".join(k.name for k in kinds)
            raise ValidationError(f"Output is {self.kind.name}, not {wanted}")

    def as_descriptive(self) -> DescriptiveSolution:
        self._expect(OutputKind.DESCRIPTIVE)
        return self.payload

    def as_correlation(self) -> CorrelationSolution:
        """Ordinary or partial correlation result."""
        self._expect(OutputKind.CORRELATION, OutputKind.PARTIAL_CORRELATION)
        return self.payload

    def as_distribution(self) -> tuple[DescriptiveSolution, ...]:
        self._expect(OutputKind.DISTRIBUTION)
        return self.payload

    def as_distances(self) -> DistanceSolution:
        self._expect(OutputKind.DISTANCES)
        return self.payload

    def as_linear_regression(self) -> LinearSolution:
        self._expect(OutputKind.LINEAR_REGRESSION)
        return self.payload

    def summary(self) -> str:
        """Title line followed by the payload's own summary."""
        if self.kind is OutputKind.DISTRIBUTION:
            body = "\n\n".join(s.summary() for s in self.payload)
        else:
            body = self.payload.summary()
        return f"{self.title}\n\n{body}"
