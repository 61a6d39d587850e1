"""
Tests for the tagged AnalysisOutput union.
"""

import numpy as np
import pytest

from irisstats.correlation import cor, partial_cor
from irisstats.descriptive import describe, distribution
from irisstats.distance import distances
from irisstats.regression import fit
from irisstats.output import DEFAULT_TITLES, AnalysisOutput, OutputKind
from irisstats.core.exceptions import ValidationError


@pytest.fixture
def columns(rng):
    return {name: rng.standard_normal(30) for name in 'xyz'}


class TestConstruction:

    def test_descriptive(self):
        out = AnalysisOutput.descriptive(describe([1.0, 2.0, 3.0]))
        assert out.kind is OutputKind.DESCRIPTIVE
        assert out.title == "Descriptive Statistics"
        assert out.as_descriptive().mean == 2.0

    def test_correlation(self, columns):
        out = AnalysisOutput.correlation(cor(columns))
        assert out.kind is OutputKind.CORRELATION
        assert out.as_correlation().matrix.shape == (3, 3)

    def test_partial_correlation(self, columns):
        out = AnalysisOutput.partial_correlation(partial_cor(columns, ['x', 'y'], ['z']))
        assert out.kind is OutputKind.PARTIAL_CORRELATION
        assert out.as_correlation().controls == ('z',)

    def test_distribution(self):
        results = [distribution([1.0, 2.0, 3.0]), distribution([4.0, 5.0, 9.0])]
        out = AnalysisOutput.distribution(results)
        assert out.kind is OutputKind.DISTRIBUTION
        assert len(out.as_distribution()) == 2

    def test_distances(self):
        out = AnalysisOutput.distances(distances(np.eye(3)))
        assert out.kind is OutputKind.DISTANCES
        assert out.as_distances().n == 3

    def test_linear_regression(self, linear_data):
        x, y = linear_data
        out = AnalysisOutput.linear_regression(fit(y, x), title="Model 1")
        assert out.kind is OutputKind.LINEAR_REGRESSION
        assert out.title == "Model 1"
        assert out.as_linear_regression().coefficients[1] == pytest.approx(2.0)

    def test_every_kind_has_a_title(self):
        assert set(DEFAULT_TITLES) == set(OutputKind)

    def test_frozen(self):
        out = AnalysisOutput.descriptive(describe([1.0]))
        with pytest.raises(AttributeError):
            out.title = "other"


class TestTagChecks:

    def test_wrong_payload_type(self):
        with pytest.raises(ValidationError):
            AnalysisOutput.linear_regression(describe([1.0, 2.0]))

    def test_partial_result_is_not_a_correlation(self, columns):
        with pytest.raises(ValidationError):
            AnalysisOutput.correlation(partial_cor(columns, ['x', 'y'], ['z']))

    def test_plain_result_is_not_partial(self, columns):
        with pytest.raises(ValidationError):
            AnalysisOutput.partial_correlation(cor(columns))

    def test_empty_distribution(self):
        with pytest.raises(ValidationError):
            AnalysisOutput.distribution([])

    def test_distribution_items_checked(self, columns):
        with pytest.raises(ValidationError):
            AnalysisOutput.distribution([cor(columns)])

    def test_accessor_kind_mismatch(self):
        out = AnalysisOutput.descriptive(describe([1.0, 2.0]))
        with pytest.raises(ValidationError, match="DESCRIPTIVE"):
            out.as_distances()


class TestSummary:

    def test_title_first(self, columns):
        text = AnalysisOutput.correlation(cor(columns), title="Table 2").summary()
        assert text.startswith("Table 2\n\n")
        assert "Correlations (Pearson" in text

    def test_distribution_concatenates(self):
        out = AnalysisOutput.distribution([
            distribution([1.0, 2.0, 3.0], name='a'),
            distribution([4.0, 5.0, 9.0], name='b'),
        ])
        assert out.summary().count("Percentiles:") == 2
