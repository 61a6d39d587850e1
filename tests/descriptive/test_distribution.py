"""
Tests for percentiles(), frequencies(), distribution(), z_scores()
and standardize().
"""

import numpy as np
import pytest

from irisstats.descriptive import (
    distribution,
    frequencies,
    percentiles,
    standardize,
    z_scores,
)
from irisstats.descriptive.solvers import DEFAULT_PERCENTILES
from irisstats.core.compute.tolerances import BIN_EDGE_EPSILON
from irisstats.core.exceptions import EmptyInputError, ValidationError


class TestPercentiles:

    def test_interpolation(self):
        result = percentiles([1.0, 2.0, 3.0, 4.0], [0.5, 0.25, 0.9])
        # ranks (n-1)p = 1.5, 0.75, 2.7
        np.testing.assert_allclose(result.percentiles, [2.5, 1.75, 3.7])

    def test_keeps_caller_order(self):
        result = percentiles([5.0, 1.0, 3.0], [0.9, 0.1])
        np.testing.assert_array_equal(result.percentile_probs, [0.9, 0.1])
        assert result.percentiles[0] > result.percentiles[1]

    def test_out_of_range_probs_are_clamped(self):
        result = percentiles([1.0, 2.0, 3.0], [-0.5, 1.5])
        np.testing.assert_array_equal(result.percentiles, [1.0, 3.0])
        np.testing.assert_array_equal(result.percentile_probs, [-0.5, 1.5])

    def test_default_probs(self, rng):
        x = rng.standard_normal(101)
        result = percentiles(x)
        np.testing.assert_allclose(
            result.percentiles,
            np.percentile(x, np.array(DEFAULT_PERCENTILES) * 100),
            rtol=1e-12,
        )

    def test_percentile_dict(self):
        result = percentiles([0.0, 10.0], [0.5])
        assert result.percentile_dict() == {0.5: 5.0}

    def test_scalar_prob(self):
        assert percentiles([0.0, 10.0], 0.3).percentiles[0] == pytest.approx(3.0)

    def test_empty_probs(self):
        with pytest.raises(ValidationError):
            percentiles([1.0, 2.0], [])

    def test_nan_prob(self):
        with pytest.raises(ValidationError):
            percentiles([1.0, 2.0], [np.nan])

    def test_empty_sample(self):
        with pytest.raises(EmptyInputError):
            percentiles([], [0.5])


class TestFrequencies:

    def test_equal_width_bins(self):
        table = frequencies([1.0, 2.0, 3.0, 4.0, 5.0], bins=2).frequencies
        np.testing.assert_array_equal(table.counts, [2, 3])
        assert table.bins == 2
        np.testing.assert_allclose(table.edges[:2], [1.0, 3.0])

    def test_last_edge_nudged_past_max(self):
        table = frequencies([0.0, 10.0], bins=4).frequencies
        assert table.edges[-1] == pytest.approx(10.0 + 10.0 * BIN_EDGE_EPSILON)
        assert table.edges[-1] > 10.0

    def test_max_lands_in_last_bin(self):
        table = frequencies([0.0, 1.0, 2.0, 10.0], bins=5).frequencies
        assert table.counts[-1] == 1

    def test_counts_sum_to_n(self, rng):
        x = rng.standard_normal(250)
        table = frequencies(x, bins=12).frequencies
        assert table.counts.sum() == 250
        assert len(table.edges) == 13

    def test_value_on_inner_edge_goes_up(self):
        table = frequencies([0.0, 5.0, 10.0], bins=2).frequencies
        np.testing.assert_array_equal(table.counts, [1, 2])

    def test_constant_sample_single_bin(self):
        table = frequencies([2.0, 2.0, 2.0], bins=5).frequencies
        np.testing.assert_array_equal(table.counts, [3])
        np.testing.assert_array_equal(table.edges, [2.0, 2.0])

    @pytest.mark.parametrize("bins", [0, -3, 2.5, True])
    def test_invalid_bins(self, bins):
        with pytest.raises(ValidationError):
            frequencies([1.0, 2.0], bins=bins)


class TestDistribution:

    def test_outliers_by_z(self):
        x = [0.0] * 19 + [100.0]
        result = distribution(x)
        assert len(result.outliers) == 1
        outlier = result.outliers[0]
        assert outlier.index == 19
        assert outlier.value == 100.0
        # population sd: sqrt(9500 / 20)
        assert outlier.z == pytest.approx(95.0 / np.sqrt(475.0))

    def test_no_outliers_in_small_sample(self):
        assert distribution([1.0, 2.0, 3.0, 4.0]).outliers == ()

    def test_single_spike_among_ten_zeros(self):
        result = distribution([0.0] * 10 + [1.0])
        assert [o.index for o in result.outliers] == [10]
        assert result.outliers[0].z == pytest.approx(np.sqrt(10.0))

    def test_outliers_disabled(self):
        assert distribution([1.0, 2.0, 3.0], outliers=False).outliers is None

    def test_optional_frequencies(self):
        assert distribution([1.0, 2.0, 3.0]).frequencies is None
        assert distribution([1.0, 2.0, 3.0], bins=3).frequencies.bins == 3

    def test_constant_sample_warns(self):
        result = distribution([5.0, 5.0, 5.0])
        assert result.outliers == ()
        assert any("z-scores are all zero" in w for w in result.warnings)

    def test_summary_lists_sections(self):
        text = distribution([0.0] * 19 + [100.0], bins=2).summary()
        assert "Percentiles:" in text
        assert "Frequencies:" in text
        assert "case 20" in text


class TestZScores:

    def test_values(self):
        z = z_scores([1.0, 2.0, 3.0, 4.0, 5.0])
        np.testing.assert_allclose(z, np.array([-2.0, -1.0, 0.0, 1.0, 2.0]) / np.sqrt(2.0))

    def test_mean_zero_sd_one(self, rng):
        z = z_scores(rng.normal(10.0, 3.0, size=100))
        assert np.mean(z) == pytest.approx(0.0, abs=1e-12)
        assert np.std(z) == pytest.approx(1.0)

    def test_constant_gives_zeros(self):
        np.testing.assert_array_equal(z_scores([3.0, 3.0]), [0.0, 0.0])

    def test_single_value_gives_zero(self):
        np.testing.assert_array_equal(z_scores([3.0]), [0.0])


class TestStandardize:

    def test_zscore_default(self):
        np.testing.assert_allclose(
            standardize([1.0, 2.0, 3.0]), [-np.sqrt(1.5), 0.0, np.sqrt(1.5)]
        )

    def test_minmax(self):
        np.testing.assert_allclose(
            standardize([2.0, 4.0, 6.0, 10.0], method='minmax'), [0.0, 0.25, 0.5, 1.0]
        )

    def test_minmax_constant(self):
        np.testing.assert_array_equal(standardize([7.0, 7.0], method='minmax'), [0.0, 0.0])

    def test_unknown_method(self):
        with pytest.raises(ValidationError):
            standardize([1.0, 2.0], method='robust')
