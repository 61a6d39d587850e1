"""
Tests for midranks() and the critical-value table.
"""

import numpy as np
import pytest
from scipy import stats

from irisstats.correlation import (
    is_partial_significant,
    is_significant,
    midranks,
    t_critical_value,
)
from irisstats.core.exceptions import ValidationError
from irisstats.core.compute.tolerances import SIGNIFICANCE_ALPHA


class TestMidranks:

    def test_ties_get_average_rank(self):
        np.testing.assert_array_equal(midranks([10, 20, 20, 30]), [1.0, 2.5, 2.5, 4.0])

    def test_unsorted_input(self):
        np.testing.assert_array_equal(midranks([3.0, 1.0, 2.0]), [3.0, 1.0, 2.0])

    def test_all_tied(self):
        np.testing.assert_array_equal(midranks([5.0, 5.0, 5.0]), [2.0, 2.0, 2.0])

    def test_monotone_relabeling_invariant(self, rng):
        x = rng.standard_normal(30)
        np.testing.assert_array_equal(midranks(x), midranks(np.exp(x)))

    def test_rank_sum(self, rng):
        x = rng.integers(0, 5, size=40).astype(float)
        assert midranks(x).sum() == pytest.approx(40 * 41 / 2)

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            midranks([1.0, np.nan])


class TestCriticalValues:

    def test_exact_two_tailed(self):
        assert t_critical_value(1) == 12.706
        assert t_critical_value(3) == 3.182
        assert t_critical_value(10) == 2.228

    def test_exact_one_tailed(self):
        assert t_critical_value(1, 'one') == 6.314
        assert t_critical_value(10, 'one') == 1.812

    @pytest.mark.parametrize("df,expected", [
        (11, 2.201), (15, 2.201 - 4 * 0.027),
        (16, 2.120), (20, 2.120 - 4 * 0.018),
        (21, 2.086), (30, 2.086 - 9 * 0.010),
        (31, 2.042), (60, 2.042 - 29 * 0.006),
        (61, 2.000), (120, 2.000 - 59 * 0.003),
    ])
    def test_two_tailed_bands(self, df, expected):
        assert t_critical_value(df) == pytest.approx(expected)

    @pytest.mark.parametrize("df,expected", [
        (11, 1.796), (16, 1.746), (21, 1.721), (31, 1.697), (61, 1.671),
        (25, 1.721 - 4 * 0.008),
    ])
    def test_one_tailed_bands(self, df, expected):
        assert t_critical_value(df, 'one') == pytest.approx(expected)

    def test_normal_fallback_beyond_table(self):
        assert t_critical_value(121) == 1.96
        assert t_critical_value(5000, 'one') == 1.645

    def test_close_to_true_quantiles(self):
        """The table approximates the t quantiles it stands in for."""
        for df in (5, 12, 25):
            assert t_critical_value(df) == pytest.approx(
                stats.t.ppf(1 - SIGNIFICANCE_ALPHA / 2, df), abs=0.02
            )

    def test_df_below_one(self):
        with pytest.raises(ValueError):
            t_critical_value(0)


class TestIsSignificant:

    def test_perfect_correlation_always_significant(self):
        assert is_significant(1.0, 3)
        assert is_significant(-1.0, 2)

    def test_too_few_cases_never_significant(self):
        assert not is_significant(0.99, 2)

    def test_boundary_uses_table(self):
        # n = 5, df = 3, critical t = 3.182 -> critical r ~ 0.878
        assert is_significant(0.90, 5)
        assert not is_significant(0.85, 5)

    def test_one_tailed_is_more_lenient(self):
        # df = 3: one-tailed critical t = 2.353 -> critical r ~ 0.805
        assert is_significant(0.82, 5, 'one')
        assert not is_significant(0.82, 5, 'two')

    def test_partial_uses_fixed_196(self):
        # df = 10: t = 0.6 * sqrt(10 / 0.64) = 2.37
        assert is_partial_significant(0.6, 10)
        # t = 0.5 * sqrt(10 / 0.75) = 1.83
        assert not is_partial_significant(0.5, 10)

    def test_partial_degenerate(self):
        assert not is_partial_significant(0.9, 0)
        assert not is_partial_significant(1.0, 50)
        assert not is_partial_significant(float('nan'), 50)
