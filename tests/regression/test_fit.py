"""
Tests for fit(): OLS coefficients, fit statistics and inference.
"""

import numpy as np
import pytest
from scipy import stats

from irisstats.regression import RegressionDesign, fit
from irisstats.core import DataSource
from irisstats.core.exceptions import (
    DimensionError,
    EmptyInputError,
    InsufficientDegreesOfFreedomError,
    SingularMatrixError,
    ValidationError,
)


class TestExactLine:

    def test_recovers_line(self, linear_data):
        x, y = linear_data
        result = fit(y, x)
        assert result.intercept == pytest.approx(3.0)
        assert result.coefficients[1] == pytest.approx(2.0)
        assert result.r_squared == pytest.approx(1.0)
        assert result.r == pytest.approx(1.0)
        np.testing.assert_allclose(result.residuals, 0.0, atol=1e-10)
        np.testing.assert_allclose(result.predicted, y, rtol=1e-12)

    def test_beta_of_single_predictor(self, linear_data):
        x, y = linear_data
        result = fit(y, x)
        assert result.betas[0] == 0.0
        assert result.betas[1] == pytest.approx(1.0)


class TestTextbookExample:
    """x = 1..5, y = [2, 4, 5, 4, 5]: b = 0.6, a = 2.2, R^2 = 0.6."""

    @pytest.fixture
    def result(self):
        return fit([2.0, 4.0, 5.0, 4.0, 5.0], [1.0, 2.0, 3.0, 4.0, 5.0])

    def test_coefficients(self, result):
        np.testing.assert_allclose(result.coefficients, [2.2, 0.6], rtol=1e-12)

    def test_sums_of_squares(self, result):
        assert result.ss_total == pytest.approx(6.0)
        assert result.ss_regression == pytest.approx(3.6)
        assert result.ss_residual == pytest.approx(2.4)
        assert result.df_residual == 3
        assert result.mse == pytest.approx(0.8)

    def test_fit_statistics(self, result):
        assert result.r_squared == pytest.approx(0.6)
        assert result.r == pytest.approx(np.sqrt(0.6))
        assert result.adjusted_r_squared == pytest.approx(1 - 0.4 * 4 / 3)
        assert result.std_error_estimate == pytest.approx(np.sqrt(0.8))

    def test_standard_errors(self, result):
        np.testing.assert_allclose(
            result.standard_errors, [np.sqrt(0.88), np.sqrt(0.08)], rtol=1e-10
        )

    def test_beta_equals_r_for_one_predictor(self, result):
        assert result.betas[1] == pytest.approx(result.r)


class TestInference:

    @pytest.fixture
    def noisy(self, rng):
        n = 60
        X = rng.standard_normal((n, 3))
        y = 1.5 + X @ np.array([0.8, -0.4, 0.0]) + rng.standard_normal(n)
        return X, y

    def test_coefficients_match_lstsq(self, noisy):
        X, y = noisy
        Xa = np.column_stack([np.ones(len(y)), X])
        expected = np.linalg.lstsq(Xa, y, rcond=None)[0]
        np.testing.assert_allclose(fit(y, X).coefficients, expected, rtol=1e-10)

    def test_standard_errors(self, noisy):
        X, y = noisy
        result = fit(y, X)
        Xa = np.column_stack([np.ones(len(y)), X])
        expected = np.sqrt(result.mse * np.diag(np.linalg.inv(Xa.T @ Xa)))
        np.testing.assert_allclose(result.standard_errors, expected, rtol=1e-10)

    def test_t_and_normal_p_values(self, noisy):
        X, y = noisy
        result = fit(y, X)
        np.testing.assert_allclose(
            result.t_statistics, result.coefficients / result.standard_errors
        )
        expected_p = 2.0 * stats.norm.sf(np.abs(result.t_statistics))
        np.testing.assert_allclose(result.p_values, expected_p, rtol=1e-8, atol=1e-14)
        assert np.all((result.p_values >= 0) & (result.p_values <= 1))

    def test_confidence_intervals(self, noisy):
        X, y = noisy
        result = fit(y, X)
        ci = result.confidence_intervals
        assert ci.shape == (4, 2)
        np.testing.assert_allclose(ci[:, 0], result.coefficients - 1.96 * result.standard_errors)
        np.testing.assert_allclose(ci[:, 1], result.coefficients + 1.96 * result.standard_errors)

    def test_betas(self, noisy):
        X, y = noisy
        result = fit(y, X)
        expected = result.coefficients[1:] * X.std(axis=0, ddof=1) / y.std(ddof=1)
        np.testing.assert_allclose(result.betas[1:], expected, rtol=1e-12)
        assert result.betas[0] == 0.0

    def test_decomposition(self, noisy):
        X, y = noisy
        result = fit(y, X)
        assert result.ss_regression + result.ss_residual == pytest.approx(result.ss_total)
        np.testing.assert_allclose(result.predicted + result.residuals, y)
        assert result.residuals.sum() == pytest.approx(0.0, abs=1e-10)
        assert 0.0 <= result.r_squared <= 1.0
        assert result.adjusted_r_squared <= result.r_squared

    def test_metadata(self, noisy):
        X, y = noisy
        result = fit(y, X)
        assert result.backend_name == 'cpu_qr'
        assert result.info['df_regression'] == 3
        assert result.info['inference'] == 'normal'
        assert result.rank == 4


class TestInputs:

    def test_predictor_columns_with_names(self, rng):
        a = rng.standard_normal(20)
        b = rng.standard_normal(20)
        y = a - b + rng.standard_normal(20)
        result = fit(y, [a, b], names=['hours', 'age'])
        assert result.names == ('(Constant)', 'hours', 'age')
        np.testing.assert_allclose(
            result.coefficients, fit(y, np.column_stack([a, b])).coefficients
        )

    def test_flat_list_is_one_predictor(self):
        result = fit([1.0, 2.0, 3.0, 4.0, 5.0], [2.0, 4.0, 5.0, 4.0, 5.0])
        assert result.names == ('(Constant)', 'x1')
        np.testing.assert_allclose(
            result.coefficients,
            fit(np.array([1.0, 2.0, 3.0, 4.0, 5.0]),
                np.array([2.0, 4.0, 5.0, 4.0, 5.0])).coefficients,
        )

    def test_flat_tuple_is_one_predictor(self):
        result = fit((1.0, 3.0, 2.0, 5.0), (1, 2, 3, 4))
        assert result.names == ('(Constant)', 'x1')
        assert result.coefficients.shape == (2,)

    def test_list_of_list_columns(self):
        result = fit(
            [1.0, 3.0, 2.0, 5.0, 4.0, 6.0],
            [[1.0, 2.0, 3.0, 4.0, 5.0, 6.0], [2.0, 1.0, 2.0, 1.0, 2.0, 1.0]],
        )
        assert result.names == ('(Constant)', 'x1', 'x2')

    def test_default_names(self, linear_data):
        x, y = linear_data
        assert fit(y, x).names == ('(Constant)', 'x1')

    def test_datasource_listwise(self, survey_source):
        result = fit('score', ['age', 'income'], data=survey_source)
        assert result.n == 5
        assert result.response == 'score'
        assert result.names == ('(Constant)', 'age', 'income')

    def test_design_passthrough(self, linear_data):
        x, y = linear_data
        design = RegressionDesign.from_arrays(y, x, response='w')
        assert fit(design).response == 'w'

    def test_design_rows_after_deletion(self, survey_source):
        design = RegressionDesign.from_datasource(survey_source, y='score', x=['age'])
        np.testing.assert_array_equal(design.rows, [0, 1, 2, 4, 5, 7])

    def test_data_form_needs_names(self, survey_source):
        with pytest.raises(ValidationError):
            fit([1.0, 2.0], data=survey_source)

    def test_missing_predictors(self):
        with pytest.raises(ValidationError):
            fit([1.0, 2.0, 3.0])


class TestFailures:

    def test_empty_response(self):
        with pytest.raises(EmptyInputError):
            fit([], [[]])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            fit([1.0, 2.0, 3.0, 4.0], [[1.0, 2.0, 3.0]])

    def test_length_mismatch_matrix(self):
        with pytest.raises(DimensionError):
            fit([1.0, 2.0, 3.0, 4.0], np.ones((3, 1)))

    def test_too_few_cases(self):
        with pytest.raises(InsufficientDegreesOfFreedomError) as exc_info:
            fit([1.0, 2.0, 3.0], np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]]))
        assert exc_info.value.n == 3
        assert exc_info.value.n_params == 3

    def test_collinear_predictors(self, collinear_predictors):
        X, y = collinear_predictors
        with pytest.raises(SingularMatrixError):
            fit(y, X)

    def test_constant_predictor_is_collinear_with_intercept(self):
        with pytest.raises(SingularMatrixError):
            fit([1.0, 2.0, 4.0, 3.0], [5.0, 5.0, 5.0, 5.0])

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            fit([1.0, 2.0, np.nan, 4.0], [1.0, 2.0, 3.0, 4.0])

    def test_constant_response_warns(self):
        with pytest.warns(RuntimeWarning, match="zero variance"):
            result = fit([3.0, 3.0, 3.0, 3.0], [1.0, 2.0, 3.0, 4.0])
        assert result.ss_total == 0.0
        assert result.r_squared in (0.0, 1.0)
        np.testing.assert_array_equal(result.betas, 0.0)
        assert any("zero variance" in w for w in result.warnings)


class TestSolution:

    def test_read_only(self, linear_data):
        x, y = linear_data
        result = fit(y, x)
        with pytest.raises(ValueError):
            result.coefficients[0] = 0.0

    def test_summary(self, survey_source):
        text = fit('score', ['age'], data=survey_source).summary()
        assert text.startswith("Linear Regression: score")
        assert "ANOVA" in text
        assert "(Constant)" in text
        assert "age" in text

    def test_repr(self, linear_data):
        x, y = linear_data
        assert repr(fit(y, x)).startswith("LinearSolution(n=6, k=1, ")
