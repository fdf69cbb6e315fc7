"""
Tests for ordinary least squares.

Tests the complete pipeline: Design construction, backend, and the
model's predict/score.
"""

import pytest
import numpy as np

from pyregressors.regression import OLS, Design
from pyregressors.core.exceptions import (
    DimensionError,
    NotTrainedError,
    NumericalError,
    SingularMatrixError,
    ValidationError,
)


class TestOLSBasic:

    def test_exact_linear_fit(self, exact_linear_data):
        X, y = exact_linear_data
        model = OLS().fit(X, y)
        np.testing.assert_allclose(model.coefficients, [1.5, 0.5], atol=1e-10)
        assert model.intercept == pytest.approx(0.5, abs=1e-10)
        np.testing.assert_allclose(model.predict(X), y, atol=1e-10)
        assert model.score(X, y) == pytest.approx(1.0, abs=1e-12)

    def test_fit_returns_self(self, exact_linear_data):
        X, y = exact_linear_data
        model = OLS()
        assert model.fit(X, y) is model

    def test_matches_numpy_lstsq(self, simple_regression_data):
        X, y, _ = simple_regression_data
        model = OLS().fit(X, y)
        X1 = np.column_stack([np.ones(len(y)), X])
        expected, *_ = np.linalg.lstsq(X1, y, rcond=None)
        np.testing.assert_allclose(model.intercept, expected[0], rtol=1e-8)
        np.testing.assert_allclose(model.coefficients, expected[1:], rtol=1e-8)

    def test_coefficients_close_to_truth(self, simple_regression_data):
        X, y, beta_true = simple_regression_data
        model = OLS().fit(X, y)
        np.testing.assert_allclose(model.coefficients, beta_true, atol=0.1)

    def test_r_squared_range(self, simple_regression_data):
        X, y, _ = simple_regression_data
        score = OLS().fit(X, y).score(X, y)
        assert 0.0 <= score <= 1.0

    def test_residuals_sum_to_near_zero(self, simple_regression_data):
        X, y, _ = simple_regression_data
        model = OLS().fit(X, y)
        assert abs((y - model.predict(X)).sum()) < 1e-8

    def test_one_dimensional_x_is_single_feature(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        model = OLS().fit(x, 2 * x + 1)
        np.testing.assert_allclose(model.coefficients, [2.0], atol=1e-10)
        np.testing.assert_allclose(model.predict([5.0]), [11.0], atol=1e-10)

    def test_column_vector_y_accepted(self, exact_linear_data):
        X, y = exact_linear_data
        model = OLS().fit(X, y.reshape(-1, 1))
        assert model.coefficients.shape == (2,)

    def test_result_metadata(self, exact_linear_data):
        X, y = exact_linear_data
        model = OLS().fit(X, y)
        assert model.backend_name == 'cpu_gauss'
        assert model.info['method'] == 'normal_equations'
        assert 'total_seconds' in model.timing
        assert model.warnings == ()

    def test_caller_arrays_not_modified(self, simple_regression_data):
        X, y, _ = simple_regression_data
        X_copy, y_copy = X.copy(), y.copy()
        OLS().fit(X, y)
        np.testing.assert_array_equal(X, X_copy)
        np.testing.assert_array_equal(y, y_copy)


class TestOLSErrors:

    def test_collinear_raises(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularMatrixError):
            OLS().fit(X, y)

    def test_collinear_is_numerical_error(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(NumericalError):
            OLS().fit(X, y)

    def test_empty_matrix_raises(self):
        with pytest.raises(DimensionError):
            OLS().fit(np.empty((0, 2)), np.empty(0))

    def test_no_columns_raises(self):
        with pytest.raises(DimensionError):
            OLS().fit([[], []], [1.0, 2.0])

    def test_length_mismatch_raises(self, exact_linear_data):
        X, y = exact_linear_data
        with pytest.raises(DimensionError, match="Row counts differ"):
            OLS().fit(X, y[:-1])

    def test_two_dimensional_y_raises(self, exact_linear_data):
        X, _ = exact_linear_data
        with pytest.raises(DimensionError):
            OLS().fit(X, np.ones((5, 2)))

    def test_non_numeric_raises(self):
        with pytest.raises(ValidationError):
            OLS().fit([["a", "b"], ["c", "d"]], [1.0, 2.0])

    def test_predict_before_fit(self):
        with pytest.raises(NotTrainedError) as exc_info:
            OLS().predict([[1.0, 2.0]])
        assert exc_info.value.model_type == 'OLS'

    def test_score_before_fit(self):
        with pytest.raises(NotTrainedError):
            OLS().score([[1.0, 2.0]], [1.0])

    def test_predict_feature_count_mismatch(self, exact_linear_data):
        X, y = exact_linear_data
        model = OLS().fit(X, y)
        with pytest.raises(DimensionError, match="model expects 2"):
            model.predict(np.ones((3, 3)))


class TestDesign:

    def test_from_arrays(self, exact_linear_data):
        X, y = exact_linear_data
        design = Design.from_arrays(X, y)
        assert design.n == 5
        assert design.p == 2
        np.testing.assert_array_equal(design.x, X[:, 0])

    def test_design_owns_its_arrays(self, exact_linear_data):
        X, y = exact_linear_data
        design = Design.from_arrays(X, y)
        assert not np.shares_memory(design.X, X)
        assert not np.shares_memory(design.y, y)
