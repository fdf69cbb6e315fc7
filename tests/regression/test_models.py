"""
Tests for the shared model contract.

Covers get_parameters/set_parameters round trips for every model, state
handling on failure, idempotence, the model factory and the functional
fit() entry point.
"""

import json

import pytest
import numpy as np

import pyregressors
from pyregressors.core import Regressor
from pyregressors.core.exceptions import (
    DimensionError,
    NotTrainedError,
    SingularMatrixError,
    ValidationError,
)
from pyregressors.regression import (
    OLS,
    PLS,
    Lasso,
    Polynomial,
    Ridge,
    available_models,
    create_model,
    fit,
)


ALL_MODELS = [
    ('ols', {}),
    ('ridge', {'alpha': 0.5}),
    ('lasso', {'alpha': 0.05}),
    ('logistic', {'learning_rate': 0.1}),
    ('pls', {'n_components': 2, 'center': True}),
    ('polynomial', {'degree': 3}),
    ('exponential', {}),
    ('logarithmic', {}),
    ('power', {}),
]

SINGLE_FEATURE = {'polynomial', 'exponential', 'logarithmic', 'power'}


def make_data(name, rng):
    """Training data valid for the named model."""
    if name in SINGLE_FEATURE:
        x = np.linspace(0.5, 4.0, 30)
        y = 1.5 * x ** 1.2 * np.exp(0.05 * rng.standard_normal(30))
        return x.reshape(-1, 1), y
    X = rng.standard_normal((60, 3))
    if name == 'logistic':
        y = (X @ [1.0, -1.0, 0.5] + 0.3 * rng.standard_normal(60) > 0).astype(float)
        return X, y
    return X, 0.5 + X @ [1.0, -2.0, 0.5] + 0.1 * rng.standard_normal(60)


# ═══════════════════════════════════════════════════════════════════════
# Parameter round trip
# ═══════════════════════════════════════════════════════════════════════


class TestParameterRoundTrip:

    @pytest.mark.parametrize("name, kwargs", ALL_MODELS)
    def test_restored_model_predicts_identically(self, name, kwargs, rng):
        X, y = make_data(name, rng)
        model = create_model(name, **kwargs).fit(X, y)
        restored = create_model(name).set_parameters(model.get_parameters())
        assert restored.is_trained
        np.testing.assert_allclose(restored.predict(X), model.predict(X), rtol=1e-12, atol=1e-12)

    @pytest.mark.parametrize("name, kwargs", ALL_MODELS)
    def test_parameters_are_json_serializable(self, name, kwargs, rng):
        X, y = make_data(name, rng)
        params = create_model(name, **kwargs).fit(X, y).get_parameters()
        restored = create_model(name).set_parameters(json.loads(json.dumps(params)))
        assert restored.get_parameters() == params

    @pytest.mark.parametrize("name, kwargs", ALL_MODELS)
    def test_hyperparameters_restored(self, name, kwargs, rng):
        X, y = make_data(name, rng)
        params = create_model(name, **kwargs).fit(X, y).get_parameters()
        restored = create_model(name).set_parameters(params)
        for key, value in kwargs.items():
            assert getattr(restored, key) == value

    def test_restored_result_metadata(self, exact_linear_data):
        X, y = exact_linear_data
        restored = OLS().set_parameters(OLS().fit(X, y).get_parameters())
        assert restored.backend_name == 'restored'
        assert restored.info == {'method': 'restored'}
        assert restored.timing is None

    def test_linear_parameter_keys(self, exact_linear_data):
        X, y = exact_linear_data
        params = OLS().fit(X, y).get_parameters()
        assert params['model_type'] == 'OLS'
        assert params['intercept'] == pytest.approx(0.5)
        np.testing.assert_allclose(params['coefficients'], [1.5, 0.5])
        assert isinstance(params['coefficients'], list)

    def test_untrained_parameters_are_hyperparameters_only(self):
        assert Ridge(alpha=2.0).get_parameters() == {'model_type': 'Ridge', 'alpha': 2.0}
        assert OLS().get_parameters() == {'model_type': 'OLS'}


# ═══════════════════════════════════════════════════════════════════════
# set_parameters validation and atomicity
# ═══════════════════════════════════════════════════════════════════════


class TestSetParameters:

    @pytest.fixture
    def trained_ols(self, exact_linear_data):
        X, y = exact_linear_data
        return OLS().fit(X, y)

    def test_unknown_key_raises(self, trained_ols):
        before = trained_ols.get_parameters()
        with pytest.raises(ValidationError, match="unknown"):
            trained_ols.set_parameters({**before, 'slope': 1.0})
        assert trained_ols.get_parameters() == before

    def test_model_type_mismatch_raises(self, trained_ols):
        params = trained_ols.get_parameters()
        with pytest.raises(ValidationError, match="Ridge"):
            Ridge().set_parameters(params)

    def test_partial_learned_values_raise(self, trained_ols):
        before = trained_ols.get_parameters()
        with pytest.raises(ValidationError, match="missing"):
            trained_ols.set_parameters({'intercept': 1.0})
        assert trained_ols.get_parameters() == before

    def test_hyperparameters_only_untrains(self, simple_regression_data):
        X, y, _ = simple_regression_data
        model = Ridge(alpha=1.0).fit(X, y)
        model.set_parameters({'alpha': 3.0})
        assert model.alpha == 3.0
        assert not model.is_trained

    def test_invalid_hyperparameter_leaves_model_unchanged(self, simple_regression_data):
        X, y, _ = simple_regression_data
        model = Ridge(alpha=1.0).fit(X, y)
        before = model.get_parameters()
        with pytest.raises(ValidationError):
            model.set_parameters({**before, 'alpha': -1.0})
        assert model.get_parameters() == before

    def test_invalid_learned_shape_leaves_model_unchanged(self, rng):
        X, y = make_data('pls', rng)
        model = PLS(n_components=2, center=True).fit(X, y)
        before = model.get_parameters()
        broken = {**before, 'x_loadings': [[1.0, 2.0]]}
        with pytest.raises(DimensionError):
            model.set_parameters(broken)
        assert model.get_parameters() == before

    def test_polynomial_coefficient_count_must_match_degree(self):
        with pytest.raises(DimensionError):
            Polynomial(degree=2).set_parameters({'coefficients': [1.0, 2.0]})

    def test_non_numeric_learned_value_raises(self):
        with pytest.raises(ValidationError):
            OLS().set_parameters({'intercept': 'abc', 'coefficients': [1.0]})

    def test_restore_into_untrained_model(self):
        model = OLS().set_parameters({'intercept': 1.0, 'coefficients': [2.0, 3.0]})
        np.testing.assert_allclose(model.predict([[1.0, 1.0]]), [6.0])

    def test_returns_self(self):
        model = OLS()
        assert model.set_parameters({}) is model


# ═══════════════════════════════════════════════════════════════════════
# Training state
# ═══════════════════════════════════════════════════════════════════════


class TestTrainingState:

    @pytest.mark.parametrize("name, kwargs", ALL_MODELS)
    def test_predict_before_fit(self, name, kwargs):
        model = create_model(name, **kwargs)
        assert not model.is_trained
        with pytest.raises(NotTrainedError):
            model.predict([[1.0]])

    def test_metadata_before_fit(self):
        with pytest.raises(NotTrainedError):
            OLS().info

    def test_failed_fit_keeps_prior_state(self, exact_linear_data, collinear_data):
        X, y = exact_linear_data
        model = OLS().fit(X, y)
        before = model.get_parameters()
        with pytest.raises(SingularMatrixError):
            model.fit(*collinear_data)
        assert model.get_parameters() == before

    def test_failed_first_fit_stays_untrained(self, collinear_data):
        model = OLS()
        with pytest.raises(SingularMatrixError):
            model.fit(*collinear_data)
        assert not model.is_trained

    def test_refit_replaces_parameters(self, exact_linear_data, simple_regression_data):
        X, y, _ = simple_regression_data
        model = OLS().fit(*exact_linear_data)
        model.fit(X, y)
        assert model.coefficients.shape == (3,)

    @pytest.mark.parametrize("name, kwargs", ALL_MODELS)
    def test_fit_is_idempotent(self, name, kwargs, rng):
        X, y = make_data(name, rng)
        model = create_model(name, **kwargs)
        first = model.fit(X, y).get_parameters()
        second = model.fit(X, y).get_parameters()
        assert first == second

    @pytest.mark.parametrize("name, kwargs", ALL_MODELS)
    def test_conforms_to_regressor_protocol(self, name, kwargs):
        assert isinstance(create_model(name, **kwargs), Regressor)


# ═══════════════════════════════════════════════════════════════════════
# Factory and functional entry point
# ═══════════════════════════════════════════════════════════════════════


class TestFactory:

    def test_available_models(self):
        assert available_models() == [name for name, _ in ALL_MODELS]

    def test_case_insensitive(self):
        model = create_model('RIDGE', alpha=2.0)
        assert isinstance(model, Ridge)
        assert model.alpha == 2.0

    def test_unknown_name_lists_supported(self):
        with pytest.raises(ValueError, match="ols, ridge, lasso"):
            create_model('svm')

    def test_unknown_hyperparameter(self):
        with pytest.raises(TypeError):
            create_model('ols', alpha=1.0)

    def test_invalid_hyperparameter(self):
        with pytest.raises(ValidationError):
            create_model('lasso', alpha=-1.0)

    def test_repr(self):
        assert repr(OLS()) == 'OLS()'
        assert repr(create_model('ridge', alpha=0.5)) == 'Ridge(alpha=0.5)'


class TestFunctionalFit:

    def test_default_is_ols(self, exact_linear_data):
        X, y = exact_linear_data
        model = fit(X, y)
        assert isinstance(model, OLS)
        assert model.score(X, y) == pytest.approx(1.0)

    def test_with_hyperparameters(self, sparse_regression_data):
        X, y, _ = sparse_regression_data
        model = fit(X, y, model='lasso', alpha=0.5)
        assert isinstance(model, Lasso)
        assert model.is_trained
        assert model.alpha == 0.5

    def test_top_level_exports(self, exact_linear_data):
        X, y = exact_linear_data
        assert pyregressors.fit(X, y, model='ridge', alpha=0.0).is_trained
        assert pyregressors.__version__ == "0.1.0"
