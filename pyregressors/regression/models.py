"""
Regression models.

Every model exposes the same contract (see core.protocols.Regressor):

    fit(X, y) -> self
    predict(X) -> ndarray
    score(X, y) -> float
    get_parameters() -> dict
    set_parameters(params) -> self

A model holds its hyperparameters (validated at construction) and, once
trained, the frozen Result produced by its backend. is_trained is derived
from the presence of that Result. fit and set_parameters build the new
state completely before assigning it, so a failure leaves the model
exactly as it was.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyregressors.core.result import Result
from pyregressors.core.exceptions import (
    DimensionError,
    NotTrainedError,
    ValidationError,
)
from pyregressors.core.validation import (
    check_array,
    check_2d,
    check_1d,
    check_int,
    check_n_features,
    check_non_negative_scalar,
    check_positive_scalar,
)
from pyregressors.core.compute.tolerances import (
    DEFAULT_ALPHA,
    DEFAULT_DEGREE,
    DEFAULT_LEARNING_RATE,
    DEFAULT_MAX_ITER,
    DEFAULT_N_COMPONENTS,
    DEFAULT_THRESHOLD,
    DEFAULT_TOL,
)
from pyregressors.core.compute.optimization import IterationCallback
from pyregressors.regression.design import Design, as_feature_matrix
from pyregressors.regression.solution import (
    CurveParams,
    LinearParams,
    PLSParams,
    PolynomialParams,
)
from pyregressors.regression.transforms import (
    EXPONENTIAL,
    LOGARITHMIC,
    POWER,
    CurveTransform,
    polynomial_features,
)
from pyregressors.regression.metrics import accuracy, r_squared
from pyregressors.regression._least_squares import predict_linear
from pyregressors.regression.backends import (
    CPUCholeskyBackend,
    CPUCoordinateDescentBackend,
    CPUGaussBackend,
    CPUGradientDescentBackend,
    CPUNIPALSBackend,
    CPUPolynomialBackend,
    CPUTransformedBackend,
)
from pyregressors.regression.backends.cpu_logistic import sigmoid
from pyregressors.regression.backends.cpu_pls import pls_rotations


# === Conversion of stored parameter values ===

def _scalar(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a real number, got {value!r}") from e


def _vector(value: Any, name: str, length: int | None = None) -> NDArray[np.floating[Any]]:
    arr = check_array(value, name)
    check_1d(arr, name)
    if arr.shape[0] == 0:
        raise DimensionError(f"{name}: must not be empty")
    if length is not None and arr.shape[0] != length:
        raise DimensionError(f"{name}: expected {length} values, got {arr.shape[0]}")
    return arr


def _matrix(value: Any, name: str, shape: tuple[int, int] | None = None) -> NDArray[np.floating[Any]]:
    arr = check_array(value, name)
    check_2d(arr, name)
    if arr.size == 0:
        raise DimensionError(f"{name}: must not be empty")
    if shape is not None and arr.shape != shape:
        raise DimensionError(f"{name}: expected shape {shape}, got {arr.shape}")
    return arr


class RegressionModel:
    """
    Shared plumbing for all models.

    Subclasses provide:
        model_type: Name used in messages and in get_parameters()
        _learned_keys: Keys of the learned values in get_parameters()
        _hyperparameters(): Constructor keyword arguments, by name
        _make_backend(callback): Backend that fits this model
        _predict(X, params): Predictions from validated X
        _n_features(params): Feature count expected at predict time
        _export(params) / _restore(values): Learned values <-> payload
    """

    model_type: str = 'Regression'
    _learned_keys: tuple[str, ...] = ()

    def __init__(self) -> None:
        self._result: Result[Any] | None = None

    def __repr__(self) -> str:
        args = ', '.join(f'{k}={v!r}' for k, v in self._hyperparameters().items())
        return f'{type(self).__name__}({args})'

    # === State ===

    @property
    def is_trained(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Result[Any]:
        """The Result of the last successful fit or restore."""
        return self._require_trained('access result')

    @property
    def info(self) -> dict[str, Any]:
        return self.result.info

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.result.warnings

    @property
    def timing(self) -> dict[str, float] | None:
        return self.result.timing

    @property
    def backend_name(self) -> str:
        return self.result.backend_name

    def _require_trained(self, operation: str) -> Result[Any]:
        if self._result is None:
            raise NotTrainedError(
                f"{self.model_type} model is not trained; call fit() before {operation}",
                model_type=self.model_type,
            )
        return self._result

    # === Operations ===

    def fit(self, X: ArrayLike, y: ArrayLike) -> RegressionModel:
        """
        Fit the model to X (n x p) and y (n,).

        Returns:
            self

        Raises:
            ValidationError: If inputs are not numeric
            DimensionError: If X is empty or X and y disagree in length
            NumericalError: If the underlying linear system cannot be solved
        """
        return self._fit(X, y)

    def _fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        callback: IterationCallback | None = None,
    ) -> RegressionModel:
        design = Design.from_arrays(X, y)
        self._check_design(design)
        result = self._make_backend(callback).solve(design)
        self._result = result
        return self

    def predict(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Predict targets for X.

        Raises:
            NotTrainedError: If the model has not been fitted
            DimensionError: If X has a different feature count than the
                training data
        """
        params = self._require_trained('predict').params
        X_arr = as_feature_matrix(X, 'X')
        check_n_features(X_arr, self._n_features(params), 'X')
        return self._predict(X_arr, params)

    def score(self, X: ArrayLike, y: ArrayLike) -> float:
        """Coefficient of determination R² of predict(X) against y."""
        return r_squared(y, self.predict(X))

    def get_parameters(self) -> dict[str, Any]:
        """
        Hyperparameters and, when trained, learned values.

        Values are plain Python floats, ints, bools and (nested) lists so
        the mapping can be serialized by any persistence layer.
        """
        params: dict[str, Any] = {'model_type': self.model_type}
        params.update(self._hyperparameters())
        if self._result is not None:
            params.update(self._export(self._result.params))
        return params

    def set_parameters(self, params: dict[str, Any]) -> RegressionModel:
        """
        Restore state from a get_parameters() mapping.

        Hyperparameter keys replace the current hyperparameters. If any
        learned key is given, all of them must be, and the model becomes
        trained with those values; otherwise the model becomes untrained.

        Raises:
            ValidationError: On unknown keys, a model_type mismatch, a
                partial set of learned values or invalid values. The model
                is left unchanged.
        """
        params = dict(params)
        model_type = params.pop('model_type', self.model_type)
        if model_type != self.model_type:
            raise ValidationError(
                f"parameters are for a {model_type} model, not {self.model_type}"
            )

        hyper = self._hyperparameters()
        unknown = set(params) - set(hyper) - set(self._learned_keys)
        if unknown:
            raise ValidationError(
                f"{self.model_type}: unknown parameter(s) {sorted(unknown)}"
            )

        hyper.update({k: v for k, v in params.items() if k in hyper})
        candidate = type(self)(**hyper)

        given = [k for k in self._learned_keys if k in params]
        if given:
            missing = [k for k in self._learned_keys if k not in params]
            if missing:
                raise ValidationError(
                    f"{self.model_type}: incomplete learned parameters, missing {missing}"
                )
            restored = candidate._restore({k: params[k] for k in self._learned_keys})
            candidate._result = Result(
                params=restored,
                info={'method': 'restored'},
                timing=None,
                backend_name='restored',
            )

        vars(self).update(vars(candidate))
        return self

    # === Subclass hooks ===

    def _hyperparameters(self) -> dict[str, Any]:
        return {}

    def _check_design(self, design: Design) -> None:
        pass

    def _make_backend(self, callback: IterationCallback | None):
        raise NotImplementedError

    def _n_features(self, params: Any) -> int:
        return params.n_features

    def _predict(self, X: NDArray[np.floating[Any]], params: Any) -> NDArray[np.floating[Any]]:
        raise NotImplementedError

    def _export(self, params: Any) -> dict[str, Any]:
        raise NotImplementedError

    def _restore(self, values: dict[str, Any]) -> Any:
        raise NotImplementedError


# =====================================================================
# Linear models
# =====================================================================

class _LinearModel(RegressionModel):
    """Models whose payload is LinearParams."""

    _learned_keys = ('intercept', 'coefficients')

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self.result.params.coefficients

    @property
    def intercept(self) -> float:
        return self.result.params.intercept

    def _predict(self, X, params: LinearParams):
        return predict_linear(X, params.coefficients, params.intercept)

    def _export(self, params: LinearParams) -> dict[str, Any]:
        return {
            'intercept': float(params.intercept),
            'coefficients': params.coefficients.tolist(),
        }

    def _restore(self, values: dict[str, Any]) -> LinearParams:
        return LinearParams(
            coefficients=_vector(values['coefficients'], 'coefficients'),
            intercept=_scalar(values['intercept'], 'intercept'),
        )


class OLS(_LinearModel):
    """
    Ordinary least squares.

    Solves the normal equations (X₁'X₁) β = X₁'y, X₁ = [1 | X], by
    Gaussian elimination with partial pivoting.

    Example:
        >>> model = OLS().fit([[1, 2], [2, 1], [3, 4], [4, 3], [5, 6]], [3, 4, 7, 8, 11])
        >>> model.score([[1, 2], [2, 1], [3, 4], [4, 3], [5, 6]], [3, 4, 7, 8, 11])
        1.0
    """

    model_type = 'OLS'

    def _make_backend(self, callback):
        return CPUGaussBackend()


class Ridge(_LinearModel):
    """L2-regularized least squares; alpha=0 reproduces OLS."""

    model_type = 'Ridge'

    def __init__(self, alpha: float = DEFAULT_ALPHA):
        super().__init__()
        self.alpha = check_non_negative_scalar(alpha, 'alpha')

    def _hyperparameters(self) -> dict[str, Any]:
        return {'alpha': self.alpha}

    def _make_backend(self, callback):
        return CPUCholeskyBackend(self.alpha)


class Lasso(_LinearModel):
    """
    L1-regularized least squares by cyclic coordinate descent.

    Reaching max_iter without convergence is not an error: the fitted
    coefficients are kept, info['converged'] is False and a warning is
    recorded.
    """

    model_type = 'Lasso'

    def __init__(
        self,
        alpha: float = DEFAULT_ALPHA,
        max_iter: int = DEFAULT_MAX_ITER,
        tol: float = DEFAULT_TOL,
    ):
        super().__init__()
        self.alpha = check_non_negative_scalar(alpha, 'alpha')
        self.max_iter = check_int(max_iter, 'max_iter', 1)
        self.tol = check_non_negative_scalar(tol, 'tol')

    def _hyperparameters(self) -> dict[str, Any]:
        return {'alpha': self.alpha, 'max_iter': self.max_iter, 'tol': self.tol}

    def fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        *,
        callback: IterationCallback | None = None,
    ) -> Lasso:
        """
        Fit by coordinate descent.

        Args:
            callback: Optional callback(iteration, max_change) called after
                every pass; returning True stops the descent early
        """
        return self._fit(X, y, callback)

    def _make_backend(self, callback):
        return CPUCoordinateDescentBackend(self.alpha, self.max_iter, self.tol, callback)


class Logistic(_LinearModel):
    """
    Binary logistic regression by batch gradient descent.

    predict returns probabilities; predict_class thresholds them. score is
    classification accuracy, not R².
    """

    model_type = 'Logistic'

    def __init__(
        self,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        max_iter: int = DEFAULT_MAX_ITER,
        tol: float = DEFAULT_TOL,
    ):
        super().__init__()
        self.learning_rate = check_positive_scalar(learning_rate, 'learning_rate')
        self.max_iter = check_int(max_iter, 'max_iter', 1)
        self.tol = check_non_negative_scalar(tol, 'tol')

    def _hyperparameters(self) -> dict[str, Any]:
        return {
            'learning_rate': self.learning_rate,
            'max_iter': self.max_iter,
            'tol': self.tol,
        }

    def fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        *,
        callback: IterationCallback | None = None,
    ) -> Logistic:
        """
        Fit by gradient descent on labels y in {0, 1}.

        Args:
            callback: Optional callback(iteration, max_change) called after
                every step; returning True stops the descent early
        """
        return self._fit(X, y, callback)

    def _make_backend(self, callback):
        return CPUGradientDescentBackend(
            self.learning_rate, self.max_iter, self.tol, callback
        )

    def _predict(self, X, params: LinearParams):
        return sigmoid(predict_linear(X, params.coefficients, params.intercept))

    def predict_class(
        self,
        X: ArrayLike,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> NDArray[np.floating[Any]]:
        """Labels 1.0 where the probability is >= threshold, else 0.0."""
        return (self.predict(X) >= threshold).astype(np.float64)

    def score(self, X: ArrayLike, y: ArrayLike) -> float:
        """Accuracy of predict_class(X) against y."""
        return accuracy(y, self.predict_class(X))


# =====================================================================
# Partial least squares
# =====================================================================

class PLS(RegressionModel):
    """
    Partial least squares regression (single response) via NIPALS.

    With center=False (the default) the data are used as given and no
    intercept is fitted, so X and y should already be mean-centered; a
    warning is recorded when they are not. With center=True the means
    are removed in fit and restored in predict.
    """

    model_type = 'PLS'
    _learned_keys = (
        'x_weights', 'y_weights', 'x_loadings', 'y_loadings', 'x_mean', 'y_mean',
    )

    def __init__(self, n_components: int = DEFAULT_N_COMPONENTS, center: bool = False):
        super().__init__()
        self.n_components = check_int(n_components, 'n_components', 1)
        if not isinstance(center, (bool, np.bool_)):
            raise ValidationError(f"center: expected a bool, got {center!r}")
        self.center = bool(center)

    def _hyperparameters(self) -> dict[str, Any]:
        return {'n_components': self.n_components, 'center': self.center}

    def fit(
        self,
        X: ArrayLike,
        y: ArrayLike,
        *,
        callback: IterationCallback | None = None,
    ) -> PLS:
        """
        Extract n_components latent components.

        Args:
            callback: Optional callback(component, inner_change) called
                after every component but the last; returning True keeps
                the components extracted so far and stops
        """
        return self._fit(X, y, callback)

    def _check_design(self, design: Design) -> None:
        if self.n_components > design.p:
            raise ValidationError(
                f"n_components={self.n_components} exceeds the number of "
                f"features ({design.p})"
            )

    def _make_backend(self, callback):
        return CPUNIPALSBackend(self.n_components, self.center, callback)

    def transform(self, X: ArrayLike) -> NDArray[np.floating[Any]]:
        """Project X onto the latent components (n x k scores)."""
        params: PLSParams = self._require_trained('transform').params
        X_arr = as_feature_matrix(X, 'X')
        check_n_features(X_arr, params.n_features, 'X')
        return (X_arr - params.x_mean) @ params.x_rotations

    def _predict(self, X, params: PLSParams):
        scores = (X - params.x_mean) @ params.x_rotations
        return scores @ params.y_loadings[0] + params.y_mean

    def _export(self, params: PLSParams) -> dict[str, Any]:
        return {
            'x_weights': params.x_weights.tolist(),
            'y_weights': params.y_weights.tolist(),
            'x_loadings': params.x_loadings.tolist(),
            'y_loadings': params.y_loadings.tolist(),
            'x_mean': params.x_mean.tolist(),
            'y_mean': float(params.y_mean),
        }

    def _restore(self, values: dict[str, Any]) -> PLSParams:
        W = _matrix(values['x_weights'], 'x_weights')
        p, k = W.shape
        if k > self.n_components:
            raise ValidationError(
                f"x_weights has {k} components, more than n_components={self.n_components}"
            )
        P = _matrix(values['x_loadings'], 'x_loadings', (p, k))
        return PLSParams(
            x_weights=W,
            y_weights=_matrix(values['y_weights'], 'y_weights', (1, k)),
            x_loadings=P,
            y_loadings=_matrix(values['y_loadings'], 'y_loadings', (1, k)),
            x_rotations=pls_rotations(W, P),
            x_mean=_vector(values['x_mean'], 'x_mean', p),
            y_mean=_scalar(values['y_mean'], 'y_mean'),
        )


# =====================================================================
# Single-feature nonlinear models
# =====================================================================

class _SingleFeatureModel(RegressionModel):

    def _check_design(self, design: Design) -> None:
        if design.p != 1:
            raise DimensionError(
                f"{self.model_type} regression requires single-column input, "
                f"got {design.p} columns"
            )

    def _n_features(self, params: Any) -> int:
        return 1


class Polynomial(_SingleFeatureModel):
    """y = c_0 + c_1 x + ... + c_d x^d by least squares."""

    model_type = 'Polynomial'
    _learned_keys = ('coefficients',)

    def __init__(self, degree: int = DEFAULT_DEGREE):
        super().__init__()
        self.degree = check_int(degree, 'degree', 0)

    def _hyperparameters(self) -> dict[str, Any]:
        return {'degree': self.degree}

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self.result.params.coefficients

    def _make_backend(self, callback):
        return CPUPolynomialBackend(self.degree)

    def _predict(self, X, params: PolynomialParams):
        return polynomial_features(X[:, 0], params.degree) @ params.coefficients

    def _export(self, params: PolynomialParams) -> dict[str, Any]:
        return {'coefficients': params.coefficients.tolist()}

    def _restore(self, values: dict[str, Any]) -> PolynomialParams:
        return PolynomialParams(
            coefficients=_vector(values['coefficients'], 'coefficients', self.degree + 1)
        )


class _CurveModel(_SingleFeatureModel):
    """Two-parameter curve fitted on linearized data."""

    _transform: CurveTransform
    _learned_keys = ('a', 'b')

    @property
    def a(self) -> float:
        return self.result.params.a

    @property
    def b(self) -> float:
        return self.result.params.b

    def _make_backend(self, callback):
        return CPUTransformedBackend(self._transform)

    def _predict(self, X, params: CurveParams):
        x = X[:, 0]
        self._transform.check_x(x)
        return self._transform.evaluate(x, params)

    def _export(self, params: CurveParams) -> dict[str, Any]:
        return {'a': float(params.a), 'b': float(params.b)}

    def _restore(self, values: dict[str, Any]) -> CurveParams:
        return CurveParams(a=_scalar(values['a'], 'a'), b=_scalar(values['b'], 'b'))


class Exponential(_CurveModel):
    """y = a exp(b x), fitted as ln y = ln a + b x. Requires y > 0."""

    model_type = 'Exponential'
    _transform = EXPONENTIAL


class Logarithmic(_CurveModel):
    """y = a ln x + b. Requires x > 0."""

    model_type = 'Logarithmic'
    _transform = LOGARITHMIC


class Power(_CurveModel):
    """y = a x^b, fitted as ln y = ln a + b ln x. Requires x > 0 and y > 0."""

    model_type = 'Power'
    _transform = POWER
