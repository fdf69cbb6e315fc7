"""
Model dispatch for regression.

This module provides create_model() (name -> model) and fit(), the
one-call functional entry point.
"""

from typing import Any, Literal
from numpy.typing import ArrayLike

from pyregressors.regression.models import (
    OLS,
    PLS,
    Exponential,
    Lasso,
    Logarithmic,
    Logistic,
    Polynomial,
    Power,
    RegressionModel,
    Ridge,
)


# Type alias for model selection
ModelChoice = Literal[
    'ols', 'ridge', 'lasso', 'logistic', 'pls',
    'polynomial', 'exponential', 'logarithmic', 'power',
]

_MODELS: dict[str, type[RegressionModel]] = {
    'ols': OLS,
    'ridge': Ridge,
    'lasso': Lasso,
    'logistic': Logistic,
    'pls': PLS,
    'polynomial': Polynomial,
    'exponential': Exponential,
    'logarithmic': Logarithmic,
    'power': Power,
}


def available_models() -> list[str]:
    """Names accepted by create_model()."""
    return list(_MODELS)


def create_model(name: ModelChoice | str, **hyperparameters: Any) -> RegressionModel:
    """
    Instantiate an untrained model by name.

    Args:
        name: Model name, case-insensitive ('ols', 'ridge', ...)
        **hyperparameters: Passed to the model constructor

    Raises:
        ValueError: If the name is unknown
        ValidationError: If a hyperparameter value is invalid
        TypeError: If a hyperparameter is not accepted by the model

    Example:
        >>> model = create_model('Ridge', alpha=0.5)
        >>> model
        Ridge(alpha=0.5)
    """
    key = str(name).lower()
    if key not in _MODELS:
        raise ValueError(
            f"Unknown model: {name!r}. Supported models: {', '.join(_MODELS)}"
        )
    return _MODELS[key](**hyperparameters)


def fit(
    X: ArrayLike,
    y: ArrayLike,
    *,
    model: ModelChoice | str = 'ols',
    **hyperparameters: Any,
) -> RegressionModel:
    """
    Create and fit a model in one call.

    This is the primary functional API. All input validation, model
    construction and backend selection happens through the model.

    Args:
        X: Design matrix (n x p). Can be any array-like.
        y: Response vector (n,). Can be any array-like.
        model: Model name, see create_model()
        **hyperparameters: Passed to the model constructor

    Returns:
        The trained model

    Raises:
        ValueError: If the model name is unknown
        ValidationError: If inputs or hyperparameters are invalid
        DimensionError: If X and y have inconsistent dimensions
        NumericalError: If the linear system cannot be solved

    Example:
        >>> import numpy as np
        >>> from pyregressors.regression import fit
        >>>
        >>> X = np.random.default_rng(0).normal(size=(100, 2))
        >>> y = 1 + X @ [2, 3]
        >>> model = fit(X, y, model='ridge', alpha=0.0)
        >>> print(model.coefficients)
    """
    return create_model(model, **hyperparameters).fit(X, y)
