"""
Regression models.

Linear: OLS, Ridge, Lasso, Logistic, PLS.
Single-feature nonlinear: Polynomial, Exponential, Logarithmic, Power.

Public API:
    OLS(), Ridge(alpha), ...     model classes with fit/predict/score
    create_model(name, **hp)     model by name
    fit(X, y, model=..., **hp)   create and fit in one call

Example:
    >>> from pyregressors.regression import fit
    >>> model = fit(X, y, model='lasso', alpha=0.1)
    >>> model.predict(X_new)
    >>> model.get_parameters()
"""

from pyregressors.regression.design import Design
from pyregressors.regression.solution import (
    CurveParams,
    LinearParams,
    PLSParams,
    PolynomialParams,
)
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
from pyregressors.regression.metrics import (
    accuracy,
    evaluate,
    mae,
    mse,
    r2_score,
    r_squared,
    rmse,
)
from pyregressors.regression.solvers import available_models, create_model, fit

__all__ = [
    # Entry points
    "fit",
    "create_model",
    "available_models",
    # Models
    "RegressionModel",
    "OLS",
    "Ridge",
    "Lasso",
    "Logistic",
    "PLS",
    "Polynomial",
    "Exponential",
    "Logarithmic",
    "Power",
    # Data
    "Design",
    "LinearParams",
    "PLSParams",
    "PolynomialParams",
    "CurveParams",
    # Metrics
    "r_squared",
    "r2_score",
    "mse",
    "rmse",
    "mae",
    "accuracy",
    "evaluate",
]
