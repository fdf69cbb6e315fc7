"""
Least-squares engine.

Builds the design matrix (optionally with an intercept column), forms the
normal equations X'X β = X'y and hands them to the elimination kernel.
OLS uses it directly; every nonlinear model uses it after transforming
its inputs.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyregressors.core.compute.linalg import gauss_solve


def add_intercept(X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Prepend a column of ones: [1 | X]."""
    return np.column_stack([np.ones(X.shape[0], dtype=np.float64), X])


def normal_equations(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Return (X'X, X'y)."""
    return X.T @ X, X.T @ y


def fit_least_squares(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    with_intercept: bool,
) -> tuple[NDArray[np.floating[Any]], float]:
    """
    Minimize ||y - Xβ - β₀||² through the normal equations.

    Args:
        X: Design matrix (n x p), already validated
        y: Response (n,)
        with_intercept: Prepend a constant column and return its
            coefficient separately

    Returns:
        (coefficients (p,), intercept). intercept is 0.0 when
        with_intercept is False.

    Raises:
        SingularMatrixError: If X'X is singular (collinear features)
    """
    X_full = add_intercept(X) if with_intercept else X
    XtX, Xty = normal_equations(X_full, y)
    beta = gauss_solve(XtX, Xty, matrix_name="X'X")

    if with_intercept:
        return beta[1:], float(beta[0])
    return beta, 0.0


def predict_linear(
    X: NDArray[np.floating[Any]],
    coefficients: NDArray[np.floating[Any]],
    intercept: float = 0.0,
) -> NDArray[np.floating[Any]]:
    """Dense linear predictor X β + β₀ for every row."""
    return X @ coefficients + intercept
