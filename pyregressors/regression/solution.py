"""
Regression parameter payloads.

These are the immutable data computed by backends and carried inside a
Result. Each model class knows how to apply its payload to new data.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for models with a linear predictor.

    Shared by OLS, Ridge, Lasso and Logistic (where the linear predictor
    is passed through the sigmoid).
    """
    coefficients: NDArray[np.floating[Any]]
    intercept: float

    @property
    def n_features(self) -> int:
        return len(self.coefficients)


@dataclass(frozen=True)
class PLSParams:
    """
    Latent factor set of a NIPALS fit.

    Column k of each matrix belongs to component k.

    Attributes:
        x_weights: W, unit-norm weight vectors (p x k)
        y_weights: C, response weights (1 x k)
        x_loadings: P, X loadings (p x k)
        y_loadings: Q, response loadings (1 x k)
        x_rotations: W (P'W)^-1, maps raw X to scores (p x k)
        x_mean: Column means removed before fitting, zeros if uncentered (p,)
        y_mean: Response mean removed before fitting, 0.0 if uncentered
        x_scores: T, training scores (n x k), None for restored models
        y_scores: U, training response scores (n x k), None for restored models
    """
    x_weights: NDArray[np.floating[Any]]
    y_weights: NDArray[np.floating[Any]]
    x_loadings: NDArray[np.floating[Any]]
    y_loadings: NDArray[np.floating[Any]]
    x_rotations: NDArray[np.floating[Any]]
    x_mean: NDArray[np.floating[Any]]
    y_mean: float
    x_scores: NDArray[np.floating[Any]] | None = None
    y_scores: NDArray[np.floating[Any]] | None = None

    @property
    def n_features(self) -> int:
        return self.x_weights.shape[0]

    @property
    def n_components(self) -> int:
        return self.x_weights.shape[1]

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        """Equivalent regression coefficients on the (centered) X scale."""
        return self.x_rotations @ self.y_loadings[0]


@dataclass(frozen=True)
class PolynomialParams:
    """Coefficients c_0..c_d of y = sum_j c_j x^j."""
    coefficients: NDArray[np.floating[Any]]

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1


@dataclass(frozen=True)
class CurveParams:
    """
    The two scalars of a linearized curve fit.

    Meaning depends on the model:
        Exponential:  y = a * exp(b * x)
        Logarithmic:  y = a * ln(x) + b
        Power:        y = a * x ** b
    """
    a: float
    b: float
