"""
Feature/target transforms for the nonlinear models.

Each curve model is reduced to a single least-squares fit of a straight
line after transforming x and/or y, and mapped back afterwards:

    Model        Domain          Linearized fit               Prediction
    Exponential  y > 0           ln y = ln a + b x            a exp(b x)
    Logarithmic  x > 0           y    = a ln x + b            a ln x + b
    Power        x > 0, y > 0    ln y = ln a + b ln x         a x^b

Polynomial regression needs no domain: x is expanded into the columns
[x^0, x^1, ..., x^d].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray

from pyregressors.core.validation import check_positive
from pyregressors.regression.solution import CurveParams


def _identity(v: NDArray) -> NDArray:
    return v


@dataclass(frozen=True)
class CurveTransform:
    """
    One row of the transform table.

    Attributes:
        name: Model name used in messages ('Exponential', ...)
        x_positive: x must be > 0 (checked on fit and predict)
        y_positive: y must be > 0 (checked on fit)
        transform_x: Feature transform before the linear fit
        transform_y: Target transform before the linear fit
        to_params: (slope, intercept) of the linear fit -> CurveParams
        evaluate: (x, params) -> predictions on the original scale
    """
    name: str
    x_positive: bool
    y_positive: bool
    transform_x: Callable[[NDArray], NDArray]
    transform_y: Callable[[NDArray], NDArray]
    to_params: Callable[[float, float], CurveParams]
    evaluate: Callable[[NDArray, CurveParams], NDArray]

    def check_x(self, x: NDArray[np.floating[Any]]) -> None:
        if self.x_positive:
            check_positive(x, 'x', self.name)

    def check_y(self, y: NDArray[np.floating[Any]]) -> None:
        if self.y_positive:
            check_positive(y, 'y', self.name)


EXPONENTIAL = CurveTransform(
    name='Exponential',
    x_positive=False,
    y_positive=True,
    transform_x=_identity,
    transform_y=np.log,
    to_params=lambda slope, intercept: CurveParams(a=float(np.exp(intercept)), b=float(slope)),
    evaluate=lambda x, params: params.a * np.exp(params.b * x),
)

LOGARITHMIC = CurveTransform(
    name='Logarithmic',
    x_positive=True,
    y_positive=False,
    transform_x=np.log,
    transform_y=_identity,
    to_params=lambda slope, intercept: CurveParams(a=float(slope), b=float(intercept)),
    evaluate=lambda x, params: params.a * np.log(x) + params.b,
)

POWER = CurveTransform(
    name='Power',
    x_positive=True,
    y_positive=True,
    transform_x=np.log,
    transform_y=np.log,
    to_params=lambda slope, intercept: CurveParams(a=float(np.exp(intercept)), b=float(slope)),
    evaluate=lambda x, params: params.a * np.power(x, params.b),
)


def polynomial_features(x: NDArray[np.floating[Any]], degree: int) -> NDArray[np.floating[Any]]:
    """Expand x (n,) into [x^0, ..., x^degree] (n x degree+1)."""
    return np.vander(x, degree + 1, increasing=True)
