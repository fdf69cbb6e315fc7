"""
Goodness-of-fit metrics.

r_squared is the score of every regression model; accuracy is the score
of the logistic model. The remaining error metrics are provided for
callers that evaluate predictions themselves.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyregressors.core.validation import (
    check_array,
    check_consistent_length,
    check_min_samples,
)


def _pair(y_true: ArrayLike, y_pred: ArrayLike) -> tuple[NDArray, NDArray]:
    yt = check_array(y_true, 'y_true').ravel()
    yp = check_array(y_pred, 'y_pred').ravel()
    check_min_samples(yt, 1, 'y_true')
    check_consistent_length(yt, yp, names=('y_true', 'y_pred'))
    return yt, yp


def r_squared(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """
    Coefficient of determination, 1 - SSE/SST.

    When the target is constant (SST == 0) this returns 1.0 by
    convention, whatever the predictions are. That is a perfect-fit
    convention, not a true R².
    """
    yt, yp = _pair(y_true, y_pred)
    sst = float(np.sum((yt - yt.mean()) ** 2))
    sse = float(np.sum((yt - yp) ** 2))
    if sst == 0:
        return 1.0
    return 1.0 - sse / sst


r2_score = r_squared


def mse(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """Mean squared error."""
    yt, yp = _pair(y_true, y_pred)
    return float(np.mean((yt - yp) ** 2))


def rmse(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """Root mean squared error."""
    return float(np.sqrt(mse(y_true, y_pred)))


def mae(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """Mean absolute error."""
    yt, yp = _pair(y_true, y_pred)
    return float(np.mean(np.abs(yt - yp)))


def accuracy(y_true: ArrayLike, y_pred: ArrayLike) -> float:
    """Fraction of exact label matches."""
    yt, yp = _pair(y_true, y_pred)
    return float(np.mean(yt == yp))


def evaluate(y_true: ArrayLike, y_pred: ArrayLike) -> dict[str, float]:
    """All regression metrics at once: r2, mse, rmse, mae."""
    return {
        'r2': r_squared(y_true, y_pred),
        'mse': mse(y_true, y_pred),
        'rmse': rmse(y_true, y_pred),
        'mae': mae(y_true, y_pred),
    }
