"""
The validated (X, y) pair that every backend consumes.

All shape and dtype checking happens while a Design is being built, so
backends can index into X and y without checking anything themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyregressors.core.validation import (
    check_array,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
    check_min_features,
)


@dataclass(frozen=True)
class Design:
    """
    Validated design matrix and response for one fit.

    Immutable after construction. The arrays are private float64 copies of
    whatever the caller passed in, so solvers can never write through to
    caller-owned data.

    Construction:
        Design.from_arrays(X, y)
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int

    @classmethod
    def from_arrays(cls, X: ArrayLike, y: ArrayLike) -> Design:
        """
        Build Design directly from array-likes.

        A 1D X is treated as a single feature column; a (n, 1) y is
        flattened.

        Raises:
            ValidationError: If inputs are not numeric
            DimensionError: If X is empty, ragged or not 2D, or if X and y
                have different numbers of rows
        """
        X_arr = as_feature_matrix(X, 'X')
        y_arr = check_array(y, 'y')
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        check_1d(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))

        n, p = X_arr.shape
        return cls(_X=X_arr, _y=y_arr, _n=n, _p=p)

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Features, shape (n, p), float64."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Targets, shape (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Row count."""
        return self._n

    @property
    def p(self) -> int:
        """Column count of X; the intercept is not a column."""
        return self._p

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """The single feature column (n,), for one-feature models."""
        return self._X[:, 0]


def as_feature_matrix(X: ArrayLike, name: str = 'X') -> NDArray[np.floating[Any]]:
    """
    Validate a feature matrix on its own (used at predict time too).

    Returns:
        2D float64 array with at least one row and one column

    Raises:
        ValidationError: If input is not numeric
        DimensionError: If input is empty, ragged or has more than 2 dims
    """
    X_arr = check_array(X, name)
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(-1, 1)
    check_2d(X_arr, name)
    check_min_samples(X_arr, 1, name)
    check_min_features(X_arr, 1, name)
    return X_arr
