"""
Argument checks shared by Design, the models and the metrics.

Every check either returns quietly or raises with the offending argument
name and the value it saw. Nothing is repaired on the caller's behalf:
array-likes are converted to float64 and that is the only coercion.
Finite-ness is not screened; NaN or Inf in the data propagate into the
fitted parameters.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyregressors.core.exceptions import ValidationError, DimensionError, DomainError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Copy an array-like into a fresh float64 ndarray.

    Ragged rows are a shape problem (DimensionError). Strings, objects and
    complex numbers are a data problem (ValidationError). Booleans pass
    as 0.0 / 1.0.

    The copy never shares memory with the caller's buffer, so solvers may
    overwrite it in place.
    """
    try:
        result = np.array(array)
    except ValueError as e:
        raise DimensionError(
            f"{name}: cannot convert to a rectangular array: {e}"
        ) from e
    except TypeError as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Booleans are accepted as 0/1 (classification targets)
    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} is not supported")

    return result.astype(np.float64, copy=False)


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """Raise DimensionError unless array.ndim == ndim."""
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Row counts must agree across arrays.

        check_consistent_length(X, y, names=('X', 'y'))

    The error lists every array's row count, e.g. "X=5, y=4".
    """
    if len(arrays) != len(names):
        raise ValueError(f"got {len(arrays)} arrays but {len(names)} names")

    rows = [a.shape[0] for a in arrays]
    if any(r != rows[0] for r in rows[1:]):
        listing = ", ".join(f"{n}={r}" for n, r in zip(names, rows))
        raise DimensionError(f"Row counts differ: {listing}")


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """Raise DimensionError if array has fewer than min_samples rows."""
    if array.shape[0] < min_samples:
        raise DimensionError(
            f"{name}: needs at least {min_samples} row(s), got {array.shape[0]}"
        )


def check_min_features(array: NDArray[np.floating[Any]], min_features: int, name: str) -> None:
    """
    Verify a 2D array has at least the minimum number of columns.

    Raises:
        DimensionError: If array has fewer than min_features columns
    """
    p = array.shape[1]
    if p < min_features:
        raise DimensionError(
            f"{name}: requires at least {min_features} feature column(s), got {p}"
        )


def check_n_features(
    array: NDArray[np.floating[Any]],
    expected: int,
    name: str,
) -> None:
    """
    Verify a 2D array has exactly the expected number of columns.

    Used at predict time against the feature count the model was
    trained on.

    Raises:
        DimensionError: If the column count differs
    """
    p = array.shape[1]
    if p != expected:
        raise DimensionError(
            f"{name}: has {p} feature column(s), model expects {expected}"
        )


def check_positive(array: NDArray[np.floating[Any]], name: str, model: str) -> None:
    """
    Verify every value is strictly positive.

    Args:
        array: Array to check
        name: Parameter name for error messages
        model: Model name for error messages

    Raises:
        DomainError: If any value is <= 0
    """
    bad = int(np.sum(~(array > 0)))
    if bad:
        raise DomainError(
            f"{model} regression requires all {name} values to be positive "
            f"({bad} value(s) <= 0)",
            variable=name,
            n_violations=bad,
        )


def check_non_negative_scalar(value: float, name: str) -> float:
    """
    Validate a non-negative real hyperparameter.

    Returns:
        The value as float

    Raises:
        ValidationError: If value is negative or not a real number
    """
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a real number, got {value!r}") from e
    if not value >= 0:
        raise ValidationError(f"{name}: must be >= 0, got {value}")
    return value


def check_positive_scalar(value: float, name: str) -> float:
    """Validate a strictly positive real hyperparameter."""
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name}: expected a real number, got {value!r}") from e
    if not value > 0:
        raise ValidationError(f"{name}: must be > 0, got {value}")
    return value


def check_int(value: int, name: str, minimum: int) -> int:
    """
    Validate an integer hyperparameter with a lower bound.

    Raises:
        ValidationError: If value is not an integer or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name}: expected an integer, got {value!r}")
    value = int(value)
    if value < minimum:
        raise ValidationError(f"{name}: must be >= {minimum}, got {value}")
    return value
