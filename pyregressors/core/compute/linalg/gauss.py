"""
Gaussian elimination with partial pivoting.

The general square solver behind the normal equations of OLS and of every
nonlinear model. The pivoting rule is fixed: at column k the pivot is the
row, among rows k..n-1, with the largest absolute entry in column k; on
ties the first such row wins (np.argmax semantics). Reproducing this rule
exactly keeps results bit-stable across releases.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyregressors.core.exceptions import SingularMatrixError, DimensionError
from pyregressors.core.compute.tolerances import PIVOT_TOLERANCE


def select_pivot(column: NDArray[np.floating[Any]]) -> int:
    """
    Index of the entry with maximal absolute value (first one on ties).

    Args:
        column: Remaining entries of the current elimination column

    Returns:
        Offset into ``column`` of the pivot
    """
    return int(np.argmax(np.abs(column)))


def gauss_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    *,
    pivot_tol: float = PIVOT_TOLERANCE,
    matrix_name: str = 'A',
) -> NDArray[np.floating[Any]]:
    """
    Solve the square system A x = b.

    Algorithm:
        1. Form the augmented matrix [A | b] (private copy)
        2. For each column k: choose the pivot row, swap it into row k,
           eliminate the entries below it
        3. Back-substitute from the last row upwards

    Args:
        A: Square coefficient matrix (n x n). Not modified.
        b: Right-hand side (n,). Not modified.
        pivot_tol: A chosen pivot with |pivot| <= pivot_tol means singular
        matrix_name: Name used in error messages

    Returns:
        Solution vector x (n,)

    Raises:
        DimensionError: If A is not square or b has the wrong length
        SingularMatrixError: If no usable pivot exists for some column
    """
    A = np.asarray(A, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise DimensionError(f"{matrix_name}: expected a square matrix, got shape {A.shape}")
    n = A.shape[0]
    if b.shape != (n,):
        raise DimensionError(
            f"right-hand side: expected shape ({n},), got {b.shape}"
        )

    aug = np.empty((n, n + 1), dtype=np.float64)
    aug[:, :n] = A
    aug[:, n] = b

    # === Forward elimination ===
    for k in range(n):
        pivot_row = k + select_pivot(aug[k:, k])
        pivot = abs(aug[pivot_row, k])
        if pivot <= pivot_tol:
            raise SingularMatrixError(
                f"{matrix_name} is singular: best pivot in column {k} is {pivot:.3e} "
                f"(threshold {pivot_tol:.0e}). This indicates collinear features.",
                matrix_name=matrix_name,
                column=k,
                pivot=float(pivot),
            )

        if pivot_row != k:
            aug[[k, pivot_row]] = aug[[pivot_row, k]]

        factors = aug[k + 1:, k] / aug[k, k]
        aug[k + 1:, k:] -= np.outer(factors, aug[k, k:])

    # === Back substitution ===
    x = np.zeros(n, dtype=np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = (aug[i, n] - aug[i, i + 1:n] @ x[i + 1:]) / aug[i, i]

    return x
