"""
Symmetric positive-definite solves via Cholesky factorization.

Used for the regularized normal equations (X'X + λD) β = X'y. A failed
factorization is retried exactly once with a tiny diagonal jitter before
giving up.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
import scipy.linalg as sla

from pyregressors.core.exceptions import NotPositiveDefiniteError, DimensionError
from pyregressors.core.compute.tolerances import SPD_JITTER


@dataclass(frozen=True)
class SPDSolution:
    """
    Result of a symmetric positive-definite solve.

    Attributes:
        x: Solution vector
        L: Lower Cholesky factor of the (possibly jittered) matrix
        jitter: Diagonal jitter that was needed, 0.0 if the first
            factorization succeeded
    """
    x: NDArray[np.floating[Any]]
    L: NDArray[np.floating[Any]]
    jitter: float


def spd_solve(
    A: NDArray[np.floating[Any]],
    b: NDArray[np.floating[Any]],
    ridge_diag: float | NDArray[np.floating[Any]] | None = None,
    *,
    jitter: float = SPD_JITTER,
    matrix_name: str = 'A',
) -> SPDSolution:
    """
    Solve (A + diag(ridge_diag)) x = b for symmetric A.

    Args:
        A: Symmetric matrix (n x n). Not modified.
        b: Right-hand side (n,)
        ridge_diag: Optional additive diagonal term, scalar or per-row (n,)
        jitter: Amount added to every diagonal entry on the retry
        matrix_name: Name used in error messages

    Returns:
        SPDSolution with the solution and factor

    Raises:
        DimensionError: If shapes are inconsistent
        NotPositiveDefiniteError: If factorization fails even after jitter
    """
    M = np.array(A, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise DimensionError(f"{matrix_name}: expected a square matrix, got shape {M.shape}")
    n = M.shape[0]
    if b.shape != (n,):
        raise DimensionError(f"right-hand side: expected shape ({n},), got {b.shape}")

    if ridge_diag is not None:
        diag = np.broadcast_to(np.asarray(ridge_diag, dtype=np.float64), (n,))
        M[np.diag_indices(n)] += diag

    used_jitter = 0.0
    try:
        factor = sla.cho_factor(M, lower=True, check_finite=False)
    except np.linalg.LinAlgError:
        M[np.diag_indices(n)] += jitter
        used_jitter = jitter
        try:
            factor = sla.cho_factor(M, lower=True, check_finite=False)
        except np.linalg.LinAlgError as e:
            raise NotPositiveDefiniteError(
                f"{matrix_name} is not positive definite, even after adding "
                f"{jitter:.0e} to the diagonal",
                matrix_name=matrix_name,
                jitter=jitter,
            ) from e

    x = sla.cho_solve(factor, b, check_finite=False)
    L = np.tril(factor[0])
    return SPDSolution(x=x, L=L, jitter=used_jitter)
