"""
Linear algebra kernels for PyRegressors.

All functions follow these conventions:
    - Inputs are never modified; kernels work on private copies
    - Errors are raised immediately with clear messages
    - Structured result dataclasses where more than one value comes back

Submodules:
    gauss: Gaussian elimination with partial pivoting (general square solve)
    cholesky: Symmetric positive-definite solve with one jitter retry
"""

from pyregressors.core.compute.linalg.gauss import gauss_solve, select_pivot
from pyregressors.core.compute.linalg.cholesky import SPDSolution, spd_solve

__all__ = [
    # Elimination
    "gauss_solve",
    "select_pivot",
    # Cholesky
    "SPDSolution",
    "spd_solve",
]
