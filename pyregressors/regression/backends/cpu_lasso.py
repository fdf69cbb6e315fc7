"""
CPU backend for Lasso regression via cyclic coordinate descent.

Coefficients β = [β₀, β₁, ..., β_p] (β₀ the intercept) start at zero.
Each pass updates the coordinates in ascending order, always using the
freshest values of the others:

    ρ_j = (1/n) X_j'(y - X_{-j} β_{-j})        partial residual correlation
    z_j = (1/n) X_j'X_j                        scaled column norm
    β_j = sign(ρ_j) max(|ρ_j| - λ_j/z_j, 0) / z_j

with λ₀ = 0 (the intercept is not penalized) and λ_j = alpha otherwise.
Columns with z_j == 0 keep their current value. Passes stop when the
largest coefficient change in a pass drops below tol, or after max_iter
passes; the latter is reported, never raised.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyregressors.core.result import Result
from pyregressors.core.compute.timing import Timer
from pyregressors.core.compute.optimization import IterationCallback, iterate
from pyregressors.regression.design import Design
from pyregressors.regression.solution import LinearParams
from pyregressors.regression._least_squares import add_intercept


def soft_threshold(rho: float, threshold: float) -> float:
    """sign(rho) * max(|rho| - threshold, 0)"""
    if rho > threshold:
        return rho - threshold
    if rho < -threshold:
        return rho + threshold
    return 0.0


class CPUCoordinateDescentBackend:
    """CPU backend for L1-penalized least squares."""

    def __init__(
        self,
        alpha: float,
        max_iter: int,
        tol: float,
        callback: IterationCallback | None = None,
    ):
        self._alpha = alpha
        self._max_iter = max_iter
        self._tol = tol
        self._callback = callback

    @property
    def name(self) -> str:
        return 'cpu_coordinate_descent'

    def solve(self, design: Design) -> Result[LinearParams]:
        timer = Timer()
        timer.start()

        X1 = add_intercept(design.X)
        y = design.y
        n = design.n
        penalties = np.full(design.p + 1, self._alpha)
        penalties[0] = 0.0

        with timer.section('column_norms'):
            col_norms = np.einsum('ij,ij->j', X1, X1) / n

        def sweep(beta: NDArray) -> NDArray:
            beta = beta.copy()
            residual = y - X1 @ beta
            for j in range(beta.shape[0]):
                z = col_norms[j]
                if z <= 0:
                    continue
                x_j = X1[:, j]
                old = beta[j]
                rho = float(x_j @ (residual + x_j * old)) / n
                beta[j] = soft_threshold(rho, penalties[j] / z) / z
                if beta[j] != old:
                    residual -= x_j * (beta[j] - old)
            return beta

        with timer.section('coordinate_descent'):
            outcome = iterate(
                sweep,
                np.zeros(design.p + 1),
                max_iter=self._max_iter,
                tol=self._tol,
                callback=self._callback,
            )

        timer.stop()

        beta = outcome.x
        info: dict[str, Any] = {
            'method': 'coordinate_descent',
            'alpha': self._alpha,
            'converged': outcome.converged,
            'iterations': outcome.iterations,
            'final_change': outcome.final_change,
            'stopped_early': outcome.stopped_early,
            'n_nonzero': int(np.count_nonzero(beta[1:])),
        }

        return Result(
            params=LinearParams(coefficients=beta[1:], intercept=float(beta[0])),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=outcome.warnings('Coordinate descent', self._max_iter),
        )
