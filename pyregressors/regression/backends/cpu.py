"""
CPU reference backends for the direct linear solvers.

CPUGaussBackend solves the OLS normal equations by Gaussian elimination
with partial pivoting. CPUCholeskyBackend solves the ridge-regularized
normal equations by Cholesky factorization. Both fit an unpenalized
intercept.
"""

from typing import Any
import numpy as np

from pyregressors.core.result import Result
from pyregressors.core.compute.timing import Timer
from pyregressors.core.compute.linalg import spd_solve
from pyregressors.regression.design import Design
from pyregressors.regression.solution import LinearParams
from pyregressors.regression._least_squares import (
    add_intercept,
    fit_least_squares,
    normal_equations,
)


class CPUGaussBackend:
    """
    Ordinary least squares via the normal equations.

    Implements the Backend protocol for Design -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_gauss'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve OLS.

        Algorithm:
            1. Prepend the intercept column: X₁ = [1 | X]
            2. Form X₁'X₁ and X₁'y
            3. Solve by elimination with partial pivoting

        Raises:
            SingularMatrixError: If the features are collinear
        """
        timer = Timer()
        timer.start()

        with timer.section('least_squares'):
            coefficients, intercept = fit_least_squares(
                design.X, design.y, with_intercept=True
            )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'solver': 'gauss_partial_pivot',
            'n_observations': design.n,
            'n_features': design.p,
        }

        return Result(
            params=LinearParams(coefficients=coefficients, intercept=intercept),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUCholeskyBackend:
    """
    Ridge regression via the regularized normal equations.

    Solves (X₁'X₁ + λD) β = X₁'y where D is the identity with a zero in
    the intercept position, so the intercept is never shrunk. λ = 0
    gives the OLS solution.
    """

    def __init__(self, alpha: float):
        self._alpha = alpha

    @property
    def name(self) -> str:
        return 'cpu_cholesky'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve ridge regression.

        Raises:
            NotPositiveDefiniteError: If the system stays indefinite after
                the jitter retry (only possible for alpha == 0)
        """
        timer = Timer()
        timer.start()

        with timer.section('normal_equations'):
            X1 = add_intercept(design.X)
            XtX, Xty = normal_equations(X1, design.y)
            penalty = np.full(design.p + 1, self._alpha)
            penalty[0] = 0.0

        with timer.section('cholesky'):
            spd = spd_solve(XtX, Xty, ridge_diag=penalty, matrix_name="X'X + alpha*I")

        timer.stop()

        warnings_list: list[str] = []
        if spd.jitter > 0:
            warnings_list.append(
                f"X'X + alpha*I was not positive definite; solved after adding "
                f"{spd.jitter:.0e} to the diagonal"
            )

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'solver': 'cholesky',
            'alpha': self._alpha,
            'jitter': spd.jitter,
            'n_observations': design.n,
            'n_features': design.p,
        }

        return Result(
            params=LinearParams(coefficients=spd.x[1:], intercept=float(spd.x[0])),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
