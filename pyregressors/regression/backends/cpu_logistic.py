"""
CPU backend for logistic regression via batch gradient descent.

Algorithm, with X₁ = [1 | X] and θ starting at zero:
    For iteration 1..max_iter:
        p = sigmoid(X₁ θ)
        g = (1/n) X₁'(p - y)
        θ = θ - learning_rate * g
        Check: max|Δθ| < tol

Reaching max_iter without meeting tol is an accepted terminal state and is
reported through Result.warnings.
"""

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import expit

from pyregressors.core.result import Result
from pyregressors.core.compute.timing import Timer
from pyregressors.core.compute.tolerances import SIGMOID_CLAMP
from pyregressors.core.compute.optimization import IterationCallback, iterate
from pyregressors.regression.design import Design
from pyregressors.regression.solution import LinearParams
from pyregressors.regression._least_squares import add_intercept


def sigmoid(z: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Clamped logistic function.

    Returns exactly 1.0 for z > 30 and exactly 0.0 for z < -30, and
    1 / (1 + exp(-z)) in between.
    """
    z = np.asarray(z, dtype=np.float64)
    p = expit(z)
    p = np.where(z > SIGMOID_CLAMP, 1.0, p)
    return np.where(z < -SIGMOID_CLAMP, 0.0, p)


class CPUGradientDescentBackend:
    """CPU backend for the logistic model."""

    def __init__(
        self,
        learning_rate: float,
        max_iter: int,
        tol: float,
        callback: IterationCallback | None = None,
    ):
        self._learning_rate = learning_rate
        self._max_iter = max_iter
        self._tol = tol
        self._callback = callback

    @property
    def name(self) -> str:
        return 'cpu_gradient_descent'

    def solve(self, design: Design) -> Result[LinearParams]:
        timer = Timer()
        timer.start()

        X1 = add_intercept(design.X)
        y = design.y
        n = design.n
        lr = self._learning_rate

        def step(theta: NDArray) -> NDArray:
            p = sigmoid(X1 @ theta)
            gradient = X1.T @ (p - y) / n
            return theta - lr * gradient

        with timer.section('gradient_descent'):
            outcome = iterate(
                step,
                np.zeros(design.p + 1),
                max_iter=self._max_iter,
                tol=self._tol,
                callback=self._callback,
            )

        timer.stop()

        theta = outcome.x
        info: dict[str, Any] = {
            'method': 'gradient_descent',
            'learning_rate': lr,
            'converged': outcome.converged,
            'iterations': outcome.iterations,
            'final_change': outcome.final_change,
            'stopped_early': outcome.stopped_early,
        }

        return Result(
            params=LinearParams(coefficients=theta[1:], intercept=float(theta[0])),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=outcome.warnings('Gradient descent', self._max_iter),
        )
