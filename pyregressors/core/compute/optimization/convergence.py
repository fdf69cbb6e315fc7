"""
Convergence-checked iteration.

Coordinate descent (Lasso) and gradient descent (Logistic) share one
control structure: apply an update step until either the largest
parameter change drops below a tolerance or the iteration budget runs
out. Running out of budget is a valid terminal state, not an error; the
outcome simply reports converged=False.

An optional callback is consulted at every outer-iteration boundary and
can stop the loop early (cooperative cancellation).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray

# callback(iteration, change) -> True to stop
IterationCallback = Callable[[int, float], bool]


@dataclass(frozen=True)
class IterationOutcome:
    """
    Terminal state of an iterative solve.

    Attributes:
        x: Final iterate
        iterations: Number of update steps applied
        converged: True if the change fell below tolerance
        final_change: Change measured on the last step (nan if no step ran)
        stopped_early: True if the callback requested a stop
    """
    x: NDArray[np.floating[Any]]
    iterations: int
    converged: bool
    final_change: float
    stopped_early: bool = False

    def warnings(self, method: str, max_iter: int) -> tuple[str, ...]:
        """Non-fatal diagnostics for Result.warnings."""
        if self.stopped_early:
            return (
                f"{method} stopped early by callback after {self.iterations} "
                f"iterations (max change={self.final_change:.3e})",
            )
        if not self.converged:
            return (
                f"{method} did not converge in {max_iter} iterations "
                f"(max change={self.final_change:.3e})",
            )
        return ()


def max_abs_change(new: NDArray, old: NDArray) -> float:
    """Largest absolute elementwise difference between two iterates."""
    if new.size == 0:
        return 0.0
    return float(np.max(np.abs(new - old)))


def l2_change(new: NDArray, old: NDArray) -> float:
    """Euclidean distance between two iterates."""
    return float(np.linalg.norm(new - old))


def iterate(
    step: Callable[[NDArray], NDArray],
    x0: NDArray,
    *,
    max_iter: int,
    tol: float,
    change: Callable[[NDArray, NDArray], float] = max_abs_change,
    callback: IterationCallback | None = None,
) -> IterationOutcome:
    """
    Run ``x <- step(x)`` until convergence or budget exhaustion.

    Args:
        step: Update function. Must return a new array, not mutate its input.
        x0: Starting iterate
        max_iter: Maximum number of steps
        tol: Stop once change(new, old) < tol
        change: Distance between successive iterates
        callback: Optional callback(iteration, change); returning True stops

    Returns:
        IterationOutcome describing the terminal state
    """
    x = x0
    final_change = float('nan')

    for iteration in range(1, max_iter + 1):
        x_new = step(x)
        final_change = change(x_new, x)
        x = x_new

        if final_change < tol:
            return IterationOutcome(
                x=x, iterations=iteration, converged=True, final_change=final_change,
            )

        if callback is not None and callback(iteration, final_change):
            return IterationOutcome(
                x=x,
                iterations=iteration,
                converged=False,
                final_change=final_change,
                stopped_early=True,
            )

    return IterationOutcome(
        x=x, iterations=max_iter, converged=False, final_change=final_change,
    )
