"""
Optimization utilities for PyRegressors.

Provides the convergence-checked iteration loop shared by the iterative
solvers (coordinate descent, gradient descent).
"""

from pyregressors.core.compute.optimization.convergence import (
    IterationCallback,
    IterationOutcome,
    iterate,
    l2_change,
    max_abs_change,
)

__all__ = [
    "IterationCallback",
    "IterationOutcome",
    "iterate",
    "l2_change",
    "max_abs_change",
]
