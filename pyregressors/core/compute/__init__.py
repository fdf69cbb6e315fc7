"""
Shared compute infrastructure for PyRegressors.

This module provides timing utilities, solver defaults and the numeric
kernels shared by all model backends.

IMPORTANT: This is NOT where model backends live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Thresholds and solver defaults
    linalg: Linear algebra kernels (elimination, Cholesky)
    optimization: Convergence-checked iteration
"""

from pyregressors.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
