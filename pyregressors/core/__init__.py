"""
Core infrastructure for PyRegressors.

This module provides shared abstractions, utilities, and numeric kernels
used by every model in pyregressors.regression.

Key components:
    protocols: Backend, Regressor protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, solver defaults, linear algebra and iteration kernels
"""

from pyregressors.core.protocols import Backend, Regressor
from pyregressors.core.result import Result
from pyregressors.core.exceptions import (
    PyRegressorsError,
    ValidationError,
    DimensionError,
    DomainError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    NotTrainedError,
)

__all__ = [
    # Protocols
    "Backend",
    "Regressor",
    # Result
    "Result",
    # Exceptions
    "PyRegressorsError",
    "ValidationError",
    "DimensionError",
    "DomainError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "NotTrainedError",
]
