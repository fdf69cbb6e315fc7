"""
Regression backends.

Available backends:
    CPUGaussBackend: OLS via normal equations and partial pivoting
    CPUCholeskyBackend: Ridge via regularized normal equations
    CPUCoordinateDescentBackend: Lasso via cyclic coordinate descent
    CPUGradientDescentBackend: Logistic via batch gradient descent
    CPUNIPALSBackend: Partial least squares via NIPALS
    CPUPolynomialBackend: Polynomial least squares
    CPUTransformedBackend: Exponential, logarithmic and power curve fits
"""

from pyregressors.regression.backends.cpu import CPUGaussBackend, CPUCholeskyBackend
from pyregressors.regression.backends.cpu_lasso import CPUCoordinateDescentBackend
from pyregressors.regression.backends.cpu_logistic import CPUGradientDescentBackend
from pyregressors.regression.backends.cpu_pls import CPUNIPALSBackend
from pyregressors.regression.backends.cpu_curve import (
    CPUPolynomialBackend,
    CPUTransformedBackend,
)

__all__ = [
    "CPUGaussBackend",
    "CPUCholeskyBackend",
    "CPUCoordinateDescentBackend",
    "CPUGradientDescentBackend",
    "CPUNIPALSBackend",
    "CPUPolynomialBackend",
    "CPUTransformedBackend",
]
