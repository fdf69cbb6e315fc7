"""
PyRegressors: supervised regression solvers for Python.

One model contract (fit, predict, score, get_parameters, set_parameters)
over nine solvers, built on small numeric kernels: Gaussian elimination
with partial pivoting, Cholesky solves, convergence-checked iteration and
NIPALS deflation.

Submodules:
    regression: Model classes, factory and metrics
    core: Result envelope, exceptions, validation, numeric kernels
"""

__version__ = "0.1.0"

from pyregressors import regression
from pyregressors.regression import create_model, fit

__all__ = [
    "__version__",
    "regression",
    "create_model",
    "fit",
]
