"""
Errors raised by PyRegressors.

Two families sit under PyRegressorsError. ValidationError covers bad
input (shape, dtype, domain, hyperparameters) and is raised before any
arithmetic starts. NumericalError covers linear systems that turn out to
be unsolvable. NotTrainedError stands on its own.

Nothing here is raised for slow convergence: iterative solvers report that
through Result.warnings.
"""


class PyRegressorsError(Exception):
    """Root of every error raised by this package."""
    pass


class ValidationError(PyRegressorsError):
    """Bad input or hyperparameter, detected before a solver runs."""
    pass


class DimensionError(ValidationError):
    """
    Shape problem: wrong ndim, ragged rows, X and y of different lengths,
    too few rows, or a column count at predict time that differs from the
    one seen during fit.
    """
    pass


class DomainError(ValidationError):
    """
    Input values fall outside a model's mathematical domain.

    Raised by the nonlinear models whose transforms take logarithms
    (Exponential, Logarithmic, Power) when a required-positive value is
    zero or negative. Raised identically at fit and predict time.

    Attributes:
        variable: Which input violated the constraint ('x' or 'y')
        n_violations: Number of offending values
    """

    def __init__(
        self,
        message: str,
        variable: str | None = None,
        n_violations: int | None = None,
    ):
        super().__init__(message)
        self.variable = variable
        self.n_violations = n_violations


class NumericalError(PyRegressorsError):
    """A linear system that could not be solved from otherwise valid input."""
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when elimination finds no pivot above the near-zero threshold,
    which for the normal equations means the features are collinear.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        column: Elimination column at which the pivot vanished, if known
        pivot: Absolute value of the best pivot found, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        column: int | None = None,
        pivot: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.column = column
        self.pivot = pivot


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when a Cholesky factorization fails even after the diagonal
    jitter retry.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        jitter: Diagonal jitter that was tried before giving up
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        jitter: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.jitter = jitter


class NotTrainedError(PyRegressorsError):
    """
    A model was used before it was successfully fitted.

    Raised by predict(), score() and friends on a model that has no
    trained parameters.

    Attributes:
        model_type: Name of the model class
    """

    def __init__(self, message: str, model_type: str | None = None):
        super().__init__(message)
        self.model_type = model_type
