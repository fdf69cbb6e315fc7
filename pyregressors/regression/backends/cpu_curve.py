"""
CPU backends for the single-feature nonlinear models.

Both reduce to the least-squares engine: CPUTransformedBackend fits a
straight line on log-transformed data, CPUPolynomialBackend fits the
expanded Vandermonde columns without a separate intercept (the x^0 column
plays that role).
"""

from typing import Any

from pyregressors.core.result import Result
from pyregressors.core.compute.timing import Timer
from pyregressors.regression.design import Design
from pyregressors.regression.solution import CurveParams, PolynomialParams
from pyregressors.regression.transforms import CurveTransform, polynomial_features
from pyregressors.regression._least_squares import fit_least_squares


class CPUTransformedBackend:
    """
    Linearized curve fit.

    Raises:
        DomainError: If x or y violates the transform's positivity domain
        SingularMatrixError: If the transformed x is constant
    """

    def __init__(self, transform: CurveTransform):
        self._transform = transform

    @property
    def name(self) -> str:
        return 'cpu_transformed'

    def solve(self, design: Design) -> Result[CurveParams]:
        transform = self._transform
        x, y = design.x, design.y
        transform.check_x(x)
        transform.check_y(y)

        timer = Timer()
        timer.start()

        with timer.section('transform'):
            xt = transform.transform_x(x)
            yt = transform.transform_y(y)

        with timer.section('least_squares'):
            coefficients, intercept = fit_least_squares(
                xt.reshape(-1, 1), yt, with_intercept=True
            )

        timer.stop()

        info: dict[str, Any] = {
            'method': 'linearized_least_squares',
            'model': transform.name.lower(),
            'n_observations': design.n,
        }

        return Result(
            params=transform.to_params(float(coefficients[0]), intercept),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )


class CPUPolynomialBackend:
    """Polynomial least squares on [x^0, ..., x^degree]."""

    def __init__(self, degree: int):
        self._degree = degree

    @property
    def name(self) -> str:
        return 'cpu_polynomial'

    def solve(self, design: Design) -> Result[PolynomialParams]:
        timer = Timer()
        timer.start()

        with timer.section('features'):
            V = polynomial_features(design.x, self._degree)

        with timer.section('least_squares'):
            coefficients, _ = fit_least_squares(V, design.y, with_intercept=False)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'solver': 'gauss_partial_pivot',
            'degree': self._degree,
            'n_observations': design.n,
        }

        return Result(
            params=PolynomialParams(coefficients=coefficients),
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=(),
        )
