"""
The envelope every backend returns.

A model never stores loose coefficient arrays: it stores one Result,
whose params field holds the model's own payload (LinearParams,
PLSParams, ...) and whose other fields describe how the fit went.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen record of one fit (or one restore).

    Attributes:
        params: Parameter payload of the model
        info: Solver metadata. Always has 'method'; iterative solvers add
            'converged', 'iterations', 'final_change' and 'stopped_early'
        timing: Seconds per solver stage from Timer, None for restored
            parameters
        backend_name: Backend that produced the payload ('cpu_gauss',
            'cpu_nipals', ...) or 'restored'
        warnings: Non-fatal conditions: non-convergence, early stop,
            Cholesky jitter, uncentered PLS input

    Example:
        >>> result = Lasso(alpha=0.1).fit(X, y).result
        >>> result.info['converged'], result.info['iterations']
        (True, 23)
        >>> result.has_warning('did not converge')
        False
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if any warning message contains substring."""
        return any(substring in w for w in self.warnings)
