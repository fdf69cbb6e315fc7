"""
Structural interfaces shared by backends and models.

Backend is what a model delegates its arithmetic to. Regressor is what
the outside world (a model manager, a persistence layer) relies on. Both
are Protocols, so conformance is checked by shape, not by inheritance.
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

from numpy.typing import ArrayLike, NDArray

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    A solver that turns a validated design into a parameter payload.

    Hyperparameters are fixed at construction; solve() has no side
    effects on the backend, so one instance can serve repeated fits.
    """

    @property
    def name(self) -> str:
        """Identifier of the form '{device}_{algorithm}', e.g. 'cpu_cholesky'."""
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Fit the payload.

        Raises:
            NumericalError: If the linear system cannot be solved
            DomainError: If the data fall outside the model's domain
        """
        ...


@runtime_checkable
class Regressor(Protocol):
    """fit / predict / score plus a parameter mapping for save and reload."""

    def fit(self, X: ArrayLike, y: ArrayLike) -> 'Regressor':
        ...

    def predict(self, X: ArrayLike) -> NDArray:
        ...

    def score(self, X: ArrayLike, y: ArrayLike) -> float:
        ...

    def get_parameters(self) -> dict[str, Any]:
        ...

    def set_parameters(self, params: dict[str, Any]) -> 'Regressor':
        ...
