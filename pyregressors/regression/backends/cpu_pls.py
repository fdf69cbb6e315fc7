"""
CPU backend for partial least squares regression via NIPALS.

For each component k, on the residual matrices X_k and Y_k:

    u = first column of Y_k
    repeat (at most 100 times, until ||u - u_old|| < 1e-6):
        w = X_k'u / (u'u),  w = w / ||w||
        t = X_k w
        c = Y_k't / (t't)
        u = Y_k c / (c'c)
    p = X_k't / (t't),  q = Y_k't / (t't)
    X_{k+1} = X_k - t t'X_k / (t't)
    Y_{k+1} = Y_k - t t'Y_k / (t't)

Zero denominators skip the corresponding scaling rather than failing.

Prediction maps raw X to scores with the rotation R = W (P'W)^-1, which
reproduces the deflated training scores T exactly, and then applies the
response loadings: ŷ = X R Q'.

Centering: with center=False no means are removed and no intercept is
fitted, which is only correct for inputs that are already centered. A
warning is recorded when they visibly are not. With center=True the
column means of X and the mean of y are removed before fitting and
restored at prediction time.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray
import scipy.linalg as sla

from pyregressors.core.result import Result
from pyregressors.core.compute.timing import Timer
from pyregressors.core.compute.tolerances import (
    CENTERING_TOLERANCE,
    NIPALS_MAX_ITER,
    NIPALS_TOL,
)
from pyregressors.core.compute.optimization import IterationCallback, l2_change
from pyregressors.regression.design import Design
from pyregressors.regression.solution import PLSParams


def pls_rotations(
    x_weights: NDArray[np.floating[Any]],
    x_loadings: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Rotation R = W (P'W)^+ mapping undeflated X to component scores.

    P'W is unit upper-triangular for a regular NIPALS fit; the
    pseudo-inverse keeps degenerate (all-zero) components harmless.
    """
    return x_weights @ sla.pinv(x_loadings.T @ x_weights)


def _is_centered(A: NDArray[np.floating[Any]]) -> bool:
    means = np.abs(A.mean(axis=0))
    scale = np.maximum(np.abs(A).max(axis=0), 1.0)
    return bool(np.all(means <= CENTERING_TOLERANCE * scale))


class CPUNIPALSBackend:
    """CPU backend for single-response PLS."""

    def __init__(
        self,
        n_components: int,
        center: bool,
        callback: IterationCallback | None = None,
    ):
        self._n_components = n_components
        self._center = center
        self._callback = callback

    @property
    def name(self) -> str:
        return 'cpu_nipals'

    def solve(self, design: Design) -> Result[PLSParams]:
        timer = Timer()
        timer.start()

        n, p = design.n, design.p
        k_max = self._n_components
        warnings_list: list[str] = []

        X = design.X.copy()
        Y = design.y.reshape(-1, 1).copy()

        with timer.section('centering'):
            if self._center:
                x_mean = X.mean(axis=0)
                y_mean = float(Y.mean())
                X -= x_mean
                Y -= y_mean
            else:
                x_mean = np.zeros(p)
                y_mean = 0.0
                if not (_is_centered(X) and _is_centered(Y)):
                    warnings_list.append(
                        "PLS fitted without centering on data whose columns are not "
                        "mean-centered; predictions have no intercept term. "
                        "Center the data first or use center=True."
                    )

        W = np.zeros((p, k_max))
        C = np.zeros((1, k_max))
        P = np.zeros((p, k_max))
        Q = np.zeros((1, k_max))
        T = np.zeros((n, k_max))
        U = np.zeros((n, k_max))
        inner_iterations: list[int] = []
        inner_converged: list[bool] = []
        stopped_early = False
        n_fitted = 0

        with timer.section('nipals'):
            for k in range(k_max):
                u = Y[:, 0].copy()
                converged = False
                change = float('nan')

                for inner in range(1, NIPALS_MAX_ITER + 1):
                    u_old = u

                    w = X.T @ u
                    uu = u @ u
                    if uu > 0:
                        w = w / uu
                    w_norm = np.linalg.norm(w)
                    if w_norm > 0:
                        w = w / w_norm

                    t = X @ w

                    c = Y.T @ t
                    tt = t @ t
                    if tt > 0:
                        c = c / tt

                    u = Y @ c
                    cc = c @ c
                    if cc > 0:
                        u = u / cc

                    change = l2_change(u, u_old)
                    if change < NIPALS_TOL:
                        converged = True
                        break

                inner_iterations.append(inner)
                inner_converged.append(converged)

                tt = t @ t
                p_k = X.T @ t
                q_k = Y.T @ t
                if tt > 0:
                    p_k = p_k / tt
                    q_k = q_k / tt

                W[:, k] = w
                C[:, k] = c
                P[:, k] = p_k
                Q[:, k] = q_k
                T[:, k] = t
                U[:, k] = u
                n_fitted = k + 1

                # Deflation: remove what t explains from X and Y
                if tt > 0:
                    X -= np.outer(t, t @ X) / tt
                    Y -= np.outer(t, t @ Y) / tt

                if self._callback is not None and k + 1 < k_max:
                    if self._callback(k + 1, change):
                        stopped_early = True
                        break

        if stopped_early:
            W, C, P, Q = W[:, :n_fitted], C[:, :n_fitted], P[:, :n_fitted], Q[:, :n_fitted]
            T, U = T[:, :n_fitted], U[:, :n_fitted]
            warnings_list.append(
                f"NIPALS stopped early by callback after {n_fitted} of {k_max} components"
            )

        n_unconverged = inner_converged.count(False)
        if n_unconverged:
            warnings_list.append(
                f"NIPALS inner iteration did not converge in {NIPALS_MAX_ITER} "
                f"iterations for {n_unconverged} component(s)"
            )

        with timer.section('rotations'):
            R = pls_rotations(W, P)

        timer.stop()

        params = PLSParams(
            x_weights=W,
            y_weights=C,
            x_loadings=P,
            y_loadings=Q,
            x_rotations=R,
            x_mean=x_mean,
            y_mean=y_mean,
            x_scores=T,
            y_scores=U,
        )

        info: dict[str, Any] = {
            'method': 'nipals',
            'n_components': n_fitted,
            'center': self._center,
            'inner_iterations': inner_iterations,
            'converged': n_unconverged == 0,
            'stopped_early': stopped_early,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
