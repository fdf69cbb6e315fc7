"""
Wall-clock timing of solver stages.

Backends wrap each stage of a fit (forming the normal equations, the
factorization, the descent loop) in a named section. The totals end up in
Result.timing as plain seconds.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Stage timer for one fit.

    Example:
        timer = Timer()
        timer.start()
        with timer.section('cholesky'):
            factor = cho_factor(A)
        timer.stop()
        timer.result()   # {'total_seconds': ..., 'cholesky': ...}

    A section entered more than once accumulates.
    """

    def __init__(self) -> None:
        self._stages: dict[str, float] = {}
        self._t0: float | None = None
        self._elapsed: float | None = None

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._elapsed = None

    def stop(self) -> float:
        """Stop the clock and return the total elapsed seconds."""
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._t0
        return self._elapsed

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t = time.perf_counter()
        try:
            yield
        finally:
            self._stages[name] = self._stages.get(name, 0.0) + (time.perf_counter() - t)

    def result(self) -> dict[str, float]:
        """
        Elapsed seconds: 'total_seconds' plus one entry per section.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._stages}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a whole block.

        with timed() as timer:
            model.fit(X, y)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
