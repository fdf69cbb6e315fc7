"""
Tests for the convergence-checked iteration loop and Timer.
"""

import numpy as np
import pytest

from pyregressors.core.compute import Timer, timed
from pyregressors.core.compute.optimization import (
    iterate,
    l2_change,
    max_abs_change,
)


def halve(x):
    return x / 2.0


class TestChangeMeasures:

    def test_max_abs_change(self):
        assert max_abs_change(np.array([1.0, 5.0]), np.array([2.0, 2.0])) == 3.0

    def test_max_abs_change_empty(self):
        assert max_abs_change(np.array([]), np.array([])) == 0.0

    def test_l2_change(self):
        assert l2_change(np.array([3.0, 4.0]), np.zeros(2)) == pytest.approx(5.0)


class TestIterate:

    def test_converges(self):
        outcome = iterate(halve, np.array([1.0]), max_iter=100, tol=1e-3)
        assert outcome.converged
        assert not outcome.stopped_early
        assert outcome.final_change < 1e-3
        assert outcome.warnings("Test", 100) == ()

    def test_exhausts_budget_without_error(self):
        outcome = iterate(halve, np.array([1.0]), max_iter=3, tol=1e-12)
        assert not outcome.converged
        assert outcome.iterations == 3
        np.testing.assert_allclose(outcome.x, [0.125])
        (message,) = outcome.warnings("Test", 3)
        assert "did not converge in 3 iterations" in message

    def test_fixed_point_converges_in_one_step(self):
        outcome = iterate(lambda x: x.copy(), np.array([2.0]), max_iter=10, tol=1e-8)
        assert outcome.converged
        assert outcome.iterations == 1

    def test_callback_stops_early(self):
        seen = []

        def callback(iteration, change):
            seen.append(iteration)
            return iteration == 2

        outcome = iterate(halve, np.array([1.0]), max_iter=100, tol=1e-12, callback=callback)
        assert outcome.stopped_early
        assert not outcome.converged
        assert outcome.iterations == 2
        assert seen == [1, 2]
        (message,) = outcome.warnings("Test", 100)
        assert "stopped early" in message

    def test_callback_returning_false_runs_to_completion(self):
        outcome = iterate(
            halve, np.array([1.0]), max_iter=5, tol=1e-12, callback=lambda i, c: False,
        )
        assert outcome.iterations == 5
        assert not outcome.stopped_early

    def test_custom_change_measure(self):
        outcome = iterate(
            halve, np.array([3.0, 4.0]), max_iter=100, tol=1e-3, change=l2_change,
        )
        assert outcome.converged


class TestTimer:

    def test_sections_recorded(self):
        timer = Timer()
        timer.start()
        with timer.section('a'):
            pass
        with timer.section('a'):
            pass
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'a'}
        assert result['total_seconds'] >= 0.0

    def test_result_before_stop_raises(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError):
            timer.result()

    def test_stop_before_start_raises(self):
        with pytest.raises(RuntimeError):
            Timer().stop()

    def test_timed_context(self):
        with timed() as timer:
            pass
        assert 'total_seconds' in timer.result()
