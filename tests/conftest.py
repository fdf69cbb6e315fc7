"""Fixtures shared across the test tree."""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Fixed-seed Generator; every random fixture draws from it."""
    return np.random.default_rng(42)


@pytest.fixture
def exact_linear_data():
    """Small noise-free dataset: y = 0.5 + 1.5 x1 + 0.5 x2."""
    X = np.array([[1, 2], [2, 1], [3, 4], [4, 3], [5, 6]], dtype=float)
    y = np.array([3, 4, 7, 8, 11], dtype=float)
    return X, y


@pytest.fixture
def simple_regression_data(rng):
    """100 x 3 Gaussian features, intercept 0.7, small noise."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = 0.7 + X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def sparse_regression_data(rng):
    """y depends on only 3 of 10 features."""
    n, p = 200, 10
    X = rng.standard_normal((n, p))
    beta_true = np.zeros(p)
    beta_true[[0, 3, 7]] = [3.0, -2.0, 1.5]
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Third column is the sum of the first two, so X^T X is singular."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y


@pytest.fixture
def separable_classification_data():
    """Linearly separable 1-feature labels with a wide margin."""
    X = np.array([[-3.0], [-2.5], [-2.0], [-1.5], [1.5], [2.0], [2.5], [3.0]])
    y = np.array([0, 0, 0, 0, 1, 1, 1, 1], dtype=float)
    return X, y
