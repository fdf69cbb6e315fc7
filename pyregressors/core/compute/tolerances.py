"""
Numerical thresholds and solver defaults.

Single source of truth for every constant that shapes a fit: pivot and
jitter thresholds of the linear algebra kernels, iteration budgets and
tolerances of the iterative solvers, and the sigmoid clamp. Model
constructors take their keyword defaults from here.
"""

# Elimination: a pivot whose magnitude does not exceed this is treated as zero
PIVOT_TOLERANCE = 1e-10

# Cholesky: diagonal jitter added before the single retry
SPD_JITTER = 1e-10

# Coordinate descent / gradient descent
DEFAULT_MAX_ITER = 1000
DEFAULT_TOL = 1e-4
DEFAULT_LEARNING_RATE = 0.01
DEFAULT_ALPHA = 1.0

# Logistic link: |z| beyond this saturates to exactly 0 or 1
SIGMOID_CLAMP = 30.0
DEFAULT_THRESHOLD = 0.5

# NIPALS inner power iteration
NIPALS_MAX_ITER = 100
NIPALS_TOL = 1e-6
DEFAULT_N_COMPONENTS = 2

# PLS: relative size of a column mean, against the column's spread, above
# which an uncentered fit is flagged
CENTERING_TOLERANCE = 1e-8

DEFAULT_DEGREE = 2
