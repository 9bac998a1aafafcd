"""
Default numerical constants
"""

# Implicit step of the stationary distribution iteration
DEFAULT_STEP_SIZE = 1e8
DEFAULT_MAX_ITERATIONS = 20
DEFAULT_TOLERANCE = 1e-8

DEFAULT_NUM_DRAWS = 1000
DEFAULT_START_INDEX = 0

# Row sums may deviate from zero by this many ulps of the diagonal element
ROW_SUM_ULPS = 100

# Chains with more states are shown truncated
DISPLAY_LIMIT = 10
