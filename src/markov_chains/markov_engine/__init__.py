"""
Continuous-time Markov chain engine

Chain construction and validation, stationary distribution and path sampling
"""

from .continuous_markov import ContinuousTimeMarkovChain
from .stationary import stationary_distribution, stationary_series
from .sampling import (
    pattern,
    conditional_draw,
    random_sample,
    sample_paths,
    trajectory_frame,
    time_in_states,
)

__all__ = [
    "ContinuousTimeMarkovChain",
    "stationary_distribution",
    "stationary_series",
    "pattern",
    "conditional_draw",
    "random_sample",
    "sample_paths",
    "trajectory_frame",
    "time_in_states",
]
