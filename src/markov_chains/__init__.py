"""
markov_chains
Continuous-time Markov chains: construction from generators or diffusions,
stationary distributions and trajectory sampling
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .diffusion import (
    ItoDiffusionProcess,
    brownian_motion,
    ornstein_uhlenbeck,
    geometric_brownian_motion,
    build_generator,
)
from .markov_engine import (
    ContinuousTimeMarkovChain,
    stationary_distribution,
    stationary_series,
    pattern,
    conditional_draw,
    random_sample,
    sample_paths,
    trajectory_frame,
    time_in_states,
)
from .utils.exceptions import (
    MarkovChainError,
    ValidationError,
    NotSquareError,
    RowSumNonzeroError,
    PositiveDiagonalError,
    SizeMismatchError,
    GridError,
    SimulationError,
    NonConvergenceError,
    StartIndexError,
)

__all__ = [
    "ItoDiffusionProcess",
    "brownian_motion",
    "ornstein_uhlenbeck",
    "geometric_brownian_motion",
    "build_generator",
    "ContinuousTimeMarkovChain",
    "stationary_distribution",
    "stationary_series",
    "pattern",
    "conditional_draw",
    "random_sample",
    "sample_paths",
    "trajectory_frame",
    "time_in_states",
    "MarkovChainError",
    "ValidationError",
    "NotSquareError",
    "RowSumNonzeroError",
    "PositiveDiagonalError",
    "SizeMismatchError",
    "GridError",
    "SimulationError",
    "NonConvergenceError",
    "StartIndexError",
]
