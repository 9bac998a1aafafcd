"""
Pseudo-random trajectories of a continuous-time Markov chain
"""
import operator
import numpy as np
import pandas as pd
from scipy import sparse
from typing import List, Optional, Tuple, Union
import logging

from .continuous_markov import ContinuousTimeMarkovChain
from ..utils import constants
from ..utils.exceptions import StartIndexError

logger = logging.getLogger(__name__)

RandomState = Optional[Union[int, np.random.SeedSequence, np.random.Generator]]


def pattern(chain: ContinuousTimeMarkovChain) -> sparse.csr_matrix:
    """Boolean matrix of feasible transitions, ``generator[i, j] > 0``"""
    return chain.sparse_generator > 0


def conditional_draw(
    chain: ContinuousTimeMarkovChain,
    orig_idx: int,
    spy: Optional[sparse.csr_matrix] = None,
    random_state: RandomState = None
) -> Tuple[float, int]:
    """
    Draw the next jump out of a state.

    Every feasible transition gets an exponential clock with its intensity;
    the first clock to ring gives the next state and the holding time. A
    state without feasible transitions is absorbing: the holding time is
    infinite and the state does not change.

    Args:
        chain: Markov chain
        orig_idx: Current state index
        spy: Precomputed feasibility pattern, see ``pattern``
        random_state: Seed or numpy Generator

    Returns:
        Tuple of (holding time, next state index)

    Raises:
        StartIndexError: If orig_idx is outside the state space
    """
    n = chain.n_states
    orig_idx = operator.index(orig_idx)
    if not 0 <= orig_idx < n:
        raise StartIndexError(f"State index {orig_idx} outside the state space [0, {n}).")

    if spy is None:
        spy = pattern(chain)
    rng = np.random.default_rng(random_state)

    cols = spy.indices[spy.indptr[orig_idx]:spy.indptr[orig_idx + 1]]
    if cols.size == 0:
        return np.inf, int(orig_idx)

    Q = chain.sparse_generator
    start, end = Q.indptr[orig_idx], Q.indptr[orig_idx + 1]
    positions = np.searchsorted(Q.indices[start:end], cols)
    rates = Q.data[start:end][positions]

    clocks = rng.exponential(scale=1.0 / rates)
    idx = int(np.argmin(clocks))

    return float(clocks[idx]), int(cols[idx])


def random_sample(
    chain: ContinuousTimeMarkovChain,
    start: int = constants.DEFAULT_START_INDEX,
    num_draws: int = constants.DEFAULT_NUM_DRAWS,
    random_state: RandomState = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Simulate a chain path jump by jump.

    Args:
        chain: Markov chain
        start: Index of the initial state
        num_draws: Number of jumps to draw
        random_state: Seed or numpy Generator

    Returns:
        Tuple of (cumulative elapsed times, state indices), both of length
        num_draws + 1
    """
    n = chain.n_states
    start = operator.index(start)
    if not 0 <= start < n:
        raise StartIndexError(f"Starting index {start} outside the state space [0, {n}).")

    num_draws = operator.index(num_draws)
    if num_draws < 0:
        raise ValueError("Number of draws must be non-negative")

    rng = np.random.default_rng(random_state)

    spy = pattern(chain)
    degenerate = spy.nnz == 0

    traj = np.empty(num_draws + 1, dtype=np.int64)
    traj[0] = start

    times = np.empty(num_draws + 1, dtype=np.float64)
    times[0] = 0.0

    if not degenerate:
        for draw in range(num_draws):
            delta, traj[draw + 1] = conditional_draw(chain, traj[draw], spy, rng)
            times[draw + 1] = times[draw] + delta
    else:
        # No state can be left
        traj[1:] = start
        times[1:] = np.inf

    logger.debug(f"Sampled {num_draws} draws from state {start}")

    return times, traj


def sample_paths(
    chain: ContinuousTimeMarkovChain,
    n_paths: int,
    start: int = constants.DEFAULT_START_INDEX,
    num_draws: int = constants.DEFAULT_NUM_DRAWS,
    seed: Optional[int] = None
) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Independent trajectories from the same initial state.

    Every path gets its own random stream spawned from ``seed``, so paths
    can be generated in any order or in parallel.
    """
    if n_paths <= 0:
        raise ValueError("Number of paths must be positive")

    streams = np.random.SeedSequence(seed).spawn(n_paths)
    return [random_sample(chain, start, num_draws, np.random.default_rng(s)) for s in streams]


def trajectory_frame(
    chain: ContinuousTimeMarkovChain,
    times: np.ndarray,
    states: np.ndarray
) -> pd.DataFrame:
    """Trajectory as a DataFrame with elapsed time, state index and state label"""
    labels = np.empty(chain.n_states, dtype=object)
    labels[:] = list(chain.states)
    states = np.asarray(states, dtype=np.int64)
    return pd.DataFrame({
        "time": np.asarray(times, dtype=np.float64),
        "index": states,
        "state": labels[states]
    })


def time_in_states(
    chain: ContinuousTimeMarkovChain,
    times: np.ndarray,
    states: np.ndarray
) -> pd.Series:
    """
    Fraction of elapsed time spent in each state along a trajectory.

    Infinite holding times (absorption) are left out.
    """
    times = np.asarray(times, dtype=np.float64)
    states = np.asarray(states, dtype=np.int64)

    with np.errstate(invalid="ignore"):
        durations = np.diff(times)
    finite = np.isfinite(durations)

    occupation = np.bincount(
        states[:-1][finite],
        weights=durations[finite],
        minlength=chain.n_states
    )
    total = occupation.sum()
    if total <= 0:
        raise ValueError("Trajectory has no finite holding time")

    return pd.Series(occupation / total, index=list(chain.states), name="time_fraction")
