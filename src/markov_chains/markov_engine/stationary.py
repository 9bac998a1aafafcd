"""
Stationary distribution of a continuous-time Markov chain
"""
import numpy as np
import pandas as pd
from scipy import sparse
from scipy.sparse.linalg import splu
import logging

from .continuous_markov import ContinuousTimeMarkovChain
from ..utils import constants
from ..utils.exceptions import NonConvergenceError

logger = logging.getLogger(__name__)


def stationary_distribution(
    chain: ContinuousTimeMarkovChain,
    step_size: float = constants.DEFAULT_STEP_SIZE,
    max_iterations: int = constants.DEFAULT_MAX_ITERATIONS,
    tolerance: float = constants.DEFAULT_TOLERANCE
) -> np.ndarray:
    """
    Compute the stationary distribution π of a chain, π Q = 0.

    Takes implicit Euler steps of the Kolmogorov forward equation,
    (I - Δ Qᵀ) g = g₀, from the uniform distribution until the sup-norm of
    the update falls below the tolerance. A large step makes every solve
    land close to the stationary vector. The matrix is factorized once and
    stays sparse. Iterates are rescaled to unit mass after every solve.

    Very large intensities may need a smaller step size or more iterations.

    Args:
        chain: Markov chain
        step_size: Implicit step Δ
        max_iterations: Maximum number of linear solves
        tolerance: Convergence threshold on max|g - g₀|

    Returns:
        Probability vector over the chain's states, summing to 1

    Raises:
        NonConvergenceError: If the tolerance is not met within max_iterations
    """
    if step_size <= 0:
        raise ValueError("Step size must be positive")
    if max_iterations < 0:
        raise ValueError("Maximum number of iterations must be non-negative")
    if tolerance <= 0:
        raise ValueError("Tolerance must be positive")

    n = chain.n_states

    # Initial guess is uniform over all states
    g0 = np.full(n, 1.0 / n)
    g = g0

    B = sparse.identity(n, dtype=np.float64, format="csc") - step_size * chain.sparse_generator.T
    lu = splu(B.tocsc())

    it = 0
    supnorm = np.inf
    while supnorm > tolerance and it < max_iterations:
        g = lu.solve(g0)
        # Exact solves preserve mass, factorization rounding does not
        g = g / np.sum(g)
        supnorm = float(np.max(np.abs(g - g0)))
        g0 = g
        it += 1
        logger.debug(f"Iteration {it}: sup-norm of update {supnorm:.3e}")

    if not supnorm <= tolerance:
        logger.warning(
            f"Stationary distribution did not converge after {it} iterations "
            f"(sup-norm {supnorm:.3e}, tolerance {tolerance:.1e})"
        )
        raise NonConvergenceError(
            "Algorithm for finding the stationary distribution did not converge.",
            iterations=it,
            supnorm=supnorm
        )

    g = g / np.sum(g)

    logger.info(f"Stationary distribution found for {n} states in {it} iterations")

    return g


def stationary_series(chain: ContinuousTimeMarkovChain, **kwargs) -> pd.Series:
    """Stationary distribution indexed by the chain's state labels"""
    probabilities = stationary_distribution(chain, **kwargs)
    return pd.Series(probabilities, index=list(chain.states), name="probability")
