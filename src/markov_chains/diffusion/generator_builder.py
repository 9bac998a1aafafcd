"""
Finite-difference approximation of a diffusion by a continuous-time Markov chain
"""
import numpy as np
from scipy import sparse
from typing import Sequence, Union
import logging

from .ito_process import ItoDiffusionProcess
from ..utils.exceptions import GridError

logger = logging.getLogger(__name__)


def validate_grid(grid: Union[Sequence[float], np.ndarray]) -> np.ndarray:
    """Return the grid as a float array, rejecting grids the scheme cannot use"""
    grid = np.asarray(grid, dtype=np.float64)

    if grid.ndim != 1:
        raise GridError("Grid must be one-dimensional.")
    if grid.size < 2:
        raise GridError("Grid must contain at least two points.")
    if not np.all(np.isfinite(grid)):
        raise GridError("Grid points must be finite.")
    if np.any(np.diff(grid) <= 0):
        raise GridError("Grid must be strictly increasing.")

    return grid


def build_generator(
    process: ItoDiffusionProcess,
    grid: Union[Sequence[float], np.ndarray]
) -> sparse.csr_matrix:
    """
    Build the infinitesimal generator approximating a diffusion on a grid.

    Uses an upwind scheme: the drift only feeds the neighbour it points
    towards, the diffusion feeds both neighbours. Unequally spaced grids are
    supported. No flow leaves the first and last grid points, and the
    diagonal is the negated sum of both intensities, so rows sum to zero by
    construction.

    Args:
        process: Drift and volatility functions
        grid: Strictly increasing discretization points

    Returns:
        Sparse tridiagonal n x n generator
    """
    grid = validate_grid(grid)
    n = grid.size

    # Spacing below and above every grid point, replicated at the ends
    dS = np.diff(grid)
    dS_dwn = np.concatenate(([dS[0]], dS))
    dS_up = np.concatenate((dS, [dS[-1]]))
    dS_avg = (dS_up + dS_dwn) / 2

    drift = process.drift(grid)
    diffusion = process.volatility(grid) ** 2 / 2

    # Upwind intensities
    bwd = np.maximum(-drift, 0) / dS_dwn + diffusion / (dS_avg * dS_dwn)
    fwd = np.maximum(drift, 0) / dS_up + diffusion / (dS_avg * dS_up)

    bwd[0] = 0.0
    fwd[-1] = 0.0
    diag = -fwd - bwd

    generator = sparse.diags(
        [bwd[1:], diag, fwd[:-1]],
        offsets=[-1, 0, 1],
        shape=(n, n),
        format="csr"
    )

    logger.debug(f"Built {n}x{n} generator on grid [{grid[0]:.4g}, {grid[-1]:.4g}]")

    return generator
