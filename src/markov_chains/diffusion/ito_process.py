"""
Itô diffusion processes: dX = μ(X) dt + σ(X) dW
"""
import numpy as np
from typing import Callable
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItoDiffusionProcess:
    """
    One-dimensional Itô diffusion described by its drift and volatility.

    Both functions map a state value to a real number. They are only
    evaluated while a generator is being built.

    See also https://en.wikipedia.org/wiki/It%C3%B4_diffusion
    """
    mu: Callable[[float], float]
    sigma: Callable[[float], float]

    def drift(self, grid: np.ndarray) -> np.ndarray:
        """Evaluate μ at every grid point"""
        return _evaluate(self.mu, grid)

    def volatility(self, grid: np.ndarray) -> np.ndarray:
        """Evaluate σ at every grid point"""
        return _evaluate(self.sigma, grid)


def _evaluate(fn: Callable[[float], float], grid: np.ndarray) -> np.ndarray:
    return np.fromiter((fn(float(x)) for x in grid), dtype=np.float64, count=len(grid))


def brownian_motion(drift: float = 0.0, volatility: float = 1.0) -> ItoDiffusionProcess:
    """Arithmetic Brownian motion: dX = μ dt + σ dW"""
    return ItoDiffusionProcess(
        mu=lambda x: drift,
        sigma=lambda x: volatility
    )


def ornstein_uhlenbeck(
    kappa: float = 1.0,
    theta: float = 0.0,
    volatility: float = 1.0
) -> ItoDiffusionProcess:
    """Ornstein-Uhlenbeck process: dX = κ(θ - X) dt + σ dW"""
    if kappa <= 0:
        raise ValueError("Mean reversion speed must be positive")
    return ItoDiffusionProcess(
        mu=lambda x: kappa * (theta - x),
        sigma=lambda x: volatility
    )


def geometric_brownian_motion(drift: float = 0.05, volatility: float = 0.2) -> ItoDiffusionProcess:
    """Geometric Brownian motion: dX = μX dt + σX dW"""
    return ItoDiffusionProcess(
        mu=lambda x: drift * x,
        sigma=lambda x: volatility * x
    )
