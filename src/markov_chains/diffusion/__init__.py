"""
Diffusion processes and their Markov chain approximation
"""

from .ito_process import (
    ItoDiffusionProcess,
    brownian_motion,
    ornstein_uhlenbeck,
    geometric_brownian_motion,
)
from .generator_builder import build_generator, validate_grid

__all__ = [
    "ItoDiffusionProcess",
    "brownian_motion",
    "ornstein_uhlenbeck",
    "geometric_brownian_motion",
    "build_generator",
    "validate_grid",
]
