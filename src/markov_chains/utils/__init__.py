"""
Shared utilities: exceptions, constants and logging setup
"""

from .exceptions import (
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
    ConfigurationError,
)
from .logging_config import setup_logging

__all__ = [
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
    "ConfigurationError",
    "setup_logging",
]
