"""
Custom exception classes for the markov_chains package
"""
from typing import Optional


class MarkovChainError(Exception):
    """Base exception for markov_chains"""
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(MarkovChainError):
    """Invalid chain or grid data"""
    pass


class NotSquareError(ValidationError):
    """Infinitesimal generator is not a square matrix"""
    def __init__(self, message: str):
        super().__init__(message, error_code="not_square")


class RowSumNonzeroError(ValidationError):
    """A generator row does not sum to zero"""
    def __init__(self, message: str):
        super().__init__(message, error_code="row_sum_nonzero")


class PositiveDiagonalError(ValidationError):
    """A generator diagonal element is positive"""
    def __init__(self, message: str):
        super().__init__(message, error_code="positive_diagonal")


class SizeMismatchError(ValidationError):
    """Generator and state vector sizes disagree"""
    def __init__(self, message: str):
        super().__init__(message, error_code="size_mismatch")


class GridError(ValidationError):
    """Discretization grid cannot be used"""
    def __init__(self, message: str):
        super().__init__(message, error_code="invalid_grid")


class SimulationError(MarkovChainError):
    """Solver and sampler errors"""
    pass


class NonConvergenceError(SimulationError):
    """Stationary distribution iteration did not meet the tolerance"""
    def __init__(self, message: str, iterations: int, supnorm: float):
        super().__init__(message, error_code="non_convergence")
        self.iterations = iterations
        self.supnorm = supnorm


class StartIndexError(MarkovChainError, IndexError):
    """Starting index lies outside the state space"""
    def __init__(self, message: str):
        super().__init__(message, error_code="start_index")


class ConfigurationError(MarkovChainError):
    """Exception raised for configuration errors"""
    pass
