"""
Configuration management for markov_chains
"""

from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils import constants
from ..utils.exceptions import ConfigurationError


class SolverSettings(BaseSettings):
    """Defaults for the solvers when driven from the command line"""

    model_config = SettingsConfigDict(
        env_prefix="MARKOV_CHAINS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Stationary distribution
    step_size: float = Field(default=constants.DEFAULT_STEP_SIZE)
    max_iterations: int = Field(default=constants.DEFAULT_MAX_ITERATIONS)
    tolerance: float = Field(default=constants.DEFAULT_TOLERANCE)

    # Trajectory sampling
    num_draws: int = Field(default=constants.DEFAULT_NUM_DRAWS)
    start_index: int = Field(default=constants.DEFAULT_START_INDEX)
    random_seed: Optional[int] = Field(default=None)

    # Output
    logging_level: str = Field(default="INFO")
    display_limit: int = Field(default=constants.DISPLAY_LIMIT)

    @field_validator("step_size", "tolerance")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("max_iterations", "num_draws", "start_index")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("must be non-negative")
        return v

    @field_validator("logging_level")
    @classmethod
    def validate_logging_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")
        return v.upper()


def get_settings(**overrides) -> SolverSettings:
    """Build settings from the environment, with explicit overrides"""
    try:
        return SolverSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", error_code="invalid_settings") from e
