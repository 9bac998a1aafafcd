"""
Shared fixtures for the test suite
"""
import logging

import pytest
import numpy as np

from markov_chains import ContinuousTimeMarkovChain, ornstein_uhlenbeck


@pytest.fixture
def symmetric_generator():
    """Two states, rate 2 in each direction"""
    return np.array([
        [-2.0, 2.0],
        [2.0, -2.0]
    ])


@pytest.fixture
def ergodic_generator():
    """Irreducible three-state generator"""
    return np.array([
        [-3.0, 2.0, 1.0],
        [1.0, -2.0, 1.0],
        [2.0, 2.0, -4.0]
    ])


@pytest.fixture
def ergodic_chain(ergodic_generator):
    return ContinuousTimeMarkovChain(ergodic_generator, ["bear", "flat", "bull"])


@pytest.fixture
def ou_chain():
    """Ornstein-Uhlenbeck process with unit variance parameters on a symmetric grid"""
    grid = np.linspace(-4.0, 4.0, 321)
    return ContinuousTimeMarkovChain.from_diffusion(ornstein_uhlenbeck(kappa=1.0, theta=0.0, volatility=1.0), grid)


@pytest.fixture
def restore_package_logger():
    """Undo handler changes made by setup_logging"""
    package_logger = logging.getLogger("markov_chains")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate

    yield package_logger

    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
