"""
Tests for the stationary distribution solver
"""
import pytest
import numpy as np
import pandas as pd
from scipy import sparse

from markov_chains import (
    ContinuousTimeMarkovChain,
    NonConvergenceError,
    SimulationError,
    stationary_distribution,
    stationary_series,
)


class TestStationaryDistribution:
    """Test the implicit fixed-point solver"""

    def test_symmetric_two_state_chain(self, symmetric_generator):
        """Test equal rates give a uniform distribution"""
        pi = stationary_distribution(ContinuousTimeMarkovChain(symmetric_generator))

        np.testing.assert_allclose(pi, [0.5, 0.5])

    def test_asymmetric_two_state_chain(self):
        """Test the closed form b / (a + b), a / (a + b)"""
        a, b = 1.0, 3.0
        chain = ContinuousTimeMarkovChain(np.array([[-a, a], [b, -b]]))

        np.testing.assert_allclose(stationary_distribution(chain), [b / (a + b), a / (a + b)], atol=1e-10)

    def test_probability_vector(self, ergodic_chain):
        """Test length, sign and normalization"""
        pi = stationary_distribution(ergodic_chain)

        assert pi.shape == (3,)
        assert pi.dtype == np.float64
        assert np.all(pi >= 0)
        assert pi.sum() == pytest.approx(1.0, abs=1e-14)

    def test_fixed_point(self, ergodic_chain, ergodic_generator):
        """Test that π Q vanishes"""
        pi = stationary_distribution(ergodic_chain)

        np.testing.assert_allclose(pi @ ergodic_generator, np.zeros(3), atol=1e-8)

    def test_matches_null_space(self, ergodic_generator):
        """Test against the left null vector of the generator"""
        eigenvals, eigenvecs = np.linalg.eig(ergodic_generator.T)
        reference = np.real(eigenvecs[:, np.argmin(np.abs(eigenvals))])
        reference = reference / reference.sum()

        pi = stationary_distribution(ContinuousTimeMarkovChain(ergodic_generator))
        np.testing.assert_allclose(pi, reference, atol=1e-8)

    def test_sparse_and_dense_agree(self, ergodic_generator):
        """Test that the generator format does not matter"""
        dense = stationary_distribution(ContinuousTimeMarkovChain(ergodic_generator))
        sparse_pi = stationary_distribution(ContinuousTimeMarkovChain(sparse.csr_matrix(ergodic_generator)))

        np.testing.assert_allclose(dense, sparse_pi, atol=1e-12)

    def test_single_state(self):
        """Test the trivial chain"""
        pi = stationary_distribution(ContinuousTimeMarkovChain(np.zeros((1, 1))))

        np.testing.assert_array_equal(pi, [1.0])

    def test_absorbing_state_collects_mass(self):
        """Test that all mass ends in the only absorbing state"""
        chain = ContinuousTimeMarkovChain(np.array([
            [-1.0, 1.0, 0.0],
            [0.5, -1.0, 0.5],
            [0.0, 0.0, 0.0]
        ]))

        np.testing.assert_allclose(stationary_distribution(chain), [0.0, 0.0, 1.0], atol=1e-6)

    def test_ornstein_uhlenbeck_approximation(self, ou_chain):
        """Test the discretized OU process against its Gaussian limit"""
        pi = stationary_distribution(ou_chain)
        grid = np.array(ou_chain.states)

        mean = np.sum(pi * grid)
        variance = np.sum(pi * (grid - mean) ** 2)

        assert pi.sum() == pytest.approx(1.0)
        assert mean == pytest.approx(0.0, abs=1e-6)
        # σ² / (2κ) with σ = κ = 1
        assert variance == pytest.approx(0.5, abs=0.05)
        np.testing.assert_allclose(pi, pi[::-1], atol=1e-7)


class TestNonConvergence:
    """Test that an unmet tolerance is reported"""

    def test_zero_iterations(self, ergodic_chain):
        """Test that no iterations cannot converge"""
        with pytest.raises(NonConvergenceError) as exc_info:
            stationary_distribution(ergodic_chain, max_iterations=0)

        assert exc_info.value.iterations == 0
        assert exc_info.value.error_code == "non_convergence"

    def test_small_step_size(self, ergodic_chain):
        """Test that tiny implicit steps exhaust the iteration budget"""
        with pytest.raises(NonConvergenceError) as exc_info:
            stationary_distribution(ergodic_chain, step_size=1e-3, max_iterations=2, tolerance=1e-12)

        assert exc_info.value.iterations == 2
        assert exc_info.value.supnorm > 1e-12
        assert isinstance(exc_info.value, SimulationError)

    def test_warning_is_logged(self, ergodic_chain, caplog):
        """Test that non-convergence is logged before raising"""
        with caplog.at_level("WARNING", logger="markov_chains"):
            with pytest.raises(NonConvergenceError):
                stationary_distribution(ergodic_chain, max_iterations=0)

        assert "did not converge" in caplog.text

    @pytest.mark.parametrize("kwargs", [
        {"step_size": 0.0},
        {"step_size": -1.0},
        {"max_iterations": -1},
        {"tolerance": 0.0},
    ])
    def test_invalid_parameters(self, ergodic_chain, kwargs):
        """Test parameter sanity checks"""
        with pytest.raises(ValueError):
            stationary_distribution(ergodic_chain, **kwargs)


class TestStationarySeries:
    """Test the labelled output"""

    def test_indexed_by_states(self, ergodic_chain):
        """Test that the series carries the state labels"""
        series = stationary_series(ergodic_chain)

        assert isinstance(series, pd.Series)
        assert list(series.index) == ["bear", "flat", "bull"]
        np.testing.assert_allclose(series.to_numpy(), stationary_distribution(ergodic_chain))

    def test_forwards_solver_parameters(self, ergodic_chain):
        """Test that solver options are passed through"""
        with pytest.raises(NonConvergenceError):
            stationary_series(ergodic_chain, max_iterations=0)


if __name__ == "__main__":
    pytest.main([__file__])
