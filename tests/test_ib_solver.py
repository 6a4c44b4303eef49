import numpy as np
import pytest

from ib_errors import SolverError
from ib_solver import GeneralizedBottleneck, optimal_bottle
from ib_stats import plane_statistics


def _stats(joint_xy, encoder, gamma=1.0, alpha=1.0):
    p_x = joint_xy.sum(axis=1)
    p_y_given_x = joint_xy / p_x[:, np.newaxis]
    return plane_statistics(encoder, p_x, p_y_given_x, gamma, alpha)


@pytest.mark.parametrize("beta", [0.3, 1.5, 8.0])
@pytest.mark.parametrize("gamma,alpha", [(1.0, 1.0), (2.0, 1.0), (0.5, 0.5), (1.0, 0.0)])
def test_encoder_rows_are_distributions(noisy_joint, beta, gamma, alpha):
    encoder = optimal_bottle(noisy_joint, gamma, alpha, beta, 1e-8)
    assert encoder.shape == (3, 3)
    assert np.all(encoder >= 0)
    np.testing.assert_allclose(encoder.sum(axis=1), 1.0)


def test_trivial_betas(noisy_joint):
    collapsed = optimal_bottle(noisy_joint, 1.0, 1.0, 0.0, 1e-8)
    np.testing.assert_array_equal(collapsed[:, 0], 1.0)
    np.testing.assert_array_equal(optimal_bottle(noisy_joint, 1.0, 1.0, np.inf, 1e-8), np.eye(3))


def test_infinite_beta_needs_enough_clusters(noisy_joint):
    with pytest.raises(SolverError):
        optimal_bottle(noisy_joint, 1.0, 1.0, np.inf, 1e-8, cardinality=2)


def test_correlated_pair_below_and_above_transition(correlated_joint):
    low = _stats(correlated_joint, optimal_bottle(correlated_joint, 1.0, 1.0, 0.5, 1e-10))
    high = _stats(correlated_joint, optimal_bottle(correlated_joint, 1.0, 1.0, 20.0, 1e-10))
    assert low['Ixt'] == pytest.approx(0.0, abs=1e-3)
    assert high['Ixt'] == pytest.approx(1.0, abs=1e-3)
    assert high['Iyt'] == pytest.approx(1.0, abs=1e-3)


def test_independent_variables_keep_no_information(independent_joint):
    for beta in (0.5, 5.0, 50.0):
        stats = _stats(independent_joint, optimal_bottle(independent_joint, 1.0, 1.0, beta, 1e-8))
        assert stats['Iyt'] == pytest.approx(0.0, abs=1e-8)


def test_solver_is_deterministic(noisy_joint):
    first = optimal_bottle(noisy_joint, 2.0, 1.0, 3.0, 1e-8)
    second = optimal_bottle(noisy_joint, 2.0, 1.0, 3.0, 1e-8)
    np.testing.assert_array_equal(first, second)


def test_kl_divergences_vanish_on_identity_encoder(correlated_joint):
    model = GeneralizedBottleneck(correlated_joint)
    np.testing.assert_allclose(np.diag(model.kl_divergences(np.eye(2))), 0.0, atol=1e-9)


def test_entropy_potential_reduces_to_log_for_shannon():
    model = GeneralizedBottleneck(np.full((2, 2), 0.25), gamma=1.0)
    p_t = np.array([0.25, 0.75])
    np.testing.assert_allclose(model.entropy_potential(p_t), np.log(p_t))
