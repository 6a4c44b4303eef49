import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest


def smooth_channel_solver(joint_xy, gamma, alpha, beta, epsilon):
    """Analytic encoder mixing the trivial and identity encoders with weight β/(1+β)"""
    n = joint_xy.shape[0]
    s = beta / (1.0 + beta)
    return (1.0 - s) * np.full((n, n), 1.0 / n) + s * np.eye(n)


def step_solver(joint_xy, gamma, alpha, beta, epsilon):
    """Encoder that jumps from trivial to identity at β = 1"""
    n = joint_xy.shape[0]
    if beta < 1:
        return np.full((n, n), 1.0 / n)
    return np.eye(n)


@pytest.fixture
def correlated_joint():
    return np.array([[0.5, 0.0], [0.0, 0.5]])


@pytest.fixture
def independent_joint():
    return np.outer([0.5, 0.5], [0.3, 0.7])


@pytest.fixture
def noisy_joint():
    return np.array([[0.35, 0.10, 0.05],
                     [0.05, 0.20, 0.05],
                     [0.02, 0.03, 0.15]])


@pytest.fixture
def smooth_solver():
    return smooth_channel_solver


@pytest.fixture
def jump_solver():
    return step_solver
