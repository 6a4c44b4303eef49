"""
Generalized Information Bottleneck Solver

Fixed-point iteration for the optimal encoder Q(T|X) of the functional

    L = H_γ(T) - α·H(T|X) - β·I(T;Y)

α = 1, γ = 1 is Tishby's IB, α = 0, γ = 1 is Strouse's deterministic IB.
The curve tracer only relies on the solver being deterministic and on its
horizontal-axis value Hga being non-decreasing in β.
"""

import numpy as np
from scipy.special import logsumexp
from typing import Optional

from ib_errors import SolverError
from ib_stats import make_distribution


class GeneralizedBottleneck:
    """Minimal generalized IB implementation for a single joint distribution"""

    def __init__(self, joint_xy: np.ndarray, gamma: float = 1.0, alpha: float = 1.0,
                 cardinality_t: Optional[int] = None, epsilon: float = 1e-12):
        self.joint_xy = np.asarray(joint_xy, dtype=float)
        self.gamma = gamma
        self.alpha = alpha
        self.epsilon = epsilon
        self.cardinality_x = self.joint_xy.shape[0]
        self.cardinality_y = self.joint_xy.shape[1]
        self.cardinality_t = self.cardinality_x if cardinality_t is None else cardinality_t

        # Compute marginal p(x) and channel p(y|x)
        self.p_x = make_distribution(self.joint_xy.sum(axis=1))
        self.p_y_given_x = make_distribution(self.joint_xy, axis=1)

        # ∑_y p(y|x) log p(y|x), the constant part of every KL divergence
        pos = self.p_y_given_x > 0
        log_p = np.zeros_like(self.p_y_given_x)
        log_p[pos] = np.log(self.p_y_given_x[pos])
        self.neg_entropy_y_given_x = np.sum(self.p_y_given_x * log_p, axis=1)

    def adaptive_initialization(self) -> np.ndarray:
        # Dominant peak per row, remaining mass spread evenly
        if self.cardinality_t == 1:
            return np.ones((self.cardinality_x, 1))
        p_t_given_x = np.full((self.cardinality_x, self.cardinality_t),
                              0.4 / (self.cardinality_t - 1))
        for i in range(self.cardinality_x):
            p_t_given_x[i, i % self.cardinality_t] = 0.6
        return p_t_given_x

    def calculate_marginal_t(self, p_t_given_x: np.ndarray) -> np.ndarray:
        return self.p_x @ p_t_given_x

    def calculate_p_y_given_t(self, p_t_given_x: np.ndarray) -> np.ndarray:
        joint_ty = (p_t_given_x * self.p_x[:, np.newaxis]).T @ self.p_y_given_x
        return make_distribution(joint_ty, axis=1)

    def kl_divergences(self, p_t_given_x: np.ndarray) -> np.ndarray:
        """
        Compute D_KL( p(y|x) || q(y|t) ) for all x, t

        Returns:
            (|X|, |T|) array of KL divergences in nats
        """
        log_p_y_given_t = np.log(np.maximum(self.calculate_p_y_given_t(p_t_given_x), self.epsilon))
        cross = self.p_y_given_x @ log_p_y_given_t.T
        return np.maximum(self.neg_entropy_y_given_x[:, np.newaxis] - cross, 0.0)

    def entropy_potential(self, p_t: np.ndarray) -> np.ndarray:
        """
        Negative gradient of H_γ(T) with respect to q(t), up to a constant

        Reduces to log q(t) for γ = 1.
        """
        p_t = np.maximum(p_t, self.epsilon)
        if self.gamma == 1:
            return np.log(p_t)
        powered = p_t ** (self.gamma - 1)
        return self.gamma / (self.gamma - 1) * powered / np.sum(p_t * powered)

    def update_step(self, p_t_given_x: np.ndarray, beta: float) -> np.ndarray:
        p_t = self.calculate_marginal_t(p_t_given_x)
        scores = self.entropy_potential(p_t)[np.newaxis, :] - beta * self.kl_divergences(p_t_given_x)

        if self.alpha == 0:
            # Deterministic limit: hard assignment to the best cluster
            new_p_t_given_x = np.zeros_like(p_t_given_x)
            new_p_t_given_x[np.arange(self.cardinality_x), np.argmax(scores, axis=1)] = 1.0
            return new_p_t_given_x

        logits = scores / self.alpha
        return np.exp(logits - logsumexp(logits, axis=1, keepdims=True))

    def optimize(self, beta: float, tolerance: float = 1e-8, max_iterations: int = 2000) -> np.ndarray:
        """
        Iterate the update equations until the encoder stops moving

        Args:
            beta: Trade-off parameter β, in [0, inf]
            tolerance: Convergence threshold on max |ΔQ(t|x)|
            max_iterations: Maximum number of iterations

        Returns:
            p_t_given_x: Optimized encoder Q(T|X)
        """
        if beta == 0:
            p_t_given_x = np.zeros((self.cardinality_x, self.cardinality_t))
            p_t_given_x[:, 0] = 1.0
            return p_t_given_x
        if np.isinf(beta):
            if self.cardinality_t < self.cardinality_x:
                raise SolverError("beta=inf needs at least |X| clusters", beta=beta)
            return np.eye(self.cardinality_x, self.cardinality_t)

        p_t_given_x = self.adaptive_initialization()
        for _ in range(max_iterations):
            new_p_t_given_x = self.update_step(p_t_given_x, beta)
            if not np.all(np.isfinite(new_p_t_given_x)):
                raise SolverError("Solver produced a non-finite encoder", beta=beta)
            max_diff = np.max(np.abs(new_p_t_given_x - p_t_given_x))
            p_t_given_x = new_p_t_given_x
            if max_diff < tolerance:
                break
        return p_t_given_x


def optimal_bottle(joint_xy: np.ndarray, gamma: float, alpha: float, beta: float,
                   epsilon: float, max_iterations: int = 2000,
                   cardinality: Optional[int] = None) -> np.ndarray:
    """
    Compute the optimal encoder Q(T|X) for a fixed β

    Module-level so it can be shipped to worker processes.

    Args:
        joint_xy: Joint distribution P(x,y) of shape (|X|, |Y|)
        gamma: Renyi order of H_γ(T)
        alpha: Weight of H(T|X)
        beta: Trade-off parameter β
        epsilon: Convergence threshold of the fixed-point iteration
        max_iterations: Iteration cap of the fixed-point iteration
        cardinality: Number of clusters |T| (default |X|)

    Returns:
        Encoder of shape (|X|, |T|) whose rows sum to one
    """
    solver = GeneralizedBottleneck(joint_xy, gamma=gamma, alpha=alpha, cardinality_t=cardinality)
    return solver.optimize(beta, tolerance=epsilon, max_iterations=max_iterations)
