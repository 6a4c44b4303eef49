"""
Statistics primitives for information-plane coordinates.

All entropies and informations are returned in bits. Distributions are
numpy arrays; conditional distributions are stored with the conditioning
variable on the rows, e.g. ``Pygx[x, y] = P(y|x)``.
"""

import numpy as np
from typing import Dict, Optional


def make_distribution(dist: np.ndarray, axis: Optional[int] = None) -> np.ndarray:
    """
    Normalize a non-negative array into a probability distribution

    Args:
        dist: Non-negative array of weights
        axis: Axis along which entries must sum to one (None normalizes the
            whole array)

    Returns:
        Normalized copy of ``dist``. Slices with no mass become uniform.
    """
    dist = np.asarray(dist, dtype=float)
    if axis is None:
        total = dist.sum()
        if total <= 0:
            return np.full(dist.shape, 1.0 / dist.size)
        return dist / total

    totals = dist.sum(axis=axis, keepdims=True)
    empty = totals <= 0
    safe_totals = np.where(empty, 1.0, totals)
    normalized = dist / safe_totals
    if np.any(empty):
        uniform = 1.0 / dist.shape[axis]
        normalized = np.where(np.broadcast_to(empty, dist.shape), uniform, normalized)
    return normalized


def entropy(dist: np.ndarray) -> float:
    """
    Calculate Shannon entropy H(X) = -∑_x p(x) log p(x)

    Args:
        dist: Probability distribution

    Returns:
        Entropy value in bits
    """
    dist = np.asarray(dist, dtype=float).ravel()
    pos_idx = dist > 0
    if not np.any(pos_idx):
        return 0.0
    entropy_value = -np.sum(dist[pos_idx] * np.log2(dist[pos_idx]))
    return max(0.0, float(entropy_value))


def renyi_entropy(dist: np.ndarray, gamma: float) -> float:
    """
    Calculate the Renyi entropy H_γ(X) = log(∑_x p(x)^γ) / (1 - γ)

    γ = 1 is the Shannon limit and is delegated to :func:`entropy`.

    Args:
        dist: Probability distribution
        gamma: Renyi order, in ]0, inf[

    Returns:
        Entropy value in bits
    """
    if gamma == 1:
        return entropy(dist)
    dist = np.asarray(dist, dtype=float).ravel()
    pos = dist[dist > 0]
    if pos.size == 0:
        return 0.0
    value = np.log2(np.sum(pos ** gamma)) / (1.0 - gamma)
    return max(0.0, float(value))


def conditional_entropy(p_cond: np.ndarray, p_marginal: np.ndarray) -> float:
    """H(B|A) = ∑_a p(a) H(p(b|a)), with ``p_cond[a, b] = p(b|a)``."""
    p_cond = np.asarray(p_cond, dtype=float)
    p_marginal = np.asarray(p_marginal, dtype=float)
    return float(sum(p_a * entropy(row) for p_a, row in zip(p_marginal, p_cond) if p_a > 0))


def mutual_information(p_cond: np.ndarray, p_marginal: np.ndarray) -> float:
    """
    Calculate I(A;B) from a conditional p(b|a) and the marginal p(a)

    I(A;B) = ∑_{a,b} p(a) p(b|a) log[p(b|a) / p(b)]

    Args:
        p_cond: Conditional distribution, ``p_cond[a, b] = p(b|a)``
        p_marginal: Marginal distribution p(a)

    Returns:
        Mutual information in bits
    """
    p_cond = np.asarray(p_cond, dtype=float)
    p_marginal = np.asarray(p_marginal, dtype=float)
    joint = p_marginal[:, np.newaxis] * p_cond
    p_b = joint.sum(axis=0)

    nonzero = joint > 0
    denom = p_marginal[:, np.newaxis] * p_b[np.newaxis, :]
    mi = np.sum(joint[nonzero] * np.log2(joint[nonzero] / denom[nonzero]))
    return max(0.0, float(mi))


def plane_statistics(p_t_given_x: np.ndarray, p_x: np.ndarray, p_y_given_x: np.ndarray,
                     gamma: float, alpha: float) -> Dict[str, float]:
    """
    Derive the information-plane coordinates of an encoder Q(T|X)

    Args:
        p_t_given_x: Encoder, ``p_t_given_x[x, t] = Q(t|x)``
        p_x: Marginal P(x)
        p_y_given_x: Channel, ``p_y_given_x[x, y] = P(y|x)``
        gamma: Renyi order of the horizontal axis
        alpha: Weight of H(T|X) in the horizontal axis

    Returns:
        Dictionary with 'Hga', 'Ixt', 'Ht', 'Hgt' and 'Iyt'
    """
    p_t_given_x = np.asarray(p_t_given_x, dtype=float)
    p_x = np.asarray(p_x, dtype=float)

    p_t = p_x @ p_t_given_x
    ht = entropy(p_t)
    hgt = renyi_entropy(p_t, gamma)
    ht_given_x = conditional_entropy(p_t_given_x, p_x)

    # q(y|t) = ∑_x p(x) q(t|x) p(y|x) / q(t)
    joint_ty = (p_t_given_x * p_x[:, np.newaxis]).T @ np.asarray(p_y_given_x, dtype=float)
    p_y_given_t = make_distribution(joint_ty, axis=1)

    return {
        'Hga': hgt - alpha * ht_given_x,
        'Ixt': max(0.0, ht - ht_given_x),
        'Ht': ht,
        'Hgt': hgt,
        'Iyt': mutual_information(p_y_given_t, p_t),
    }
