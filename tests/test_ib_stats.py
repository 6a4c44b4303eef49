import numpy as np
import pytest

from ib_stats import (conditional_entropy, entropy, make_distribution, mutual_information,
                      plane_statistics, renyi_entropy)


def test_entropy_of_uniform_distribution():
    assert entropy(np.full(4, 0.25)) == pytest.approx(2.0)
    assert entropy(np.array([1.0, 0.0])) == 0.0


def test_renyi_entropy_order_two():
    dist = np.array([0.5, 0.25, 0.25])
    assert renyi_entropy(dist, 2.0) == pytest.approx(-np.log2(0.375))


def test_renyi_entropy_approaches_shannon():
    dist = np.array([0.6, 0.3, 0.1])
    assert renyi_entropy(dist, 1.0) == pytest.approx(entropy(dist))
    assert renyi_entropy(dist, 1.0 + 1e-6) == pytest.approx(entropy(dist), abs=1e-5)


def test_renyi_entropy_is_non_increasing_in_order():
    dist = np.array([0.7, 0.2, 0.1])
    values = [renyi_entropy(dist, g) for g in (0.5, 1.0, 2.0, 5.0)]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_make_distribution_rows_and_empty_rows():
    dist = make_distribution(np.array([[2.0, 2.0], [0.0, 0.0]]), axis=1)
    np.testing.assert_allclose(dist, [[0.5, 0.5], [0.5, 0.5]])
    np.testing.assert_allclose(make_distribution(np.array([1.0, 3.0])), [0.25, 0.75])


def test_mutual_information_identity_and_independent():
    p_x = np.array([0.5, 0.5])
    assert mutual_information(np.eye(2), p_x) == pytest.approx(1.0)
    assert mutual_information(np.array([[0.3, 0.7], [0.3, 0.7]]), p_x) == pytest.approx(0.0, abs=1e-12)


def test_conditional_entropy_ignores_massless_rows():
    p_cond = np.array([[0.5, 0.5], [1.0, 0.0]])
    assert conditional_entropy(p_cond, np.array([0.0, 1.0])) == 0.0
    assert conditional_entropy(p_cond, np.array([1.0, 0.0])) == pytest.approx(1.0)


def test_plane_statistics_identity_encoder():
    p_x = np.array([0.5, 0.5])
    stats = plane_statistics(np.eye(2), p_x, np.eye(2), gamma=1.0, alpha=1.0)
    assert stats['Hga'] == pytest.approx(1.0)
    assert stats['Ixt'] == pytest.approx(1.0)
    assert stats['Ht'] == pytest.approx(1.0)
    assert stats['Hgt'] == pytest.approx(1.0)
    assert stats['Iyt'] == pytest.approx(1.0)


def test_plane_statistics_weights_conditional_entropy_by_alpha():
    p_x = np.array([0.5, 0.5])
    encoder = np.array([[0.9, 0.1], [0.1, 0.9]])
    ib = plane_statistics(encoder, p_x, np.eye(2), gamma=1.0, alpha=1.0)
    dib = plane_statistics(encoder, p_x, np.eye(2), gamma=1.0, alpha=0.0)
    assert ib['Hga'] == pytest.approx(ib['Ixt'])
    assert dib['Hga'] == pytest.approx(dib['Ht'])
    assert ib['Iyt'] == pytest.approx(ib['Ixt'])
