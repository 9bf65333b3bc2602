"""Tests for closed Jackson networks."""

import itertools
import math

import numpy as np
import pytest

from queuing_networks.closedJacksonNetwork import ClosedJacksonNetwork
from queuing_networks.networkErrors import (DimensionMismatch, InvalidModelParameter, NodeIndexOutOfRange,
                                            NonConservativeRouting,
                                            PopulationMismatch, PopulationNotPositive)
from queuing_networks.nodeSpec import NodeSpec


@pytest.fixture
def alternating():
    return ClosedJacksonNetwork([NodeSpec(1.0), NodeSpec(1.0)], [[0, 1], [1, 0]], 3)


@pytest.fixture
def net():
    nodes = [NodeSpec(1.0), NodeSpec(2.0, servers=2), NodeSpec(1.5, servers=np.inf)]
    Q = [[0.0, 0.6, 0.4], [1.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
    return ClosedJacksonNetwork(nodes, Q, 4)


def test_two_node_alternating_network(alternating):
    # Visit ratios scaled to 1 each, g(n) = 1, G(2, 3) = 4
    assert math.isclose(alternating.out['G'], 4.0)
    for i in (1, 2):
        np.testing.assert_allclose(alternating.Pi([0, 1, 2, 3], i), [0.25] * 4, atol=1e-9)
    assert math.isclose(alternating.Pn([1, 2]), 0.25)
    np.testing.assert_allclose(alternating.out['lambda'], [0.75, 0.75])
    np.testing.assert_allclose(alternating.out['rho'], [0.75, 0.75])
    np.testing.assert_allclose(alternating.out['n'], [1.5, 1.5])


def test_joint_probabilities_sum_to_one(net):
    total = sum([net.Pn(n) for n in itertools.product(range(net.N + 1), repeat=net.M) if sum(n) == net.N])
    assert abs(total - 1) < 1e-9


def test_marginals_sum_to_one(net):
    for i in range(1, net.M + 1):
        assert abs(net.Pi(np.arange(net.N + 1), i).sum() - 1) < 1e-9


def test_marginal_is_sum_of_joint_probabilities(net):
    n = [n for n in itertools.product(range(net.N + 1), repeat=net.M) if sum(n) == net.N]
    for k in range(net.N + 1):
        expected = sum([net.Pn(state) for state in n if state[1] == k])
        assert math.isclose(net.Pi(k, 2), expected, abs_tol=1e-12)


def test_pi_keeps_input_order_and_handles_outside_values(net):
    values = net.Pi([3, 0, 2], 1)
    np.testing.assert_allclose(values, [net.Pi(3, 1), net.Pi(0, 1), net.Pi(2, 1)])
    assert net.Pi(net.N + 1, 1) == 0.0
    assert net.Pi(-1, 1) == 0.0
    assert isinstance(net.Pi(0, 1), float)


def test_single_node_network_holds_whole_population():
    net = ClosedJacksonNetwork([NodeSpec(2.0)], [[1.0]], 4)
    g = net.engine.g[0]
    expected = np.zeros(5)
    expected[4] = g[4] / net.engine.normalizationConstant()
    np.testing.assert_allclose(net.Pi(range(5), 1), expected)
    assert math.isclose(net.Pi(4, 1), 1.0)
    assert math.isclose(net.Pn([4]), 1.0)


def test_max_customers_is_population(net):
    assert net.maxCustomers() == 4


def test_out_is_consistent(net):
    np.testing.assert_allclose(net.out['t'], net.out['n'] / net.out['lambda'])
    assert math.isclose(net.out['n'].sum(), net.N)
    assert net.out['no'][2] == 0.0
    np.testing.assert_allclose(net.out['V'], net.N / net.out['lambda'])


def test_joint_probability_errors(net):
    with pytest.raises(PopulationMismatch):
        net.Pn([1, 1, 1])
    with pytest.raises(DimensionMismatch):
        net.Pn([2, 2])


def test_node_index_errors(net):
    with pytest.raises(NodeIndexOutOfRange):
        net.Pi(0, 0)
    with pytest.raises(NodeIndexOutOfRange):
        net.Pi(0, 4)


def test_constructor_errors():
    with pytest.raises(PopulationNotPositive):
        ClosedJacksonNetwork([NodeSpec(1.0), NodeSpec(1.0)], [[0, 1], [1, 0]], 0)
    with pytest.raises(NonConservativeRouting):
        ClosedJacksonNetwork([NodeSpec(1.0), NodeSpec(1.0)], [[0, 0.9], [1, 0]], 2)


def test_population_above_total_capacity():
    with pytest.raises(InvalidModelParameter):
        ClosedJacksonNetwork([NodeSpec(1.0, capacity=1), NodeSpec(1.0, capacity=1)], [[0, 1], [1, 0]], 3)


def test_slow_servers_with_large_population():
    net = ClosedJacksonNetwork([NodeSpec(0.01), NodeSpec(0.01)], [[0, 1], [1, 0]], 200)
    assert abs(net.Pi(np.arange(201), 1).sum() - 1) < 1e-9
    assert np.isfinite(net.out['lambda']).all()
    np.testing.assert_allclose(net.out['rho'], [200 / 201] * 2)
