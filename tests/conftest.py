"""Pytest configuration and shared fixtures for cableflow tests."""

import pytest

from cableflow import Cable, CableRouter, Channel, Node, Orientation


@pytest.fixture
def node_a():
    """Node A from the two-node scenario."""
    return Node("A", 400, 100, 80, 80)


@pytest.fixture
def node_b():
    """Node B, below and to the left of A."""
    return Node("B", 200, 300, 80, 80)


@pytest.fixture
def pair_nodes(node_a, node_b):
    """Two nodes whose centers are diagonal (|dx| == |dy|)."""
    return [node_a, node_b]


@pytest.fixture
def pair_cables():
    """Three cables between A and B."""
    return [
        Cable("c1", ["A", "B"], "blue"),
        Cable("c2", ["A", "B"], "orange"),
        Cable("c3", ["A", "B"], "green"),
    ]


@pytest.fixture
def colinear_nodes():
    """Three nodes in a row; B sits between A and C."""
    return [
        Node("A", 0, 0, 80, 80),
        Node("B", 200, 0, 80, 80),
        Node("C", 400, 0, 80, 80),
    ]


@pytest.fixture
def sample_nodes():
    """Five-node sample topology."""
    return [
        Node("A", 400, 100, 80, 80),
        Node("B", 200, 300, 80, 80),
        Node("C", 600, 300, 80, 80),
        Node("D", 500, 200, 80, 80),
        Node("E", 250, 125, 80, 80),
    ]


@pytest.fixture
def sample_channels():
    """One horizontal and one vertical channel."""
    return [
        Channel("channel1", Orientation.HORIZONTAL, 50, label="Channel"),
        Channel("channel2", Orientation.VERTICAL, 150, label="Channel2"),
    ]


@pytest.fixture
def sample_cables():
    """Mixed direct and channel-routed cables over the sample topology."""
    return [
        Cable("c1", ["A", "B"], "blue"),
        Cable("c2", ["A", "B"], "orange"),
        Cable("c3", ["A", "B"], "green"),
        Cable("c4", ["B", "C"], "red"),
        Cable("c5", ["B", "C"], "purple"),
        Cable("c6", ["A", "C"], "yellow"),
        Cable("c7", ["A", "C"], "cyan"),
        Cable("c8", ["A", "C"], "magenta"),
        Cable("c16", ["C", "channel1", "A"], "maroon"),
        Cable("c17", ["C", "channel1", "A"], "olive"),
        Cable("c18", ["C", "A"], "navy"),
        Cable("c19", ["B", "channel2", "E"], "navy"),
        Cable("c20", ["A", "channel1", "E"], "navy"),
        Cable("c21", ["C", "E"], "navy"),
        Cable("c22", ["D", "E"], "navy"),
        Cable("c23", ["D", "A"], "navy"),
    ]


@pytest.fixture
def router():
    """Default CableRouter instance."""
    return CableRouter()
