"""Pytest fixtures for fsmdraw tests."""

import tempfile

import pytest

from fsmdraw.models import (
    DiagramDocument, DiagramEdge, DiagramNode, EdgeCurvature, EdgeDirection,
    EdgeRecord, NodeGeometry, Side,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture(autouse=True)
def reset_tracer():
    """Leave the global tracer disabled after every test."""
    yield
    from fsmdraw.tracer import configure_tracer
    configure_tracer(enabled=False)


@pytest.fixture
def default_config():
    """Create default engine configuration."""
    from fsmdraw.config import EngineConfig
    return EngineConfig()


@pytest.fixture
def left_node():
    return NodeGeometry(center=[0.0, 0.0], radius=30.0)


@pytest.fixture
def right_node():
    return NodeGeometry(center=[200.0, 0.0], radius=30.0)


def _make_edge(start, end, height=0.0, side=Side.POSITIVE, direction=EdgeDirection.SINGLE):
    return EdgeRecord(
        start=start,
        end=end,
        curvature=EdgeCurvature(height=height, side=side, direction=direction),
    )


@pytest.fixture
def make_edge():
    """Factory for two-node edges with the given curvature."""
    return _make_edge


@pytest.fixture
def semicircle_edge(left_node, right_node):
    """Edge (0,0) -> (200,0) drawn as the upper (+y) semicircle."""
    return _make_edge(left_node, right_node, height=0.0, side=Side.POSITIVE)


@pytest.fixture
def sample_document():
    """
    Three nodes, two of them stacked on the same spot, and four edges:
    near-straight, semicircular, a loop, and one between the stacked nodes.
    """
    return DiagramDocument(
        nodes=[
            DiagramNode(x=0, y=0, radius=30, is_start=True, label="q_0"),
            DiagramNode(x=200, y=0, radius=30, label="q_1"),
            DiagramNode(x=200, y=0, radius=20, is_accept=True, label="q_2"),
        ],
        edges=[
            DiagramEdge(node_start=0, node_end=1, edge_direction=EdgeDirection.SINGLE,
                        label="a", arc_chord_height=-100000.0, arc_side=Side.POSITIVE),
            DiagramEdge(node_start=1, node_end=0, edge_direction=EdgeDirection.DOUBLE,
                        label="b", arc_chord_height=0.0, arc_side=Side.POSITIVE),
            DiagramEdge(node_start=0, node_end=0, edge_direction=EdgeDirection.NONE,
                        label="c", angle=3.0),
            DiagramEdge(node_start=1, node_end=2, edge_direction=EdgeDirection.SINGLE,
                        label="d", arc_chord_height=10.0, arc_side=Side.NEGATIVE),
        ],
    )
