"""Tests for edge hit-testing."""

import math

import pytest

from fsmdraw.config import RADIUS_TOLERANCE
from fsmdraw.geometry.arc_model import compute_arc, compute_self_loop
from fsmdraw.geometry.hit_test import find_edges_at, intersects
from fsmdraw.geometry.vectors import DegenerateGeometry
from fsmdraw.models import EdgeCurvature, EdgeRecord, NodeGeometry, Side


def _node(x, y, r=30.0):
    return NodeGeometry(center=[x, y], radius=r)


class TestArcHit:
    """Tests for hit-testing two-node arcs."""

    def test_point_on_drawn_half(self, semicircle_edge):
        """Test the top of the upper semicircle is a hit."""
        assert intersects(semicircle_edge, [100.0, 100.0])

    def test_point_on_undrawn_half(self, semicircle_edge):
        """Test the other half of the same circle is not a hit."""
        assert not intersects(semicircle_edge, [100.0, -100.0])

    def test_tolerance_band(self, semicircle_edge):
        """Test points just inside and outside the tolerance band."""
        assert intersects(semicircle_edge, [100.0, 100.0 + RADIUS_TOLERANCE / 2])
        assert intersects(semicircle_edge, [100.0, 100.0 - RADIUS_TOLERANCE / 2])
        assert not intersects(semicircle_edge, [100.0, 100.0 + 2 * RADIUS_TOLERANCE])
        assert not intersects(semicircle_edge, [100.0, 100.0 - 2 * RADIUS_TOLERANCE])

    @pytest.mark.parametrize("height", [-400.0, -50.0, 0.0, 120.0, 900.0])
    @pytest.mark.parametrize("side", [Side.POSITIVE, Side.NEGATIVE])
    def test_radius_boundary_at_sweep_middle(self, make_edge, height, side):
        """Test on-radius hits and radius + 2*tolerance misses at the same angle."""
        start, end = _node(-40, 70), _node(160, -10)
        edge = make_edge(start, end, height=height, side=side)
        arc = compute_arc(start, end, height, side)
        angle = arc.sweep_start + arc.sweep_extent / 2
        direction = [math.cos(angle), math.sin(angle)]

        on_arc = [arc.center[0] + arc.radius * direction[0], arc.center[1] + arc.radius * direction[1]]
        far = arc.radius + 2 * RADIUS_TOLERANCE
        off_arc = [arc.center[0] + far * direction[0], arc.center[1] + far * direction[1]]

        assert intersects(edge, on_arc)
        assert not intersects(edge, off_arc)

    def test_custom_tolerance(self, semicircle_edge):
        """Test that a wider tolerance widens the band."""
        point = [100.0, 115.0]

        assert not intersects(semicircle_edge, point)
        assert intersects(semicircle_edge, point, tolerance=20.0)

    def test_sweep_crossing_wrap(self, make_edge):
        """Test an arc whose sweep crosses the +x axis where theta wraps."""
        edge = make_edge(_node(0, -100), _node(0, 100), height=0.0, side=Side.NEGATIVE)

        assert intersects(edge, [100.0, 0.0])
        assert intersects(edge, [100 * math.cos(-0.3), 100 * math.sin(-0.3)])
        assert intersects(edge, [100 * math.cos(0.3), 100 * math.sin(0.3)])
        assert not intersects(edge, [-100.0, 0.0])

    def test_positive_side_of_same_nodes(self, make_edge):
        """Test the POSITIVE twin of the wrapped arc covers the opposite half."""
        edge = make_edge(_node(0, -100), _node(0, 100), height=0.0, side=Side.POSITIVE)

        assert intersects(edge, [-100.0, 0.0])
        assert not intersects(edge, [100.0, 0.0])

    def test_near_straight_edge(self, left_node, right_node):
        """Test the default nearly straight edge is hit along the chord only."""
        edge = EdgeRecord(start=left_node, end=right_node)

        assert intersects(edge, [100.0, 0.0])
        assert intersects(edge, [150.0, 3.0])
        assert not intersects(edge, [100.0, 10.0])
        assert not intersects(edge, [300.0, 0.0])
        assert not intersects(edge, [-50.0, 0.0])

    def test_arc_center_is_not_a_hit(self, make_edge):
        """Test that the arc center misses even when the band covers it."""
        edge = make_edge(_node(0, -3, r=1), _node(0, 3, r=1), height=0.0)

        assert not intersects(edge, [0.0, 0.0], tolerance=6.0)

    def test_coincident_centers_raise(self, make_edge):
        """Test that hit-testing a degenerate edge fails explicitly."""
        edge = make_edge(_node(10, 10), _node(10, 10, r=5))

        with pytest.raises(DegenerateGeometry):
            intersects(edge, [10.0, 10.0])


class TestLoopHit:
    """Tests for hit-testing self-loops."""

    @pytest.mark.parametrize("angle", [i * math.pi / 8 for i in range(16)])
    def test_whole_loop_circle_is_sensitive(self, left_node, angle):
        """Test every direction around the loop circle hits, hidden quarter included."""
        edge = EdgeRecord.loop(left_node, EdgeCurvature(loop_angle=0.7))
        loop = compute_self_loop(left_node, 0.7)

        for delta in (-RADIUS_TOLERANCE / 2, 0.0, RADIUS_TOLERANCE / 2):
            r = left_node.radius + delta
            point = [loop.center[0] + r * math.cos(angle), loop.center[1] + r * math.sin(angle)]
            assert intersects(edge, point)

    def test_outside_band_misses(self, left_node):
        """Test points well off the loop circle miss."""
        edge = EdgeRecord.loop(left_node)
        loop = compute_self_loop(left_node, math.pi / 4)

        assert not intersects(edge, loop.center)
        far = left_node.radius + 2 * RADIUS_TOLERANCE
        assert not intersects(edge, [loop.center[0] + far, loop.center[1]])


class TestFindEdgesAt:
    """Tests for multi-edge hit lookup."""

    def test_returns_indices_in_order(self, left_node, right_node, semicircle_edge):
        """Test all hit edges are returned in input order."""
        straight = EdgeRecord(start=left_node, end=right_node)
        loop = EdgeRecord.loop(left_node)
        edges = [straight, semicircle_edge, loop, semicircle_edge]

        assert find_edges_at(edges, [100.0, 100.0]) == [1, 3]
        assert find_edges_at(edges, [100.0, 0.0]) == [0]
        assert find_edges_at(edges, [500.0, 500.0]) == []
