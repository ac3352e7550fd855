"""
Arc fitting for fsmdraw edges.

An edge between two nodes is drawn as an arc of the circle through both
node centers whose center sits `height` away from the chord midpoint
along the chord perpendicular. height = 0 gives a semicircle; large
|height| flattens the arc towards the straight chord. The side picks the
circle's traversal and therefore which of the two arcs is drawn.

A self-loop is not fitted at all: it is a fixed 270 degree arc of a
node-sized circle placed beside the node.
"""

import math

import numpy as np

from fsmdraw.config import ARC_SAMPLE_POINTS, LABEL_OFFSET
from fsmdraw.geometry.orientation import label_sign, sweep_order
from fsmdraw.geometry.vectors import (
    as_vec, chord_frame, norm, polar_angle, to_list, unit_at,
)
from fsmdraw.models import ArcGeometry, LoopGeometry, SelfLoop, clamp_height


SQRT2 = math.sqrt(2)
TWO_PI = 2 * math.pi
LOOP_EXTENT = 3 * math.pi / 2


def compute_arc(start, end, height, side):
    """
    Fit the arc of an edge between two distinct nodes.

    Args:
        start: NodeGeometry of the start node
        end: NodeGeometry of the end node
        height: signed distance from chord midpoint to arc center
        side: Side selecting traversal order

    Returns:
        ArcGeometry

    Raises:
        DegenerateGeometry: if the node centers coincide
    """
    height = clamp_height(height)
    start_c = as_vec(start.center)
    end_c = as_vec(end.center)

    half, _, perp = chord_frame(start_c, end_c)

    # Radius vector runs from the start center to the arc center
    radius_vec = perp * height + half
    center = start_c + radius_vec

    angle_at_start = polar_angle(start_c - center)
    angle_at_end = polar_angle(end_c - center)

    sweep_from, sweep_to = sweep_order(side, angle_at_start, angle_at_end)
    extent = (sweep_to - sweep_from) % TWO_PI
    if extent <= 0:
        extent += TWO_PI

    return ArcGeometry(
        center=to_list(center),
        radius=norm(radius_vec),
        sweep_start=sweep_from,
        sweep_extent=extent,
        height=height,
        side=side,
        angle_at_start=angle_at_start,
        angle_at_end=angle_at_end,
    )


def compute_self_loop(node, angle):
    """
    Build the fixed self-loop arc for a node.

    The loop circle has the node's radius and sits node.radius * sqrt(2)
    from the node center in direction `angle`, so it crosses the node
    boundary at angle +- 45 degrees. The 90 degrees of the loop hidden
    inside the node are left out of the sweep.
    """
    center = as_vec(node.center) + unit_at(angle) * node.radius * SQRT2

    return LoopGeometry(
        center=to_list(center),
        radius=node.radius,
        sweep_start=angle - 3 * math.pi / 4,
        sweep_extent=LOOP_EXTENT,
        loop_angle=angle,
    )


def edge_arc(edge):
    """Arc descriptor for any edge, dispatched on its geometry kind."""
    kind = edge.kind
    if isinstance(kind, SelfLoop):
        return compute_self_loop(edge.start, kind.angle)
    return compute_arc(edge.start, edge.end, kind.height, kind.side)


def arc_label_anchor(start, end, height, side, offset=LABEL_OFFSET):
    """
    Label position for a two-node edge.

    Sits `offset` beyond the far point of the drawn arc, on the chord
    perpendicular through the arc center.
    """
    height = clamp_height(height)
    start_c = as_vec(start.center)
    half, _, perp = chord_frame(start_c, end.center)
    radius = norm(perp * height + half)

    sign = label_sign(side)
    return to_list(start_c + sign * perp * (radius + sign * height + offset) + half)


def loop_label_anchor(node, angle, offset=LABEL_OFFSET):
    """Label position for a self-loop, beyond the loop's far point."""
    distance = node.radius * (SQRT2 + 1) + offset
    return to_list(as_vec(node.center) + unit_at(angle) * distance)


def label_anchor(edge, offset=LABEL_OFFSET):
    kind = edge.kind
    if isinstance(kind, SelfLoop):
        return loop_label_anchor(edge.start, kind.angle, offset)
    return arc_label_anchor(edge.start, edge.end, kind.height, kind.side, offset)


def sample_arc(arc, n_points=ARC_SAMPLE_POINTS):
    """
    Sample n_points + 1 points along an arc's sweep.

    Returns list of [x, y] from the sweep start to the sweep end.
    """
    angles = np.linspace(arc.sweep_start, arc.sweep_end, n_points + 1)
    xs = arc.center[0] + arc.radius * np.cos(angles)
    ys = arc.center[1] + arc.radius * np.sin(angles)
    return np.column_stack([xs, ys]).tolist()


def arc_to_svg_path(arc):
    """
    Convert an arc descriptor to an SVG path d attribute.

    SVG's y axis points down like the editor's, so increasing angle is
    sweep-flag 1. Full-circle sweeps are split in two arcs since a single
    SVG arc cannot end where it starts.
    """
    p0 = arc.point_at(arc.sweep_start)
    r = arc.radius
    parts = [f"M {p0[0]:.2f} {p0[1]:.2f}"]

    if arc.sweep_extent >= TWO_PI - 1e-9:
        mid = arc.point_at(arc.sweep_start + math.pi)
        parts.append(f"A {r:.2f} {r:.2f} 0 0 1 {mid[0]:.2f} {mid[1]:.2f}")
        parts.append(f"A {r:.2f} {r:.2f} 0 0 1 {p0[0]:.2f} {p0[1]:.2f}")
        return " ".join(parts)

    p1 = arc.point_at(arc.sweep_end)
    large_arc = 1 if arc.sweep_extent > math.pi else 0
    parts.append(f"A {r:.2f} {r:.2f} 0 {large_arc} 1 {p1[0]:.2f} {p1[1]:.2f}")
    return " ".join(parts)
