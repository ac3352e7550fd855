"""
Arrowhead construction for fsmdraw edges.

For a two-node edge the arrow tip is placed where the arc crosses the
anchor node's boundary. A chord of length node.radius on a circle of
radius R subtends 2*theta with sin(theta) = node.radius / (2R), so
rotating the center-to-node radius vector by 2*theta lands on that
crossing. The rotated vector is the quasi-tangent: it points from the
arc center to the tip, and its quarter-turn is the arc's tangent there.
The sign of cos(theta) picks which of the two crossings lies on the
drawn arc.

The base sits ARROW_SIZE back along the tangent and the two corners
ARROW_SIZE / 2 either side of it, so every arrowhead has the same
on-screen size regardless of curvature.
"""

import math

from fsmdraw.config import ARROW_SIZE
from fsmdraw.geometry.orientation import base_sign, tip_cos_sign
from fsmdraw.geometry.vectors import (
    as_vec, chord_frame, norm, rotate90, rotate_by_negative, to_list, unit_at,
)
from fsmdraw.models import Arrowhead, SelfLoop, clamp_height


def forward(edge, arrow_size=ARROW_SIZE):
    """Arrowhead pointing into the end node."""
    return _build(edge, True, arrow_size)


def backward(edge, arrow_size=ARROW_SIZE):
    """Arrowhead pointing into the start node."""
    return _build(edge, False, arrow_size)


def _build(edge, is_forward, arrow_size):
    kind = edge.kind
    if isinstance(kind, SelfLoop):
        return _loop_arrowhead(edge.start, kind.angle, is_forward, arrow_size)
    return _arc_arrowhead(edge.start, edge.end, kind.height, kind.side, is_forward, arrow_size)


def _arc_arrowhead(start, end, height, side, is_forward, arrow_size):
    height = clamp_height(height)
    half, _, perp = chord_frame(start.center, end.center)

    # Radius vector from the arc center to the anchor node. Forward and
    # backward take the perpendicular component with opposite signs.
    if is_forward:
        anchor = end
        radius_vec = half - perp * height
    else:
        anchor = start
        radius_vec = -perp * height - half
    radius = norm(radius_vec)

    # A node wider than the arc's diameter caps theta at 90 degrees
    sin_theta = min(anchor.radius / (2 * radius), 1.0)
    cos_theta = math.sqrt(1 - sin_theta * sin_theta) * tip_cos_sign(side, is_forward)

    sin_two_theta = 2 * sin_theta * cos_theta
    cos_two_theta = cos_theta * cos_theta - sin_theta * sin_theta

    quasi_tangent = rotate_by_negative(radius_vec, sin_two_theta, cos_two_theta)

    tip = as_vec(anchor.center) - radius_vec + quasi_tangent
    base = tip + base_sign(side, is_forward) * rotate90(quasi_tangent) / radius * arrow_size
    spread = quasi_tangent / radius * (arrow_size / 2)

    return Arrowhead(
        left=to_list(base + spread),
        right=to_list(base - spread),
        tip=to_list(tip),
    )


def _loop_arrowhead(node, angle, is_forward, arrow_size):
    """
    Self-loop arrowhead at one of the loop's two boundary crossings.

    Forward sits at angle - 45 degrees, backward at angle + 45 degrees;
    both point radially into the node.
    """
    quarter = math.pi / 4
    tip_angle = angle - quarter if is_forward else angle + quarter
    spread_dir = unit_at(angle + quarter if is_forward else angle - quarter)

    center = as_vec(node.center)
    ray = unit_at(tip_angle)
    tip = center + ray * node.radius
    base = center + ray * (node.radius + arrow_size)
    spread = spread_dir * (arrow_size / 2)

    return Arrowhead(
        left=to_list(base + spread),
        right=to_list(base - spread),
        tip=to_list(tip),
    )
