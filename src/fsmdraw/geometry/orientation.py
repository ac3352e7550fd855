"""
Sign conventions derived from an edge's Side.

The side decides which circle an edge uses, which way its arc is swept,
which intersection with a node boundary carries the arrow tip, which way
the arrow base is offset, and which side the label sits on. All of those
signs are taken from here.
"""

from fsmdraw.models import Side


def sweep_order(side, at_start, at_end):
    """
    Order the arc's two endpoint values as (from, to).

    The drawn arc runs from `from` to `to` in the direction of increasing
    angle. POSITIVE sweeps from the end node to the start node.
    """
    if side is Side.POSITIVE:
        return at_end, at_start
    return at_start, at_end


def tip_cos_sign(side, forward):
    """Sign of cos(theta) choosing the boundary crossing that lies on the drawn arc."""
    sign = -side.value
    return sign if forward else -sign


def base_sign(side, forward):
    """Sign of the quarter-turn that moves the arrow base back along the arc."""
    sign = side.value
    return sign if forward else -sign


def label_sign(side):
    """Label offset direction along the chord perpendicular."""
    return side.value
