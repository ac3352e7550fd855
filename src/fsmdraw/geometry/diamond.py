"""
Diamond angle: a cheap monotonic stand-in for atan2.

theta maps a direction onto [0, 4) by walking the unit diamond
|x| + |y| = 1 instead of the unit circle. 0, 1, 2 and 3 are the +x, +y,
-x and -y axes. It orders directions exactly as the true polar angle
does but is not an angle: use it only to compare directions, never to
draw or measure.
"""

from fsmdraw.geometry.vectors import DegenerateGeometry


def theta(x, y):
    """
    Diamond angle of the direction (x, y).

    Scale invariant for positive scales. Raises DegenerateGeometry for
    the zero vector, which has no direction.
    """
    denom = abs(x) + abs(y)
    if denom == 0:
        raise DegenerateGeometry("Diamond angle is undefined at the origin")

    t = y / denom
    if x < 0:
        t = 2 - t
    elif y < 0:
        t = t + 4
    return t


def theta_of(v):
    return theta(v[0], v[1])


def in_sweep(t, t_from, t_to):
    """
    Check whether diamond angle t lies strictly inside the sweep from
    t_from to t_to (increasing direction).

    A sweep with t_from > t_to crosses the 4 -> 0 wrap.
    """
    if t_from < t_to:
        return t_from < t < t_to
    if t_from > t_to:
        return t < t_to or t > t_from
    return False
