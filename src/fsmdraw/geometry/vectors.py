"""
Plane vector helpers for the edge geometry engine.

Points and vectors are length-2 float64 numpy arrays.
"""

import math

import numpy as np


EPSILON = 1e-9


class DegenerateGeometry(ValueError):
    """Raised when a shape cannot be built, e.g. a chord of zero length."""


def as_vec(p):
    """Convert a point-like [x, y] to a float vector."""
    return np.asarray(p, dtype=float)


def norm(v):
    return math.hypot(v[0], v[1])


def rotate90(v):
    """Rotate a vector a quarter turn: (x, y) -> (-y, x)."""
    return np.array([-v[1], v[0]])


def rotate_by_negative(v, sin_a, cos_a):
    """Rotate v by -a, given sin(a) and cos(a)."""
    return np.array([
        cos_a * v[0] + sin_a * v[1],
        -sin_a * v[0] + cos_a * v[1],
    ])


def polar_angle(v):
    return math.atan2(v[1], v[0])


def unit_at(angle):
    """Unit vector at a polar angle."""
    return np.array([math.cos(angle), math.sin(angle)])


def to_list(v):
    return [float(v[0]), float(v[1])]


def chord_frame(start_center, end_center):
    """
    Half-chord vector, its length, and the unit perpendicular.

    The perpendicular is the half-chord rotated a quarter turn, so its
    orientation is fixed by the start -> end direction.
    """
    half = (as_vec(end_center) - as_vec(start_center)) / 2
    half_len = norm(half)
    if half_len < EPSILON:
        raise DegenerateGeometry(
            f"Node centers coincide at {to_list(as_vec(start_center))}: chord has zero length"
        )
    return half, half_len, rotate90(half) / half_len
