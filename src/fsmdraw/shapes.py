"""
Edge shape assembly for fsmdraw.

Turns edges into the drawable shapes a renderer paints: the arc, its SVG
path, the arrowheads its direction asks for, and the label anchor.
Nothing is cached; every call derives shapes from the current node
positions.
"""

from fsmdraw.config import EngineConfig
from fsmdraw.geometry.arc_model import arc_to_svg_path, edge_arc, label_anchor, sample_arc
from fsmdraw.geometry.arrowheads import backward, forward
from fsmdraw.geometry.hit_test import intersects
from fsmdraw.geometry.vectors import DegenerateGeometry
from fsmdraw.io.diagram_json import edge_records
from fsmdraw.models import EdgeDirection, EdgeShape
from fsmdraw.tracer import get_tracer, trace


def arrowheads_for(edge, arrow_size):
    """
    Arrowheads required by an edge's direction.

    NONE draws none, SINGLE draws the forward arrow, DOUBLE draws both.
    """
    direction = edge.curvature.direction
    if direction is EdgeDirection.NONE:
        return []
    if direction is EdgeDirection.SINGLE:
        return [forward(edge, arrow_size)]
    return [forward(edge, arrow_size), backward(edge, arrow_size)]


def build_edge_shape(edge, config=None):
    """
    Build the full drawable shape of one edge.

    Raises DegenerateGeometry when a two-node edge's centers coincide.
    """
    config = config or EngineConfig()

    arc = edge_arc(edge)
    return EdgeShape(
        arc=arc,
        path=arc_to_svg_path(arc),
        polyline=sample_arc(arc, config.path.sample_points),
        arrowheads=arrowheads_for(edge, config.arrow.size),
        label_anchor=label_anchor(edge, config.label.offset),
    )


@trace(label="build_diagram_shapes")
def build_diagram_shapes(document, config=None):
    """
    Build shapes for every edge of a diagram.

    Edges that cannot be drawn (coincident node centers) are logged and
    yield None, so the result stays index-aligned with document.edges.
    """
    tracer = get_tracer()
    config = config or EngineConfig()

    shapes = []
    skipped = 0
    for i, edge in enumerate(edge_records(document)):
        try:
            shapes.append(build_edge_shape(edge, config))
        except DegenerateGeometry as e:
            tracer.event(f"Skipping edge {i}: {e}", level="WARN")
            shapes.append(None)
            skipped += 1

    tracer.event(f"Built {len(shapes) - skipped} edge shapes, skipped {skipped}")

    return shapes


@trace(label="edges_at")
def edges_at(document, point, config=None):
    """
    Indices of all edges under a point, in paint order.

    Undrawable edges are logged and never hit.
    """
    tracer = get_tracer()
    config = config or EngineConfig()
    tolerance = config.hit_test.radius_tolerance

    hits = []
    for i, edge in enumerate(edge_records(document)):
        try:
            if intersects(edge, point, tolerance):
                hits.append(i)
        except DegenerateGeometry as e:
            tracer.event(f"Ignoring edge {i} for hit-testing: {e}", level="WARN")

    tracer.event(f"Point hits {len(hits)} edges", point=point)

    return hits


def topmost(hits):
    """Last of the hit edge indices, painted on top, or None."""
    return hits[-1] if hits else None


def pick_edge(document, point, config=None):
    """
    Index of the edge under a point, or None.

    When edges overlap the last one wins, as it is painted on top.
    """
    return topmost(edges_at(document, point, config))
