"""
Diagram file format for fsmdraw.

A diagram is a JSON object with a "nodes" array and an "edges" array.
Edges reference nodes by index. A self-loop stores its loop angle; any
other edge stores arc_chord_height and arc_side (+1 or -1). Floats are
written with full precision so reloading reproduces the same geometry.
"""

import json
import os

from fsmdraw.models import (
    DiagramDocument, DiagramEdge, EdgeCurvature, EdgeDirection, EdgeRecord, Side,
)
from fsmdraw.tracer import get_tracer


def curvature_to_fields(curvature, self_loop):
    """
    Persisted curvature fields of an edge.

    Returns {"angle": ...} for a self-loop, otherwise
    {"arc_chord_height": ..., "arc_side": +1 | -1}.
    """
    if self_loop:
        return {"angle": curvature.loop_angle}
    return {
        "arc_chord_height": curvature.height,
        "arc_side": curvature.side.value,
    }


def curvature_from_fields(fields, self_loop, direction=EdgeDirection.SINGLE):
    """
    Rebuild an EdgeCurvature from persisted fields.

    Fields that do not apply to the edge's kind keep their defaults.
    """
    if self_loop:
        return EdgeCurvature(loop_angle=fields["angle"], direction=direction)
    return EdgeCurvature(
        height=fields["arc_chord_height"],
        side=Side(fields["arc_side"]),
        direction=direction,
    )


def edge_curvature(edge):
    """EdgeCurvature of a persisted DiagramEdge."""
    fields = edge.model_dump(include={"angle", "arc_chord_height", "arc_side"})
    return curvature_from_fields(fields, edge.is_self_loop, edge.edge_direction)


def make_edge(node_start, node_end, curvature, label=""):
    """Build a persisted DiagramEdge from an in-memory curvature."""
    self_loop = node_start == node_end
    return DiagramEdge(
        node_start=node_start,
        node_end=node_end,
        edge_direction=curvature.direction,
        label=label,
        **curvature_to_fields(curvature, self_loop),
    )


def edge_record(document, index):
    """
    EdgeRecord for the edge at `index`, with current node geometry.

    Loops are identified by node index, not by node position.
    """
    edge = document.edges[index]
    return EdgeRecord(
        start=document.nodes[edge.node_start].geometry(),
        end=document.nodes[edge.node_end].geometry(),
        curvature=edge_curvature(edge),
        self_loop=edge.is_self_loop,
    )


def edge_records(document):
    return [edge_record(document, i) for i in range(len(document.edges))]


def document_to_dict(document):
    """
    Plain dict in file field order, with only the curvature fields that
    apply to each edge.
    """
    data = document.model_dump(mode="json", exclude={"edges"})
    data["edges"] = []
    for edge in document.edges:
        item = edge.model_dump(mode="json", exclude={"angle", "arc_chord_height", "arc_side"})
        item.update(curvature_to_fields(edge_curvature(edge), edge.is_self_loop))
        data["edges"].append(item)
    return data


def parse_diagram(text):
    """Parse and validate diagram JSON text."""
    return DiagramDocument.model_validate_json(text)


def load_diagram(path):
    """
    Load a diagram file.

    Raises pydantic.ValidationError for malformed content.
    """
    tracer = get_tracer()

    with open(path, "r", encoding="utf-8") as f:
        document = parse_diagram(f.read())

    tracer.event(f"Loaded diagram: {path}", nodes=len(document.nodes), edges=len(document.edges))
    return document


def save_diagram(document, path, indent=2):
    """Write a diagram file."""
    tracer = get_tracer()

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(document_to_dict(document), f, indent=indent)

    tracer.event(f"Saved diagram: {path}")
