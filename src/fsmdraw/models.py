"""
Pydantic data models for fsmdraw edge geometry.

Node and edge inputs, derived arc/arrowhead shapes, and the persisted
diagram document all flow through these validated models.
"""

import math
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


MAX_CHORD_HEIGHT = 1e9
DEFAULT_CHORD_HEIGHT = -100000.0
DEFAULT_LOOP_ANGLE = math.pi / 4

FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]


class Side(int, Enum):
    """Which of the two circles through the node centers an edge uses."""
    POSITIVE = 1
    NEGATIVE = -1

    @classmethod
    def from_turn(cls, turn):
        """Map the editor's turn flag onto a side."""
        return cls.POSITIVE if turn else cls.NEGATIVE

    @property
    def turn(self):
        return self is Side.POSITIVE


class EdgeDirection(str, Enum):
    """Which arrowheads an edge carries."""
    NONE = "NONE"
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"


def clamp_height(height):
    """
    Clamp a chord height to the finite range the arc fit supports.

    Raises ValueError for NaN.
    """
    height = float(height)
    if math.isnan(height):
        raise ValueError("chord height must not be NaN")
    return max(-MAX_CHORD_HEIGHT, min(MAX_CHORD_HEIGHT, height))


class NodeGeometry(BaseModel):
    """Center and radius of a circular node."""
    center: List[FiniteFloat] = Field(..., min_length=2, max_length=2)
    radius: float = Field(..., gt=0, allow_inf_nan=False)

    model_config = ConfigDict(extra="forbid", frozen=True)


class TwoPointArc(BaseModel):
    """Geometry kind of an edge between two distinct nodes."""
    kind: Literal["arc"] = "arc"
    height: float
    side: Side

    model_config = ConfigDict(extra="forbid", frozen=True)


class SelfLoop(BaseModel):
    """Geometry kind of an edge from a node to itself."""
    kind: Literal["loop"] = "loop"
    angle: float

    model_config = ConfigDict(extra="forbid", frozen=True)


EdgeGeometryKind = Union[TwoPointArc, SelfLoop]


class EdgeCurvature(BaseModel):
    """The parameters that fix one edge's rendered shape."""
    height: float = DEFAULT_CHORD_HEIGHT
    side: Side = Side.POSITIVE
    loop_angle: float = Field(default=DEFAULT_LOOP_ANGLE, allow_inf_nan=False)
    direction: EdgeDirection = EdgeDirection.SINGLE

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("height")
    @classmethod
    def _clamp_height(cls, value):
        return clamp_height(value)


class EdgeRecord(BaseModel):
    """
    An edge as seen by the geometry engine.

    Node identity is carried by self_loop; two distinct nodes that happen
    to share a position are not a loop.
    """
    start: NodeGeometry
    end: NodeGeometry
    curvature: EdgeCurvature = Field(default_factory=EdgeCurvature)
    self_loop: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _loop_uses_one_node(self):
        if self.self_loop and self.start != self.end:
            raise ValueError("a self-loop must start and end on the same node")
        return self

    @classmethod
    def loop(cls, node, curvature=None):
        """Build a self-loop edge on a single node."""
        return cls(
            start=node,
            end=node,
            curvature=curvature or EdgeCurvature(),
            self_loop=True,
        )

    @property
    def kind(self) -> EdgeGeometryKind:
        """The tagged geometry variant used to dispatch arc computations."""
        if self.self_loop:
            return SelfLoop(angle=self.curvature.loop_angle)
        return TwoPointArc(height=self.curvature.height, side=self.curvature.side)


class ArcDescriptor(BaseModel):
    """
    A drawable circular arc.

    sweep_start and sweep_extent are radians in the caller's own frame,
    swept in the direction of increasing angle. The screen_* properties
    give the same arc in degrees for y-down screens whose arc primitives
    measure angles counter-clockwise as seen on screen.
    """
    center: List[float] = Field(..., min_length=2, max_length=2)
    radius: float
    sweep_start: float
    sweep_extent: float

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def sweep_end(self):
        return self.sweep_start + self.sweep_extent

    @property
    def screen_start_deg(self):
        return -math.degrees(self.sweep_end)

    @property
    def screen_extent_deg(self):
        return math.degrees(self.sweep_extent)

    def point_at(self, angle):
        """Point on the arc's circle at the given polar angle."""
        return [
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        ]


class ArcGeometry(ArcDescriptor):
    """Arc fitted through the centers of two distinct nodes."""
    height: float
    side: Side
    angle_at_start: float
    angle_at_end: float

    @property
    def sagitta(self):
        """Distance from the chord midpoint to the far point of the drawn arc."""
        return self.radius + self.side.value * self.height


class LoopGeometry(ArcDescriptor):
    """Fixed 270 degree loop drawn beside a node."""
    loop_angle: float


class Arrowhead(BaseModel):
    """Arrowhead triangle: two base corners and the tip."""
    left: List[float] = Field(..., min_length=2, max_length=2)
    right: List[float] = Field(..., min_length=2, max_length=2)
    tip: List[float] = Field(..., min_length=2, max_length=2)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def base(self):
        return [(self.left[0] + self.right[0]) / 2, (self.left[1] + self.right[1]) / 2]

    def points(self):
        """Polygon vertices in left, right, tip order."""
        return [self.left, self.right, self.tip]


class EdgeShape(BaseModel):
    """Everything a renderer needs to paint one edge."""
    arc: Union[ArcGeometry, LoopGeometry]
    path: str
    polyline: List[List[float]] = Field(default_factory=list)
    arrowheads: List[Arrowhead] = Field(default_factory=list)
    label_anchor: List[float] = Field(..., min_length=2, max_length=2)

    model_config = ConfigDict(extra="forbid")


# Persisted diagram format

class DiagramNode(BaseModel):
    """A node as stored in a diagram file."""
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)
    radius: float = Field(..., gt=0, allow_inf_nan=False)
    is_start: bool = False
    is_accept: bool = False
    label: str = ""

    model_config = ConfigDict(extra="forbid")

    def geometry(self):
        return NodeGeometry(center=[self.x, self.y], radius=self.radius)


class DiagramEdge(BaseModel):
    """
    An edge as stored in a diagram file.

    Self-loops store angle; other edges store arc_chord_height and
    arc_side.
    """
    node_start: int = Field(..., ge=0)
    node_end: int = Field(..., ge=0)
    edge_direction: EdgeDirection
    label: str = ""
    angle: Optional[FiniteFloat] = None
    arc_chord_height: Optional[float] = None
    arc_side: Optional[Side] = None

    model_config = ConfigDict(extra="forbid")

    @property
    def is_self_loop(self):
        return self.node_start == self.node_end

    @field_validator("arc_chord_height")
    @classmethod
    def _clamp_height(cls, value):
        if value is None:
            return value
        return clamp_height(value)

    @model_validator(mode="after")
    def _curvature_fields_present(self):
        if self.is_self_loop:
            if self.angle is None:
                raise ValueError("self-loop edge requires angle")
        elif self.arc_chord_height is None or self.arc_side is None:
            raise ValueError("edge requires arc_chord_height and arc_side")
        return self


class DiagramDocument(BaseModel):
    """Root of a persisted diagram: nodes, then edges referencing them by index."""
    nodes: List[DiagramNode] = Field(default_factory=list)
    edges: List[DiagramEdge] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _edge_indices_in_range(self):
        count = len(self.nodes)
        for i, edge in enumerate(self.edges):
            if edge.node_start >= count:
                raise ValueError(f"edge {i}: node_start index {edge.node_start} is out of bounds")
            if edge.node_end >= count:
                raise ValueError(f"edge {i}: node_end index {edge.node_end} is out of bounds")
        return self
