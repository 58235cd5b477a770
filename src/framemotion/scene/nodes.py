"""Scene graph node types.

Every node kind is a dataclass sharing the :class:`Node` base record.
The ``type`` field is the discriminant and uses the scene-file names.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import math


class NodeType(str, Enum):
    """Node discriminants."""

    RECT = "rect"
    ELLIPSE = "ellipse"
    LINE = "line"
    PATH = "path"
    TEXT = "text"
    IMAGE = "image"
    GROUP = "group"
    SYMBOL = "symbol"
    MESH = "mesh"


@dataclass
class BoneBinding:
    """Reference binding a node to a skeleton bone (carried, not evaluated)."""

    bone_id: str
    offset_x: float = 0.0
    offset_y: float = 0.0
    offset_rotation: float = 0.0


@dataclass
class Node:
    """Shared attributes of every visual primitive.

    Attributes:
        id: Identity, unique within one frame's node list
        name: Display name used for cross-frame matching
        parent_id: Owning group, or None when owned by the frame
        z_index: Paint and matching order
    """

    id: str
    name: str
    type: NodeType = NodeType.RECT
    parent_id: Optional[str] = None
    locked: bool = False

    # Geometry
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    pivot_x: Optional[float] = None
    pivot_y: Optional[float] = None

    # Paint
    opacity: float = 1.0
    visible: bool = True
    fill: Optional[str] = None
    fill_opacity: Optional[float] = None
    stroke: Optional[str] = None
    stroke_width: Optional[float] = None
    stroke_opacity: Optional[float] = None
    stroke_position: Optional[str] = None
    line_cap: Optional[str] = None
    line_join: Optional[str] = None
    corner_radius: Optional[float] = None
    corner_radius_tl: Optional[float] = None
    corner_radius_tr: Optional[float] = None
    corner_radius_br: Optional[float] = None
    corner_radius_bl: Optional[float] = None
    shadow_color: Optional[str] = None
    shadow_opacity: Optional[float] = None
    shadow_blur: Optional[float] = None
    shadow_offset_x: Optional[float] = None
    shadow_offset_y: Optional[float] = None
    blur_radius: Optional[float] = None

    z_index: int = 0
    bind: Optional[BoneBinding] = None

    @property
    def center(self) -> tuple[float, float]:
        """Center of the node's bounds in scene units."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def corner_radii(self) -> tuple[float, float, float, float]:
        """Per-corner radii (tl, tr, br, bl), falling back to ``corner_radius``."""
        base = self.corner_radius or 0.0
        return (
            base if self.corner_radius_tl is None else self.corner_radius_tl,
            base if self.corner_radius_tr is None else self.corner_radius_tr,
            base if self.corner_radius_br is None else self.corner_radius_br,
            base if self.corner_radius_bl is None else self.corner_radius_bl,
        )


@dataclass
class RectNode(Node):
    type: NodeType = NodeType.RECT


@dataclass
class EllipseNode(Node):
    type: NodeType = NodeType.ELLIPSE


@dataclass
class LineNode(Node):
    """Polyline; ``points`` is a flat [x0, y0, x1, y1, ...] list in local space."""

    type: NodeType = NodeType.LINE
    points: list[float] = field(default_factory=list)

    @property
    def line_length(self) -> Optional[float]:
        """Length of the first segment, or None with fewer than two points."""
        if len(self.points) < 4:
            return None
        dx = self.points[2] - self.points[0]
        dy = self.points[3] - self.points[1]
        return math.sqrt(dx * dx + dy * dy)


@dataclass
class PathNode(Node):
    type: NodeType = NodeType.PATH
    path_data: str = ""


@dataclass
class TextNode(Node):
    type: NodeType = NodeType.TEXT
    text: str = ""
    font_size: float = 16.0
    font_family: str = "Arial"
    font_weight: Optional[str] = None
    text_align: str = "left"


@dataclass
class ImageNode(Node):
    type: NodeType = NodeType.IMAGE
    src: str = ""


@dataclass
class GroupNode(Node):
    type: NodeType = NodeType.GROUP


@dataclass
class SymbolNode(Node):
    type: NodeType = NodeType.SYMBOL
    symbol_id: str = ""


@dataclass
class MeshNode(Node):
    type: NodeType = NodeType.MESH
    vertices: list[float] = field(default_factory=list)
    triangles: list[int] = field(default_factory=list)


NODE_CLASSES: dict[NodeType, type[Node]] = {
    NodeType.RECT: RectNode,
    NodeType.ELLIPSE: EllipseNode,
    NodeType.LINE: LineNode,
    NodeType.PATH: PathNode,
    NodeType.TEXT: TextNode,
    NodeType.IMAGE: ImageNode,
    NodeType.GROUP: GroupNode,
    NodeType.SYMBOL: SymbolNode,
    NodeType.MESH: MeshNode,
}
