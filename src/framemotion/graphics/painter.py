"""Paint evaluated nodes onto a surface.

Each visible node is drawn into a local RGBA layer in its own coordinate
space, then mapped onto the surface with the node transform::

    translate(center) -> rotate(rotation) -> scale(scale_x, scale_y) -> translate(-size / 2)

and alpha-composited in list order.
"""

from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Optional, Sequence
import logging
import math

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from framemotion.graphics.assets import AssetCache
from framemotion.graphics.paths import flatten_path, path_bounds
from framemotion.graphics.surface import Color, Surface
from framemotion.scene.nodes import (
    ImageNode,
    LineNode,
    MeshNode,
    Node,
    NodeType,
    PathNode,
    TextNode,
)

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Arc segments per rounded corner
CORNER_SEGMENTS = 8

# Local layers above this many pixels are skipped
MAX_LAYER_PIXELS = 16_000_000


def parse_color(value: Optional[str], opacity: Optional[float] = None) -> Optional[Color]:
    """Parse a CSS colour into RGBA, scaling alpha by ``opacity``.

    Returns:
        RGBA tuple, or None for empty, transparent or unparseable colours
    """
    if not value or value.strip().lower() in ("none", "transparent"):
        return None
    try:
        r, g, b, a = ImageColor.getcolor(value.strip(), "RGBA")
    except ValueError:
        logger.debug(f"Unparseable colour {value!r}")
        return None
    if opacity is not None:
        a = int(round(a * max(0.0, min(1.0, opacity))))
    return (r, g, b, a)


@lru_cache(maxsize=32)
def _load_font(family: str, size: int) -> ImageFont.ImageFont:
    for candidate in (family, f"{family}.ttf", f"{family.replace(' ', '')}.ttf"):
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _text_font(node: TextNode) -> ImageFont.ImageFont:
    return _load_font(node.font_family or "Arial", max(1, int(round(node.font_size or 16))))


def node_matrix(node: Node) -> np.ndarray:
    """3x3 affine matrix mapping node-local coordinates to surface coordinates."""
    cx, cy = node.center
    theta = math.radians(node.rotation)
    cos_t, sin_t = math.cos(theta), math.sin(theta)

    to_center = np.array([[1, 0, cx], [0, 1, cy], [0, 0, 1]], dtype=float)
    rotate = np.array([[cos_t, -sin_t, 0], [sin_t, cos_t, 0], [0, 0, 1]], dtype=float)
    scale = np.array([[node.scale_x, 0, 0], [0, node.scale_y, 0], [0, 0, 1]], dtype=float)
    from_center = np.array(
        [[1, 0, -node.width / 2], [0, 1, -node.height / 2], [0, 0, 1]], dtype=float
    )
    return to_center @ rotate @ scale @ from_center


def rounded_rect_points(
    width: float,
    height: float,
    radii: Sequence[float],
    segments: int = CORNER_SEGMENTS,
) -> List[Point]:
    """Outline of a rectangle with explicit arcs at each corner.

    Args:
        radii: (top-left, top-right, bottom-right, bottom-left), each
            clamped to half the shorter side
    """
    limit = max(0.0, min(width, height) / 2)
    tl, tr, br, bl = (max(0.0, min(r, limit)) for r in radii)
    corners = (
        (tl, tl, tl, 180.0),
        (tr, width - tr, tr, 270.0),
        (br, width - br, height - br, 0.0),
        (bl, bl, height - bl, 90.0),
    )

    points: List[Point] = []
    for radius, cx, cy, start in corners:
        if radius <= 0:
            points.append((cx, cy))
            continue
        for i in range(segments + 1):
            angle = math.radians(start + 90.0 * i / segments)
            points.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return points


def _local_bounds(node: Node) -> tuple[float, float, float, float]:
    min_x, min_y, max_x, max_y = 0.0, 0.0, node.width, node.height

    coords: Sequence[float] = ()
    if isinstance(node, LineNode):
        coords = node.points
    elif isinstance(node, MeshNode):
        coords = node.vertices
    elif isinstance(node, PathNode):
        bounds = path_bounds(flatten_path(node.path_data))
        if bounds is not None:
            coords = bounds
    elif isinstance(node, TextNode) and node.text:
        font = _text_font(node)
        coords = font.getbbox(node.text, anchor="la")

    xs = list(coords[0::2])
    ys = list(coords[1::2])
    if xs and ys:
        min_x, min_y = min(min_x, *xs), min(min_y, *ys)
        max_x, max_y = max(max_x, *xs), max(max_y, *ys)
    return min_x, min_y, max_x, max_y


class _Body:
    """Draws one node's shape into its local layer."""

    def __init__(self, draw: ImageDraw.ImageDraw, node: Node, origin: Point) -> None:
        self.draw = draw
        self.node = node
        self.ox, self.oy = origin
        self.fill = parse_color(node.fill, node.fill_opacity)
        stroke_width = node.stroke_width or 0
        self.stroke = parse_color(node.stroke, node.stroke_opacity) if stroke_width > 0 else None
        self.stroke_width = max(1, int(round(stroke_width)))

    def pt(self, x: float, y: float) -> Point:
        return (x - self.ox, y - self.oy)

    def pts(self, flat: Sequence[float]) -> List[Point]:
        return [self.pt(flat[i], flat[i + 1]) for i in range(0, len(flat) - 1, 2)]

    def outline(self, points: List[Point], closed: bool = True) -> None:
        if self.stroke is None or len(points) < 2:
            return
        if closed:
            points = points + [points[0]]
        self.draw.line(points, fill=self.stroke, width=self.stroke_width, joint="curve")

    def rect(self) -> None:
        node = self.node
        radii = node.corner_radii()
        if any(r > 0 for r in radii):
            outline = [self.pt(x, y) for x, y in rounded_rect_points(node.width, node.height, radii)]
            if self.fill is not None:
                self.draw.polygon(outline, fill=self.fill)
            self.outline(outline)
            return
        box = [self.pt(0, 0), self.pt(node.width, node.height)]
        self.draw.rectangle(
            box,
            fill=self.fill,
            outline=self.stroke,
            width=self.stroke_width if self.stroke else 0,
        )

    def ellipse(self) -> None:
        box = [self.pt(0, 0), self.pt(self.node.width, self.node.height)]
        self.draw.ellipse(
            box,
            fill=self.fill,
            outline=self.stroke,
            width=self.stroke_width if self.stroke else 0,
        )

    def line(self) -> None:
        points = self.pts(self.node.points)
        if len(points) >= 2:
            self.outline(points, closed=False)

    def path(self) -> None:
        for polyline in flatten_path(self.node.path_data):
            points = [self.pt(x, y) for x, y in polyline]
            if self.fill is not None and len(points) >= 3:
                self.draw.polygon(points, fill=self.fill)
            self.outline(points, closed=False)

    def text(self) -> None:
        node: TextNode = self.node
        if not node.text:
            return
        font = _text_font(node)
        self.draw.text(
            self.pt(0, 0),
            node.text,
            fill=self.fill,
            font=font,
            anchor="la",
            stroke_width=self.stroke_width if self.stroke else 0,
            stroke_fill=self.stroke,
        )

    def mesh(self) -> None:
        node: MeshNode = self.node
        vertices = self.pts(node.vertices)
        tris = node.triangles
        for i in range(0, len(tris) - 2, 3):
            try:
                triangle = [vertices[tris[i]], vertices[tris[i + 1]], vertices[tris[i + 2]]]
            except IndexError:
                continue
            if self.fill is not None:
                self.draw.polygon(triangle, fill=self.fill)
            self.outline(triangle)


def _draw_bitmap(layer: Image.Image, node: ImageNode, origin: Point, assets: Optional[AssetCache]) -> None:
    if assets is None or not node.src:
        return
    bitmap = assets.get(node.src)
    if bitmap is None:
        return
    size = (max(1, int(round(node.width))), max(1, int(round(node.height))))
    scaled = bitmap.resize(size, Image.Resampling.BILINEAR)
    layer.alpha_composite(scaled, (int(round(-origin[0])), int(round(-origin[1]))))


_DRAWERS: Dict[NodeType, Callable[[_Body], None]] = {
    NodeType.RECT: _Body.rect,
    NodeType.ELLIPSE: _Body.ellipse,
    NodeType.LINE: _Body.line,
    NodeType.PATH: _Body.path,
    NodeType.TEXT: _Body.text,
    NodeType.MESH: _Body.mesh,
}


def _scale_alpha(layer: Image.Image, factor: float) -> Image.Image:
    if factor >= 1.0:
        return layer
    alpha = layer.getchannel("A").point(lambda a: int(a * factor))
    layer.putalpha(alpha)
    return layer


def _shadow_layer(layer: Image.Image, node: Node) -> Optional[Image.Image]:
    color = parse_color(node.shadow_color, node.shadow_opacity)
    if color is None or color[3] == 0:
        return None
    alpha = layer.getchannel("A").point(lambda a: a * color[3] // 255)
    tinted = Image.new("RGBA", layer.size, color[:3] + (0,))
    tinted.putalpha(alpha)

    shadow = Image.new("RGBA", layer.size, (0, 0, 0, 0))
    offset = (int(round(node.shadow_offset_x or 0)), int(round(node.shadow_offset_y or 0)))
    shadow.paste(tinted, offset)
    if node.shadow_blur:
        shadow = shadow.filter(ImageFilter.GaussianBlur(node.shadow_blur / 2))
    return shadow


def paint_node(surface: Surface, node: Node, assets: Optional[AssetCache] = None) -> bool:
    """Paint a single node; returns False when nothing was drawn."""
    if not node.visible or node.opacity <= 0:
        return False

    matrix = node_matrix(node)
    if abs(np.linalg.det(matrix[:2, :2])) < 1e-12:
        return False

    pad = math.ceil(node.stroke_width or 0) + 2
    min_x, min_y, max_x, max_y = _local_bounds(node)
    origin = (min_x - pad, min_y - pad)
    size = (math.ceil(max_x - min_x) + 2 * pad, math.ceil(max_y - min_y) + 2 * pad)
    if size[0] * size[1] > MAX_LAYER_PIXELS:
        logger.warning(f"Node {node.id} too large to paint ({size[0]}x{size[1]})")
        return False

    local = Image.new("RGBA", size, (0, 0, 0, 0))
    if isinstance(node, ImageNode):
        _draw_bitmap(local, node, origin, assets)
    else:
        drawer = _DRAWERS.get(node.type)
        if drawer is None:
            return False
        drawer(_Body(ImageDraw.Draw(local), node, origin))

    # Surface pixel -> local layer pixel
    inverse = np.linalg.inv(matrix)
    shift = np.array([[1, 0, -origin[0]], [0, 1, -origin[1]], [0, 0, 1]], dtype=float)
    a = shift @ inverse
    layer = local.transform(
        surface.size,
        Image.Transform.AFFINE,
        (a[0, 0], a[0, 1], a[0, 2], a[1, 0], a[1, 1], a[1, 2]),
        resample=Image.Resampling.BILINEAR,
    )

    if node.blur_radius:
        layer = layer.filter(ImageFilter.GaussianBlur(node.blur_radius))
    layer = _scale_alpha(layer, node.opacity)

    shadow = _shadow_layer(layer, node) if node.shadow_color else None
    if shadow is not None:
        surface.composite(shadow)
    surface.composite(layer)
    return True


def paint_nodes(
    surface: Surface,
    nodes: Iterable[Node],
    background: Optional[str] = None,
    assets: Optional[AssetCache] = None,
) -> int:
    """Clear ``surface``, fill the background and paint ``nodes`` in order.

    Args:
        surface: Target surface
        nodes: Evaluated nodes, already in paint (z-index) order
        background: CSS colour, or None for a transparent surface
        assets: Bitmap cache for image nodes; without one images are skipped

    Returns:
        Number of nodes painted
    """
    surface.clear(parse_color(background))
    painted = 0
    for node in nodes:
        if paint_node(surface, node, assets):
            painted += 1
    return painted
