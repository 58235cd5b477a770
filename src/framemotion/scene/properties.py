"""Animatable node properties and their accessors.

Motion code never reads node attributes directly; it goes through
:func:`motion_value` and :func:`apply_motion_value`, which own the
defaults for optional attributes.
"""

from enum import Enum
from typing import Optional
import math

from framemotion.scene.nodes import LineNode, Node


class TrackProperty(str, Enum):
    """Properties a motion track can drive, valued by their scene names."""

    X = "x"
    Y = "y"
    WIDTH = "width"
    HEIGHT = "height"
    ROTATION = "rotation"
    SCALE_X = "scaleX"
    SCALE_Y = "scaleY"
    OPACITY = "opacity"
    CORNER_RADIUS = "cornerRadius"
    LINE_LENGTH = "lineLength"


# Plain numeric properties mapped to their node attribute
_ATTRIBUTES: dict[TrackProperty, str] = {
    TrackProperty.X: "x",
    TrackProperty.Y: "y",
    TrackProperty.WIDTH: "width",
    TrackProperty.HEIGHT: "height",
    TrackProperty.ROTATION: "rotation",
    TrackProperty.SCALE_X: "scale_x",
    TrackProperty.SCALE_Y: "scale_y",
    TrackProperty.OPACITY: "opacity",
}

MOTION_PROPERTIES: tuple[TrackProperty, ...] = tuple(TrackProperty)


def motion_value(node: Node, prop: TrackProperty) -> Optional[float]:
    """Read the numeric value of ``prop`` on ``node``.

    Returns:
        The value; 0 for a missing corner radius; None when the property
        does not apply to this node kind (line length on non-lines).
    """
    if prop is TrackProperty.CORNER_RADIUS:
        return float(node.corner_radius or 0.0)
    if prop is TrackProperty.LINE_LENGTH:
        if isinstance(node, LineNode):
            return node.line_length
        return None
    return float(getattr(node, _ATTRIBUTES[prop]))


def apply_motion_value(node: Node, prop: TrackProperty, value: float) -> None:
    """Write an interpolated value onto ``node`` in place.

    Line length rescales the first segment about its first point.
    """
    if prop is TrackProperty.CORNER_RADIUS:
        # Per-corner radii would otherwise win over the animated radius
        node.corner_radius = value
        node.corner_radius_tl = node.corner_radius_tr = None
        node.corner_radius_br = node.corner_radius_bl = None
        return
    if prop is TrackProperty.LINE_LENGTH:
        if not isinstance(node, LineNode) or len(node.points) < 4:
            return
        x1, y1, x2, y2 = node.points[:4]
        dx = x2 - x1
        dy = y2 - y1
        current = math.sqrt(dx * dx + dy * dy) or 1.0
        scale = value / current
        node.points[2] = x1 + dx * scale
        node.points[3] = y1 + dy * scale
        return
    setattr(node, _ATTRIBUTES[prop], value)
