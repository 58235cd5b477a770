"""Load scenes from the camelCase JSON/YAML document format.

Accepts either a bare scene document or an export bundle of the form
``{"scene": {...}, "motion": {...}}``; the motion part is ignored because
the motion model is always rebuilt from the scene.
"""

from pathlib import Path
from typing import Any, Mapping, Optional
import json
import logging

import yaml

from framemotion.scene.document import (
    AnimationMode,
    Frame,
    FrameVariant,
    MotionOverride,
    Scene,
    StaggerConfig,
    StaggerMode,
    Transition,
    DEFAULT_FRAME_DURATION,
    DEFAULT_TRANSITION_DELAY,
    DEFAULT_TRANSITION_DURATION,
)
from framemotion.scene.nodes import NODE_CLASSES, BoneBinding, Node, NodeType
from framemotion.scene.properties import TrackProperty

logger = logging.getLogger(__name__)


class SceneError(ValueError):
    """Raised when a scene document is malformed."""


# camelCase document key -> Node attribute, for optional numeric fields
_OPTIONAL_NUMBERS = {
    "fillOpacity": "fill_opacity",
    "strokeWidth": "stroke_width",
    "strokeOpacity": "stroke_opacity",
    "cornerRadius": "corner_radius",
    "cornerRadiusTL": "corner_radius_tl",
    "cornerRadiusTR": "corner_radius_tr",
    "cornerRadiusBR": "corner_radius_br",
    "cornerRadiusBL": "corner_radius_bl",
    "shadowOpacity": "shadow_opacity",
    "shadowBlur": "shadow_blur",
    "shadowOffsetX": "shadow_offset_x",
    "shadowOffsetY": "shadow_offset_y",
    "blurRadius": "blur_radius",
    "pivotX": "pivot_x",
    "pivotY": "pivot_y",
}

_OPTIONAL_STRINGS = {
    "parentId": "parent_id",
    "fill": "fill",
    "stroke": "stroke",
    "strokePosition": "stroke_position",
    "lineCap": "line_cap",
    "lineJoin": "line_join",
    "shadowColor": "shadow_color",
}

_GEOMETRY = {
    "x": ("x", 0.0),
    "y": ("y", 0.0),
    "width": ("width", 0.0),
    "height": ("height", 0.0),
    "rotation": ("rotation", 0.0),
    "scaleX": ("scale_x", 1.0),
    "scaleY": ("scale_y", 1.0),
    "opacity": ("opacity", 1.0),
}


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _optional_number(value: Any, where: str) -> Optional[float]:
    if value is None:
        return None
    return _number(value, where)


def _required_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise SceneError(f"{where}: missing or empty '{key}'")
    return value


def _numbers(values: Any, where: str) -> list[float]:
    if not isinstance(values, list):
        raise SceneError(f"{where}: expected a list of numbers")
    return [_number(v, where) for v in values]


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SceneError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _entries(data: Mapping[str, Any], key: str, where: str) -> list:
    """Mapping entries of the list at ``data[key]``; an absent key is empty."""
    values = data.get(key, [])
    if not isinstance(values, list):
        raise SceneError(f"{where}: '{key}' must be a list")
    return [_mapping(v, f"{where}.{key}") for v in values]


def parse_node(data: Mapping[str, Any]) -> Node:
    """Build a typed node from its document mapping.

    Raises:
        SceneError: On unknown node type or invalid field values
    """
    data = _mapping(data, "node")
    node_id = _required_str(data, "id", "node")
    where = f"node {node_id}"

    try:
        node_type = NodeType(data.get("type"))
    except ValueError:
        raise SceneError(f"{where}: unknown node type {data.get('type')!r}") from None

    kwargs: dict[str, Any] = {
        "id": node_id,
        "name": str(data.get("name") or node_id),
        "locked": bool(data.get("locked", False)),
        "visible": bool(data.get("visible", True)),
        "z_index": int(_number(data.get("zIndex", 0), f"{where}.zIndex")),
    }

    for key, (attr, default) in _GEOMETRY.items():
        kwargs[attr] = _number(data.get(key, default), f"{where}.{key}")

    if not 0.0 <= kwargs["opacity"] <= 1.0:
        raise SceneError(f"{where}: opacity {kwargs['opacity']} outside [0, 1]")

    for key, attr in _OPTIONAL_NUMBERS.items():
        kwargs[attr] = _optional_number(data.get(key), f"{where}.{key}")

    for key, attr in _OPTIONAL_STRINGS.items():
        value = data.get(key)
        kwargs[attr] = None if value is None else str(value)

    bind = data.get("bind")
    if bind:
        bind = _mapping(bind, f"{where}.bind")
        kwargs["bind"] = BoneBinding(
            bone_id=_required_str(bind, "boneId", f"{where}.bind"),
            offset_x=_number(bind.get("offsetX", 0), f"{where}.bind"),
            offset_y=_number(bind.get("offsetY", 0), f"{where}.bind"),
            offset_rotation=_number(bind.get("offsetRotation", 0), f"{where}.bind"),
        )

    if node_type is NodeType.LINE:
        kwargs["points"] = _numbers(data.get("points", []), f"{where}.points")
    elif node_type is NodeType.PATH:
        kwargs["path_data"] = str(data.get("pathData", ""))
    elif node_type is NodeType.TEXT:
        kwargs["text"] = str(data.get("text", ""))
        kwargs["font_size"] = _number(data.get("fontSize", 16), f"{where}.fontSize")
        kwargs["font_family"] = str(data.get("fontFamily") or "Arial")
        weight = data.get("fontWeight")
        kwargs["font_weight"] = None if weight is None else str(weight)
        kwargs["text_align"] = str(data.get("textAlign") or "left")
    elif node_type is NodeType.IMAGE:
        kwargs["src"] = str(data.get("src", ""))
    elif node_type is NodeType.SYMBOL:
        kwargs["symbol_id"] = str(data.get("symbolId", ""))
    elif node_type is NodeType.MESH:
        kwargs["vertices"] = _numbers(data.get("vertices", []), f"{where}.vertices")
        kwargs["triangles"] = [int(v) for v in _numbers(data.get("triangles", []), f"{where}.triangles")]

    return NODE_CLASSES[node_type](**kwargs)


def _parse_frame(data: Mapping[str, Any]) -> Frame:
    data = _mapping(data, "frame")
    frame_id = _required_str(data, "id", "frame")
    where = f"frame {frame_id}"
    variants = [
        FrameVariant(
            id=_required_str(v, "id", f"{where}.variant"),
            name=str(v.get("name", "")),
            width=_number(v.get("width", 0), f"{where}.variant"),
            height=_number(v.get("height", 0), f"{where}.variant"),
            nodes=[parse_node(n) for n in _entries(v, "nodes", f"{where}.variant")],
        )
        for v in _entries(data, "variants", where)
    ]
    return Frame(
        id=frame_id,
        name=str(data.get("name", "")),
        width=_number(data.get("width", 0), f"{where}.width"),
        height=_number(data.get("height", 0), f"{where}.height"),
        background=data.get("background"),
        nodes=[parse_node(n) for n in _entries(data, "nodes", where)],
        variants=variants,
        duration=_number(data.get("duration", DEFAULT_FRAME_DURATION), f"{where}.duration"),
        is_hold=bool(data.get("isHold", False)),
    )


def _parse_transition(data: Mapping[str, Any]) -> Transition:
    data = _mapping(data, "transition")
    transition_id = _required_str(data, "id", "transition")
    where = f"transition {transition_id}"

    try:
        animation = AnimationMode(data.get("animation") or AnimationMode.AUTO.value)
    except ValueError:
        raise SceneError(f"{where}: unknown animation {data.get('animation')!r}") from None

    stagger_data = _mapping(data.get("stagger") or {}, f"{where}.stagger")
    try:
        stagger_mode = StaggerMode(stagger_data.get("mode") or StaggerMode.NONE.value)
    except ValueError:
        raise SceneError(f"{where}: unknown stagger mode {stagger_data.get('mode')!r}") from None

    overrides = []
    for override in _entries(data, "overrides", where):
        try:
            prop = TrackProperty(override.get("property"))
        except ValueError:
            raise SceneError(f"{where}: unknown override property {override.get('property')!r}") from None
        overrides.append(MotionOverride(
            node_id=_required_str(override, "nodeId", f"{where}.override"),
            property=prop,
            easing=str(override.get("easing", "")),
        ))

    duration = _number(data.get("duration", DEFAULT_TRANSITION_DURATION), f"{where}.duration")
    delay = _number(data.get("delay", DEFAULT_TRANSITION_DELAY), f"{where}.delay")
    if duration < 0 or delay < 0:
        raise SceneError(f"{where}: duration and delay must be non-negative")

    return Transition(
        id=transition_id,
        from_frame_id=_required_str(data, "fromFrameId", where),
        to_frame_id=_required_str(data, "toFrameId", where),
        duration=duration,
        delay=delay,
        easing=str(data.get("easing") or "ease"),
        animation=animation,
        overrides=overrides,
        stagger=StaggerConfig(
            mode=stagger_mode,
            amount=_number(stagger_data.get("amount", 0), f"{where}.stagger.amount"),
        ),
    )


def load_scene(data: Mapping[str, Any]) -> Scene:
    """Build a Scene from a document mapping or export bundle.

    Raises:
        SceneError: If the document is malformed
    """
    if not isinstance(data, Mapping):
        raise SceneError("scene document must be a mapping")
    if isinstance(data.get("scene"), Mapping):
        data = data["scene"]

    scene = Scene(
        name=str(data.get("name", "Untitled")),
        frames=[_parse_frame(f) for f in _entries(data, "frames", "scene")],
        transitions=[_parse_transition(t) for t in _entries(data, "transitions", "scene")],
        start_frame_id=data.get("startFrameId"),
    )
    logger.debug(
        f"Loaded scene '{scene.name}': {len(scene.frames)} frames, "
        f"{len(scene.transitions)} transitions"
    )
    return scene


def load_scene_file(path: str | Path) -> Scene:
    """Load a scene from a .json, .yaml or .yml file.

    Raises:
        SceneError: If the file cannot be parsed or is malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SceneError(f"Cannot read scene file {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SceneError(f"Cannot parse scene file {path}: {e}") from e

    logger.info(f"Scene file loaded: {path}")
    return load_scene(data)
