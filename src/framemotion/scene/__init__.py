"""Scene data model for framemotion."""

from framemotion.scene.nodes import (
    Node,
    NodeType,
    BoneBinding,
    RectNode,
    EllipseNode,
    LineNode,
    PathNode,
    TextNode,
    ImageNode,
    GroupNode,
    SymbolNode,
    MeshNode,
)
from framemotion.scene.properties import (
    TrackProperty,
    MOTION_PROPERTIES,
    motion_value,
    apply_motion_value,
)
from framemotion.scene.document import (
    AnimationMode,
    StaggerMode,
    StaggerConfig,
    MotionOverride,
    Frame,
    FrameVariant,
    Transition,
    Scene,
)
from framemotion.scene.loader import SceneError, load_scene, load_scene_file

__all__ = [
    # Nodes
    "Node",
    "NodeType",
    "BoneBinding",
    "RectNode",
    "EllipseNode",
    "LineNode",
    "PathNode",
    "TextNode",
    "ImageNode",
    "GroupNode",
    "SymbolNode",
    "MeshNode",
    # Properties
    "TrackProperty",
    "MOTION_PROPERTIES",
    "motion_value",
    "apply_motion_value",
    # Document
    "AnimationMode",
    "StaggerMode",
    "StaggerConfig",
    "MotionOverride",
    "Frame",
    "FrameVariant",
    "Transition",
    "Scene",
    # Loading
    "SceneError",
    "load_scene",
    "load_scene_file",
]
