"""Sample a motion transition at a point in time.

Evaluation is pure: every call deep-copies the scene nodes it returns,
so the same scene and motion model can be sampled repeatedly, in any
order, without affecting each other.
"""

from copy import deepcopy
from typing import Dict, List, Mapping, Optional
import logging

from framemotion.animation.easing import get_easing
from framemotion.motion.model import MotionModel, MotionTrack
from framemotion.scene.document import Frame, Scene
from framemotion.scene.nodes import Node
from framemotion.scene.properties import apply_motion_value

logger = logging.getLogger(__name__)


def sample_track(track: MotionTrack, time_ms: float) -> float:
    """Value of ``track`` at ``time_ms``.

    ``from_value`` up to ``delay``, ``to_value`` from ``delay + duration``
    on (and always, for non-positive durations), eased in between.
    """
    local = time_ms - track.delay
    if track.duration <= 0 or local >= track.duration:
        return track.to_value
    if local <= 0:
        return track.from_value
    t = max(0.0, min(1.0, local / track.duration))
    eased = get_easing(track.easing)(t)
    return track.from_value + (track.to_value - track.from_value) * eased


def _frame_nodes(frame: Frame, variants: Mapping[str, str]) -> Dict[str, Node]:
    return {node.id: node for node in frame.nodes_for(variants.get(frame.id))}


def evaluate_transition(
    scene: Scene,
    motion: MotionModel,
    transition_id: str,
    time_ms: float,
    variants: Optional[Mapping[str, str]] = None,
) -> List[Node]:
    """Evaluated node snapshots for a transition at ``time_ms``.

    Unknown transition ids or missing frames yield an empty list; this
    never raises for bad references.

    Args:
        scene: Scene holding frames and transitions
        motion: Motion model built from ``scene``
        transition_id: Transition to sample
        time_ms: Milliseconds since the transition started
        variants: Optional frame id -> variant id selection

    Returns:
        Fresh node copies with track values applied, sorted by z-index
    """
    transition = scene.transition(transition_id)
    motion_transition = motion.get(transition_id)
    if transition is None or motion_transition is None:
        logger.debug(f"Unknown transition {transition_id!r}, nothing to evaluate")
        return []

    from_frame = scene.frame(motion_transition.from_frame_id)
    to_frame = scene.frame(motion_transition.to_frame_id)
    if from_frame is None or to_frame is None:
        logger.debug(f"Transition {transition_id!r} references a missing frame")
        return []

    variants = variants or {}
    from_map = _frame_nodes(from_frame, variants)
    to_map = _frame_nodes(to_frame, variants)

    tracks_by_node: Dict[str, List[MotionTrack]] = {}
    for track in motion_transition.tracks:
        tracks_by_node.setdefault(track.node_id, []).append(track)

    evaluated: List[Node] = []
    for node_id in {**from_map, **to_map}:
        base = to_map[node_id] if node_id in to_map else from_map[node_id]
        node = deepcopy(base)
        for track in tracks_by_node.get(node_id, ()):
            apply_motion_value(node, track.property, sample_track(track, time_ms))
        evaluated.append(node)

    evaluated.sort(key=lambda n: n.z_index)
    return evaluated


def blend_frames(from_frame: Frame, to_frame: Frame, t: float) -> List[Node]:
    """Directly blend two frames without a motion model.

    Nodes sharing an identity get x, y, width, height, rotation and opacity
    linearly interpolated by ``t`` (clamped to 0..1); other nodes are copied
    as-is. Used for quick scrub previews.
    """
    t = max(0.0, min(1.0, t))
    from_map = {node.id: node for node in from_frame.nodes}
    to_map = {node.id: node for node in to_frame.nodes}

    blended: List[Node] = []
    for node_id in {**from_map, **to_map}:
        a = from_map.get(node_id)
        b = to_map.get(node_id)
        node = deepcopy(b if b is not None else a)
        if a is not None and b is not None:
            for attr in ("x", "y", "width", "height", "rotation", "opacity"):
                start = getattr(a, attr)
                setattr(node, attr, start + (getattr(b, attr) - start) * t)
        blended.append(node)
    return blended
