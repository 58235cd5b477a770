"""Build the motion model for a whole scene."""

from typing import Mapping, Optional
import logging

from framemotion.motion.matcher import match_nodes
from framemotion.motion.model import MotionModel, MotionTransition
from framemotion.motion.synthesizer import synthesize_tracks
from framemotion.scene.document import Scene, Transition

logger = logging.getLogger(__name__)


def build_motion_transition(
    scene: Scene,
    transition: Transition,
    variants: Optional[Mapping[str, str]] = None,
) -> MotionTransition:
    """Match and synthesize one transition.

    A transition referencing a missing frame yields an empty track list.

    Args:
        scene: Scene holding the frames
        transition: Transition to synthesize
        variants: Optional frame id -> variant id selection
    """
    motion = MotionTransition(
        id=transition.id,
        from_frame_id=transition.from_frame_id,
        to_frame_id=transition.to_frame_id,
        duration=transition.duration,
        delay=transition.delay,
    )

    from_frame = scene.frame(transition.from_frame_id)
    to_frame = scene.frame(transition.to_frame_id)
    if from_frame is None or to_frame is None:
        logger.warning(
            f"Transition {transition.id}: missing frame "
            f"({transition.from_frame_id} -> {transition.to_frame_id}), no tracks"
        )
        return motion

    variants = variants or {}
    pairings = match_nodes(
        from_frame.nodes_for(variants.get(from_frame.id)),
        to_frame.nodes_for(variants.get(to_frame.id)),
    )
    motion.tracks = synthesize_tracks(pairings, transition, to_frame.center)
    return motion


def build_motion_model(
    scene: Scene,
    variants: Optional[Mapping[str, str]] = None,
) -> MotionModel:
    """Synthesize tracks for every transition in ``scene``.

    Pure function of the scene's frames and transitions; callers rebuild
    the whole model after any edit instead of patching it.
    """
    model = MotionModel(
        transitions=[build_motion_transition(scene, t, variants) for t in scene.transitions]
    )
    logger.debug(
        f"Motion model built: {len(model.transitions)} transitions, {model.track_count} tracks"
    )
    return model
