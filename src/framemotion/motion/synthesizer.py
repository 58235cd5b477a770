"""Turn node pairings into interpolation tracks."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging
import math

from framemotion.animation.easing import Easing
from framemotion.motion.matcher import Pairing
from framemotion.motion.model import MotionTrack
from framemotion.scene.document import AnimationMode, StaggerMode, Transition
from framemotion.scene.nodes import Node
from framemotion.scene.properties import MOTION_PROPERTIES, TrackProperty, motion_value

logger = logging.getLogger(__name__)

# Vertical rise/sink distance for entering and exiting nodes, in scene units
ENTER_OFFSET = 12.0

# Distance stagger counts one ``amount`` per this many scene units
DISTANCE_STAGGER_UNIT = 100.0


def animation_mode(transition: Transition) -> AnimationMode:
    """Animation mode of ``transition``; unknown values animate as ``auto``."""
    try:
        return AnimationMode(transition.animation)
    except ValueError:
        logger.warning(f"Transition {transition.id}: unknown animation {transition.animation!r}, using auto")
        return AnimationMode.AUTO


def _stagger_mode(transition: Transition) -> StaggerMode:
    try:
        return StaggerMode(transition.stagger.mode)
    except ValueError:
        return StaggerMode.NONE


@dataclass(frozen=True)
class TrackTiming:
    """Effective per-transition timing after applying the animation mode."""

    duration: float
    delay: float
    easing: Easing | str

    @classmethod
    def for_transition(cls, transition: Transition) -> "TrackTiming":
        animation = animation_mode(transition)
        instant = animation is AnimationMode.INSTANT
        linear = animation is AnimationMode.LINEAR
        return cls(
            duration=0.0 if instant else transition.duration,
            delay=0.0 if instant else transition.delay,
            easing=Easing.LINEAR if linear else transition.easing,
        )


def stagger_delay(
    transition: Transition,
    index: int,
    node: Optional[Node],
    frame_center: Tuple[float, float],
) -> float:
    """Extra delay for the pairing at ``index`` in paint order."""
    stagger = transition.stagger
    mode = _stagger_mode(transition)
    if mode is StaggerMode.NONE or stagger.amount <= 0:
        return 0.0
    if mode is StaggerMode.ORDER:
        return index * stagger.amount
    if mode is StaggerMode.DISTANCE and node is not None:
        cx, cy = node.center
        distance = math.hypot(cx - frame_center[0], cy - frame_center[1])
        return (distance / DISTANCE_STAGGER_UNIT) * stagger.amount
    return 0.0


def _suppress(node: Node) -> MotionTrack:
    """Zero-duration opacity track hiding ``node`` from time 0."""
    return MotionTrack(node.id, TrackProperty.OPACITY, node.opacity, 0.0, 0.0, 0.0, Easing.LINEAR)


class TrackSynthesizer:
    """Emit tracks for the pairings of one transition.

    Args:
        transition: The owning transition
        frame_center: Geometric center of the to-frame (distance stagger)
    """

    def __init__(self, transition: Transition, frame_center: Tuple[float, float]) -> None:
        self.transition = transition
        self.frame_center = frame_center
        self.animation = animation_mode(transition)
        self.timing = TrackTiming.for_transition(transition)
        self._overrides: Dict[Tuple[str, TrackProperty], Easing | str] = {}
        for override in transition.overrides:
            try:
                prop = TrackProperty(override.property)
            except ValueError:
                logger.warning(f"Transition {transition.id}: ignoring override on {override.property!r}")
                continue
            self._overrides[(override.node_id, prop)] = override.easing

    def easing_for(self, node_id: str, prop: TrackProperty) -> Easing | str:
        """Override easing for (node, property), else the base easing."""
        if self.animation is AnimationMode.LINEAR:
            return Easing.LINEAR
        return self._overrides.get((node_id, prop), self.timing.easing)

    def _track(
        self,
        node_id: str,
        prop: TrackProperty,
        from_value: float,
        to_value: float,
        delay: float,
        easing: Easing | str | None = None,
    ) -> MotionTrack:
        return MotionTrack(
            node_id=node_id,
            property=prop,
            from_value=from_value,
            to_value=to_value,
            duration=self.timing.duration,
            delay=self.timing.delay + delay,
            easing=self.timing.easing if easing is None else easing,
        )

    def synthesize(self, pairings: List[Pairing]) -> List[MotionTrack]:
        """Emit tracks for every pairing, in pairing order."""
        tracks: List[MotionTrack] = []
        for index, pairing in enumerate(pairings):
            offset = stagger_delay(self.transition, index, pairing.node, self.frame_center)
            if pairing.is_matched:
                tracks.extend(self._matched(pairing, offset))
            elif pairing.to_node is not None:
                tracks.extend(self._entering(pairing.to_node, offset))
            else:
                tracks.extend(self._exiting(pairing.from_node, offset))
        return tracks

    def _matched(self, pairing: Pairing, offset: float) -> List[MotionTrack]:
        from_node, to_node = pairing.from_node, pairing.to_node

        if self.animation is AnimationMode.DISSOLVE:
            if from_node.id != to_node.id:
                return [
                    self._track(from_node.id, TrackProperty.OPACITY, from_node.opacity, 0.0, offset),
                    self._track(to_node.id, TrackProperty.OPACITY, 0.0, to_node.opacity, offset),
                ]
            properties: Tuple[TrackProperty, ...] = (TrackProperty.OPACITY,)
        else:
            properties = MOTION_PROPERTIES

        tracks = []
        for prop in properties:
            from_value = motion_value(from_node, prop)
            to_value = motion_value(to_node, prop)
            if from_value is None or to_value is None or from_value == to_value:
                continue
            tracks.append(self._track(
                to_node.id, prop, from_value, to_value, offset,
                easing=self.easing_for(to_node.id, prop),
            ))

        if pairing.is_stale_duplicate and self.animation is not AnimationMode.DISSOLVE:
            tracks.append(_suppress(from_node))
        return tracks

    def _entering(self, node: Node, offset: float) -> List[MotionTrack]:
        if self.animation is AnimationMode.INSTANT:
            return []
        tracks = [self._track(node.id, TrackProperty.OPACITY, 0.0, node.opacity, offset)]
        if self.animation is not AnimationMode.DISSOLVE:
            tracks.append(self._track(node.id, TrackProperty.Y, node.y + ENTER_OFFSET, node.y, offset))
        return tracks

    def _exiting(self, node: Node, offset: float) -> List[MotionTrack]:
        if self.animation is AnimationMode.INSTANT:
            return [_suppress(node)]
        tracks = [self._track(node.id, TrackProperty.OPACITY, node.opacity, 0.0, offset)]
        if self.animation is not AnimationMode.DISSOLVE:
            tracks.append(self._track(node.id, TrackProperty.Y, node.y, node.y - ENTER_OFFSET, offset))
        return tracks


def synthesize_tracks(
    pairings: List[Pairing],
    transition: Transition,
    frame_center: Tuple[float, float],
) -> List[MotionTrack]:
    """Emit the flat track list for one transition's pairings.

    Tracks are never emitted for unchanged values; an entering/exiting
    opacity or rise/sink track whose endpoints coincide is dropped too.
    """
    tracks = TrackSynthesizer(transition, frame_center).synthesize(pairings)
    return [track for track in tracks if track.from_value != track.to_value]
