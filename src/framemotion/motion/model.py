"""Motion model: synthesized interpolation tracks per transition."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from framemotion.animation.easing import Easing
from framemotion.scene.properties import TrackProperty

MOTION_MODEL_VERSION = 1


@dataclass(frozen=True)
class MotionTrack:
    """One property's from -> to interpolation for one node.

    Attributes:
        node_id: To-side identity, or the from-side identity for exiting nodes
        property: Animated property
        from_value: Value at (and before) ``delay``
        to_value: Value at and after ``delay + duration``
        duration: Milliseconds; 0 means the track snaps to ``to_value``
        delay: Milliseconds before the track starts
        easing: Easing preset name
    """

    node_id: str
    property: TrackProperty
    from_value: float
    to_value: float
    duration: float
    delay: float
    easing: Easing | str

    @property
    def end_time(self) -> float:
        """Time in milliseconds at which the track reaches ``to_value``."""
        return self.delay + self.duration

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase motion document keys."""
        easing = self.easing.value if isinstance(self.easing, Easing) else self.easing
        return {
            "nodeId": self.node_id,
            "property": self.property.value,
            "from": self.from_value,
            "to": self.to_value,
            "duration": self.duration,
            "delay": self.delay,
            "easing": easing,
        }


@dataclass
class MotionTransition:
    """A transition id with its synthesized tracks."""

    id: str
    from_frame_id: str
    to_frame_id: str
    duration: float = 0.0
    delay: float = 0.0
    tracks: List[MotionTrack] = field(default_factory=list)

    @property
    def total_duration(self) -> float:
        """Playback length: the latest track end, 0 with no tracks."""
        return max((track.end_time for track in self.tracks), default=0.0)

    def tracks_for(self, node_id: str) -> List[MotionTrack]:
        """Tracks driving one node, in emission order."""
        return [track for track in self.tracks if track.node_id == node_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fromFrameId": self.from_frame_id,
            "toFrameId": self.to_frame_id,
            "duration": self.duration,
            "delay": self.delay,
            "tracks": [track.to_dict() for track in self.tracks],
        }


@dataclass
class MotionModel:
    """Derived motion for a whole scene; rebuilt, never patched."""

    transitions: List[MotionTransition] = field(default_factory=list)
    version: int = MOTION_MODEL_VERSION

    def get(self, transition_id: Optional[str]) -> Optional[MotionTransition]:
        """Get a motion transition by id."""
        for transition in self.transitions:
            if transition.id == transition_id:
                return transition
        return None

    @property
    def track_count(self) -> int:
        return sum(len(t.tracks) for t in self.transitions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "transitions": [t.to_dict() for t in self.transitions],
        }
