"""Frames, transitions and the scene document."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from framemotion.animation.easing import Easing
from framemotion.scene.nodes import Node
from framemotion.scene.properties import TrackProperty

DEFAULT_TRANSITION_DURATION = 300.0
DEFAULT_TRANSITION_DELAY = 0.0
DEFAULT_FRAME_DURATION = 300.0


class AnimationMode(str, Enum):
    """How a transition animates between its frames."""

    AUTO = "auto"
    LINEAR = "linear"
    INSTANT = "instant"
    DISSOLVE = "dissolve"


class StaggerMode(str, Enum):
    """Per-node delay offset strategy."""

    NONE = "none"
    ORDER = "order"
    DISTANCE = "distance"


@dataclass
class StaggerConfig:
    """Stagger configuration.

    Attributes:
        mode: Offset by paint order or by distance from the frame center
        amount: Milliseconds per step (order) or per 100 units (distance)
    """

    mode: StaggerMode = StaggerMode.NONE
    amount: float = 0.0


@dataclass
class MotionOverride:
    """Easing override for one property of one node."""

    node_id: str
    property: TrackProperty
    easing: Easing | str


@dataclass
class FrameVariant:
    """Alternate node list for a responsive state of a frame."""

    id: str
    name: str = ""
    width: float = 0.0
    height: float = 0.0
    nodes: list[Node] = field(default_factory=list)


@dataclass
class Frame:
    """A named, static snapshot of the scene."""

    id: str
    name: str = ""
    width: float = 0.0
    height: float = 0.0
    background: Optional[str] = None
    nodes: list[Node] = field(default_factory=list)
    variants: list[FrameVariant] = field(default_factory=list)
    duration: float = DEFAULT_FRAME_DURATION
    is_hold: bool = False

    @property
    def center(self) -> tuple[float, float]:
        """Geometric center of the frame."""
        return (self.width / 2, self.height / 2)

    def nodes_for(self, variant_id: Optional[str] = None) -> list[Node]:
        """Node list of a variant, or the base list when absent."""
        if variant_id is not None:
            for variant in self.variants:
                if variant.id == variant_id:
                    return variant.nodes
        return self.nodes


@dataclass
class Transition:
    """Directed edge between two frames with its animation configuration."""

    id: str
    from_frame_id: str
    to_frame_id: str
    duration: float = DEFAULT_TRANSITION_DURATION
    delay: float = DEFAULT_TRANSITION_DELAY
    easing: Easing | str = Easing.EASE
    animation: AnimationMode = AnimationMode.AUTO
    overrides: list[MotionOverride] = field(default_factory=list)
    stagger: StaggerConfig = field(default_factory=StaggerConfig)


@dataclass
class Scene:
    """Complete scene: frames plus the transitions linking them."""

    name: str = "Untitled"
    frames: list[Frame] = field(default_factory=list)
    transitions: list[Transition] = field(default_factory=list)
    start_frame_id: Optional[str] = None

    def frame(self, frame_id: Optional[str]) -> Optional[Frame]:
        """Get a frame by id."""
        for frame in self.frames:
            if frame.id == frame_id:
                return frame
        return None

    def transition(self, transition_id: Optional[str]) -> Optional[Transition]:
        """Get a transition by id."""
        for transition in self.transitions:
            if transition.id == transition_id:
                return transition
        return None
