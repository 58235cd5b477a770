"""Playback driver: plays a motion transition onto a surface."""

from enum import Enum, auto
from typing import Any, Callable, List, Mapping, Optional
import logging

from framemotion.animation.scheduler import Scheduler
from framemotion.graphics.assets import AssetCache
from framemotion.graphics.painter import paint_nodes
from framemotion.graphics.surface import Surface
from framemotion.motion.evaluator import evaluate_transition
from framemotion.motion.model import MotionModel
from framemotion.scene.document import Scene
from framemotion.scene.nodes import Node

logger = logging.getLogger(__name__)

PaintFunc = Callable[[Surface, List[Node], Optional[str]], Any]
FrameListener = Callable[[float, List[Node]], None]


class PlayState(Enum):
    """Player playback state."""

    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()


class Player:
    """Plays one transition of a scene.

    The player owns time: each scheduled tick computes the elapsed
    time, evaluates the transition and hands the nodes to the paint
    function. Nothing raised while evaluating or painting escapes;
    failures are logged and the surface is cleared.

    Args:
        scene: Scene holding frames and transitions
        motion: Motion model built from ``scene``
        transition_id: Transition to play
        surface: Paint target
        scheduler: Frame scheduler (also the default clock)
        clock: Millisecond clock; ``scheduler.now`` when omitted
        loop: Restart from 0 when the end is reached
        speed: Playback speed multiplier (>= 0)
        paint: Paint function; paints with :func:`paint_nodes` by default
        assets: Bitmap cache; loads trigger a repaint while not playing
        variants: Optional frame id -> variant id selection
    """

    def __init__(
        self,
        scene: Scene,
        motion: MotionModel,
        transition_id: str,
        surface: Surface,
        scheduler: Scheduler,
        clock: Optional[Callable[[], float]] = None,
        loop: bool = False,
        speed: float = 1.0,
        paint: Optional[PaintFunc] = None,
        assets: Optional[AssetCache] = None,
        variants: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.scene = scene
        self.motion = motion
        self.transition_id = transition_id
        self.surface = surface
        self.scheduler = scheduler
        self.loop = loop
        self.assets = assets
        self.variants = variants

        self._clock = clock or scheduler.now
        self._paint = paint or self._paint_default
        self._speed = max(0.0, speed)

        self._state = PlayState.IDLE
        self._start = 0.0
        self._anchor_elapsed = 0.0
        self._elapsed = 0.0
        self._handle: Any = None

        self._on_frame: List[FrameListener] = []
        self._on_complete: List[Callable[[], None]] = []

        transition = motion.get(transition_id)
        self._duration = transition.total_duration if transition is not None else 0.0
        from_frame = scene.frame(transition.from_frame_id) if transition is not None else None
        self._background = from_frame.background if from_frame is not None else None
        if transition is None:
            logger.warning(f"Player: unknown transition {transition_id!r}, playback paints nothing")

        self._unsubscribe_assets = assets.on_load(self._asset_loaded) if assets else None

        logger.debug(f"Player created for {transition_id!r} (duration={self._duration:.0f}ms)")

    # Playback control
    def play(self) -> None:
        """Start, or resume from pause. No-op while already playing."""
        if self._state is PlayState.PLAYING:
            return
        if self._state is PlayState.IDLE:
            self._elapsed = 0.0
        self._anchor(self._elapsed)
        self._state = PlayState.PLAYING
        if not self._schedule_tick():
            return
        logger.debug(f"Player playing {self.transition_id!r} from {self._elapsed:.0f}ms")

    def pause(self) -> None:
        """Cancel the pending tick and keep the elapsed time."""
        if self._state is not PlayState.PLAYING:
            return
        self._elapsed = min(self._current_elapsed(), self._duration)
        self._cancel_tick()
        self._state = PlayState.PAUSED
        logger.debug(f"Player paused at {self._elapsed:.0f}ms")

    def stop(self) -> None:
        """Cancel playback and rewind to 0."""
        self._cancel_tick()
        self._state = PlayState.IDLE
        self._elapsed = 0.0

    def seek(self, time_ms: float) -> None:
        """Evaluate and paint at ``time_ms`` without changing playback state.

        A paused or playing player continues from the sought time.
        """
        if self._state is not PlayState.IDLE:
            position = min(max(time_ms, 0.0), self._duration)
            self._elapsed = position
            if self._state is PlayState.PLAYING:
                self._anchor(position)
        self._render(time_ms)

    def close(self) -> None:
        """Stop playback and detach from the asset cache."""
        self.stop()
        if self._unsubscribe_assets:
            self._unsubscribe_assets()
            self._unsubscribe_assets = None

    # State
    @property
    def state(self) -> PlayState:
        """Get current playback state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlayState.PLAYING

    @property
    def elapsed(self) -> float:
        """Elapsed transition time in milliseconds at the last tick or pause."""
        return self._elapsed

    @property
    def duration(self) -> float:
        """Latest track end of the transition, in milliseconds."""
        return self._duration

    @property
    def speed(self) -> float:
        """Get playback speed multiplier."""
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        """Set playback speed multiplier; elapsed time stays continuous."""
        if self._state is PlayState.PLAYING:
            self._anchor(self._current_elapsed())
        self._speed = max(0.0, value)

    # Listeners
    def on_frame(self, callback: FrameListener) -> None:
        """Register a callback receiving (time_ms, nodes) after each paint."""
        self._on_frame.append(callback)

    def on_complete(self, callback: Callable[[], None]) -> None:
        """Register a callback for when non-looping playback finishes."""
        self._on_complete.append(callback)

    # Internals
    def _anchor(self, elapsed: float) -> None:
        self._anchor_elapsed = elapsed
        self._start = self._clock()

    def _current_elapsed(self) -> float:
        return self._anchor_elapsed + (self._clock() - self._start) * self._speed

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _schedule_tick(self) -> bool:
        try:
            self._handle = self.scheduler.schedule(self._tick)
        except Exception:
            logger.exception(f"Failed to schedule a tick for {self.transition_id!r}, stopping")
            self._handle = None
            self._state = PlayState.IDLE
            return False
        return True

    def _tick(self) -> None:
        self._handle = None
        if self._state is not PlayState.PLAYING:
            return

        elapsed = self._current_elapsed()
        finished = False
        if elapsed >= self._duration:
            if self.loop:
                self._anchor(0.0)
                elapsed = 0.0
            else:
                elapsed = self._duration
                finished = True
                self._state = PlayState.IDLE

        self._elapsed = elapsed
        self._render(elapsed)

        if self._state is PlayState.PLAYING:
            self._schedule_tick()
        elif finished:
            logger.debug(f"Player finished {self.transition_id!r}")
            for callback in list(self._on_complete):
                try:
                    callback()
                except Exception as e:
                    logger.error(f"Error in player completion listener: {e}")

    def _paint_default(self, surface: Surface, nodes: List[Node], background: Optional[str]) -> None:
        paint_nodes(surface, nodes, background, self.assets)

    def _render(self, time_ms: float) -> None:
        try:
            nodes = evaluate_transition(
                self.scene, self.motion, self.transition_id, time_ms, self.variants
            )
            self._paint(self.surface, nodes, self._background)
        except Exception:
            logger.exception(f"Failed to render {self.transition_id!r} at {time_ms:.0f}ms")
            try:
                self.surface.clear()
            except Exception as e:
                logger.error(f"Failed to clear surface: {e}")
            return

        for callback in list(self._on_frame):
            try:
                callback(time_ms, nodes)
            except Exception as e:
                logger.error(f"Error in player frame listener: {e}")

    def _asset_loaded(self, src: str) -> None:
        # Called on a loader thread
        try:
            self.scheduler.wake(self._repaint)
        except RuntimeError as e:
            logger.debug(f"Cannot schedule repaint for {src[:40]!r}: {e}")

    def _repaint(self) -> None:
        if self._state is not PlayState.PLAYING:
            self._render(self._elapsed)
