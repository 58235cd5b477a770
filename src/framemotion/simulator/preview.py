"""
Preview window using pygame.

Plays one transition of a scene in a desktop window so motion can be
checked by eye.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import pygame

from framemotion.animation.player import Player, PlayState
from framemotion.animation.scheduler import AsyncioScheduler
from framemotion.graphics.assets import AssetCache
from framemotion.graphics.surface import ImageSurface
from framemotion.motion.model import MotionModel
from framemotion.scene.document import Scene

logger = logging.getLogger(__name__)

SEEK_STEP_MS = 100.0


@dataclass
class PreviewConfig:
    """Preview window configuration."""
    width: int = 0
    height: int = 0
    scale: float = 1.0
    title: str = "framemotion preview"
    fps: int = 60

    # Colors
    bg_color: str = "#14141e"
    text_color: tuple[int, int, int] = (200, 200, 220)


class PreviewWindow:
    """
    Window driving a :class:`Player` for one transition.

    Keyboard Mapping:
        SPACE: Play / pause
        LEFT ARROW: Seek back 100 ms
        RIGHT ARROW: Seek forward 100 ms
        HOME: Stop (rewind)
        ESC / Q: Exit preview
    """

    def __init__(
        self,
        scene: Scene,
        motion: MotionModel,
        transition_id: str,
        config: Optional[PreviewConfig] = None,
        loop: bool = False,
        speed: float = 1.0,
        assets: Optional[AssetCache] = None,
    ) -> None:
        self.config = config or PreviewConfig()
        self.scene = scene
        self.motion = motion
        self.transition_id = transition_id

        frame = self._source_frame()
        self.surface = ImageSurface(frame.width if frame else 320, frame.height if frame else 240)
        self.scheduler = AsyncioScheduler(self.config.fps)
        self.player = Player(
            scene,
            motion,
            transition_id,
            self.surface,
            self.scheduler,
            loop=loop,
            speed=speed,
            assets=assets,
        )

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False

        logger.info(f"PreviewWindow created for {transition_id!r}")

    def _source_frame(self):
        transition = self.motion.get(self.transition_id)
        return self.scene.frame(transition.from_frame_id) if transition else None

    def _window_size(self) -> tuple[int, int]:
        width = self.config.width or int(self.surface.width * self.config.scale)
        height = self.config.height or int(self.surface.height * self.config.scale)
        return max(1, width), max(1, height) + 24

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(f"{self.config.title}: {self.transition_id}")
        self._screen = pygame.display.set_mode(self._window_size(), pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 18)

        logger.info(f"Pygame initialized: {self._screen.get_width()}x{self._screen.get_height()}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_SPACE:
            if self.player.is_playing:
                self.player.pause()
            else:
                self.player.play()
        elif key == pygame.K_LEFT:
            self._seek(-SEEK_STEP_MS)
        elif key == pygame.K_RIGHT:
            self._seek(SEEK_STEP_MS)
        elif key == pygame.K_HOME:
            self.player.stop()
            self.player.seek(0.0)

    def _seek(self, step: float) -> None:
        if self.player.state is PlayState.IDLE:
            # Park the player so it resumes from the sought time
            self.player.play()
            self.player.pause()
        target = min(max(self.player.elapsed + step, 0.0), self.player.duration)
        self.player.seek(target)

    def _render(self) -> None:
        """Render the painted surface and status line."""
        if not self._screen:
            return

        self._screen.fill(pygame.Color(self.config.bg_color))

        frame = pygame.surfarray.make_surface(self.surface.get_buffer().swapaxes(0, 1))
        area = (self._screen.get_width(), self._screen.get_height() - 24)
        if frame.get_size() != area:
            frame = pygame.transform.smoothscale(frame, area)
        self._screen.blit(frame, (0, 0))

        if self._font:
            status = (
                f"{self.player.state.name}  {self.player.elapsed:6.0f} / "
                f"{self.player.duration:.0f} ms  x{self.player.speed:g}"
            )
            text = self._font.render(status, True, self.config.text_color)
            self._screen.blit(text, (8, area[1] + 4))

        pygame.display.flip()

    async def run(self) -> None:
        """Main preview loop."""
        self._init_pygame()
        self._running = True

        self.player.seek(0.0)
        self.player.play()
        logger.info("Preview started")

        while self._running:
            self._handle_events()
            self._render()

            # Frame timing; the sleep lets scheduled player ticks run
            if self._clock:
                self._clock.tick(self.config.fps)
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.player.close()
        pygame.quit()
        logger.info("Preview stopped")

    def stop(self) -> None:
        """Stop the preview."""
        self._running = False
