"""
Desktop host window using pygame.

Owns the frame loop: polls input, feeds the play-field size and a
clamped frame delta into the simulation, and renders its snapshot.
"""

import asyncio
import logging
import time
from typing import Optional

import pygame

from flappyburst.audio.engine import AudioEngine
from flappyburst.config.settings import DisplaySettings
from flappyburst.game.clock import FrameClock
from flappyburst.game.simulation import Simulation
from flappyburst.graphics.scene import SceneRenderer

logger = logging.getLogger(__name__)


class SimulatorWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / mouse click: Flap (first flap also starts)
        P: Pause / resume
        R: Reset to Get Ready
        RETURN: Play (resets after game over)
        M: Mute / unmute
        ESC / Q: Quit
    """

    def __init__(
        self,
        simulation: Simulation,
        config: Optional[DisplaySettings] = None,
        audio: Optional[AudioEngine] = None,
    ) -> None:
        self.simulation = simulation
        self.config = config if config is not None else simulation.settings.display
        self.audio = audio

        self.renderer = SceneRenderer()
        self.frame_clock = FrameClock(max_dt=self.config.max_dt)

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._running = False
        self._frame_count = 0

        logger.info("SimulatorWindow created")

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF | pygame.RESIZABLE
        if self.config.fullscreen:
            flags = pygame.DOUBLEBUF | pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        w, h = self._screen.get_size()
        self.simulation.resize(w, h)
        logger.info(f"Pygame initialized: {w}x{h}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self.simulation.resize(event.w, event.h)
                logger.debug(f"Play field resized to {event.w}x{event.h}")

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.simulation.on_flap()

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_SPACE:
            self.simulation.on_flap()
        elif key == pygame.K_p:
            self.simulation.toggle_pause()
        elif key == pygame.K_r:
            self.simulation.reset()
        elif key == pygame.K_RETURN:
            self.simulation.play()
        elif key == pygame.K_m:
            if self.audio:
                self.audio.toggle_mute()

    def _step(self, now: Optional[float] = None) -> None:
        """Advance the simulation by one frame."""
        if now is None:
            now = time.perf_counter()
        dt = self.frame_clock.tick(now)
        self.simulation.tick(dt)

    def _render(self) -> None:
        """Render the current frame; a paused game keeps showing its frozen state."""
        if not self._screen:
            return
        self.renderer.render(self._screen, self.simulation.snapshot())
        pygame.display.flip()

    async def run(self) -> None:
        """Main loop."""
        self._init_pygame()
        self._running = True
        self.frame_clock.reset()

        logger.info("Game window started")

        while self._running:
            self._handle_events()
            self._step()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the loop after the current frame."""
        self._running = False
