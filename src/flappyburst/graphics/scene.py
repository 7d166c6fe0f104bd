"""Pygame renderer for a simulation snapshot."""

import logging
import math
from typing import Optional, Tuple

import pygame

from flappyburst.game.simulation import FrameSnapshot, PipeView
from flappyburst.graphics.layout import (
    DIRT_HEIGHT,
    DIRT_OFFSET,
    GROUND_HEIGHT,
    cloud_layout,
    overlay_lines,
    score_line,
    shows_live_score,
    vertical_gradient,
)

logger = logging.getLogger(__name__)

PIPE_LIGHT = (56, 239, 125)
PIPE_DARK = (17, 153, 142)
GROUND = (0, 193, 106)
DIRT = (255, 206, 109)
BIRD_BODY = (255, 226, 89)
BIRD_BELLY = (255, 60, 172)
BEAK = (255, 204, 0)
PIPE_LIP_HEIGHT = 18


class SceneRenderer:
    """Draws background, pipes, bird, score and overlay onto a surface.

    Only reads FrameSnapshot; never touches the simulation.
    """

    def __init__(self) -> None:
        self._sky: Optional[pygame.Surface] = None
        self._sky_size: Tuple[int, int] = (0, 0)
        self._bird_sprite: Optional[pygame.Surface] = None
        self._score_font: Optional[pygame.font.Font] = None
        self._title_font: Optional[pygame.font.Font] = None
        self._small_font: Optional[pygame.font.Font] = None

    def _init_fonts(self) -> None:
        pygame.font.init()
        self._score_font = pygame.font.SysFont(None, 48, bold=True)
        self._title_font = pygame.font.SysFont(None, 56, bold=True)
        self._small_font = pygame.font.SysFont(None, 26)

    def render(self, surface: pygame.Surface, snapshot: FrameSnapshot) -> None:
        if self._score_font is None:
            self._init_fonts()

        self._draw_background(surface, snapshot)
        for pipe in snapshot.pipes:
            self._draw_pipe(surface, pipe, snapshot.playfield_height)
        self._draw_bird(surface, snapshot)
        self._draw_ui(surface, snapshot)

    # Background

    def _draw_background(self, surface: pygame.Surface, snapshot: FrameSnapshot) -> None:
        w, h = surface.get_size()
        if self._sky is None or self._sky_size != (w, h):
            # surfarray wants (width, height, 3)
            self._sky = pygame.surfarray.make_surface(vertical_gradient(w, h).swapaxes(0, 1))
            self._sky_size = (w, h)
        surface.blit(self._sky, (0, 0))

        for x, y, size in cloud_layout(snapshot.elapsed_time, w, h):
            self._draw_cloud(surface, x, y, size)

        pygame.draw.rect(surface, GROUND, (0, h - GROUND_HEIGHT, w, GROUND_HEIGHT))
        pygame.draw.rect(surface, DIRT, (0, h - DIRT_OFFSET, w, DIRT_HEIGHT))

    def _draw_cloud(self, surface: pygame.Surface, x: float, y: float, s: float) -> None:
        size = int(s * 2.2)
        cloud = pygame.Surface((size, size), pygame.SRCALPHA)
        color = (255, 255, 255, 217)
        ox, oy = s * 0.6, s * 0.8
        for cx, cy, r in (
            (0.0, 0.0, 0.6),
            (0.4, -10 / s, 0.5),
            (0.9, 0.0, 0.6),
            (0.5, 10 / s, 0.55),
        ):
            pygame.draw.circle(cloud, color, (int(ox + cx * s), int(oy + cy * s)), int(r * s))
        surface.blit(cloud, (int(x - ox), int(y - oy)))

    # Pipes

    def _draw_pipe(self, surface: pygame.Surface, pipe: PipeView, field_height: float) -> None:
        x, w = int(pipe.x), int(pipe.width)
        top = pygame.Rect(x, 0, w, int(pipe.top_height))
        bottom = pygame.Rect(x, int(pipe.bottom_y), w, int(pipe.bottom_height))

        for rect, is_top in ((top, True), (bottom, False)):
            if rect.height <= 0:
                continue
            pygame.draw.rect(surface, PIPE_LIGHT, rect)
            pygame.draw.rect(surface, PIPE_DARK, (rect.right - w // 3, rect.y, w // 3, rect.height))

            overlay = pygame.Surface((w + 8, max(rect.height, PIPE_LIP_HEIGHT)), pygame.SRCALPHA)
            # Stripes
            for i in range(4):
                pygame.draw.rect(overlay, (255, 255, 255, 31), (10 + i * 14, 4, 6, max(0, rect.height - 8)))
            surface.blit(overlay, (rect.x - 4, rect.y))

            # Lip at the open end
            lip = pygame.Surface((w + 8, PIPE_LIP_HEIGHT), pygame.SRCALPHA)
            lip.fill((0, 0, 0, 38))
            lip_y = rect.bottom - 2 if is_top else rect.y - PIPE_LIP_HEIGHT + 2
            surface.blit(lip, (rect.x - 4, lip_y))

    # Bird

    def _build_bird_sprite(self) -> pygame.Surface:
        sprite = pygame.Surface((64, 64), pygame.SRCALPHA)
        cx, cy = 32, 32
        pygame.draw.rect(sprite, BIRD_BODY, (cx - 18, cy - 14, 36, 28), border_radius=14)
        pygame.draw.rect(sprite, BIRD_BELLY, (cx - 18, cy, 36, 14),
                         border_bottom_left_radius=14, border_bottom_right_radius=14)
        pygame.draw.circle(sprite, (255, 255, 255), (cx + 4, cy - 4), 6)
        pygame.draw.circle(sprite, (34, 34, 34), (cx + 6, cy - 4), 3)
        pygame.draw.polygon(sprite, BEAK, [(cx + 18, cy - 2), (cx + 30, cy), (cx + 18, cy + 2)])
        pygame.draw.rect(sprite, (255, 255, 255, 153), (cx - 10, cy, 18, 10), border_radius=5)
        return sprite

    def _draw_bird(self, surface: pygame.Surface, snapshot: FrameSnapshot) -> None:
        if self._bird_sprite is None:
            self._bird_sprite = self._build_bird_sprite()

        # Screen y points down, pygame rotates counter-clockwise
        angle = -math.degrees(snapshot.bird_rotation)
        rotated = pygame.transform.rotate(self._bird_sprite, angle)
        rect = rotated.get_rect(center=(int(snapshot.bird_x), int(snapshot.bird_y)))
        surface.blit(rotated, rect.topleft)

    # UI

    def _draw_ui(self, surface: pygame.Surface, snapshot: FrameSnapshot) -> None:
        w, h = surface.get_size()

        if shows_live_score(snapshot.phase):
            text = str(snapshot.score)
            shadow = self._score_font.render(text, True, (0, 0, 0))
            shadow.set_alpha(90)
            label = self._score_font.render(text, True, (255, 255, 255))
            surface.blit(shadow, shadow.get_rect(center=(w // 2 + 2, 42)))
            surface.blit(label, label.get_rect(center=(w // 2, 40)))

        lines = overlay_lines(snapshot.phase)
        if lines is None:
            return

        title, subtitle = lines
        panel = pygame.Surface((w, h), pygame.SRCALPHA)
        panel.fill((10, 10, 30, 110))
        surface.blit(panel, (0, 0))

        title_surf = self._title_font.render(title, True, (255, 255, 255))
        subtitle_surf = self._small_font.render(subtitle, True, (230, 230, 240))
        scores_surf = self._small_font.render(
            score_line(snapshot.score, snapshot.best_score), True, (255, 226, 89)
        )
        surface.blit(title_surf, title_surf.get_rect(center=(w // 2, h // 2 - 50)))
        surface.blit(subtitle_surf, subtitle_surf.get_rect(center=(w // 2, h // 2)))
        surface.blit(scores_surf, scores_surf.get_rect(center=(w // 2, h // 2 + 36)))
