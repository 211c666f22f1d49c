"""Neon Serpent window: input, audio, and drawing around the headless core."""

from __future__ import annotations

import colorsys
import logging
import math
import random

import pygame

from .audio import AudioEngine
from .config import (
    FONT_NAME,
    FONT_SIZE,
    FOOD_COLORS,
    FPS,
    GRID_SIZE,
    HUD_HEIGHT,
    LEVEL_UP_COLOR,
    NEW_BEST_COLOR,
    PALETTES,
    TILE,
    WINDOW_SIZE,
)
from .controls import direction_for_key, swipe_direction
from .driver import FrameDriver
from .effects import (
    FloatingText,
    Particle,
    Ripple,
    cell_center,
    draw_floating_texts,
    draw_particles,
    draw_ripples,
    effect_banner,
    spawn_floating_text,
    spawn_particles,
    spawn_ripple,
    update_floating_texts,
    update_particles,
    update_ripples,
)
from .events import BestScoreBeaten, FoodEaten, GameStarted, LevelChanged
from .foods import archetype_for_key
from .state import GamePhase, GameSnapshot, GameStateMachine
from .storage import FileBestScoreStore, ThemeStore

logger = logging.getLogger(__name__)


def _hsl(hue: float, saturation: float, lightness: float) -> pygame.Color:
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360, lightness, saturation)
    return pygame.Color(int(r * 255), int(g * 255), int(b * 255))


def game_over_lines(snapshot: GameSnapshot, new_best: bool) -> list[str]:
    lines = ["Game Over", f"Score: {snapshot.score}", f"Best:  {snapshot.best}"]
    if new_best:
        lines.append("New best!")
    lines.append("SPACE to play again / Q to quit")
    return lines


class NeonSerpent:
    """Owns the window and feeds wall-clock time into the frame driver."""

    def __init__(self, seed: int | None = None) -> None:
        pygame.init()
        self._base_window_flags = pygame.DOUBLEBUF | pygame.SCALED
        self.fullscreen = False
        self.size = (WINDOW_SIZE, WINDOW_SIZE + HUD_HEIGHT)
        self.window = pygame.display.set_mode(self.size, self._base_window_flags)
        pygame.display.set_caption("Neon Serpent")
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.audio = AudioEngine()

        self.theme_store = ThemeStore()
        self.theme = self.theme_store.get_theme()
        self.background = self._build_background()

        self.game = GameStateMachine(
            random.Random(seed), best_store=FileBestScoreStore()
        )
        self.driver = FrameDriver(self.game, now=pygame.time.get_ticks())
        self.particles: list[Particle] = []
        self.ripples: list[Ripple] = []
        self.floating_texts: list[FloatingText] = []
        self.new_best = False
        self._drag_start: tuple[int, int] | None = None

    @property
    def palette(self) -> dict[str, pygame.Color]:
        return PALETTES[self.theme]

    # --- Input ---------------------------------------------------------

    def handle_events(self) -> bool:
        """Translate window events into driver calls; False means quit."""
        now = pygame.time.get_ticks()
        for event in pygame.event.get():
            # A SPACE earlier in the same batch may have restarted the game.
            running = self.game.phase is GamePhase.RUNNING
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE and not running:
                    self.driver.request_start(now)
                elif event.key in (pygame.K_f, pygame.K_F11):
                    self.fullscreen = not self.fullscreen
                    self._apply_display_mode()
                elif event.key == pygame.K_t:
                    self.theme = self.theme_store.toggle()
                    self.background = self._build_background()
                elif event.key in (pygame.K_q, pygame.K_ESCAPE) and not running:
                    return False
                else:
                    direction = direction_for_key(event.key)
                    if direction:
                        self.driver.handle_direction(direction, now)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._drag_start = event.pos
            elif event.type == pygame.MOUSEBUTTONUP and self._drag_start:
                dx = event.pos[0] - self._drag_start[0]
                dy = event.pos[1] - self._drag_start[1]
                self._drag_start = None
                direction = swipe_direction(dx, dy)
                if direction:
                    self.driver.handle_direction(direction, now)
                elif not running:
                    self.driver.request_start(now)
        return True

    def _apply_display_mode(self) -> None:
        flags = self._base_window_flags
        if self.fullscreen:
            flags |= pygame.FULLSCREEN
        self.window = pygame.display.set_mode(self.size, flags)

    # --- Event fan-out -------------------------------------------------

    def _dispatch_events(self) -> None:
        for event in self.game.drain_events():
            self.audio.handle_event(event)
            if isinstance(event, GameStarted):
                self.new_best = False
            elif isinstance(event, BestScoreBeaten):
                if not self.new_best:
                    spawn_floating_text(
                        self.floating_texts, "New best!", NEW_BEST_COLOR
                    )
                self.new_best = True
            elif isinstance(event, LevelChanged):
                spawn_floating_text(
                    self.floating_texts, f"Level {event.level}", LEVEL_UP_COLOR
                )
            elif isinstance(event, FoodEaten):
                color = FOOD_COLORS.get(event.key, self.palette["accent"])
                origin = cell_center(event.cell, HUD_HEIGHT)
                spawn_particles(self.particles, origin, color)
                spawn_ripple(self.ripples, origin, color)
                archetype = archetype_for_key(
                    event.key, self.game.spawner.archetypes
                )
                banner = effect_banner(archetype)
                if banner:
                    spawn_floating_text(self.floating_texts, banner, color)

    # --- Draw ----------------------------------------------------------

    def _build_background(self) -> pygame.Surface:
        """Gradient plus grid lines, built once per theme."""
        palette = self.palette
        surface = pygame.Surface(self.size)
        top, bottom = palette["bg_top"], palette["bg_bottom"]
        height = self.size[1]
        for y in range(height):
            t = y / height
            color = (
                int(top.r + (bottom.r - top.r) * t),
                int(top.g + (bottom.g - top.g) * t),
                int(top.b + (bottom.b - top.b) * t),
            )
            pygame.draw.line(surface, color, (0, y), (WINDOW_SIZE, y))
        for i in range(GRID_SIZE + 1):
            pos = i * TILE
            pygame.draw.line(
                surface, palette["grid"], (pos, HUD_HEIGHT), (pos, self.size[1])
            )
            pygame.draw.line(
                surface,
                palette["grid"],
                (0, pos + HUD_HEIGHT),
                (WINDOW_SIZE, pos + HUD_HEIGHT),
            )
        return surface

    def _draw_foods(self, snapshot: GameSnapshot, time_ms: int) -> None:
        for food in snapshot.foods:
            cx, cy = cell_center(food.cell, HUD_HEIGHT)
            wave = math.sin(time_ms * 0.003 + food.wave_offset) * 0.5
            radius = TILE * (0.32 + wave * 0.04)
            color = FOOD_COLORS.get(food.archetype.key, self.palette["accent"])
            glow = pygame.Surface((TILE * 2, TILE * 2), pygame.SRCALPHA)
            glow_color = pygame.Color(color.r, color.g, color.b, 90)
            pygame.draw.circle(glow, glow_color, (TILE, TILE), int(radius + 6))
            self.window.blit(glow, (cx - TILE, cy - TILE))
            pygame.draw.circle(self.window, color, (int(cx), int(cy)), int(radius))

    def _draw_snake(self, snapshot: GameSnapshot) -> None:
        length = max(1, len(snapshot.snake) - 1)
        for idx, (x, y) in enumerate(snapshot.snake):
            t = idx / length
            if snapshot.overdrive:
                color = _hsl(snapshot.overdrive_hue + t * 180, 0.9, 0.6)
            else:
                color = _hsl(190 + t * 55, 0.9, 0.5 + (1 - t) * 0.12)
            rect = pygame.Rect(
                x * TILE + 2, y * TILE + 2 + HUD_HEIGHT, TILE - 4, TILE - 4
            )
            pygame.draw.rect(self.window, color, rect, border_radius=TILE // 2)

    def _draw_hud(self, snapshot: GameSnapshot) -> None:
        palette = self.palette
        hud = pygame.Surface((WINDOW_SIZE, HUD_HEIGHT), pygame.SRCALPHA)
        hud.fill(palette["hud"])
        text = (
            f"SCORE {snapshot.score:04}  BEST {snapshot.best:04}  "
            f"LV {snapshot.level}  {snapshot.tempo.upper()} x{snapshot.multiplier:.2f}  "
            f"LEN {len(snapshot.snake)}"
        )
        hud.blit(self.font.render(text, True, palette["text"]), (10, 6))
        bar_width = int(WINDOW_SIZE * snapshot.level_progress)
        pygame.draw.rect(
            hud, palette["accent"], pygame.Rect(0, HUD_HEIGHT - 3, bar_width, 3)
        )
        self.window.blit(hud, (0, 0))

    def _draw_overlay(self, lines: list[str]) -> None:
        palette = self.palette
        overlay = pygame.Surface(self.size, pygame.SRCALPHA)
        overlay.fill(palette["overlay"])
        for idx, text in enumerate(lines):
            surf = self.font.render(text, True, palette["text"])
            rect = surf.get_rect()
            rect.center = (WINDOW_SIZE // 2, self.size[1] // 2 + idx * (FONT_SIZE + 8))
            overlay.blit(surf, rect)
        self.window.blit(overlay, (0, 0))

    def draw(self, snapshot: GameSnapshot) -> None:
        time_ms = pygame.time.get_ticks()
        self.window.blit(self.background, (0, 0))
        draw_ripples(self.window, self.ripples)
        self._draw_foods(snapshot, time_ms)
        self._draw_snake(snapshot)
        draw_particles(self.window, self.particles)
        draw_floating_texts(self.window, self.font, self.floating_texts)
        self._draw_hud(snapshot)

        if snapshot.phase is GamePhase.IDLE:
            self._draw_overlay(["Neon Serpent", "Press SPACE or an arrow key"])
        elif snapshot.phase is GamePhase.GAME_OVER:
            self._draw_overlay(game_over_lines(snapshot, self.new_best))

    # --- Main loop -----------------------------------------------------

    def start(self) -> None:
        """Run the main loop: input, one driver frame, effects, render."""
        clock = pygame.time.Clock()
        running = True

        while running:
            dt = clock.tick(FPS) / 1000.0
            running = self.handle_events()

            snapshot = self.driver.advance(pygame.time.get_ticks())
            self._dispatch_events()
            self.particles = update_particles(self.particles, dt)
            self.ripples = update_ripples(self.ripples, dt)
            self.floating_texts = update_floating_texts(self.floating_texts, dt)

            self.draw(snapshot)
            pygame.display.update()

        pygame.quit()
