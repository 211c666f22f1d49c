"""Centralized configuration and palette definitions for Neon Serpent."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pygame


def _default_data_dir() -> Path:
    """Return a platform-appropriate user data directory for saves/logs."""

    if sys.platform.startswith("win"):
        base = Path(os.getenv("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / "neon-serpent"


DATA_DIR = Path(os.getenv("NEON_SERPENT_DATA_DIR") or _default_data_dir())
HIGHSCORE_FILE = Path(
    os.getenv("NEON_SERPENT_HIGHSCORE_FILE") or DATA_DIR / "highscore.txt"
)
THEME_FILE = Path(os.getenv("NEON_SERPENT_THEME_FILE") or DATA_DIR / "theme.txt")
LOG_LEVEL: str = os.getenv("NEON_SERPENT_LOG_LEVEL", "WARNING").upper()

# --- Rules ---------------------------------------------------------------

GRID_SIZE: int = 32
BASE_SPEED_MS: float = 150.0  # step interval at multiplier 1.0
MIN_INTERVAL_MS: float = 50.0
LEVEL_SPAN: int = 120  # points per level
LEVEL_SPEED_STEP: float = 0.1
MIN_FOOD: int = 2
INITIAL_SNAKE_LENGTH: int = 5

SPEED_BONUS_STEP: float = 0.18
SPEED_BONUS_MAX: float = 0.55
SPEED_BONUS_DECAY: float = 0.00005  # per ms
SLOW_MOTION_MS: float = 3200.0
SLOW_FACTOR: float = 0.6
OVERDRIVE_MS: float = 8000.0
OVERDRIVE_HUE_RATE: float = 0.08  # degrees per ms
OVERDRIVE_BASE_HUE: float = 200.0

# Upper bounds (exclusive) on the effective multiplier for each tempo label.
TEMPO_LABELS: tuple[tuple[float, str], ...] = (
    (1.15, "mellow"),
    (1.3, "lively"),
    (1.5, "burning"),
    (1.75, "frenzy"),
    (float("inf"), "lightspeed"),
)
SLOW_TEMPO_LABEL: str = "slow-mo"

DIRECTIONS: dict[str, tuple[int, int]] = {
    "UP": (0, -1),
    "DOWN": (0, 1),
    "LEFT": (-1, 0),
    "RIGHT": (1, 0),
}

# --- Presentation --------------------------------------------------------

TILE: int = 20
WINDOW_SIZE: int = GRID_SIZE * TILE  # 640px board
HUD_HEIGHT: int = 36
FONT_NAME: str = "consolas"
FONT_SIZE: int = 20
FPS: int = 120
SWIPE_THRESHOLD: float = 20.0

PARTICLE_COUNT: int = 18
PARTICLE_LIFE: float = 0.7  # seconds
RIPPLE_LIFE: float = 2.5  # seconds
RIPPLE_GROWTH: float = 80.0  # px per second
FLOATING_TEXT_LIMIT: int = 5
FLOATING_TEXT_RISE: float = 30.0  # px per second
FLOATING_TEXT_FADE: float = 0.7  # life per second
FLOATING_TEXT_TOP: float = HUD_HEIGHT + 24.0

KEY_TO_DIRECTION = {
    pygame.K_UP: "UP",
    pygame.K_w: "UP",
    pygame.K_i: "UP",
    pygame.K_DOWN: "DOWN",
    pygame.K_s: "DOWN",
    pygame.K_k: "DOWN",
    pygame.K_LEFT: "LEFT",
    pygame.K_a: "LEFT",
    pygame.K_j: "LEFT",
    pygame.K_RIGHT: "RIGHT",
    pygame.K_d: "RIGHT",
    pygame.K_l: "RIGHT",
}

PALETTES = {
    "dark": {
        "bg_top": pygame.Color(5, 9, 22),
        "bg_bottom": pygame.Color(2, 4, 11),
        "grid": pygame.Color(22, 26, 38),
        "text": pygame.Color(216, 239, 255),
        "hud": pygame.Color(10, 10, 10, 150),
        "accent": pygame.Color(122, 92, 244),
        "overlay": pygame.Color(5, 5, 15, 160),
    },
    "light": {
        "bg_top": pygame.Color(236, 240, 250),
        "bg_bottom": pygame.Color(214, 222, 240),
        "grid": pygame.Color(196, 204, 224),
        "text": pygame.Color(24, 30, 50),
        "hud": pygame.Color(255, 255, 255, 170),
        "accent": pygame.Color(122, 92, 244),
        "overlay": pygame.Color(236, 240, 250, 170),
    },
}

FOOD_COLORS = {
    "berry": pygame.Color(255, 107, 129),
    "citrus": pygame.Color(255, 179, 71),
    "mint": pygame.Color(108, 249, 229),
    "royal": pygame.Color(199, 125, 255),
}

LEVEL_UP_COLOR = pygame.Color(122, 92, 244)
NEW_BEST_COLOR = pygame.Color(255, 214, 102)
