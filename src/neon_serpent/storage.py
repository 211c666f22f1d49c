"""Tiny key/value persistence for the best score and theme preference."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .config import HIGHSCORE_FILE, THEME_FILE

logger = logging.getLogger(__name__)

THEMES: tuple[str, ...] = ("dark", "light")


class BestScoreStore(Protocol):
    def get_best(self) -> int: ...

    def set_best(self, best: int) -> None: ...


class MemoryBestScoreStore:
    """Keeps the best score for the lifetime of the process only."""

    def __init__(self, best: int = 0) -> None:
        self.best = best

    def get_best(self) -> int:
        return self.best

    def set_best(self, best: int) -> None:
        self.best = best


class FileBestScoreStore:
    """Best score stored as a plain integer in a text file."""

    def __init__(self, path: Path = HIGHSCORE_FILE) -> None:
        self.path = Path(path)

    def get_best(self) -> int:
        try:
            text = self.path.read_text(encoding="utf-8")
            return max(0, int(text.strip() or "0"))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as exc:
            logger.warning("could not read best score from %s: %s", self.path, exc)
            return 0

    def set_best(self, best: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(best), encoding="utf-8")
        except OSError as exc:
            logger.warning("could not save best score to %s: %s", self.path, exc)


class ThemeStore:
    """Remembers whether the player picked the dark or light palette."""

    def __init__(self, path: Path = THEME_FILE, default: str = "dark") -> None:
        self.path = Path(path)
        self.default = default

    def get_theme(self) -> str:
        try:
            theme = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return self.default
        except (OSError, ValueError) as exc:
            logger.warning("could not read theme from %s: %s", self.path, exc)
            return self.default
        return theme if theme in THEMES else self.default

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"unknown theme {theme!r}")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(theme, encoding="utf-8")
        except OSError as exc:
            logger.warning("could not save theme to %s: %s", self.path, exc)

    def toggle(self) -> str:
        theme = "light" if self.get_theme() == "dark" else "dark"
        self.set_theme(theme)
        return theme
