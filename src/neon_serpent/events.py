"""One-shot notifications emitted by the game state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from .foods import Cell


@dataclass(frozen=True, slots=True)
class GameStarted:
    pass


@dataclass(frozen=True, slots=True)
class FoodEaten:
    key: str
    cell: Cell


@dataclass(frozen=True, slots=True)
class LevelChanged:
    level: int


@dataclass(frozen=True, slots=True)
class BestScoreBeaten:
    best: int


@dataclass(frozen=True, slots=True)
class GameOver:
    final_score: int


GameEvent = Union[GameStarted, FoodEaten, LevelChanged, BestScoreBeaten, GameOver]
EventListener = Callable[[GameEvent], None]
