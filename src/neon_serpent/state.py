"""Game state machine: snake, food, score, and the discrete step."""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass

from .config import DIRECTIONS, GRID_SIZE, INITIAL_SNAKE_LENGTH, LEVEL_SPAN
from .events import (
    BestScoreBeaten,
    EventListener,
    FoodEaten,
    GameEvent,
    GameOver,
    GameStarted,
    LevelChanged,
)
from .foods import Cell, FoodInstance, FoodSpawner
from .storage import BestScoreStore, MemoryBestScoreStore
from .timing import EffectTimers, tempo_label

logger = logging.getLogger(__name__)

Direction = tuple[int, int]
UNIT_DIRECTIONS: frozenset[Direction] = frozenset(DIRECTIONS.values())


class GamePhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass(slots=True)
class ScoreState:
    """Score, persisted best, and the level derived from score."""

    score: int = 0
    best: int = 0
    level: int = 1

    def reset(self) -> None:
        self.score = 0
        self.level = 1

    @property
    def level_progress(self) -> float:
        """Fraction of the way to the next level, in [0, 1)."""
        return (self.score % LEVEL_SPAN) / LEVEL_SPAN

    def add(self, amount: int) -> list[GameEvent]:
        """Add points and report best/level changes as events."""
        events: list[GameEvent] = []
        self.score += amount
        if self.score > self.best:
            self.best = self.score
            events.append(BestScoreBeaten(self.best))
        new_level = self.score // LEVEL_SPAN + 1
        # One event per boundary crossed, even when a single add spans several.
        for level in range(self.level + 1, new_level + 1):
            events.append(LevelChanged(level))
        self.level = new_level
        return events


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only view of the game handed to renderers."""

    phase: GamePhase
    snake: tuple[Cell, ...]
    foods: tuple[FoodInstance, ...]
    score: int
    best: int
    level: int
    level_progress: float
    multiplier: float
    tempo: str
    slowed: bool
    slow_ms: float
    overdrive: bool
    overdrive_ms: float
    overdrive_hue: float
    direction: Direction
    pending_direction: Direction | None


class GameStateMachine:
    """Owns one game: Idle -> Running -> GameOver -> Running ..."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        best_store: BestScoreStore | None = None,
        spawner: FoodSpawner | None = None,
        grid_size: int = GRID_SIZE,
    ) -> None:
        self.rng = rng or random.Random()
        self.best_store = best_store or MemoryBestScoreStore()
        self.grid_size = grid_size
        self.spawner = spawner or FoodSpawner(self.rng, grid_size=grid_size)
        self.timers = EffectTimers()
        self.scores = ScoreState(best=max(0, self.best_store.get_best()))

        self.phase = GamePhase.IDLE
        self.snake: list[Cell] = []
        self.direction: Direction = DIRECTIONS["RIGHT"]
        self.pending_direction: Direction | None = None
        self.growth = 0

        self._events: list[GameEvent] = []
        self._listeners: list[EventListener] = []

    # --- Events --------------------------------------------------------

    def subscribe(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def drain_events(self) -> list[GameEvent]:
        events, self._events = self._events, []
        return events

    def _emit(self, event: GameEvent) -> None:
        self._events.append(event)
        for listener in self._listeners:
            listener(event)

    # --- Convenience accessors -----------------------------------------

    @property
    def foods(self) -> list[FoodInstance]:
        return self.spawner.foods

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def best(self) -> int:
        return self.scores.best

    @property
    def level(self) -> int:
        return self.scores.level

    @property
    def head(self) -> Cell:
        return self.snake[0]

    # --- Transitions ---------------------------------------------------

    def start(self) -> None:
        """Lay out a fresh board and begin running."""
        if self.phase is GamePhase.RUNNING:
            logger.debug("start() ignored: game already running")
            return

        center = self.grid_size // 2
        self.snake = [(center - i, center) for i in range(INITIAL_SNAKE_LENGTH)]
        self.direction = DIRECTIONS["RIGHT"]
        self.pending_direction = None
        self.growth = 0
        self.scores.reset()
        self.timers.reset()
        self.spawner.clear()
        self.spawner.ensure_food(self.snake)

        self.phase = GamePhase.RUNNING
        logger.info("game started (best %d)", self.scores.best)
        self._emit(GameStarted())

    def set_pending_direction(self, direction: Direction) -> bool:
        """Queue a turn for the next step; reversals are ignored."""
        if self.phase is not GamePhase.RUNNING:
            logger.debug("direction %s ignored in phase %s", direction, self.phase.value)
            return False
        direction = (int(direction[0]), int(direction[1]))
        if direction not in UNIT_DIRECTIONS:
            logger.debug("direction %s ignored: not a unit direction", direction)
            return False
        dx, dy = self.direction
        if direction == (-dx, -dy):
            return False
        self.pending_direction = direction
        return True

    def _end_game(self) -> None:
        self.phase = GamePhase.GAME_OVER
        logger.info("game over: score %d, level %d", self.score, self.level)
        self._emit(GameOver(self.score))

    # --- Logic step ----------------------------------------------------

    def _is_fatal(self, cell: Cell) -> bool:
        x, y = cell
        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            return True
        # Checked against the body before the tail moves, so entering the
        # cell the tail is about to vacate still counts as a collision.
        return cell in self.snake

    def step(self) -> None:
        """Advance the snake by exactly one grid cell."""
        if self.phase is not GamePhase.RUNNING:
            logger.debug("step() ignored in phase %s", self.phase.value)
            return

        if self.pending_direction is not None:
            self.direction = self.pending_direction
            self.pending_direction = None

        dx, dy = self.direction
        new_head = (self.head[0] + dx, self.head[1] + dy)

        if self._is_fatal(new_head):
            self._end_game()
            return

        self.snake.insert(0, new_head)

        food = self.spawner.food_at(new_head)
        if food is not None:
            self._consume(food)

        if self.growth > 0:
            self.growth -= 1
        else:
            self.snake.pop()

    def _consume(self, food: FoodInstance) -> None:
        archetype = food.archetype
        self.spawner.remove(food)
        self.growth += archetype.growth

        for event in self.scores.add(archetype.score):
            if isinstance(event, BestScoreBeaten):
                self.best_store.set_best(event.best)
            elif isinstance(event, LevelChanged):
                logger.info("level up: %d", event.level)
            self._emit(event)

        self.timers.apply(archetype.effect)
        self._emit(FoodEaten(archetype.key, food.cell))
        self.spawner.ensure_food(self.snake)

    # --- Snapshot ------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        timers = self.timers
        return GameSnapshot(
            phase=self.phase,
            snake=tuple(self.snake),
            foods=tuple(self.spawner.foods),
            score=self.scores.score,
            best=self.scores.best,
            level=self.scores.level,
            level_progress=self.scores.level_progress,
            multiplier=timers.effective_multiplier(self.scores.level),
            tempo=tempo_label(timers, self.scores.level),
            slowed=timers.is_slowed,
            slow_ms=timers.slow_ms,
            overdrive=timers.is_overdrive,
            overdrive_ms=timers.overdrive_ms,
            overdrive_hue=timers.overdrive_hue,
            direction=self.direction,
            pending_direction=self.pending_direction,
        )
