"""Food archetypes, weighted selection, and free-cell spawning."""

from __future__ import annotations

import enum
import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, Sequence

from .config import GRID_SIZE, MIN_FOOD

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


class FoodEffect(enum.Enum):
    """Side effect a food applies to the effect timers when eaten."""

    SPEED_BOOST = "speed_boost"
    SLOW_MOTION = "slow_motion"
    OVERDRIVE = "overdrive"


@dataclass(frozen=True, slots=True)
class FoodArchetype:
    key: str
    label: str
    score: int
    growth: int
    weight: float
    effect: FoodEffect | None = None


FOOD_ARCHETYPES: tuple[FoodArchetype, ...] = (
    FoodArchetype("berry", "Sweet Berry", score=10, growth=1, weight=6),
    FoodArchetype(
        "citrus",
        "Sun Citrus",
        score=25,
        growth=1,
        weight=3,
        effect=FoodEffect.SPEED_BOOST,
    ),
    FoodArchetype(
        "mint",
        "Frost Mint",
        score=18,
        growth=2,
        weight=2,
        effect=FoodEffect.SLOW_MOTION,
    ),
    FoodArchetype(
        "royal",
        "Royal Star",
        score=50,
        growth=3,
        weight=1,
        effect=FoodEffect.OVERDRIVE,
    ),
)


@dataclass(frozen=True, slots=True)
class FoodInstance:
    """A food sitting on the board."""

    cell: Cell
    archetype: FoodArchetype
    wave_offset: float = 0.0  # renderer bob phase


def archetype_for_key(
    key: str, archetypes: Sequence[FoodArchetype] = FOOD_ARCHETYPES
) -> FoodArchetype | None:
    for archetype in archetypes:
        if archetype.key == key:
            return archetype
    return None


def pick_archetype(
    archetypes: Sequence[FoodArchetype], rng: random.Random
) -> FoodArchetype:
    """Pick one archetype with probability ``weight / sum(weights)``."""

    if not archetypes:
        raise ValueError("at least one food archetype is required")
    total = sum(item.weight for item in archetypes)
    roll = rng.random() * total
    for archetype in archetypes:
        if roll < archetype.weight:
            return archetype
        roll -= archetype.weight
    return archetypes[0]


class FoodSpawner:
    """Keeps at least ``min_food`` foods on free cells of the board."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        archetypes: Sequence[FoodArchetype] = FOOD_ARCHETYPES,
        min_food: int = MIN_FOOD,
        grid_size: int = GRID_SIZE,
    ) -> None:
        if not archetypes:
            raise ValueError("at least one food archetype is required")
        if any(item.weight <= 0 for item in archetypes):
            raise ValueError("food weights must be positive")
        self.rng = rng or random.Random()
        self.archetypes = tuple(archetypes)
        self.min_food = min_food
        self.grid_size = grid_size
        self.foods: list[FoodInstance] = []

    def clear(self) -> None:
        self.foods = []

    def free_cells(self, snake: Iterable[Cell]) -> list[Cell]:
        """Return every grid cell not covered by the snake or a food."""
        occupied = set(snake)
        occupied.update(food.cell for food in self.foods)
        return [
            (x, y)
            for y in range(self.grid_size)
            for x in range(self.grid_size)
            if (x, y) not in occupied
        ]

    def spawn_one(self, snake: Iterable[Cell]) -> FoodInstance | None:
        """Place a single food on a random free cell, or None if the board is full."""
        cells = self.free_cells(snake)
        if not cells:
            return None
        cell = cells[self.rng.randrange(len(cells))]
        food = FoodInstance(
            cell=cell,
            archetype=pick_archetype(self.archetypes, self.rng),
            wave_offset=self.rng.random() * math.tau,
        )
        self.foods.append(food)
        return food

    def ensure_food(self, snake: Sequence[Cell]) -> None:
        """Top the board up to ``min_food`` foods; stop quietly when full."""
        while len(self.foods) < self.min_food:
            if self.spawn_one(snake) is None:
                logger.debug("board full, %d food(s) on board", len(self.foods))
                break

    def food_at(self, cell: Cell) -> FoodInstance | None:
        for food in self.foods:
            if food.cell == cell:
                return food
        return None

    def remove(self, food: FoodInstance) -> None:
        self.foods.remove(food)
