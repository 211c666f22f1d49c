import random

import pytest

from neon_serpent.foods import FoodArchetype, FoodInstance, FoodSpawner
from neon_serpent.state import GameStateMachine
from neon_serpent.storage import MemoryBestScoreStore


def make_game(seed: int = 1, best: int = 0) -> GameStateMachine:
    """Game whose board is only ever stocked by hand."""
    rng = random.Random(seed)
    return GameStateMachine(
        rng,
        best_store=MemoryBestScoreStore(best),
        spawner=FoodSpawner(rng, min_food=0),
    )


def place_food(game, cell, *, key="test", score=10, growth=1, effect=None):
    archetype = FoodArchetype(key, key.title(), score, growth, 1, effect)
    game.spawner.foods.append(FoodInstance(cell, archetype))
    return archetype


@pytest.fixture
def game():
    game = make_game()
    game.start()
    game.drain_events()
    return game
