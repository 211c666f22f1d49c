import random
from collections import Counter

import pytest

from neon_serpent.foods import (
    FOOD_ARCHETYPES,
    FoodArchetype,
    FoodEffect,
    FoodSpawner,
    pick_archetype,
)


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def test_shipped_archetypes():
    by_key = {item.key: item for item in FOOD_ARCHETYPES}
    assert [item.weight for item in FOOD_ARCHETYPES] == [6, 3, 2, 1]
    assert by_key["berry"].effect is None
    assert by_key["citrus"].effect is FoodEffect.SPEED_BOOST
    assert by_key["mint"].effect is FoodEffect.SLOW_MOTION
    assert (by_key["royal"].score, by_key["royal"].growth) == (50, 3)


@pytest.mark.parametrize(
    "roll, expected",
    [(0.0, "berry"), (0.49, "berry"), (0.5, "citrus"), (0.8, "mint"), (0.99, "royal")],
)
def test_pick_archetype_walks_cumulative_weights(roll, expected):
    assert pick_archetype(FOOD_ARCHETYPES, FixedRandom(roll)).key == expected


def test_pick_archetype_falls_back_to_first():
    assert pick_archetype(FOOD_ARCHETYPES, FixedRandom(1.0)).key == "berry"


def test_pick_archetype_rejects_empty_list():
    with pytest.raises(ValueError):
        pick_archetype((), random.Random(0))


def test_pick_archetype_converges_to_weights():
    rng = random.Random(2024)
    draws = 60_000
    counts = Counter(pick_archetype(FOOD_ARCHETYPES, rng).key for _ in range(draws))
    for key, weight in (("berry", 6), ("citrus", 3), ("mint", 2), ("royal", 1)):
        assert counts[key] / draws == pytest.approx(weight / 12, abs=0.01)


def test_spawner_rejects_non_positive_weights():
    with pytest.raises(ValueError):
        FoodSpawner(archetypes=(FoodArchetype("dud", "Dud", 1, 1, 0),))


def test_ensure_food_fills_free_distinct_cells():
    snake = [(16, 16), (15, 16), (14, 16), (13, 16), (12, 16)]
    spawner = FoodSpawner(random.Random(3))
    spawner.ensure_food(snake)
    cells = [food.cell for food in spawner.foods]
    assert len(cells) == 2
    assert len(set(cells)) == 2
    assert not set(cells) & set(snake)
    assert all(0 <= x < 32 and 0 <= y < 32 for x, y in cells)


def test_ensure_food_only_tops_up():
    spawner = FoodSpawner(random.Random(3))
    spawner.ensure_food([(0, 0)])
    first = list(spawner.foods)
    spawner.ensure_food([(0, 0)])
    assert spawner.foods == first


def test_ensure_food_stops_quietly_when_board_fills():
    spawner = FoodSpawner(random.Random(5), grid_size=2)
    spawner.ensure_food([(0, 0), (1, 0), (0, 1)])
    assert [food.cell for food in spawner.foods] == [(1, 1)]

    full = FoodSpawner(random.Random(5), grid_size=2)
    full.ensure_food([(0, 0), (1, 0), (0, 1), (1, 1)])
    assert full.foods == []


def test_food_at_and_remove():
    spawner = FoodSpawner(random.Random(9))
    spawner.ensure_food([])
    food = spawner.foods[0]
    assert spawner.food_at(food.cell) is food
    spawner.remove(food)
    assert spawner.food_at(food.cell) is None
    assert len(spawner.foods) == 1


def test_seeded_spawns_are_reproducible():
    a = FoodSpawner(random.Random(11))
    b = FoodSpawner(random.Random(11))
    a.ensure_food([(1, 1)])
    b.ensure_food([(1, 1)])
    assert [(f.cell, f.archetype.key) for f in a.foods] == [
        (f.cell, f.archetype.key) for f in b.foods
    ]
