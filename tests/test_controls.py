import pygame
import pytest

from neon_serpent.controls import direction_for_key, swipe_direction


@pytest.mark.parametrize(
    "key, expected",
    [
        (pygame.K_UP, (0, -1)),
        (pygame.K_s, (0, 1)),
        (pygame.K_j, (-1, 0)),
        (pygame.K_d, (1, 0)),
        (pygame.K_SPACE, None),
    ],
)
def test_direction_for_key(key, expected):
    assert direction_for_key(key) == expected


@pytest.mark.parametrize(
    "dx, dy, expected",
    [
        (5, 3, None),
        (30, 10, (1, 0)),
        (-30, 10, (-1, 0)),
        (10, -25, (0, -1)),
        (0, 40, (0, 1)),
    ],
)
def test_swipe_direction(dx, dy, expected):
    assert swipe_direction(dx, dy) == expected
