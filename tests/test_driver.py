from conftest import make_game, place_food

from neon_serpent.driver import FrameDriver
from neon_serpent.foods import FoodEffect
from neon_serpent.state import GamePhase


def make_driver():
    game = make_game()
    return FrameDriver(game, now=0), game


def test_idle_frames_do_not_start_the_game():
    driver, game = make_driver()
    snap = driver.advance(5000)
    assert snap.phase is GamePhase.IDLE
    assert snap.snake == ()


def test_direction_input_starts_idle_game():
    driver, game = make_driver()
    assert driver.handle_direction((0, -1), now=100)
    assert game.phase is GamePhase.RUNNING
    assert game.pending_direction == (0, -1)
    assert driver.scheduler.last_step_time == 100


def test_request_start_only_when_not_running():
    driver, game = make_driver()
    assert driver.request_start(0)
    assert not driver.request_start(10)
    game.phase = GamePhase.GAME_OVER
    assert driver.request_start(20)
    assert game.phase is GamePhase.RUNNING


def test_at_most_one_step_per_frame():
    driver, game = make_driver()
    driver.request_start(0)
    snap = driver.advance(10_000)
    assert snap.snake[0] == (17, 16)
    snap = driver.advance(10_000)
    assert snap.snake[0] == (17, 16)


def test_step_cadence_follows_interval():
    driver, game = make_driver()
    driver.request_start(0)
    heads = [driver.advance(now).snake[0][0] for now in (100, 150, 299, 300)]
    assert heads == [16, 17, 17, 18]


def test_slow_motion_stretches_interval_and_decays_per_frame():
    driver, game = make_driver()
    driver.request_start(0)
    place_food(game, (17, 16), effect=FoodEffect.SLOW_MOTION)
    driver.advance(150)
    assert game.timers.slow_ms == 3200

    assert driver.advance(350).snake[0] == (17, 16)
    assert game.timers.slow_ms == 3000
    assert driver.advance(400).snake[0] == (18, 16)
    assert driver.advance(400).slow_ms == 2950


def test_timers_frozen_after_game_over():
    driver, game = make_driver()
    driver.request_start(0)
    game.timers.activate_overdrive()
    game.snake = [(31, 16), (30, 16), (29, 16)]
    driver.advance(150)
    assert game.phase is GamePhase.GAME_OVER
    remaining = game.timers.overdrive_ms
    driver.advance(5000)
    assert game.timers.overdrive_ms == remaining
