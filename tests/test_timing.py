import pytest

from neon_serpent.foods import FoodEffect
from neon_serpent.timing import EffectTimers, TickScheduler, tempo_label


def test_boost_speed_accumulates_and_caps():
    timers = EffectTimers()
    for _ in range(3):
        timers.boost_speed()
    assert timers.speed_bonus == pytest.approx(0.54)
    timers.boost_speed()
    assert timers.speed_bonus == pytest.approx(0.55)


def test_slow_motion_overwrites_instead_of_stacking():
    timers = EffectTimers()
    timers.activate_slow_motion()
    timers.decay(1000)
    assert timers.slow_ms == pytest.approx(2200)
    timers.activate_slow_motion()
    assert timers.slow_ms == 3200


def test_overdrive_unaffected_by_slow_motion():
    timers = EffectTimers()
    timers.activate_overdrive()
    timers.activate_slow_motion()
    assert timers.overdrive_ms == 8000
    assert timers.slow_ms == 3200


def test_decay_clamps_at_zero_and_cools_speed_bonus():
    timers = EffectTimers()
    timers.boost_speed()
    timers.activate_slow_motion()
    timers.activate_overdrive()
    timers.decay(1000)
    assert timers.speed_bonus == pytest.approx(0.18 - 1000 * 0.00005)
    assert timers.overdrive_ms == pytest.approx(7000)

    timers.decay(100_000)
    assert timers.slow_ms == 0
    assert timers.overdrive_ms == 0
    assert timers.speed_bonus == 0
    assert not timers.is_slowed
    assert not timers.is_overdrive


def test_overdrive_hue_only_moves_while_active():
    timers = EffectTimers()
    start_hue = timers.overdrive_hue
    timers.decay(500)
    assert timers.overdrive_hue == start_hue

    timers.activate_overdrive()
    timers.decay(100)
    assert timers.overdrive_hue == pytest.approx((start_hue + 8) % 360)


def test_apply_dispatches_effect_tags():
    timers = EffectTimers()
    timers.apply(None)
    assert (timers.speed_bonus, timers.slow_ms, timers.overdrive_ms) == (0, 0, 0)

    timers.apply(FoodEffect.SPEED_BOOST)
    timers.apply(FoodEffect.SLOW_MOTION)
    timers.apply(FoodEffect.OVERDRIVE)
    assert timers.speed_bonus == pytest.approx(0.18)
    assert timers.slow_ms == 3200
    assert timers.overdrive_ms == 8000


def test_reset_zeroes_everything():
    timers = EffectTimers()
    timers.boost_speed()
    timers.activate_overdrive()
    timers.decay(50)
    timers.reset()
    assert timers == EffectTimers()


def test_effective_multiplier_grows_with_level():
    timers = EffectTimers()
    assert timers.effective_multiplier(1) == 1.0
    assert timers.effective_multiplier(3) == pytest.approx(1.2)

    for bonus in (0.0, 0.3, 0.55):
        timers.speed_bonus = bonus
        values = [timers.effective_multiplier(level) for level in range(1, 60)]
        assert values == sorted(values)


def test_step_interval_bounds():
    timers = EffectTimers()
    assert TickScheduler.step_interval_ms(1, timers) == pytest.approx(150)
    assert TickScheduler.step_interval_ms(21, timers) == pytest.approx(50)
    assert TickScheduler.step_interval_ms(30, timers) == 50

    timers.activate_slow_motion()
    assert TickScheduler.step_interval_ms(1, timers) == pytest.approx(250)


def test_step_interval_never_increases_with_multiplier():
    timers = EffectTimers()
    intervals = [TickScheduler.step_interval_ms(level, timers) for level in range(1, 40)]
    assert all(a >= b for a, b in zip(intervals, intervals[1:]))
    assert min(intervals) == 50


def test_should_step_at_exact_interval():
    assert TickScheduler.should_step(150, 0, 150)
    assert not TickScheduler.should_step(149.9, 0, 150)


def test_evaluate_fires_at_most_once_per_call():
    timers = EffectTimers()
    scheduler = TickScheduler(0)
    # Ten intervals have elapsed but only one step is granted.
    assert scheduler.evaluate(1500, 1, timers)
    assert scheduler.last_step_time == 1500
    assert not scheduler.evaluate(1500, 1, timers)


def test_evaluate_cadence():
    timers = EffectTimers()
    scheduler = TickScheduler(0)
    fired = [scheduler.evaluate(now, 1, timers) for now in (100, 150, 299, 300)]
    assert fired == [False, True, False, True]


def test_tempo_labels():
    timers = EffectTimers()
    assert tempo_label(timers, 1) == "mellow"
    assert tempo_label(timers, 3) == "lively"
    assert tempo_label(timers, 4) == "burning"
    assert tempo_label(timers, 10) == "lightspeed"
    timers.activate_slow_motion()
    assert tempo_label(timers, 10) == "slow-mo"
