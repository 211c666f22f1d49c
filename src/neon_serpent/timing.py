"""Timed food effects and the variable-rate step scheduler."""

from __future__ import annotations

from dataclasses import dataclass

from .config import (
    BASE_SPEED_MS,
    LEVEL_SPEED_STEP,
    MIN_INTERVAL_MS,
    OVERDRIVE_BASE_HUE,
    OVERDRIVE_HUE_RATE,
    OVERDRIVE_MS,
    SLOW_FACTOR,
    SLOW_MOTION_MS,
    SLOW_TEMPO_LABEL,
    SPEED_BONUS_DECAY,
    SPEED_BONUS_MAX,
    SPEED_BONUS_STEP,
    TEMPO_LABELS,
)
from .foods import FoodEffect


@dataclass(slots=True)
class EffectTimers:
    """Three independent effect clocks that feed the step interval.

    ``speed_bonus`` accumulates from citrus and cools down slowly; the two
    millisecond counters are overwritten (never stacked) by their food and
    count down to zero. ``overdrive_hue`` only matters to the renderer.
    """

    speed_bonus: float = 0.0
    slow_ms: float = 0.0
    overdrive_ms: float = 0.0
    overdrive_hue: float = OVERDRIVE_BASE_HUE

    def reset(self) -> None:
        self.speed_bonus = 0.0
        self.slow_ms = 0.0
        self.overdrive_ms = 0.0
        self.overdrive_hue = OVERDRIVE_BASE_HUE

    # --- Food effect mutators -----------------------------------------

    def boost_speed(self) -> None:
        self.speed_bonus = min(self.speed_bonus + SPEED_BONUS_STEP, SPEED_BONUS_MAX)

    def activate_slow_motion(self) -> None:
        self.slow_ms = SLOW_MOTION_MS

    def activate_overdrive(self) -> None:
        self.overdrive_ms = OVERDRIVE_MS

    def apply(self, effect: FoodEffect | None) -> None:
        """Dispatch a food effect tag to the matching mutator."""
        if effect is None:
            return
        if effect is FoodEffect.SPEED_BOOST:
            self.boost_speed()
        elif effect is FoodEffect.SLOW_MOTION:
            self.activate_slow_motion()
        elif effect is FoodEffect.OVERDRIVE:
            self.activate_overdrive()

    # --- Per-frame decay ----------------------------------------------

    def decay(self, dt: float) -> None:
        """Cool every effect down by ``dt`` milliseconds."""
        if dt <= 0:
            return
        self.slow_ms = max(0.0, self.slow_ms - dt)
        if self.overdrive_ms > 0:
            self.overdrive_ms = max(0.0, self.overdrive_ms - dt)
            self.overdrive_hue = (self.overdrive_hue + dt * OVERDRIVE_HUE_RATE) % 360
        if self.speed_bonus > 0:
            self.speed_bonus = max(0.0, self.speed_bonus - dt * SPEED_BONUS_DECAY)

    # --- Queries ------------------------------------------------------

    @property
    def is_slowed(self) -> bool:
        return self.slow_ms > 0

    @property
    def is_overdrive(self) -> bool:
        return self.overdrive_ms > 0

    def effective_multiplier(self, level: int) -> float:
        base = 1 + (level - 1) * LEVEL_SPEED_STEP
        return max(1.0, base + self.speed_bonus)


def tempo_label(timers: EffectTimers, level: int) -> str:
    """Return the HUD word for the current pace."""
    if timers.is_slowed:
        return SLOW_TEMPO_LABEL
    multiplier = timers.effective_multiplier(level)
    for threshold, label in TEMPO_LABELS:
        if multiplier < threshold:
            return label
    return TEMPO_LABELS[0][1]


class TickScheduler:
    """Decide when the next discrete step fires.

    At most one step is granted per :meth:`evaluate` call. When frames arrive
    slower than the interval the surplus time is dropped rather than replayed.
    """

    def __init__(self, now: float = 0.0) -> None:
        self.last_step_time: float = now

    def reset(self, now: float) -> None:
        self.last_step_time = now

    @staticmethod
    def step_interval_ms(level: int, timers: EffectTimers) -> float:
        slow_factor = SLOW_FACTOR if timers.is_slowed else 1.0
        multiplier = timers.effective_multiplier(level)
        return max(MIN_INTERVAL_MS, BASE_SPEED_MS / (multiplier * slow_factor))

    @staticmethod
    def should_step(now: float, last_step_time: float, interval: float) -> bool:
        return (now - last_step_time) >= interval

    def evaluate(self, now: float, level: int, timers: EffectTimers) -> bool:
        interval = self.step_interval_ms(level, timers)
        if not self.should_step(now, self.last_step_time, interval):
            return False
        self.last_step_time = now
        return True
