"""Headless per-frame driver tying timers, scheduler, and state together."""

from __future__ import annotations

import logging

from .state import Direction, GamePhase, GameSnapshot, GameStateMachine
from .timing import TickScheduler

logger = logging.getLogger(__name__)


class FrameDriver:
    """Run one frame at a time from an injected monotonic clock (ms).

    Each :meth:`advance` decays effect timers, asks the scheduler whether a
    step is due (at most one per frame), and returns a fresh snapshot.
    """

    def __init__(self, game: GameStateMachine, now: float = 0.0) -> None:
        self.game = game
        self.scheduler = TickScheduler(now)
        self.last_frame_time: float = now

    # --- Input bridge --------------------------------------------------

    def request_start(self, now: float) -> bool:
        """Start or restart; ignored while a game is running."""
        if self.game.phase is GamePhase.RUNNING:
            return False
        self.game.start()
        self.scheduler.reset(now)
        self.last_frame_time = now
        return True

    def handle_direction(self, direction: Direction, now: float) -> bool:
        """Turn the snake, starting a game first when nothing is running yet."""
        if self.game.phase is GamePhase.IDLE:
            self.request_start(now)
        return self.game.set_pending_direction(direction)

    # --- Frame ---------------------------------------------------------

    def advance(self, now: float) -> GameSnapshot:
        dt = max(0.0, now - self.last_frame_time)
        self.last_frame_time = now

        game = self.game
        if game.phase is GamePhase.RUNNING:
            game.timers.decay(dt)
            if self.scheduler.evaluate(now, game.level, game.timers):
                game.step()
        return game.snapshot()
