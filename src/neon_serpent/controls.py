"""Decode keys and drag gestures into direction vectors."""

from __future__ import annotations

from .config import DIRECTIONS, KEY_TO_DIRECTION, SWIPE_THRESHOLD


def direction_for_key(key: int) -> tuple[int, int] | None:
    name = KEY_TO_DIRECTION.get(key)
    return DIRECTIONS[name] if name else None


def swipe_direction(
    dx: float, dy: float, threshold: float = SWIPE_THRESHOLD
) -> tuple[int, int] | None:
    """Map a drag vector to the dominant axis; short drags count as taps."""

    if max(abs(dx), abs(dy)) < threshold:
        return None
    if abs(dx) > abs(dy):
        return DIRECTIONS["RIGHT"] if dx > 0 else DIRECTIONS["LEFT"]
    return DIRECTIONS["DOWN"] if dy > 0 else DIRECTIONS["UP"]
