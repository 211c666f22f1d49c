"""Entry point for the Neon Serpent game."""

from __future__ import annotations

import logging

from neon_serpent.config import LOG_LEVEL
from neon_serpent.game import NeonSerpent


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    game = NeonSerpent()
    game.start()


if __name__ == "__main__":
    main()
