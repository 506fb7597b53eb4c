"""Engine-wide settings and logging setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from staticchess.core.enums import PieceType

_PACKAGE_LOGGER = "staticchess"


@dataclass
class EngineSettings:
    """All user-configurable settings."""

    # Rules
    auto_promotion: PieceType = PieceType.QUEEN
    undo_enabled: bool = True

    # Display hints for collaborators (the engine itself ignores them)
    show_possible_moves: bool = True
    show_last_move: bool = True
    show_coordinates: bool = False

    # Persistence
    storage_key: str = "staticChess.gameState"

    # Diagnostics
    debug: bool = False


def configure_logging(settings: EngineSettings) -> logging.Logger:
    """Set the package logger level from *settings* and return it."""
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    return logger
