"""Abstract interfaces for the game layer.

Collaborators (renderers, input translators, persistence) depend on these,
not on the concrete :class:`~staticchess.game.session.GameSession`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Any

from staticchess.core.executor import PromotionChooser

if TYPE_CHECKING:
    from staticchess.core.enums import PieceType
    from staticchess.core.move import MoveRecord
    from staticchess.core.position import Position
    from staticchess.core.rules import GameStatus
    from staticchess.core.types import Square

__all__ = ["IGameSession", "PromotionChooser", "SessionPhase"]


# ── Session FSM states ───────────────────────────────────────────────────────


class SessionPhase(IntEnum):
    """Finite-state-machine states of a game session."""

    AWAITING_SELECTION = auto()
    PIECE_SELECTED = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameSession(ABC):
    """Interface exposed to render/input/persistence collaborators."""

    @abstractmethod
    def get_position(self) -> Position:
        """Copy of the current position."""

    @abstractmethod
    def legal_destinations(self, sq: Square) -> set[Square]:
        """Legal destinations of the piece on *sq* (empty if none)."""

    @abstractmethod
    def select(self, sq: Square) -> set[Square]:
        """Select the side-to-move's piece on *sq*."""

    @abstractmethod
    def attempt_move(self, to_sq: Square, promotion: PieceType | None = None) -> bool:
        """Move the selected piece to *to_sq*. Returns True if applied."""

    @abstractmethod
    def undo(self) -> bool:
        """Undo the last move. Returns True on success."""

    @abstractmethod
    def reset(self) -> None:
        """Start over from the standard position."""

    @abstractmethod
    def status(self) -> GameStatus:
        """Current game status."""

    @abstractmethod
    def history(self) -> tuple[MoveRecord, ...]:
        """Applied moves, oldest first."""

    @abstractmethod
    def save(self) -> dict[str, Any]:
        """Serializable snapshot of the game."""

    @abstractmethod
    def load(self, data: Any) -> bool:
        """Restore a snapshot. Returns False if it was discarded."""
