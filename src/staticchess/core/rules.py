"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from staticchess.core.enums import Color, StatusKind
from staticchess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from staticchess.core.position import Position


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Game status.

    ``color`` is the side to move for IN_PROGRESS and CHECK, the winner for
    CHECKMATE and ``None`` for STALEMATE.
    """

    kind: StatusKind
    color: Color | None = None

    @classmethod
    def in_progress(cls, side_to_move: Color) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS, side_to_move)

    @classmethod
    def check(cls, side: Color) -> GameStatus:
        return cls(StatusKind.CHECK, side)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @property
    def is_terminal(self) -> bool:
        return self.kind.is_terminal

    @property
    def message(self) -> str:
        """Human-readable status line."""
        if self.kind == StatusKind.CHECKMATE:
            return f"Checkmate! {self.color} wins."
        if self.kind == StatusKind.STALEMATE:
            return "Stalemate! Game is a draw."
        if self.kind == StatusKind.CHECK:
            return f"{self.color} is in check"
        return f"{self.color}'s turn"


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_move()

    @staticmethod
    def status(position: Position) -> GameStatus:
        """Status of *position* for its side to move."""
        gen = MoveGenerator(position)
        side = position.side_to_move
        in_check = gen.is_in_check(side)
        if gen.has_legal_move():
            if in_check:
                return GameStatus.check(side)
            return GameStatus.in_progress(side)
        if in_check:
            return GameStatus.checkmate(side.opposite)
        return GameStatus.stalemate()
