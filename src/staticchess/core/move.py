"""Move request and move record value objects."""

from __future__ import annotations

from dataclasses import dataclass

from staticchess.core.enums import Color, PieceType
from staticchess.core.piece import Piece
from staticchess.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A move intent: origin, destination and optional promotion choice."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """An applied move: immutable once appended to history.

    ``piece`` and ``captured`` are independent copies taken before the move,
    so later play cannot change what the record reports.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_castling: bool = False
    is_en_passant: bool = False
    promotion: PieceType | None = None
    notation: str = ""
    is_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False

    @property
    def color(self) -> Color:
        return self.piece.color

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def move(self) -> Move:
        return Move(self.from_sq, self.to_sq, self.promotion)

    def __str__(self) -> str:
        return self.notation
