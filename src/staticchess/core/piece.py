"""Piece model and board-agnostic movement shape rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from staticchess.core.enums import Color, PieceType
from staticchess.core.types import Square

# FEN-style character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(slots=True)
class Piece:
    """A chess piece.

    Unlike a pure value object the piece carries ``has_moved``, which castling
    and the pawn double step depend on.  A piece belongs to exactly one grid
    cell; use :meth:`copy` whenever an independent duplicate is needed.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, has_moved: bool = False) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, has_moved)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def copy(self) -> Piece:
        return Piece(self.color, self.piece_type, self.has_moved)


def _pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def shape_allows(piece: Piece, from_sq: Square, to_sq: Square, is_capture: bool) -> bool:
    """Whether *piece* may move from *from_sq* to *to_sq* by shape alone.

    Obstruction is the caller's business, except that pawns distinguish
    captures from pushes.  The king's two-file castling jump is offered
    speculatively for unmoved kings on non-captures only; whether castling is
    actually possible is decided by the move generator.
    """
    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col
    abs_row = abs(d_row)
    abs_col = abs(d_col)
    if abs_row == 0 and abs_col == 0:
        return False

    match piece.piece_type:
        case PieceType.PAWN:
            direction = piece.color.forward
            if is_capture:
                return d_row == direction and abs_col == 1
            if d_col != 0:
                return False
            if d_row == direction:
                return True
            return (
                d_row == 2 * direction
                and not piece.has_moved
                and from_sq.row == _pawn_start_row(piece.color)
            )
        case PieceType.KNIGHT:
            return (abs_row, abs_col) in ((2, 1), (1, 2))
        case PieceType.BISHOP:
            return abs_row == abs_col
        case PieceType.ROOK:
            return abs_row == 0 or abs_col == 0
        case PieceType.QUEEN:
            return abs_row == 0 or abs_col == 0 or abs_row == abs_col
        case PieceType.KING:
            if abs_row <= 1 and abs_col <= 1:
                return True
            return abs_row == 0 and abs_col == 2 and not piece.has_moved and not is_capture
        case _:
            assert_never(piece.piece_type)
