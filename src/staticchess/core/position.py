"""Position — complete game state (board + derived metadata)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from staticchess.core.board import Board
from staticchess.core.enums import CastlingSide, Color, PieceType
from staticchess.core.piece import Piece
from staticchess.core.types import Square, parse_square


class Position:
    """Full chess position: board + side to move + en passant + clocks.

    Castling rights are not stored separately: they are derived from the
    ``has_moved`` flags of the king and rooks, which are sticky.

    A committed position is never mutated; the executor works on
    :meth:`copy` and returns the result.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def initial(cls) -> Position:
        return cls(Board.initial())

    @classmethod
    def from_placement(
        cls,
        placement: Mapping[str, str],
        side_to_move: Color = Color.WHITE,
        en_passant: str | None = None,
        moved: Iterable[str] = (),
    ) -> Position:
        """Build a position from ``{"e1": "K", "e8": "k", ...}``.

        Pieces listed (by square name) in *moved* start with ``has_moved``
        set.  Kings are validated: exactly one per color.
        """
        moved_squares = {parse_square(name) for name in moved}
        board = Board()
        for name, char in placement.items():
            sq = parse_square(name)
            board[sq] = Piece.from_char(char, has_moved=sq in moved_squares)
        board.validate_kings()
        ep = parse_square(en_passant) if en_passant is not None else None
        return cls(board, side_to_move, ep)

    # ── Queries ──────────────────────────────────────────────────────────

    def king_square(self, color: Color) -> Square:
        return self.board.king_square(color)

    def castling_available(self, color: Color, side: CastlingSide) -> bool:
        """Whether the king and the *side* rook are both home and unmoved.

        This is the castling *right*; whether castling is legal right now
        also depends on occupancy and attacks (see the move generator).
        """
        row = color.home_row
        king = self.board[Square(row, 4)]
        rook = self.board[Square(row, side.rook_col)]
        return (
            king is not None
            and king.color == color
            and king.piece_type == PieceType.KING
            and not king.has_moved
            and rook is not None
            and rook.color == color
            and rook.piece_type == PieceType.ROOK
            and not rook.has_moved
        )

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy, pieces included."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        ep = str(self.en_passant) if self.en_passant else "-"
        return f"{self.board!r}\n{self.side_to_move} to move, ep={ep}"
