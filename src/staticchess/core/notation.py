"""SAN (Standard Algebraic Notation) generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from staticchess.core.enums import PieceType
from staticchess.core.move_generator import MoveGenerator
from staticchess.core.types import Square, file_char, rank_char, square_name

if TYPE_CHECKING:
    from staticchess.core.piece import Piece
    from staticchess.core.position import Position

SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def disambiguation(position: Position, from_sq: Square, to_sq: Square) -> str:
    """File, rank or full square prefix needed to make a move unambiguous.

    Considers other pieces of the same kind and color that could legally
    reach *to_sq* in *position* (the board before the move).
    """
    board = position.board
    piece = board[from_sq]
    assert piece is not None
    if piece.piece_type in (PieceType.PAWN, PieceType.KING):
        return ""

    gen = MoveGenerator(position)
    rivals = [
        sq
        for sq, other in board.pieces(piece.color)
        if sq != from_sq
        and other.piece_type == piece.piece_type
        and to_sq in gen.legal_destinations(sq)
    ]
    if not rivals:
        return ""
    if all(sq.col != from_sq.col for sq in rivals):
        return file_char(from_sq)
    if all(sq.row != from_sq.row for sq in rivals):
        return rank_char(from_sq)
    return square_name(from_sq)


def move_to_san(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    *,
    is_capture: bool,
    is_castling: bool = False,
    promotion: PieceType | None = None,
    is_check: bool = False,
    is_checkmate: bool = False,
) -> str:
    """SAN for a move, given the *position* before it was played.

    Check and checkmate flags describe the resulting position and are
    computed by the caller, which already has that position at hand.
    """
    piece: Piece | None = position.board[from_sq]
    assert piece is not None

    if is_castling:
        san = "O-O" if to_sq.col > from_sq.col else "O-O-O"
    else:
        san = ""
        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += file_char(from_sq)
        else:
            san += SAN_PIECE[piece.piece_type]
            san += disambiguation(position, from_sq, to_sq)

        if is_capture:
            san += "x"

        san += square_name(to_sq)

        if promotion is not None:
            san += "=" + SAN_PIECE[promotion]

    if is_checkmate:
        san += "#"
    elif is_check:
        san += "+"
    return san
