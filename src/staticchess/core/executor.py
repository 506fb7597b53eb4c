"""Move executor: commits a validated move and records it."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from staticchess.core.enums import PROMOTION_TYPES, Color, PieceType, StatusKind
from staticchess.core.errors import NoPieceAtSquare, NotSideToMove, PositionInvariantError
from staticchess.core.move import Move, MoveRecord
from staticchess.core.move_generator import (
    castling_rook_squares,
    is_castling_move,
    is_en_passant_move,
)
from staticchess.core.notation import move_to_san
from staticchess.core.piece import Piece
from staticchess.core.position import Position
from staticchess.core.rules import GameStatus, Rules
from staticchess.core.types import Square, square_name

_LOGGER = logging.getLogger(__name__)

PromotionChooser = Callable[[Color, Square], PieceType | None]


@dataclass(frozen=True, slots=True)
class AppliedMove:
    """Result of :meth:`MoveExecutor.apply`."""

    position: Position
    record: MoveRecord
    status: GameStatus


class MoveExecutor:
    """Applies moves to positions.

    The executor does not re-derive legality: callers validate with
    :class:`~staticchess.core.move_generator.MoveGenerator` first.  The input
    position is left untouched; a new one is returned.

    Args:
        choose_promotion: ``(color, square) -> PieceType | None`` consulted
            when a pawn reaches the last rank and the move carries no
            promotion choice.  ``None`` (or no chooser) means *default_promotion*.
        default_promotion: Piece type used when nobody picks one.
    """

    __slots__ = ("_choose_promotion", "_default_promotion")

    def __init__(
        self,
        choose_promotion: PromotionChooser | None = None,
        default_promotion: PieceType = PieceType.QUEEN,
    ) -> None:
        self._choose_promotion = choose_promotion
        self._default_promotion = default_promotion

    def apply(self, position: Position, move: Move) -> AppliedMove:
        from_sq, to_sq = move.from_sq, move.to_sq
        old_board = position.board
        piece = old_board[from_sq]
        if piece is None:
            raise NoPieceAtSquare(f"No piece on {square_name(from_sq)}")
        if piece.color != position.side_to_move:
            raise NotSideToMove(
                f"{piece.color} piece on {square_name(from_sq)}, "
                f"but {position.side_to_move} is to move"
            )

        new_pos = position.copy()
        board = new_pos.board
        moving = board[from_sq]
        assert moving is not None
        mover_snapshot = piece.copy()
        captured = old_board[to_sq]
        captured_snapshot = captured.copy() if captured is not None else None

        # En passant target lasts exactly one ply
        previous_ep = position.en_passant
        new_pos.en_passant = None

        is_pawn = piece.piece_type == PieceType.PAWN
        if is_pawn and abs(to_sq.row - from_sq.row) == 2:
            new_pos.en_passant = Square((from_sq.row + to_sq.row) // 2, from_sq.col)
            _LOGGER.debug("En passant target set: %s", new_pos.en_passant)

        is_en_passant = is_en_passant_move(old_board, previous_ep, from_sq, to_sq)
        if is_en_passant:
            victim_sq = Square(from_sq.row, to_sq.col)
            victim = board[victim_sq]
            captured_snapshot = victim.copy() if victim is not None else None
            board[victim_sq] = None
            _LOGGER.debug("En passant capture on %s", square_name(victim_sq))

        is_castling = is_castling_move(piece, from_sq, to_sq)
        if is_castling:
            rook_from, rook_to = castling_rook_squares(from_sq, to_sq)
            rook = board[rook_from]
            if rook is None or rook.piece_type != PieceType.ROOK:
                raise PositionInvariantError(
                    f"Castling without a rook on {square_name(rook_from)}"
                )
            board.move_piece(rook_from, rook_to)
            rook.has_moved = True
            _LOGGER.debug("Castling executed: rook %s -> %s", rook_from, rook_to)

        board.move_piece(from_sq, to_sq)
        moving.has_moved = True

        promotion: PieceType | None = None
        if is_pawn and to_sq.row in (0, 7):
            promotion = self._promotion_kind(move, piece.color, to_sq)
            board[to_sq] = Piece(piece.color, promotion, has_moved=True)
            _LOGGER.debug("Pawn promoted to %s on %s", promotion.name, to_sq)

        board.validate_kings()

        if is_pawn or captured_snapshot is not None:
            new_pos.halfmove_clock = 0
        else:
            new_pos.halfmove_clock += 1
        if position.side_to_move == Color.BLACK:
            new_pos.fullmove_number += 1
        new_pos.side_to_move = position.side_to_move.opposite

        status = Rules.status(new_pos)
        is_check = status.kind in (StatusKind.CHECK, StatusKind.CHECKMATE)
        notation = move_to_san(
            position,
            from_sq,
            to_sq,
            is_capture=captured_snapshot is not None,
            is_castling=is_castling,
            promotion=promotion,
            is_check=is_check,
            is_checkmate=status.kind == StatusKind.CHECKMATE,
        )

        record = MoveRecord(
            from_sq=from_sq,
            to_sq=to_sq,
            piece=mover_snapshot,
            captured=captured_snapshot,
            is_castling=is_castling,
            is_en_passant=is_en_passant,
            promotion=promotion,
            notation=notation,
            is_check=is_check,
            is_checkmate=status.kind == StatusKind.CHECKMATE,
            is_stalemate=status.kind == StatusKind.STALEMATE,
        )
        return AppliedMove(new_pos, record, status)

    def _promotion_kind(self, move: Move, color: Color, sq: Square) -> PieceType:
        choice = move.promotion
        if choice is None and self._choose_promotion is not None:
            choice = self._choose_promotion(color, sq)
        if choice not in PROMOTION_TYPES:
            if choice is not None:
                _LOGGER.warning("Ignoring invalid promotion choice %r", choice)
            return self._default_promotion
        return choice
