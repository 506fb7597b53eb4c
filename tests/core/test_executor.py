"""Tests for MoveExecutor side effects and move records."""

import logging

import pytest

from staticchess.core.enums import Color, PieceType
from staticchess.core.errors import NoPieceAtSquare, NotSideToMove, PositionInvariantError
from staticchess.core.executor import MoveExecutor
from staticchess.core.move import Move
from staticchess.core.piece import Piece
from staticchess.core.position import Position
from staticchess.core.types import (
    A1,
    C1,
    D1,
    D4,
    E1,
    E2,
    E3,
    E4,
    E5,
    E7,
    E8,
    F1,
    G1,
    H1,
)


class TestApplyBasics:
    def test_input_position_untouched(self) -> None:
        pos = Position.initial()
        before = pos.copy()
        applied = MoveExecutor().apply(pos, Move(E2, E4))
        assert pos == before
        assert applied.position != pos

    def test_side_and_counters(self) -> None:
        executor = MoveExecutor()
        pos = executor.apply(Position.initial(), Move(E2, E4)).position
        assert pos.side_to_move == Color.BLACK
        assert pos.fullmove_number == 1
        assert pos.halfmove_clock == 0
        pos = executor.apply(pos, Move(E7, E5)).position
        assert pos.fullmove_number == 2
        pos = executor.apply(pos, Move(G1, G1.offset(-2, -1))).position  # Nf3
        assert pos.halfmove_clock == 1

    def test_has_moved_set(self) -> None:
        pos = MoveExecutor().apply(Position.initial(), Move(E2, E4)).position
        pawn = pos.board[E4]
        assert pawn is not None and pawn.has_moved

    def test_record_fields(self) -> None:
        record = MoveExecutor().apply(Position.initial(), Move(E2, E4)).record
        assert record.from_sq == E2
        assert record.to_sq == E4
        assert record.piece == Piece(Color.WHITE, PieceType.PAWN)
        assert record.captured is None
        assert record.color == Color.WHITE
        assert not record.is_capture
        assert not record.is_castling
        assert not record.is_en_passant
        assert record.notation == "e4"
        assert record.move == Move(E2, E4)

    def test_record_piece_is_a_copy(self) -> None:
        applied = MoveExecutor().apply(Position.initial(), Move(E2, E4))
        moved = applied.position.board[E4]
        assert moved is not None
        assert moved is not applied.record.piece
        assert not applied.record.piece.has_moved

    def test_no_piece(self) -> None:
        with pytest.raises(NoPieceAtSquare, match="e4"):
            MoveExecutor().apply(Position.initial(), Move(E4, E5))

    def test_wrong_side(self) -> None:
        with pytest.raises(NotSideToMove):
            MoveExecutor().apply(Position.initial(), Move(E7, E5))

    def test_capture_resets_halfmove(self) -> None:
        pos = Position.from_placement({"e1": "K", "e8": "k", "a1": "R", "a7": "p"})
        pos.halfmove_clock = 7
        applied = MoveExecutor().apply(pos, Move(A1, A1.offset(-6, 0)))
        assert applied.position.halfmove_clock == 0
        assert applied.record.captured == Piece(Color.BLACK, PieceType.PAWN)


class TestSpecialMoves:
    def test_en_passant(self) -> None:
        executor = MoveExecutor()
        pos = Position.from_placement({"e1": "K", "e2": "P", "d4": "p", "e8": "k"})
        pos = executor.apply(pos, Move(E2, E4)).position
        applied = executor.apply(pos, Move(D4, E3))
        assert applied.record.is_en_passant
        assert applied.record.captured == Piece(Color.WHITE, PieceType.PAWN, True)
        assert applied.position.board[E4] is None
        assert applied.position.en_passant is None

    def test_kingside_castling(self) -> None:
        pos = Position.from_placement({"e1": "K", "a1": "R", "h1": "R", "e8": "k"})
        applied = MoveExecutor().apply(pos, Move(E1, G1))
        board = applied.position.board
        assert board[H1] is None
        rook = board[F1]
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert rook.has_moved
        assert board.king_square(Color.WHITE) == G1
        assert applied.record.is_castling

    def test_queenside_castling(self) -> None:
        pos = Position.from_placement({"e1": "K", "a1": "R", "h1": "R", "e8": "k"})
        board = MoveExecutor().apply(pos, Move(E1, C1)).position.board
        assert board[A1] is None
        assert board[D1] == Piece(Color.WHITE, PieceType.ROOK, True)

    def test_castling_without_rook(self) -> None:
        pos = Position.from_placement({"e1": "K", "e8": "k"})
        with pytest.raises(PositionInvariantError):
            MoveExecutor().apply(pos, Move(E1, G1))

    def test_auto_queen(self) -> None:
        pos = Position.from_placement({"e1": "K", "e7": "P", "a6": "k"}, moved=["e7"])
        applied = MoveExecutor().apply(pos, Move(E7, E8))
        assert applied.position.board[E8] == Piece(Color.WHITE, PieceType.QUEEN, True)
        assert applied.record.promotion == PieceType.QUEEN

    def test_promotion_from_move(self) -> None:
        pos = Position.from_placement({"e1": "K", "e7": "P", "a6": "k"}, moved=["e7"])
        applied = MoveExecutor().apply(pos, Move(E7, E8, PieceType.ROOK))
        assert applied.record.notation == "e8=R"

    def test_promotion_chooser(self) -> None:
        calls: list[tuple[Color, object]] = []

        def choose(color: Color, sq: object) -> PieceType:
            calls.append((color, sq))
            return PieceType.KNIGHT

        pos = Position.from_placement({"e1": "K", "e7": "P", "a6": "k"}, moved=["e7"])
        applied = MoveExecutor(choose_promotion=choose).apply(pos, Move(E7, E8))
        assert calls == [(Color.WHITE, E8)]
        assert applied.record.notation == "e8=N"

    def test_invalid_choice_falls_back_to_queen(self, caplog: pytest.LogCaptureFixture) -> None:
        pos = Position.from_placement({"e1": "K", "e7": "P", "a6": "k"}, moved=["e7"])
        executor = MoveExecutor(choose_promotion=lambda color, sq: PieceType.KING)
        with caplog.at_level(logging.WARNING, logger="staticchess"):
            applied = executor.apply(pos, Move(E7, E8))
        assert applied.record.promotion == PieceType.QUEEN
        assert "invalid promotion" in caplog.text

    def test_chooser_returning_none(self) -> None:
        pos = Position.from_placement({"e1": "K", "e7": "P", "a6": "k"}, moved=["e7"])
        executor = MoveExecutor(choose_promotion=lambda color, sq: None)
        assert executor.apply(pos, Move(E7, E8)).record.promotion == PieceType.QUEEN
