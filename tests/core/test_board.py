"""Tests for Board."""

import pytest

from staticchess.core.board import Board
from staticchess.core.enums import Color, PieceType
from staticchess.core.errors import PositionInvariantError
from staticchess.core.piece import Piece
from staticchess.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E2, E4, E7, F3, H5,
    Square,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_back_ranks(self) -> None:
        board = Board.initial()
        expected = [
            PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
            PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK,
        ]
        white = [A1, B1, C1, D1, E1, F1, G1, H1]
        black = [A8, B8, C8, D8, E8, F8, G8, H8]
        for w_sq, b_sq, pt in zip(white, black, expected):
            assert board[w_sq] == Piece(Color.WHITE, pt), f"Mismatch at {w_sq}"
            assert board[b_sq] == Piece(Color.BLACK, pt), f"Mismatch at {b_sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        white = [sq for sq, p in board.pieces(Color.WHITE) if p.piece_type == PieceType.PAWN]
        black = [sq for sq, p in board.pieces(Color.BLACK) if p.piece_type == PieceType.PAWN]
        assert len(white) == 8 and all(sq.row == 6 for sq in white)
        assert len(black) == 8 and all(sq.row == 1 for sq in black)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for row in range(2, 6):
            for col in range(8):
                assert board[Square(row, col)] is None

    def test_nothing_has_moved(self) -> None:
        board = Board.initial()
        assert not any(p.has_moved for _, p in board.pieces())

    def test_repr(self) -> None:
        text = repr(Board.initial())
        assert text.splitlines()[0] == "8 r n b q k b n r"
        assert text.splitlines()[-1] == "  a b c d e f g h"


class TestKingIndex:
    def test_initial_king_squares(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_moving_king_updates_index(self) -> None:
        board = Board.initial()
        board.move_piece(E1, E2)
        assert board.king_square(Color.WHITE) == E2
        assert board[E1] is None

    def test_removing_king_clears_index(self) -> None:
        board = Board.initial()
        board[E8] = None
        with pytest.raises(PositionInvariantError, match="No BLACK king"):
            board.king_square(Color.BLACK)

    def test_validate_kings_detects_two_kings(self) -> None:
        board = Board.initial()
        board[E4] = Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(PositionInvariantError, match="WHITE"):
            board.validate_kings()

    def test_validate_kings_detects_missing_king(self) -> None:
        board = Board()
        board[E1] = Piece(Color.WHITE, PieceType.KING)
        with pytest.raises(PositionInvariantError, match="BLACK"):
            board.validate_kings()

    def test_validate_kings_accepts_initial(self) -> None:
        Board.initial().validate_kings()


class TestBoardHelpers:
    def test_move_piece_returns_captured(self) -> None:
        board = Board.initial()
        captured = board.move_piece(E2, E7)
        assert captured == Piece(Color.BLACK, PieceType.PAWN)
        assert board[E7] == Piece(Color.WHITE, PieceType.PAWN)

    def test_path_clear_on_empty_board(self) -> None:
        board = Board()
        assert board.is_path_clear(A1, H8)
        assert board.is_path_clear(A1, A8)

    def test_path_blocked(self) -> None:
        board = Board()
        board[F3] = Piece(Color.WHITE, PieceType.PAWN)
        assert not board.is_path_clear(D1, H5)
        assert board.is_path_clear(D1, F3)

    def test_path_ignores_endpoints(self) -> None:
        board = Board()
        board[A1] = Piece(Color.WHITE, PieceType.ROOK)
        board[A8] = Piece(Color.BLACK, PieceType.ROOK)
        assert board.is_path_clear(A1, A8)

    def test_copy_is_deep(self) -> None:
        board = Board.initial()
        dup = board.copy()
        assert dup == board
        piece = dup[E2]
        assert piece is not None
        piece.has_moved = True
        assert dup != board
        original = board[E2]
        assert original is not None and not original.has_moved

    def test_copy_keeps_own_king_index(self) -> None:
        board = Board.initial()
        dup = board.copy()
        dup.move_piece(E1, E2)
        assert board.king_square(Color.WHITE) == E1
        assert dup.king_square(Color.WHITE) == E2

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert list(board.pieces()) == []
