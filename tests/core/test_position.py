"""Tests for Position construction, castling rights and copying."""

import pytest

from staticchess.core.enums import CastlingSide, Color, PieceType
from staticchess.core.errors import InvalidSquare, PositionInvariantError
from staticchess.core.piece import Piece
from staticchess.core.position import Position
from staticchess.core.types import A1, E1, E2, E3, E8, H1


class TestPositionInitial:
    def test_defaults(self) -> None:
        pos = Position.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_king_squares(self) -> None:
        pos = Position.initial()
        assert pos.king_square(Color.WHITE) == E1
        assert pos.king_square(Color.BLACK) == E8

    def test_all_castling_available(self) -> None:
        pos = Position.initial()
        for color in Color:
            for side in CastlingSide:
                assert pos.castling_available(color, side)


class TestFromPlacement:
    def test_basic(self) -> None:
        pos = Position.from_placement(
            {"e1": "K", "e8": "k", "a1": "R"}, side_to_move=Color.BLACK
        )
        assert pos.board[A1] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.side_to_move == Color.BLACK
        assert pos.king_square(Color.BLACK) == E8

    def test_en_passant(self) -> None:
        pos = Position.from_placement(
            {"e1": "K", "e8": "k", "e4": "P"},
            side_to_move=Color.BLACK,
            en_passant="e3",
        )
        assert pos.en_passant == E3

    def test_moved_flags(self) -> None:
        pos = Position.from_placement({"e1": "K", "e8": "k", "h1": "R"}, moved=["h1"])
        rook = pos.board[H1]
        assert rook is not None and rook.has_moved
        assert not pos.castling_available(Color.WHITE, CastlingSide.KINGSIDE)

    def test_requires_kings(self) -> None:
        with pytest.raises(PositionInvariantError):
            Position.from_placement({"e1": "K"})

    def test_rejects_two_kings(self) -> None:
        with pytest.raises(PositionInvariantError):
            Position.from_placement({"e1": "K", "e2": "K", "e8": "k"})

    def test_rejects_bad_square(self) -> None:
        with pytest.raises(InvalidSquare):
            Position.from_placement({"e9": "K", "e8": "k"})


class TestCastlingAvailable:
    def test_missing_rook(self) -> None:
        pos = Position.from_placement({"e1": "K", "e8": "k", "h1": "R"})
        assert pos.castling_available(Color.WHITE, CastlingSide.KINGSIDE)
        assert not pos.castling_available(Color.WHITE, CastlingSide.QUEENSIDE)

    def test_king_off_home_square(self) -> None:
        pos = Position.from_placement({"d1": "K", "e8": "k", "h1": "R", "a1": "R"})
        assert not pos.castling_available(Color.WHITE, CastlingSide.KINGSIDE)

    def test_enemy_rook_in_corner(self) -> None:
        pos = Position.from_placement({"e1": "K", "e8": "k", "h1": "r"})
        assert not pos.castling_available(Color.WHITE, CastlingSide.KINGSIDE)


class TestPositionCopy:
    def test_copy_equal(self) -> None:
        pos = Position.initial()
        assert pos.copy() == pos

    def test_copy_is_independent(self) -> None:
        pos = Position.initial()
        dup = pos.copy()
        dup.board.move_piece(E2, E3)
        dup.side_to_move = Color.BLACK
        assert pos.board[E2] is not None
        assert pos.side_to_move == Color.WHITE
        assert dup != pos

    def test_has_moved_participates_in_equality(self) -> None:
        pos = Position.initial()
        dup = pos.copy()
        pawn = dup.board[E2]
        assert pawn is not None
        pawn.has_moved = True
        assert dup != pos
