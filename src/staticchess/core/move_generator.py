"""Legal move generation, castling eligibility and attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from staticchess.core.enums import CastlingSide, Color, PieceType
from staticchess.core.move import Move
from staticchess.core.piece import Piece, shape_allows
from staticchess.core.types import Square, all_squares

if TYPE_CHECKING:
    from staticchess.core.board import Board
    from staticchess.core.position import Position

_KING_HOME_COL = 4
_ALL_SQUARES: tuple[Square, ...] = tuple(all_squares())


def is_castling_move(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """A king move of two files along its rank."""
    return (
        piece.piece_type == PieceType.KING
        and from_sq.row == to_sq.row
        and abs(to_sq.col - from_sq.col) == 2
    )


def castling_rook_squares(king_from: Square, king_to: Square) -> tuple[Square, Square]:
    """Rook origin and destination for a castling king move."""
    if king_to.col > king_from.col:
        return Square(king_from.row, 7), Square(king_from.row, king_to.col - 1)
    return Square(king_from.row, 0), Square(king_from.row, king_to.col + 1)


def is_en_passant_move(
    board: Board, en_passant: Square | None, from_sq: Square, to_sq: Square
) -> bool:
    """A diagonal pawn move onto the empty en-passant target."""
    piece = board[from_sq]
    return (
        piece is not None
        and piece.piece_type == PieceType.PAWN
        and en_passant is not None
        and to_sq == en_passant
        and from_sq.col != to_sq.col
        and board[to_sq] is None
    )


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    King safety is verified by simulating each candidate on a scratch copy
    of the board; the live position is never touched.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_destinations(self, sq: Square) -> set[Square]:
        """Fully legal destinations for the piece on *sq*.

        Empty when *sq* is empty or holds a piece of the side not on move.
        """
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return set()
        return set(self._destinations(sq, piece))

    def legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move (no ordering)."""
        moves: list[Move] = []
        for from_sq, piece in list(self._board.pieces(self._pos.side_to_move)):
            for to_sq in self._destinations(from_sq, piece):
                moves.append(Move(from_sq, to_sq))
        return moves

    def has_legal_move(self) -> bool:
        """Whether the side to move has at least one legal move."""
        for from_sq, piece in list(self._board.pieces(self._pos.side_to_move)):
            if self._destinations(from_sq, piece):
                return True
        return False

    def is_legal(self, move: Move) -> bool:
        return move.to_sq in self.legal_destinations(move.from_sq)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color, board: Board | None = None) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        board = self._board if board is None else board
        return self.is_square_attacked(board.king_square(color), color.opposite, board)

    def is_square_attacked(
        self, sq: Square, by_color: Color, board: Board | None = None
    ) -> bool:
        """Can any piece of *by_color* reach *sq* under movement rules?

        Independent of whose turn it is, and never simulates: it is the
        primitive the king-safety simulation is built on.
        """
        board = self._board if board is None else board
        for from_sq, piece in board.pieces(by_color):
            if not shape_allows(piece, from_sq, sq, True):
                continue
            if piece.piece_type.is_slider and not board.is_path_clear(from_sq, sq):
                continue
            return True
        return False

    # -- Castling -----------------------------------------------------------

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        """Castling legality for *color* on *side* in the current position."""
        if not self._pos.castling_available(color, side):
            return False

        board = self._board
        row = color.home_row
        king_sq = Square(row, _KING_HOME_COL)
        rook_col = side.rook_col

        lo, hi = sorted((_KING_HOME_COL, rook_col))
        if any(not board.is_empty(Square(row, col)) for col in range(lo + 1, hi)):
            return False

        opponent = color.opposite
        if self.is_square_attacked(king_sq, opponent):
            return False

        step = side.direction
        for col in (_KING_HOME_COL + step, _KING_HOME_COL + 2 * step):
            if self.is_square_attacked(Square(row, col), opponent):
                return False

        # The rook's first square off the corner (b-file) is checked on the
        # queenside even though the king never stands on it.
        if side == CastlingSide.QUEENSIDE:
            rook_passing = Square(row, rook_col + 1)
            if self.is_square_attacked(rook_passing, opponent):
                return False

        return True

    # -- Simulation ---------------------------------------------------------

    def simulate(self, from_sq: Square, to_sq: Square) -> Board:
        """Scratch board after moving *from_sq* → *to_sq*.

        Applies en-passant pawn removal and castling rook relocation; the
        scratch board carries its own king index.
        """
        board = self._board
        scratch = board.copy()
        piece = scratch[from_sq]
        assert piece is not None

        if is_en_passant_move(board, self._pos.en_passant, from_sq, to_sq):
            scratch[Square(from_sq.row, to_sq.col)] = None

        if is_castling_move(piece, from_sq, to_sq):
            rook_from, rook_to = castling_rook_squares(from_sq, to_sq)
            scratch.move_piece(rook_from, rook_to)

        scratch.move_piece(from_sq, to_sq)
        return scratch

    # -- Internals ----------------------------------------------------------

    def _destinations(self, sq: Square, piece: Piece) -> list[Square]:
        candidates = self._pseudo_destinations(sq, piece)
        color = piece.color
        return [
            to_sq
            for to_sq in candidates
            if not self.is_in_check(color, self.simulate(sq, to_sq))
        ]

    def _pseudo_destinations(self, sq: Square, piece: Piece) -> list[Square]:
        board = self._board
        ptype = piece.piece_type
        candidates: list[Square] = []

        for to_sq in _ALL_SQUARES:
            target = board[to_sq]
            if target is not None and target.color == piece.color:
                continue
            # Castling destinations are only added through can_castle().
            if is_castling_move(piece, sq, to_sq):
                continue
            is_capture = target is not None
            if not shape_allows(piece, sq, to_sq, is_capture):
                continue
            if ptype.is_slider and not board.is_path_clear(sq, to_sq):
                continue
            if (
                ptype == PieceType.PAWN
                and not is_capture
                and not board.is_path_clear(sq, to_sq)
            ):
                continue
            candidates.append(to_sq)

        if ptype == PieceType.PAWN:
            ep = self._en_passant_destination(sq, piece)
            if ep is not None:
                candidates.append(ep)
        elif ptype == PieceType.KING and sq == Square(piece.color.home_row, _KING_HOME_COL):
            for side in CastlingSide:
                if self.can_castle(piece.color, side):
                    candidates.append(Square(sq.row, _KING_HOME_COL + 2 * side.direction))

        return candidates

    def _en_passant_destination(self, sq: Square, piece: Piece) -> Square | None:
        ep = self._pos.en_passant
        if ep is None or piece.color != self._pos.side_to_move:
            return None
        if sq.row != ep.row - piece.color.forward or abs(sq.col - ep.col) != 1:
            return None
        if not self._board.is_empty(ep):
            return None
        victim = self._board[Square(sq.row, ep.col)]
        if (
            victim is None
            or victim.color == piece.color
            or victim.piece_type != PieceType.PAWN
        ):
            return None
        return ep
