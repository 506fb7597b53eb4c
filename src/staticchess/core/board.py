"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from staticchess.core.enums import Color, PieceType
from staticchess.core.errors import PositionInvariantError
from staticchess.core.piece import Piece
from staticchess.core.types import BOARD_SIZE, Square, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces with a per-color king index.

    Every write through ``board[sq] = piece`` keeps the king index in sync,
    so the recorded king square always equals the king's grid location.
    """

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._grid[sq.row][sq.col]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._grid[sq.row][sq.col] = piece

        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Relocate the piece on *from_sq*; return whatever stood on *to_sq*."""
        piece = self[from_sq]
        captured = self[to_sq]
        self[to_sq] = piece
        self[from_sq] = None
        return captured

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares (optionally of one *color*), a8 to h1."""
        for row, cells in enumerate(self._grid):
            for col, piece in enumerate(cells):
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield Square(row, col), piece

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise PositionInvariantError(f"No {color.name} king on board")
        return sq

    def validate_kings(self) -> None:
        """Raise unless each color has exactly one king, matching the index."""
        for color in Color:
            kings = [
                sq
                for sq, piece in self.pieces(color)
                if piece.piece_type == PieceType.KING
            ]
            if len(kings) != 1:
                raise PositionInvariantError(
                    f"Expected one {color.name} king, found {len(kings)}"
                )
            if self._king_squares[int(color)] != kings[0]:
                raise PositionInvariantError(
                    f"{color.name} king index out of sync: "
                    f"{self._king_squares[int(color)]} != {square_name(kings[0])}"
                )

    def is_path_clear(self, from_sq: Square, to_sq: Square) -> bool:
        """Whether every square strictly between *from_sq* and *to_sq* is empty.

        Only meaningful for straight or diagonal lines; other pairs are
        treated as having no intermediate squares.
        """
        d_row = to_sq.row - from_sq.row
        d_col = to_sq.col - from_sq.col
        if d_row and d_col and abs(d_row) != abs(d_col):
            return True
        step_row = (d_row > 0) - (d_row < 0)
        step_col = (d_col > 0) - (d_col < 0)
        row, col = from_sq.row + step_row, from_sq.col + step_col
        while (row, col) != (to_sq.row, to_sq.col):
            if self._grid[row][col] is not None:
                return False
            row += step_row
            col += step_col
        return True

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: pieces are duplicated so ``has_moved`` flags stay independent."""
        b = Board()
        b._grid = [[p.copy() if p else None for p in row] for row in self._grid]
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(BOARD_SIZE):
            b[Square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[Square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
        for col, pt in enumerate(_BACK_RANK):
            b[Square(0, col)] = Piece(Color.BLACK, pt)
            b[Square(7, col)] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
