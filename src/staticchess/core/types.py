"""Square type and coordinate helpers.

Board layout (row/col, top-to-bottom as seen from White):
    row 0 = rank 8, row 7 = rank 1
    col 0 = file a, col 7 = file h

So ``Square(7, 4)`` is e1 and ``Square(0, 4)`` is e8.
"""

from __future__ import annotations

from typing import NamedTuple

from staticchess.core.errors import InvalidSquare

BOARD_SIZE = 8
_FILES = "abcdefgh"


class Square(NamedTuple):
    """A board coordinate. Always within [0, 7] x [0, 7] once constructed via
    :func:`make_square` or :func:`parse_square`."""

    row: int
    col: int

    def __str__(self) -> str:
        return square_name(self)

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Neighbouring square, or ``None`` when it falls off the board."""
        row, col = self.row + d_row, self.col + d_col
        if not is_within_bounds(row, col):
            return None
        return Square(row, col)


def is_within_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def make_square(row: int, col: int) -> Square:
    """Create a square, rejecting off-board coordinates."""
    if not is_within_bounds(row, col):
        raise InvalidSquare(f"Coordinates off the board: ({row}, {col})")
    return Square(row, col)


def square_name(sq: Square) -> str:
    """Algebraic name, e.g. ``Square(7, 4)`` → ``'e1'``."""
    if not is_within_bounds(sq.row, sq.col):
        raise InvalidSquare(f"Coordinates off the board: ({sq.row}, {sq.col})")
    return _FILES[sq.col] + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse an algebraic square name, e.g. ``'e4'`` → ``Square(4, 4)``."""
    if not isinstance(name, str) or len(name) != 2:
        raise InvalidSquare(f"Invalid square name: {name!r}")
    file_char = name[0].lower()
    rank_char = name[1]
    if file_char not in _FILES or rank_char not in "12345678":
        raise InvalidSquare(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(rank_char), _FILES.index(file_char))


def file_char(sq: Square) -> str:
    return _FILES[sq.col]


def rank_char(sq: Square) -> str:
    return str(BOARD_SIZE - sq.row)


def all_squares() -> list[Square]:
    """All 64 squares, a8 first, h1 last."""
    return [Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Square(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Square(7, c) for c in range(8))
