"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def home_row(self) -> int:
        """Row index of the back rank (7 for White, 0 for Black)."""
        return 7 if self == Color.WHITE else 0

    @property
    def forward(self) -> int:
        """Row delta of a pawn step (White moves up the grid)."""
        return -1 if self == Color.WHITE else 1

    @property
    def char(self) -> str:
        return "w" if self == Color.WHITE else "b"

    @classmethod
    def from_char(cls, char: str) -> Color:
        if char == "w":
            return cls.WHITE
        if char == "b":
            return cls.BLACK
        raise ValueError(f"Invalid color character: {char!r}")

    def __str__(self) -> str:
        return self.name.capitalize()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def is_slider(self) -> bool:
        return self in (PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)


class CastlingSide(IntEnum):
    """Which rook the king castles with."""

    KINGSIDE = auto()
    QUEENSIDE = auto()

    @property
    def rook_col(self) -> int:
        return 7 if self == CastlingSide.KINGSIDE else 0

    @property
    def direction(self) -> int:
        """Column delta of the king's step toward the rook."""
        return 1 if self == CastlingSide.KINGSIDE else -1


class StatusKind(IntEnum):
    """Status of a game from the point of view of the side to move."""

    IN_PROGRESS = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (StatusKind.CHECKMATE, StatusKind.STALEMATE)


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
