"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from staticchess.core import MoveGenerator, Position, parse_square

    pos = Position.initial()
    gen = MoveGenerator(pos)
    print(sorted(map(str, gen.legal_destinations(parse_square("e2")))))
"""

from staticchess.core.board import Board
from staticchess.core.enums import CastlingSide, Color, PieceType, StatusKind
from staticchess.core.errors import (
    ChessError,
    CorruptedSnapshot,
    IllegalMove,
    InvalidSquare,
    NoPieceAtSquare,
    NotSideToMove,
    PositionInvariantError,
)
from staticchess.core.executor import AppliedMove, MoveExecutor, PromotionChooser
from staticchess.core.move import Move, MoveRecord
from staticchess.core.move_generator import MoveGenerator
from staticchess.core.notation import move_to_san
from staticchess.core.piece import Piece, shape_allows
from staticchess.core.position import Position
from staticchess.core.rules import GameStatus, Rules
from staticchess.core.types import (
    Square,
    is_within_bounds,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "CastlingSide",
    "Color",
    "PieceType",
    "StatusKind",
    # Errors
    "ChessError",
    "CorruptedSnapshot",
    "IllegalMove",
    "InvalidSquare",
    "NoPieceAtSquare",
    "NotSideToMove",
    "PositionInvariantError",
    # Types / helpers
    "Square",
    "is_within_bounds",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "AppliedMove",
    "Board",
    "GameStatus",
    "Move",
    "MoveExecutor",
    "MoveGenerator",
    "MoveRecord",
    "Piece",
    "Position",
    "PromotionChooser",
    "Rules",
    "move_to_san",
    "shape_allows",
]
