"""Persistence snapshot: a plain-dict / JSON shape for a whole game.

The storage medium is the caller's business; this module only defines the
shape and validates it on the way back in.  Anything malformed raises
:class:`~staticchess.core.errors.CorruptedSnapshot`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from staticchess.core.board import Board
from staticchess.core.enums import Color, PieceType, StatusKind
from staticchess.core.errors import (
    CorruptedSnapshot,
    InvalidSquare,
    PositionInvariantError,
)
from staticchess.core.move import MoveRecord
from staticchess.core.move_generator import MoveGenerator
from staticchess.core.piece import Piece
from staticchess.core.position import Position
from staticchess.core.rules import GameStatus, Rules
from staticchess.core.types import BOARD_SIZE, Square, parse_square, square_name

SNAPSHOT_VERSION = 1

_TYPE_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_CHAR_TYPES: dict[str, PieceType] = {v: k for k, v in _TYPE_CHARS.items()}


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything a collaborator needs to persist and later resume a game."""

    position: Position
    history: tuple[MoveRecord, ...]
    status: GameStatus


# ── Encoding ─────────────────────────────────────────────────────────────────


def _piece_to_dict(piece: Piece) -> dict[str, Any]:
    return {
        "type": _TYPE_CHARS[piece.piece_type],
        "color": piece.color.char,
        "has_moved": piece.has_moved,
    }


def _record_to_dict(record: MoveRecord) -> dict[str, Any]:
    return {
        "from": square_name(record.from_sq),
        "to": square_name(record.to_sq),
        "piece": _piece_to_dict(record.piece),
        "captured": _piece_to_dict(record.captured) if record.captured else None,
        "is_castling": record.is_castling,
        "is_en_passant": record.is_en_passant,
        "promotion": _TYPE_CHARS[record.promotion] if record.promotion else None,
        "notation": record.notation,
        "is_check": record.is_check,
        "is_checkmate": record.is_checkmate,
        "is_stalemate": record.is_stalemate,
    }


def snapshot_to_dict(snapshot: GameSnapshot) -> dict[str, Any]:
    """Encode *snapshot* as JSON-compatible builtins."""
    pos = snapshot.position
    board = [
        [
            _piece_to_dict(p) if (p := pos.board[Square(row, col)]) else None
            for col in range(BOARD_SIZE)
        ]
        for row in range(BOARD_SIZE)
    ]
    status = snapshot.status
    return {
        "version": SNAPSHOT_VERSION,
        "board": board,
        "side_to_move": pos.side_to_move.char,
        "en_passant": square_name(pos.en_passant) if pos.en_passant else None,
        "halfmove_clock": pos.halfmove_clock,
        "fullmove_number": pos.fullmove_number,
        "history": [_record_to_dict(r) for r in snapshot.history],
        "status": {
            "kind": status.kind.name,
            "color": status.color.char if status.color is not None else None,
        },
    }


def dumps(snapshot: GameSnapshot) -> str:
    return json.dumps(snapshot_to_dict(snapshot))


# ── Decoding ─────────────────────────────────────────────────────────────────


def _expect(value: Any, kind: type, what: str) -> Any:
    # bool is an int subclass; reject it where a count is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise CorruptedSnapshot(f"{what}: expected {kind.__name__}, got {value!r}")
    return value


def _piece_from_dict(data: Any) -> Piece:
    _expect(data, dict, "piece")
    try:
        ptype = _CHAR_TYPES[data["type"]]
        color = Color.from_char(data["color"])
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptedSnapshot(f"Invalid piece: {data!r}") from exc
    has_moved = _expect(data.get("has_moved", False), bool, "has_moved")
    return Piece(color, ptype, has_moved)


def _optional_square(value: Any) -> Square | None:
    if value is None:
        return None
    return parse_square(_expect(value, str, "square"))


def _record_from_dict(data: Any) -> MoveRecord:
    _expect(data, dict, "history entry")
    try:
        promotion = data.get("promotion")
        return MoveRecord(
            from_sq=parse_square(data["from"]),
            to_sq=parse_square(data["to"]),
            piece=_piece_from_dict(data["piece"]),
            captured=(
                _piece_from_dict(data["captured"])
                if data.get("captured") is not None
                else None
            ),
            is_castling=bool(data.get("is_castling", False)),
            is_en_passant=bool(data.get("is_en_passant", False)),
            promotion=_CHAR_TYPES[promotion] if promotion is not None else None,
            notation=_expect(data.get("notation", ""), str, "notation"),
            is_check=bool(data.get("is_check", False)),
            is_checkmate=bool(data.get("is_checkmate", False)),
            is_stalemate=bool(data.get("is_stalemate", False)),
        )
    except (KeyError, TypeError) as exc:
        raise CorruptedSnapshot(f"Invalid history entry: {data!r}") from exc


def _board_from_rows(rows: Any) -> Board:
    _expect(rows, list, "board")
    if len(rows) != BOARD_SIZE:
        raise CorruptedSnapshot(f"Board must have {BOARD_SIZE} rows")
    board = Board()
    for row, cells in enumerate(rows):
        _expect(cells, list, "board row")
        if len(cells) != BOARD_SIZE:
            raise CorruptedSnapshot(f"Board row {row} must have {BOARD_SIZE} cells")
        for col, cell in enumerate(cells):
            if cell is not None:
                board[Square(row, col)] = _piece_from_dict(cell)
    board.validate_kings()
    return board


def _status_from_dict(data: Any) -> GameStatus:
    _expect(data, dict, "status")
    try:
        kind = StatusKind[data["kind"]]
        color_char = data.get("color")
        color = Color.from_char(color_char) if color_char is not None else None
    except (KeyError, TypeError, ValueError) as exc:
        raise CorruptedSnapshot(f"Invalid status: {data!r}") from exc
    return GameStatus(kind, color)


def snapshot_from_dict(data: Any) -> GameSnapshot:
    """Decode and validate a snapshot produced by :func:`snapshot_to_dict`."""
    _expect(data, dict, "snapshot")
    if data.get("version") != SNAPSHOT_VERSION:
        raise CorruptedSnapshot(f"Unsupported snapshot version: {data.get('version')!r}")
    try:
        board = _board_from_rows(data["board"])
        side = Color.from_char(data["side_to_move"])
        position = Position(
            board=board,
            side_to_move=side,
            en_passant=_optional_square(data.get("en_passant")),
            halfmove_clock=_expect(data.get("halfmove_clock", 0), int, "halfmove_clock"),
            fullmove_number=_expect(
                data.get("fullmove_number", 1), int, "fullmove_number"
            ),
        )
        history = tuple(
            _record_from_dict(entry) for entry in _expect(data["history"], list, "history")
        )
        status = _status_from_dict(data["status"])
    except (KeyError, TypeError, ValueError, InvalidSquare, PositionInvariantError) as exc:
        if isinstance(exc, CorruptedSnapshot):
            raise
        raise CorruptedSnapshot(f"Malformed snapshot: {exc}") from exc

    if position.en_passant is not None and position.en_passant.row != (
        2 if side == Color.WHITE else 5
    ):
        raise CorruptedSnapshot(f"Invalid en-passant square: {position.en_passant}")

    for sq, piece in board.pieces():
        if piece.piece_type == PieceType.PAWN and sq.row in (0, BOARD_SIZE - 1):
            raise CorruptedSnapshot(f"Pawn on back rank: {square_name(sq)}")

    if MoveGenerator(position).is_in_check(side.opposite):
        raise CorruptedSnapshot(f"{side.opposite} is in check but {side} is to move")

    actual = Rules.status(position)
    if actual != status:
        raise CorruptedSnapshot(
            f"Stored status {status.kind.name} does not match position ({actual.kind.name})"
        )
    return GameSnapshot(position, history, status)


def loads(text: str | bytes) -> GameSnapshot:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise CorruptedSnapshot(f"Snapshot is not valid JSON: {exc}") from exc
    return snapshot_from_dict(data)
