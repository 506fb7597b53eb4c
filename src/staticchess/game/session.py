"""GameSession — the click-driven game orchestrator.

Owns the current :class:`Position` and the :class:`History`; every mutation
goes through its methods.  Emits events via simple callbacks so the UI /
tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from staticchess.config import EngineSettings
from staticchess.core.enums import Color, PieceType
from staticchess.core.errors import (
    CorruptedSnapshot,
    IllegalMove,
    NoPieceAtSquare,
    NotSideToMove,
)
from staticchess.core.executor import MoveExecutor, PromotionChooser
from staticchess.core.move import Move, MoveRecord
from staticchess.core.move_generator import MoveGenerator
from staticchess.core.position import Position
from staticchess.core.rules import GameStatus, Rules
from staticchess.core.types import Square, square_name
from staticchess.game.history import History
from staticchess.game.interfaces import IGameSession, SessionPhase
from staticchess.game.snapshot import GameSnapshot, snapshot_from_dict, snapshot_to_dict

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, Position], None]
StatusCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[SessionPhase], None]
SelectionCallback = Callable[[Square | None, frozenset[Square]], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event.

    Handlers receive the live position and must not mutate it.
    """

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
    on_position_changed: list[Callable[[Position], None]] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession(IGameSession):
    """Single owner of game state with an explicit selection state machine.

    ``AWAITING_SELECTION → PIECE_SELECTED → AWAITING_SELECTION | GAME_OVER``.
    Only :meth:`reset` (or :meth:`undo`) leaves ``GAME_OVER``.

    Thread-safety: none.  Call from one thread (the UI thread).
    """

    __slots__ = (
        "_settings",
        "_executor",
        "_position",
        "_history",
        "_status",
        "_phase",
        "_selected",
        "_destinations",
        "events",
    )

    def __init__(
        self,
        settings: EngineSettings | None = None,
        choose_promotion: PromotionChooser | None = None,
        position: Position | None = None,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._executor = MoveExecutor(
            choose_promotion, default_promotion=self._settings.auto_promotion
        )
        self.events = GameEvents()
        self._selected: Square | None = None
        self._destinations: frozenset[Square] = frozenset()
        self._install(position.copy() if position is not None else Position.initial())

    # ── Queries ──────────────────────────────────────────────────────────

    def get_position(self) -> Position:
        """Copy of the current position; edits to it never reach the session."""
        return self._position.copy()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    def status(self) -> GameStatus:
        return self._status

    def history(self) -> tuple[MoveRecord, ...]:
        return self._history.records

    def history_rows(self) -> list[tuple[int, str, str]]:
        """Move list grouped by turn number, for display."""
        return self._history.rows()

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def selected_square(self) -> Square | None:
        return self._selected

    @property
    def selected_destinations(self) -> frozenset[Square]:
        return self._destinations

    @property
    def can_undo(self) -> bool:
        return self._settings.undo_enabled and self._history.can_undo

    @property
    def last_move(self) -> MoveRecord | None:
        return self._history.last

    def legal_destinations(self, sq: Square) -> set[Square]:
        if self._phase == SessionPhase.GAME_OVER:
            return set()
        return MoveGenerator(self._position).legal_destinations(sq)

    # ── State machine entry points ───────────────────────────────────────

    def click(self, sq: Square) -> None:
        """Board click: select a piece, or move/deselect when one is selected.

        Never raises for ordinary illegal clicks.
        """
        if self._phase == SessionPhase.GAME_OVER:
            return
        if self._phase == SessionPhase.PIECE_SELECTED:
            self.attempt_move(sq)
            return
        piece = self._position.board[sq]
        if piece is not None and piece.color == self.side_to_move:
            self.select(sq)

    def select(self, sq: Square) -> set[Square]:
        """Select the piece on *sq* and return its legal destinations.

        Raises:
            NoPieceAtSquare: *sq* is empty.
            NotSideToMove: the piece belongs to the opponent.
        """
        if self._phase == SessionPhase.GAME_OVER:
            return set()
        piece = self._position.board[sq]
        if piece is None:
            self._clear_selection()
            raise NoPieceAtSquare(f"No piece on {square_name(sq)}")
        if piece.color != self.side_to_move:
            self._clear_selection()
            raise NotSideToMove(f"{piece.color} piece on {square_name(sq)}")

        destinations = MoveGenerator(self._position).legal_destinations(sq)
        self._selected = sq
        self._destinations = frozenset(destinations)
        self._set_phase(SessionPhase.PIECE_SELECTED)
        self._emit_selection()
        return destinations

    def attempt_move(self, to_sq: Square, promotion: PieceType | None = None) -> bool:
        """Move the selected piece to *to_sq*.

        Any destination outside the stored legal set simply clears the
        selection.  Returns True if a move was committed.
        """
        if self._phase != SessionPhase.PIECE_SELECTED or self._selected is None:
            return False
        from_sq = self._selected
        legal = to_sq in self._destinations
        self._clear_selection()
        if not legal:
            _LOGGER.debug(
                "Ignoring illegal destination %s for %s",
                square_name(to_sq),
                square_name(from_sq),
            )
            return False
        self._commit(Move(from_sq, to_sq, promotion))
        return True

    def play(self, move: Move) -> MoveRecord:
        """Programmatic move entry (no selection step).

        Raises:
            IllegalMove: *move* is not legal in the current position.
        """
        if self._phase == SessionPhase.GAME_OVER:
            raise IllegalMove(f"Game is over; cannot play {move}")
        if not MoveGenerator(self._position).is_legal(move):
            raise IllegalMove(f"Illegal move: {move}")
        self._clear_selection()
        return self._commit(move)

    def undo(self) -> bool:
        if not self._settings.undo_enabled:
            return False
        snapshot = self._history.pop()
        if snapshot is None:
            return False
        self._position = snapshot.position
        self._status = snapshot.status
        self._selected = None
        self._destinations = frozenset()
        _LOGGER.debug("Undo: %s to move", self._position.side_to_move)
        self._set_phase(SessionPhase.AWAITING_SELECTION)
        self._emit_position()
        self._emit_status()
        self._emit_selection()
        return True

    def reset(self) -> None:
        _LOGGER.info("Resetting game")
        self._install(Position.initial())
        self._emit_position()
        self._emit_status()
        self._emit_selection()

    # ── Persistence ──────────────────────────────────────────────────────

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(self._position.copy(), self._history.records, self._status)

    def save(self) -> dict[str, Any]:
        return snapshot_to_dict(self.snapshot())

    def load(self, data: Any) -> bool:
        """Restore a saved game; a corrupted snapshot starts a fresh game."""
        try:
            snapshot = snapshot_from_dict(data)
        except CorruptedSnapshot as exc:
            _LOGGER.warning("Discarding corrupted game snapshot: %s", exc)
            self.reset()
            return False

        self._install(snapshot.position, list(snapshot.history))
        _LOGGER.info("Game loaded: %d moves, %s", len(snapshot.history), self._status.message)
        self._emit_position()
        self._emit_status()
        self._emit_selection()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _install(self, position: Position, records: list[MoveRecord] | None = None) -> None:
        self._position = position
        self._history = History(records)
        self._status = Rules.status(position)
        self._selected = None
        self._destinations = frozenset()
        self._phase = (
            SessionPhase.GAME_OVER
            if self._status.is_terminal
            else SessionPhase.AWAITING_SELECTION
        )
        self._emit_phase(self._phase)

    def _commit(self, move: Move) -> MoveRecord:
        before, status_before = self._position, self._status
        applied = self._executor.apply(before, move)
        self._history.push(before, status_before, applied.record)
        self._position = applied.position
        self._status = applied.status
        _LOGGER.debug("Played %s", applied.record.notation)
        if self._status.is_terminal:
            _LOGGER.info("Game over: %s", self._status.message)

        self._emit_move(applied.record)
        self._emit_position()
        self._emit_status()
        self._set_phase(
            SessionPhase.GAME_OVER
            if self._status.is_terminal
            else SessionPhase.AWAITING_SELECTION
        )
        return applied.record

    def _clear_selection(self) -> None:
        had_selection = self._selected is not None
        self._selected = None
        self._destinations = frozenset()
        if self._phase == SessionPhase.PIECE_SELECTED:
            self._set_phase(SessionPhase.AWAITING_SELECTION)
        if had_selection:
            self._emit_selection()

    def _set_phase(self, phase: SessionPhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        self._emit_phase(phase)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._position)

    def _emit_position(self) -> None:
        for cb in self.events.on_position_changed:
            cb(self._position)

    def _emit_status(self) -> None:
        for cb in self.events.on_status_changed:
            cb(self._status)

    def _emit_phase(self, phase: SessionPhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_selection(self) -> None:
        for cb in self.events.on_selection_changed:
            cb(self._selected, self._destinations)
