"""Qt bridge that publishes :class:`GameSession` changes as signals.

Renderers connect to the signals; input translators call the slots with
board coordinates.  No domain logic lives here.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from staticchess.config import EngineSettings
from staticchess.core.errors import InvalidSquare
from staticchess.core.move import MoveRecord
from staticchess.core.position import Position
from staticchess.core.types import Square, make_square
from staticchess.game.interfaces import SessionPhase
from staticchess.game.session import GameSession

_LOGGER = logging.getLogger(__name__)


class SessionBridge(QObject):
    """Thread-affine adapter between a session and the Qt event loop."""

    position_changed = pyqtSignal(object)  # Position
    status_changed = pyqtSignal(object)  # GameStatus
    move_made = pyqtSignal(object)  # MoveRecord
    selection_changed = pyqtSignal(object, object)  # Square | None, frozenset
    phase_changed = pyqtSignal(int)  # SessionPhase value

    def __init__(self, session: GameSession | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = session if session is not None else GameSession()
        events = self._session.events
        events.on_move.append(self._on_move)
        events.on_position_changed.append(self.position_changed.emit)
        events.on_status_changed.append(self.status_changed.emit)
        events.on_phase_changed.append(self._on_phase)
        events.on_selection_changed.append(self._on_selection)

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def status_text(self) -> str:
        return self._session.status().message

    # ── Display settings ─────────────────────────────────────────────────

    @property
    def settings(self) -> EngineSettings:
        return self._session.settings

    @property
    def show_coordinates(self) -> bool:
        return self.settings.show_coordinates

    @property
    def storage_key(self) -> str:
        """Key under which collaborators persist :meth:`GameSession.save` output."""
        return self.settings.storage_key

    @property
    def last_move_squares(self) -> tuple[Square, Square] | None:
        """Origin and destination to highlight, or None when hidden."""
        record = self._session.last_move
        if record is None or not self.settings.show_last_move:
            return None
        return record.from_sq, record.to_sq

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int, int, result=bool)
    def click_at(self, row: int, col: int) -> bool:
        """Forward a board click; off-board coordinates are rejected."""
        try:
            sq = make_square(row, col)
        except InvalidSquare as exc:
            _LOGGER.warning("Rejected click: %s", exc)
            return False
        self._session.click(sq)
        return True

    @pyqtSlot(object)
    def click(self, sq: Square) -> None:
        self._session.click(sq)

    @pyqtSlot(result=bool)
    def undo(self) -> bool:
        return self._session.undo()

    @pyqtSlot()
    def reset(self) -> None:
        self._session.reset()

    # ── Event adapters ───────────────────────────────────────────────────

    def _on_move(self, record: MoveRecord, _position: Position) -> None:
        self.move_made.emit(record)

    def _on_phase(self, phase: SessionPhase) -> None:
        self.phase_changed.emit(int(phase))

    def _on_selection(self, sq: Square | None, destinations: frozenset[Square]) -> None:
        if not self.settings.show_possible_moves:
            destinations = frozenset()
        self.selection_changed.emit(sq, destinations)
