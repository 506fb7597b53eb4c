"""Move history with a parallel stack of pre-move snapshots for undo."""

from __future__ import annotations

from dataclasses import dataclass

from staticchess.core.move import MoveRecord
from staticchess.core.position import Position
from staticchess.core.rules import GameStatus


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    """State captured before a move. Never mutated after being pushed."""

    position: Position
    status: GameStatus


class History:
    """Ordered move records plus undo snapshots.

    ``records`` may be longer than the snapshot stack after a game is loaded
    from storage: loaded moves are displayable but cannot be undone.
    """

    __slots__ = ("_records", "_snapshots")

    def __init__(self, records: list[MoveRecord] | None = None) -> None:
        self._records: list[MoveRecord] = list(records or [])
        self._snapshots: list[HistorySnapshot] = []

    def push(self, position: Position, status: GameStatus, record: MoveRecord) -> None:
        """Record *record*, remembering the state (*position*, *status*) before it."""
        self._snapshots.append(HistorySnapshot(position.copy(), status))
        self._records.append(record)

    def pop(self) -> HistorySnapshot | None:
        """Drop the latest move and return the snapshot taken before it."""
        if not self._snapshots:
            return None
        self._records.pop()
        snapshot = self._snapshots.pop()
        # Hand out a copy so the caller can never alias the stored state.
        return HistorySnapshot(snapshot.position.copy(), snapshot.status)

    def clear(self) -> None:
        self._records.clear()
        self._snapshots.clear()

    @property
    def records(self) -> tuple[MoveRecord, ...]:
        return tuple(self._records)

    @property
    def can_undo(self) -> bool:
        return bool(self._snapshots)

    @property
    def last(self) -> MoveRecord | None:
        return self._records[-1] if self._records else None

    def rows(self) -> list[tuple[int, str, str]]:
        """Move list grouped by turn: ``[(1, "e4", "e5"), (2, "Nf3", "")]``."""
        rows: list[tuple[int, str, str]] = []
        for ply, record in enumerate(self._records):
            if ply % 2 == 0:
                rows.append((ply // 2 + 1, record.notation, ""))
            else:
                turn, white, _ = rows[-1]
                rows[-1] = (turn, white, record.notation)
        return rows

    def __len__(self) -> int:
        return len(self._records)
