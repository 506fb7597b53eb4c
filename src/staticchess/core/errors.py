"""Error taxonomy for the rules engine.

Everything deriving from :class:`ChessError` is a recoverable, user-facing
condition.  :class:`PositionInvariantError` is not: it means the executor
produced an impossible position and must never be silently patched.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for recoverable chess errors."""


class InvalidSquare(ChessError, ValueError):
    """Coordinates or square name outside the 8x8 board."""


class NoPieceAtSquare(ChessError):
    """The referenced square is empty."""


class NotSideToMove(ChessError):
    """The referenced piece belongs to the side not on move."""


class IllegalMove(ChessError):
    """Destination is not in the legal set for the selected piece."""


class CorruptedSnapshot(ChessError, ValueError):
    """A persisted game snapshot could not be decoded."""


class PositionInvariantError(RuntimeError):
    """A position violates a structural invariant (e.g. two white kings)."""
