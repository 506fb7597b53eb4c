"""Game management layer: session state machine, history, persistence.

Quick start::

    from staticchess.core import parse_square
    from staticchess.game import GameSession

    session = GameSession()
    session.click(parse_square("e2"))
    session.click(parse_square("e4"))
    print(session.status().message)
"""

from staticchess.game.history import History, HistorySnapshot
from staticchess.game.interfaces import IGameSession, PromotionChooser, SessionPhase
from staticchess.game.session import GameEvents, GameSession
from staticchess.game.snapshot import (
    GameSnapshot,
    dumps,
    loads,
    snapshot_from_dict,
    snapshot_to_dict,
)

__all__ = [
    # Interfaces
    "IGameSession",
    "PromotionChooser",
    "SessionPhase",
    # Concrete
    "GameEvents",
    "GameSession",
    "History",
    "HistorySnapshot",
    # Persistence
    "GameSnapshot",
    "dumps",
    "loads",
    "snapshot_from_dict",
    "snapshot_to_dict",
]
