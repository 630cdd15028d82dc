from .errors import CGSError, ProtocolError, TransportError, UsageError
from .net.connection import Connection, connect
from .net.protocol import ReturnCode
from .session import GameData, Match, MoveAnswer, OpponentMove, Session, SessionState, Side

__version__ = "0.1.0"

__all__ = [
    "CGSError",
    "Connection",
    "GameData",
    "Match",
    "MoveAnswer",
    "OpponentMove",
    "ProtocolError",
    "ReturnCode",
    "Session",
    "SessionState",
    "Side",
    "TransportError",
    "UsageError",
    "connect",
    "__version__",
]
