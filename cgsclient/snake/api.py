from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

from ..errors import ProtocolError, UsageError
from ..net.connection import Connection, connect
from ..net.protocol import ReturnCode
from ..session import Session
from .game import Arena, Move, parse_move, parse_sizes, parse_walls

MAX_ARENA_DATA = 4096 * 8


class SnakeGame(NamedTuple):
    name: str
    size_x: int
    size_y: int
    nb_walls: int


class SnakeClient:
    def __init__(self, connection: Optional[Connection] = None) -> None:
        self.connection = connection
        self.session = Session(connection) if connection is not None else None
        self.game: Optional[SnakeGame] = None

    def _session(self, fct: str) -> Session:
        if self.session is None:
            raise UsageError(fct, "The connection to the server is not established. Call 'connect_to_server' before!")
        return self.session

    def connect_to_server(self, host: str, port: int, name: str) -> None:
        """Connect to the server; ``name`` is at most 20 characters."""
        self.connection = connect(host, port, name, fct="connect_to_server")
        self.session = Session(self.connection)

    def close_connection(self) -> None:
        fct = "close_connection"
        if self.connection is None:
            raise UsageError(fct, "The connection to the server is not established. Call 'connect_to_server' before!")
        self.connection.close(fct)

    def wait_for_snake_game(self, game_type: str = "") -> SnakeGame:
        """Wait for a game and return its name, sizes and number of walls.

        ``game_type`` is ``"TRAINING <BOT> key=value ..."`` (bots:
        ``RANDOM_PLAYER``, ``SUPER_PLAYER``), ``"TOURNAMENT <name>"`` or empty.
        Options: ``timeout``, ``seed``, ``start`` (0 or 1) and ``difficulty``
        (0: no walls .. 3: a lot of walls, default 2).
        """
        fct = "wait_for_snake_game"
        match = self._session(fct).wait_for_match(game_type, fct=fct)
        sizes = parse_sizes(match.data)
        if sizes is None:
            self.connection.fail(ProtocolError, fct, f"Cannot parse the arena sizes '{match.data}'")
        self.game = SnakeGame(match.game_name, *sizes)
        return self.game

    def get_snake_arena(self) -> Tuple[Arena, int]:
        """Return the arena and who starts (0: we start, 1: the opponent)."""
        fct = "get_snake_arena"
        session = self._session(fct)
        if self.game is None:
            raise UsageError(fct, "Call 'wait_for_snake_game' before!")
        data, starting_side = session.get_initial_data(MAX_ARENA_DATA, fct=fct)
        walls = parse_walls(data, self.game.nb_walls)
        if walls is None:
            self.connection.fail(ProtocolError, fct, f"Cannot read {self.game.nb_walls} walls from the arena data")
        return Arena(self.game.size_x, self.game.size_y, walls), starting_side

    def get_move(self) -> Tuple[Optional[Move], ReturnCode]:
        """Get the opponent's move; the return code is relative to the opponent."""
        fct = "get_move"
        result = self._session(fct).get_opponent_move(fct=fct)
        move = parse_move(result.move)
        if move is None and result.code == ReturnCode.NORMAL_MOVE:
            self.connection.fail(ProtocolError, fct, f"Invalid move '{result.move}'")
        self.session.log.debug("move: %s, ret: %d", move, result.code, fct=fct)
        return move, result.code

    def send_move(self, move: Move) -> ReturnCode:
        """Play ``move``; the return code is relative to us."""
        fct = "send_move"
        session = self._session(fct)
        session.log.debug("move sent: %d", move, fct=fct)
        return session.send_move(str(int(move)), fct=fct).code

    def print_arena(self) -> str:
        fct = "print_arena"
        return self._session(fct).request_display(fct=fct)

    def send_comment(self, comment: str) -> None:
        fct = "send_comment"
        self._session(fct).send_annotation(comment, fct=fct)
