from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, TextIO

from .errors import ProtocolError, UsageError
from .net.connection import Connection
from .net.protocol import (
    DISP_GAME,
    ENCODING,
    GET_GAME_DATA,
    GET_MOVE,
    MAX_COMMENT,
    MAX_GET_MOVE,
    MAX_LENGTH,
    MAX_MESSAGE,
    NOT_READY,
    PLAY_MOVE,
    SEND_COMMENT,
    WAIT_GAME,
    ReturnCode,
)


class SessionState(Enum):
    AWAITING_MATCH = "awaiting_match"
    MATCHED = "matched"
    AWAITING_MOVE = "awaiting_move"  # local side to play
    MOVE_SENT = "move_sent"  # waiting for the opponent's move
    TERMINAL = "terminal"


class Side(Enum):
    LOCAL = 0
    OPPONENT = 1


class Match(NamedTuple):
    game_name: str
    data: str


class GameData(NamedTuple):
    data: str
    starting_side: int  # 0: we start, 1: the opponent starts


@dataclass
class OpponentMove:
    move: str
    message: str
    code: ReturnCode  # relative to the opponent

    @property
    def winner(self) -> Optional[Side]:
        if self.code == ReturnCode.WINNING_MOVE:
            return Side.OPPONENT
        if self.code == ReturnCode.LOSING_MOVE:
            return Side.LOCAL
        return None


@dataclass
class MoveAnswer:
    message: str
    code: ReturnCode  # relative to us

    @property
    def winner(self) -> Optional[Side]:
        if self.code == ReturnCode.WINNING_MOVE:
            return Side.LOCAL
        if self.code == ReturnCode.LOSING_MOVE:
            return Side.OPPONENT
        return None


def _text(payload: bytes) -> str:
    return payload.decode(ENCODING, errors="replace")


# checked before the command is sent
def _check_buffer(fct: str, size: int) -> None:
    if size < 1:
        raise UsageError(fct, f"Cannot read a message into {size} bytes")


class Session:
    # fct: name of the calling operation, for logs and errors; game adapters pass their own
    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self.state = SessionState.AWAITING_MATCH
        self.game_name: Optional[str] = None
        self.data: Optional[str] = None
        self.starting_side: Optional[int] = None
        self.outcome: Optional[Side] = None

    @property
    def log(self):
        return self.connection.log

    def _require(self, fct: str, *states: SessionState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.name for s in states)
            raise UsageError(fct, f"Invalid in state {self.state.name} (expected {allowed})")

    def _require_game(self, fct: str) -> None:
        if self.state in (SessionState.AWAITING_MATCH, SessionState.TERMINAL):
            raise UsageError(fct, f"No game in progress (state {self.state.name})")

    def _read_code(self, fct: str, what: str) -> ReturnCode:
        raw = _text(self.connection.read_message(fct, MAX_LENGTH, what))
        try:
            return ReturnCode(int(raw))
        except ValueError:
            self.connection.fail(ProtocolError, fct, f"Invalid return code '{raw}' from '{what}'")

    def _finish(self, fct: str, code: ReturnCode, message: str, winner: Optional[Side], next_state: SessionState) -> None:
        if code == ReturnCode.NORMAL_MOVE:
            self.state = next_state
            return
        self.state = SessionState.TERMINAL
        self.outcome = winner
        self.log.warning("%s", message, fct=fct)

    # ------------------------------------------------------------------
    # Match making
    # ------------------------------------------------------------------
    def wait_for_match(self, game_type: str = "", fct: Optional[str] = None) -> Match:
        """Wait for a game and return its name and first data.

        ``game_type`` looks like ``"TRAINING RANDOM_PLAYER timeout=10 seed=3"``
        or ``"TOURNAMENT name"``; empty waits for any opponent.
        """
        fct = fct or "wait_for_match"
        self._require(fct, SessionState.AWAITING_MATCH, SessionState.TERMINAL)
        self.connection.send(fct, f"{WAIT_GAME} {game_type or ''}")

        # The server keeps sending NOT_READY while no game is ready; this is
        # how it notices a client that went away.
        while True:
            name = self.connection.read_message(fct, MAX_LENGTH, WAIT_GAME)
            if name != NOT_READY:
                break
        game_name = _text(name)
        self.log.info("Receive Game name=%s", game_name, fct=fct)

        data = _text(self.connection.read_message(fct, MAX_LENGTH, WAIT_GAME))
        self.log.debug("Receive Game sizes=%s", data, fct=fct)

        self.state = SessionState.MATCHED
        self.game_name, self.data = game_name, data
        self.starting_side = None
        self.outcome = None
        return Match(game_name, data)

    def get_initial_data(self, max_size: int = MAX_LENGTH, fct: Optional[str] = None) -> GameData:
        fct = fct or "get_initial_data"
        self._require(fct, SessionState.MATCHED)
        _check_buffer(fct, max_size)
        self.connection.send(fct, GET_GAME_DATA)

        data = _text(self.connection.read_message(fct, max_size, GET_GAME_DATA))
        self.log.debug("Receive game's data: %s", data, fct=fct)

        who = _text(self.connection.read_message(fct, MAX_LENGTH, GET_GAME_DATA))
        self.log.debug("Receive these player who begins=%s", who, fct=fct)
        if who[:1] not in ("0", "1"):
            self.connection.fail(ProtocolError, fct, f"Invalid starting player '{who}'")
        starting_side = int(who[0])

        self.starting_side = starting_side
        self.state = SessionState.AWAITING_MOVE if starting_side == Side.LOCAL.value else SessionState.MOVE_SENT
        return GameData(data, starting_side)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def get_opponent_move(self, fct: Optional[str] = None) -> OpponentMove:
        fct = fct or "get_opponent_move"
        self._require_game(fct)
        self.connection.send(fct, GET_MOVE)

        move = _text(self.connection.read_message(fct, MAX_GET_MOVE, GET_MOVE))
        self.log.info("Receive that move: %s", move, fct=fct)
        message = _text(self.connection.read_message(fct, MAX_MESSAGE, GET_MOVE))
        code = self._read_code(fct, GET_MOVE)
        self.log.debug("Receive that return code: %d", code, fct=fct)

        result = OpponentMove(move, message, code)
        self._finish(fct, code, message, result.winner, SessionState.AWAITING_MOVE)
        return result

    def send_move(self, move: str, fct: Optional[str] = None) -> MoveAnswer:
        fct = fct or "send_move"
        self._require_game(fct)
        self.connection.send(fct, f"{PLAY_MOVE} {move}")

        message = _text(self.connection.read_message(fct, MAX_LENGTH, PLAY_MOVE))
        self.log.info("Receive that message: %s", message, fct=fct)
        code = self._read_code(fct, PLAY_MOVE)
        self.log.debug("Receive that return code: %d", code, fct=fct)

        result = MoveAnswer(message, code)
        self._finish(fct, code, message, result.winner, SessionState.MOVE_SENT)
        return result

    # ------------------------------------------------------------------
    # Display and comments
    # ------------------------------------------------------------------
    def request_display(
        self,
        out: Optional[TextIO] = None,
        chunk_size: int = MAX_LENGTH,
        fct: Optional[str] = None,
    ) -> str:
        fct = fct or "request_display"
        _check_buffer(fct, chunk_size)
        if out is None:
            out = sys.stdout
        self.log.debug("Try to get string to display Game", fct=fct)
        self.connection.send(fct, DISP_GAME)

        decoder = codecs.getincrementaldecoder(ENCODING)(errors="replace")
        parts = []
        remaining = 1
        while remaining:
            chunk, remaining = self.connection.read_framed(fct, chunk_size)
            text = decoder.decode(chunk, final=not remaining)
            out.write(text)
            parts.append(text)
        out.flush()
        return "".join(parts)

    def send_annotation(self, text: str, fct: Optional[str] = None) -> None:
        fct = fct or "send_annotation"
        self.log.debug("Try to send a comment", fct=fct)
        if len(text) > MAX_COMMENT:
            raise UsageError(fct, f"The Comment is more than {MAX_COMMENT} characters.")
        self.connection.send(fct, f"{SEND_COMMENT} {text}")
