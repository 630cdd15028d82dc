from __future__ import annotations

import logging
from typing import Any, NoReturn, Optional, Tuple, Type

from ..errors import CGSError, ProtocolError, TransportError, UsageError
from ..log import PlayerLogAdapter
from .net import open_client, parse_header, recv_exact
from .protocol import ACK, CLIENT_NAME, ENCODING, HEAD_SIZE, MAX_LENGTH, MAX_NAME

LOG = logging.getLogger(__name__)


def encode_command(fct: str, command: str) -> bytes:
    # one unframed line per command
    data = command.encode(ENCODING)
    if len(data) > MAX_LENGTH:
        raise UsageError(fct, f"Command too long ({len(data)} bytes, max {MAX_LENGTH})")
    if "\n" in command or "\r" in command:
        raise UsageError(fct, f"Command must fit on one line ({command!r})")
    return data


class Connection:
    def __init__(self, sock: Any, name: str = "") -> None:
        self.sock: Optional[Any] = sock
        self.name = name
        self.pending = 0
        self.log = PlayerLogAdapter(LOG, name)

    @property
    def is_open(self) -> bool:
        return self.sock is not None

    def _check_open(self, fct: str) -> Any:
        if self.sock is None:
            raise UsageError(fct, "The connection to the server is not established. Call 'connect' before!")
        return self.sock

    def _abort(self, exc: CGSError) -> NoReturn:
        self.log.error("%s", exc.message, fct=exc.operation)
        self._drop()
        raise exc

    def fail(self, cls: Type[CGSError], fct: str, message: str) -> NoReturn:
        self._abort(cls(fct, message))

    def _drop(self) -> None:
        sock, self.sock = self.sock, None
        self.pending = 0
        if sock is not None:
            try:
                sock.close()
            except OSError:
                pass

    def _recv(self, num_bytes: int, fct: str) -> bytes:
        try:
            return recv_exact(self.sock, num_bytes, fct)
        except TransportError as exc:
            self._abort(exc)

    # ------------------------------------------------------------------
    # Framing
    # ------------------------------------------------------------------
    def read_framed(self, fct: str, max_len: int) -> Tuple[bytes, int]:
        # at most max_len bytes of the current reply, and how many are still
        # unread (0: fully consumed); the next header is read once it is drained
        self._check_open(fct)
        if max_len < 1:
            raise UsageError(fct, f"Cannot read a message into {max_len} bytes")

        if not self.pending:
            header = self._recv(HEAD_SIZE, fct)
            try:
                self.pending = parse_header(header, fct)
            except ProtocolError as exc:
                self._abort(exc)
            self.log.trace("prepare to receive a message of length: %d", self.pending, fct=fct)

        size = min(self.pending, max_len)
        payload = self._recv(size, fct) if size else b""
        self.pending -= size
        return payload, self.pending

    def read_message(self, fct: str, max_len: int, what: str) -> bytes:
        payload, remaining = self.read_framed(fct, max_len)
        if remaining:
            self.fail(ProtocolError, fct, f"Too long answer from '{what}' command")
        return payload

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def send(self, fct: str, command: str) -> None:
        sock = self._check_open(fct)
        data = encode_command(fct, command)

        try:
            sock.sendall(data)
        except OSError as exc:
            self.fail(TransportError, fct, f"Cannot write to the socket ({command}): {exc}")
        self.log.debug("Send '%s' to the server", command, fct=fct)

        answer, remaining = self.read_framed(fct, MAX_LENGTH)
        if remaining:
            self.fail(ProtocolError, fct, f"Acknowledgement message too long (sending: {command})")
        if answer != ACK:
            text = answer.decode(ENCODING, errors="replace")
            self.fail(ProtocolError, fct, f"The server does not acknowledge, but answered:\n{text}")
        self.log.trace("Receive acknowledgment from the server", fct=fct)

    def close(self, fct: str = "close") -> None:
        self._check_open(fct)
        self.log.info("Close the connection", fct=fct)
        self._drop()


def connect(host: str, port: int, name: str, fct: str = "connect") -> Connection:
    if len(name) > MAX_NAME:
        raise UsageError(fct, f"The name '{name}' is more than {MAX_NAME} characters")
    hello = f"{CLIENT_NAME} {name}"
    encode_command(fct, hello)

    log = PlayerLogAdapter(LOG, name)
    log.debug("Initiate connection with %s (port: %d)", host, port, fct=fct)
    try:
        sock = open_client(host, port, fct)
    except TransportError as exc:
        log.error("%s", exc.message, fct=fct)
        raise
    log.info("Open connection with the server %s", host, fct=fct)

    conn = Connection(sock, name)
    conn.send(fct, hello)
    return conn
