import os
import sys
from typing import List, Optional, Union

import pytest

# Add the project root to path for testing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cgsclient.net.connection import Connection  # noqa: E402
from cgsclient.net.protocol import HEAD_SIZE  # noqa: E402
from cgsclient.session import Session  # noqa: E402


def frame(payload: Union[str, bytes]) -> bytes:
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return b"%0*d" % (HEAD_SIZE, len(payload)) + payload


class FakeSocket:
    # chunks caps successive recv results, like a network delivering small pieces
    def __init__(self, inbound: bytes = b"", chunks: Optional[List[int]] = None) -> None:
        self.inbound = bytearray(inbound)
        self.chunks = list(chunks or [])
        self.sent: List[bytes] = []
        self.recv_calls: List[int] = []
        self.closed = False
        self.fail_send = False

    def feed(self, *payloads: Union[str, bytes]) -> "FakeSocket":
        for payload in payloads:
            self.inbound += frame(payload)
        return self

    def recv(self, num_bytes: int) -> bytes:
        self.recv_calls.append(num_bytes)
        size = num_bytes
        if self.chunks:
            size = min(size, self.chunks.pop(0))
        data = bytes(self.inbound[:size])
        del self.inbound[:size]
        return data

    def sendall(self, data: bytes) -> None:
        if self.fail_send:
            raise BrokenPipeError("broken pipe")
        self.sent.append(bytes(data))

    def close(self) -> None:
        self.closed = True

    @property
    def written(self) -> bytes:
        return b"".join(self.sent)


@pytest.fixture
def sock():
    return FakeSocket()


@pytest.fixture
def conn(sock):
    return Connection(sock, "tester")


@pytest.fixture
def session(conn):
    return Session(conn)


@pytest.fixture
def playing(session, sock):
    # game started, local side to play
    sock.feed("OK", "SNAKE-1", "10 10 0", "OK", "", "0")
    session.wait_for_match("TRAINING RANDOM_PLAYER")
    session.get_initial_data()
    sock.sent.clear()
    return session
