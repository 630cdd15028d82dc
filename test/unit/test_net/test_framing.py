import math

import pytest

from cgsclient.errors import ProtocolError, TransportError, UsageError
from cgsclient.net.connection import Connection
from cgsclient.net.net import parse_header

from conftest import FakeSocket, frame


def test_parse_header():
    assert parse_header(b"000010", "op") == 10
    with pytest.raises(ProtocolError):
        parse_header(b"00a010", "op")
    with pytest.raises(ProtocolError):
        parse_header(b" 00010", "op")


def test_read_whole_message():
    conn = Connection(FakeSocket(b"000010" + b"0123456789"))
    assert conn.read_framed("op", 100) == (b"0123456789", 0)
    assert conn.pending == 0


def test_short_reads_are_reassembled():
    sock = FakeSocket(b"000010" + b"0123456789", chunks=[6, 3, 7])
    conn = Connection(sock)
    assert conn.read_framed("op", 100) == (b"0123456789", 0)
    # one read for the header, two for the payload
    assert sock.recv_calls == [6, 10, 7]


def test_header_split_across_reads():
    sock = FakeSocket(frame("hello"), chunks=[2, 1, 3])
    conn = Connection(sock)
    assert conn.read_framed("op", 100) == (b"hello", 0)


@pytest.mark.parametrize(
    "length, capacity",
    [(10, 3), (10, 10), (10, 20), (1, 1), (25, 7), (100, 1), (0, 5)],
)
def test_drain_in_several_calls(length, capacity):
    payload = bytes(ord("a") + i % 26 for i in range(length))
    conn = Connection(FakeSocket(frame(payload)))

    pieces = []
    remainders = []
    remaining = None
    while remaining != 0:
        chunk, remaining = conn.read_framed("op", capacity)
        assert len(chunk) <= capacity
        pieces.append(chunk)
        remainders.append(remaining)

    assert b"".join(pieces) == payload
    assert len(pieces) == max(1, math.ceil(length / capacity))
    expected = [max(0, length - capacity * (i + 1)) for i in range(len(pieces))]
    assert remainders == expected


def test_pending_state_carries_over_to_next_message():
    sock = FakeSocket().feed("abcdefgh", "second")
    conn = Connection(sock)
    assert conn.read_framed("op", 5) == (b"abcde", 3)
    assert conn.pending == 3
    assert conn.read_framed("op", 5) == (b"fgh", 0)
    assert conn.read_framed("op", 50) == (b"second", 0)


def test_connections_keep_their_own_pending_state():
    first = Connection(FakeSocket().feed("0123456789"))
    second = Connection(FakeSocket().feed("abc"))
    first.read_framed("op", 4)
    assert second.read_framed("op", 4) == (b"abc", 0)
    assert first.read_framed("op", 100) == (b"456789", 0)


def test_empty_message():
    conn = Connection(FakeSocket().feed(""))
    assert conn.read_framed("op", 10) == (b"", 0)


def test_malformed_header_is_fatal():
    sock = FakeSocket(b"12ab56payload")
    conn = Connection(sock)
    with pytest.raises(ProtocolError) as excinfo:
        conn.read_framed("get_move", 10)
    assert excinfo.value.operation == "get_move"
    assert sock.closed
    assert not conn.is_open


def test_peer_closed_while_reading_is_fatal():
    sock = FakeSocket(b"000010" + b"0123")
    conn = Connection(sock)
    with pytest.raises(TransportError):
        conn.read_framed("op", 100)
    assert sock.closed
    assert not conn.is_open


def test_read_error_is_fatal():
    class BrokenSocket(FakeSocket):
        def recv(self, num_bytes):
            raise ConnectionResetError("reset by peer")

    sock = BrokenSocket()
    conn = Connection(sock)
    with pytest.raises(TransportError, match="reset by peer"):
        conn.read_framed("op", 100)
    assert sock.closed


def test_nothing_can_be_read_after_a_failure():
    conn = Connection(FakeSocket(b"xxxxxx"))
    with pytest.raises(ProtocolError):
        conn.read_framed("op", 10)
    with pytest.raises(UsageError):
        conn.read_framed("op", 10)


def test_buffer_must_hold_at_least_one_byte():
    conn = Connection(FakeSocket().feed("abc"))
    with pytest.raises(UsageError):
        conn.read_framed("op", 0)
    assert conn.is_open


def test_read_message_rejects_too_long_answer():
    sock = FakeSocket().feed("x" * 200)
    conn = Connection(sock)
    with pytest.raises(ProtocolError, match="Too long answer from 'GET_MOVE'"):
        conn.read_message("get_move", 128, "GET_MOVE")
    assert sock.closed
