from __future__ import annotations

import socket
from typing import Any

from ..errors import ProtocolError, TransportError
from .protocol import HEAD_SIZE


# Length-prefixed replies over TCP; see protocol.py for the wire layout.


def recv_exact(sock: Any, num_bytes: int, fct: str) -> bytes:
    chunks = []
    remaining = num_bytes
    while remaining > 0:
        try:
            chunk = sock.recv(remaining)
        except OSError as exc:
            raise TransportError(fct, f"Cannot read from the socket ({exc})") from exc
        if not chunk:
            raise TransportError(fct, "Connection closed by the server")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def parse_header(header: bytes, fct: str) -> int:
    if len(header) != HEAD_SIZE or not header.isdigit():
        raise ProtocolError(fct, f"Cannot read message's length (got {header!r})")
    return int(header)


def resolve(host: str, fct: str) -> str:
    try:
        return socket.gethostbyname(host)
    except (socket.gaierror, UnicodeError) as exc:
        raise TransportError(fct, f"Unable to find the server '{host}' by its name") from exc


def open_client(host: str, port: int, fct: str) -> socket.socket:
    address = resolve(host, fct)
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise TransportError(fct, f"Impossible to open socket ({exc})") from exc
    try:
        sock.connect((address, port))
    except OSError as exc:
        sock.close()
        raise TransportError(fct, f"Connection to the server '{host}' on port {port} impossible ({exc})") from exc
    return sock
