from __future__ import annotations


class CGSError(RuntimeError):
    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"({operation}) {message}")
        self.operation = operation
        self.message = message


# resolving, connecting, reading or writing failed
class TransportError(CGSError):
    pass


# the server answered something the protocol does not allow
class ProtocolError(CGSError):
    pass


# invalid call on the client side; nothing was sent
class UsageError(CGSError):
    pass
