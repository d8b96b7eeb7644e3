"""Outcome codes and wire/transport exceptions."""

from __future__ import annotations

OK = "OK"
INVALID_CATEGORY = "INVALID_CATEGORY"
INVALID_LENGTH = "INVALID_LENGTH"
MALFORMED_MESSAGE = "MALFORMED_MESSAGE"
TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
TIMEOUT = "TIMEOUT"
REJECTED = "REJECTED"


class WireError(RuntimeError):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code


class MalformedMessage(WireError):
    """A datagram that does not fit the fixed request/response layout."""


class WireEncodeError(WireError):
    """A value that cannot be written into its fixed-capacity field."""


class TransportFailure(RuntimeError):
    """Send/receive failure on the datagram socket.

    `transient` is set for failures worth waiting out (receive timeouts);
    everything else ends the current session.
    """

    def __init__(self, code: str, msg: str, *, transient: bool = False) -> None:
        super().__init__(msg)
        self.code = code
        self.transient = transient
