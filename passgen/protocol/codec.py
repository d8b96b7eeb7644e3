"""Byte layout of the request and response datagrams.

Request:  [category: 1 byte][length: ASCII digits, NUL-terminated, padded to 1024]
Response: [password: printable ASCII, NUL-terminated, padded to 33]

Both messages are fixed size. Decoders never look past the fixed capacity of a
field, whatever the peer actually sent, and cut each field at its first
terminator.
"""

from __future__ import annotations

from pydantic import ValidationError

from passgen.protocol.constants import (
    BUFFER_SIZE,
    PASSWORD_FIELD_SIZE,
    REQUEST_SIZE,
    RESPONSE_SIZE,
    TERMINATOR,
)
from passgen.protocol.errors import MalformedMessage, WireEncodeError
from passgen.protocol.models import PasswordRequest, PasswordResponse


PRINTABLE = frozenset(chr(code) for code in range(0x20, 0x7F))


def _terminated(field: bytes, capacity: int, name: str) -> bytes:
    end = field.find(TERMINATOR, 0, capacity)
    if end < 0:
        raise MalformedMessage(
            f"unterminated_{name}",
            f"{name} field has no terminator within {capacity} bytes",
        )
    return field[:end]


def encode_request(request: PasswordRequest) -> bytes:
    try:
        category = request.category.encode("ascii")
        length = request.length.encode("ascii")
    except UnicodeEncodeError as exc:
        raise WireEncodeError("non_ascii", f"request is not ASCII: {exc}") from exc
    if len(category) != 1:
        raise WireEncodeError("bad_category", "category must be a single character")
    if TERMINATOR in length or len(length) >= BUFFER_SIZE:
        raise WireEncodeError(
            "length_overflow",
            f"length string must fit in {BUFFER_SIZE - 1} bytes without a NUL",
        )
    return (category + length + TERMINATOR).ljust(REQUEST_SIZE, TERMINATOR)


def decode_request(data: bytes) -> PasswordRequest:
    if not data:
        raise MalformedMessage("empty_datagram", "request datagram is empty")
    category = data[:1]
    if category == TERMINATOR:
        raise MalformedMessage("missing_category", "request has no category byte")
    length = _terminated(data[1:REQUEST_SIZE], BUFFER_SIZE, "length")
    try:
        # Latin-1 maps every byte; odd bytes are left for the validator to refuse.
        return PasswordRequest(
            category=category.decode("latin-1"),
            length=length.decode("latin-1"),
        )
    except ValidationError as exc:
        raise MalformedMessage("invalid_request", str(exc)) from exc


def encode_response(response: PasswordResponse) -> bytes:
    password = response.password
    if len(password) >= PASSWORD_FIELD_SIZE:
        raise WireEncodeError(
            "password_overflow",
            f"password must fit in {PASSWORD_FIELD_SIZE - 1} characters",
        )
    if any(char not in PRINTABLE for char in password):
        raise WireEncodeError("non_printable", "password contains non-printable characters")
    return (password.encode("ascii") + TERMINATOR).ljust(RESPONSE_SIZE, TERMINATOR)


def decode_response(data: bytes) -> PasswordResponse:
    raw = _terminated(data[:RESPONSE_SIZE], PASSWORD_FIELD_SIZE, "password")
    try:
        password = raw.decode("ascii")
    except UnicodeDecodeError as exc:
        raise MalformedMessage("non_ascii", f"password is not ASCII: {exc}") from exc
    if any(char not in PRINTABLE for char in password):
        raise MalformedMessage("non_printable", "password contains non-printable characters")
    return PasswordResponse(password=password)
