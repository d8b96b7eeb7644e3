from passgen.protocol.codec import decode_request, decode_response, encode_request, encode_response
from passgen.protocol.codes import CLIENT_CODES, GENERATION_CODES, HELP, QUIT, Category
from passgen.protocol.errors import (
    INVALID_CATEGORY,
    INVALID_LENGTH,
    MALFORMED_MESSAGE,
    OK,
    REJECTED,
    TIMEOUT,
    TRANSPORT_FAILURE,
    MalformedMessage,
    TransportFailure,
    WireEncodeError,
    WireError,
)
from passgen.protocol.models import Outcome, PasswordRequest, PasswordResponse

__all__ = [
    "CLIENT_CODES",
    "Category",
    "GENERATION_CODES",
    "HELP",
    "INVALID_CATEGORY",
    "INVALID_LENGTH",
    "MALFORMED_MESSAGE",
    "MalformedMessage",
    "OK",
    "Outcome",
    "PasswordRequest",
    "PasswordResponse",
    "QUIT",
    "REJECTED",
    "TIMEOUT",
    "TRANSPORT_FAILURE",
    "TransportFailure",
    "WireEncodeError",
    "WireError",
    "decode_request",
    "decode_response",
    "encode_request",
    "encode_response",
]
