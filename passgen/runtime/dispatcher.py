
"""Responder side: one request in, one reply out."""

from __future__ import annotations

import logging
import random
import threading
from typing import Optional

from passgen.core.generator import generate_password, make_rng
from passgen.core.validation import check_request, parse_length
from passgen.protocol.codec import decode_request, encode_response
from passgen.protocol.codes import GENERATION_CODES
from passgen.protocol.constants import REQUEST_SIZE
from passgen.protocol.errors import (
    INVALID_CATEGORY,
    INVALID_LENGTH,
    MALFORMED_MESSAGE,
    OK,
    MalformedMessage,
    TransportFailure,
)
from passgen.protocol.models import Outcome, PasswordRequest, PasswordResponse
from passgen.runtime.config import Settings
from passgen.runtime.events import log_event
from passgen.runtime.transport import UdpTransport


logger = logging.getLogger(__name__)

REJECTION_MESSAGES = {
    INVALID_CATEGORY: "Unknown password type",
    INVALID_LENGTH: "Length must be a number between {min} and {max}",
}


class Responder:
    def __init__(self, rng: Optional[random.Random] = None, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.rng = rng if rng is not None else make_rng(self.settings.seed)

    def _response(
        self,
        *,
        ok: bool,
        code: str,
        message: str,
        request: Optional[PasswordRequest] = None,
        password: Optional[str] = None,
    ) -> Outcome:
        return Outcome(
            ok=ok,
            code=code,
            message=message,
            password=password,
            category=request.category if request is not None else None,
            length=request.length if request is not None else None,
        )

    def handle(self, request: PasswordRequest) -> Outcome:
        code = check_request(
            request,
            allowed=GENERATION_CODES,
            min_length=self.settings.min_length,
            max_length=self.settings.max_length,
        )
        if code != OK:
            message = REJECTION_MESSAGES[code].format(
                min=self.settings.min_length, max=self.settings.max_length
            )
            return self._response(ok=False, code=code, message=message, request=request)

        length = parse_length(request.length, max_digits=len(str(self.settings.max_length)))
        password = generate_password(request.category, length, self.rng)
        return self._response(
            ok=True,
            code=OK,
            message="Password generated",
            request=request,
            password=password,
        )

    def handle_datagram(self, data: bytes) -> bytes:
        """Decode, answer and encode. Refusals are sent back as an empty password."""
        try:
            request = decode_request(data)
        except MalformedMessage as exc:
            log_event(logger, "request_malformed", logging.WARNING, reason=exc.code, size=len(data))
            outcome = self._response(ok=False, code=MALFORMED_MESSAGE, message=str(exc))
        else:
            outcome = self.handle(request)
            if outcome.ok:
                log_event(logger, "request_served", category=request.category, length=request.length)
            else:
                log_event(
                    logger,
                    "request_rejected",
                    logging.WARNING,
                    code=outcome.code,
                    category=request.category,
                    length=request.length[:16],
                )
        return encode_response(PasswordResponse(password=outcome.password or ""))


def serve(
    transport: UdpTransport,
    responder: Responder,
    max_requests: Optional[int] = None,
    stop_event: Optional[threading.Event] = None,
) -> int:
    """Answer requests one at a time until `max_requests` have been served
    or `stop_event` is set.

    Receive timeouts are waited out; give the transport a timeout so a set
    `stop_event` is noticed. Any other transport failure is raised to the
    caller. Returns the number of replies sent.
    """
    served = 0
    while max_requests is None or served < max_requests:
        if stop_event is not None and stop_event.is_set():
            break
        try:
            data, peer = transport.recv_from(REQUEST_SIZE)
        except TransportFailure as exc:
            if exc.transient:
                continue
            log_event(logger, "receive_failed", logging.ERROR, code=exc.code, error=str(exc))
            raise
        log_event(logger, "request_received", peer=f"{peer[0]}:{peer[1]}")
        reply = responder.handle_datagram(data)
        try:
            transport.send_to(reply, peer)
        except TransportFailure as exc:
            log_event(logger, "send_failed", logging.ERROR, code=exc.code, error=str(exc))
            raise
        served += 1
    return served
