"""Requester side: validate, send one request, wait for one reply."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from passgen.core.generator import CHARSETS
from passgen.core.validation import is_control, keep_generating, length_in_range, type_allowed
from passgen.protocol.codec import decode_response, encode_request
from passgen.protocol.codes import GENERATION_CODES, HELP, Category
from passgen.protocol.constants import RESPONSE_SIZE
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
)
from passgen.protocol.models import Outcome, PasswordRequest
from passgen.runtime.config import Settings
from passgen.runtime.events import log_event
from passgen.runtime.transport import Address, UdpTransport


logger = logging.getLogger(__name__)

MENU_TEXT = """\
Enter the password type and its length ({min}-{max}):
  n: numeric password (digits only)
  a: alphabetic password (lowercase letters only)
  m: mixed password (lowercase letters and digits)
  s: secure password (upper and lowercase letters, digits, symbols)
  u: unambiguous secure password (no look-alike characters)
  h: help
  q: quit"""

HELP_TEXT = """\
Password Generator Help
Commands:
 h        : show this help menu
 n LENGTH : generate a numeric password (digits only)
 a LENGTH : generate an alphabetic password (lowercase letters only)
 m LENGTH : generate a mixed password (lowercase letters and digits)
 s LENGTH : generate a secure password (upper and lowercase letters, digits, symbols)
 u LENGTH : generate an unambiguous secure password (no look-alike characters)
 q        : quit

 LENGTH must be between {min} and {max} characters; {default} is used when it is omitted.

 Characters excluded by 'u':
 0 O o (zero and the letter O)
 1 l I i (one and the letters l, I)
 2 Z z (two and the letter Z)
 5 S s (five and the letter S)
 8 B (eight and the letter B)"""


def parse_command(line: str, default_length: str) -> Optional[Tuple[str, str]]:
    """Split `"<category> [length]"` into its parts.

    Returns None for an empty line or more than two tokens. The category is
    returned as typed, even if it is longer than one character, so the
    validator can refuse it.
    """
    tokens = line.split()
    if not tokens or len(tokens) > 2:
        return None
    if len(tokens) == 1:
        return tokens[0], default_length
    return tokens[0], tokens[1]


class Requester:
    def __init__(
        self,
        transport: UdpTransport,
        server_address: Address,
        settings: Optional[Settings] = None,
    ):
        self.transport = transport
        self.server_address = server_address
        self.settings = settings or Settings()

    def _outcome(
        self,
        *,
        ok: bool,
        code: str,
        message: str,
        category: str,
        length: str,
        password: Optional[str] = None,
    ) -> Outcome:
        return Outcome(
            ok=ok,
            code=code,
            message=message,
            password=password,
            category=category,
            length=length,
        )

    def _exchange(self, payload: bytes) -> bytes:
        """Send one request and return the first reply that comes from the server.

        Datagrams already queued (late replies to an earlier, timed-out
        request) are discarded before sending; replies from any other peer
        are skipped.
        """
        server = self.transport.resolve(self.server_address)
        stale = self.transport.drain(RESPONSE_SIZE)
        if stale:
            log_event(logger, "stale_replies_dropped", logging.WARNING, count=stale)
        self.transport.send_to(payload, server)
        while True:
            data, peer = self.transport.recv_from(RESPONSE_SIZE)
            if peer == server:
                return data
            log_event(logger, "reply_ignored", logging.WARNING, peer=f"{peer[0]}:{peer[1]}")

    def request_password(self, category: str, length: str) -> Outcome:
        if not type_allowed(GENERATION_CODES, category):
            return self._outcome(
                ok=False,
                code=INVALID_CATEGORY,
                message="Invalid type. Please choose a valid option.",
                category=category,
                length=length,
            )
        if not length_in_range(length, self.settings.min_length, self.settings.max_length):
            return self._outcome(
                ok=False,
                code=INVALID_LENGTH,
                message=f"Invalid length. Please choose a value between {self.settings.min_length} "
                f"and {self.settings.max_length}.",
                category=category,
                length=length,
            )

        payload = encode_request(PasswordRequest(category=category, length=length))
        try:
            data = self._exchange(payload)
        except TransportFailure as exc:
            log_event(logger, "exchange_failed", logging.WARNING, code=exc.code, transient=exc.transient)
            return self._outcome(
                ok=False,
                code=TIMEOUT if exc.transient else TRANSPORT_FAILURE,
                message=str(exc),
                category=category,
                length=length,
            )

        try:
            password = decode_response(data).password
        except MalformedMessage as exc:
            log_event(logger, "reply_malformed", logging.WARNING, reason=exc.code, size=len(data))
            return self._outcome(
                ok=False,
                code=MALFORMED_MESSAGE,
                message=str(exc),
                category=category,
                length=length,
            )

        if not password:
            return self._outcome(
                ok=False,
                code=REJECTED,
                message="The server refused the request.",
                category=category,
                length=length,
            )
        if len(password) != int(length):
            return self._outcome(
                ok=False,
                code=MALFORMED_MESSAGE,
                message=f"Reply has {len(password)} characters, expected {int(length)}.",
                category=category,
                length=length,
            )
        if set(password) - set(CHARSETS[Category(category)]):
            log_event(logger, "reply_off_charset", logging.WARNING, category=category)
            return self._outcome(
                ok=False,
                code=MALFORMED_MESSAGE,
                message="Reply contains characters outside the requested password type.",
                category=category,
                length=length,
            )
        log_event(logger, "password_received", category=category, length=length)
        return self._outcome(
            ok=True,
            code=OK,
            message="Password generated",
            category=category,
            length=length,
            password=password,
        )


def run_shell(
    requester: Requester,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Interactive menu loop. Returns 0 on quit or end of input, 1 on a fatal transport error."""
    settings = requester.settings
    limits = {"min": settings.min_length, "max": settings.max_length, "default": settings.default_length}
    while True:
        write(MENU_TEXT.format(**limits))
        try:
            line = read_line("? ")
        except EOFError:
            return 0

        parsed = parse_command(line, str(settings.default_length))
        if parsed is None:
            write("Invalid input. Please provide a valid type and length.")
            continue
        category, length = parsed

        if is_control(category, HELP):
            write(HELP_TEXT.format(**limits))
            continue
        if not keep_generating(category):
            return 0

        outcome = requester.request_password(category, length)
        if outcome.ok:
            write(f"Password generated: {outcome.password}\n")
            continue
        write(outcome.message)
        if outcome.code == TRANSPORT_FAILURE:
            return 1
