"""Pure request checks. No I/O, no randomness, no exceptions on bad input."""

from __future__ import annotations

from typing import Optional

from passgen.protocol.codes import GENERATION_CODES, QUIT
from passgen.protocol.constants import BUFFER_SIZE, MAX_PASSWORD_LENGTH, MIN_PASSWORD_LENGTH
from passgen.protocol.errors import INVALID_CATEGORY, INVALID_LENGTH, OK
from passgen.protocol.models import PasswordRequest


ASCII_DIGITS = frozenset("0123456789")


def type_allowed(categories: str, category: str) -> bool:
    """True when `category` is exactly one character listed in `categories`.

    Matching is case-sensitive: `"Q"` is not in `"namsuq"`.
    """
    return len(category) == 1 and category in categories


def is_control(category: str, code: str) -> bool:
    """Case-insensitive comparison used for the `h`/`q` control codes."""
    return len(category) == 1 and category.casefold() == code.casefold()


def keep_generating(category: str, quit_code: str = QUIT) -> bool:
    return not is_control(category, quit_code)


def parse_length(length_string: str, max_digits: int) -> Optional[int]:
    """Bounded string-to-integer conversion.

    Returns None for an empty string, a string too long to fit the request
    length field, any character outside ASCII 0-9 (so `str.isdigit`
    lookalikes such as superscripts are refused too), or more than
    `max_digits` significant digits. Leading zeros are not significant.
    """
    if not length_string or len(length_string) >= BUFFER_SIZE:
        return None
    if any(char not in ASCII_DIGITS for char in length_string):
        return None
    significant = length_string.lstrip("0")
    if len(significant) > max_digits:
        return None
    return int(significant or "0")


def length_in_range(length_string: str, min_length: int, max_length: int) -> bool:
    value = parse_length(length_string, max_digits=len(str(max_length)))
    return value is not None and min_length <= value <= max_length


def check_request(
    request: PasswordRequest,
    allowed: str = GENERATION_CODES,
    min_length: int = MIN_PASSWORD_LENGTH,
    max_length: int = MAX_PASSWORD_LENGTH,
) -> str:
    """Return OK, INVALID_CATEGORY or INVALID_LENGTH for a raw request."""
    if not type_allowed(allowed, request.category):
        return INVALID_CATEGORY
    if not length_in_range(request.length, min_length, max_length):
        return INVALID_LENGTH
    return OK
