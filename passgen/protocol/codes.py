"""Single-character category codes carried in byte 0 of a request."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    NUMERIC = "n"
    ALPHA = "a"
    MIXED = "m"
    SECURE = "s"
    UNAMBIGUOUS = "u"


GENERATION_CODES = "".join(category.value for category in Category)

HELP = "h"
QUIT = "q"

CLIENT_CODES = GENERATION_CODES + HELP + QUIT
