"""Charset password generation.

Every character is drawn independently and uniformly from the category's
charset using a caller-owned random source. There is no uniqueness or
class-coverage guarantee: a short "secure" password may contain no symbol.
"""

from __future__ import annotations

import random
import string
from typing import Callable, Dict, Optional, Union

from passgen.protocol.codes import Category


SYMBOLS = "!@#$%^&*()"

# Confusable characters dropped from the unambiguous charset, grouped by look-alike.
AMBIGUOUS = frozenset("0Oo" "1lIi" "2Zz" "5Ss" "8B")

_SECURE = string.ascii_lowercase + string.ascii_uppercase + string.digits + SYMBOLS

CHARSETS: Dict[Category, str] = {
    Category.NUMERIC: string.digits,
    Category.ALPHA: string.ascii_lowercase,
    Category.MIXED: string.ascii_lowercase + string.digits,
    Category.SECURE: _SECURE,
    Category.UNAMBIGUOUS: "".join(char for char in _SECURE if char not in AMBIGUOUS),
}


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Seeded PRNG when `seed` is given, otherwise OS entropy."""
    if seed is not None:
        return random.Random(seed)
    return random.SystemRandom()


def _from_charset(charset: str) -> Callable[[int, random.Random], str]:
    def build(length: int, rng: random.Random) -> str:
        return "".join(rng.choice(charset) for _ in range(length))

    return build


def _mixed(length: int, rng: random.Random) -> str:
    # Coin flip per position between a letter and a digit.
    return "".join(
        rng.choice(string.ascii_lowercase) if rng.randrange(2) else rng.choice(string.digits)
        for _ in range(length)
    )


_BUILDERS: Dict[Category, Callable[[int, random.Random], str]] = {
    Category.NUMERIC: _from_charset(CHARSETS[Category.NUMERIC]),
    Category.ALPHA: _from_charset(CHARSETS[Category.ALPHA]),
    Category.MIXED: _mixed,
    Category.SECURE: _from_charset(CHARSETS[Category.SECURE]),
    Category.UNAMBIGUOUS: _from_charset(CHARSETS[Category.UNAMBIGUOUS]),
}

if set(_BUILDERS) != set(Category) or set(CHARSETS) != set(Category):
    raise RuntimeError("every Category needs a charset and a builder")


def generate_password(category: Union[Category, str], length: int, rng: random.Random) -> str:
    """Return `length` characters drawn from the charset of `category`.

    Raises ValueError for anything that is not one of the five generation
    categories; callers are expected to have validated the request first.
    """
    category = Category(category)
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"length must be a positive integer, got {length!r}")
    return _BUILDERS[category](length, rng)
