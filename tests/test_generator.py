from __future__ import annotations

import random

import pytest

from passgen.core.generator import AMBIGUOUS, CHARSETS, generate_password, make_rng
from passgen.protocol.codes import Category


def test_every_category_and_length_stays_in_its_charset():
    rng = random.Random(1234)
    for category in Category:
        for length in range(6, 33):
            password = generate_password(category, length, rng)
            assert len(password) == length
            assert set(password) <= set(CHARSETS[category])


def test_plain_codes_are_accepted():
    rng = random.Random(7)
    assert set(generate_password("n", 12, rng)) <= set("0123456789")
    assert set(generate_password("a", 12, rng)) <= set("abcdefghijklmnopqrstuvwxyz")


def test_unambiguous_never_contains_lookalikes():
    rng = random.Random(99)
    excluded = set("0Oo1lIi2Zz5Ss8B")
    assert AMBIGUOUS == excluded
    for _ in range(200):
        assert not set(generate_password(Category.UNAMBIGUOUS, 32, rng)) & excluded


def test_unambiguous_charset_is_secure_minus_lookalikes():
    assert set(CHARSETS[Category.UNAMBIGUOUS]) == set(CHARSETS[Category.SECURE]) - AMBIGUOUS
    assert "!" in CHARSETS[Category.UNAMBIGUOUS]
    assert "L" in CHARSETS[Category.UNAMBIGUOUS]


def test_secure_charset_includes_symbols_and_both_cases():
    charset = CHARSETS[Category.SECURE]
    assert len(charset) == 26 + 26 + 10 + 10
    for char in "aZ09!)":
        assert char in charset


def test_mixed_draws_letters_and_digits():
    password = generate_password(Category.MIXED, 32 * 20, random.Random(5))
    assert any(char.isdigit() for char in password)
    assert any(char.isalpha() for char in password)
    assert set(password) <= set(CHARSETS[Category.MIXED])


def test_same_seed_gives_same_password():
    first = generate_password(Category.SECURE, 16, make_rng(42))
    second = generate_password(Category.SECURE, 16, make_rng(42))
    assert first == second


def test_unseeded_rng_uses_system_entropy():
    assert isinstance(make_rng(), random.SystemRandom)
    assert len(generate_password(Category.NUMERIC, 8, make_rng())) == 8


@pytest.mark.parametrize("category", ["x", "N", "h", "q", "", "nn"])
def test_unknown_category_fails_loudly(category):
    with pytest.raises(ValueError):
        generate_password(category, 8, random.Random(0))


@pytest.mark.parametrize("length", [0, -1, True, "8"])
def test_bad_length_fails_loudly(length):
    with pytest.raises(ValueError):
        generate_password(Category.NUMERIC, length, random.Random(0))
