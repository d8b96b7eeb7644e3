from __future__ import annotations

import pytest

from passgen.core.validation import (
    check_request,
    is_control,
    keep_generating,
    length_in_range,
    parse_length,
    type_allowed,
)
from passgen.protocol.errors import INVALID_CATEGORY, INVALID_LENGTH, OK
from passgen.protocol.models import PasswordRequest


@pytest.mark.parametrize("length", ["", "abc", "5", "33", "-7", " 8", "8 ", "1e1", "¹⁰", "0", "8.0"])
def test_length_rejected(length):
    assert length_in_range(length, 6, 32) is False


@pytest.mark.parametrize("length", ["6", "32", "06", "0000000000012", "8"])
def test_length_accepted(length):
    assert length_in_range(length, 6, 32) is True


def test_huge_digit_string_is_not_parsed_into_range():
    assert length_in_range("999999999999999999999", 6, 32) is False
    # 2**64 + 8 would wrap to 8 in a 64-bit parse.
    assert length_in_range(str(2**64 + 8), 6, 32) is False
    assert parse_length("999999999999999999999", max_digits=2) is None


def test_parse_length_is_bounded():
    assert parse_length("0012", max_digits=2) == 12
    assert parse_length("000", max_digits=2) == 0
    assert parse_length("123", max_digits=2) is None
    assert parse_length("1" * 5000, max_digits=5000) is None
    assert parse_length("x", max_digits=2) is None


def test_type_allowed():
    assert type_allowed("namsu", "x") is False
    assert type_allowed("namsu", "n") is True
    assert type_allowed("namsu", "") is False
    assert type_allowed("namsu", "na") is False


def test_generation_codes_are_case_sensitive():
    assert type_allowed("namsu", "N") is False
    assert type_allowed("namsuq", "Q") is False


def test_control_codes_are_case_insensitive():
    assert is_control("Q", "q") is True
    assert is_control("h", "h") is True
    assert is_control("H", "h") is True
    assert is_control("hq", "h") is False
    assert keep_generating("q") is False
    assert keep_generating("Q") is False
    assert keep_generating("n") is True


def test_check_request_reports_the_first_failure():
    assert check_request(PasswordRequest(category="s", length="12")) == OK
    assert check_request(PasswordRequest(category="Q", length="8")) == INVALID_CATEGORY
    assert check_request(PasswordRequest(category="x", length="abc")) == INVALID_CATEGORY
    assert check_request(PasswordRequest(category="n", length="999999999999999999999")) == INVALID_LENGTH


def test_check_request_honours_custom_limits():
    request = PasswordRequest(category="n", length="10")
    assert check_request(request, min_length=12, max_length=20) == INVALID_LENGTH
    assert check_request(request, allowed="a") == INVALID_CATEGORY
