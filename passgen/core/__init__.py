from passgen.core.generator import AMBIGUOUS, CHARSETS, generate_password, make_rng
from passgen.core.validation import (
    check_request,
    is_control,
    keep_generating,
    length_in_range,
    parse_length,
    type_allowed,
)

__all__ = [
    "AMBIGUOUS",
    "CHARSETS",
    "check_request",
    "generate_password",
    "is_control",
    "keep_generating",
    "length_in_range",
    "make_rng",
    "parse_length",
    "type_allowed",
]
