
"""Request, response and outcome models."""

from typing import Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr

from passgen.protocol.constants import BUFFER_SIZE, MAX_PASSWORD_LENGTH


class PasswordRequest(BaseModel):
    """Raw request as carried on the wire.

    Neither field is checked against the allowed categories or length range
    here; that is the validator's job, so a malformed request still fits the
    model and can be rejected as an ordinary result.
    """

    category: StrictStr = Field(min_length=1, max_length=1)
    length: StrictStr = Field(default="", max_length=BUFFER_SIZE - 1)

    class Config:
        extra = "forbid"


class PasswordResponse(BaseModel):
    """Generated password. An empty password means the request was refused."""

    password: StrictStr = Field(default="", max_length=MAX_PASSWORD_LENGTH)

    class Config:
        extra = "forbid"


class Outcome(BaseModel):
    """Stable result envelope returned by the responder and the requester."""

    ok: StrictBool
    code: StrictStr
    message: StrictStr
    password: Optional[StrictStr] = None
    category: Optional[StrictStr] = None
    length: Optional[StrictStr] = None

    class Config:
        extra = "forbid"
