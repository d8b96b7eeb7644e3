"""Runtime settings: defaults < config.toml < PASSGEN_* environment < CLI flags."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, model_validator

from passgen.protocol.constants import (
    DEFAULT_HOST,
    DEFAULT_LENGTH,
    DEFAULT_PORT,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)


logger = logging.getLogger(__name__)

ENV_PREFIX = "PASSGEN_"
ENV_KEYS = ("host", "port", "timeout", "seed")


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: StrictStr = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    timeout: Optional[float] = Field(default=None, gt=0)
    seed: Optional[int] = None
    min_length: int = Field(default=MIN_PASSWORD_LENGTH, ge=MIN_PASSWORD_LENGTH)
    max_length: int = Field(default=MAX_PASSWORD_LENGTH, le=MAX_PASSWORD_LENGTH)
    default_length: int = Field(default=int(DEFAULT_LENGTH), ge=1)

    @model_validator(mode="after")
    def _check_range(self) -> "Settings":
        if self.min_length > self.max_length:
            raise ValueError("min_length must not exceed max_length")
        if not self.min_length <= self.default_length <= self.max_length:
            raise ValueError("default_length must lie between min_length and max_length")
        return self

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}

    try:
        config = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config file %s: %s", config_path, exc)
        return {}

    values: Dict[str, Any] = {}
    values.update(config.get("server", {}))
    values.update(config.get("password", {}))
    return values


def _load_env() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key in ENV_KEYS:
        raw = os.environ.get(ENV_PREFIX + key.upper())
        if raw:
            values[key] = raw
    return values


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> Settings:
    """Build Settings from every layer; `None` overrides are ignored.

    Raises ValueError when the merged values are out of range.
    """
    path = Path(config_path or os.environ.get(ENV_PREFIX + "CONFIG") or "config.toml")
    values: Dict[str, Any] = {}
    values.update(_load_config_file(path))
    values.update(_load_env())
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ValueError(f"invalid settings: {exc}") from exc
