"""One-line JSON log events for the responder and requester loops."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict


def stable_json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit `{"event": ..., "ts_ms": ..., **fields}` as a single log line.

    Fields must never include a generated password.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"ts_ms": int(time.time() * 1000), "event": event}
    payload.update(fields)
    try:
        message = stable_json_dumps(payload)
    except (TypeError, ValueError):
        message = " ".join([f"event={event}"] + [f"{key}={fields[key]!r}" for key in sorted(fields)])
    logger.log(level, message)
