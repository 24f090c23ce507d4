from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_iso(ts: Optional[datetime] = None) -> str:
    ts = ts or utc_now()
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    ts = ts.replace(microsecond=0)
    return ts.strftime("%Y-%m-%dT%H:%M:%SZ")


def log_json(logger: logging.Logger, payload: Dict[str, Any], level: int = logging.INFO) -> None:
    """Log one pipeline event as a single compact JSON line."""

    logger.log(level, json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str))


def log_event(
    logger: logging.Logger,
    module: str,
    event: str,
    level: int = logging.INFO,
    now: Optional[datetime] = None,
    **fields: Any,
) -> None:
    payload: Dict[str, Any] = {"module": module, "timestamp": utc_iso(now), "event": event}
    payload.update(fields)
    log_json(logger, payload, level=level)
