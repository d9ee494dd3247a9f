"""
JSONL event logger.

- One JSON object per line on stdout
- No buffering, no batching
- Level-filtered; disabled entirely when JSON logs are switched off
- Used by the CLI layer only; the codec package never logs
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable, Mapping

_LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

_print: Callable[[str], None] = _stdout_print

_enabled: bool = True
_threshold: int = _LEVELS["INFO"]


def configure(*, enabled: bool, level: str = "INFO") -> None:
    """
    Apply AppConfig logging settings.

    Unknown level names fall back to INFO.
    """
    global _enabled, _threshold
    _enabled = enabled
    _threshold = _LEVELS.get(level.upper(), _LEVELS["INFO"])


def log_event(event: Mapping[str, Any], *, level: str = "INFO") -> None:
    """
    Write a single JSONL event to stdout.

    Adds `ts_ms` and `level` when the caller did not supply them.
    Never raises.
    """
    if not _enabled or _LEVELS.get(level, _LEVELS["INFO"]) < _threshold:
        return

    record: dict[str, Any] = {"ts_ms": int(time.time() * 1000), "level": level}
    record.update(event)

    try:
        line = json.dumps(record, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Logging must never break a conversion run
        fallback: dict[str, Any] = {
            "ts_ms": record.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
