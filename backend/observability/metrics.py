"""
Timing helpers for observability.

- Durations use monotonic time (immune to clock changes)
- One metric = one log event, never aggregated
- The `timed()` context manager always emits, even if the block raises
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from observability.logger import log_event


@contextmanager
def timed(
    name: str,
    *,
    details: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Measure the duration of the enclosed block and emit METRIC_TIMER.

    Yields the details dict so the block can attach results
    (e.g. output sizes) before the metric is emitted.

    Usage:
        with timed("utf16_to_utf8", details={"src": path}) as d:
            out = utf16_to_utf8(units)
            d["out_len"] = len(out)
    """
    collected: dict[str, Any] = dict(details or {})
    start_ns = time.monotonic_ns()
    failed = False
    try:
        yield collected
    except BaseException:
        failed = True
        raise
    finally:
        duration_us = (time.monotonic_ns() - start_ns) // 1_000
        log_event({
            "event_type": "METRIC_TIMER",
            "metric": name,
            "value_us": duration_us,
            "failed": failed,
            "details": collected,
        })
