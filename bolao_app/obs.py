"""Structured events for pool checks.

Events are plain dictionaries handed to a ``log`` callable. ``logger_sink``
turns such a callable into ``logging`` records tagged with the current
correlation id.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

_CORRELATION_ID: ContextVar[str | None] = ContextVar("correlation_id", default=None)

LogEvent = Callable[[dict[str, Any]], None]


def get_correlation_id() -> str | None:
    return _CORRELATION_ID.get()


@contextmanager
def correlation_scope(value: str) -> Iterator[str]:
    """Tag every event emitted inside the block with ``value``."""

    token = _CORRELATION_ID.set(value)
    try:
        yield value
    finally:
        _CORRELATION_ID.reset(token)


def logger_sink(logger: logging.Logger, level: int = logging.INFO) -> LogEvent:
    """Build a ``log_event`` callable that writes events to ``logger``."""

    def _log(payload: dict[str, Any]) -> None:
        correlation_id = get_correlation_id()
        if correlation_id and "correlation_id" not in payload:
            payload = {**payload, "correlation_id": correlation_id}
        logger.log(level, "%s", payload)

    return _log


@contextmanager
def span(
    name: str,
    log: LogEvent,
    *,
    attrs: Mapping[str, Any] | None = None,
) -> Iterator[None]:
    """Emit ``span_start`` and ``span_end`` events around the block.

    ``span_end`` carries the elapsed milliseconds and whether the block
    finished (``ok``) or raised (``error``).
    """

    start = time.monotonic()
    payload: dict[str, Any] = {"event": "span_start", "name": name}
    if attrs:
        payload["attrs"] = dict(attrs)
    log(payload)
    status = "error"
    try:
        yield
        status = "ok"
    finally:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        log({"event": "span_end", "name": name, "status": status, "ms": elapsed_ms})


def metric(
    name: str,
    log: LogEvent,
    *,
    kind: str = "counter",
    value: int | float = 1,
    tags: Mapping[str, Any] | None = None,
) -> None:
    """Emit a simple metric event via the structured log stream."""

    payload: dict[str, Any] = {"event": "metric", "name": name, "kind": kind, "value": value}
    if tags:
        payload["tags"] = dict(tags)
    log(payload)
