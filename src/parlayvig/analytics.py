"""Analytics hook for presentation events (slip copied, slip downloaded, ...)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

EventSink = Callable[[str, dict[str, Any]], None]

_sinks: list[EventSink] = []


def register_sink(sink: EventSink) -> None:
    _sinks.append(sink)


def clear_sinks() -> None:
    _sinks.clear()


def track_event(name: str, **properties: Any) -> None:
    """Log the event and forward it to registered sinks; sink errors never propagate."""

    logger.info("event=%s properties=%s", name, properties)
    for sink in list(_sinks):
        try:
            sink(name, properties)
        except Exception as exc:
            logger.error("Analytics sink failed for %s: %s", name, exc)
