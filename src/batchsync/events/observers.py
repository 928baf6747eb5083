"""Observer that mirrors transfer progress into a standard library logger."""

from __future__ import annotations

import logging

from batchsync.events.args import ProgressEvent
from batchsync.events.ids import EventId
from batchsync.events.interceptors import Interceptors, Unsubscribe

_LOG = logging.getLogger("batchsync.progress")


def attach_logging(
    interceptors: Interceptors,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> list[Unsubscribe]:
    """Log ``event.message`` for every protocol event.

    Returns the unsubscribe callables, one per event kind.
    """
    target = logger or _LOG

    def log_event(event: ProgressEvent) -> None:
        target.log(
            level,
            "%s %s",
            event.source,
            event.message,
            extra={
                "event_id": int(event.event_id),
                "event_name": event.event_id.label,
                "source": event.source,
                "session_id": str(event.context.session_id),
            },
        )

    return [interceptors.register(event_id, log_event) for event_id in EventId]
