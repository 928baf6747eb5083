"""Observer registry for transfer progress events.

Handlers are registered per :class:`~batchsync.events.ids.EventId`. A handler
may be a plain callable or a coroutine function; :meth:`Interceptors.dispatch`
awaits whatever a handler returns when it is awaitable, so every observer of
one step has finished before the transfer moves on to the next one.

Observers cannot steer the transfer: return values are ignored. A failing
observer is handled by the configured policy:

``"log"`` (default)
    the exception is logged and dispatch continues with the next handler.
``"raise"``
    an :class:`~batchsync.contracts.exceptions.ObserverError` is raised, which
    aborts the transfer in progress.

``asyncio.CancelledError`` is never intercepted.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from batchsync.contracts.config import ObserverErrorPolicy
from batchsync.contracts.exceptions import ObserverError
from batchsync.events.args import ProgressEvent
from batchsync.events.ids import EventId

_LOG = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None] | None]
Unsubscribe = Callable[[], None]


class Interceptors:
    def __init__(
        self,
        *,
        observer_timeout: float | None = None,
        observer_errors: ObserverErrorPolicy = "log",
    ) -> None:
        if observer_errors not in ("log", "raise"):
            raise ValueError("observer_errors must be one of: log, raise")
        self._observer_timeout = observer_timeout
        self._observer_errors = observer_errors
        self._handlers: dict[EventId, list[Handler]] = {}

    def register(self, event_id: EventId, handler: Handler) -> Unsubscribe:
        """Subscribe *handler* to *event_id*; returns a callable that removes it."""
        if not callable(handler):
            raise TypeError("handler must be callable")
        handlers = self._handlers.setdefault(EventId(event_id), [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def handlers(self, event_id: EventId) -> tuple[Handler, ...]:
        return tuple(self._handlers.get(EventId(event_id), ()))

    def clear(self, event_id: EventId | None = None) -> None:
        if event_id is None:
            self._handlers.clear()
        else:
            self._handlers.pop(EventId(event_id), None)

    def __len__(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())

    async def dispatch(self, event: ProgressEvent) -> None:
        # Copy so a handler unsubscribing itself does not skip its neighbour.
        for handler in list(self._handlers.get(event.event_id, ())):
            try:
                await self._invoke(handler, event)
            except Exception as exc:
                if self._observer_errors == "raise":
                    raise ObserverError(
                        f"observer {_handler_name(handler)} failed on {event.event_id.label}: {exc}",
                        event_id=int(event.event_id),
                    ) from exc
                _LOG.exception("Observer %s failed on %s", _handler_name(handler), event.event_id.label)

    async def _invoke(self, handler: Handler, event: ProgressEvent) -> None:
        if self._observer_timeout is None:
            result = handler(event)
            if inspect.isawaitable(result):
                await result
            return

        async with asyncio.timeout(self._observer_timeout):
            result = handler(event)
            if inspect.isawaitable(result):
                await result


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
