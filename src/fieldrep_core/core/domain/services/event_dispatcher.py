import inspect
from collections.abc import Awaitable, Callable

import structlog

from fieldrep_core.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)

Listener = Callable[[DomainEvent], Awaitable[None] | None]


class EventDispatcher:
    """
    Domain event dispatcher.

    Listeners may be plain callables or coroutine functions; coroutine
    listeners are awaited in subscription order. A failing listener is
    logged and does not stop the others.
    """
    def __init__(self) -> None:
        self._subs: dict[type[DomainEvent], list[Listener]] = {}

    def subscribe(self, event_type: type[DomainEvent], handler: Listener) -> None:
        self._subs.setdefault(event_type, []).append(handler)
        handler_name = getattr(handler, '__name__', handler.__class__.__name__)
        logger.debug(
            "event.subscribed",
            event_type=event_type.__name__,
            handler_name=handler_name,
        )

    def unsubscribe(self, event_type: type[DomainEvent], handler: Listener) -> None:
        handlers = self._subs.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    async def dispatch(self, event: DomainEvent) -> None:
        handlers = list(self._subs.get(type(event), []))
        logger.info(
            "event.dispatch",
            event_name=type(event).__name__,
            listeners=len(handlers),
        )
        for h in handlers:
            try:
                result = h(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                handler_name = getattr(h, '__name__', h.__class__.__name__)
                logger.error(
                    "event.handler_error",
                    event_name=type(event).__name__,
                    handler_name=handler_name,
                    error=str(e),
                    exc_info=True,
                )
