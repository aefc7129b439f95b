from __future__ import annotations

import inspect
import time
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

import structlog

from fieldrep_core.core.domain.events.events import DomainEvent
from fieldrep_core.core.domain.services.event_dispatcher import EventDispatcher

# ───────────────────────────────────────────────
# CQRS with duration logging
# ───────────────────────────────────────────────

C = TypeVar('C')  # Command type
Q = TypeVar('Q')  # Query filters type
R = TypeVar('R')  # Query result type

logger = structlog.get_logger(__name__)

# ───────────────────────────────────────────────
# DTOs
# ───────────────────────────────────────────────
@dataclass(frozen=True)
class CommandDTO:
    """Base for every write command."""
    pass

@dataclass(frozen=True)
class QueryDTO:
    """Base for read queries."""
    pass

# ───────────────────────────────────────────────
# Handler protocols
# ───────────────────────────────────────────────
class CommandHandler(Protocol, Generic[C]):
    async def handle(self, command: C) -> Any:
        """Processes a command and applies state changes."""
        ...

class QueryHandler(Protocol, Generic[Q, R]):
    async def handle(self, query: Q) -> R:
        """Processes a query and returns a result."""
        ...

# ───────────────────────────────────────────────
# Buses
# ───────────────────────────────────────────────
async def _run(handler: Any, message: Any) -> Any:
    result = handler.handle(message)
    if inspect.isawaitable(result):
        result = await result
    return result


class CommandBus:
    """Command dispatcher with duration logging."""
    def __init__(self) -> None:
        self._handlers: dict[type, CommandHandler] = {}

    def register(self, command_type: type[C], handler: CommandHandler[C]) -> None:
        self._handlers[command_type] = handler
        logger.debug("command.registered", command=command_type.__name__)

    async def dispatch(self, command: Any) -> Any:
        handler = self._handlers.get(type(command))
        if not handler:
            raise ValueError(f"No handler for command: {type(command).__name__}")
        start = time.perf_counter()
        logger.info("command.start", command=type(command).__name__)
        result = await _run(handler, command)
        elapsed = time.perf_counter() - start
        logger.info("command.done", command=type(command).__name__, duration=f"{elapsed:.3f}s")
        return result

class QueryBus:
    """Query dispatcher with duration logging."""
    def __init__(self) -> None:
        self._handlers: dict[type, QueryHandler] = {}

    def register(self, query_type: type[QueryDTO], handler: QueryHandler[Any, Any]) -> None:
        self._handlers[query_type] = handler
        logger.debug("query.registered", query=query_type.__name__)

    async def dispatch(self, query: QueryDTO) -> Any:
        handler = self._handlers.get(type(query))
        if not handler:
            raise ValueError(f"No handler for query: {type(query).__name__}")
        start = time.perf_counter()
        logger.info("query.start", query=type(query).__name__)
        result = await _run(handler, query)
        elapsed = time.perf_counter() - start
        logger.info("query.done", query=type(query).__name__, duration=f"{elapsed:.3f}s")
        return result


class CommandBusImpl(CommandBus):
    """Forwards domain events returned by handlers to the dispatcher."""
    def __init__(self, dispatcher: EventDispatcher):
        super().__init__()
        self.dispatcher = dispatcher

    async def dispatch(self, command: Any) -> Any:
        result = await super().dispatch(command)

        if isinstance(result, DomainEvent):
            await self.dispatcher.dispatch(result)
        elif isinstance(result, list | tuple):
            for evt in result:
                if isinstance(evt, DomainEvent):
                    await self.dispatcher.dispatch(evt)

        return result

class QueryBusImpl(QueryBus):
    pass
