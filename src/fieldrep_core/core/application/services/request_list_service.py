from __future__ import annotations

import itertools

import structlog

from fieldrep_core.adapters.notifiers.base import BaseNotifier
from fieldrep_core.core.application.cqrs import QueryBus
from fieldrep_core.core.application.queries.request_queries import ListOwnerRequestsQuery
from fieldrep_core.core.domain.constants import CollectionKind
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord
from fieldrep_core.core.domain.entities.session_entity import SessionEntity, require_owner
from fieldrep_core.core.domain.events.events import RequestSubmittedEvent
from fieldrep_core.core.domain.events.exceptions import IdentityMissingError, RemoteError
from fieldrep_core.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)


class RequestListService:
    """
    Backing state of a "my requests" list for one collection.

    Overlapping refreshes are not cancelled. Each one takes a sequence
    number and its response is only applied if nothing newer has been
    applied already, so a slow early fetch cannot overwrite a later one.
    """

    def __init__(
        self,
        query_bus: QueryBus,
        kind: CollectionKind,
        session: SessionEntity | None,
        notifier: BaseNotifier,
    ) -> None:
        self.queries = query_bus
        self.kind = kind
        self.session = session
        self.notifier = notifier
        self.items: list[OwnedRecord] = []
        self._seq = itertools.count(1)
        self._applied_seq = 0
        self._in_flight = 0
        self.log = logger.bind(list=kind.value)

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def attach(self, dispatcher: EventDispatcher) -> None:
        dispatcher.subscribe(RequestSubmittedEvent, self.on_request_submitted)

    def detach(self, dispatcher: EventDispatcher) -> None:
        dispatcher.unsubscribe(RequestSubmittedEvent, self.on_request_submitted)

    async def on_request_submitted(self, event: RequestSubmittedEvent) -> None:
        if event.kind != self.kind or self.session is None or event.owner_id != self.session.owner_id:
            return
        await self.refresh()

    async def refresh(self) -> list[OwnedRecord]:
        try:
            owner_id = require_owner(self.session)
        except IdentityMissingError:
            self.log.warning("list.identity_missing")
            return self.items

        seq = next(self._seq)
        self._in_flight += 1
        try:
            records = await self.queries.dispatch(ListOwnerRequestsQuery(kind=self.kind, owner_id=owner_id))
        except RemoteError as exc:
            self.log.error("list.fetch_failed", seq=seq, error=str(exc))
            self.notifier.alert("Error", f"Error fetching {self.kind.value}. Please try again.")
            return self.items
        finally:
            self._in_flight -= 1

        if seq < self._applied_seq:
            self.log.info("list.stale_response_dropped", seq=seq, applied_seq=self._applied_seq)
            return self.items
        self._applied_seq = seq
        self.items = list(records)
        self.log.debug("list.refreshed", seq=seq, count=len(self.items))
        return self.items
