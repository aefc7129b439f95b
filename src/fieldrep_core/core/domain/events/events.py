from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fieldrep_core.core.domain.constants import CollectionKind
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class RequestSubmittedEvent(DomainEvent):
    """A record was stored; list views of the same kind should re-fetch."""
    kind: CollectionKind
    owner_id: str
    record: OwnedRecord
