from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from fieldrep_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True, kw_only=True)
class OwnedRecord(EntityMixin):
    """Anything stored in a per-owner collection."""

    DOCUMENT_KEYS: ClassVar[dict[str, str]] = {"owner_id": "userId"}

    owner_id: str
    id: str | None = None
    created_at: datetime | None = None


@dataclass(slots=True, kw_only=True)
class RequestEntity(OwnedRecord):
    # status is only ever moved out of 'pending' by the approver, never here
    status: str = "pending"
    priority: str = ""

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"
