from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from fieldrep_core.core.domain.entities.request_entity import OwnedRecord


@dataclass(slots=True, kw_only=True)
class DoctorEntryEntity(OwnedRecord):
    DOCUMENT_KEYS: ClassVar[dict[str, str]] = {"owner_id": "userId", "entry_type": "type"}

    name: str
    entry_type: str
    mr_name: str
    phone: str
    address: str
    city: str
    # only doctors carry one; enforced when the draft is validated
    speciality: str = ""
    hospital: str = ""
    email: str | None = None
    remarks: str = ""
    # gallery order; duplicates are legitimate
    visual_aids: list[str] = field(default_factory=list)
    updated_at: datetime | None = None
