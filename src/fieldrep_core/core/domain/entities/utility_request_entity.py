from dataclasses import dataclass
from typing import ClassVar

from fieldrep_core.core.domain.entities.request_entity import RequestEntity


@dataclass(slots=True, kw_only=True)
class UtilityRequestEntity(RequestEntity):
    DOCUMENT_KEYS: ClassVar[dict[str, str]] = {"owner_id": "userId", "utility_type": "type"}

    utility_type: str
    location: str
    title: str = ""
    description: str = ""
    remarks: str = ""
