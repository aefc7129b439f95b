from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class StoredDocument:
    id: str
    data: dict[str, Any]


class DocumentStore(ABC):
    """
    Minimal surface of the remote document store used by the core:
    equality-filtered, single-field-ordered reads and inserts.
    No updates or deletes are ever issued.
    """

    @abstractmethod
    async def query(
        self,
        collection: str,
        *,
        where: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[StoredDocument]:
        """Documents matching every `where` equality, sorted by `order_by`."""
        ...

    @abstractmethod
    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        """Inserts `data` and returns the generated document id."""
        ...
