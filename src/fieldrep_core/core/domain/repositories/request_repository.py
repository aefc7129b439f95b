from abc import ABC, abstractmethod

from fieldrep_core.core.domain.constants import CollectionKind
from fieldrep_core.core.domain.entities.product_entity import ProductEntity
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord


class RequestRepository(ABC):
    @abstractmethod
    async def fetch_for_owner(self, kind: CollectionKind, owner_id: str) -> list[OwnedRecord]:
        """Records of `kind` owned by `owner_id`, in the collection's display order:
        orders and utilities newest first, doctors by name."""
        ...

    @abstractmethod
    async def create(self, kind: CollectionKind, record: OwnedRecord) -> OwnedRecord:
        """Stores the record and returns a copy carrying the generated id."""
        ...

    @abstractmethod
    async def fetch_catalog(self) -> list[ProductEntity]:
        """Read-only product catalog."""
        ...
