import time
from collections.abc import Mapping
from dataclasses import replace

import structlog
from pydantic import ValidationError

from fieldrep_core.adapters.document_store.base import DocumentStore, StoredDocument
from fieldrep_core.adapters.observability.metrics import STORE_CALL_DURATION
from fieldrep_core.core.domain.constants import CollectionKind
from fieldrep_core.core.domain.entities.doctor_entry_entity import DoctorEntryEntity
from fieldrep_core.core.domain.entities.order_request_entity import OrderRequestEntity
from fieldrep_core.core.domain.entities.product_entity import ProductEntity
from fieldrep_core.core.domain.entities.request_entity import OwnedRecord
from fieldrep_core.core.domain.entities.utility_request_entity import UtilityRequestEntity
from fieldrep_core.core.domain.repositories.request_repository import RequestRepository

logger = structlog.get_logger(__name__)

ENTITY_BY_KIND: dict[CollectionKind, type[OwnedRecord]] = {
    CollectionKind.ORDERS: OrderRequestEntity,
    CollectionKind.DOCTORS: DoctorEntryEntity,
    CollectionKind.UTILITIES: UtilityRequestEntity,
}

# (document field, descending)
ORDERING: dict[CollectionKind, tuple[str, bool]] = {
    CollectionKind.ORDERS: ("createdAt", True),
    CollectionKind.UTILITIES: ("createdAt", True),
    CollectionKind.DOCTORS: ("name", False),
}

OWNER_FIELD = OwnedRecord.DOCUMENT_KEYS["owner_id"]


def _to_entities(entity_cls: type, collection: str, docs: list[StoredDocument]) -> list:
    """Documents the entity cannot be built from are logged and left out of the result."""
    entities = []
    for doc in docs:
        try:
            entities.append(entity_cls.from_document(doc.id, doc.data))
        except ValidationError as exc:
            logger.warning(
                "store.malformed_document_skipped",
                collection=collection,
                id=doc.id,
                fields=sorted({str(e["loc"][0]) for e in exc.errors() if e["loc"]}),
            )
    return entities


class RequestRepoImpl(RequestRepository):
    def __init__(self, store: DocumentStore, collections: Mapping[CollectionKind, str]):
        self.store = store
        self.collections = dict(collections)

    def _collection(self, kind: CollectionKind) -> str:
        return self.collections.get(kind, kind.value)

    async def fetch_for_owner(self, kind: CollectionKind, owner_id: str) -> list[OwnedRecord]:
        entity_cls = ENTITY_BY_KIND[kind]
        order_by, descending = ORDERING[kind]
        collection = self._collection(kind)

        start = time.perf_counter()
        try:
            docs = await self.store.query(
                collection,
                where={OWNER_FIELD: owner_id},
                order_by=order_by,
                descending=descending,
            )
        finally:
            STORE_CALL_DURATION.labels("query", collection).observe(time.perf_counter() - start)

        logger.info("requests.fetched", kind=kind.value, owner_id=owner_id, count=len(docs))
        return _to_entities(entity_cls, collection, docs)

    async def create(self, kind: CollectionKind, record: OwnedRecord) -> OwnedRecord:
        collection = self._collection(kind)
        start = time.perf_counter()
        try:
            doc_id = await self.store.add(collection, record.to_document())
        finally:
            STORE_CALL_DURATION.labels("add", collection).observe(time.perf_counter() - start)
        return replace(record, id=doc_id)

    async def fetch_catalog(self) -> list[ProductEntity]:
        collection = self._collection(CollectionKind.PRODUCTS)
        start = time.perf_counter()
        try:
            docs = await self.store.query(collection)
        finally:
            STORE_CALL_DURATION.labels("query", collection).observe(time.perf_counter() - start)
        return _to_entities(ProductEntity, collection, docs)
