from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping
from typing import Any

import structlog

from fieldrep_core.adapters.document_store.base import DocumentStore, StoredDocument

logger = structlog.get_logger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """
    Process-local store with the same query semantics as the remote one.
    Used for local runs and tests; documents are deep-copied in and out.
    """

    def __init__(self, seed: Mapping[str, list[Mapping[str, Any]]] | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        for collection, docs in (seed or {}).items():
            for doc in docs:
                doc = dict(doc)
                doc_id = str(doc.pop("id", "") or uuid.uuid4().hex)
                self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(doc)

    async def query(
        self,
        collection: str,
        *,
        where: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[StoredDocument]:
        docs = [
            StoredDocument(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(collection, {}).items()
            if all(data.get(k) == v for k, v in (where or {}).items())
        ]
        if order_by:
            # documents without the field go last, like the remote store
            present = [d for d in docs if d.data.get(order_by) is not None]
            missing = [d for d in docs if d.data.get(order_by) is None]
            present.sort(key=lambda d: d.data[order_by], reverse=descending)
            docs = present + missing
        logger.debug("store.query", collection=collection, where=dict(where or {}), order_by=order_by, hits=len(docs))
        return docs

    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(data))
        logger.debug("store.add", collection=collection, id=doc_id)
        return doc_id
