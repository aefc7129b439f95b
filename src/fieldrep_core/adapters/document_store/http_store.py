from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from fieldrep_core.adapters.document_store.base import DocumentStore, StoredDocument
from fieldrep_core.core.domain.events.exceptions import RemoteError


class _DocumentPayload(BaseModel):
    id: str
    data: dict[str, Any]


class _QueryResponse(BaseModel):
    documents: list[_DocumentPayload] = []


class _CreateResponse(BaseModel):
    id: str


class HttpDocumentStore(DocumentStore):
    """
    REST document store client:
      • one async httpx client per store
      • configurable timeout, bearer API key
      • NO retries: every failure surfaces as RemoteError
      • responses validated with pydantic
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.log = structlog.get_logger(__name__).bind(component="HttpDocumentStore")
        self.base_url = base_url.rstrip("/")
        headers = {"accept": "application/json"}
        if api_key:
            headers["authorization"] = f"Bearer {api_key}"

        self.log.debug("Configuring client", base_url=self.base_url, timeout=timeout)
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    # ---------------------------------------------------------------------- utils -----
    @staticmethod
    def _query_params(
        where: Mapping[str, Any] | None, order_by: str | None, descending: bool
    ) -> dict[str, str]:
        params = {f"where.{k}": str(to_jsonable_python(v)) for k, v in (where or {}).items()}
        if order_by:
            params["orderBy"] = order_by
            params["direction"] = "desc" if descending else "asc"
        return params

    async def _send(self, operation: str, collection: str, request: httpx.Request) -> httpx.Response:
        log = self.log.bind(operation=operation, collection=collection, url=str(request.url))
        log.debug("Sending request")
        try:
            resp = await self.client.send(request)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.error("store.request_failed", status_code=exc.response.status_code)
            raise RemoteError(operation, collection, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            log.error("store.request_failed", error=str(exc))
            raise RemoteError(operation, collection, str(exc)) from exc
        log.debug("Response received", status_code=resp.status_code)
        return resp

    # ---------------------------------------------------------------------- API -------
    async def query(
        self,
        collection: str,
        *,
        where: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[StoredDocument]:
        request = self.client.build_request(
            "GET",
            f"/collections/{collection}/documents",
            params=self._query_params(where, order_by, descending),
        )
        resp = await self._send("query", collection, request)
        try:
            payload = _QueryResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteError("query", collection, f"malformed response: {exc}") from exc
        return [StoredDocument(id=d.id, data=d.data) for d in payload.documents]

    async def add(self, collection: str, data: Mapping[str, Any]) -> str:
        request = self.client.build_request(
            "POST",
            f"/collections/{collection}/documents",
            json=to_jsonable_python(dict(data)),
        )
        resp = await self._send("add", collection, request)
        try:
            return _CreateResponse.model_validate(resp.json()).id
        except (ValueError, ValidationError) as exc:
            raise RemoteError("add", collection, f"malformed response: {exc}") from exc
