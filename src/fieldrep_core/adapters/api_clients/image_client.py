from __future__ import annotations

from urllib.parse import urlsplit

import httpx
import structlog

from fieldrep_core.core.domain.events.exceptions import RemoteError


class ImageClient:
    """
    Fetches visual aid images for the gallery.
    Caching and headers belong to the delivery side; no retries here.
    """

    def __init__(self, *, timeout: float = 15.0, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.log = structlog.get_logger(__name__).bind(component="ImageClient")
        self.client = httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __call__(self, url: str) -> bytes:
        return await self.fetch(url)

    async def fetch(self, url: str) -> bytes:
        host = urlsplit(url).netloc or "image"
        try:
            resp = await self.client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self.log.warning("image.fetch_failed", url=url, status_code=exc.response.status_code)
            raise RemoteError("image", host, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            self.log.warning("image.fetch_failed", url=url, error=str(exc))
            raise RemoteError("image", host, str(exc)) from exc
        self.log.debug("image.fetched", url=url, size=len(resp.content))
        return resp.content
