from unittest import IsolatedAsyncioTestCase

import httpx

from fieldrep_core.adapters.api_clients.image_client import ImageClient
from fieldrep_core.core.application.services.visual_aid_gallery import VisualAidGallery
from fieldrep_core.core.domain.events.exceptions import RemoteError


def _handler(request):
    if request.url.path.endswith("missing.jpg"):
        return httpx.Response(404)
    return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})


class ImageClientTests(IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.client = ImageClient(transport=httpx.MockTransport(_handler))

    async def asyncTearDown(self):
        await self.client.aclose()

    async def test_fetch_returns_bytes(self):
        self.assertEqual(await self.client.fetch("https://cdn.pharmaco.in/aids/a.png"), b"\x89PNG")

    async def test_http_error_is_remote_error(self):
        with self.assertRaises(RemoteError) as ctx:
            await self.client("https://cdn.pharmaco.in/aids/missing.jpg")
        self.assertEqual(ctx.exception.collection, "cdn.pharmaco.in")

    async def test_gallery_load_failure_through_client(self):
        gallery = VisualAidGallery(
            ["https://cdn.pharmaco.in/aids/a.png", "https://cdn.pharmaco.in/aids/missing.jpg?quality=50"],
            360,
            initial_index=1,
            image_loader=self.client,
        )
        self.assertFalse(await gallery.load_current())
        self.assertTrue(gallery.load_failed)
        self.assertEqual(gallery.index, 1)
