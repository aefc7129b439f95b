import asyncio
from unittest import IsolatedAsyncioTestCase, TestCase

from fieldrep_core.core.application.services.visual_aid_gallery import (
    GalleryPhase,
    VisualAidGallery,
    high_quality_url,
    media_type,
)
from fieldrep_core.core.domain.events.exceptions import RemoteError

AIDS = [
    "https://cdn.pharmaco.in/aids/a.jpg?w=800&quality=60",
    "https://cdn.pharmaco.in/aids/b.png?q=40",
    "https://cdn.pharmaco.in/aids/c.pdf",
]


class SwipeTests(TestCase):
    def setUp(self):
        self.settles = []
        self.gallery = VisualAidGallery(AIDS, 400, initial_index=1, on_settle=self.settles.append)

    def _swipe(self, dx):
        self.gallery.drag_start()
        self.gallery.drag_move(dx)
        index = self.gallery.drag_release()
        self.gallery.settle_complete()
        return index

    def test_left_swipe_past_threshold_goes_forward(self):
        self.assertEqual(self._swipe(-0.3 * 400), 2)
        self.assertEqual(self.gallery.position_label, "3 / 3")

    def test_swipe_past_last_image_stays(self):
        self._swipe(-120)
        self.assertEqual(self._swipe(-120), 2)

    def test_right_swipe_goes_back(self):
        self.assertEqual(self._swipe(120), 0)
        self.assertEqual(self._swipe(120), 0)

    def test_short_drag_snaps_back(self):
        self.assertEqual(self._swipe(-80), 1)
        self.assertEqual(self._swipe(79), 1)

    def test_release_settles_then_idles(self):
        self.gallery.drag_start()
        self.gallery.drag_move(-50)
        self.assertEqual(self.gallery.phase, GalleryPhase.DRAGGING)

        self.gallery.drag_release()

        self.assertEqual(self.gallery.phase, GalleryPhase.SETTLING)
        self.assertEqual(self.settles, [-50.0])
        self.gallery.settle_complete()
        self.assertEqual(self.gallery.phase, GalleryPhase.IDLE)
        self.assertEqual(self.gallery.offset, 0.0)

    def test_drag_during_settle_interrupts_it(self):
        self.gallery.drag_start()
        self.gallery.drag_release(-200)
        self.gallery.drag_start()
        self.assertEqual(self.gallery.phase, GalleryPhase.DRAGGING)
        self.assertEqual(self.gallery.offset, 0.0)

    def test_cancel_never_pages(self):
        self.gallery.drag_start()
        self.gallery.drag_move(-300)
        self.gallery.drag_cancel()
        self.assertEqual(self.gallery.index, 1)
        self.assertEqual(self.gallery.phase, GalleryPhase.SETTLING)

    def test_threshold_follows_resize(self):
        self.gallery.resize(1000)
        self.assertEqual(self._swipe(-150), 1)
        self.assertEqual(self._swipe(-201), 2)

    def test_buttons_respect_bounds(self):
        self.assertTrue(self.gallery.next())
        self.assertFalse(self.gallery.next())
        self.assertFalse(self.gallery.can_go_next)
        self.assertTrue(self.gallery.previous())
        self.assertTrue(self.gallery.previous())
        self.assertFalse(self.gallery.previous())

    def test_empty_gallery_is_inert(self):
        gallery = VisualAidGallery([], 400)
        gallery.drag_start()
        self.assertEqual(gallery.phase, GalleryPhase.IDLE)
        self.assertEqual(gallery.drag_release(-300), 0)
        self.assertFalse(gallery.enabled)
        self.assertIsNone(gallery.current_url)
        self.assertEqual(gallery.position_label, "")

    def test_initial_index_is_clamped(self):
        self.assertEqual(VisualAidGallery(AIDS, 400, initial_index=9).index, 2)

    def test_shrinking_the_list_clamps_index(self):
        self.gallery.next()
        self.gallery.set_visual_aids(AIDS[:1])
        self.assertEqual(self.gallery.index, 0)


class UrlTests(TestCase):
    def test_quality_raised_to_max(self):
        self.assertEqual(high_quality_url(AIDS[0]), "https://cdn.pharmaco.in/aids/a.jpg?w=800&quality=100")
        self.assertEqual(high_quality_url(AIDS[1], 90), "https://cdn.pharmaco.in/aids/b.png?q=90")

    def test_other_parameters_untouched(self):
        url = "https://cdn.pharmaco.in/aids/a.jpg?freq=20&seq=3"
        self.assertEqual(high_quality_url(url), url)

    def test_media_type(self):
        self.assertEqual(media_type(AIDS[0]), "image")
        self.assertEqual(media_type(AIDS[2]), "pdf")
        self.assertEqual(media_type("data:image/png;base64,AAAA"), "image")
        self.assertIsNone(media_type("https://cdn.pharmaco.in/aids/blob"))


class LoadingTests(IsolatedAsyncioTestCase):
    async def test_load_marks_displayed_url(self):
        requested = []

        async def loader(url):
            requested.append(url)
            return b"img"

        gallery = VisualAidGallery(AIDS, 400, image_loader=loader)
        self.assertTrue(gallery.loading)

        self.assertTrue(await gallery.load_current())

        self.assertFalse(gallery.loading)
        self.assertEqual(gallery.displayed_url, high_quality_url(AIDS[0]))
        self.assertEqual(requested, [high_quality_url(AIDS[0])])

    async def test_load_error_keeps_index_and_allows_retry(self):
        attempts = []

        async def loader(url):
            attempts.append(url)
            if len(attempts) == 1:
                raise RemoteError("image", "cdn.pharmaco.in", "HTTP 404")
            return b"img"

        gallery = VisualAidGallery(AIDS, 400, initial_index=1, image_loader=loader)

        self.assertFalse(await gallery.load_current())
        self.assertTrue(gallery.load_failed)
        self.assertFalse(gallery.loading)
        self.assertEqual(gallery.index, 1)

        self.assertTrue(await gallery.retry_load())
        self.assertFalse(gallery.load_failed)

    async def test_result_for_previous_index_is_ignored(self):
        gate = asyncio.Event()

        async def loader(url):
            await gate.wait()
            return b"img"

        gallery = VisualAidGallery(AIDS, 400, image_loader=loader)
        pending = asyncio.create_task(gallery.load_current())
        await asyncio.sleep(0)
        gallery.next()
        gate.set()

        self.assertFalse(await pending)
        self.assertIsNone(gallery.displayed_url)
        self.assertTrue(gallery.loading)
