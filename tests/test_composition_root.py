from unittest import IsolatedAsyncioTestCase

from fieldrep_core.adapters.config import settings
from fieldrep_core.adapters.config.composition_root import setup_di_container_from_settings
from fieldrep_core.adapters.document_store.memory_store import InMemoryDocumentStore
from fieldrep_core.core.application.services.request_forms import OrderFormController
from fieldrep_core.core.domain.constants import CollectionKind
from tests.helpers.fakes import make_session


class CompositionRootTests(IsolatedAsyncioTestCase):
    def setUp(self):
        self.container = setup_di_container_from_settings(settings, configure_logs=False)

    def test_setup_is_idempotent(self):
        self.assertIs(setup_di_container_from_settings(settings, configure_logs=False), self.container)
        self.assertIs(self.container.command_bus(), self.container.command_bus())

    def test_memory_backend_by_default(self):
        self.assertIsInstance(self.container.document_store(), InMemoryDocumentStore)
        self.assertEqual(self.container.request_repo().collections[CollectionKind.ORDERS], "h-orders")

    def test_screens_are_built_per_session(self):
        form = self.container.order_form(session=make_session())
        self.assertIsInstance(form, OrderFormController)
        self.assertIsNot(form, self.container.order_form(session=make_session()))
        self.assertEqual(form.formatter.currency_symbol, "₹")

    async def test_submission_reaches_attached_list(self):
        session = make_session("rep-container")
        listing = self.container.request_list(kind=CollectionKind.UTILITIES, session=session)
        listing.attach(self.container.event_dispatcher())
        form = self.container.utility_form(session=session)
        form.set_field("utility_type", "Bag")
        form.set_field("location", "Itarsi")

        try:
            record = await form.submit()
        finally:
            listing.detach(self.container.event_dispatcher())

        self.assertEqual([r.id for r in listing.items], [record.id])

    async def test_gallery_uses_configured_threshold(self):
        gallery = self.container.visual_aid_gallery(["https://cdn.pharmaco.in/aids/a.jpg"], 400)
        try:
            self.assertEqual(gallery.swipe_threshold, settings.GALLERY_SWIPE_THRESHOLD)
            self.assertEqual(gallery.max_quality, settings.IMAGE_MAX_QUALITY)
        finally:
            await gallery.image_loader.aclose()
