from unittest import IsolatedAsyncioTestCase

from fieldrep_core.core.application.services.request_forms import DoctorFormController
from fieldrep_core.core.domain.constants import CollectionKind
from tests.helpers.fakes import FIXED_NOW, build_stack, make_session


class DoctorFormTests(IsolatedAsyncioTestCase):
    def setUp(self):
        self.stack = build_stack()
        self.form = DoctorFormController(
            self.stack.command_bus,
            make_session(headquarters="Bhopal"),
            self.stack.notifier,
            clock=lambda: FIXED_NOW,
        )

    def _fill(self, **overrides):
        values = {
            "entry_type": "Doctor",
            "name": "Dr. Anil Mehta",
            "speciality": "Cardiologist",
            "mr_name": "Ravi Kumar",
            "phone": "9876543210",
            "address": "12 MG Road",
            "city": "Vidisha",
        }
        values.update(overrides)
        for name, value in values.items():
            self.form.set_field(name, value)

    async def test_doctor_is_stored_with_type_key(self):
        self._fill(email="anil.mehta@hospital.in")
        self.form.add_visual_aid("https://cdn.pharmaco.in/aids/heart.jpg?quality=60")
        self.form.add_visual_aid("https://cdn.pharmaco.in/aids/heart.jpg?quality=60")

        record = await self.form.submit()

        self.assertIsNotNone(record)
        self.assertEqual(record.entry_type, "Doctor")
        self.assertEqual(record.email, "anil.mehta@hospital.in")
        self.assertEqual(len(record.visual_aids), 2)
        self.assertEqual(record.updated_at, FIXED_NOW)

        docs = await self.stack.store.query("doctors")
        self.assertEqual(docs[0].data["type"], "Doctor")
        self.assertEqual(docs[0].data["mrName"], "Ravi Kumar")
        self.assertNotIn("entryType", docs[0].data)
        self.assertEqual(self.stack.notifier.alerts, [("Success", "Doctor/Chemist added successfully!")])

    async def test_speciality_required_for_doctors(self):
        self._fill(speciality="")
        self.assertEqual(self.form.validate(), {"speciality": "Speciality is required for doctors"})

    async def test_speciality_must_come_from_the_list(self):
        self._fill(speciality="Astrologer")
        self.assertEqual(self.form.validate(), {"speciality": "Select a valid speciality"})

    async def test_hospital_is_optional_and_stored(self):
        self._fill(hospital="City Hospital")
        record = await self.form.submit()

        self.assertEqual(record.hospital, "City Hospital")
        docs = await self.stack.store.query("doctors")
        self.assertEqual(docs[0].data["hospital"], "City Hospital")

    async def test_switching_away_from_doctor_clears_speciality(self):
        self._fill()
        self.assertTrue(self.form.shows_speciality)

        self.form.set_field("entry_type", "Chemist")

        self.assertFalse(self.form.shows_speciality)
        self.assertEqual(self.form.draft["speciality"], "")
        record = await self.form.submit()
        self.assertEqual(record.speciality, "")

    async def test_speciality_rejected_for_chemist(self):
        self._fill(entry_type="Stockiest")
        self.form.draft["speciality"] = "Dentist"
        self.assertEqual(self.form.validate(), {"speciality": "Speciality only applies to doctors"})

    async def test_missing_fields_are_reported(self):
        errors = self.form.validate()
        self.assertEqual(errors["entry_type"], "Type is required")
        self.assertEqual(errors["name"], "Name is required")
        self.assertEqual(errors["mr_name"], "MR Name is required")
        self.assertEqual(errors["phone"], "Phone Number is required")
        self.assertEqual(errors["address"], "Address is required")
        self.assertEqual(errors["city"], "Location is required")
        self.assertNotIn("speciality", errors)
        self.assertNotIn("email", errors)

    async def test_city_must_belong_to_headquarters(self):
        self.assertIn("Vidisha", self.form.locations)
        self._fill(city="Indore")
        self.assertEqual(self.form.validate(), {"city": "Select a location from the list"})

    async def test_invalid_email_is_rejected(self):
        self._fill(email="not-an-email")
        self.assertIn("email", self.form.validate())

    async def test_blank_visual_aid_rejected(self):
        with self.assertRaises(ValueError):
            self.form.add_visual_aid("   ")

    async def test_directory_listed_by_name(self):
        for name in ("Dr. Zoya Khan", "Dr. Anil Mehta"):
            self._fill(name=name)
            await self.form.submit()

        entries = await self.stack.repo.fetch_for_owner(CollectionKind.DOCTORS, "rep-1")
        self.assertEqual([e.name for e in entries], ["Dr. Anil Mehta", "Dr. Zoya Khan"])
