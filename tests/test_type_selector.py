from unittest import TestCase

from fieldrep_core.core.application.services.type_selector import AnchorBounds, AnchoredTypeSelector
from fieldrep_core.core.domain.constants import DOCTOR_TYPES


class AnchoredTypeSelectorTests(TestCase):
    def setUp(self):
        self.positions = [AnchorBounds(0, 100, 200, 40), AnchorBounds(0, 340, 200, 40)]
        self.measured = 0
        self.chosen = []

        def measure():
            bounds = self.positions[min(self.measured, len(self.positions) - 1)]
            self.measured += 1
            return bounds

        self.selector = AnchoredTypeSelector(DOCTOR_TYPES, self.chosen.append, measure)

    def test_anchor_measured_on_every_open(self):
        self.selector.request_open()
        self.selector.dismiss()
        self.selector.request_open()

        self.assertEqual(self.measured, 2)
        self.assertEqual(self.selector.bounds, self.positions[1])

    def test_unmeasured_anchor_keeps_menu_closed(self):
        selector = AnchoredTypeSelector(DOCTOR_TYPES, self.chosen.append, lambda: None)
        self.assertFalse(selector.request_open())
        self.assertFalse(selector.visible)

    def test_open_requires_bounds(self):
        with self.assertRaises(TypeError):
            self.selector.open((0, 0, 10, 10))

    def test_select_hands_value_over_and_closes(self):
        self.assertEqual(self.selector.button_label, "Select Type")
        self.selector.request_open()

        self.selector.select("Chemist")

        self.assertEqual(self.chosen, ["Chemist"])
        self.assertEqual(self.selector.button_label, "Chemist")
        self.assertFalse(self.selector.visible)

    def test_select_guards(self):
        with self.assertRaises(RuntimeError):
            self.selector.select("Doctor")
        self.selector.request_open()
        with self.assertRaises(ValueError):
            self.selector.select("Hospital")
        self.assertTrue(self.selector.visible)
