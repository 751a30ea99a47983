from __future__ import annotations

import unittest

from terrascope.services.comparison import ComparisonSet
from terrascope.tests.utils import make_profile


class ComparisonSetTests(unittest.TestCase):
    def setUp(self) -> None:
        self.japan = make_profile()
        self.france = make_profile("France", "FR", "EUR")
        self.brazil = make_profile("Brazil", "BR", "BRL")
        self.kenya = make_profile("Kenya", "KE", "KES")

    def test_add_preserves_insertion_order(self) -> None:
        comparison = ComparisonSet()

        self.assertTrue(comparison.add(self.france))
        self.assertTrue(comparison.add(self.japan))

        self.assertEqual([entry.isoAlpha2 for entry in comparison.entries], ["FR", "JP"])

    def test_add_is_idempotent_by_iso_code(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)
        japan_in_german = make_profile(description="Ein Inselstaat in Ostasien.")

        self.assertFalse(comparison.add(japan_in_german))
        self.assertEqual(len(comparison), 1)
        self.assertEqual(comparison.entries[0].description, self.japan.description)

    def test_capacity_is_three(self) -> None:
        comparison = ComparisonSet()
        for profile in (self.japan, self.france, self.brazil):
            self.assertTrue(comparison.add(profile))

        self.assertTrue(comparison.is_full)
        self.assertFalse(comparison.add(self.kenya))
        self.assertEqual(len(comparison), ComparisonSet.MAX_ENTRIES)
        self.assertFalse(comparison.contains("KE"))

    def test_entries_are_copies(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)

        entry = comparison.entries[0]
        self.assertIsNot(entry, self.japan)
        self.assertEqual(entry, self.japan)

    def test_remove_by_iso_code(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)
        comparison.add(self.france)

        self.assertTrue(comparison.remove("jp"))
        self.assertFalse(comparison.remove("JP"))
        self.assertEqual([entry.isoAlpha2 for entry in comparison.entries], ["FR"])

    def test_removing_last_entry_leaves_compare_mode(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)
        self.assertTrue(comparison.toggle_compare_mode())

        comparison.remove("JP")

        self.assertEqual(len(comparison), 0)
        self.assertFalse(comparison.is_compare_mode)

    def test_toggle_on_empty_set_is_noop(self) -> None:
        comparison = ComparisonSet()

        self.assertFalse(comparison.toggle_compare_mode())
        self.assertFalse(comparison.is_compare_mode)

    def test_toggle_flips_when_not_empty(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)

        self.assertTrue(comparison.toggle_compare_mode())
        self.assertFalse(comparison.toggle_compare_mode())

    def test_clear_empties_and_exits_compare_mode(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)
        comparison.add(self.france)
        comparison.toggle_compare_mode()

        comparison.clear()

        self.assertEqual(comparison.entries, ())
        self.assertFalse(comparison.is_compare_mode)

    def test_exit_compare_mode_keeps_entries(self) -> None:
        comparison = ComparisonSet()
        comparison.add(self.japan)
        comparison.toggle_compare_mode()

        comparison.exit_compare_mode()

        self.assertFalse(comparison.is_compare_mode)
        self.assertEqual(len(comparison), 1)


if __name__ == "__main__":
    unittest.main()
