"""
Unit tests for the in-memory course store.

Store contract:
- a new store starts with exactly one blank course
- ids are unique and never reused (also not after clear)
- remove/update with an unknown id do nothing
- values are stored as raw text, no validation
"""

import unittest

from sgpacalc.model import CourseField
from sgpacalc.store import CourseStore


class TestCourseStore(unittest.TestCase):
    def test_starts_with_one_blank_course(self) -> None:
        store = CourseStore()
        self.assertEqual(len(store), 1)
        entry = store.entries[0]
        self.assertEqual(entry.credits, "")
        self.assertEqual(entry.grade_point, "")
        self.assertTrue(entry.is_blank)

    def test_can_start_empty(self) -> None:
        self.assertEqual(len(CourseStore(initial_entry=False)), 0)

    def test_create_appends_in_display_order(self) -> None:
        store = CourseStore()
        first = store.entries[0]
        second = store.create()
        third = store.create()
        self.assertEqual([e.id for e in store], [first.id, second.id, third.id])
        self.assertEqual(store.position(third.id), 3)
        self.assertIs(store.entry_at(2), second)

    def test_ids_are_never_reused(self) -> None:
        store = CourseStore()
        seen = {store.entries[0].id}
        removed = store.create()
        seen.add(removed.id)
        store.remove(removed.id)

        again = store.create()
        self.assertNotIn(again.id, seen)
        seen.add(again.id)

        store.clear()
        after_clear = store.create()
        self.assertNotIn(after_clear.id, seen)

    def test_remove_unknown_id_is_noop(self) -> None:
        store = CourseStore()
        store.add_course("3", "4.0")
        before = [(e.id, e.credits, e.grade_point) for e in store]

        self.assertFalse(store.remove(9999))

        after = [(e.id, e.credits, e.grade_point) for e in store]
        self.assertEqual(before, after)

    def test_remove_keeps_other_ids_and_order(self) -> None:
        store = CourseStore(initial_entry=False)
        a = store.create()
        b = store.create()
        c = store.create()

        self.assertTrue(store.remove(b.id))
        self.assertEqual([e.id for e in store], [a.id, c.id])
        self.assertNotIn(b.id, store)

    def test_update_sets_raw_text(self) -> None:
        store = CourseStore()
        entry = store.entries[0]

        self.assertTrue(store.update(entry.id, "credits", "3"))
        self.assertTrue(store.update(entry.id, CourseField.GRADE_POINT, "abc"))
        self.assertEqual(entry.credits, "3")
        self.assertEqual(entry.grade_point, "abc")

    def test_update_accepts_field_aliases(self) -> None:
        store = CourseStore()
        entry = store.entries[0]

        store.update(entry.id, "gradePoint", "3.5")
        self.assertEqual(entry.grade_point, "3.5")
        store.update(entry.id, "grade_point", "2.5")
        self.assertEqual(entry.grade_point, "2.5")
        store.update(entry.id, "gpa", "1.5")
        self.assertEqual(entry.grade_point, "1.5")
        self.assertEqual(entry.credits, "")

    def test_update_unknown_field_raises(self) -> None:
        store = CourseStore()
        with self.assertRaises(ValueError):
            store.update(store.entries[0].id, "title", "Maths")

    def test_update_unknown_id_is_noop(self) -> None:
        store = CourseStore()
        self.assertFalse(store.set_credits(12345, "3"))
        self.assertTrue(store.entries[0].is_blank)

    def test_typed_setters_touch_only_their_field(self) -> None:
        store = CourseStore()
        a = store.entries[0]
        b = store.create()

        store.set_credits(a.id, "4")
        store.set_grade_point(b.id, "3.0")

        self.assertEqual((a.credits, a.grade_point), ("4", ""))
        self.assertEqual((b.credits, b.grade_point), ("", "3.0"))

    def test_clear_then_create_gives_one_blank_course(self) -> None:
        store = CourseStore()
        store.add_course("3", "4.0")
        store.add_course("2", "3.0")

        store.clear()
        self.assertEqual(len(store), 0)

        store.create()
        self.assertEqual(len(store), 1)
        self.assertTrue(store.entries[0].is_blank)

    def test_reset_leaves_one_blank_course(self) -> None:
        store = CourseStore()
        store.add_course("3", "4.0")
        entry = store.reset()
        self.assertEqual(store.entries, (entry,))
        self.assertTrue(entry.is_blank)

    def test_entry_at_out_of_range(self) -> None:
        store = CourseStore()
        with self.assertRaises(IndexError):
            store.entry_at(0)
        with self.assertRaises(IndexError):
            store.entry_at(2)

    def test_entries_is_a_snapshot(self) -> None:
        store = CourseStore()
        snapshot = store.entries
        store.create()
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(len(store), 2)


if __name__ == "__main__":
    unittest.main()
