"""
In-memory course list.

The store owns the ordered list of course entries for one session:
- insertion order is display order
- ids are handed out by a counter and never reused, not even after clear()
- values are kept as raw text; validation happens in sgpacalc.aggregate

Unknown ids are never an error: remove/update simply do nothing.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator

from sgpacalc.model import CourseEntry, CourseField

logger = logging.getLogger(__name__)


class CourseStore:
    def __init__(self, initial_entry: bool = True) -> None:
        self._entries: list[CourseEntry] = []
        self._ids = itertools.count(1)
        if initial_entry:
            self.create()

    # ------------------------------------------------------------------
    # Read interface
    # ------------------------------------------------------------------

    @property
    def entries(self) -> tuple[CourseEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CourseEntry]:
        return iter(tuple(self._entries))

    def __contains__(self, entry_id: object) -> bool:
        return self.get(entry_id) is not None

    def get(self, entry_id: object) -> CourseEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def position(self, entry_id: object) -> int | None:
        """
        Return the 1-based display number ("Course N") of an entry.
        """
        for i, entry in enumerate(self._entries, start=1):
            if entry.id == entry_id:
                return i
        return None

    def entry_at(self, number: int) -> CourseEntry:
        """
        Look up an entry by its 1-based display number.
        Raises IndexError when out of range.
        """
        if not (1 <= number <= len(self._entries)):
            raise IndexError(f"No course number {number} (have {len(self._entries)})")
        return self._entries[number - 1]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self) -> CourseEntry:
        entry = CourseEntry(id=next(self._ids))
        self._entries.append(entry)
        logger.debug("created course id=%s (courses: %d)", entry.id, len(self._entries))
        return entry

    def add_course(self, credits: str = "", grade_point: str = "") -> CourseEntry:
        entry = self.create()
        self.set_credits(entry.id, credits)
        self.set_grade_point(entry.id, grade_point)
        return entry

    def remove(self, entry_id: object) -> bool:
        for i, entry in enumerate(self._entries):
            if entry.id == entry_id:
                del self._entries[i]
                logger.debug("removed course id=%s (courses: %d)", entry_id, len(self._entries))
                return True
        logger.debug("remove ignored, unknown id=%s", entry_id)
        return False

    def update(self, entry_id: object, field: CourseField | str, value: str) -> bool:
        """
        Set one field of an entry to the given raw text.

        Raises ValueError only for an unknown field name.
        """
        course_field = CourseField.parse(field)
        entry = self.get(entry_id)
        if entry is None:
            logger.debug("update ignored, unknown id=%s", entry_id)
            return False

        text = "" if value is None else str(value)
        if course_field is CourseField.CREDITS:
            entry.credits = text
        else:
            entry.grade_point = text
        logger.debug("updated course id=%s %s=%r", entry_id, course_field.value, text)
        return True

    def set_credits(self, entry_id: object, value: str) -> bool:
        return self.update(entry_id, CourseField.CREDITS, value)

    def set_grade_point(self, entry_id: object, value: str) -> bool:
        return self.update(entry_id, CourseField.GRADE_POINT, value)

    def clear(self) -> None:
        # ids keep counting so a cleared id is never handed out again
        self._entries.clear()
        logger.debug("cleared all courses")

    def reset(self) -> CourseEntry:
        """
        Clear everything and start over with one blank course.
        """
        self.clear()
        return self.create()
