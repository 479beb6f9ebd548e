"""
Central data model definitions used across the project.

This module defines the canonical structure of course entries and SGPA
results so that:
- the store, the aggregator and the terminal surfaces share the same field names
- grade thresholds live in exactly one place
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# Grade point scale (inclusive bounds)
MIN_GRADE_POINT = 0.0
MAX_GRADE_POINT = 4.0

# Number of decimals shown for the SGPA
SGPA_DECIMALS = 2

# Practical credit-hour range, only used as an input hint
CREDIT_HINT_RANGE = (1, 6)

# Evaluated highest threshold first, closed on the low end
GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (3.7, "Excellent"),
    (3.0, "Good"),
    (2.0, "Satisfactory"),
    (1.0, "Pass"),
)
FAIL_CATEGORY = "Fail"

GRADE_CATEGORIES: tuple[str, ...] = tuple(label for _, label in GRADE_THRESHOLDS) + (FAIL_CATEGORY,)


class CourseField(Enum):
    """
    The two editable fields of a course entry.
    """

    CREDITS = "credits"
    GRADE_POINT = "gradePoint"

    @classmethod
    def parse(cls, name: str | CourseField) -> CourseField:
        """
        Resolve a field from its value ("gradePoint"), its member name
        ("grade_point", any case) or the short alias "gpa".

        Raises ValueError for anything else.
        """
        if isinstance(name, cls):
            return name

        key = str(name).strip()
        for member in cls:
            if key == member.value or key.upper() == member.name:
                return member
        if key.lower() == "gpa":
            return cls.GRADE_POINT
        raise ValueError(f"Unknown course field: {name!r}")


@dataclass
class CourseEntry:
    """
    Represents one row of the calculator.

    credits and grade_point hold the raw text typed by the user; they are only
    parsed when the SGPA is calculated.
    """

    id: int
    credits: str = ""
    grade_point: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.credits.strip() and not self.grade_point.strip()


@dataclass(frozen=True)
class SgpaResult:
    """
    Outcome of one SGPA calculation.
    """

    sgpa: float
    total_credits: float
    valid_course_count: int
    grade_category: str

    @property
    def sgpa_text(self) -> str:
        return f"{self.sgpa:.{SGPA_DECIMALS}f}"

    @property
    def total_credits_text(self) -> str:
        # full precision, without a trailing ".0" for whole numbers
        text = repr(self.total_credits)
        return text[:-2] if text.endswith(".0") else text

    def as_dict(self) -> dict[str, Any]:
        return {
            "sgpa": self.sgpa,
            "totalCredits": self.total_credits,
            "validCourseCount": self.valid_course_count,
            "gradeCategory": self.grade_category,
        }
