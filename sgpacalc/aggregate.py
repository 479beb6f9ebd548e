"""
SGPA aggregation.

Given the course entries of a store, compute the credit-weighted grade point
average:

    SGPA = sum(grade_point * credits) / sum(credits)

Only valid entries take part. An entry is valid if its credits parse to a
positive finite number and its grade point parses to a number in [0, 4].
A course whose credits would push either running sum to infinity is skipped
as well, so the average always stays within [0, 4]. Invalid entries are skipped silently; the result only reports how many
entries were used.

The grade category is derived from the unrounded average, so a raw 3.695 is
displayed as "3.70" but still counts as "Good".
"""

from __future__ import annotations

import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from sgpacalc.model import (
    FAIL_CATEGORY,
    GRADE_THRESHOLDS,
    MAX_GRADE_POINT,
    MIN_GRADE_POINT,
    SGPA_DECIMALS,
    CourseEntry,
    SgpaResult,
)

logger = logging.getLogger(__name__)


class AggregationError(ValueError):
    """
    Base class for calculations that cannot produce an SGPA.
    """

    default_message = "Cannot calculate SGPA"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmptyCollection(AggregationError):
    default_message = "Please add at least one course to calculate SGPA!"


class NoValidCourses(AggregationError):
    default_message = "Please fill in all course details correctly!"


# Leading number, the way a browser's parseFloat reads form input:
# "3" -> 3, " 3.5abc" -> 3.5, "1e1" -> 10, "Infinity" -> inf, "abc" -> nan
_LEADING_NUMBER_RE = re.compile(r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity))")


def parse_number(text: Any) -> float:
    """
    Parse the leading number of a text field. Returns nan if there is none.
    """
    if text is None:
        return math.nan
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)

    m = _LEADING_NUMBER_RE.match(str(text))
    if not m:
        return math.nan
    return float(m.group(1).replace("Infinity", "inf"))


def is_valid_entry(credits: float, grade_point: float) -> bool:
    # NaN fails every comparison, so blank / non-numeric input drops out here
    if not math.isfinite(credits) or credits <= 0:
        return False
    return MIN_GRADE_POINT <= grade_point <= MAX_GRADE_POINT


def grade_category(sgpa: float) -> str:
    for threshold, label in GRADE_THRESHOLDS:
        if sgpa >= threshold:
            return label
    return FAIL_CATEGORY


def round_half_up(value: float, places: int = SGPA_DECIMALS) -> float:
    """
    Round half away from zero on the shortest decimal repr of value
    (2.675 -> 2.68, unlike the built-in round()).

    Raises ValueError for nan and infinities.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value!r}")
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_sgpa(entries: Iterable[CourseEntry]) -> SgpaResult:
    """
    Compute the SGPA of the given entries.

    Raises:
        EmptyCollection: no entries at all
        NoValidCourses: entries exist but none of them is valid
    """
    snapshot = list(entries)
    if not snapshot:
        raise EmptyCollection()

    total_weighted = 0.0
    total_credits = 0.0
    valid = 0

    for entry in snapshot:
        credits = parse_number(entry.credits)
        grade_point = parse_number(entry.grade_point)
        if not is_valid_entry(credits, grade_point):
            continue

        # a course that would overflow either sum is as unusable as a blank one
        next_weighted = total_weighted + grade_point * credits
        next_credits = total_credits + credits
        if not (math.isfinite(next_weighted) and math.isfinite(next_credits)):
            logger.debug("skipping course id=%s, credits %r overflow the totals", entry.id, credits)
            continue

        total_weighted = next_weighted
        total_credits = next_credits
        valid += 1

    if valid == 0:
        logger.debug("no valid course among %d entries", len(snapshot))
        raise NoValidCourses()

    raw = total_weighted / total_credits
    result = SgpaResult(
        sgpa=round_half_up(raw),
        total_credits=total_credits,
        valid_course_count=valid,
        grade_category=grade_category(raw),
    )
    logger.debug(
        "sgpa=%r (raw %r) from %d/%d courses, %r credits",
        result.sgpa,
        raw,
        valid,
        len(snapshot),
        total_credits,
    )
    return result
