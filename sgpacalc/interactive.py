from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sgpacalc.aggregate import AggregationError, calculate_sgpa
from sgpacalc.model import CREDIT_HINT_RANGE, MAX_GRADE_POINT, MIN_GRADE_POINT, CourseEntry, SgpaResult
from sgpacalc.store import CourseStore


@dataclass
class Session:
    """
    State of one interactive run: the course list and the last shown result.
    """

    store: CourseStore = field(default_factory=CourseStore)
    result: Optional[SgpaResult] = None


class _Quit(Exception):
    pass


def _println(console: Console, msg: str = "") -> None:
    console.print(msg, highlight=False)


def _prompt(console: Console, msg: str) -> str:
    try:
        return console.input(escape(msg))
    except (EOFError, KeyboardInterrupt):
        raise _Quit() from None


def _plain(value: str) -> str:
    return value.strip() or "-"


def _cell(value: str) -> str:
    return escape(_plain(value))


def run_interactive(store: CourseStore | None = None, console: Console | None = None) -> Session:
    """
    Interactive menu loop over one in-memory course list.
    Returns the session so callers (and tests) can inspect the final state.
    """
    session = Session(store=store if store is not None else CourseStore())
    con = console if console is not None else Console()

    try:
        _loop(session, con)
    except _Quit:
        _println(con, "\nBye.")
    return session


def _loop(session: Session, con: Console) -> None:
    while True:
        _print_header(session, con)

        choice = _prompt(
            con,
            "\n[1] Add course\n"
            "[2] Edit course\n"
            "[3] Remove course\n"
            "[4] Calculate SGPA\n"
            "[5] Clear all courses\n"
            "[0] Exit\n"
            "Select: ",
        ).strip()

        if choice == "0":
            _println(con, "Bye.")
            return

        if choice == "1":
            _flow_add(session, con)
        elif choice == "2":
            _flow_edit(session, con)
        elif choice == "3":
            _flow_remove(session, con)
        elif choice == "4":
            _flow_calculate(session, con)
        elif choice == "5":
            _flow_clear(session, con)
        else:
            _println(con, "Invalid choice.")


def _print_header(session: Session, con: Console) -> None:
    store = session.store
    _println(con, "\n=== SGPA Calculator ===")

    if not len(store):
        _println(con, "No courses yet. Choose [1] to add one.")
    else:
        table = Table(title=f"Courses ({len(store)})", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Course")
        table.add_column("Credit Hours", justify="right")
        table.add_column("Grade Point", justify="right")
        for i, entry in enumerate(store, start=1):
            table.add_row(str(i), f"Course {i}", _cell(entry.credits), _cell(entry.grade_point))
        con.print(table)

    if session.result is not None:
        _print_result(session.result, con)


def _print_result(result: SgpaResult, con: Console) -> None:
    table = Table(title="Your SGPA Result", box=box.SIMPLE, show_header=False)
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("SGPA", f"[bold cyan]{result.sgpa_text}[/]")
    table.add_row("Total Credits", result.total_credits_text)
    table.add_row("Courses", str(result.valid_course_count))
    table.add_row("Grade Category", f"[green]{result.grade_category}[/]")
    con.print(table)


def _pick_course(session: Session, con: Console, action: str) -> Optional[CourseEntry]:
    """
    Ask for a course number. Returns None on blank input or invalid choice.
    """
    store = session.store
    if not len(store):
        _println(con, "No courses.")
        return None

    pick = _prompt(con, f"Course number to {action} (1-{len(store)}) [blank = back]: ").strip()
    if not pick:
        return None
    if not pick.isdecimal():
        _println(con, "Not a number.")
        return None

    try:
        return store.entry_at(int(pick))
    except IndexError:
        _println(con, "Out of range.")
        return None


def _ask_fields(session: Session, con: Console, entry: CourseEntry) -> None:
    """
    Prompt for both values of one course. Blank keeps the current value.
    """
    low, high = CREDIT_HINT_RANGE
    credits = _prompt(con, f"Credit Hours ({low}-{high}, e.g., 3) [{_plain(entry.credits)}]: ").strip()
    if credits:
        session.store.set_credits(entry.id, credits)

    grade_point = _prompt(
        con, f"Grade Point ({MIN_GRADE_POINT:g}-{MAX_GRADE_POINT:g}, e.g., 3.75) [{_plain(entry.grade_point)}]: "
    ).strip()
    if grade_point:
        session.store.set_grade_point(entry.id, grade_point)


def _flow_add(session: Session, con: Console) -> None:
    entry = session.store.create()
    number = session.store.position(entry.id)
    _println(con, f"Added: Course {number}")
    _ask_fields(session, con, entry)


def _flow_edit(session: Session, con: Console) -> None:
    entry = _pick_course(session, con, "edit")
    if entry is None:
        return
    _ask_fields(session, con, entry)
    _println(con, f"Updated: Course {session.store.position(entry.id)}")


def _flow_remove(session: Session, con: Console) -> None:
    entry = _pick_course(session, con, "remove")
    if entry is None:
        return
    number = session.store.position(entry.id)
    session.store.remove(entry.id)
    _println(con, f"Removed: Course {number}")


def _flow_calculate(session: Session, con: Console) -> None:
    if not len(session.store):
        _println(con, "Add at least one course first.")
        return

    try:
        session.result = calculate_sgpa(session.store)
    except AggregationError as e:
        _println(con, f"[red]{e}[/]")
        return

    _print_result(session.result, con)


def _flow_clear(session: Session, con: Console) -> None:
    answer = _prompt(
        con, "Are you sure you want to clear all courses? This action cannot be undone. [y/N]: "
    ).strip().lower()
    if answer not in ("y", "yes"):
        _println(con, "Cancelled.")
        return

    session.store.reset()
    session.result = None
    _println(con, "All courses cleared.")
