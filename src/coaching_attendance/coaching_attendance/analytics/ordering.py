"""Canonical roster order within a batch.

Female students come first, then male students; inside each group names are
compared case-insensitively and ignoring accents, with the active locale's
collation; the accented spelling only breaks ties. Any other
``sex`` value is ordered with the male group.
"""
from __future__ import annotations

import locale
import unicodedata
from functools import cmp_to_key
from typing import Iterable, Optional, Sequence

from ..core.enums import Sex
from ..students.model import Student


def _sex_rank(sex: object) -> int:
    value = sex.value if isinstance(sex, Sex) else str(sex or "")
    return 0 if value.strip().lower() == Sex.FEMALE.value.lower() else 1


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _name_key(name: str) -> tuple[str, str]:
    folded = (name or "").casefold()
    return (locale.strxfrm(_strip_accents(folded)), locale.strxfrm(folded))


def roster_sort_key(student: Student) -> tuple[int, tuple[str, str]]:
    return (_sex_rank(student.sex), _name_key(student.name))


def compare_students(a: Student, b: Student) -> int:
    """Three-way comparator: negative when `a` is listed before `b`."""
    ka, kb = roster_sort_key(a), roster_sort_key(b)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_roster(students: Iterable[Student]) -> list[Student]:
    # sorted() is stable, so identical (sex, name) pairs keep input order.
    return sorted(students, key=cmp_to_key(compare_students))


def assign_sequential_rolls(students: Sequence[Student]) -> dict[str, int]:
    """1-based position of every student in the ordered full roster."""
    return {s.student_id: i for i, s in enumerate(sort_roster(students), start=1)}


def format_roll(position: int) -> str:
    return f"{position:02d}"


def display_roll(student: Student, position: Optional[int]) -> str:
    if student.roll_number:
        return student.roll_number
    if position is None:
        return "--"
    return format_roll(position)
