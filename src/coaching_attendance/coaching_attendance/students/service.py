from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..analytics.ordering import assign_sequential_rolls, sort_roster
from ..common.validators import normalize_roll_number, require_batch, require_non_empty, require_sex
from ..core.constants import BATCHES
from ..core.enums import Sex
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

CSV_FIELDS = ["name", "batch", "sex", "roll_number"]


@dataclass(frozen=True)
class ImportResult:
    imported: int
    skipped: int


class StudentService:
    """Use case: manage the student roster."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self, *, batch: Optional[str] = None) -> list[Student]:
        if batch:
            return sort_roster(self._students.list_by_batch(require_batch(batch)))
        return list(self._students.list_all())

    def search(self, query: str) -> list[Student]:
        q = (query or "").strip().lower()
        students = self._students.list_all()
        if not q:
            return list(students)
        return [
            s
            for s in students
            if q in s.name.lower() or q in s.batch.lower() or (s.roll_number and q in s.roll_number.lower())
        ]

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def create_student(self, *, name: str, batch: str, sex: str, roll_number: Optional[str] = None) -> str:
        name = require_non_empty(name, "Name").upper()
        batch = require_batch(batch)
        sex = require_sex(sex)

        student_id = self._students.create(
            name=name,
            batch=batch,
            sex=sex.value,
            roll_number=normalize_roll_number(roll_number),
        )
        logger.info("Created student %s in %s", student_id, batch)
        return student_id

    def update_student(
        self,
        *,
        student_id: str,
        name: str,
        batch: str,
        sex: str,
        roll_number: Optional[str] = None,
    ) -> None:
        self.get_student(student_id)
        ok = self._students.update(
            student_id=student_id,
            name=require_non_empty(name, "Name").upper(),
            batch=require_batch(batch),
            sex=require_sex(sex).value,
            roll_number=normalize_roll_number(roll_number),
        )
        if not ok:
            raise ValidationError("Student update failed")

    def delete_student(self, student_id: str) -> None:
        if not self._students.delete_by_id(student_id):
            raise NotFoundError("Student not found")
        logger.info("Deleted student %s and its attendance", student_id)

    def auto_assign_roll_numbers(self, batch: str) -> int:
        """Rewrite roll numbers 1..N for a batch in roster order."""
        batch = require_batch(batch)
        students = self._students.list_by_batch(batch)
        if not students:
            raise ValidationError(f"No students in {batch}")

        positions = assign_sequential_rolls(students)
        count = self._students.set_roll_numbers({sid: str(pos) for sid, pos in positions.items()})
        logger.info("Assigned roll numbers 1-%d for %s", count, batch)
        return count

    def import_csv(self, text: str) -> ImportResult:
        """Bulk insert from a `name,batch,sex,roll_number` CSV.

        Rows without a name or with an unknown batch are skipped; a missing
        sex defaults to Male.
        """
        reader = csv.DictReader(io.StringIO((text or "").lstrip("\ufeff")))
        rows: list[dict] = []
        skipped = 0
        for raw in reader:
            name = (raw.get("name") or "").strip().upper()
            batch = (raw.get("batch") or "").strip().upper()
            if not name or batch not in BATCHES:
                skipped += 1
                continue
            try:
                sex = require_sex(raw.get("sex") or Sex.MALE.value)
            except ValidationError:
                skipped += 1
                continue
            rows.append(
                {
                    "name": name,
                    "batch": batch,
                    "sex": sex.value,
                    "roll_number": normalize_roll_number(raw.get("roll_number")),
                }
            )

        if not rows:
            raise ValidationError("No valid rows found in CSV")

        imported = self._students.create_many(rows)
        logger.info("Imported %d student(s), skipped %d row(s)", imported, skipped)
        return ImportResult(imported=imported, skipped=skipped)

    def export_csv(self, students: Optional[Sequence[Student]] = None) -> str:
        students = self._students.list_all() if students is None else students
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for s in students:
            writer.writerow(
                {
                    "name": s.display_name,
                    "batch": s.batch,
                    "sex": s.sex,
                    "roll_number": s.roll_number or "",
                }
            )
        return out.getvalue()

    @staticmethod
    def csv_template() -> str:
        return "name,batch,sex,roll_number\r\nJOHN DOE,S1,Male,1\r\nJANE SMITH,N1,Female,2\r\n"
