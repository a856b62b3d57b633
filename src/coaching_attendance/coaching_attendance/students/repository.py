from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Repository interface for the student roster.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_batch(self, batch: str) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, name: str, batch: str, sex: str, roll_number: Optional[str]) -> str:
        raise NotImplementedError

    def create_many(self, rows: Sequence[dict]) -> int:
        raise NotImplementedError

    def update(self, *, student_id: str, name: str, batch: str, sex: str, roll_number: Optional[str]) -> bool:
        raise NotImplementedError

    def set_roll_numbers(self, assignments: dict[str, str]) -> int:
        raise NotImplementedError

    def delete_by_id(self, student_id: str) -> bool:
        """Deleting a student also removes its attendance rows (FK cascade)."""

        raise NotImplementedError

    def delete_all(self) -> None:
        raise NotImplementedError
