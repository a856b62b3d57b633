from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: one student on a batch roster.

    `sex` is kept as the raw stored string so that unexpected values reach the
    roster ordering untouched (they sort with the male group there).
    """

    student_id: str
    name: str
    batch: str
    sex: str
    roll_number: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.name.upper()
