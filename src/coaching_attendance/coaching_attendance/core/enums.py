from __future__ import annotations

from enum import Enum


class Sex(str, Enum):
    FEMALE = "Female"
    MALE = "Male"


class AttendanceStatus(str, Enum):
    """Daily status stored per (student, date). There is no 'unknown' state."""

    PRESENT = "Present"
    ABSENT = "Absent"


class RiskType(str, Enum):
    """Absence-risk category derived from a student's recent history."""

    NONE = "NONE"
    CONSECUTIVE = "CONSECUTIVE"
    FREQUENT = "FREQUENT"
    CRITICAL = "CRITICAL"


class Role(str, Enum):
    ADMIN = "admin"
