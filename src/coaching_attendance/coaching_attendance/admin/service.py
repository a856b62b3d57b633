from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..attendance.repository import AttendanceRepository
from ..core.constants import RESET_CONFIRMATION
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..students.repository import StudentRepository

logger = logging.getLogger(__name__)


class AdminService:
    """Use case: destructive maintenance actions, each gated by the admin password."""

    def __init__(self, students: StudentRepository, attendance: AttendanceRepository, *, password_hash: str):
        self._students = students
        self._attendance = attendance
        self._password_hash = password_hash

    def _verify(self, password: str) -> None:
        try:
            ok = bool(self._password_hash) and check_password_hash(self._password_hash, password or "")
        except ValueError:
            # e.g. an unsupported or corrupted hash in configuration
            ok = False
        if not ok:
            raise AuthenticationError("Incorrect admin password")

    def clear_attendance(self, *, password: str) -> None:
        """Delete every attendance row; the roster is kept."""
        self._verify(password)
        self._attendance.delete_all()
        logger.warning("All attendance history cleared")

    def reset_system(self, *, password: str, confirmation: str) -> None:
        """Delete all students and attendance. Requires typing RESET."""
        self._verify(password)
        if (confirmation or "").strip() != RESET_CONFIRMATION:
            raise AuthorizationError("Reset cancelled. Incorrect confirmation code.")
        self._attendance.delete_all()
        self._students.delete_all()
        logger.warning("Full system reset performed")
