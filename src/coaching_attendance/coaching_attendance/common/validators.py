from __future__ import annotations

from typing import Optional

from ..core.constants import BATCHES, UNASSIGNED_ROLL
from ..core.enums import AttendanceStatus, Sex
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_batch(value: str) -> str:
    value = (value or "").strip().upper()
    if value not in BATCHES:
        raise ValidationError(f"Unknown batch: {value or '-'}")
    return value


def require_sex(value: str) -> Sex:
    try:
        return Sex((value or "").strip().capitalize())
    except ValueError:
        raise ValidationError("Sex must be Male or Female")


def require_status(value: str) -> AttendanceStatus:
    try:
        return AttendanceStatus((value or "").strip().capitalize())
    except ValueError:
        raise ValidationError("Status must be Present or Absent")


def normalize_roll_number(value: Optional[str]) -> Optional[str]:
    """Map empty strings and the legacy "00" marker to None."""
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == UNASSIGNED_ROLL:
        return None
    return value
