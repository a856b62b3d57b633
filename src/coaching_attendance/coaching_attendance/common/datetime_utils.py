from __future__ import annotations

from datetime import date, datetime

DISPLAY_DATE_FORMAT = "%d-%m-%Y"


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_display_date(value: str) -> date:
    """Parse DD-MM-YYYY (the format older attendance rows were keyed by)."""
    return datetime.strptime(value, DISPLAY_DATE_FORMAT).date()


def parse_any_date(value: str) -> date:
    value = (value or "").strip()
    try:
        return parse_iso_date(value)
    except ValueError:
        return parse_display_date(value)


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
