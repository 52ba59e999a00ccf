from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date_only(value: Any) -> date:
    """Normalize a stored attendance/reset date to a calendar date.

    Accepts date, datetime, or an ISO string with an optional time part
    ("2026-02-01", "2026-02-01T17:30:00Z"); only the first 10 characters count.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return parse_iso_date(value.strip()[:10])
        except ValueError:
            raise ValidationError(f"Tanggal tidak valid: {value!r}")
    raise ValidationError(f"Tanggal tidak valid: {value!r}")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError("Tanggal tidak valid (YYYY-MM-DD)")


def month_start(today: date) -> date:
    return today.replace(day=1)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
