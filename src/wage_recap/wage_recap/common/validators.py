from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Trimmed text, or None when blank."""
    v = (value or "").strip()
    return v or None


def normalize_text(value: Optional[str]) -> str:
    """Case-insensitive identity key for worker and specialist team names."""
    return (value or "").strip().lower()
