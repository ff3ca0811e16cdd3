"""Shared utility functions."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_optional_text(value: str | None) -> str | None:
    """Strip free text and collapse blank values to None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
