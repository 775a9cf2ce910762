"""
Publication-window indicator for blocks in the editor.

A block that is hidden, not yet started or already ended is shown dimmed.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from blockpreview.schemas import VisibilitySettings


DIMMED_OPACITY = 0.25
FULL_OPACITY = 1.0


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true")
    return value is True or value == 1


def _parse_date(value: str | None) -> datetime | None:
    """Parse an ISO date/datetime; naive values are taken as UTC."""
    if not value or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def block_opacity(settings: VisibilitySettings, now: datetime | None = None) -> float:
    if _truthy(settings.hide_block):
        return DIMMED_OPACITY

    if not settings.start_date and not settings.end_date:
        return FULL_OPACITY

    now = now or datetime.now(tz=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    start = _parse_date(settings.start_date)
    if start is not None and start > now:
        return DIMMED_OPACITY

    end = _parse_date(settings.end_date)
    if end is not None and end < now:
        return DIMMED_OPACITY

    return FULL_OPACITY
