"""Media picker values as they appear in raw block data."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MediaItem:
    url: str
    alt: str = ""
    width: int | None = None
    height: int | None = None

    @classmethod
    def parse(cls, raw: Any) -> "MediaItem | None":
        # A picker value is either a bare URL or {"url": ..., "alt": ...}; a
        # multi-picker sends a list and only the first item is used.
        if isinstance(raw, list):
            raw = raw[0] if raw else None
        if isinstance(raw, str):
            return cls(url=raw) if raw.strip() else None
        if isinstance(raw, dict):
            url = raw.get("url") or raw.get("src") or ""
            if not url:
                return None
            return cls(
                url=str(url),
                alt=str(raw.get("alt") or raw.get("name") or ""),
                width=_int_or_none(raw.get("width")),
                height=_int_or_none(raw.get("height")),
            )
        return None


def _int_or_none(v: Any) -> int | None:
    try:
        return int(v) if v not in (None, "") else None
    except (TypeError, ValueError):
        return None
