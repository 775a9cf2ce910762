from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import PublishedElementModel, published_model


@dataclass(frozen=True)
class IconLink:
    url: str
    title: str = ""
    icon: str = ""
    # Set when the link points at a content page
    page_id: int | None = None


def _page_id(raw: Any) -> int | None:
    try:
        return int(raw) if raw not in (None, "") else None
    except (TypeError, ValueError):
        return None


@published_model("iconLinkRow")
class IconLinkRow(PublishedElementModel):

    @property
    def links(self) -> list[IconLink]:
        raw: Any = self.value("links", [])
        if not isinstance(raw, list):
            return []
        links = []
        for item in raw:
            if isinstance(item, dict) and item.get("url"):
                links.append(IconLink(
                    url=str(item["url"]),
                    title=str(item.get("title") or item.get("name") or ""),
                    icon=str(item.get("icon") or ""),
                    page_id=_page_id(item.get("pageId")),
                ))
        return links
