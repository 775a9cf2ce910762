"""Hero banner: title, subtitle and a single call to action."""
from __future__ import annotations

from .base import PublishedElementModel, published_model
from .media import MediaItem


@published_model("hero")
class Hero(PublishedElementModel):

    @property
    def title(self) -> str:
        return self.text("title")

    @property
    def subtitle(self) -> str:
        return self.text("subtitle")

    @property
    def link(self) -> str:
        return self.text("link")

    @property
    def link_label(self) -> str:
        return self.text("linkLabel") or "Read more"

    @property
    def background(self) -> MediaItem | None:
        return MediaItem.parse(self.value("backgroundImage"))
