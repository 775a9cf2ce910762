from __future__ import annotations

from .base import PublishedElementModel, published_model
from .media import MediaItem


@published_model("imageRow")
class ImageRow(PublishedElementModel):

    @property
    def image(self) -> MediaItem | None:
        return MediaItem.parse(self.value("image"))

    @property
    def caption(self) -> str:
        return self.text("caption")

    @property
    def full_width(self) -> bool:
        return self.flag("fullWidth")
