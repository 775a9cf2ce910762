"""Rich text row.  Body is Markdown, reStructuredText or pre-rendered HTML."""
from __future__ import annotations

from .base import PublishedElementModel, published_model


@published_model("richTextRow")
class RichTextRow(PublishedElementModel):

    @property
    def content(self) -> str:
        return self.text("content")

    @property
    def format(self) -> str:
        return (self.text("format") or "markdown").lower()
