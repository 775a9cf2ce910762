from __future__ import annotations

from .base import PublishedElementModel, published_model


@published_model("codeSnippetRow")
class CodeSnippetRow(PublishedElementModel):

    @property
    def code(self) -> str:
        return self.text("code")

    @property
    def language(self) -> str:
        return self.text("language")

    @property
    def title(self) -> str:
        return self.text("title")
