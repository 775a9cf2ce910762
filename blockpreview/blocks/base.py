"""
Base class for strongly-typed block models.

A model declares the content type it renders with ``@published_model``; the
model registry discovers it by that tag.
"""
from __future__ import annotations

from typing import Any, Callable, ClassVar, TypeVar

from blockpreview.services.content import ContentElement, ValueFallback


PUBLISHED_MODEL_TAG = "__published_model_alias__"

_M = TypeVar("_M", bound="PublishedElementModel")


def published_model(alias: str) -> Callable[[type[_M]], type[_M]]:
    """Tag a model class as the rendering model for content type *alias*."""
    def _tag(cls: type[_M]) -> type[_M]:
        setattr(cls, PUBLISHED_MODEL_TAG, alias)
        cls.content_type_alias = alias
        return cls
    return _tag


class PublishedElementModel:
    """Typed wrapper over a ``ContentElement``."""

    content_type_alias: ClassVar[str] = ""

    def __init__(self, element: ContentElement, fallback: ValueFallback):
        self._element = element
        self._fallback = fallback

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._element.key or '-'}>"

    @property
    def element(self) -> ContentElement:
        return self._element

    @property
    def key(self) -> str:
        return self._element.key

    def value(self, alias: str, default: Any = None) -> Any:
        """Property value for the element's culture, falling back when empty."""
        culture = self._element.variation.culture
        if self._element.has_value(alias, culture):
            return self._element.get_value(alias, culture)[1]
        found, value = self._fallback.try_get_value(self._element, alias, culture)
        return value if found else default

    def text(self, alias: str) -> str:
        v = self.value(alias, "")
        return "" if v is None else str(v)

    def flag(self, alias: str) -> bool:
        v = self.value(alias, False)
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        return bool(v)
