#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Content elements
================
Read-only typed view over the raw block data an editor submits.

Property values are invariant unless written as::

    {"$variants": {"en-US": "Hello", "da-DK": "Hej", "*": "Hi"}}

in which case the value for the element's variation culture is read, and
``"*"`` holds the invariant default.  When a culture has no value the
``ValueFallback`` provider is consulted.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from blockpreview.schemas import BlockData
from .errors import ContentConversionError


# -----------------------------------------------------------------------------

VARIANTS_KEY = "$variants"
INVARIANT_KEY = "*"


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class VariationContext:
    """Culture used for property-value lookups; ``None`` for invariant sites."""
    culture: str | None = None


# -----------------------------------------------------------------------------

class ContentElement:
    """Immutable content element built from one block's raw data."""

    __slots__ = ("_key", "_alias", "_properties", "_variation")

    def __init__(
        self,
        key: str,
        content_type_alias: str,
        properties: Mapping[str, Any],
        variation: VariationContext,
    ):
        self._key = key
        self._alias = content_type_alias
        self._properties = MappingProxyType(copy.deepcopy(dict(properties)))
        self._variation = variation

    def __repr__(self) -> str:
        return f"<ContentElement {self._alias} {self._key or '-'}>"

    @property
    def key(self) -> str:
        return self._key

    @property
    def content_type_alias(self) -> str:
        return self._alias

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._properties

    @property
    def variation(self) -> VariationContext:
        return self._variation

    def get_value(self, alias: str, culture: str | None) -> tuple[bool, Any]:
        """Return ``(found, value)`` for *alias* in *culture* (``None`` = invariant)."""
        if alias not in self._properties:
            return False, None
        raw = self._properties[alias]
        if not (isinstance(raw, Mapping) and VARIANTS_KEY in raw):
            return True, raw

        variants: Mapping[str, Any] = raw[VARIANTS_KEY]
        wanted = (culture or INVARIANT_KEY).lower()
        for code, value in variants.items():
            if code.lower() == wanted:
                return True, value
        return False, None

    def has_value(self, alias: str, culture: str | None = None) -> bool:
        found, value = self.get_value(alias, culture)
        return found and not _is_empty(value)


# -----------------------------------------------------------------------------

class ValueFallback:
    """
    Fallback-value provider.

    Walks the configured culture chain (``{"da-DK": "en-US", ...}``) and then
    the invariant value.  Cycles in the chain are cut at the first repeat.
    """

    def __init__(self, fallback_cultures: Mapping[str, str] | None = None):
        self._chain = {k.lower(): v for k, v in (fallback_cultures or {}).items()}

    def try_get_value(
        self,
        element: ContentElement,
        alias: str,
        culture: str | None,
    ) -> tuple[bool, Any]:
        seen: set[str] = set()
        current = culture
        while current and current.lower() not in seen:
            seen.add(current.lower())
            current = self._chain.get(current.lower())
            if current and element.has_value(alias, current):
                return element.get_value(alias, current)

        if culture is not None and element.has_value(alias, None):
            return element.get_value(alias, None)
        return False, None


# -----------------------------------------------------------------------------

class ContentModelConverter:
    """Turns posted ``BlockData`` into a ``ContentElement``.  Nothing is cached."""

    def convert(self, block: BlockData, variation: VariationContext) -> ContentElement:
        for alias, raw in block.values.items():
            if isinstance(raw, Mapping) and VARIANTS_KEY in raw:
                variants = raw[VARIANTS_KEY]
                if not isinstance(variants, Mapping) or not all(isinstance(k, str) for k in variants):
                    raise ContentConversionError(
                        f"Property '{alias}' of '{block.content_type_alias}' has malformed culture variants"
                    )
        return ContentElement(
            key=block.udi,
            content_type_alias=block.content_type_alias,
            properties=block.values,
            variation=variation,
        )


# -----------------------------------------------------------------------------
