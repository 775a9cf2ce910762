#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Block model builder
===================
Raw block data -> content element -> typed block model -> view model.

The element is always built fresh from the posted data for the culture of
the render context; unsaved edits are never cached.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from blockpreview.blocks.base import PublishedElementModel
from blockpreview.schemas import BlockData
from .content import ContentModelConverter, ValueFallback
from .context import RenderContext
from .registry import ModelTypeRegistry


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BlockListItem:
    """What a block partial receives as ``model``."""
    udi: str
    content: PublishedElementModel
    # Block settings are not rendered in previews
    settings: Any = None


# -----------------------------------------------------------------------------

class BlockModelBuilder:

    def __init__(
        self,
        registry: ModelTypeRegistry,
        converter: ContentModelConverter | None = None,
        fallback: ValueFallback | None = None,
    ):
        self.registry = registry
        self.converter = converter or ContentModelConverter()
        self.fallback = fallback or ValueFallback()

    def build(self, block: BlockData, ctx: RenderContext) -> BlockListItem:
        """Raises ``UnknownContentTypeError`` when no model declares the alias."""
        element = self.converter.convert(block, ctx.variation)
        content = self.registry.create(element, self.fallback)
        return BlockListItem(udi=block.udi, content=content)


# -----------------------------------------------------------------------------
