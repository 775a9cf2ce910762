#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Block preview service
=====================
Renders one block, as the live site would, for the back office editor.

    context -> block model -> partial -> clean-up

Every failure is contained here.  The editor always receives either markup
or a short human-readable message; details go to the log only.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from blockpreview.core.config import Settings, get_settings
from blockpreview.schemas import BlockData
from .builder import BlockModelBuilder
from .content import ContentModelConverter, ValueFallback
from .context import NotReady, bind_render_context, resolve_render_context
from .errors import PageNotFoundError, UnknownContentTypeError
from .registry import ModelTypeRegistry, get_model_registry
from .sanitizer import clean_up_markup
from .templates import BlockTemplateRenderer, get_block_template_renderer

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

def _block_label(payload: Any) -> str:
    """Best-effort identification of a (possibly invalid) payload for logs."""
    if not isinstance(payload, Mapping):
        return "-"
    udi = payload.get("udi") or payload.get("key") or payload.get("id") or "-"
    alias = payload.get("contentTypeAlias") or payload.get("alias") or "-"
    return f"{alias} ({udi})"


# -----------------------------------------------------------------------------

class BlockPreviewService:

    def __init__(
        self,
        registry: ModelTypeRegistry,
        templates: BlockTemplateRenderer,
        settings: Settings,
        converter: ContentModelConverter | None = None,
        fallback: ValueFallback | None = None,
    ):
        self.settings = settings
        self.templates = templates
        self.builder = BlockModelBuilder(
            registry,
            converter=converter,
            fallback=fallback or ValueFallback(settings.fallback_cultures),
        )

    async def render(
        self,
        db: AsyncSession,
        payload: Any,
        page_id: int,
        culture: str = "",
        request_url: str = "",
    ) -> str:
        """Return preview markup, or a message for the editor when there is none."""
        if page_id <= 0:
            log.debug("Preview skipped: page %d is not saved yet", page_id)
            return self.settings.page_not_saved_message

        label = _block_label(payload)
        try:
            ctx = await resolve_render_context(db, page_id, culture, request_url)
            if isinstance(ctx, NotReady):
                return self.settings.page_not_saved_message

            block = BlockData.model_validate(payload)

            with bind_render_context(ctx):
                view_model = self.builder.build(block, ctx)
                result = await self.templates.render(view_model, ctx)

            if not result.found:
                log.debug("Block %s has no partial %s; preview is empty", label, result.name)
            markup = result.markup if result.found else ""
            return clean_up_markup(markup, self.settings.inert_href)

        except (PageNotFoundError, UnknownContentTypeError) as exc:
            log.error("Error rendering preview for block %s: %s", label, exc)
        except ValidationError as exc:
            log.error("Error rendering preview for block %s: invalid block data\n%s", label, exc)
        except Exception:
            log.exception("Error rendering preview for block %s on page %d", label, page_id)

        return self.settings.preview_error_message


# -----------------------------------------------------------------------------

@lru_cache
def get_preview_service() -> BlockPreviewService:
    return BlockPreviewService(
        registry=get_model_registry(),
        templates=get_block_template_renderer(),
        settings=get_settings(),
    )


# -----------------------------------------------------------------------------
