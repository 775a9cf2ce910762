#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Block template renderer
=======================
Renders a block view model with the site's own Jinja2 partial.

The partial is found by naming convention:
``<block_partial_path>/<contentTypeAlias>.<template_extension>``.
A missing partial is reported as ``TemplateResult.not_found`` rather than
raised, so the caller can treat it as empty output.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import (
    BaseLoader, Environment, FileSystemLoader, TemplateNotFound, select_autoescape,
)
from markupsafe import Markup

from blockpreview.core.config import get_settings
from . import renderer
from .context import RenderContext, current_render_context

if TYPE_CHECKING:
    from .builder import BlockListItem

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TemplateResult:
    name: str
    found: bool
    markup: str = ""

    @classmethod
    def rendered(cls, name: str, markup: str) -> "TemplateResult":
        return cls(name=name, found=True, markup=markup)

    @classmethod
    def not_found(cls, name: str) -> "TemplateResult":
        return cls(name=name, found=False)


# -----------------------------------------------------------------------------
# Template helpers
# -----------------------------------------------------------------------------

def _rich_text(value: str | None, fmt: str = "markdown") -> Markup:
    return Markup(renderer.render(value or "", fmt))


def _highlight(code: str | None, lang: str = "") -> Markup:
    return Markup(renderer.highlight_code(code or "", lang or ""))


def _is_current_page(page_id: int) -> bool:
    ctx = current_render_context()
    return ctx is not None and ctx.request.is_current_page(int(page_id))


def _current_culture() -> str | None:
    ctx = current_render_context()
    return ctx.culture if ctx else None


# -----------------------------------------------------------------------------

class BlockTemplateRenderer:

    def __init__(
        self,
        loader: BaseLoader | None = None,
        template_dir: Path | str | None = None,
        partial_path: str = "blocklist/components",
        extension: str = "html",
    ):
        if loader is None:
            if template_dir is None:
                raise ValueError("Either a loader or a template_dir is required")
            loader = FileSystemLoader(str(template_dir))

        self.partial_path = partial_path.strip("/")
        self.extension = extension.lstrip(".")
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "htm"], default_for_string=True),
            enable_async=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["markdown"] = lambda v: _rich_text(v, "markdown")
        self.env.filters["rst"] = lambda v: _rich_text(v, "rst")
        self.env.filters["rich_text"] = _rich_text
        self.env.filters["highlight"] = _highlight
        self.env.globals["is_current_page"] = _is_current_page
        self.env.globals["current_culture"] = _current_culture

    def partial_name(self, alias: str) -> str:
        return f"{self.partial_path}/{alias}.{self.extension}"

    async def render(self, view_model: "BlockListItem", ctx: RenderContext) -> TemplateResult:
        name = self.partial_name(view_model.content.content_type_alias)
        try:
            template = self.env.get_template(name)
        except TemplateNotFound:
            log.debug("No block partial %s", name)
            return TemplateResult.not_found(name)

        markup = await template.render_async(
            model=view_model,
            content=view_model.content,
            settings=view_model.settings,
            page=ctx.page,
            request=ctx.request,
            culture=ctx.culture,
        )
        return TemplateResult.rendered(name, markup)


# -----------------------------------------------------------------------------

@lru_cache
def get_block_template_renderer() -> BlockTemplateRenderer:
    settings = get_settings()
    return BlockTemplateRenderer(
        template_dir=settings.template_dir,
        partial_path=settings.block_partial_path,
        extension=settings.template_extension,
    )


# -----------------------------------------------------------------------------
