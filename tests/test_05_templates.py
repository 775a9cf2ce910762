"""
Tests for the block partial renderer.

Partials come either from the packaged site templates or from an in-memory
DictLoader.
"""
from __future__ import annotations

import pytest
from jinja2 import DictLoader

from blockpreview.core.config import get_settings
from blockpreview.schemas import BlockData
from blockpreview.services.builder import BlockModelBuilder
from blockpreview.services.content import VariationContext
from blockpreview.services.context import (
    PageSnapshot, PublishedRequest, RenderContext, bind_render_context,
)
from blockpreview.services.registry import ModelTypeRegistry
from blockpreview.services.renderer import render
from blockpreview.services.templates import BlockTemplateRenderer, TemplateResult


def _ctx(culture: str | None = None, page_id: int = 1) -> RenderContext:
    page = PageSnapshot(id=page_id, name="Home", url="/", published=True)
    return RenderContext(
        page=page,
        request=PublishedRequest(page=page),
        culture=culture,
        variation=VariationContext(culture),
    )


def _item(payload: dict, ctx: RenderContext):
    builder = BlockModelBuilder(ModelTypeRegistry(modules=["blockpreview.blocks"]))
    return builder.build(BlockData.model_validate(payload), ctx)


@pytest.fixture
def site_templates() -> BlockTemplateRenderer:
    s = get_settings()
    return BlockTemplateRenderer(
        template_dir=s.template_dir,
        partial_path=s.block_partial_path,
        extension=s.template_extension,
    )


# ── Naming convention ───────────────────────────────────────────────────────

def test_partial_name_from_alias():
    r = BlockTemplateRenderer(loader=DictLoader({}), partial_path="/blocklist/components/", extension=".html")
    assert r.partial_name("hero") == "blocklist/components/hero.html"


def test_loader_or_directory_required():
    with pytest.raises(ValueError):
        BlockTemplateRenderer()


# ── Found / not found ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_missing_partial_is_not_found_result():
    ctx = _ctx()
    r = BlockTemplateRenderer(loader=DictLoader({}))
    result = await r.render(_item({"alias": "hero", "title": "x"}, ctx), ctx)
    assert result == TemplateResult.not_found("blocklist/components/hero.html")
    assert result.markup == ""


@pytest.mark.asyncio
async def test_partial_receives_block_list_item():
    ctx = _ctx()
    r = BlockTemplateRenderer(loader=DictLoader({
        "blocklist/components/hero.html": "{{ model.udi }}|{{ model.content.title }}|{{ settings }}",
    }))
    result = await r.render(_item({"alias": "hero", "id": "b1", "title": "Welcome"}, ctx), ctx)
    assert result.found
    assert result.markup == "b1|Welcome|None"


@pytest.mark.asyncio
async def test_values_are_autoescaped():
    ctx = _ctx()
    r = BlockTemplateRenderer(loader=DictLoader({
        "blocklist/components/hero.html": "<h1>{{ model.content.title }}</h1>",
    }))
    result = await r.render(_item({"alias": "hero", "title": "<b>x</b>"}, ctx), ctx)
    assert result.markup == "<h1>&lt;b&gt;x&lt;/b&gt;</h1>"


@pytest.mark.asyncio
async def test_current_page_helpers_read_bound_context():
    ctx = _ctx("da-DK", page_id=7)
    r = BlockTemplateRenderer(loader=DictLoader({
        "blocklist/components/hero.html": "{{ is_current_page(7) }} {{ is_current_page(8) }} {{ current_culture() }}",
    }))
    item = _item({"alias": "hero"}, ctx)
    with bind_render_context(ctx):
        result = await r.render(item, ctx)
    assert result.markup == "True False da-DK"


# ── Site partials ───────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_site_hero_partial(site_templates):
    ctx = _ctx()
    item = _item({"alias": "hero", "title": "Welcome", "subtitle": "Hello", "link": "/about"}, ctx)
    result = await site_templates.render(item, ctx)
    assert result.found
    assert '<h1 class="hero__title">Welcome</h1>' in result.markup
    assert '<p class="hero__subtitle">Hello</p>' in result.markup
    assert 'href="/about"' in result.markup


@pytest.mark.asyncio
async def test_site_rich_text_partial_renders_markdown(site_templates):
    ctx = _ctx("en-US")
    item = _item({"alias": "richTextRow", "content": "Some **bold** text"}, ctx)
    result = await site_templates.render(item, ctx)
    assert "<strong>bold</strong>" in result.markup
    assert 'lang="en-US"' in result.markup


@pytest.mark.asyncio
async def test_site_rich_text_partial_renders_rst(site_templates):
    ctx = _ctx()
    item = _item({"alias": "richTextRow", "content": "Some *emphasis*.", "format": "rst"}, ctx)
    result = await site_templates.render(item, ctx)
    assert "<em>emphasis</em>" in result.markup


@pytest.mark.asyncio
async def test_site_code_snippet_partial_highlights(site_templates):
    ctx = _ctx()
    item = _item({"alias": "codeSnippetRow", "code": "x = 1", "language": "python", "title": "Example"}, ctx)
    result = await site_templates.render(item, ctx)
    assert '<div class="highlight">' in result.markup
    assert "<figcaption>Example</figcaption>" in result.markup


@pytest.mark.asyncio
async def test_site_image_partial_without_image_is_empty(site_templates):
    ctx = _ctx()
    result = await site_templates.render(_item({"alias": "imageRow"}, ctx), ctx)
    assert result.found
    assert result.markup.strip() == ""


@pytest.mark.asyncio
async def test_site_icon_link_partial_marks_current_page(site_templates):
    ctx = _ctx(page_id=3)
    item = _item({"alias": "iconLinkRow", "links": [
        {"url": "/here", "title": "Here", "pageId": 3},
        {"url": "/there", "title": "There", "pageId": 4},
    ]}, ctx)
    with bind_render_context(ctx):
        result = await site_templates.render(item, ctx)
    assert result.markup.count('aria-current="page"') == 1


# ── Rich text renderer ──────────────────────────────────────────────────────

def test_render_markdown_fenced_code_highlighted():
    html = render("```python\nx = 1\n```", "markdown")
    assert '<div class="highlight">' in html


def test_render_html_passthrough():
    assert render("<p>hi</p>", "html") == "<p>hi</p>"


def test_render_unknown_format_shows_source():
    assert render("<x>", "textile") == "<pre>&lt;x&gt;</pre>"


def test_render_empty():
    assert render("", "markdown") == ""
