"""Tests for page lookup, culture resolution and the request-scoped render context."""
from __future__ import annotations

import asyncio

import pytest

from blockpreview.services.context import (
    NotReady, PageSnapshot, PublishedRequest, RenderContext,
    bind_render_context, current_render_context, resolve_render_context,
)
from blockpreview.services.errors import PageNotFoundError
from tests.conftest import create_page


# ── Page lookup ─────────────────────────────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize("page_id", [0, -1, -500])
async def test_unsaved_page_is_not_ready_without_store_access(page_id):
    # db=None: any store access would fail
    result = await resolve_render_context(None, page_id, "en-US")
    assert result == NotReady(page_id)


@pytest.mark.asyncio
async def test_published_page_resolved(db_session):
    page = await create_page(db_session, "Home", published=True)
    ctx = await resolve_render_context(db_session, page.id)
    assert isinstance(ctx, RenderContext)
    assert ctx.page.id == page.id
    assert ctx.page.published is True
    assert ctx.request.is_current_page(page.id)
    assert not ctx.request.is_current_page(page.id + 1)


@pytest.mark.asyncio
async def test_unpublished_page_resolved_from_drafts(db_session):
    page = await create_page(db_session, "Draft", published=False)
    ctx = await resolve_render_context(db_session, page.id)
    assert ctx.page.id == page.id
    assert ctx.page.published is False


@pytest.mark.asyncio
async def test_missing_page_raises(db_session):
    with pytest.raises(PageNotFoundError) as exc:
        await resolve_render_context(db_session, 4242)
    assert exc.value.page_id == 4242


@pytest.mark.asyncio
async def test_page_url_built_from_ancestors(db_session):
    root = await create_page(db_session, "Home")
    blog = await create_page(db_session, "Blog", parent_id=root.id)
    post = await create_page(db_session, "First Post", parent_id=blog.id, url_segment="first-post")
    ctx = await resolve_render_context(db_session, post.id)
    assert ctx.page.url == "/blog/first-post/"


# ── Culture ─────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_invariant_page_skips_culture(db_session):
    page = await create_page(db_session, "Home")
    ctx = await resolve_render_context(db_session, page.id, "en-US")
    assert ctx.culture is None
    assert ctx.variation.culture is None


@pytest.mark.asyncio
async def test_explicit_culture_used(db_session):
    page = await create_page(db_session, "Home", cultures=("en-US", "da-DK"))
    ctx = await resolve_render_context(db_session, page.id, "da-DK")
    assert ctx.culture == "da-DK"
    assert ctx.variation.culture == "da-DK"


@pytest.mark.asyncio
async def test_explicit_culture_canonicalised(db_session):
    page = await create_page(db_session, "Home", cultures=("en-US", "da-DK"))
    ctx = await resolve_render_context(db_session, page.id, "da-dk")
    assert ctx.culture == "da-DK"


@pytest.mark.asyncio
async def test_unconfigured_culture_skips_binding(db_session):
    page = await create_page(db_session, "Home", cultures=("en-US",))
    ctx = await resolve_render_context(db_session, page.id, "fr-FR")
    assert ctx.culture is None


@pytest.mark.asyncio
async def test_culture_derived_from_ancestor_domain(db_session):
    root = await create_page(
        db_session, "Home",
        cultures=("en-US", "da-DK"),
        domains=(("example.com", "en-US"), ("example.dk", "da-DK")),
    )
    child = await create_page(db_session, "About", parent_id=root.id, cultures=("en-US", "da-DK"))
    ctx = await resolve_render_context(db_session, child.id, "")
    assert ctx.culture == "en-US"


@pytest.mark.asyncio
async def test_culture_derived_from_request_host(db_session):
    root = await create_page(
        db_session, "Home",
        cultures=("en-US", "da-DK"),
        domains=(("example.com", "en-US"), ("https://example.dk/", "da-DK")),
    )
    ctx = await resolve_render_context(
        db_session, root.id, "", request_url="https://example.dk/umbraco/preview?pageId=1",
    )
    assert ctx.culture == "da-DK"


@pytest.mark.asyncio
async def test_no_hint_and_no_domains_skips_binding(db_session):
    page = await create_page(db_session, "Home", cultures=("en-US",))
    ctx = await resolve_render_context(db_session, page.id, "")
    assert ctx.culture is None


# ── Request-scoped binding ──────────────────────────────────────────────────

def _ctx(page_id: int) -> RenderContext:
    page = PageSnapshot(id=page_id, name=f"P{page_id}", url="/", published=True)
    return RenderContext(page=page, request=PublishedRequest(page=page))


def test_binding_is_restored_after_render():
    assert current_render_context() is None
    outer, inner = _ctx(1), _ctx(2)
    with bind_render_context(outer):
        assert current_render_context() is outer
        with bind_render_context(inner):
            assert current_render_context() is inner
        assert current_render_context() is outer
    assert current_render_context() is None


def test_binding_restored_when_render_fails():
    with pytest.raises(RuntimeError):
        with bind_render_context(_ctx(1)):
            raise RuntimeError("boom")
    assert current_render_context() is None


@pytest.mark.asyncio
async def test_concurrent_renders_see_their_own_context():
    async def render(page_id: int) -> int:
        with bind_render_context(_ctx(page_id)):
            await asyncio.sleep(0.01)
            return current_render_context().page.id

    results = await asyncio.gather(*(render(i) for i in range(1, 6)))
    assert results == [1, 2, 3, 4, 5]
    assert current_render_context() is None
