#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render context resolution
=========================
Finds the page a block is being edited on and works out which culture the
preview must be rendered in.

The result is an immutable ``RenderContext`` that is passed down the
pipeline.  Template helpers that cannot receive it as an argument read it from
a ``ContextVar`` bound with ``bind_render_context``; the binding is always
reset when the render finishes, so nothing leaks between requests.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from types import MappingProxyType
from urllib.parse import urlsplit

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blockpreview.models import Page
from .content import VariationContext
from .errors import PageNotFoundError

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Context values
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PageSnapshot:
    id: int
    name: str
    url: str
    published: bool
    # lower-cased culture code -> canonical culture code
    cultures: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_invariant(self) -> bool:
        return not self.cultures


@dataclass(frozen=True)
class PublishedRequest:
    """The request the preview is rendered for, bound to the edited page."""
    page: PageSnapshot
    url: str = ""

    def is_current_page(self, page_id: int) -> bool:
        return self.page.id == page_id


@dataclass(frozen=True)
class RenderContext:
    page: PageSnapshot
    request: PublishedRequest
    culture: str | None = None
    variation: VariationContext = field(default_factory=VariationContext)


@dataclass(frozen=True)
class NotReady:
    """The page has never been saved, so there is nothing to render against."""
    page_id: int


# -----------------------------------------------------------------------------
# Request-scoped binding
# -----------------------------------------------------------------------------

_current_context: ContextVar[RenderContext | None] = ContextVar(
    "blockpreview_render_context", default=None,
)


@contextmanager
def bind_render_context(ctx: RenderContext) -> Iterator[RenderContext]:
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def current_render_context() -> RenderContext | None:
    return _current_context.get()


# -----------------------------------------------------------------------------
# Content store lookups
# -----------------------------------------------------------------------------

async def _load_page(db: AsyncSession, page_id: int, published_only: bool) -> Page | None:
    stmt = (
        select(Page)
        .where(Page.id == page_id)
        .options(selectinload(Page.cultures), selectinload(Page.domains))
    )
    if published_only:
        stmt = stmt.where(Page.published.is_(True))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_page_for_preview(db: AsyncSession, page_id: int) -> Page | None:
    """Published copy first, then the draft copy of an unpublished page."""
    page = await _load_page(db, page_id, published_only=True)
    if page is None:
        page = await _load_page(db, page_id, published_only=False)
    return page


async def _ancestor_chain(db: AsyncSession, page: Page) -> list[Page]:
    """``[page, parent, grandparent, ...]`` up to the root."""
    chain = [page]
    seen = {page.id}
    parent_id = page.parent_id
    while parent_id is not None and parent_id not in seen:
        parent = await _load_page(db, parent_id, published_only=False)
        if parent is None:
            break
        chain.append(parent)
        seen.add(parent.id)
        parent_id = parent.parent_id
    return chain


# -----------------------------------------------------------------------------
# Culture
# -----------------------------------------------------------------------------

def _host_of(value: str) -> str:
    if "//" not in value:
        value = "//" + value
    return (urlsplit(value).hostname or "").lower()


def culture_from_domains(chain: list[Page], request_host: str | None = None) -> str | None:
    """Culture of the nearest assigned domain, preferring the request's host."""
    host = (request_host or "").lower()
    for page in chain:
        if not page.domains:
            continue
        if host:
            for domain in page.domains:
                if _host_of(domain.hostname) == host:
                    return domain.culture
        return page.domains[0].culture
    return None


def _snapshot(chain: list[Page]) -> PageSnapshot:
    page = chain[0]
    # The root's own segment is not part of its descendants' URLs
    segments = [p.url_segment for p in reversed(chain[:-1]) if p.url_segment]
    url = "/" + "".join(f"{s}/" for s in segments)
    cultures = {c.culture.lower(): c.culture for c in page.cultures}
    return PageSnapshot(
        id=page.id,
        name=page.name,
        url=url,
        published=page.published,
        cultures=MappingProxyType(cultures),
    )


def _resolve_culture(
    snapshot: PageSnapshot,
    chain: list[Page],
    culture_hint: str | None,
    request_host: str | None,
) -> str | None:
    if snapshot.is_invariant:
        return None

    hint = (culture_hint or "").strip()
    candidate = hint or culture_from_domains(chain, request_host)
    if not candidate:
        return None

    canonical = snapshot.cultures.get(candidate.lower())
    if canonical is None:
        log.debug("Culture %r is not configured for page %d; rendering invariant", candidate, snapshot.id)
    return canonical


# -----------------------------------------------------------------------------

async def resolve_render_context(
    db: AsyncSession,
    page_id: int,
    culture_hint: str | None = None,
    request_url: str = "",
) -> RenderContext | NotReady:
    """
    Resolve the page and culture a block preview is rendered with.

    Returns ``NotReady`` for an unsaved page (``page_id <= 0``) without
    touching the store; raises ``PageNotFoundError`` when neither the
    published nor the draft store has the page.
    """
    if page_id <= 0:
        return NotReady(page_id)

    page = await get_page_for_preview(db, page_id)
    if page is None:
        raise PageNotFoundError(page_id)

    chain = await _ancestor_chain(db, page)
    snapshot = _snapshot(chain)
    request_host = urlsplit(request_url).hostname if request_url else None
    culture = _resolve_culture(snapshot, chain, culture_hint, request_host)

    return RenderContext(
        page=snapshot,
        request=PublishedRequest(page=snapshot, url=request_url),
        culture=culture,
        variation=VariationContext(culture),
    )


# -----------------------------------------------------------------------------
