#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for BlockPreview tests.
Uses an in-memory SQLite database so no external services are needed.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jinja2 import DictLoader
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from blockpreview.core.config import get_settings
from blockpreview.core.database import Base, get_db
from blockpreview.core.security import create_access_token
from blockpreview.main import create_app
from blockpreview.models import Domain, Page, PageCulture
from blockpreview.services.preview import BlockPreviewService
from blockpreview.services.registry import ModelTypeRegistry
from blockpreview.services.templates import BlockTemplateRenderer


# -----------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# -----------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session_factory(db_engine):
    """Shared sessionmaker; both client and db_session use this."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(db_session_factory):
    """Direct DB session for seeding pages."""
    async with db_session_factory() as session:
        yield session


@pytest.fixture
def app(db_session_factory):
    async def override_get_db():
        async with db_session_factory() as session:
            yield session

    application = create_app()
    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture(scope="function")
async def client(app):
    """HTTP test client wired to an isolated in-memory DB."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def editor_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token('editor-1')}"}


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

async def create_page(
    db: AsyncSession,
    name: str = "Home",
    *,
    published: bool = True,
    parent_id: int | None = None,
    url_segment: str | None = None,
    cultures: tuple[str, ...] = (),
    domains: tuple[tuple[str, str], ...] = (),
) -> Page:
    """Insert a page with optional cultures and ``(hostname, culture)`` domains."""
    page = Page(
        name=name,
        parent_id=parent_id,
        url_segment=url_segment if url_segment is not None else name.lower(),
        published=published,
    )
    page.cultures = [PageCulture(culture=c, name=name) for c in cultures]
    page.domains = [
        Domain(hostname=host, culture=culture, sort_order=i)
        for i, (host, culture) in enumerate(domains)
    ]
    db.add(page)
    await db.commit()
    return page


def make_preview_service(templates: dict[str, str], **settings_overrides) -> BlockPreviewService:
    """Preview service over the site's block models and in-memory partials."""
    settings = get_settings().model_copy(update=settings_overrides)
    return BlockPreviewService(
        registry=ModelTypeRegistry(modules=["blockpreview.blocks"]),
        templates=BlockTemplateRenderer(loader=DictLoader(templates)),
        settings=settings,
    )


# -----------------------------------------------------------------------------
