#!/usr/bin/env python
#
# -------------------------------------------------------------------------------
"""Seed a small two-language site into the content store for local previews."""

import asyncio

from blockpreview.core.config import get_settings
from blockpreview.core.database import create_all_tables, dispose_db, get_session_factory, init_db
from blockpreview.models import Domain, Page, PageCulture


async def seed():
    s = get_settings()
    print("DATABASE_URL:", s.database_url)
    init_db()
    await create_all_tables()
    factory = get_session_factory()
    async with factory() as db:
        home = Page(name="Home", url_segment="home", published=True)
        home.cultures = [PageCulture(culture="en-US", name="Home"), PageCulture(culture="da-DK", name="Forside")]
        home.domains = [
            Domain(hostname="localhost", culture="en-US", sort_order=0),
            Domain(hostname="127.0.0.1", culture="da-DK", sort_order=1),
        ]
        db.add(home)
        await db.flush()

        about = Page(parent_id=home.id, name="About", url_segment="about", published=False)
        about.cultures = [PageCulture(culture="en-US", name="About"), PageCulture(culture="da-DK", name="Om os")]
        db.add(about)
        await db.commit()
        print(f"  home id={home.id}  about id={about.id} (draft)")
    await dispose_db()

asyncio.run(seed())
