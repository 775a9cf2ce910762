#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
ORM Models for the content store
================================

Tables
------
pages           : content pages, arranged as a tree (``parent_id``)
page_cultures   : cultures a page is available in (none = invariant page)
domains         : hostnames bound to a page, each implying a culture

Every saved page is in the draft store.  The published store is the subset
of rows with ``published = true``.  Timestamps stored in UTC.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blockpreview.core.database import Base


# ----------------------------------------------------------------------------

def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Page(Base):
    __tablename__ = "pages"

    id:          Mapped[int]        = mapped_column(Integer, primary_key=True, autoincrement=True)
    parent_id:   Mapped[int | None] = mapped_column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), nullable=True, index=True)
    name:        Mapped[str]        = mapped_column(String(255), nullable=False)
    url_segment: Mapped[str]        = mapped_column(String(255), nullable=False, default="")
    published:   Mapped[bool]       = mapped_column(Boolean, default=False, nullable=False, index=True)
    created_at:  Mapped[datetime]   = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at:  Mapped[datetime]   = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relationships
    cultures: Mapped[list["PageCulture"]]   = relationship(
        back_populates="page",
        cascade="all, delete-orphan",
        order_by="PageCulture.culture",
    )
    domains:  Mapped[list["Domain"]]        = relationship(
        back_populates="page",
        cascade="all, delete-orphan",
        order_by="Domain.sort_order",
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# page_cultures
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageCulture(Base):
    __tablename__ = "page_cultures"
    __table_args__ = (
        UniqueConstraint("page_id", "culture", name="uq_page_cultures_page_culture"),
    )

    id:      Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    page_id: Mapped[int] = mapped_column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True)
    # Canonical culture code, e.g. "en-US"
    culture: Mapped[str] = mapped_column(String(16), nullable=False)
    # Variant name of the page in this culture
    name:    Mapped[str] = mapped_column(String(255), nullable=False, default="")

    page: Mapped["Page"] = relationship(back_populates="cultures")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# domains
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class Domain(Base):
    __tablename__ = "domains"
    __table_args__ = (
        UniqueConstraint("hostname", name="uq_domains_hostname"),
    )

    id:         Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    page_id:    Mapped[int] = mapped_column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True)
    hostname:   Mapped[str] = mapped_column(String(255), nullable=False)
    culture:    Mapped[str] = mapped_column(String(16), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    page: Mapped["Page"] = relationship(back_populates="domains")
