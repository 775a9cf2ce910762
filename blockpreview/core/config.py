#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via environment variables or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from blockpreview._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "BlockPreview"
    app_version: str = _pkg_version
    debug: bool = False
    environment: Literal["development", "testing", "production"] = "development"
    log_level: str = "INFO"

    # ── Database ───────────────────────────────────────────────────────────

    database_url: str = "sqlite+aiosqlite:///./blockpreview.db"
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # ── Auth / JWT ─────────────────────────────────────────────────────────

    secret_key: str = "CHANGE-ME-IN-PRODUCTION-use-a-random-64-char-hex-string"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 8   # 8 hours

    # ── Block preview ──────────────────────────────────────────────────────

    template_dir: Path = _PACKAGE_DIR / "templates"
    block_partial_path: str = "blocklist/components"
    template_extension: str = "html"
    block_model_modules: list[str] = ["blockpreview.blocks"]

    # Replaces every anchor href in preview markup
    inert_href: str = "javascript:;"

    page_not_saved_message: str = (
        "The page is not saved yet, so we can't create a preview. Save the page first."
    )
    preview_error_message: str = "Something went wrong rendering a preview."

    # culture -> culture to try when a property has no value for the first one
    fallback_cultures: dict[str, str] = {}

    preview_debounce_seconds: float = 0.5

    # ── CORS ───────────────────────────────────────────────────────────────

    cors_origins: list[str] = [
        "http://localhost:8000",
        "http://localhost:3000",
    ]


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
