#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Block preview endpoints, used by the block list editor.

POST /api/v1/block-preview/markup?pageId=1234&culture=en-US   [editor]
POST /api/v1/block-preview/visibility                         [editor]

The markup endpoint always answers 200 with a JSON string: the rendered block
or a short message for the editor.  A broken preview must never block editing.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blockpreview.core.database import get_db
from blockpreview.core.security import get_current_editor_id
from blockpreview.schemas import VisibilityResponse, VisibilitySettings
from blockpreview.services.preview import BlockPreviewService, get_preview_service
from blockpreview.services.visibility import block_opacity


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/block-preview", tags=["block-preview"])


def _parse_page_id(value: str) -> int:
    """An id that is not a whole number is treated as an unsaved page."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


# -----------------------------------------------------------------------------

@router.post("/markup", response_model=str, name="preview_markup")
async def preview_markup(
    request:   Request,
    payload:   Any                 = Body(default=None),
    page_id:   str                 = Query(default="0", alias="pageId"),
    culture:   str                 = Query(default=""),
    _editor:   str                 = Depends(get_current_editor_id),
    db:        AsyncSession        = Depends(get_db),
    service:   BlockPreviewService = Depends(get_preview_service),
):
    """Render a block's unsaved data with the site's own partial view."""
    return await service.render(
        db, payload, _parse_page_id(page_id), culture, request_url=str(request.url)
    )


# -----------------------------------------------------------------------------

@router.post("/visibility", response_model=VisibilityResponse, name="block_visibility")
async def block_visibility(
    settings: VisibilitySettings,
    _editor:  str = Depends(get_current_editor_id),
):
    return VisibilityResponse(opacity=block_opacity(settings))


# -----------------------------------------------------------------------------
