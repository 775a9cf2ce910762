#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Server variables for the editor client.

GET /api/v1/server-variables   [editor]

Endpoint paths are taken from the route table so the client never
hard-codes them.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from blockpreview.core.config import get_settings
from blockpreview.core.security import get_current_editor_id
from blockpreview.schemas import BlockPreviewVariables, ServerVariablesResponse


# -----------------------------------------------------------------------------

router = APIRouter(tags=["config"])


# -----------------------------------------------------------------------------

@router.get("/server-variables", response_model=ServerVariablesResponse, response_model_by_alias=True)
async def server_variables(
    request: Request,
    _editor: str = Depends(get_current_editor_id),
):
    settings = get_settings()
    return ServerVariablesResponse(
        block_preview=BlockPreviewVariables(
            preview_api=str(request.app.url_path_for("preview_markup")),
            visibility_api=str(request.app.url_path_for("block_visibility")),
            debounce_seconds=settings.preview_debounce_seconds,
        ),
    )


# -----------------------------------------------------------------------------
