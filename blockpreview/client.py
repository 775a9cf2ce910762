#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Preview client
==============
``PreviewApiClient`` talks to the preview endpoints over HTTP (httpx); the
preview path is read from the server variables, never hard-coded.

``DebouncedPreview`` drives it the way the block editor does: every change
cancels the pending request and schedules a new one after a quiet period, so
only the settled value is sent.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

log = logging.getLogger(__name__)

LOADING_MARKUP = "Loading preview"
SERVER_VARIABLES_PATH = "/api/v1/server-variables"
DEFAULT_DEBOUNCE_SECONDS = 0.5


# -----------------------------------------------------------------------------

class PreviewApiClient:

    def __init__(self, http: httpx.AsyncClient, token: str | None = None):
        self._http = http
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._variables: dict[str, Any] | None = None

    async def server_variables(self) -> dict[str, Any]:
        resp = await self._http.get(SERVER_VARIABLES_PATH, headers=self._headers)
        resp.raise_for_status()
        return resp.json()

    async def _block_preview_variables(self) -> dict[str, Any]:
        if self._variables is None:
            self._variables = (await self.server_variables())["blockPreview"]
        return self._variables

    async def preview_path(self) -> str:
        return (await self._block_preview_variables())["previewApi"]

    async def debounce_seconds(self) -> float:
        variables = await self._block_preview_variables()
        return float(variables.get("debounceSeconds", DEFAULT_DEBOUNCE_SECONDS))

    async def get_preview(self, block_data: dict[str, Any], page_id: int, culture: str = "") -> str:
        """Post *block_data* and return the preview markup (or editor message)."""
        path = await self.preview_path()
        resp = await self._http.post(
            path,
            params={"pageId": page_id, "culture": culture or ""},
            json=block_data,
            headers=self._headers,
        )
        resp.raise_for_status()
        return resp.json()


# -----------------------------------------------------------------------------

class DebouncedPreview:
    """
    Keeps a block's preview markup in step with its data.

    ``update()`` must be called from a running event loop.  ``loading`` is
    true until the first preview arrives and while a request is in flight; a
    failed request leaves the previous markup in place and is logged.
    """

    def __init__(
        self,
        fetch: Callable[[dict[str, Any]], Awaitable[str]],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self._fetch = fetch
        self.delay = delay
        self._task: asyncio.Task | None = None
        self.markup: str = LOADING_MARKUP
        self.loading: bool = True

    @classmethod
    async def for_page(
        cls,
        client: PreviewApiClient,
        page_id: int,
        culture: str = "",
        delay: float | None = None,
    ) -> "DebouncedPreview":
        """Bind to one page; the delay defaults to the server's ``debounceSeconds``."""
        if delay is None:
            delay = await client.debounce_seconds()
        return cls(lambda data: client.get_preview(data, page_id, culture), delay=delay)

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def update(self, block_data: dict[str, Any]) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(block_data))
        self._task.add_done_callback(_log_failure)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the currently scheduled preview, if any, to finish."""
        task = self._task
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise

    async def _run(self, block_data: dict[str, Any]) -> None:
        await asyncio.sleep(self.delay)
        self.loading = True
        try:
            self.markup = await self._fetch(block_data)
        finally:
            self.loading = False


def _log_failure(task: asyncio.Task) -> None:
    if not task.cancelled() and task.exception() is not None:
        log.error("Block preview request failed", exc_info=task.exception())


# -----------------------------------------------------------------------------
