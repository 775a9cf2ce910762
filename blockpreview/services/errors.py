#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Preview pipeline exceptions.

"Page not saved yet" and "template not found" are ordinary results, not
exceptions; see ``services.context.NotReady`` and
``services.templates.TemplateResult``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations


# -----------------------------------------------------------------------------

class PreviewError(Exception):
    """Base class for failures inside the preview pipeline."""


class PageNotFoundError(PreviewError):
    def __init__(self, page_id: int):
        super().__init__(f"Page {page_id} not found in the published or draft store")
        self.page_id = page_id


class UnknownContentTypeError(PreviewError):
    def __init__(self, alias: str):
        super().__init__(f"No block model is registered for content type '{alias}'")
        self.alias = alias


class ContentConversionError(PreviewError):
    """Raw block data could not be turned into a content element."""


class DuplicateContentTypeAliasError(PreviewError):
    def __init__(self, alias: str, types: list[type]):
        names = ", ".join(f"{t.__module__}.{t.__qualname__}" for t in types)
        super().__init__(f"Content type '{alias}' is declared by more than one model: {names}")
        self.alias = alias
        self.types = types


# -----------------------------------------------------------------------------
