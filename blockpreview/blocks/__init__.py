"""
Block models of the site's block list.

Every module in this package is scanned by the model registry; a class
tagged with ``@published_model`` becomes the model for that content type.
"""
from .base import PublishedElementModel, published_model
from .code_snippet import CodeSnippetRow
from .hero import Hero
from .icon_link import IconLink, IconLinkRow
from .image import ImageRow
from .media import MediaItem
from .rich_text import RichTextRow
from .video import VideoRow

__all__ = [
    "PublishedElementModel", "published_model",
    "CodeSnippetRow", "Hero", "IconLink", "IconLinkRow",
    "ImageRow", "MediaItem", "RichTextRow", "VideoRow",
]
