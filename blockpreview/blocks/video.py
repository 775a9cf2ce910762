"""Video row.  Watch URLs for known hosts are turned into embed URLs."""
from __future__ import annotations

import re

from .base import PublishedElementModel, published_model


_YOUTUBE_RE = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|shorts/)|youtu\.be/)([\w-]{6,})"
)
_VIMEO_RE = re.compile(r"vimeo\.com/(?:video/)?(\d+)")


@published_model("videoRow")
class VideoRow(PublishedElementModel):

    @property
    def video_url(self) -> str:
        return self.text("videoUrl")

    @property
    def caption(self) -> str:
        return self.text("caption")

    @property
    def embed_url(self) -> str:
        url = self.video_url
        m = _YOUTUBE_RE.search(url)
        if m:
            return f"https://www.youtube-nocookie.com/embed/{m.group(1)}"
        m = _VIMEO_RE.search(url)
        if m:
            return f"https://player.vimeo.com/video/{m.group(1)}"
        return ""
