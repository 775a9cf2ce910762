#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Preview markup clean-up.

Links inside the back office preview must not navigate away from the editor,
so the href of every anchor (and image-map area) is replaced with an inert
target.  Nothing else in the fragment is touched.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

DEFAULT_INERT_HREF = "javascript:;"


# -----------------------------------------------------------------------------

class _SourceOrderFormatter(HTMLFormatter):
    """The "minimal" HTML formatter, minus the alphabetical attribute sort."""

    def __init__(self):
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag):
        if not tag.attrs:
            return []
        return list(tag.attrs.items())


_FORMATTER = _SourceOrderFormatter()


# -----------------------------------------------------------------------------

def clean_up_markup(markup: str | None, inert_href: str = DEFAULT_INERT_HREF) -> str | None:
    """Neutralise anchor hrefs in *markup*; blank input is returned unchanged."""
    if markup is None or not markup.strip():
        return markup

    soup = BeautifulSoup(markup, "html.parser")
    for link in soup.find_all(["a", "area"], href=True):
        link["href"] = inert_href
    return soup.decode(formatter=_FORMATTER)


# -----------------------------------------------------------------------------
