"""
Tests for preview markup clean-up.

Only anchor hrefs change; everything else in the fragment must come back as it
went in.
"""
from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from blockpreview.services.sanitizer import DEFAULT_INERT_HREF, clean_up_markup


def _tags(markup: str, skip=("a", "area")) -> list[tuple[str, dict]]:
    soup = BeautifulSoup(markup, "html.parser")
    return [(t.name, dict(t.attrs)) for t in soup.find_all(True) if t.name not in skip]


# ── Blank input ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("markup", ["", "   ", "\n\t", None])
def test_blank_markup_returned_unchanged(markup):
    assert clean_up_markup(markup) == markup


# ── Links ──────────────────────────────────────────────────────────────────

def test_href_replaced_with_inert_target():
    out = clean_up_markup('<h1>Welcome</h1><a href="https://x">more</a>')
    assert out == '<h1>Welcome</h1><a href="javascript:;">more</a>'


def test_other_link_attributes_and_text_kept():
    out = clean_up_markup('<a class="btn" href="/about" target="_blank" data-id="7">About <b>us</b></a>')
    assert out == '<a class="btn" href="javascript:;" target="_blank" data-id="7">About <b>us</b></a>'


def test_anchor_without_href_untouched():
    markup = '<a name="top">Top</a>'
    assert clean_up_markup(markup) == markup


def test_image_map_area_neutralised():
    out = clean_up_markup('<map name="m"><area shape="rect" coords="0,0,1,1" href="/x"></map>')
    assert 'href="javascript:;"' in out
    assert 'href="/x"' not in out


def test_custom_inert_href():
    out = clean_up_markup('<a href="/x">x</a>', inert_href="#")
    assert out == '<a href="#">x</a>'


def test_nested_links_all_replaced():
    out = clean_up_markup('<ul><li><a href="/a">a</a></li><li><a href="/b">b</a></li></ul>')
    assert out.count(f'href="{DEFAULT_INERT_HREF}"') == 2


# ── Shape ──────────────────────────────────────────────────────────────────

def test_non_anchor_elements_unchanged():
    markup = (
        '<section class="hero"><h1>T</h1><p>Intro <em>text</em></p>'
        '<img src="/img.png" alt="x"><a href="/go">go</a><form action="/post"></form></section>'
    )
    assert _tags(clean_up_markup(markup)) == _tags(markup)


def test_attribute_order_kept_on_every_element():
    markup = '<div id="b" class="a" data-z="1"><img src="/i.png" alt="x" width="10"><a href="/go" rel="next">go</a></div>'
    assert clean_up_markup(markup) == (
        '<div id="b" class="a" data-z="1"><img src="/i.png" alt="x" width="10"/>'
        '<a href="javascript:;" rel="next">go</a></div>'
    )


def test_scripts_and_styles_left_alone():
    markup = '<style>.a{color:red}</style><script>var a = 1;</script><a href="/x">x</a>'
    out = clean_up_markup(markup)
    assert "<style>.a{color:red}</style>" in out
    assert "<script>var a = 1;</script>" in out


def test_malformed_markup_tolerated():
    out = clean_up_markup('<div><a href="/x">open <p>para')
    assert 'href="javascript:;"' in out
    assert "para" in out


# ── Idempotence ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("markup", [
    '<h1>Welcome</h1><a href="https://x">more</a>',
    '<p>a &amp; b <br> c</p><a href="/x" title="t">x</a>',
    '<div><a href="/x">open <p>para',
    'plain text, no tags',
    '<a name="top"></a><img src="/i.png">',
])
def test_clean_up_is_idempotent(markup):
    once = clean_up_markup(markup)
    assert clean_up_markup(once) == once
