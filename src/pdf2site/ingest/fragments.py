"""Page fragment clean-up before assembly.

Page fragments arrive as standalone documents written next to their assets
(``pages/pageN.html`` referencing ``../assets/...``). Assembly inlines them
into ``index.html`` at the site root, so only the body is kept and asset
references are rebased onto the root.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

_URL_ATTRS = ("src", "href", "poster", "data-src")
_SRCSET_ATTRS = ("srcset",)
_CSS_URL_RE = re.compile(r"url\((?P<q>['\"]?)\.\./(?P<path>[^'\")]+)(?P=q)\)")


def extract_body(html: str) -> str:
    """Return the inner markup of ``<body>``; markup without a body is returned as-is."""

    if not html or not re.search(r"<body[\s>]", html, re.IGNORECASE):
        return html or ""
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body
    if body is None:
        return html
    return body.decode_contents().strip()


def _rebase(url: str) -> str:
    if url.startswith(("http://", "https://", "data:", "/", "#", "mailto:")):
        return url
    if url.startswith("../"):
        return url[3:]
    return url


def rebase_asset_urls(html: str) -> str:
    """Rewrite ``../assets/x.png`` style references so they resolve from the site root.

    - ../assets/a.png -> assets/a.png
    - leave absolute, data:, fragment and already root-relative paths unchanged
    - inline ``style="background: url(../assets/x.png)"`` is rewritten too
    """

    if "../" not in (html or ""):
        return html or ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(True):
        for attr in _URL_ATTRS:
            value = tag.get(attr)
            if isinstance(value, str):
                tag[attr] = _rebase(value)
        for attr in _SRCSET_ATTRS:
            value = tag.get(attr)
            if isinstance(value, str):
                candidates = [c.strip() for c in value.split(",") if c.strip()]
                tag[attr] = ", ".join(_rebase(c) for c in candidates)
        style = tag.get("style")
        if isinstance(style, str):
            tag["style"] = _CSS_URL_RE.sub(r"url(\g<q>\g<path>\g<q>)", style)
    return soup.decode()


def prepare_fragment(html: str) -> str:
    return rebase_asset_urls(extract_body(html))


__all__ = ["extract_body", "prepare_fragment", "rebase_asset_urls"]
