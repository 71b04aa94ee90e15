"""SEO metadata for generated sites.

Metadata is derived from the job title and the extracted plain text of the
first pages, optionally overridden by explicit ``SeoOptions``. Nothing here
embeds dates, so regenerating a site stays byte-identical.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pdf2site.model.job import SeoOptions

DESCRIPTION_MAX_CHARS = 160
SAMPLE_PAGES = 3
SAMPLE_CHARS = 5000
MAX_KEYWORDS = 10

STOP_WORDS = frozenset(
    {"about", "their", "there", "these", "those", "which", "would", "should", "could"}
)

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_ALPHA_RE = re.compile(r"[^a-z\s]")


@dataclass(frozen=True, slots=True)
class SeoMetadata:
    title: str
    description: str
    keywords: tuple[str, ...] = ()
    author: str | None = None


def _sample_text(page_texts: Sequence[str | None]) -> str:
    return " ".join(t for t in page_texts[:SAMPLE_PAGES] if t)[:SAMPLE_CHARS]


def extract_description(text: str) -> str:
    sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if len(s.strip()) > 30]
    return ". ".join(sentences[:2]).strip()[:DESCRIPTION_MAX_CHARS]


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> tuple[str, ...]:
    words = [
        w
        for w in _NON_ALPHA_RE.sub("", text.lower()).split()
        if len(w) > 4 and w not in STOP_WORDS
    ]
    # most_common keeps first-seen order among equal counts
    return tuple(word for word, _ in Counter(words).most_common(limit))


def extract_seo_metadata(
    title: str, page_texts: Sequence[str | None], page_count: int
) -> SeoMetadata:
    """Derive a description and keywords from the first pages' text.

    Falls back to "<title> - <N> page document" when no sentence is long
    enough to serve as a description.
    """
    text = _sample_text(page_texts)
    description = extract_description(text) or f"{title} - {page_count} page document"
    return SeoMetadata(title=title, description=description, keywords=extract_keywords(text))


def resolve_seo_metadata(
    options: SeoOptions, title: str, page_texts: Sequence[str | None], page_count: int
) -> SeoMetadata:
    extracted = extract_seo_metadata(title, page_texts, page_count)
    return SeoMetadata(
        title=title,
        description=options.description or extracted.description,
        keywords=options.keywords or extracted.keywords,
        author=options.author,
    )


def schema_markup(meta: SeoMetadata, page_count: int, url: str | None = None) -> dict[str, Any]:
    """JSON-LD ``DigitalDocument`` description of the site."""
    schema: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "DigitalDocument",
        "name": meta.title,
        "description": meta.description,
        "numberOfPages": page_count,
    }
    if meta.author:
        schema["author"] = {"@type": "Person", "name": meta.author}
    if url:
        schema["url"] = url
    return schema


def sitemap_entries(base_url: str, page_count: int) -> list[dict[str, str]]:
    """Sitemap rows: the site root, then one ``#page-N`` anchor per page."""
    entries = [{"loc": base_url, "priority": "1.0"}]
    for number in range(1, page_count + 1):
        entries.append({"loc": f"{base_url}#page-{number}", "priority": "0.8"})
    return entries


__all__ = [
    "SeoMetadata",
    "extract_description",
    "extract_keywords",
    "extract_seo_metadata",
    "resolve_seo_metadata",
    "schema_markup",
    "sitemap_entries",
]
