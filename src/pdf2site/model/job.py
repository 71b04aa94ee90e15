"""Job data model: pages, hotspots, lead gate policy and the template job.

Parsing helpers accept the camelCase request shape used by the upload/editor
front end (``pageIndex``, ``leadGen``, ``freePages``, ``customCss``) as well
as snake_case keys. Malformed-but-well-typed input resolves to documented
defaults instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pdf2site.ids import compute_site_id
from pdf2site.pipeline_logger import log_fallback

DEFAULT_TITLE = "Presentation"
DEFAULT_FREE_PAGES = 3


class TemplateKind(Enum):
    """Closed set of template variants."""

    PRESENTATION = "presentation"  # Slideshow
    FLIPBOOK = "flipbook"
    DOCUMENTATION = "documentation"  # Scroll-Doc

    @classmethod
    def resolve(cls, value: object) -> TemplateKind:
        """Map a template name to a variant, falling back to the slideshow."""
        if isinstance(value, TemplateKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            log_fallback("Template", "unknown_template", "presentation", f"got {value!r}")
            return cls.PRESENTATION


def _get(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_float(value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return math.nan


def _as_positive_int(value: object) -> int | None:
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
    return number if number >= 1 else None


_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0", ""})


def _as_bool(value: object, default: bool, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    log_fallback("Request", "invalid_flag", str(default).lower(), f"{name}={value!r}")
    return default


@dataclass(frozen=True, slots=True)
class Page:
    index: int  # 1-based
    html: str = ""
    text: str | None = None


@dataclass(frozen=True, slots=True)
class Hotspot:
    id: str
    page_index: int  # 0-based
    top: float
    left: float
    width: float
    height: float
    url: str
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label or self.url

    @property
    def has_finite_geometry(self) -> bool:
        return all(math.isfinite(v) for v in (self.top, self.left, self.width, self.height))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, position: int = 0) -> Hotspot:
        page_index = _get(data, "page_index", "pageIndex", default=-1)
        try:
            page_index = int(page_index)
        except (TypeError, ValueError):
            page_index = -1
        label = _get(data, "label")
        return cls(
            id=str(_get(data, "id", default=f"hotspot-{position + 1}")),
            page_index=page_index,
            top=_as_float(_get(data, "top", default=0)),
            left=_as_float(_get(data, "left", default=0)),
            width=_as_float(_get(data, "width", default=0)),
            height=_as_float(_get(data, "height", default=0)),
            url=str(_get(data, "url", default="")),
            label=str(label) if label else None,
        )


@dataclass(frozen=True, slots=True)
class LeadGateFields:
    """Contact fields collected by the gate form."""

    name: bool = True
    email: bool = True
    company: bool = False
    phone: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LeadGateFields:
        if not data:
            return cls()
        defaults = cls()
        return cls(
            name=_as_bool(data.get("name"), defaults.name, "name"),
            email=_as_bool(data.get("email"), defaults.email, "email"),
            company=_as_bool(data.get("company"), defaults.company, "company"),
            phone=_as_bool(data.get("phone"), defaults.phone, "phone"),
        )


@dataclass(frozen=True, slots=True)
class LeadGatePolicy:
    enabled: bool = False
    free_pages: int = DEFAULT_FREE_PAGES
    fields: LeadGateFields = field(default_factory=LeadGateFields)
    webhook_url: str | None = None

    def __post_init__(self) -> None:
        # at least the first page stays readable
        if self.free_pages < 1:
            log_fallback("Lead gate", "invalid_free_pages", "1", f"got {self.free_pages!r}")
            object.__setattr__(self, "free_pages", 1)

    def is_locked(self, page_index: int) -> bool:
        """Whether the page at the 0-based ``page_index`` sits behind the gate."""
        return self.enabled and page_index >= self.free_pages

    def locked_indices(self, page_count: int) -> list[int]:
        return [i for i in range(page_count) if self.is_locked(i)]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LeadGatePolicy:
        if not data:
            return cls()
        raw_free = _get(data, "free_pages", "freePages", default=DEFAULT_FREE_PAGES)
        free_pages = _as_positive_int(raw_free)
        if free_pages is None:
            log_fallback("Lead gate", "invalid_free_pages", "1", f"got {raw_free!r}")
            free_pages = 1
        webhook = _get(data, "webhook_url", "webhookUrl")
        return cls(
            enabled=_as_bool(data.get("enabled"), False, "enabled"),
            free_pages=free_pages,
            fields=LeadGateFields.from_dict(data.get("fields")),
            webhook_url=str(webhook) if webhook else None,
        )


@dataclass(frozen=True, slots=True)
class SeoOptions:
    description: str | None = None
    keywords: tuple[str, ...] = ()
    author: str | None = None
    base_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> SeoOptions | None:
        if not data:
            return None
        keywords = data.get("keywords") or ()
        if isinstance(keywords, str):
            keywords = [k for k in (part.strip() for part in keywords.split(",")) if k]
        return cls(
            description=data.get("description") or None,
            keywords=tuple(str(k) for k in keywords),
            author=data.get("author") or None,
            base_url=_get(data, "base_url", "baseUrl") or None,
        )


@dataclass(frozen=True, slots=True)
class AnalyticsOptions:
    endpoint: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AnalyticsOptions | None:
        if not data:
            return None
        endpoint = _get(data, "endpoint", "webhook_url", "webhookUrl")
        return cls(endpoint=str(endpoint)) if endpoint else None


@dataclass(frozen=True)
class TemplateJob:
    """Everything needed to assemble one site.

    ``page_count`` may be left unset, in which case the highest supplied page
    index (or 1) is used. ``custom_css`` is trusted and emitted verbatim.
    """

    template: TemplateKind = TemplateKind.PRESENTATION
    title: str = DEFAULT_TITLE
    pages: tuple[Page, ...] = ()
    page_count: int | None = None
    hotspots: tuple[Hotspot, ...] = ()
    lead_gate: LeadGatePolicy = field(default_factory=LeadGatePolicy)
    custom_css: str | None = None
    site_id: str | None = None
    stylesheets: tuple[str, ...] = ()
    seo: SeoOptions | None = None
    analytics: AnalyticsOptions | None = None

    @property
    def display_title(self) -> str:
        title = (self.title or "").strip()
        return title or DEFAULT_TITLE

    @property
    def resolved_page_count(self) -> int:
        if self.page_count is not None and self.page_count >= 1:
            return int(self.page_count)
        if self.pages:
            return max(1, max(p.index for p in self.pages))
        return 1

    @property
    def resolved_site_id(self) -> str:
        return self.site_id or compute_site_id(self.display_title)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        pages: Iterable[Page] = (),
    ) -> TemplateJob:
        """Build a job from request values, applying documented fallbacks.

        Args:
            data: Request body (camelCase or snake_case keys)
            pages: Page fragments from the page store

        Returns:
            TemplateJob with unknown template names mapped to the slideshow,
            blank titles mapped to "Presentation" and unusable page counts
            left unset.
        """
        raw_hotspots: Sequence[Mapping[str, Any]] = data.get("hotspots") or ()
        stylesheets = data.get("stylesheets") or ()
        return cls(
            template=TemplateKind.resolve(data.get("template", TemplateKind.PRESENTATION.value)),
            title=str(data.get("title") or DEFAULT_TITLE),
            pages=tuple(pages),
            page_count=_as_positive_int(_get(data, "page_count", "pageCount")),
            hotspots=tuple(
                Hotspot.from_dict(h, position=i) for i, h in enumerate(raw_hotspots)
            ),
            lead_gate=LeadGatePolicy.from_dict(_get(data, "lead_gate", "leadGen", "leadGate")),
            custom_css=_get(data, "custom_css", "customCss") or None,
            site_id=_get(data, "site_id", "siteId") or None,
            stylesheets=tuple(str(s) for s in stylesheets),
            seo=SeoOptions.from_dict(data.get("seo")),
            analytics=AnalyticsOptions.from_dict(data.get("analytics")),
        )


__all__ = [
    "AnalyticsOptions",
    "DEFAULT_FREE_PAGES",
    "DEFAULT_TITLE",
    "Hotspot",
    "LeadGateFields",
    "LeadGatePolicy",
    "Page",
    "SeoOptions",
    "TemplateJob",
    "TemplateKind",
]
