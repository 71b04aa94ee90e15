"""Site assembly: one ``TemplateJob`` in, one ``OutputTree`` out.

The pipeline is shared by every template variant:

1. resolve the page count and index the supplied fragments (missing pages
   get a visible placeholder),
2. group hotspots by page and turn them into percentage overlays,
3. mark pages at or past ``free_pages`` as locked when the gate is enabled,
4. build the typed view model and serialize it through the variant's
   templates (autoescaped), plus stylesheets and the runtime script.

Generation never raises for malformed-but-well-typed jobs. It is pure and
deterministic: the same job always yields byte-identical files.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from contextlib import suppress
from typing import Any

from markupsafe import Markup

from pdf2site.model.job import LeadGatePolicy, Page, TemplateJob
from pdf2site.model.tree import INDEX_PATH, OutputTree, normalize_relative_path
from pdf2site.pipeline_logger import log_fallback, log_feature_decision, log_job_configuration
from pdf2site.render.gating import gate_storage_key
from pdf2site.render.geometry import hotspot_overlay, hotspots_by_page
from pdf2site.render.strategies import STRATEGIES, LayoutStrategy, strategy_for
from pdf2site.render.templating import Templates, default_templates
from pdf2site.render.view import GateFieldView, GateView, PageView, SeoView, SiteView
from pdf2site.seo import resolve_seo_metadata, schema_markup, sitemap_entries

ProgressCallback = Callable[[str, dict[str, int | str]], None] | None

SHARED_STYLESHEET_TEMPLATE = "styles/common.css"
SHARED_STYLESHEET_PATH = "assets/pdf2site.css"
CUSTOM_STYLESHEET_PATH = "assets/custom.css"
SITEMAP_PATH = "sitemap.xml"

# Every path generate() may emit; a regeneration removes the ones it no longer emits.
GENERATED_PATHS: tuple[str, ...] = (
    SHARED_STYLESHEET_PATH,
    CUSTOM_STYLESHEET_PATH,
    SITEMAP_PATH,
    *(path for s in STRATEGIES.values() for path in (s.stylesheet_path, s.script_path)),
)

_PLACEHOLDER = Markup('<div class="pdf-page page-placeholder"><p>Page {}</p></div>')


def _safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    with suppress(Exception):
        on_progress(event, payload)


def placeholder_html(number: int) -> Markup:
    return _PLACEHOLDER.format(number)


def index_fragments(pages: Iterable[Page], page_count: int) -> dict[int, Page]:
    """Map 1-based page numbers to fragments, dropping out-of-range entries."""

    indexed: dict[int, Page] = {}
    for page in pages:
        if not 1 <= page.index <= page_count:
            log_fallback(
                "Pages",
                "index_out_of_range",
                "skip",
                f"index={page.index}, page_count={page_count}",
            )
            continue
        if page.index in indexed:
            log_fallback("Pages", "duplicate_index", "keep_first", f"index={page.index}")
            continue
        indexed[page.index] = page
    return indexed


def gate_form_fields(policy: LeadGatePolicy) -> tuple[GateFieldView, ...]:
    fields = policy.fields
    result: list[GateFieldView] = []
    if fields.name:
        result.append(GateFieldView("name", "text", "Your Name", True))
    if fields.email:
        result.append(GateFieldView("email", "email", "Email Address", True))
    if fields.company:
        result.append(GateFieldView("company", "text", "Company (Optional)", False))
    if fields.phone:
        result.append(GateFieldView("phone", "tel", "Phone (Optional)", False))
    return tuple(result)


def build_gate_view(
    strategy: LayoutStrategy, policy: LeadGatePolicy, page_count: int
) -> GateView | None:
    if not policy.enabled:
        return None
    copy = strategy.gate_copy
    return GateView(
        heading=copy.heading,
        message=copy.message.format(pages=page_count),
        submit_label=copy.submit_label,
        fields=gate_form_fields(policy),
    )


def build_page_views(
    job: TemplateJob, strategy: LayoutStrategy, page_count: int
) -> tuple[PageView, ...]:
    fragments = index_fragments(job.pages, page_count)
    hotspots = hotspots_by_page(job.hotspots, page_count)
    states = strategy.initial_states(page_count)

    views: list[PageView] = []
    for i in range(page_count):
        number = i + 1
        page = fragments.get(number)
        if page is None or not page.html.strip():
            log_fallback("Pages", "missing_fragment", "placeholder", f"page={number}")
            body = placeholder_html(number)
            is_placeholder = True
        else:
            body = Markup(page.html)
            is_placeholder = False
        views.append(
            PageView(
                index=i,
                number=number,
                body=body,
                is_placeholder=is_placeholder,
                overlays=tuple(hotspot_overlay(h) for h in hotspots.get(i, [])),
                locked=job.lead_gate.is_locked(i),
                state=states[i],
                z_index=page_count - i,
            )
        )
    return tuple(views)


def build_seo_view(job: TemplateJob, page_count: int) -> SeoView | None:
    if job.seo is None:
        return None
    texts = [p.text for p in sorted(job.pages, key=lambda p: p.index)]
    meta = resolve_seo_metadata(job.seo, job.display_title, texts, page_count)
    return SeoView(
        description=meta.description,
        keywords=meta.keywords,
        author=meta.author,
        url=job.seo.base_url,
        schema=schema_markup(meta, page_count, job.seo.base_url),
    )


def _stylesheet_links(job: TemplateJob, strategy: LayoutStrategy) -> tuple[str, ...]:
    links: list[str] = []
    for href in job.stylesheets:
        try:
            links.append(normalize_relative_path(href))
        except ValueError:
            log_fallback("Stylesheets", "non_relative_href", "skip", f"href={href!r}")
    links.extend([SHARED_STYLESHEET_PATH, strategy.stylesheet_path])
    if job.custom_css:
        links.append(CUSTOM_STYLESHEET_PATH)
    return tuple(links)


def runtime_config(job: TemplateJob, page_count: int) -> dict[str, Any]:
    """Values the client runtime needs; serialized as JSON into the script."""

    policy = job.lead_gate
    gate: dict[str, Any] | None = None
    if policy.enabled:
        gate = {
            "freePages": policy.free_pages,
            "storageKey": gate_storage_key(job.resolved_site_id),
            "webhookUrl": policy.webhook_url,
        }
    analytics: dict[str, Any] | None = None
    if job.analytics is not None:
        analytics = {"endpoint": job.analytics.endpoint, "documentId": job.resolved_site_id}
    return {
        "template": job.template.value,
        "pageCount": page_count,
        "gate": gate,
        "analytics": analytics,
    }


def generate(
    job: TemplateJob,
    *,
    templates: Templates | None = None,
    on_progress: ProgressCallback = None,
) -> OutputTree:
    """Render ``job`` into an in-memory output tree.

    Args:
        job: Pages, hotspots, gate policy and presentation options
        templates: Template environment (defaults to the packaged templates)
        on_progress: Optional progress callback; its errors are suppressed

    Returns:
        OutputTree with ``index.html``, stylesheets under ``assets/``, the
        runtime script under ``js/`` and, when SEO has a base URL, a sitemap.
    """
    templates = templates or default_templates()
    strategy = strategy_for(job.template)
    page_count = job.resolved_page_count
    log_job_configuration(job, page_count)
    _safe_emit(on_progress, "generate:start", {"template": job.template.value, "pages": page_count})

    pages = build_page_views(job, strategy, page_count)
    for view in pages:
        _safe_emit(on_progress, "page:rendered", {"page_no": view.number})

    site = SiteView(
        title=job.display_title,
        template=job.template.value,
        page_count=page_count,
        pages=pages,
        stylesheets=_stylesheet_links(job, strategy),
        script=strategy.script_path,
        gate=build_gate_view(strategy, job.lead_gate, page_count),
        seo=build_seo_view(job, page_count),
        nav=strategy.initial_buttons(page_count),
    )
    log_feature_decision(
        "Lead gate",
        "enabled" if site.gate else "disabled",
        {"locked_pages": sum(1 for p in pages if p.locked)},
    )

    tree = OutputTree()
    tree.add(INDEX_PATH, templates.render(strategy.template_name, site.as_context()))
    tree.add(SHARED_STYLESHEET_PATH, templates.render_static(SHARED_STYLESHEET_TEMPLATE))
    tree.add(strategy.stylesheet_path, templates.render_static(strategy.stylesheet_template))
    if job.custom_css:
        tree.add(CUSTOM_STYLESHEET_PATH, job.custom_css)
    tree.add(
        strategy.script_path,
        templates.render(strategy.script_template, {"config": runtime_config(job, page_count)}),
    )
    if site.seo is not None and site.seo.url:
        tree.add(
            SITEMAP_PATH,
            templates.render("sitemap.xml", {"entries": sitemap_entries(site.seo.url, page_count)}),
        )

    _safe_emit(on_progress, "generate:finalized", {"files": len(tree), "pages": page_count})
    return tree


__all__ = [
    "CUSTOM_STYLESHEET_PATH",
    "GENERATED_PATHS",
    "SHARED_STYLESHEET_PATH",
    "SITEMAP_PATH",
    "build_gate_view",
    "build_page_views",
    "build_seo_view",
    "gate_form_fields",
    "generate",
    "index_fragments",
    "placeholder_html",
    "runtime_config",
]
