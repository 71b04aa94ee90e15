from __future__ import annotations

import logging
import math

import pytest

from pdf2site.ids import compute_site_id
from pdf2site.model.job import (
    DEFAULT_TITLE,
    Hotspot,
    LeadGateFields,
    LeadGatePolicy,
    Page,
    SeoOptions,
    TemplateJob,
    TemplateKind,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("presentation", TemplateKind.PRESENTATION),
        ("FLIPBOOK", TemplateKind.FLIPBOOK),
        (" documentation ", TemplateKind.DOCUMENTATION),
        (TemplateKind.FLIPBOOK, TemplateKind.FLIPBOOK),
    ],
)
def test_template_kind_resolve(value: object, expected: TemplateKind) -> None:
    assert TemplateKind.resolve(value) is expected


def test_template_kind_unknown_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert TemplateKind.resolve("carousel") is TemplateKind.PRESENTATION
    assert "unknown_template" in caplog.text


def test_hotspot_from_camel_case() -> None:
    h = Hotspot.from_dict(
        {"id": "a", "pageIndex": 2, "top": "10", "left": 5, "width": 20.5, "height": 3, "url": "https://x"}
    )
    assert h.page_index == 2
    assert h.top == 10.0
    assert h.width == 20.5
    assert h.label is None
    assert h.display_label == "https://x"
    assert h.has_finite_geometry


def test_hotspot_defaults_and_bad_values() -> None:
    h = Hotspot.from_dict({"page_index": "x", "top": "nope", "url": "u", "label": "L"}, position=4)
    assert h.id == "hotspot-5"
    assert h.page_index == -1
    assert math.isnan(h.top)
    assert not h.has_finite_geometry
    assert h.display_label == "L"


def test_lead_gate_policy_locks_from_free_pages() -> None:
    policy = LeadGatePolicy(enabled=True, free_pages=3)
    assert [policy.is_locked(i) for i in range(5)] == [False, False, False, True, True]
    assert policy.locked_indices(5) == [3, 4]
    assert LeadGatePolicy(enabled=False, free_pages=0).locked_indices(5) == []


def test_lead_gate_policy_from_dict() -> None:
    policy = LeadGatePolicy.from_dict(
        {
            "enabled": True,
            "freePages": 2,
            "webhookUrl": "https://hooks.test/lead",
            "fields": {"company": True, "phone": True},
        }
    )
    assert policy.enabled
    assert policy.free_pages == 2
    assert policy.webhook_url == "https://hooks.test/lead"
    assert policy.fields == LeadGateFields(name=True, email=True, company=True, phone=True)
    assert LeadGatePolicy.from_dict(None) == LeadGatePolicy()


@pytest.mark.parametrize("raw", [0, -2, "many"])
def test_lead_gate_invalid_free_pages_clamps_to_one(raw: object, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        policy = LeadGatePolicy.from_dict({"enabled": True, "freePages": raw})
    assert policy.free_pages == 1
    assert "invalid_free_pages" in caplog.text


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(True, True), (False, False), ("true", True), ("false", False), ("False", False), (1, True), (0, False)],
)
def test_lead_gate_enabled_parses_flag_strings(raw: object, expected: bool) -> None:
    assert LeadGatePolicy.from_dict({"enabled": raw}).enabled is expected


def test_lead_gate_unrecognized_flag_uses_default(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        policy = LeadGatePolicy.from_dict({"enabled": "maybe", "fields": {"phone": "no"}})
    assert policy.enabled is False
    assert policy.fields.phone is False
    assert "invalid_flag" in caplog.text


def test_lead_gate_direct_construction_keeps_first_page_open(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        policy = LeadGatePolicy(enabled=True, free_pages=0)
    assert policy.free_pages == 1
    assert not policy.is_locked(0)
    assert policy.locked_indices(3) == [1, 2]
    assert "invalid_free_pages" in caplog.text


def test_seo_options_from_dict() -> None:
    assert SeoOptions.from_dict(None) is None
    seo = SeoOptions.from_dict({"keywords": "alpha, beta,, gamma", "baseUrl": "https://s.test/"})
    assert seo is not None
    assert seo.keywords == ("alpha", "beta", "gamma")
    assert seo.base_url == "https://s.test/"
    assert seo.description is None


def test_template_job_defaults() -> None:
    job = TemplateJob()
    assert job.template is TemplateKind.PRESENTATION
    assert job.display_title == DEFAULT_TITLE
    assert job.resolved_page_count == 1
    assert job.resolved_site_id == compute_site_id(DEFAULT_TITLE)


def test_template_job_blank_title_and_page_count_from_pages() -> None:
    job = TemplateJob(title="   ", pages=(Page(index=1), Page(index=4)))
    assert job.display_title == DEFAULT_TITLE
    assert job.resolved_page_count == 4
    assert TemplateJob(page_count=0, pages=(Page(index=2),)).resolved_page_count == 2
    assert TemplateJob(page_count=7, pages=(Page(index=2),)).resolved_page_count == 7


def test_template_job_from_dict() -> None:
    job = TemplateJob.from_dict(
        {
            "template": "documentation",
            "title": "Guide",
            "pageCount": "3",
            "hotspots": [{"pageIndex": 0, "url": "https://a"}, {"pageIndex": 1, "url": "https://b"}],
            "leadGen": {"enabled": True, "freePages": 1},
            "customCss": ".x{}",
            "siteId": "abc",
            "seo": {"description": "D"},
            "analytics": {"endpoint": "https://t.test/e"},
        },
        pages=[Page(index=1, html="<p>1</p>")],
    )
    assert job.template is TemplateKind.DOCUMENTATION
    assert job.page_count == 3
    assert [h.id for h in job.hotspots] == ["hotspot-1", "hotspot-2"]
    assert job.lead_gate.enabled and job.lead_gate.free_pages == 1
    assert job.custom_css == ".x{}"
    assert job.resolved_site_id == "abc"
    assert job.seo is not None and job.seo.description == "D"
    assert job.analytics is not None and job.analytics.endpoint == "https://t.test/e"
    assert len(job.pages) == 1


def test_template_job_from_dict_unusable_page_count_left_unset() -> None:
    job = TemplateJob.from_dict({"pageCount": -1})
    assert job.page_count is None
    assert job.resolved_page_count == 1
