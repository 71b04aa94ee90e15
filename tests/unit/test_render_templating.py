from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from pdf2site.render.templating import TEMPLATES_DIR, create_environment, default_templates


def test_default_templates_is_cached() -> None:
    assert default_templates() is default_templates()


def test_render_static_returns_source_verbatim() -> None:
    source = default_templates().render_static("styles/common.css")
    assert source == (TEMPLATES_DIR / "styles" / "common.css").read_text(encoding="utf-8")


def test_environment_escapes_and_is_strict(tmp_path: Path) -> None:
    (tmp_path / "t.html").write_text("<b>{{ value }}</b>", encoding="utf-8")
    templates = create_environment(tmp_path)
    assert templates.render("t.html", {"value": "<i>&"}) == "<b>&lt;i&gt;&amp;</b>"
    with pytest.raises(UndefinedError):
        templates.render("t.html", {})
