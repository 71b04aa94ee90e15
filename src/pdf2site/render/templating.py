from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class Templates:
    env: Environment

    def render(self, name: str, context: dict[str, Any]) -> str:
        tpl = self.env.get_template(name)
        return str(tpl.render(**context))

    def render_static(self, name: str) -> str:
        """Return a template file's source without evaluating it (stylesheets)."""
        source, _, _ = self.env.loader.get_source(self.env, name)  # type: ignore[union-attr]
        return source


def create_environment(templates_dir: Path = TEMPLATES_DIR) -> Templates:
    loader = FileSystemLoader(str(templates_dir))
    env = Environment(
        loader=loader,
        undefined=StrictUndefined,
        autoescape=True,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    return Templates(env=env)


@lru_cache(maxsize=1)
def default_templates() -> Templates:
    return create_environment()


__all__ = ["TEMPLATES_DIR", "Templates", "create_environment", "default_templates"]
