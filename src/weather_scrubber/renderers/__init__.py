"""Pure rendering functions: view state -> HTML strings.

All renderers follow the same pattern:
  - Input: ``ViewState`` / ``Snapshot`` (from controller)
  - Output: str (HTML)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py (static page) and web.py (interactive server).

Public API:
  - snapshot: build_snapshot_html, build_page_html
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
