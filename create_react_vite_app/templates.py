"""Jinja2 template rendering for generated project files.

Provides the ``PROJECT_FILES`` table, which maps each logical file role
(Tailwind config, stylesheet, Vite config, app component) to its template and
its path inside the generated project, and the ``TemplateRenderer`` that
writes them.  Templates live in ``create_react_vite_app/templates/`` and are
rendered without any time- or randomness-dependent context, so the same
inputs always produce the same bytes.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# File table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProjectFile:
    """A file the workflow writes, relative to the project root."""

    template: str
    target: str


PROJECT_FILES: dict[str, ProjectFile] = {
    "tailwind_config": ProjectFile("tailwind.config.js.j2", "tailwind.config.js"),
    "tailwind_css": ProjectFile("index.css.j2", "src/index.css"),
    "vite_config": ProjectFile("vite.config.ts.j2", "vite.config.ts"),
    "app_tailwind": ProjectFile("App.tailwind.tsx.j2", "src/App.tsx"),
    "app_plain": ProjectFile("App.plain.tsx.j2", "src/App.tsx"),
}

# Files read or deleted in place rather than rendered.
TSCONFIG_PATH = "tsconfig.json"
APP_CSS_PATH = "src/App.css"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the project-file templates.

    Templates are looked up by role through ``PROJECT_FILES``; the raw
    :meth:`render` method also accepts a template path directly.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any] | None = None) -> str:
        """Render a single template with the provided context."""
        template = self.env.get_template(template_path)
        return template.render(**(context or {}))

    def render_role(self, role: str, context: dict[str, Any] | None = None) -> str:
        """Render the template registered for *role* in ``PROJECT_FILES``.

        Raises:
            KeyError: If *role* is not a known file role.
        """
        return self.render(PROJECT_FILES[role].template, context)

    # -- File-based rendering (async) --------------------------------------

    async def write_role(
        self,
        role: str,
        project_root: str | Path,
        context: dict[str, Any] | None = None,
    ) -> Path:
        """Render *role* and overwrite its target file under *project_root*.

        Parent directories are created automatically.  Returns the path that
        was written.
        """
        content = self.render_role(role, context)
        out = Path(project_root) / PROJECT_FILES[role].target
        await asyncio.to_thread(_write_file, out, content)
        return out


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
