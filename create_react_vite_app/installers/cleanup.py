"""Boilerplate removal for a quick start."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..templates import APP_CSS_PATH, TemplateRenderer
from ..utils import file_exists


class ProjectCleaner:
    """Replaces the demo ``App`` component and drops its stylesheet."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def clean(self, project_root: Path, tailwind: bool) -> dict[str, Path]:
        """Overwrite ``src/App.tsx`` and delete ``src/App.css`` if present.

        Args:
            project_root: Root of the generated project.
            tailwind: Use the template with Tailwind utility classes.

        Returns:
            ``{"app": <path>}`` plus ``{"removed": <path>}`` when the
            stylesheet existed and was deleted.
        """
        role = "app_tailwind" if tailwind else "app_plain"
        result = {"app": await self.renderer.write_role(role, project_root)}

        app_css = Path(project_root) / APP_CSS_PATH
        if file_exists(app_css):
            await asyncio.to_thread(app_css.unlink)
            result["removed"] = app_css
        return result
