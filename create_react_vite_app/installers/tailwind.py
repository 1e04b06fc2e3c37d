"""Tailwind CSS (v3) installation.

Installs Tailwind with its PostCSS peers, runs ``tailwindcss init -p`` and
then replaces the generated config and the main stylesheet with fixed
templates.  Both files are overwritten on every run.
"""

from __future__ import annotations

from pathlib import Path

from ..config import ToolchainSettings
from ..runner import CommandRunner, run_step
from ..templates import TemplateRenderer


class TailwindInstaller:
    """Adds Tailwind CSS to a freshly generated Vite project."""

    def __init__(
        self,
        renderer: TemplateRenderer,
        runner: CommandRunner,
        toolchain: ToolchainSettings,
    ) -> None:
        self.renderer = renderer
        self.runner = runner
        self.toolchain = toolchain

    async def install(self, project_root: Path) -> dict[str, Path]:
        """Install Tailwind and write its config files.

        Returns:
            Mapping of file role to written path.

        Raises:
            CommandError: If either npm/npx step fails.
        """
        await run_step(
            self.runner,
            self.toolchain.install_command(*self.toolchain.tailwind_packages(), dev=True),
            project_root,
            "Failed to install Tailwind CSS",
        )
        await run_step(
            self.runner,
            self.toolchain.tailwind_init_command(),
            project_root,
            "Failed to initialize Tailwind CSS",
        )
        return await self.write_files(project_root)

    async def write_files(self, project_root: Path) -> dict[str, Path]:
        """Overwrite ``tailwind.config.js`` and ``src/index.css``."""
        written: dict[str, Path] = {}
        for role in ("tailwind_config", "tailwind_css"):
            written[role] = await self.renderer.write_role(role, project_root)
        return written
