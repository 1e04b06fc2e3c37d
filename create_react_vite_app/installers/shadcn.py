"""ShadCN setup.

ShadCN's ``init`` expects the ``@/*`` import alias to resolve in both the
TypeScript config and the Vite config, so this installer patches
``tsconfig.json`` in place, rewrites ``vite.config.ts`` and then hands the
terminal to ``npx shadcn init``.
"""

from __future__ import annotations

import asyncio
import copy
from pathlib import Path
from typing import Any

from ..config import ToolchainSettings
from ..runner import CommandRunner, run_step
from ..templates import TSCONFIG_PATH, TemplateRenderer
from ..utils import file_exists, load_json, save_json

ALIAS_PREFIX = "@/*"
ALIAS_TARGETS = ["./src/*"]


def merge_tsconfig_paths(tsconfig: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *tsconfig* with the ``@/*`` path alias configured.

    Only ``compilerOptions.baseUrl`` and ``compilerOptions.paths`` are set;
    every other top-level key and compiler option is kept as it was.  A
    missing or non-object ``compilerOptions`` is replaced by a new object.
    """
    merged = copy.deepcopy(tsconfig)
    options = merged.get("compilerOptions")
    if not isinstance(options, dict):
        options = {}
        merged["compilerOptions"] = options
    options["baseUrl"] = "."
    options["paths"] = {ALIAS_PREFIX: list(ALIAS_TARGETS)}
    return merged


class ShadcnInstaller:
    """Prepares a Vite project for ShadCN and runs its interactive init."""

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
        """Run the full ShadCN setup.

        Returns:
            Mapping of file role to written path (``tsconfig`` is only
            present when the file existed).

        Raises:
            CommandError: If any npm/npx step fails, including ``shadcn init``.
            json.JSONDecodeError: If an existing ``tsconfig.json`` is malformed.
        """
        await run_step(
            self.runner,
            self.toolchain.install_command("@types/node", dev=True),
            project_root,
            "Failed to install ShadCN dependencies",
        )

        written: dict[str, Path] = {}
        tsconfig = await self.update_tsconfig(project_root)
        if tsconfig is not None:
            written["tsconfig"] = tsconfig
        written["vite_config"] = await self.renderer.write_role("vite_config", project_root)

        await run_step(
            self.runner,
            self.toolchain.shadcn_init_command(),
            project_root,
            "Failed to initialize ShadCN",
        )
        return written

    async def update_tsconfig(self, project_root: Path) -> Path | None:
        """Merge the path alias into ``tsconfig.json`` if the file exists.

        Returns the path that was rewritten, or ``None`` when there was no
        ``tsconfig.json`` to update.
        """
        path = Path(project_root) / TSCONFIG_PATH
        if not file_exists(path):
            return None
        tsconfig = await asyncio.to_thread(load_json, path)
        await save_json(merge_tsconfig_paths(tsconfig), path)
        return path
