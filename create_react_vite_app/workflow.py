"""Setup workflow orchestrator.

Runs the stages of a project setup strictly in order:

Stage 1: INPUT    -- resolved before the workflow starts (see ``prompts``).
Stage 2: GENERATE -- ``npm create vite@latest <name> -- --template react-ts``.
Stage 3: INSTALL  -- ``npm install`` inside the new project.
Stage 4: FEATURES -- Tailwind CSS, ShadCN and boilerplate cleanup, each optional.
Stage 5: LAUNCH   -- ``npm run dev``, blocking until the dev server exits.

Nothing is retried or rolled back.  The first failing command aborts the run
with a ``CommandError`` and leaves the project directory as it is.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any

from rich.markup import escape
from rich.panel import Panel

from .config import ToolchainSettings, WorkflowConfig
from .installers import ProjectCleaner, ShadcnInstaller, TailwindInstaller
from .runner import CommandRunner, WorkflowError, run_step
from .templates import TemplateRenderer
from .utils import (
    STAGE_NAMES,
    console,
    ensure_dir,
    format_command,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
)


class WorkflowStage(str, Enum):
    """Where a run currently is.  Transitions only move forward."""

    START = "start"
    INPUT_RESOLVED = "input_resolved"
    GENERATED = "generated"
    DEPENDENCIES_INSTALLED = "dependencies_installed"
    TAILWIND_DONE = "tailwind_done"
    SHADCN_DONE = "shadcn_done"
    CLEANED_UP = "cleaned_up"
    LAUNCHED = "launched"
    ABORTED = "aborted"


class Workflow:
    """Drives one project setup from generation to dev-server launch.

    Attributes:
        config: The resolved, immutable run configuration.
        toolchain: Executables and package pins for external commands.
        runner: Spawns external commands; replaced by a recorder in tests.
        state: Progress record with the current ``stage``, plus the
            ``completed`` and ``skipped`` step names and any ``error``.
    """

    _STAGE_METHODS: dict[int, str] = {
        2: "generate",
        3: "install_dependencies",
        4: "install_features",
        5: "launch",
    }

    def __init__(
        self,
        config: WorkflowConfig,
        runner: CommandRunner | None = None,
        renderer: TemplateRenderer | None = None,
        toolchain: ToolchainSettings | None = None,
    ) -> None:
        self.config = config
        self.runner = runner or CommandRunner()
        self.renderer = renderer or TemplateRenderer()
        self.toolchain = toolchain or ToolchainSettings.from_env()
        self.tailwind = TailwindInstaller(self.renderer, self.runner, self.toolchain)
        self.shadcn = ShadcnInstaller(self.renderer, self.runner, self.toolchain)
        self.cleaner = ProjectCleaner(self.renderer)
        self.state: dict[str, Any] = {
            "stage": WorkflowStage.INPUT_RESOLVED,
            "completed": [],
            "skipped": [],
        }

    @property
    def stage(self) -> WorkflowStage:
        return self.state["stage"]

    def _advance(self, stage: WorkflowStage, step: str | None = None) -> None:
        self.state["stage"] = stage
        if step:
            self.state["completed"].append(step)

    def _skip(self, step: str) -> None:
        self.state["skipped"].append(step)

    # ------------------------------------------------------------------
    # Stage dispatch
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute every stage in order.

        Returns:
            The final state dictionary.

        Raises:
            CommandError: When an external command fails; the state is
                left at ``WorkflowStage.ABORTED``.
        """
        console.print(
            Panel(
                "[bold bright_cyan]Starting React Project Setup[/bold bright_cyan]",
                border_style="bright_cyan",
            )
        )
        print_summary_table(self.config.summary(), title="Project Setup")

        for stage_num, method_name in self._STAGE_METHODS.items():
            stage_name = STAGE_NAMES[stage_num]
            print_stage_header(stage_num, stage_name)

            stage_start = time.monotonic()
            try:
                await getattr(self, method_name)()
            except WorkflowError as exc:
                self.state["stage"] = WorkflowStage.ABORTED
                self.state["error"] = str(exc)
                print_error(f"Stage {stage_num} ({stage_name}) failed.")
                raise

            elapsed = time.monotonic() - stage_start
            print_success(
                f"Stage {stage_num} ({stage_name}) completed in {format_duration(elapsed)}"
            )

        return self.state

    # ------------------------------------------------------------------
    # Stage 2: GENERATE
    # ------------------------------------------------------------------

    async def generate(self) -> None:
        """Create the base project with the Vite generator."""
        ensure_dir(self.config.parent_dir)
        if self.config.project_root.exists():
            print_warning(
                f"{escape(str(self.config.project_root))} already exists; "
                "the Vite generator will ask how to proceed."
            )

        console.print(f"Creating React-Vite project: [bold]{escape(self.config.project_name)}[/bold]")
        await run_step(
            self.runner,
            self.toolchain.create_vite_command(self.config.project_name),
            self.config.parent_dir,
            "Failed to create Vite project",
        )
        self._advance(WorkflowStage.GENERATED, "generate")

    # ------------------------------------------------------------------
    # Stage 3: INSTALL
    # ------------------------------------------------------------------

    async def install_dependencies(self) -> None:
        await run_step(
            self.runner,
            self.toolchain.install_command(),
            self.config.project_root,
            "Failed to install dependencies",
        )
        self._advance(WorkflowStage.DEPENDENCIES_INSTALLED, "install")

    # ------------------------------------------------------------------
    # Stage 4: FEATURES
    # ------------------------------------------------------------------

    async def install_features(self) -> None:
        """Run the optional Tailwind, ShadCN and cleanup steps in that order."""
        root = self.config.project_root

        if self.config.install_tailwind:
            console.print("Installing Tailwind CSS...")
            await self.tailwind.install(root)
            self._advance(WorkflowStage.TAILWIND_DONE, "tailwind")
            print_success("Tailwind CSS setup completed!")
        else:
            self._skip("tailwind")

        if self.config.install_shadcn:
            console.print("Setting up ShadCN...")
            await self.shadcn.install(root)
            self._advance(WorkflowStage.SHADCN_DONE, "shadcn")
            print_success("ShadCN setup completed!")
        else:
            self._skip("shadcn")

        if self.config.cleanup:
            console.print("Cleaning up project files...")
            await self.cleaner.clean(root, tailwind=self.config.install_tailwind)
            self._advance(WorkflowStage.CLEANED_UP, "cleanup")
            print_success("Project cleanup completed!")
        else:
            self._skip("cleanup")

    # ------------------------------------------------------------------
    # Stage 5: LAUNCH
    # ------------------------------------------------------------------

    async def launch(self) -> None:
        """Start the dev server, or print how to start it."""
        print_success("Project setup completed successfully!")

        if not self.config.start_dev_server:
            self._skip("launch")
            console.print("\nRun the following commands:\n")
            for cmd in (
                ["cd", str(self.config.project_root)],
                self.toolchain.dev_server_command(),
            ):
                console.print(f"  {escape(format_command(cmd))}", soft_wrap=True)
            console.print()
            return

        console.print("Starting development server...")
        await run_step(
            self.runner,
            self.toolchain.dev_server_command(),
            self.config.project_root,
            "Failed to start the development server",
        )
        self._advance(WorkflowStage.LAUNCHED, "launch")
