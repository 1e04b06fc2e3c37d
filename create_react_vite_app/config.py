"""create-react-vite-app configuration.

Typed configuration for a single scaffolding run.  ``WorkflowConfig`` holds
the user's choices and is frozen once built; ``ToolchainSettings`` holds the
external executables and version pins, which can be overridden from the
environment.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectNameError(ValueError):
    """Raised when a project name is empty after trimming."""


def normalize_project_name(raw: str) -> str:
    """Turn user input into a directory/package name.

    Leading and trailing whitespace is trimmed and every remaining
    whitespace character is replaced with a hyphen.

    Examples::

        normalize_project_name("my app")     -> "my-app"
        normalize_project_name("  demo  ")   -> "demo"
        normalize_project_name("a\\tb  c")   -> "a-b--c"

    Raises:
        ProjectNameError: If nothing is left after trimming.
    """
    trimmed = raw.strip()
    if not trimmed:
        raise ProjectNameError("Project name cannot be empty.")
    return re.sub(r"\s", "-", trimmed)


class WorkflowConfig(BaseModel):
    """The resolved choices for one run of the workflow.

    Built once by :func:`create_react_vite_app.prompts.resolve_config` and
    never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Normalized project directory name")
    install_tailwind: bool = Field(default=False)
    install_shadcn: bool = Field(default=False)
    cleanup: bool = Field(default=False)
    start_dev_server: bool = Field(
        default=True, description="Launch `npm run dev` once setup is finished"
    )
    parent_dir: Path = Field(
        default=Path("."), description="Directory the project folder is created in"
    )

    @field_validator("project_name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ProjectNameError("Project name must be a string.")
        return normalize_project_name(value)

    @property
    def project_root(self) -> Path:
        """Root of the generated project; every later stage works inside it."""
        return self.parent_dir / self.project_name

    def summary(self) -> dict[str, str]:
        """Return the choices as display strings for the summary table."""
        return {
            "Project": self.project_name,
            "Location": str(self.project_root),
            "Tailwind CSS": _yes_no(self.install_tailwind),
            "ShadCN": _yes_no(self.install_shadcn),
            "Cleanup": _yes_no(self.cleanup),
            "Start dev server": _yes_no(self.start_dev_server),
        }


class ToolchainSettings(BaseModel):
    """External executables and package pins used by the workflow."""

    npm: str = Field(default="npm", min_length=1)
    npx: str = Field(default="npx", min_length=1)
    vite_template: str = Field(default="react-ts", min_length=1)
    tailwind_version: str = Field(default="3", min_length=1)
    shadcn_version: str = Field(default="latest", min_length=1)

    @classmethod
    def from_env(cls) -> "ToolchainSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            CRVA_NPM, CRVA_NPX, CRVA_VITE_TEMPLATE,
            CRVA_TAILWIND_VERSION, CRVA_SHADCN_VERSION.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRVA_NPM"):
            kwargs["npm"] = os.environ["CRVA_NPM"]
        if os.environ.get("CRVA_NPX"):
            kwargs["npx"] = os.environ["CRVA_NPX"]
        if os.environ.get("CRVA_VITE_TEMPLATE"):
            kwargs["vite_template"] = os.environ["CRVA_VITE_TEMPLATE"]
        if os.environ.get("CRVA_TAILWIND_VERSION"):
            kwargs["tailwind_version"] = os.environ["CRVA_TAILWIND_VERSION"]
        if os.environ.get("CRVA_SHADCN_VERSION"):
            kwargs["shadcn_version"] = os.environ["CRVA_SHADCN_VERSION"]
        return cls(**kwargs)

    # ------------------------------------------------------------------
    # Command vectors
    # ------------------------------------------------------------------

    def create_vite_command(self, project_name: str) -> list[str]:
        return [
            self.npm, "create", "vite@latest", project_name,
            "--", "--template", self.vite_template,
        ]

    def install_command(self, *packages: str, dev: bool = False) -> list[str]:
        """``npm install`` for the manifest, or for *packages* when given."""
        cmd = [self.npm, "install"]
        if dev:
            cmd.append("-D")
        cmd.extend(packages)
        return cmd

    def dev_server_command(self) -> list[str]:
        return [self.npm, "run", "dev"]

    def tailwind_packages(self) -> list[str]:
        return [f"tailwindcss@{self.tailwind_version}", "postcss", "autoprefixer"]

    def tailwind_init_command(self) -> list[str]:
        return [self.npx, "tailwindcss", "init", "-p"]

    def shadcn_init_command(self) -> list[str]:
        return [self.npx, f"shadcn@{self.shadcn_version}", "init"]


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"
