"""Input resolution: turn CLI arguments and answers into a ``WorkflowConfig``.

Feature choices come either entirely from flags or entirely from prompts.
Passing any one of ``--tailwind``, ``--shadcn`` or ``--clean`` switches every
prompt off, and the flags that were not given count as "no".
"""

from __future__ import annotations

from pathlib import Path

from rich.prompt import Confirm, Prompt

from .config import ProjectNameError, WorkflowConfig, normalize_project_name
from .utils import console, print_error

TAILWIND_QUESTION = "Do you want to install Tailwind CSS? (v3 supported)"
SHADCN_QUESTION = "Do you want to install ShadCN?"
CLEANUP_QUESTION = "Do you want to clean up the project for quick start?"


class Prompter:
    """Asks the user questions on the terminal."""

    def ask_text(self, message: str) -> str:
        return Prompt.ask(message, console=console, default="", show_default=False)

    def confirm(self, message: str, default: bool) -> bool:
        return Confirm.ask(message, console=console, default=default)


def prompt_project_name(prompter: Prompter) -> str:
    """Ask for a project name until a non-empty one is entered."""
    while True:
        try:
            return normalize_project_name(prompter.ask_text("Enter project name"))
        except ProjectNameError as exc:
            print_error(str(exc))


def resolve_config(
    project_name: str | None,
    *,
    tailwind: bool = False,
    shadcn: bool = False,
    clean: bool = False,
    prompter: Prompter | None = None,
    start_dev_server: bool = True,
    parent_dir: Path | str = ".",
) -> WorkflowConfig:
    """Build the run configuration from arguments, prompting where needed.

    Args:
        project_name: Name from the command line, or ``None`` to prompt.
        tailwind: ``--tailwind`` was given.
        shadcn: ``--shadcn`` was given.
        clean: ``--clean`` was given.
        prompter: Source of interactive answers (defaults to the terminal).
        start_dev_server: Whether the workflow launches ``npm run dev``.
        parent_dir: Directory the project folder is created in.

    Raises:
        ProjectNameError: If *project_name* was given but is blank.
    """
    prompter = prompter or Prompter()

    if project_name is None:
        name = prompt_project_name(prompter)
    else:
        name = normalize_project_name(project_name)

    if tailwind or shadcn or clean:
        install_tailwind, install_shadcn, cleanup = tailwind, shadcn, clean
    else:
        install_tailwind = prompter.confirm(TAILWIND_QUESTION, default=True)
        install_shadcn = prompter.confirm(SHADCN_QUESTION, default=False)
        cleanup = prompter.confirm(CLEANUP_QUESTION, default=True)

    return WorkflowConfig(
        project_name=name,
        install_tailwind=install_tailwind,
        install_shadcn=install_shadcn,
        cleanup=cleanup,
        start_dev_server=start_dev_server,
        parent_dir=Path(parent_dir),
    )
