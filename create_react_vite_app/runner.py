"""External command execution for the workflow.

Every call to ``npm``/``npx`` goes through :func:`run_step`, which is the only
place a failed command is turned into an error.  The actual process spawning
lives behind :class:`CommandRunner` so tests can swap in a recorder.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from rich.markup import escape

from .utils import console, format_command, run_command


class WorkflowError(Exception):
    """Base class for failures that abort the workflow."""


class CommandError(WorkflowError):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(
        self,
        description: str,
        returncode: int,
        command: str = "",
        detail: str = "",
    ) -> None:
        self.description = description
        self.returncode = returncode
        self.command = command
        self.detail = detail or f"Command failed with exit code {returncode}: {command}"
        super().__init__(f"{description}: {self.detail}")


class CommandRunner:
    """Spawns commands with the terminal passed through to the child."""

    async def run(self, argv: list[str], cwd: str | Path) -> int:
        """Run *argv* in *cwd* and return its exit status.

        The executable is resolved on ``PATH`` first so that wrapper scripts
        such as ``npm.cmd`` on Windows are found.

        Raises:
            CommandError: If the process cannot be spawned at all.
        """
        executable = shutil.which(argv[0]) or argv[0]
        try:
            returncode = await run_command([executable, *argv[1:]], cwd=cwd)
        except OSError as exc:
            raise CommandError(
                f"Could not start {argv[0]}",
                returncode=1,
                command=format_command(argv),
                detail=str(exc),
            ) from exc
        return returncode


async def run_step(
    runner: CommandRunner,
    argv: list[str],
    cwd: str | Path,
    description: str,
) -> None:
    """Run one workflow command and raise if it does not succeed.

    Args:
        runner: The command runner (real or recording).
        argv: Argument vector to execute.
        cwd: Directory the command runs in.
        description: Failure message shown to the user, e.g.
            ``"Failed to install dependencies"``.

    Raises:
        CommandError: On spawn failure or a non-zero exit status.
    """
    cmd_str = format_command(argv)
    console.print(f"\n[cyan]>[/cyan] Running: [bold]{escape(cmd_str)}[/bold]")
    try:
        returncode = await runner.run(argv, cwd)
    except CommandError as exc:
        raise CommandError(
            description,
            returncode=exc.returncode,
            command=cmd_str,
            detail=exc.detail,
        ) from exc

    if returncode != 0:
        raise CommandError(description, returncode=returncode, command=cmd_str)
