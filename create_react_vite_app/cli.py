"""Command-line entry point.

Usage::

    create-react-vite-app create my-app --tailwind --clean
    create-react-vite-app create "my app"          # prompts for features
    create-react-vite-app                          # prompts for everything
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from . import __version__
from .config import ProjectNameError
from .prompts import Prompter, resolve_config
from .runner import CommandError, CommandRunner
from .utils import console, print_error, print_stage_header
from .workflow import Workflow

EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-react-vite-app",
        description=(
            "CLI to set up a React + Vite project with optional Tailwind CSS and ShadCN"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-react-vite-app create my-app\n"
            "  create-react-vite-app create my-app --tailwind --shadcn --clean\n"
            "  create-react-vite-app create my-app --tailwind --no-start -d ~/code\n"
            "\n"
            "Passing any of --tailwind, --shadcn or --clean skips every feature\n"
            "prompt; features that were not passed are not installed.\n"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command")
    create = subparsers.add_parser(
        "create",
        help="Create a new React + Vite project",
        description="Create a new React + Vite project",
    )
    create.add_argument(
        "project_name",
        nargs="*",
        help="Project name; whitespace is replaced with hyphens (prompted if omitted)",
    )
    create.add_argument("--tailwind", action="store_true", help="Install Tailwind CSS")
    create.add_argument("--shadcn", action="store_true", help="Install ShadCN")
    create.add_argument(
        "--clean", action="store_true", help="Clean up project files for a quick start"
    )
    create.add_argument(
        "--no-start",
        dest="start",
        action="store_false",
        help="Do not start the development server when setup finishes",
    )
    create.add_argument(
        "--directory", "-d",
        default=".",
        help="Directory to create the project in (default: current directory)",
    )
    create.set_defaults(command_parser=create)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line, allowing flags between project-name words.

    ``create my --tailwind app`` yields the name words ``["my", "app"]``.
    A missing subcommand is treated as a bare ``create``.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args, _ = parser.parse_known_args(argv)
    if args.command is None:
        # Legacy shape: no subcommand, everything is asked interactively.
        parser.parse_args(argv)
        return parser.parse_args(["create"])

    # The top-level parser holds a subparser action, which
    # parse_intermixed_args refuses, so the create tokens are re-parsed alone.
    tokens = argv[argv.index(args.command) + 1:]
    args = args.command_parser.parse_intermixed_args(tokens)
    args.command = "create"
    return args


def main(
    argv: list[str] | None = None,
    prompter: Prompter | None = None,
    runner: CommandRunner | None = None,
) -> None:
    """CLI entry point for ``create-react-vite-app``."""
    args = parse_args(argv)
    project_name = " ".join(args.project_name) if args.project_name else None

    try:
        print_stage_header(1, "INPUT")
        config = resolve_config(
            project_name,
            tailwind=args.tailwind,
            shadcn=args.shadcn,
            clean=args.clean,
            prompter=prompter,
            start_dev_server=args.start,
            parent_dir=Path(args.directory).expanduser(),
        )
        asyncio.run(Workflow(config, runner=runner).run())
    except ProjectNameError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except CommandError as exc:
        print_error(f"{exc.description}: {escape(exc.detail)}")
        sys.exit(exc.returncode if exc.returncode > 0 else 1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        print_error(f"Unexpected error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
