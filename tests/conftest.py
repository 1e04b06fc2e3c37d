"""Shared pytest fixtures for the create-react-vite-app test suite.

Provides reusable fixtures for:
- A recording command runner that never spawns npm/npx
- A scripted prompter that answers questions without a terminal
- A directory laid out like a fresh ``npm create vite`` React-TS project
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest

from create_react_vite_app.config import ToolchainSettings
from create_react_vite_app.prompts import Prompter
from create_react_vite_app.runner import CommandRunner
from create_react_vite_app.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Simulated Vite project
# ---------------------------------------------------------------------------

VITE_TSCONFIG: dict[str, Any] = {
    "files": [],
    "references": [
        {"path": "./tsconfig.app.json"},
        {"path": "./tsconfig.node.json"},
    ],
}

VITE_APP_TSX = textwrap.dedent("""\
    import { useState } from 'react'
    import './App.css'

    function App() {
      const [count, setCount] = useState(0)
      return <button onClick={() => setCount((c) => c + 1)}>count is {count}</button>
    }

    export default App
""")


def materialize_vite_project(root: Path) -> Path:
    """Write the files ``npm create vite -- --template react-ts`` produces."""
    (root / "src").mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(
        json.dumps({"name": root.name, "private": True}, indent=2), encoding="utf-8"
    )
    (root / "index.html").write_text("<div id=\"root\"></div>\n", encoding="utf-8")
    (root / "tsconfig.json").write_text(json.dumps(VITE_TSCONFIG, indent=2), encoding="utf-8")
    (root / "vite.config.ts").write_text(
        "import { defineConfig } from 'vite'\n"
        "import react from '@vitejs/plugin-react'\n\n"
        "export default defineConfig({ plugins: [react()] })\n",
        encoding="utf-8",
    )
    (root / "src" / "App.tsx").write_text(VITE_APP_TSX, encoding="utf-8")
    (root / "src" / "App.css").write_text("#root { margin: 0 auto; }\n", encoding="utf-8")
    (root / "src" / "index.css").write_text(":root { color-scheme: light dark; }\n", encoding="utf-8")
    return root


@pytest.fixture
def vite_project(tmp_path: Path) -> Path:
    """A directory that looks like a freshly generated Vite project."""
    return materialize_vite_project(tmp_path / "my-app")


# ---------------------------------------------------------------------------
# Command runner
# ---------------------------------------------------------------------------


class RecordingRunner(CommandRunner):
    """Records every command instead of spawning it.

    Args:
        failures: Mapping of command substring to the exit status returned
            when a command contains it.  Everything else exits with 0.

    The ``npm create vite`` and ``npx tailwindcss init`` commands leave
    behind the files the real tools would create, so later stages have
    something to work on.
    """

    def __init__(self, failures: dict[str, int] | None = None) -> None:
        self.failures = failures or {}
        self.calls: list[tuple[list[str], Path]] = []

    async def run(self, argv: list[str], cwd: str | Path) -> int:
        self.calls.append((list(argv), Path(cwd)))
        command = " ".join(argv)
        for needle, returncode in self.failures.items():
            if needle in command:
                return returncode

        if argv[1:3] == ["create", "vite@latest"]:
            materialize_vite_project(Path(cwd) / argv[3])
        elif argv[1:3] == ["tailwindcss", "init"]:
            (Path(cwd) / "tailwind.config.js").write_text("module.exports = {}\n", encoding="utf-8")
            (Path(cwd) / "postcss.config.js").write_text("export default {}\n", encoding="utf-8")
        return 0

    @property
    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_runner() -> type[RecordingRunner]:
    """The runner class itself, for tests that need scripted failures."""
    return RecordingRunner


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------


class ScriptedPrompter(Prompter):
    """Answers prompts from a script and records what was asked.

    Confirm questions not listed in *answers* take their default, like a
    user pressing Enter.
    """

    def __init__(
        self,
        answers: dict[str, bool] | None = None,
        names: list[str] | None = None,
    ) -> None:
        self.answers = answers or {}
        self.names = list(names or [])
        self.questions: list[str] = []

    def ask_text(self, message: str) -> str:
        self.questions.append(message)
        return self.names.pop(0)

    def confirm(self, message: str, default: bool) -> bool:
        self.questions.append(message)
        return self.answers.get(message, default)


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def make_prompter() -> type[ScriptedPrompter]:
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Settings & rendering
# ---------------------------------------------------------------------------


@pytest.fixture
def toolchain() -> ToolchainSettings:
    """Default toolchain, independent of any CRVA_* variables in the env."""
    return ToolchainSettings()


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()
