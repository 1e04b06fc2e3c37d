"""Tests for the setup workflow orchestrator (create_react_vite_app.workflow).

Covers:
- Stage order and the exact commands issued per configuration
- Working directories (generator in the parent, everything else in the project)
- State transitions, skipped steps and abort handling
- --no-start instructions
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from create_react_vite_app.config import WorkflowConfig
from create_react_vite_app.runner import CommandError
from create_react_vite_app.workflow import Workflow, WorkflowStage

pytestmark = pytest.mark.unit

CREATE = "npm create vite@latest demo -- --template react-ts"
INSTALL = "npm install"
DEV = "npm run dev"


def make_config(tmp_path: Path, **overrides) -> WorkflowConfig:
    return WorkflowConfig(project_name="demo", parent_dir=tmp_path, **overrides)


class TestStageOrder:
    @pytest.mark.asyncio
    async def test_minimal_run(self, runner, toolchain, tmp_path: Path):
        workflow = Workflow(make_config(tmp_path), runner=runner, toolchain=toolchain)
        state = await workflow.run()
        assert runner.commands == [CREATE, INSTALL, DEV]
        assert state["completed"] == ["generate", "install", "launch"]
        assert state["skipped"] == ["tailwind", "shadcn", "cleanup"]
        assert workflow.stage is WorkflowStage.LAUNCHED

    @pytest.mark.asyncio
    async def test_all_features(self, runner, toolchain, tmp_path: Path):
        config = make_config(tmp_path, install_tailwind=True, install_shadcn=True, cleanup=True)
        workflow = Workflow(config, runner=runner, toolchain=toolchain)
        state = await workflow.run()
        assert runner.commands == [
            CREATE,
            INSTALL,
            "npm install -D tailwindcss@3 postcss autoprefixer",
            "npx tailwindcss init -p",
            "npm install -D @types/node",
            "npx shadcn@latest init",
            DEV,
        ]
        assert state["completed"] == [
            "generate", "install", "tailwind", "shadcn", "cleanup", "launch",
        ]
        assert state["skipped"] == []

    @pytest.mark.asyncio
    async def test_working_directories(self, runner, toolchain, tmp_path: Path):
        config = make_config(tmp_path, install_tailwind=True)
        await Workflow(config, runner=runner, toolchain=toolchain).run()
        cwds = [cwd for _, cwd in runner.calls]
        assert cwds[0] == tmp_path
        assert all(cwd == tmp_path / "demo" for cwd in cwds[1:])

    @pytest.mark.asyncio
    async def test_creates_missing_parent_dir(self, runner, toolchain, tmp_path: Path):
        parent = tmp_path / "nested" / "projects"
        config = WorkflowConfig(project_name="demo", parent_dir=parent)
        await Workflow(config, runner=runner, toolchain=toolchain).run()
        assert (parent / "demo" / "package.json").is_file()


class TestFeatureFiles:
    @pytest.mark.asyncio
    async def test_files_written_into_project_root(self, runner, toolchain, renderer, tmp_path: Path):
        config = make_config(tmp_path, install_tailwind=True, install_shadcn=True, cleanup=True)
        await Workflow(config, runner=runner, toolchain=toolchain, renderer=renderer).run()
        root = tmp_path / "demo"
        assert (root / "tailwind.config.js").read_text(encoding="utf-8") == (
            renderer.render_role("tailwind_config")
        )
        assert (root / "vite.config.ts").read_text(encoding="utf-8") == (
            renderer.render_role("vite_config")
        )
        assert (root / "src" / "App.tsx").read_text(encoding="utf-8") == (
            renderer.render_role("app_tailwind")
        )
        assert not (root / "src" / "App.css").exists()
        tsconfig = json.loads((root / "tsconfig.json").read_text(encoding="utf-8"))
        assert tsconfig["compilerOptions"]["paths"] == {"@/*": ["./src/*"]}

    @pytest.mark.asyncio
    async def test_cleanup_without_tailwind_uses_plain_app(
        self, runner, toolchain, renderer, tmp_path: Path
    ):
        config = make_config(tmp_path, cleanup=True)
        await Workflow(config, runner=runner, toolchain=toolchain, renderer=renderer).run()
        app = (tmp_path / "demo" / "src" / "App.tsx").read_text(encoding="utf-8")
        assert app == renderer.render_role("app_plain")

    @pytest.mark.asyncio
    async def test_no_cleanup_keeps_boilerplate(self, runner, toolchain, tmp_path: Path):
        await Workflow(make_config(tmp_path), runner=runner, toolchain=toolchain).run()
        assert (tmp_path / "demo" / "src" / "App.css").exists()


class TestAbort:
    @pytest.mark.asyncio
    async def test_generator_failure_stops_everything(self, make_runner, toolchain, tmp_path: Path):
        runner = make_runner(failures={"create vite@latest": 1})
        config = make_config(tmp_path, install_tailwind=True, cleanup=True)
        workflow = Workflow(config, runner=runner, toolchain=toolchain)
        with pytest.raises(CommandError, match="Failed to create Vite project"):
            await workflow.run()
        assert runner.commands == [CREATE]
        assert workflow.stage is WorkflowStage.ABORTED
        assert workflow.state["completed"] == []
        assert "Failed to create Vite project" in workflow.state["error"]

    @pytest.mark.asyncio
    async def test_install_failure(self, make_runner, toolchain, tmp_path: Path):
        runner = make_runner(failures={"npm install": 1})
        workflow = Workflow(make_config(tmp_path), runner=runner, toolchain=toolchain)
        with pytest.raises(CommandError, match="Failed to install dependencies"):
            await workflow.run()
        assert runner.commands == [CREATE, INSTALL]
        assert workflow.state["completed"] == ["generate"]

    @pytest.mark.asyncio
    async def test_shadcn_init_failure_is_fatal(self, make_runner, toolchain, tmp_path: Path):
        runner = make_runner(failures={"shadcn@latest init": 1})
        config = make_config(tmp_path, install_shadcn=True, cleanup=True)
        workflow = Workflow(config, runner=runner, toolchain=toolchain)
        with pytest.raises(CommandError, match="Failed to initialize ShadCN"):
            await workflow.run()
        assert DEV not in runner.commands
        # Cleanup never ran and nothing already done was rolled back.
        assert (tmp_path / "demo" / "src" / "App.css").exists()
        assert (tmp_path / "demo" / "package.json").exists()
        assert workflow.state["completed"] == ["generate", "install"]

    @pytest.mark.asyncio
    async def test_dev_server_failure(self, make_runner, toolchain, tmp_path: Path):
        runner = make_runner(failures={"run dev": 1})
        workflow = Workflow(make_config(tmp_path), runner=runner, toolchain=toolchain)
        with pytest.raises(CommandError, match="Failed to start the development server"):
            await workflow.run()
        assert workflow.stage is WorkflowStage.ABORTED


class TestNoStart:
    @pytest.mark.asyncio
    async def test_prints_next_steps(self, runner, toolchain, tmp_path: Path, capsys):
        config = make_config(tmp_path, start_dev_server=False)
        workflow = Workflow(config, runner=runner, toolchain=toolchain)
        state = await workflow.run()
        assert DEV not in runner.commands
        assert "launch" in state["skipped"]
        out = capsys.readouterr().out
        assert "npm run dev" in out
        assert "cd " in out


class TestDefaults:
    def test_uses_toolchain_from_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CRVA_NPM", "pnpm")
        workflow = Workflow(make_config(tmp_path))
        assert workflow.toolchain.npm == "pnpm"

    def test_initial_stage(self, tmp_path: Path):
        assert Workflow(make_config(tmp_path)).stage is WorkflowStage.INPUT_RESOLVED


class TestExistingDirectory:
    @pytest.mark.asyncio
    async def test_warning_with_bracketed_path(self, runner, toolchain, tmp_path: Path, capsys):
        parent = tmp_path / "[/]work"
        (parent / "demo").mkdir(parents=True)
        workflow = Workflow(make_config(parent), runner=runner, toolchain=toolchain)
        await workflow.run()
        assert runner.commands == [CREATE, INSTALL, DEV]
        assert "already exists" in capsys.readouterr().out
