"""create-react-vite-app: scaffold a React + Vite project from the terminal.

Generates the project with ``npm create vite``, optionally wires up
Tailwind CSS and ShadCN, strips the demo boilerplate and starts the dev
server.  The pieces can also be driven from Python::

    import asyncio
    from create_react_vite_app import Workflow, WorkflowConfig

    config = WorkflowConfig(project_name="my-app", install_tailwind=True)
    asyncio.run(Workflow(config).run())
"""

__version__ = "1.0.0"

from create_react_vite_app.config import (
    ProjectNameError,
    ToolchainSettings,
    WorkflowConfig,
    normalize_project_name,
)
from create_react_vite_app.runner import CommandError, CommandRunner, WorkflowError
from create_react_vite_app.workflow import Workflow, WorkflowStage

__all__ = [
    "CommandError",
    "CommandRunner",
    "ProjectNameError",
    "ToolchainSettings",
    "Workflow",
    "WorkflowConfig",
    "WorkflowError",
    "WorkflowStage",
    "normalize_project_name",
]
