"""Feature installers run after the base project has been generated.

Each installer receives the shared ``TemplateRenderer`` and works against an
explicit project root::

    from create_react_vite_app.installers import TailwindInstaller

    installer = TailwindInstaller(renderer, runner, toolchain)
    await installer.install(project_root)
"""

from create_react_vite_app.installers.cleanup import ProjectCleaner
from create_react_vite_app.installers.shadcn import ShadcnInstaller, merge_tsconfig_paths
from create_react_vite_app.installers.tailwind import TailwindInstaller

__all__ = [
    "ProjectCleaner",
    "ShadcnInstaller",
    "TailwindInstaller",
    "merge_tsconfig_paths",
]
