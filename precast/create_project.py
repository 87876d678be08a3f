"""The ``init`` driver: validate, transform, generate, record.

Validation failures abort before anything touches the disk.  Once the
project directory has been created, any failure removes it again and the
exception propagates unchanged, so a failed ``init`` never leaves a
half-populated project behind.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from precast import __version__
from precast.config import ProjectConfig
from precast.generators import ProjectGenerator
from precast.manifest import write_manifest
from precast.plugins import PluginContext, PluginManager
from precast.scaffolder import TemplateEngine
from precast.utils import Logger, ensure_dir, is_empty_dir, remove_tree

Installer = Callable[[Path, ProjectConfig], Awaitable[None]]


class ProjectCreationError(Exception):
    """Raised when a project cannot be created (invalid stack, occupied target)."""

    def __init__(self, message: str, errors: Sequence[str] = ()) -> None:
        self.errors = list(errors)
        super().__init__(message)


async def create_project(
    config: ProjectConfig,
    engine: TemplateEngine,
    plugins: PluginManager,
    logger: Logger | None = None,
    *,
    output_dir: str | Path = ".",
    install: Installer | None = None,
) -> Path:
    """Create a new project for *config*.

    The project goes to ``config.project_path`` when set, otherwise to
    ``output_dir / config.name``.  *install* is the package-manager step; when
    given, the ``before_install`` and ``after_install`` hooks run around it.

    Returns:
        The project root.

    Raises:
        ProjectCreationError: The stack is invalid or the target directory
            is not empty.
    """
    logger = logger or engine.logger

    validation = await plugins.validate_config(config)
    if not validation.valid:
        for error in validation.errors:
            logger.error(error)
        raise ProjectCreationError("Invalid project configuration", validation.errors)

    config = await plugins.transform_config(config)
    project_root = Path(config.project_path or Path(output_dir) / config.name)
    config = config.model_copy(update={"project_path": project_root})

    if not await asyncio.to_thread(is_empty_dir, project_root):
        raise ProjectCreationError(f"Directory {project_root} already exists and is not empty")

    await asyncio.to_thread(ensure_dir, project_root)
    try:
        generator = ProjectGenerator(engine, plugins, logger)
        await generator.generate(config, project_root)
        await write_manifest(config, project_root, __version__)

        if install is not None:
            plugin_ctx = PluginContext(
                config=config,
                project_path=project_root,
                template_engine=engine,
                logger=logger,
            )
            await plugins.run_before_install(plugin_ctx)
            await install(project_root, config)
            await plugins.run_after_install(plugin_ctx)
    except Exception:
        logger.warn(f"Cleaning up {project_root}")
        await asyncio.to_thread(remove_tree, project_root)
        raise

    logger.success(f"Project {config.name} created at {project_root}")
    return project_root
