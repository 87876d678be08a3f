"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and materializes the framework, backend, database
and AI-context bundles into one project tree, firing the plugin lifecycle
hooks around the template passes.  A project with a standalone backend is
laid out as a monorepo::

    <root>/               workspace bundle
    <root>/apps/web       frontend framework
    <root>/apps/api       backend
    <root>/packages/shared
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from precast.config import ProjectConfig
from precast.plugins import PluginContext, PluginManager
from precast.scaffolder import TemplateEngine, TemplateOptions
from precast.utils import Logger, ensure_dir

from .ai_context_gen import AIContextGenerator
from .backend_gen import BackendGenerator
from .database_gen import DatabaseGenerator


class ProjectGenerator:
    """Generates a project tree from the configured stack.

    The engine, plugin manager and logger are injected; one instance of
    each is created per CLI invocation and shared by every driver.
    """

    def __init__(
        self,
        engine: TemplateEngine,
        plugins: PluginManager,
        logger: Logger | None = None,
    ) -> None:
        self.engine = engine
        self.plugins = plugins
        self.logger = logger or engine.logger
        self.backend_gen = BackendGenerator(engine, self.logger)
        self.database_gen = DatabaseGenerator(engine, self.logger)
        self.ai_context_gen = AIContextGenerator(engine, self.logger)

    # -- Public API --------------------------------------------------------

    async def generate(
        self,
        config: ProjectConfig,
        project_root: str | Path,
        additional_dirs: Sequence[tuple[str, str]] = (),
    ) -> Path:
        """Generate the project for *config* into *project_root*.

        Args:
            config: The (already transformed) stack selection.
            project_root: Directory the project is written into.
            additional_dirs: Extra ``(bundle, destination)`` pairs copied
                after the framework, destinations relative to the root.

        Returns:
            The project root.
        """
        root = Path(project_root)
        framework = config.framework
        context = config.to_context()
        plugin_ctx = PluginContext(
            config=config,
            project_path=root,
            template_engine=self.engine,
            logger=self.logger,
        )

        try:
            await self.plugins.run_pre_generate(plugin_ctx)

            if config.is_monorepo:
                app_root = await self._generate_monorepo(config, root, context)
            else:
                app_root = await self._generate_single_app(framework, root, context)

            await self.database_gen.generate(config.database, config.orm, app_root, context)
            await self.ai_context_gen.generate(config.ai_assistant, root, context)

            for source, dest in additional_dirs:
                await self.engine.copy_template_directory(
                    source, root / dest, context, TemplateOptions(overwrite=True)
                )

            await self.plugins.run_generate(plugin_ctx)
            await self.plugins.run_post_generate(plugin_ctx)
        except Exception as exc:
            self.logger.error(f"Failed to generate {framework} project: {exc}")
            raise

        self.logger.success(f"{framework[:1].upper() + framework[1:]} project generated successfully!")
        return root

    # -- Layouts -----------------------------------------------------------

    async def _copy_framework(self, framework: str, dest: Path, context: dict[str, Any]) -> None:
        """Copy ``frameworks/<fw>/base`` to *dest* and ``src`` to ``dest/src``."""
        options = TemplateOptions(overwrite=True)
        await self.engine.copy_template_directory(
            f"frameworks/{framework}/base", dest, context, options
        )
        if await self.engine.has_template(f"frameworks/{framework}", "src"):
            await self.engine.copy_template_directory(
                f"frameworks/{framework}/src", dest / "src", context, options
            )

    async def _generate_single_app(
        self, framework: str, root: Path, context: dict[str, Any]
    ) -> Path:
        await self._copy_framework(framework, root, context)
        return root

    async def _generate_monorepo(
        self, config: ProjectConfig, root: Path, context: dict[str, Any]
    ) -> Path:
        """Generate the workspace layout.  Returns the API app directory."""
        self.logger.info("Generating monorepo structure...")
        options = TemplateOptions(overwrite=True)

        await self.engine.copy_template_directory("workspace", root, context, options)

        web_dir = root / "apps" / "web"
        api_dir = root / "apps" / "api"
        shared_dir = root / "packages" / "shared"
        for directory in (web_dir, api_dir, shared_dir):
            await asyncio.to_thread(ensure_dir, directory)

        await self._copy_framework(config.framework, web_dir, context)
        await self.backend_gen.generate(config.backend, api_dir, context)
        await self.engine.copy_template_directory("shared", shared_dir, context, options)

        self.logger.success("Monorepo structure created successfully!")
        return api_dir
