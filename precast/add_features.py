"""The ``add`` driver: extend an existing project from its manifest.

The stack recorded in ``precast.jsonc`` is turned back into a template
context, the requested addon bundles (``addons/<name>``) and AI assistant
context file are materialized with ``skip_if_exists`` so files the user
already has are never touched, and the manifest is updated afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from precast.generators import AIContextGenerator
from precast.manifest import detect_project, update_manifest
from precast.scaffolder import TemplateEngine, TemplateOptions
from precast.utils import Logger


class ProjectNotFoundError(Exception):
    """Raised when a directory holds no readable ``precast.jsonc``."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir
        super().__init__(f"No Precast project found in {project_dir}")


async def add_features(
    project_dir: str | Path,
    engine: TemplateEngine,
    logger: Logger | None = None,
    *,
    addons: Sequence[str] = (),
    ai_assistant: str | None = None,
) -> list[Path]:
    """Add *addons* and an *ai_assistant* context file to an existing project.

    Addons already recorded in the manifest are skipped.

    Returns:
        Paths written by this call.

    Raises:
        ProjectNotFoundError: *project_dir* has no manifest.
        TemplateEngineError: An addon bundle is missing or fails to render.
    """
    logger = logger or engine.logger
    root = Path(project_dir)

    config = await detect_project(root)
    if config is None:
        raise ProjectNotFoundError(root)
    logger.info(f"Found Precast project: {config.name}")

    context = config.to_context()
    options = TemplateOptions(skip_if_exists=True)
    written: list[Path] = []

    new_addons: list[str] = []
    for addon in addons:
        if addon in config.addons or addon in new_addons:
            logger.info(f"{addon} is already part of this project")
            continue
        written += await engine.copy_template_directory(f"addons/{addon}", root, context, options)
        new_addons.append(addon)

    updates: dict[str, object] = {}
    if new_addons:
        updates["addons"] = [*config.addons, *new_addons]
    if ai_assistant and ai_assistant != config.ai_assistant:
        path = await AIContextGenerator(engine, logger).generate(ai_assistant, root, context)
        if path is not None:
            written.append(path)
        updates["ai_assistant"] = ai_assistant

    if not updates:
        logger.info("No changes to make.")
        return written

    await update_manifest(root, **updates)
    logger.success("Project configuration updated successfully!")
    return written
