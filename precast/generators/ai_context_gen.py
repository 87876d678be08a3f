"""AI assistant context files (``ai-context/*``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from precast.scaffolder import TemplateEngine, TemplateEngineError, TemplateOptions
from precast.utils import Logger

# Assistant -> (template relative to the root, destination relative to the project)
AI_CONTEXT_FILES: dict[str, tuple[str, str]] = {
    "copilot": ("ai-context/_github/copilot-instructions.md.hbs", ".github/copilot-instructions.md"),
    "gemini": ("ai-context/GEMINI.md.hbs", "GEMINI.md"),
    "cursor": ("ai-context/_cursorrules.hbs", ".cursorrules"),
}


class AIContextGenerator:
    """Writes the context file for the selected AI assistant.

    Failures are reported as warnings: a missing context file never aborts
    project creation.  Existing files are left alone.
    """

    def __init__(self, engine: TemplateEngine, logger: Logger) -> None:
        self.engine = engine
        self.logger = logger

    async def generate(
        self,
        assistant: str | None,
        project_root: Path,
        context: dict[str, Any],
    ) -> Path | None:
        if not assistant or assistant in ("none", "claude"):
            return None

        entry = AI_CONTEXT_FILES.get(assistant)
        if entry is None:
            self.logger.warn(f"Unknown AI assistant: {assistant}")
            return None

        template, dest = entry
        self.logger.info(f"Setting up {assistant} context files...")
        try:
            return await self.engine.process_template(
                template, project_root / dest, context, TemplateOptions(skip_if_exists=True)
            )
        except TemplateEngineError as exc:
            self.logger.warn(f"Failed to create {assistant} context file: {exc}")
            return None
