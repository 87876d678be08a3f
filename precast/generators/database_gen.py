"""Database and ORM bundle generation (``database/<name>``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from precast.scaffolder import TemplateEngine, TemplateOptions
from precast.utils import Logger


class DatabaseGenerator:
    """Copies the database bundle and the ORM bundle, when they exist."""

    def __init__(self, engine: TemplateEngine, logger: Logger) -> None:
        self.engine = engine
        self.logger = logger

    async def generate(
        self,
        database: str,
        orm: str,
        output_dir: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Generate database files into *output_dir*.

        A selection of ``none`` (or one without a bundle) is skipped; a
        missing bundle only produces a warning.

        Returns:
            List of written file paths.
        """
        written: list[Path] = []
        available = await self.engine.get_available_templates("database")
        for name in (database, orm):
            if not name or name == "none":
                continue
            if name not in available:
                self.logger.warn(f"Database templates not found for {name}")
                continue
            written += await self.engine.copy_template_directory(
                f"database/{name}", output_dir, context, TemplateOptions(overwrite=True)
            )
        return written
