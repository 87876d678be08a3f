"""Backend bundle generation (``backends/<name>/base`` and ``backends/<name>/src``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from precast.config import BACKENDS
from precast.scaffolder import TemplateEngine, TemplateOptions
from precast.utils import Logger


def is_valid_backend(backend: str) -> bool:
    """True if *backend* is a supported backend framework."""
    return backend in BACKENDS


class BackendGenerator:
    """Copies a backend's bundles into a project (or ``apps/api``)."""

    def __init__(self, engine: TemplateEngine, logger: Logger) -> None:
        self.engine = engine
        self.logger = logger

    async def generate(
        self,
        backend: str,
        output_dir: Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Generate backend files for *backend* into *output_dir*.

        ``next-api`` lives inside the Next.js app and generates nothing.

        Returns:
            List of written file paths.
        """
        if backend == "next-api":
            self.logger.info("Next.js API routes are integrated into the Next.js framework")
            return []

        options = TemplateOptions(overwrite=True)
        self.logger.info(f"Generating {backend} backend...")
        try:
            written = await self.engine.copy_template_directory(
                f"backends/{backend}/base", output_dir, context, options
            )
            if await self.engine.has_template(f"backends/{backend}", "src"):
                written += await self.engine.copy_template_directory(
                    f"backends/{backend}/src", output_dir / "src", context, options
                )
        except Exception as exc:
            self.logger.error(f"Failed to generate {backend} backend: {exc}")
            raise

        self.logger.success(f"{backend} backend generated successfully!")
        return written
