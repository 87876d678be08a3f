"""Template engine: bundle walking, naming transforms and conditional composition.

The engine combines the bundle walker, the materializer and the renderer.
Every operation is a coroutine that awaits its file-system work one step at
a time; files of a bundle are processed sequentially in sorted order and the
first failure aborts the rest of the call.  Files already written by that
call are left in place.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from precast.config import EngineSettings
from precast.utils import Logger

from .errors import RenderError, TemplateNotFoundError
from .filters import FileFilter
from .materializer import (
    DOTFILE_PREFIX,
    TEMPLATE_SUFFIX,
    TemplateOptions,
    copy_file,
    plan_bundle,
    should_write,
    write_rendered,
)
from .templates import TemplateRenderer
from .walker import walk_bundle

TemplateContext = Mapping[str, Any]
Condition = bool | Callable[[TemplateContext], bool]


@dataclass(frozen=True)
class ConditionalTemplate:
    """Copy *source_dir* into *dest_dir* (relative to the project) when *condition* holds."""

    condition: Condition
    source_dir: str
    dest_dir: str | None = None

    def applies(self, context: TemplateContext) -> bool:
        if callable(self.condition):
            return bool(self.condition(context))
        return bool(self.condition)


class TemplateEngine:
    """Materializes template bundles into a project directory.

    Args:
        template_root: Directory holding the bundles (``frameworks/react/base``,
            ``backends/hono/src``, ``features/typescript/base`` ...).
        renderer: Renderer to compile ``.hbs`` files with.  A fresh one
            rooted at *template_root* is created when omitted.
        logger: Logger for per-file debug lines and render failures.
        template_suffix: Suffix that marks a file as a template.
        dotfile_prefix: Leading character that stands in for ``.``.
        file_filter: Optional predicate that drops bundle files before
            they are planned (see :func:`~precast.scaffolder.filters.stack_file_filter`).
    """

    def __init__(
        self,
        template_root: str | Path,
        renderer: TemplateRenderer | None = None,
        logger: Logger | None = None,
        *,
        template_suffix: str = TEMPLATE_SUFFIX,
        dotfile_prefix: str = DOTFILE_PREFIX,
        file_filter: FileFilter | None = None,
    ) -> None:
        self.template_root = Path(template_root)
        self.renderer = renderer or TemplateRenderer(self.template_root)
        self.logger = logger or Logger()
        self.template_suffix = template_suffix
        self.dotfile_prefix = dotfile_prefix
        self.file_filter = file_filter

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        logger: Logger | None = None,
        file_filter: FileFilter | None = None,
    ) -> "TemplateEngine":
        """Build an engine from :class:`EngineSettings`."""
        return cls(
            settings.template_root,
            logger=logger or Logger(debug=settings.debug),
            template_suffix=settings.template_suffix,
            dotfile_prefix=settings.dotfile_prefix,
            file_filter=file_filter,
        )

    # -- Single files ------------------------------------------------------

    def _resolve(self, template_path: str | Path) -> Path:
        path = Path(template_path)
        return path if path.is_absolute() else self.template_root / path

    async def process_template(
        self,
        template_path: str | Path,
        output_path: str | Path,
        context: TemplateContext,
        options: TemplateOptions | None = None,
    ) -> Path | None:
        """Render one template and write it to *output_path*.

        *template_path* may be absolute or relative to the template root.

        Returns:
            The written path, or ``None`` when the write was skipped
            (existing file with ``skip_if_exists``, or blank output).

        Raises:
            DestinationConflictError: The output exists and neither
                ``overwrite`` nor ``skip_if_exists`` is set.
            TemplateNotFoundError: The template file does not exist.
            RenderError: The template could not be read or rendered.
        """
        options = options or TemplateOptions()
        source = self._resolve(template_path)
        dest = Path(output_path)

        if not await should_write(dest, options, self.logger):
            return None
        if not await asyncio.to_thread(source.is_file):
            raise TemplateNotFoundError(source)

        try:
            return await write_rendered(self.renderer, source, dest, context, options, self.logger)
        except RenderError as exc:
            self.logger.error(f"Error processing template {source}: {exc.cause}")
            raise

    async def render_template(self, template_path: str | Path, context: TemplateContext) -> str:
        """Render a template and return the text without writing anything."""
        source = self._resolve(template_path)
        if not await asyncio.to_thread(source.is_file):
            raise TemplateNotFoundError(source)
        try:
            content = await asyncio.to_thread(self.renderer.render_file, source, context)
        except RenderError as exc:
            self.logger.error(f"Error rendering template {source}: {exc.cause}")
            raise
        self.logger.debug(f"Rendered template: {template_path}")
        return content

    async def process_variant_template(
        self,
        base_template_path: str | Path,
        output_path: str | Path,
        context: TemplateContext,
        variants: Mapping[str, str],
        options: TemplateOptions | None = None,
    ) -> Path | None:
        """Render the first matching variant of a template, else the base.

        For each ``context_key -> suffix`` in *variants*, when
        ``context[context_key] == suffix`` and ``<stem>-<suffix><ext>``
        exists next to the base template, that variant is used.
        """
        base = self._resolve(base_template_path)
        selected = base
        for context_key, variant_suffix in variants.items():
            if context.get(context_key) != variant_suffix:
                continue
            candidate = base.with_name(f"{base.stem}-{variant_suffix}{base.suffix}")
            if await asyncio.to_thread(candidate.is_file):
                selected = candidate
                break
        return await self.process_template(selected, output_path, context, options)

    # -- Bundles -----------------------------------------------------------

    async def copy_template_directory(
        self,
        source_dir: str,
        dest_dir: str | Path,
        context: TemplateContext,
        options: TemplateOptions | None = None,
    ) -> list[Path]:
        """Copy the bundle *source_dir* into *dest_dir*.

        ``.hbs`` files are rendered, everything else is copied as bytes.
        Files are handled one at a time in sorted order and the first error
        stops the copy.

        Returns:
            Paths written by this call (skipped files are not listed).

        Raises:
            BundleNotFoundError: The bundle does not exist.
            DestinationCollisionError: Two bundle files share a destination.
            DestinationConflictError: See :meth:`process_template`.
            RenderError: See :meth:`process_template`.
        """
        options = options or TemplateOptions()
        files = await walk_bundle(self.template_root, source_dir)
        bundle_root = self.template_root / source_dir

        if self.file_filter is not None:
            files = await asyncio.to_thread(self._apply_filter, files, context, bundle_root)

        plans = plan_bundle(files, self.template_suffix, self.dotfile_prefix)
        out_base = Path(dest_dir)
        written: list[Path] = []

        for plan in plans:
            source = bundle_root / plan.source
            dest = out_base / plan.destination
            if plan.render:
                path = await self.process_template(source, dest, context, options)
            else:
                path = await copy_file(source, dest, options, self.logger)
            if path is not None:
                written.append(path)

        return written

    def _apply_filter(
        self, files: list[str], context: TemplateContext, bundle_root: Path
    ) -> list[str]:
        return [f for f in files if not self.file_filter(f, context, bundle_root)]

    async def process_conditional_templates(
        self,
        templates: Sequence[ConditionalTemplate],
        project_dir: str | Path,
        context: TemplateContext,
        options: TemplateOptions | None = None,
    ) -> list[Path]:
        """Copy every bundle whose condition holds, in the given order.

        A failing bundle aborts the remaining entries.
        """
        root = Path(project_dir)
        written: list[Path] = []
        for template in templates:
            if not template.applies(context):
                continue
            dest = root / template.dest_dir if template.dest_dir else root
            written += await self.copy_template_directory(
                template.source_dir, dest, context, options
            )
        return written

    # -- Discovery ---------------------------------------------------------

    async def get_available_templates(self, category: str) -> list[str]:
        """Names of the bundles directly under *category*.

        Returns an empty list when the category does not exist.
        """
        category_path = self.template_root / category

        def _list() -> list[str]:
            if not category_path.is_dir():
                return []
            return sorted(p.name for p in category_path.iterdir() if p.is_dir())

        return await asyncio.to_thread(_list)

    async def has_template(self, category: str, name: str) -> bool:
        """True if bundle *name* exists under *category*."""
        return name in await self.get_available_templates(category)
