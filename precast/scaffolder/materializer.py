"""Turn one bundle file into one destination file.

Naming rules, applied to the path relative to the bundle root:

1. A trailing template suffix (``.hbs``) is stripped once and marks the file
   for rendering; anything else is copied byte-for-byte.
2. If the final path segment then starts with the dotfile prefix (``_``),
   that character becomes ``.`` (``_gitignore`` -> ``.gitignore``,
   ``_env.hbs`` -> ``.env``).

The conflict policy is checked before anything is written: an existing
destination is skipped with ``skip_if_exists``, replaced with ``overwrite``
and otherwise reported as a :class:`DestinationConflictError`.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from precast.utils import Logger

from .errors import DestinationCollisionError, DestinationConflictError
from .templates import TemplateRenderer

TEMPLATE_SUFFIX = ".hbs"
DOTFILE_PREFIX = "_"


@dataclass(frozen=True)
class TemplateOptions:
    """Conflict policy for one write (or one bundle copy).

    With both flags false an existing destination is an error.
    ``skip_empty`` drops rendered output that is blank.
    """

    overwrite: bool = False
    skip_if_exists: bool = False
    skip_empty: bool = True


@dataclass(frozen=True)
class FilePlan:
    """Where one bundle file goes and how it gets there."""

    source: str
    destination: str
    render: bool


def plan_destination(
    rel_path: str,
    suffix: str = TEMPLATE_SUFFIX,
    dotfile_prefix: str = DOTFILE_PREFIX,
) -> FilePlan:
    """Compute the destination path (relative, POSIX) for a bundle file."""
    render = rel_path.endswith(suffix)
    logical = rel_path[: -len(suffix)] if render else rel_path

    path = PurePosixPath(logical)
    if path.name.startswith(dotfile_prefix):
        path = path.with_name("." + path.name[len(dotfile_prefix):])

    return FilePlan(source=rel_path, destination=path.as_posix(), render=render)


def plan_bundle(
    files: Iterable[str],
    suffix: str = TEMPLATE_SUFFIX,
    dotfile_prefix: str = DOTFILE_PREFIX,
) -> list[FilePlan]:
    """Plan every file of a bundle, keeping enumeration order.

    Raises:
        DestinationCollisionError: If two sources map to one destination.
    """
    plans: list[FilePlan] = []
    seen: dict[str, str] = {}
    for rel_path in files:
        plan = plan_destination(rel_path, suffix, dotfile_prefix)
        if plan.destination in seen:
            raise DestinationCollisionError(
                plan.destination, [seen[plan.destination], rel_path]
            )
        seen[plan.destination] = rel_path
        plans.append(plan)
    return plans


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


async def should_write(dest: Path, options: TemplateOptions, logger: Logger) -> bool:
    """Apply the conflict policy to *dest*.

    Returns ``False`` when the file must be left alone (``skip_if_exists``).

    Raises:
        DestinationConflictError: If *dest* exists and overwriting is off.
    """
    if not await asyncio.to_thread(dest.exists):
        return True
    if options.skip_if_exists:
        logger.debug(f"Skipping existing file: {dest}")
        return False
    if not options.overwrite:
        raise DestinationConflictError(dest)
    return True


async def write_rendered(
    renderer: TemplateRenderer,
    source: Path,
    dest: Path,
    context: Mapping[str, Any],
    options: TemplateOptions,
    logger: Logger,
) -> Path | None:
    """Render *source* and write it to *dest* without consulting the conflict policy."""
    content = await asyncio.to_thread(renderer.render_file, source, context)
    if options.skip_empty and not content.strip():
        logger.debug(f"Skipping empty file: {dest}")
        return None

    await asyncio.to_thread(_write_file, dest, content)
    logger.debug(f"Generated: {dest}")
    return dest


async def copy_file(
    source: Path,
    dest: Path,
    options: TemplateOptions,
    logger: Logger,
) -> Path | None:
    """Copy *source* to *dest* unchanged.  Returns the written path, if any."""
    if not await should_write(dest, options, logger):
        return None

    await asyncio.to_thread(_copy_file, source, dest)
    logger.debug(f"Copied: {dest}")
    return dest


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, dest: Path) -> None:
    """Synchronous helper: create parent dirs and copy bytes."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
