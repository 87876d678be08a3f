"""Template bundle discovery.

A bundle is a directory under the template root.  Walking it yields every
file below it (dotfiles included, directories excluded) as a POSIX-style
path relative to the bundle root.  The result is a snapshot: the engine
never rescans a bundle while copying it.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from .errors import BundleNotFoundError


def resolve_bundle(template_root: Path, bundle: str) -> Path:
    """Return the absolute bundle directory, raising if it does not exist."""
    bundle_root = template_root / bundle
    if not bundle_root.is_dir():
        raise BundleNotFoundError(bundle, bundle_root)
    return bundle_root


def list_bundle_files(bundle_root: Path) -> list[str]:
    """Synchronously list all files under *bundle_root*, sorted."""
    return sorted(
        path.relative_to(bundle_root).as_posix()
        for path in bundle_root.rglob("*")
        if path.is_file()
    )


async def walk_bundle(template_root: str | Path, bundle: str) -> list[str]:
    """List every file in *bundle* relative to its root.

    Raises:
        BundleNotFoundError: If ``template_root / bundle`` is not a directory.
    """

    def _walk() -> list[str]:
        return list_bundle_files(resolve_bundle(Path(template_root), bundle))

    return await asyncio.to_thread(_walk)
