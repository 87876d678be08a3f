"""Shared pytest fixtures for the Precast test suite.

Provides reusable fixtures for:
- Temporary template roots with bundles written from dicts
- Template engines wired to a capturing logger
- Sample project configurations
"""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from precast.config import ProjectConfig
from precast.plugins import PluginManager
from precast.scaffolder import TemplateEngine
from precast.utils import Logger

BundleFiles = dict[str, str | bytes]


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Empty template root (auto-cleanup)."""
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Destination directory for generated files (not created up front)."""
    return tmp_path / "output"


def write_files(root: Path, files: BundleFiles) -> None:
    """Write ``{relative path: content}`` under *root*; bytes are written raw."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_bundle(template_root: Path) -> Callable[[str, BundleFiles], Path]:
    """Factory that creates a bundle under the template root.

    Usage::

        make_bundle("frameworks/react/base", {"package.json.hbs": "..."})
    """

    def _make(bundle: str, files: BundleFiles) -> Path:
        bundle_root = template_root / bundle
        bundle_root.mkdir(parents=True, exist_ok=True)
        write_files(bundle_root, files)
        return bundle_root

    return _make


# ---------------------------------------------------------------------------
# Engine & logging
# ---------------------------------------------------------------------------


@pytest.fixture
def logger() -> Logger:
    """Debug-enabled logger that records output in memory."""
    out = Console(file=io.StringIO(), width=1000, color_system=None)
    return Logger(debug=True, out=out)


@pytest.fixture
def log_text(logger: Logger) -> Callable[[], str]:
    """Returns everything the capturing logger printed so far."""
    return lambda: logger.console.file.getvalue()


@pytest.fixture
def engine(template_root: Path, logger: Logger) -> TemplateEngine:
    """A fresh engine over the temporary template root."""
    return TemplateEngine(template_root, logger=logger)


@pytest.fixture
def plugin_manager(logger: Logger) -> PluginManager:
    return PluginManager(logger)


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def react_config() -> ProjectConfig:
    """Single-app React + TypeScript project."""
    return ProjectConfig(name="test-app", framework="react", styling="tailwind")


@pytest.fixture
def monorepo_config() -> ProjectConfig:
    """Vue frontend with a Hono backend and Postgres."""
    return ProjectConfig(
        name="mono-app",
        framework="vue",
        backend="hono",
        database="postgres",
        orm="drizzle",
        typescript=False,
        language="javascript",
    )
