"""The ``precast.jsonc`` project manifest.

Records the chosen stack so later ``add`` / ``add-features`` / ``generate``
commands can rebuild the template context of an existing project.  The file
is written as formatted JSON, which is also a valid JSONC document.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from precast.config import ProjectConfig
from precast.utils import print_warning

MANIFEST_FILE = "precast.jsonc"
MANIFEST_SCHEMA_URL = "https://precast.dev/precast.schema.json"

# Keys ``update_manifest`` may change after creation.
UPDATABLE_KEYS = frozenset({"ui_library", "ai_assistant", "addons"})


class PrecastManifest(BaseModel):
    """Serialized stack selection of a generated project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_url: str = Field(default=MANIFEST_SCHEMA_URL, alias="$schema")
    version: str
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    framework: str
    language: str
    backend: str | None = None
    database: str | None = None
    orm: str | None = None
    styling: str | None = None
    ui_library: str | None = None
    api_client: str | None = None
    ai_assistant: str | None = None
    typescript: bool
    git: bool
    docker: bool = False
    package_manager: str
    addons: list[str] = Field(default_factory=list)

    @classmethod
    def from_config(cls, config: ProjectConfig, version: str) -> "PrecastManifest":
        return cls(
            version=version,
            framework=config.framework,
            language=config.language,
            backend=config.backend,
            database=config.database,
            orm=config.orm,
            styling=config.styling,
            ui_library=config.ui_library,
            api_client=config.api_client,
            ai_assistant=config.ai_assistant,
            typescript=config.typescript,
            git=config.git,
            docker=config.docker,
            package_manager=config.package_manager,
            addons=list(config.addons),
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


async def write_manifest(config: ProjectConfig, project_dir: Path, version: str) -> Path:
    """Write ``precast.jsonc`` for *config* into *project_dir*."""
    manifest = PrecastManifest.from_config(config, version)
    path = Path(project_dir) / MANIFEST_FILE
    await asyncio.to_thread(path.write_text, manifest.to_json(), "utf-8")
    return path


async def read_manifest(project_dir: Path) -> PrecastManifest | None:
    """Load the manifest, or ``None`` if it is missing or unreadable."""
    path = Path(project_dir) / MANIFEST_FILE
    if not await asyncio.to_thread(path.is_file):
        return None
    try:
        raw = await asyncio.to_thread(path.read_text, "utf-8")
        return PrecastManifest.model_validate_json(raw)
    except (OSError, ValueError) as exc:
        print_warning(f"Warning: could not parse {MANIFEST_FILE}: {exc}")
        return None


async def update_manifest(project_dir: Path, **updates: Any) -> PrecastManifest | None:
    """Apply *updates* (``ui_library``, ``ai_assistant``, ``addons``) to the manifest.

    Returns the updated manifest, or ``None`` when the project has none.

    Raises:
        ValueError: If a key outside ``UPDATABLE_KEYS`` is given.
    """
    unknown = set(updates) - UPDATABLE_KEYS
    if unknown:
        raise ValueError(f"Cannot update manifest keys: {', '.join(sorted(unknown))}")

    manifest = await read_manifest(project_dir)
    if manifest is None:
        return None

    updated = manifest.model_copy(update=updates)
    path = Path(project_dir) / MANIFEST_FILE
    await asyncio.to_thread(path.write_text, updated.to_json(), "utf-8")
    return updated


async def detect_project(project_dir: Path) -> ProjectConfig | None:
    """Rebuild a ``ProjectConfig`` from an existing project's manifest."""
    manifest = await read_manifest(project_dir)
    if manifest is None:
        return None

    project_dir = Path(project_dir)
    return ProjectConfig(
        name=project_dir.name,
        framework=manifest.framework,
        language=manifest.language,
        backend=manifest.backend or "none",
        database=manifest.database or "none",
        orm=manifest.orm or "none",
        styling=manifest.styling or "css",
        ui_library=manifest.ui_library,
        api_client=manifest.api_client,
        ai_assistant=manifest.ai_assistant,
        typescript=manifest.typescript,
        git=manifest.git,
        docker=manifest.docker,
        package_manager=manifest.package_manager,
        project_path=project_dir,
        addons=manifest.addons,
    )
