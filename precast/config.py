"""Precast configuration.

Typed models for the project stack selection and for the template engine
settings.  All settings use Pydantic v2 models so they can be validated at
construction time and serialised to/from JSON or environment variables
without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Stack constants
# ---------------------------------------------------------------------------

FRAMEWORKS: tuple[str, ...] = (
    "react",
    "vue",
    "angular",
    "solid",
    "svelte",
    "tanstack-router",
    "next",
    "react-router",
    "tanstack-start",
    "nuxt",
    "astro",
    "remix",
    "vite",
    "vanilla",
)

BACKENDS: tuple[str, ...] = (
    "node",
    "express",
    "fastify",
    "hono",
    "nestjs",
    "koa",
    "next-api",
)

# Backends that never turn a project into a monorepo.  ``next-api`` lives
# inside the Next.js app itself.
MONOREPO_EXCLUDED_BACKENDS: frozenset[str] = frozenset({"none", "next-api"})

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """The resolved stack selection for one project.

    Field names are snake_case in Python; the camelCase aliases are the
    spelling the template corpus uses, so :meth:`to_context` dumps by alias.
    Unknown keys are kept as ad-hoc context values.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    name: str = Field(..., min_length=1, description="Project name (directory and package name)")
    framework: str = Field(default="react")
    backend: str = Field(default="none")
    database: str = Field(default="none")
    orm: str = Field(default="none")
    styling: str = Field(default="css")
    typescript: bool = Field(default=True)
    language: str = Field(default="typescript")
    git: bool = Field(default=True)
    gitignore: bool = Field(default=True)
    eslint: bool = Field(default=True)
    prettier: bool = Field(default=True)
    docker: bool = Field(default=False)
    package_manager: str = Field(default="npm")
    project_path: Path | None = Field(default=None)
    ui_library: str | None = None
    ai_assistant: str | None = None
    ai_context: list[str] = Field(default_factory=list)
    api_client: str | None = None
    auth_provider: str | None = None
    runtime: str | None = None
    deployment_method: str | None = None
    color_palette: str | None = None
    db_user: str | None = None
    include_redis: bool = False
    include_admin_tools: bool = False
    auto_install: bool = False
    addons: list[str] = Field(default_factory=list)
    plugins: list[str] = Field(default_factory=list)
    powerups: list[str] = Field(default_factory=list)
    mcp_servers: list[str] = Field(default_factory=list)

    @property
    def is_monorepo(self) -> bool:
        """True when a standalone backend sits next to the frontend app."""
        return bool(self.backend) and self.backend not in MONOREPO_EXCLUDED_BACKENDS

    def to_context(self, **extra: Any) -> dict[str, Any]:
        """Return the template context mapping for this configuration.

        Values are JSON-compatible (paths become strings).  Keyword arguments
        are merged on top as ad-hoc keys.
        """
        context = self.model_dump(mode="json", by_alias=True)
        context.update(extra)
        return context


# ---------------------------------------------------------------------------
# Engine settings
# ---------------------------------------------------------------------------


class EngineSettings(BaseModel):
    """Where templates live and how template files are named."""

    template_root: Path = Field(default=_DEFAULT_TEMPLATE_DIR)
    template_suffix: str = Field(default=".hbs", min_length=1)
    dotfile_prefix: str = Field(default="_", min_length=1, max_length=1)
    debug: bool = Field(default=False)

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            PRECAST_TEMPLATE_ROOT, PRECAST_TEMPLATE_SUFFIX, PRECAST_DEBUG, DEBUG.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("PRECAST_TEMPLATE_ROOT"):
            kwargs["template_root"] = Path(os.environ["PRECAST_TEMPLATE_ROOT"])
        if os.environ.get("PRECAST_TEMPLATE_SUFFIX"):
            kwargs["template_suffix"] = os.environ["PRECAST_TEMPLATE_SUFFIX"]

        debug_flag = os.environ.get("PRECAST_DEBUG") or os.environ.get("DEBUG") or ""
        kwargs["debug"] = debug_flag.strip().lower() not in ("", "0", "false", "no")
        return cls(**kwargs)
