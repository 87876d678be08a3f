"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which compiles template sources from the
template root and renders them with the project context.  Every renderer
owns its own ``Environment``, so helpers registered on one instance are
never visible to another.

Output follows the conventions the template corpus was written against:
booleans render as ``true``/``false``, ``None`` and missing keys render as
empty text and lists render comma-joined.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import ChainableUndefined, Environment, FileSystemLoader, TemplateError, pass_context

from .errors import RenderError


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The loader is rooted at *template_dir* so templates can ``include``
    shared partials such as ``common/styles/globals.css.hbs``.  Default
    helpers are registered at construction time, before anything is
    rendered.
    """

    def __init__(self, template_dir: str | Path) -> None:
        self.template_dir = Path(template_dir)
        self.helpers: dict[str, Callable[..., Any]] = {}
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=ChainableUndefined,
            keep_trailing_newline=True,
            finalize=_finalize,
        )
        self._register_default_helpers()

    # -- Helper registry ---------------------------------------------------

    def register_helper(self, name: str, helper: Callable[..., Any]) -> None:
        """Register *helper* as both a global function and a filter.

        ``{{ eq(framework, "react") }}`` and ``{{ framework | eq("react") }}``
        are equivalent.
        """
        self.helpers[name] = helper
        self.env.globals[name] = helper
        self.env.filters[name] = helper

    def register_context_helper(
        self, name: str, helper: Callable[..., Any]
    ) -> None:
        """Register a helper that receives the render context as first argument."""

        @pass_context
        def _bound(ctx: Any, *args: Any, **kwargs: Any) -> Any:
            return helper(ctx, *args, **kwargs)

        self.helpers[name] = helper
        self.env.globals[name] = _bound

    def _register_default_helpers(self) -> None:
        self.register_helper("eq", lambda a, b: a == b)
        self.register_helper("ne", lambda a, b: a != b)
        self.register_helper("if_equals", lambda a, b: a == b)
        self.register_helper("and_", lambda a, b: a and b)
        self.register_helper("or_", lambda a, b: a or b)
        self.register_helper("not_", lambda a: not a)
        self.register_helper("includes", _includes)
        self.register_helper("if_any", lambda *args: any(args))
        self.register_helper("if_all", lambda *args: all(args))
        self.register_helper("capitalize", _capitalize_filter)
        self.register_helper("kebab_case", _kebab_case_filter)
        self.register_helper("camel_case", _camel_case_filter)
        self.register_helper("pascal_case", _pascal_case_filter)
        self.register_helper("snake_case", _snake_case_filter)
        self.register_helper("slugify", _slugify_filter)
        self.register_helper("strip_hash", _strip_hash_filter)

        self.register_context_helper("has_server_framework", _has_server_framework)
        self.register_context_helper("has_client_framework", _has_client_framework)
        self.register_context_helper("build_icon_imports", _build_icon_imports)
        self.register_context_helper("build_tech_stack_imports", _build_tech_stack_imports)

    # -- Rendering ---------------------------------------------------------

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def render_file(self, source_path: str | Path, context: Mapping[str, Any]) -> str:
        """Read *source_path* as UTF-8 and render it.

        The file may live anywhere; includes still resolve against the
        template root.

        Raises:
            RenderError: On read, decode, syntax or evaluation failures.
        """
        path = Path(source_path)
        try:
            source = path.read_text(encoding="utf-8")
            return self.render_string(source, context)
        except (OSError, UnicodeDecodeError, TemplateError) as exc:
            raise RenderError(path, exc) from exc


# ---------------------------------------------------------------------------
# Output finalization
# ---------------------------------------------------------------------------


def _finalize(value: Any) -> Any:
    """Render values the way the template corpus expects."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(_finalize(item)) for item in value)
    return value


# ---------------------------------------------------------------------------
# Jinja2 custom helpers
# ---------------------------------------------------------------------------


def _includes(collection: Any, value: Any) -> bool:
    """True if *collection* is a list-like containing *value*."""
    return isinstance(collection, (list, tuple, set, frozenset)) and value in collection


def _capitalize_filter(value: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    if not value:
        return ""
    return value[0].upper() + value[1:]


def _kebab_case_filter(value: str) -> str:
    """Convert ``someThing`` to ``some-thing``."""
    if not value:
        return ""
    return re.sub(r"([a-z])([A-Z])", r"\1-\2", value).lower()


def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing`` to ``someThing``."""
    if not value:
        return ""
    return re.sub(r"-.", lambda m: m.group(0)[1].upper(), value)


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word.capitalize() for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s]+", "_", s2).lower()


def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def _strip_hash_filter(value: str) -> str:
    """Drop the ``#`` from a hex colour code (for placeholder image URLs)."""
    return value.replace("#", "", 1) if value else ""


# -- Context-bound helpers ---------------------------------------------------

_CLIENT_ONLY_FRAMEWORKS = ("vanilla", "react", "vue", "angular", "svelte", "solid")


def _has_server_framework(ctx: Mapping[str, Any]) -> bool:
    backend = ctx.get("backend")
    has_backend = bool(backend) and backend != "none"
    return has_backend or ctx.get("framework") not in _CLIENT_ONLY_FRAMEWORKS


def _has_client_framework(ctx: Mapping[str, Any]) -> bool:
    return ctx.get("framework") != "none"


_FRAMEWORK_ICONS: dict[str, str] = {
    "react": "SiReact",
    "next": "SiReact",
    "react-router": "SiReact",
    "tanstack-router": "SiReact as SiTanstack",
    "tanstack-start": "SiReact as SiTanstack",
    "vue": "SiVuedotjs as SiVue",
    "svelte": "SiSvelte",
    "solid": "SiSolid",
    "angular": "SiAngular",
    "astro": "SiAstro",
    "vanilla": "SiJavascript",
    "vite": "SiJavascript",
}

_BACKEND_ICONS: dict[str, str] = {
    "hono": "SiHono",
    "express": "SiExpress",
    "fastify": "SiFastify",
    "nestjs": "SiNestjs",
    "koa": "SiNodedotjs as SiKoa",
    "node": "SiNodedotjs",
}

_DATABASE_ICONS: dict[str, str] = {
    "postgres": "SiPostgresql",
    "mysql": "SiMysql",
    "mongodb": "SiMongodb",
}

_ORM_ICONS: dict[str, str] = {
    "prisma": "SiPrisma",
    "drizzle": "SiNodedotjs as SiDrizzle",
    "typeorm": "SiNodedotjs as SiTypeorm",
    "mongoose": "SiMongodb as SiMongoose",
}

_VITE_FRAMEWORKS = frozenset({
    "react", "vue", "svelte", "vite", "vite-react", "vite-vue",
    "vite-svelte", "vite-solid", "vite-vanilla",
})


def _icon(table: Mapping[str, str], key: Any) -> list[str]:
    icon = table.get(key) if isinstance(key, str) else None
    return [icon] if icon else []


def _format_imports(imports: list[str]) -> str:
    if not imports:
        return ""
    if len(imports) == 1:
        return imports[0]
    return "\n  " + ",\n  ".join(imports) + "\n"


def _build_icon_imports(ctx: Mapping[str, Any]) -> str:
    """Icon import list for the generated landing page."""
    imports = _icon(_FRAMEWORK_ICONS, ctx.get("framework"))
    if ctx.get("styling") == "tailwind":
        imports.append("SiTailwindcss")
    if ctx.get("typescript"):
        imports.append("SiTypescript")
    imports += _icon(_BACKEND_ICONS, ctx.get("backend"))
    imports += _icon(_DATABASE_ICONS, ctx.get("database"))
    imports += _icon(_ORM_ICONS, ctx.get("orm"))
    return _format_imports(imports)


def _build_tech_stack_imports(ctx: Mapping[str, Any]) -> str:
    """Icon import list for the TechnologyStack component (adds Vite, Bun, Docker)."""
    imports = _icon(_FRAMEWORK_ICONS, ctx.get("framework"))
    if ctx.get("framework") in _VITE_FRAMEWORKS:
        imports.append("SiVite")
    if ctx.get("styling") == "tailwind":
        imports.append("SiTailwindcss")
    if ctx.get("typescript"):
        imports.append("SiTypescript")
    imports.append("SiBun")
    backend = ctx.get("backend")
    if backend in ("hono", "express", "fastify", "nestjs"):
        imports += _icon(_BACKEND_ICONS, backend)
    database = ctx.get("database")
    if database == "sqlite":
        imports.append("SiSqlite")
    else:
        imports += _icon(_DATABASE_ICONS, database)
    orm = ctx.get("orm")
    if orm == "prisma":
        imports.append("SiPrisma")
    elif orm == "drizzle":
        imports.append("SiDrizzle")
    if ctx.get("docker"):
        imports.append("SiDocker")
    return _format_imports(imports)
