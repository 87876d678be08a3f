"""Stack-dependent file filtering for template bundles.

Framework bundles ship every variant side by side (TypeScript and
JavaScript sources, Tailwind and plain CSS banners, optional tool configs).
:func:`stack_file_filter` decides, per bundle file, whether the selected
stack wants it.  The engine only applies a filter when one is injected.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from pathlib import Path, PurePosixPath
from typing import Any

# (relative path, context, bundle root) -> True to skip the file
FileFilter = Callable[[str, Mapping[str, Any], Path], bool]

_CONFIG_FILE_RE = re.compile(
    r"(\.(config|rc)\.(js|mjs|cjs|ts)\.hbs$"
    r"|^(tailwind|postcss|vite|vitest|tsconfig|eslint|prettier)\.config\.(js|mjs|cjs|ts)\.hbs$)"
)

_ESLINT_FILES = frozenset({
    "_eslintrc.json", "_eslintrc.js", "_eslintrc.cjs",
    "_eslintrc.json.hbs", "_eslintrc.js.hbs", "_eslintrc.cjs.hbs",
    "eslint.config.js.hbs", "eslint.config.mjs.hbs",
    "_eslintignore", "_eslintignore.hbs",
})

_PRETTIER_FILES = frozenset({
    "_prettierrc", "_prettierrc.json", "_prettierrc.js", "_prettierrc.cjs",
    "_prettierrc.json.hbs", "_prettierrc.js.hbs", "_prettierrc.cjs.hbs",
    "prettier.config.js.hbs", "prettier.config.mjs.hbs",
    "_prettierignore", "_prettierignore.hbs",
})

_TAILWIND_CONFIGS = frozenset({
    "tailwind.config.js.hbs", "tailwind.config.ts.hbs", "tailwind.config.mjs.hbs",
    "postcss.config.js.hbs", "postcss.config.ts.hbs", "postcss.config.mjs.hbs",
})

_TS_ONLY_FILES = frozenset({
    "tsconfig.json.hbs", "tsconfig.app.json.hbs", "tsconfig.node.json.hbs", "env.d.ts.hbs",
})


def _sibling_exists(bundle_root: Path, rel_path: str, name: str) -> bool:
    return (bundle_root / PurePosixPath(rel_path).parent / name).exists()


def stack_file_filter(
    rel_path: str, context: Mapping[str, Any], bundle_root: Path
) -> bool:
    """Return ``True`` if the selected stack does not want *rel_path*."""
    name = PurePosixPath(rel_path).name
    typescript = bool(context.get("typescript"))
    styling = context.get("styling")
    is_config = _CONFIG_FILE_RE.search(name) is not None

    if context.get("gitignore") is False and name == "_gitignore":
        return True
    if context.get("eslint") is False and name in _ESLINT_FILES:
        return True
    if context.get("prettier") is False and name in _PRETTIER_FILES:
        return True

    if not typescript and name.endswith((".ts.hbs", ".tsx.hbs")):
        return True

    if typescript:
        if is_config and name.endswith((".js.hbs", ".mjs.hbs")):
            # Prefer a TypeScript config when the bundle has one.
            ts_name = re.sub(r"\.(m?js)\.hbs$", ".ts.hbs", name)
            if _sibling_exists(bundle_root, rel_path, ts_name):
                return True
        elif not is_config and name.endswith((".js.hbs", ".jsx.hbs")):
            return True

    if not typescript and is_config and name.endswith(".mjs.hbs"):
        js_name = re.sub(r"\.mjs\.hbs$", ".js.hbs", name)
        if _sibling_exists(bundle_root, rel_path, js_name):
            return True

    if styling != "scss" and name.endswith(".scss.hbs"):
        return True
    if styling != "tailwind" and name in _TAILWIND_CONFIGS:
        return True

    if name.startswith("PrecastBanner-tailwind") and styling != "tailwind":
        return True
    if (
        name.startswith("PrecastBanner.")
        and styling == "tailwind"
        and name.endswith((".jsx.hbs", ".tsx.hbs"))
    ):
        return True
    if name == "PrecastBanner.css.hbs" and styling == "tailwind":
        return True

    if not typescript and name in _TS_ONLY_FILES:
        return True
    return False
