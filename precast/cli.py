"""Command-line entry point for ``create-precast-app``.

Usage::

    create-precast-app init my-app --framework react --backend hono
    create-precast-app list frameworks
    create-precast-app add husky --project my-app --ai cursor
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from precast.add_features import ProjectNotFoundError, add_features
from precast.config import FRAMEWORKS, EngineSettings, ProjectConfig
from precast.create_project import ProjectCreationError, create_project
from precast.plugins import PluginManager, create_typescript_plugin
from precast.scaffolder import TemplateEngine, TemplateEngineError, stack_file_filter
from precast.utils import Logger, console, print_error


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-precast-app",
        description="Scaffold a new project from the Precast templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-precast-app init my-app --framework react\n"
            "  create-precast-app init my-app --framework vue --backend hono --database postgres\n"
            "  create-precast-app list backends\n"
        ),
    )
    parser.add_argument(
        "--template-root",
        default=None,
        help="Template root directory (default: $PRECAST_TEMPLATE_ROOT or bundled templates)",
    )
    parser.add_argument("--debug", action="store_true", help="Print per-file debug output")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Create a new project")
    init.add_argument("name", help="Project name")
    init.add_argument("--output", "-o", default=".", help="Parent directory (default: .)")
    init.add_argument("--framework", default="react", choices=FRAMEWORKS)
    init.add_argument("--backend", default="none")
    init.add_argument("--database", default="none")
    init.add_argument("--orm", default="none")
    init.add_argument("--styling", default="css")
    init.add_argument("--ai-assistant", default=None)
    init.add_argument("--package-manager", default="npm")
    init.add_argument("--no-typescript", action="store_true", help="Generate JavaScript")
    init.add_argument("--no-git", action="store_true")
    init.add_argument("--docker", action="store_true")

    list_cmd = sub.add_parser("list", help="List the bundles available in a category")
    list_cmd.add_argument("category", help="Category under the template root, e.g. frameworks")

    add = sub.add_parser("add", help="Add addons or AI context files to an existing project")
    add.add_argument("addons", nargs="*", help="Addon bundles under addons/ in the template root")
    add.add_argument("--project", "-p", default=".", help="Project directory (default: .)")
    add.add_argument("--ai", dest="ai_assistant", default=None, help="AI assistant context file to add")

    return parser


async def _run(args: argparse.Namespace) -> int:
    settings = EngineSettings.from_env()
    if args.template_root:
        settings = settings.model_copy(update={"template_root": Path(args.template_root)})
    logger = Logger(debug=settings.debug or args.debug)
    engine = TemplateEngine.from_settings(settings, logger, file_filter=stack_file_filter)

    if args.command == "list":
        for name in await engine.get_available_templates(args.category):
            console.print(name)
        return 0

    if args.command == "add":
        try:
            await add_features(
                Path(args.project), engine, logger,
                addons=args.addons, ai_assistant=args.ai_assistant,
            )
        except (ProjectNotFoundError, TemplateEngineError) as exc:
            print_error(f"Error: {exc}")
            return 1
        return 0

    plugins = PluginManager(logger)
    plugins.register(create_typescript_plugin())

    typescript = not args.no_typescript
    config = ProjectConfig(
        name=args.name,
        framework=args.framework,
        backend=args.backend,
        database=args.database,
        orm=args.orm,
        styling=args.styling,
        typescript=typescript,
        language="typescript" if typescript else "javascript",
        git=not args.no_git,
        docker=args.docker,
        ai_assistant=args.ai_assistant,
        package_manager=args.package_manager,
    )
    try:
        await create_project(config, engine, plugins, logger, output_dir=Path(args.output))
    except (ProjectCreationError, TemplateEngineError) as exc:
        print_error(f"Error: {exc}")
        return 1
    return 0


def main() -> None:
    """CLI entry point for ``create-precast-app``."""
    args = _build_parser().parse_args()
    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
