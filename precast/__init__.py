"""create-precast-app -- project scaffolding engine.

Walks template bundles, renders ``.hbs`` templates with the project stack
context and materializes the result into a new project directory.  Plugins
hook into the generation lifecycle around the engine.

Quick usage::

    from precast import EngineSettings, PluginManager, ProjectConfig, TemplateEngine
    from precast.create_project import create_project

    settings = EngineSettings.from_env()
    engine = TemplateEngine(settings.template_root)
    plugins = PluginManager()
    config = ProjectConfig(name="my-app", framework="react")
    project_path = await create_project(config, engine, plugins)
"""

from precast.config import EngineSettings, ProjectConfig
from precast.plugins import Hook, Plugin, PluginContext, PluginManager
from precast.scaffolder import TemplateEngine, TemplateOptions, TemplateRenderer

__version__ = "0.1.0"

__all__ = [
    "EngineSettings",
    "Hook",
    "Plugin",
    "PluginContext",
    "PluginManager",
    "ProjectConfig",
    "TemplateEngine",
    "TemplateOptions",
    "TemplateRenderer",
    "__version__",
]
