"""Precast plugins -- lifecycle hooks around project generation.

Quick usage::

    from precast.plugins import Plugin, PluginManager

    manager = PluginManager()
    manager.register(Plugin(name="banner", post_generate=print_banner))
    await manager.run_post_generate(context)
"""

from precast.plugins.base import (
    Hook,
    Plugin,
    PluginContext,
    ValidationResult,
)
from precast.plugins.errors import DuplicatePluginError, PluginError
from precast.plugins.manager import PluginManager
from precast.plugins.typescript import create_typescript_plugin

__all__ = [
    "DuplicatePluginError",
    "Hook",
    "Plugin",
    "PluginContext",
    "PluginError",
    "PluginManager",
    "ValidationResult",
    "create_typescript_plugin",
]
