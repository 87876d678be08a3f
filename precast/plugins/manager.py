"""Plugin registry and hook runner.

Plugins run in registration order for every phase; that order is never
sorted or prioritised.  A failing lifecycle hook is logged with the plugin
and hook name and re-raised unchanged, so no later plugin runs in that
phase and the caller aborts the whole generation.
"""

from __future__ import annotations

import inspect
from typing import Any

from precast.config import ProjectConfig
from precast.utils import Logger

from .base import Hook, Plugin, PluginContext, ValidationResult
from .errors import DuplicatePluginError


class PluginManager:
    """Ordered collection of named plugins."""

    def __init__(self, logger: Logger | None = None) -> None:
        self.logger = logger or Logger()
        self._plugins: dict[str, Plugin] = {}
        self._execution_order: list[str] = []

    def __len__(self) -> int:
        return len(self._execution_order)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    # -- Registration ------------------------------------------------------

    def register(self, plugin: Plugin) -> None:
        """Append *plugin* to the execution order.

        Raises:
            DuplicatePluginError: A plugin with the same name is registered.
        """
        if plugin.name in self._plugins:
            raise DuplicatePluginError(plugin.name)
        self._plugins[plugin.name] = plugin
        self._execution_order.append(plugin.name)
        self.logger.debug(f"Registered plugin: {plugin.name}")

    def unregister(self, name: str) -> bool:
        """Remove a plugin.  Returns ``True`` if one was removed."""
        if name in self._execution_order:
            self._execution_order.remove(name)
        return self._plugins.pop(name, None) is not None

    def get_plugin(self, name: str) -> Plugin | None:
        return self._plugins.get(name)

    def get_all_plugins(self) -> list[Plugin]:
        """All plugins in execution order."""
        return [self._plugins[name] for name in self._execution_order]

    # -- Hook execution ----------------------------------------------------

    async def execute_hook(self, hook: Hook, arg: Any) -> list[Any]:
        """Call *hook* on every plugin that implements it, in order.

        Coroutine hooks are awaited.  Returns the collected results.
        """
        results: list[Any] = []
        for plugin in self.get_all_plugins():
            fn = plugin.hook(hook)
            if fn is None:
                continue
            try:
                self.logger.debug(f"Executing {hook.value} hook for plugin: {plugin.name}")
                result = fn(arg)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                self.logger.error(f'Error in plugin "{plugin.name}" {hook.value} hook: {exc}')
                raise
            results.append(result)
        return results

    async def validate_config(self, config: ProjectConfig) -> ValidationResult:
        """Run every plugin's validator and merge the results.

        All plugins are consulted; each error is prefixed with
        ``[plugin-name]``.  The merged result is valid only if every
        plugin reported valid, with or without error messages.
        """
        all_valid = True
        all_errors: list[str] = []
        for plugin in self.get_all_plugins():
            if plugin.validate_config is None:
                continue
            result = plugin.validate_config(config)
            if not result.valid:
                all_valid = False
                all_errors.extend(f"[{plugin.name}] {err}" for err in result.errors)
        return ValidationResult(valid=all_valid, errors=all_errors)

    async def transform_config(self, config: ProjectConfig) -> ProjectConfig:
        """Pipe *config* through every plugin's transform, left to right."""
        transformed = config.model_copy(deep=True)
        for plugin in self.get_all_plugins():
            if plugin.transform_config is not None:
                transformed = plugin.transform_config(transformed)
        return transformed

    # -- Lifecycle phases --------------------------------------------------

    async def run_pre_generate(self, context: PluginContext) -> None:
        await self.execute_hook(Hook.PRE_GENERATE, context)

    async def run_generate(self, context: PluginContext) -> None:
        await self.execute_hook(Hook.GENERATE, context)

    async def run_post_generate(self, context: PluginContext) -> None:
        await self.execute_hook(Hook.POST_GENERATE, context)

    async def run_before_install(self, context: PluginContext) -> None:
        await self.execute_hook(Hook.BEFORE_INSTALL, context)

    async def run_after_install(self, context: PluginContext) -> None:
        await self.execute_hook(Hook.AFTER_INSTALL, context)
