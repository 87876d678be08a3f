"""Exceptions raised by the plugin manager."""

from __future__ import annotations


class PluginError(Exception):
    """Base class for plugin registry failures."""


class DuplicatePluginError(PluginError):
    """Raised when a plugin name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Plugin "{name}" is already registered')
