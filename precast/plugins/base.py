"""Plugin model for the generation lifecycle.

A plugin declares the hooks it implements as explicit optional fields; the
manager asks :meth:`Plugin.hook` for a phase and skips plugins that return
``None``.  Lifecycle hooks may be plain functions or coroutines.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from precast.config import ProjectConfig
from precast.utils import Logger

if TYPE_CHECKING:
    from precast.scaffolder.engine import TemplateEngine


class Hook(str, Enum):
    """Extension points, in the order a generation run visits them."""

    VALIDATE_CONFIG = "validate_config"
    TRANSFORM_CONFIG = "transform_config"
    PRE_GENERATE = "pre_generate"
    GENERATE = "generate"
    POST_GENERATE = "post_generate"
    BEFORE_INSTALL = "before_install"
    AFTER_INSTALL = "after_install"

    @property
    def is_lifecycle(self) -> bool:
        return self not in (Hook.VALIDATE_CONFIG, Hook.TRANSFORM_CONFIG)


class ValidationResult(BaseModel):
    """Outcome of a config validation; failures are data, not exceptions."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)


@dataclass
class PluginContext:
    """What every lifecycle hook receives.

    ``config`` is the current, possibly plugin-transformed, configuration.
    """

    config: ProjectConfig
    project_path: Path
    template_engine: "TemplateEngine"
    logger: Logger


LifecycleHook = Callable[[PluginContext], Awaitable[None] | None]
ValidateHook = Callable[[ProjectConfig], ValidationResult]
TransformHook = Callable[[ProjectConfig], ProjectConfig]


@dataclass
class Plugin:
    """A named bundle of optional hooks.  ``name`` is the identity."""

    name: str
    version: str | None = None
    description: str | None = None
    validate_config: ValidateHook | None = None
    transform_config: TransformHook | None = None
    pre_generate: LifecycleHook | None = None
    generate: LifecycleHook | None = None
    post_generate: LifecycleHook | None = None
    before_install: LifecycleHook | None = None
    after_install: LifecycleHook | None = None

    def hook(self, hook: Hook) -> Callable[[Any], Any] | None:
        """Return the callable registered for *hook*, if any."""
        hooks: dict[Hook, Callable[[Any], Any] | None] = {
            Hook.VALIDATE_CONFIG: self.validate_config,
            Hook.TRANSFORM_CONFIG: self.transform_config,
            Hook.PRE_GENERATE: self.pre_generate,
            Hook.GENERATE: self.generate,
            Hook.POST_GENERATE: self.post_generate,
            Hook.BEFORE_INSTALL: self.before_install,
            Hook.AFTER_INSTALL: self.after_install,
        }
        return hooks[hook]

    def implements(self, hook: Hook) -> bool:
        return self.hook(hook) is not None

    @property
    def capabilities(self) -> frozenset[Hook]:
        """Every hook this plugin implements."""
        return frozenset(h for h in Hook if self.implements(h))
