"""Precast scaffolder -- materializes template bundles into projects.

Quick usage::

    from precast.scaffolder import ConditionalTemplate, TemplateEngine, TemplateOptions

    engine = TemplateEngine("/path/to/templates")
    await engine.copy_template_directory(
        "frameworks/react/base", "/tmp/my-app", {"name": "my-app"},
        TemplateOptions(overwrite=True),
    )
"""

from precast.scaffolder.engine import ConditionalTemplate, TemplateEngine
from precast.scaffolder.errors import (
    BundleNotFoundError,
    DestinationCollisionError,
    DestinationConflictError,
    RenderError,
    TemplateEngineError,
    TemplateNotFoundError,
)
from precast.scaffolder.filters import stack_file_filter
from precast.scaffolder.materializer import FilePlan, TemplateOptions, plan_destination
from precast.scaffolder.templates import TemplateRenderer
from precast.scaffolder.walker import walk_bundle

__all__ = [
    "BundleNotFoundError",
    "ConditionalTemplate",
    "DestinationCollisionError",
    "DestinationConflictError",
    "FilePlan",
    "RenderError",
    "TemplateEngine",
    "TemplateEngineError",
    "TemplateNotFoundError",
    "TemplateOptions",
    "TemplateRenderer",
    "plan_destination",
    "stack_file_filter",
    "walk_bundle",
]
