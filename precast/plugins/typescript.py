"""TypeScript plugin: adds TypeScript configuration to generated projects."""

from __future__ import annotations

from precast.config import ProjectConfig
from precast.scaffolder.engine import ConditionalTemplate

from .base import Plugin, PluginContext, ValidationResult


def _validate(config: ProjectConfig) -> ValidationResult:
    errors: list[str] = []
    if config.framework == "angular" and not config.typescript:
        errors.append("Angular projects require TypeScript")
    return ValidationResult(valid=not errors, errors=errors)


def _transform(config: ProjectConfig) -> ProjectConfig:
    if config.framework == "angular":
        return config.model_copy(update={"typescript": True, "language": "typescript"})
    return config


async def _pre_generate(context: PluginContext) -> None:
    if not context.config.typescript:
        return
    context.logger.debug("TypeScript plugin: Preparing TypeScript configuration")


async def _generate(context: PluginContext) -> None:
    config = context.config
    if not config.typescript:
        return
    await context.template_engine.process_conditional_templates(
        [
            ConditionalTemplate(True, "features/typescript/base"),
            ConditionalTemplate(config.framework == "react", "features/typescript/react"),
            ConditionalTemplate(config.framework == "vue", "features/typescript/vue"),
        ],
        context.project_path,
        config.to_context(),
    )


async def _post_generate(context: PluginContext) -> None:
    if not context.config.typescript:
        return
    context.logger.success("TypeScript configuration added successfully")


def create_typescript_plugin() -> Plugin:
    """Build a fresh TypeScript plugin instance."""
    return Plugin(
        name="typescript",
        version="1.0.0",
        description="Adds TypeScript support and configuration",
        validate_config=_validate,
        transform_config=_transform,
        pre_generate=_pre_generate,
        generate=_generate,
        post_generate=_post_generate,
    )
