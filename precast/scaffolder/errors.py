"""Exceptions raised by the template engine."""

from __future__ import annotations

from pathlib import Path


class TemplateEngineError(Exception):
    """Base class for template engine failures."""


class BundleNotFoundError(TemplateEngineError):
    """Raised when a template bundle directory does not exist."""

    def __init__(self, bundle: str, path: Path) -> None:
        self.bundle = bundle
        self.path = path
        super().__init__(f"Template directory not found: {path}")


class TemplateNotFoundError(TemplateEngineError):
    """Raised when a single template source file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Template not found: {path}")


class DestinationConflictError(TemplateEngineError):
    """Raised when the destination exists and neither skip nor overwrite is set."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File already exists: {path}")


class DestinationCollisionError(TemplateEngineError):
    """Raised when two bundle files map to the same destination path."""

    def __init__(self, destination: str, sources: list[str]) -> None:
        self.destination = destination
        self.sources = sources
        super().__init__(
            f"Template files {', '.join(sources)} all map to destination {destination}"
        )


class RenderError(TemplateEngineError):
    """Raised when a template fails to load, compile or render."""

    def __init__(self, source_path: Path, cause: BaseException) -> None:
        self.source_path = source_path
        self.cause = cause
        super().__init__(f"Failed to process template: {source_path} ({cause})")
