"""Generator drivers: pick bundles for the selected stack and hand them to the engine."""

from precast.generators.ai_context_gen import AIContextGenerator
from precast.generators.backend_gen import BackendGenerator, is_valid_backend
from precast.generators.database_gen import DatabaseGenerator
from precast.generators.generator import ProjectGenerator

__all__ = [
    "AIContextGenerator",
    "BackendGenerator",
    "DatabaseGenerator",
    "ProjectGenerator",
    "is_valid_backend",
]
