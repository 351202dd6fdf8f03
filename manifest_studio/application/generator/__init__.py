"""Manifest generator workflow: store and actions."""

from manifest_studio.application.generator.store import GeneratorStore
from manifest_studio.application.generator.use_case import GeneratorUseCase

__all__ = ["GeneratorStore", "GeneratorUseCase"]
