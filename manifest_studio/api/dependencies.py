"""FastAPI dependencies - resolved from the DI container."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from manifest_studio.api.container import get_container
from manifest_studio.application.generator.store import GeneratorStore
from manifest_studio.application.generator.use_case import GeneratorUseCase
from manifest_studio.domain.ports.config import AppConfig

limiter = Limiter(key_func=get_remote_address)


def get_config() -> AppConfig:
    """Application configuration."""
    return get_container().config


def get_store() -> GeneratorStore:
    """Session state store."""
    return get_container().store


def get_generator_use_case() -> GeneratorUseCase:
    """Workflow actions for the current session."""
    return get_container().generator_use_case
