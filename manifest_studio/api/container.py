"""Dependency Injection Container - centralized service management."""

from functools import cached_property

import httpx

from manifest_studio.application.generator.store import GeneratorStore
from manifest_studio.application.generator.use_case import GeneratorUseCase
from manifest_studio.domain.ports.config import AppConfig
from manifest_studio.domain.ports.images import ImageInspectorPort
from manifest_studio.domain.ports.manifest_service import ManifestServicePort
from manifest_studio.infrastructure.config import load_config
from manifest_studio.infrastructure.manifest_service.http_client import DEFAULT_CONNECT_TIMEOUT


class Container:
    """Dependency Injection Container with lazy initialization.

    All dependencies are created on first access and cached. One container
    holds one generator session (store + actions).

    Usage:
        container = Container()
        use_case = container.generator_use_case
    """

    def __init__(self, config: AppConfig | None = None):
        """Initialize container with optional config override."""
        self._config_override = config

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def http_client(self) -> httpx.AsyncClient:
        """Shared HTTP client for the manifest service and image fetches."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.manifest_service.timeout, connect=DEFAULT_CONNECT_TIMEOUT),
            follow_redirects=True,
        )

    @cached_property
    def manifest_service(self) -> ManifestServicePort:
        """Manifest generation backend client."""
        from manifest_studio.infrastructure.manifest_service import ManifestServiceClient

        return ManifestServiceClient(self.config.manifest_service, client=self.http_client)

    @cached_property
    def image_inspector(self) -> ImageInspectorPort:
        """Image measurement and file embedding."""
        from manifest_studio.infrastructure.images import ImageInspector

        return ImageInspector(self.config.images, client=self.http_client)

    @cached_property
    def store(self) -> GeneratorStore:
        """Session state store."""
        return GeneratorStore()

    @cached_property
    def generator_use_case(self) -> GeneratorUseCase:
        """Workflow actions bound to the session store."""
        return GeneratorUseCase(
            store=self.store,
            manifest_service=self.manifest_service,
            image_inspector=self.image_inspector,
            static_content=self.config.static_content,
        )

    async def aclose(self) -> None:
        """Close network resources created by this container."""
        client = self.__dict__.get("http_client")
        if client is not None and not client.is_closed:
            await client.aclose()

    def reset(self) -> None:
        """Reset all cached instances (useful for testing)."""
        for attr in list(self.__dict__.keys()):
            if not attr.startswith("_"):
                delattr(self, attr)


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """Get or create global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install a prebuilt container (tests, embedding)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    if _container:
        _container.reset()
    _container = None
