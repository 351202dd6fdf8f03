"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from manifest_studio.api.container import Container, reset_container, set_container
from manifest_studio.domain.entities.manifest import ImageSize
from manifest_studio.domain.ports.config import AppConfig
from manifest_studio.main import app


@pytest.fixture
def mock_service():
    """Manifest service double."""
    service = MagicMock()
    service.create_manifest = AsyncMock()
    service.generate_missing_images = AsyncMock()
    return service


@pytest.fixture
def mock_inspector():
    """Image inspector double answering 96x96."""
    inspector = MagicMock()
    inspector.measure_image = AsyncMock(return_value=ImageSize(width=96, height=96))
    inspector.read_file_as_data_uri = AsyncMock(return_value="data:image/png;base64,AAAA")
    return inspector


@pytest.fixture
def container(mock_service, mock_inspector):
    """Global container with test doubles for every network collaborator."""
    c = Container(config=AppConfig())
    c.manifest_service = mock_service
    c.image_inspector = mock_inspector
    set_container(c)
    yield c
    reset_container()


@pytest.fixture
async def client(container):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
