"""Image Inspector Port - image measurement and file embedding."""

import asyncio
from typing import Protocol

from manifest_studio.domain.entities.manifest import IconFile, ImageSize


class ImageInspectorPort(Protocol):
    """Asynchronous image capabilities used by the generator actions."""

    async def measure_image(
        self,
        src: str,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ImageSize:
        """Resolve natural pixel dimensions of the image at src (URL or data URI)."""
        ...

    async def read_file_as_data_uri(
        self,
        file: IconFile,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> str:
        """Encode a local file as a data: URI."""
        ...
