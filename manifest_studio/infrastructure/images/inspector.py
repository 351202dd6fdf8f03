"""Image inspector - implements ImageInspectorPort with Pillow and httpx."""

import asyncio
import base64
import io
import logging
import mimetypes
from urllib.parse import unquote_to_bytes, urlsplit

import httpx
from PIL import Image

from manifest_studio.domain.entities.manifest import IconFile, ImageSize
from manifest_studio.domain.ports.config import ImagesConfig
from manifest_studio.shared.cancellation import await_cancellable

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
REMOTE_SCHEMES = ("http", "https")


def decode_data_uri(uri: str) -> bytes:
    """Return the payload of a data: URI (base64 or percent-encoded)."""
    header, sep, payload = uri[len("data:"):].partition(",")
    if not sep:
        raise ValueError("Malformed data URI: missing ','")
    if header.endswith(";base64"):
        return base64.b64decode(payload)
    return unquote_to_bytes(payload)


def _image_size(data: bytes) -> ImageSize:
    with Image.open(io.BytesIO(data)) as img:
        width, height = img.size
    return ImageSize(width=width, height=height)


def _to_data_uri(file: IconFile) -> str:
    mime = file.content_type or mimetypes.guess_type(file.filename)[0] or DEFAULT_MIME_TYPE
    payload = base64.b64encode(file.data).decode("ascii")
    return f"data:{mime};base64,{payload}"


class ImageInspector:
    """Measures images and embeds local files as data URIs.

    Decoding runs in a worker thread so the event loop is never blocked.
    In headless mode measure_image answers 0x0 without loading anything.
    """

    def __init__(self, config: ImagesConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout, follow_redirects=True)

    async def measure_image(
        self,
        src: str,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ImageSize:
        """Resolve the natural size of the image at src."""
        if self._config.headless:
            return ImageSize(width=0, height=0)
        return await await_cancellable(
            self._measure(src),
            timeout=timeout or self._config.timeout,
            cancel=cancel,
        )

    async def read_file_as_data_uri(
        self,
        file: IconFile,
        timeout: float | None = None,
        cancel: asyncio.Event | None = None,
    ) -> str:
        """Encode file as data:<mime>;base64,<payload>."""
        return await await_cancellable(
            asyncio.to_thread(_to_data_uri, file),
            timeout=timeout or self._config.timeout,
            cancel=cancel,
        )

    async def close(self) -> None:
        """Close the underlying client if this inspector created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def _measure(self, src: str) -> ImageSize:
        if src.startswith("data:"):
            data = decode_data_uri(src)
        else:
            data = await self._download(src)
        size = await asyncio.to_thread(_image_size, data)
        logger.debug("Measured %s: %s", src[:80], size.sizes)
        return size

    async def _download(self, src: str) -> bytes:
        scheme = urlsplit(src).scheme.lower()
        if scheme not in REMOTE_SCHEMES:
            raise ValueError(f"Unsupported image URL scheme: {scheme or '(none)'}")

        limit = self._config.max_bytes
        async with self._client.stream("GET", src, follow_redirects=True) as response:
            response.raise_for_status()
            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > limit:
                raise ValueError(f"Image too large: {declared} bytes (limit {limit})")
            data = bytearray()
            async for chunk in response.aiter_bytes():
                data.extend(chunk)
                # Stop reading as soon as the limit is crossed
                if len(data) > limit:
                    raise ValueError(f"Image larger than {limit} bytes")
        return bytes(data)
