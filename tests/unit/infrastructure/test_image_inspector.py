"""Tests for ImageInspector (Pillow-generated images, MockTransport)."""

import asyncio
import base64
import io

import httpx
import pytest
from PIL import Image

from manifest_studio.domain.entities.manifest import IconFile
from manifest_studio.domain.errors import OperationCancelledError
from manifest_studio.domain.ports.config import ImagesConfig
from manifest_studio.infrastructure.images import ImageInspector, decode_data_uri


def _png(width: int, height: int) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), (255, 0, 0, 255)).save(buf, format="PNG")
    return buf.getvalue()


def _inspector(handler=None, headless: bool = False, max_bytes: int = 5 * 1024 * 1024) -> ImageInspector:
    transport = httpx.MockTransport(handler or (lambda request: httpx.Response(404)))
    return ImageInspector(
        ImagesConfig(headless=headless, timeout=5.0, max_bytes=max_bytes),
        client=httpx.AsyncClient(transport=transport),
    )


class TestMeasureImage:
    @pytest.mark.asyncio
    async def test_remote_image(self):
        png = _png(48, 32)

        def handler(request):
            assert str(request.url) == "https://cdn.test/icon.png"
            return httpx.Response(200, content=png, headers={"content-type": "image/png"})

        size = await _inspector(handler).measure_image("https://cdn.test/icon.png")
        assert (size.width, size.height) == (48, 32)
        assert size.sizes == "48x32"

    @pytest.mark.asyncio
    async def test_data_uri(self):
        uri = "data:image/png;base64," + base64.b64encode(_png(16, 16)).decode()
        size = await _inspector().measure_image(uri)
        assert size.sizes == "16x16"

    @pytest.mark.asyncio
    async def test_headless_returns_zero(self):
        def handler(request):
            raise AssertionError("headless mode must not fetch")

        size = await _inspector(handler, headless=True).measure_image("https://cdn.test/icon.png")
        assert (size.width, size.height) == (0, 0)

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        with pytest.raises(httpx.HTTPStatusError):
            await _inspector().measure_image("https://cdn.test/missing.png")

    @pytest.mark.asyncio
    async def test_not_an_image(self):
        def handler(request):
            return httpx.Response(200, content=b"<html></html>")

        with pytest.raises(OSError):
            await _inspector(handler).measure_image("https://cdn.test/page")

    @pytest.mark.asyncio
    async def test_declared_length_over_limit(self):
        def handler(request):
            return httpx.Response(200, content=b"\0" * 4096)

        inspector = _inspector(handler, max_bytes=1024)
        with pytest.raises(ValueError, match="too large"):
            await inspector.measure_image("http://169.254.169.254/latest/meta-data")

    @pytest.mark.asyncio
    async def test_streamed_body_stops_at_limit(self):
        sent = 0

        async def body():
            nonlocal sent
            for _ in range(1000):
                sent += 1
                yield b"\0" * 512

        def handler(request):
            return httpx.Response(200, content=body())

        inspector = _inspector(handler, max_bytes=1024)
        with pytest.raises(ValueError, match="larger than 1024"):
            await inspector.measure_image("https://cdn.test/huge")
        assert sent < 10

    @pytest.mark.asyncio
    @pytest.mark.parametrize("src", ["file:///etc/passwd", "ftp://cdn.test/icon.png", "icon.png"])
    async def test_rejects_non_http_scheme(self, src):
        def handler(request):
            raise AssertionError("must not fetch")

        with pytest.raises(ValueError, match="Unsupported image URL scheme"):
            await _inspector(handler).measure_image(src)

    @pytest.mark.asyncio
    async def test_cancelled(self):
        cancel = asyncio.Event()
        cancel.set()
        with pytest.raises(OperationCancelledError):
            await _inspector().measure_image("https://cdn.test/icon.png", cancel=cancel)


class TestReadFileAsDataUri:
    @pytest.mark.asyncio
    async def test_uses_content_type(self):
        uri = await _inspector().read_file_as_data_uri(
            IconFile(filename="x.bin", data=b"abc", content_type="image/webp")
        )
        assert uri == "data:image/webp;base64,YWJj"

    @pytest.mark.asyncio
    async def test_guesses_from_filename(self):
        uri = await _inspector().read_file_as_data_uri(IconFile(filename="logo.png", data=b"abc"))
        assert uri.startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_unknown_type(self):
        uri = await _inspector().read_file_as_data_uri(IconFile(filename="blob", data=b"abc"))
        assert uri.startswith("data:application/octet-stream;base64,")

    @pytest.mark.asyncio
    async def test_round_trip_through_measure(self):
        inspector = _inspector()
        uri = await inspector.read_file_as_data_uri(IconFile(filename="i.png", data=_png(64, 64)))
        size = await inspector.measure_image(uri)
        assert size.sizes == "64x64"


class TestDecodeDataUri:
    def test_percent_encoded(self):
        assert decode_data_uri("data:text/plain,hello%20world") == b"hello world"

    def test_malformed(self):
        with pytest.raises(ValueError):
            decode_data_uri("data:image/png;base64")
