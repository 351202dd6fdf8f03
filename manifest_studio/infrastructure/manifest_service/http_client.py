"""Manifest service adapter - implements ManifestServicePort over httpx."""

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel

from manifest_studio.domain.entities.manifest import IconFile, ManifestResult, MissingImagesResult
from manifest_studio.domain.errors import InvalidServiceResponseError, ManifestServiceError
from manifest_studio.domain.ports.config import ManifestServiceConfig

logger = logging.getLogger(__name__)
ResultT = TypeVar("ResultT", bound=BaseModel)

DEFAULT_CONNECT_TIMEOUT = 10.0


def extract_error_message(response: httpx.Response) -> str:
    """Best human-readable error from a failed response.

    Order: JSON `error` field, raw body, reason phrase.
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        error = body["error"]
        return error if isinstance(error, str) else str(error)

    text = response.text.strip()
    if text:
        return text
    return response.reason_phrase or f"HTTP {response.status_code}"


class ManifestServiceClient:
    """HTTP client for the manifest generation backend."""

    def __init__(self, config: ManifestServiceConfig, client: httpx.AsyncClient | None = None) -> None:
        self._base_url = f"{config.base_url.rstrip('/')}/manifests"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout, connect=DEFAULT_CONNECT_TIMEOUT),
        )

    async def create_manifest(self, site_url: str) -> ManifestResult:
        """POST {base}/manifests with the site URL."""
        response = await self._send("POST", self._base_url, json={"siteUrl": site_url})
        return self._parse(response, ManifestResult)

    async def generate_missing_images(self, manifest_id: str, file: IconFile) -> MissingImagesResult:
        """POST the icon as multipart form field `file`."""
        url = f"{self._base_url}/{manifest_id}/generatemissingimages"
        files = {"file": (file.filename, file.data, file.content_type or "application/octet-stream")}
        response = await self._send("POST", url, files=files)
        return self._parse(response, MissingImagesResult)

    async def close(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise ManifestServiceError(f"Manifest service timed out: {url}") from e
        except httpx.RequestError as e:
            raise ManifestServiceError(str(e) or type(e).__name__) from e

        if response.is_error:
            message = extract_error_message(response)
            logger.warning("Manifest service %s %s -> %d: %s", method, url, response.status_code, message)
            raise ManifestServiceError(message, status_code=response.status_code, body=response.text)
        return response

    @staticmethod
    def _parse(response: httpx.Response, model: type[ResultT]) -> ResultT:
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            logger.warning("Invalid manifest service response: %s", e)
            raise InvalidServiceResponseError(
                "Invalid response from manifest service",
                status_code=response.status_code,
                body=response.text,
            ) from e
