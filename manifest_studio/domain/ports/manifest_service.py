"""Manifest Service Port - interface for the manifest generation backend."""

from typing import Protocol

from manifest_studio.domain.entities.manifest import IconFile, ManifestResult, MissingImagesResult


class ManifestServicePort(Protocol):
    """Backend that analyzes a site and produces manifest JSON.

    Implementations raise ManifestServiceError on transport failures and
    non-2xx answers, InvalidServiceResponseError on malformed bodies.
    """

    async def create_manifest(self, site_url: str) -> ManifestResult:
        """Analyze site_url and return the generated manifest with diagnostics."""
        ...

    async def generate_missing_images(self, manifest_id: str, file: IconFile) -> MissingImagesResult:
        """Upload a source icon and return the manifest with generated assets."""
        ...
