"""Manifest generation backend adapters."""

from manifest_studio.infrastructure.manifest_service.http_client import (
    ManifestServiceClient,
    extract_error_message,
)

__all__ = ["ManifestServiceClient", "extract_error_message"]
