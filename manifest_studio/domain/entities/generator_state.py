"""Workflow state for a single manifest-generation session."""

from typing import Any

from pydantic import BaseModel

from manifest_studio.domain.entities.manifest import Asset, Icon, Manifest


class GeneratorState(BaseModel):
    """State record mutated only through the store's mutations.

    `error` is the client/transport-level error; `suggestions`, `warnings` and
    `errors` are diagnostics reported by the manifest service.
    """

    url: str | None = None
    error: str | None = None
    manifest: Manifest | None = None
    manifest_id: str | None = None  # set together with manifest
    site_service_workers: Any = None
    icons: list[Icon] = []
    suggestions: list[str] | None = None
    warnings: list[str] | None = None
    errors: list[str] | None = None
    assets: list[Asset] | None = None
