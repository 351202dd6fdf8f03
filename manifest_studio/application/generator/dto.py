"""Generator DTOs."""

from typing import Any

from pydantic import BaseModel, Field

from manifest_studio.domain.entities.generator_state import GeneratorState
from manifest_studio.domain.entities.manifest import Icon, Manifest


class LinkRequest(BaseModel):
    """Site URL as typed by the user (scheme optional)."""

    url: str = Field("", max_length=2048)


class IconSourceRequest(BaseModel):
    """Icon identified by its src."""

    src: str = Field("", max_length=2_000_000)


class AssetInfo(BaseModel):
    """Generated asset without its payload."""

    filename: str
    size: int


class StateResponse(BaseModel):
    """Serializable view of the generator state."""

    url: str | None = None
    error: str | None = None
    manifest: Manifest | None = None
    manifest_id: str | None = None
    site_service_workers: Any = None
    icons: list[Icon] = []
    suggestions: list[str] | None = None
    warnings: list[str] | None = None
    errors: list[str] | None = None
    assets: list[AssetInfo] | None = None

    @classmethod
    def from_state(cls, state: GeneratorState) -> "StateResponse":
        assets = None
        if state.assets is not None:
            assets = [AssetInfo(filename=a.filename, size=len(a.data)) for a in state.assets]
        return cls(
            url=state.url,
            error=state.error,
            manifest=state.manifest,
            manifest_id=state.manifest_id,
            site_service_workers=state.site_service_workers,
            icons=state.icons,
            suggestions=state.suggestions,
            warnings=state.warnings,
            errors=state.errors,
            assets=assets,
        )


class StateEvent(BaseModel):
    """SSE event emitted after each commit."""

    event_type: str  # mutation kind
    state: StateResponse
