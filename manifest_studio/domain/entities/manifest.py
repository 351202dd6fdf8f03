"""Web app manifest data model and manifest-service response schemas."""

import base64
import binascii
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Icon(BaseModel):
    """Image reference with declared pixel dimensions ("WxH")."""

    src: str
    sizes: str = ""
    generated: bool | None = None

    model_config = ConfigDict(extra="allow")


class Asset(BaseModel):
    """Generated binary artifact returned by the missing-images round-trip."""

    filename: str
    data: bytes

    @field_validator("data", mode="before")
    @classmethod
    def _decode_data(cls, value: Any) -> Any:
        # Service sends base64 text or a plain byte array
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise ValueError(f"asset data is not valid base64: {e}") from e
        if isinstance(value, list):
            return bytes(value)
        return value


class Manifest(BaseModel):
    """Web app manifest under edit.

    Unknown members from the service (screenshots, categories, ...) are kept
    as extras so the manifest round-trips unchanged.
    """

    background_color: str | None = None
    description: str | None = None
    dir: str | None = None
    display: str = ""
    lang: str | None = None
    name: str | None = None
    orientation: str | None = None
    prefer_related_applications: bool = False
    related_applications: list[str] = []
    scope: str | None = None
    short_name: str | None = None
    start_url: str | None = None
    theme_color: str | None = None
    icons: list[Icon] = []

    model_config = ConfigDict(extra="allow")

    @field_validator("display", mode="before")
    @classmethod
    def _display_not_null(cls, value: Any) -> Any:
        return "" if value is None else value


class ManifestResult(BaseModel):
    """Body of POST /manifests."""

    content: Manifest
    id: str
    site_service_workers: Any = Field(None, alias="siteServiceWorkers")
    suggestions: list[str] | None = None
    warnings: list[str] | None = None
    errors: list[str] | None = None

    model_config = ConfigDict(populate_by_name=True)


class MissingImagesResult(BaseModel):
    """Body of POST /manifests/{id}/generatemissingimages."""

    content: Manifest
    assets: list[Asset] = []


class ImageSize(BaseModel):
    """Natural pixel dimensions of an image."""

    width: int
    height: int

    @property
    def sizes(self) -> str:
        """Dimensions in manifest "WxH" form."""
        return f"{self.width}x{self.height}"


class IconFile(BaseModel):
    """Local icon file supplied by the user (upload or path on disk)."""

    filename: str
    data: bytes
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "IconFile":
        """Read a file from disk."""
        p = Path(path)
        return cls(filename=p.name, data=p.read_bytes(), content_type=content_type)
