"""Tests for manifest data model and response schemas."""

import base64

import pytest
from pydantic import ValidationError

from manifest_studio.domain.entities.manifest import (
    Asset,
    IconFile,
    ImageSize,
    Manifest,
    ManifestResult,
    MissingImagesResult,
)


class TestManifest:
    def test_defaults(self):
        m = Manifest()
        assert m.display == ""
        assert m.prefer_related_applications is False
        assert m.related_applications == []
        assert m.icons == []

    def test_null_display_becomes_empty(self):
        assert Manifest.model_validate({"display": None}).display == ""

    def test_unknown_members_kept(self):
        m = Manifest.model_validate({"name": "App", "categories": ["games"]})
        assert m.model_dump()["categories"] == ["games"]


class TestManifestResult:
    def test_parses_service_body(self):
        result = ManifestResult.model_validate(
            {
                "content": {"name": "App", "icons": [{"src": "a.png", "sizes": "48x48"}]},
                "id": "abc",
                "siteServiceWorkers": {"worker": "sw.js"},
                "suggestions": ["add theme_color"],
                "warnings": None,
                "errors": [],
            }
        )
        assert result.id == "abc"
        assert result.site_service_workers == {"worker": "sw.js"}
        assert result.content.icons[0].sizes == "48x48"
        assert result.warnings is None

    def test_missing_id_is_invalid(self):
        with pytest.raises(ValidationError):
            ManifestResult.model_validate({"content": {}})


class TestAsset:
    def test_decodes_base64(self):
        encoded = base64.b64encode(b"\x89PNG").decode()
        asset = Asset.model_validate({"filename": "i.png", "data": encoded})
        assert asset.data == b"\x89PNG"

    def test_accepts_byte_array(self):
        asset = Asset.model_validate({"filename": "i.png", "data": [1, 2, 3]})
        assert asset.data == b"\x01\x02\x03"

    def test_rejects_bad_base64(self):
        with pytest.raises(ValidationError):
            Asset.model_validate({"filename": "i.png", "data": "not base64!"})

    def test_missing_images_result_defaults_assets(self):
        result = MissingImagesResult.model_validate({"content": {"name": "App"}})
        assert result.assets == []


def test_image_size_sizes():
    assert ImageSize(width=192, height=96).sizes == "192x96"


def test_icon_file_from_path(tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(b"data")
    icon_file = IconFile.from_path(path)
    assert icon_file.filename == "logo.png"
    assert icon_file.data == b"data"
    assert icon_file.content_type is None
