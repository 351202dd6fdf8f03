"""Tests for generator mutations."""

import pytest

from manifest_studio.domain.entities.generator_state import GeneratorState
from manifest_studio.domain.entities.manifest import (
    Asset,
    Icon,
    Manifest,
    ManifestResult,
    MissingImagesResult,
)
from manifest_studio.domain.entities.mutations import (
    AddAssets,
    AddIcon,
    MutationKind,
    OverwriteManifest,
    ResetStates,
    SetDefaultsManifest,
    UpdateError,
    UpdateIcons,
    UpdateLink,
    UpdateWithManifest,
    apply_mutation,
)


def _result(**content) -> ManifestResult:
    return ManifestResult.model_validate(
        {
            "content": content,
            "id": "m1",
            "siteServiceWorkers": [{"id": 1}],
            "suggestions": ["s1"],
            "warnings": ["w1"],
            "errors": [],
        }
    )


class TestUpdateLink:
    def test_sets_url_and_clears_error(self):
        state = GeneratorState(error="old")
        apply_mutation(state, UpdateLink("https://a.com"))
        assert state.url == "https://a.com"
        assert state.error is None


class TestUpdateError:
    def test_sets_error_only(self):
        state = GeneratorState(url="https://a.com")
        apply_mutation(state, UpdateError("boom"))
        assert state.error == "boom"
        assert state.url == "https://a.com"


class TestUpdateWithManifest:
    def test_replaces_manifest_id_and_icons(self):
        state = GeneratorState(url="https://site.com/")
        apply_mutation(
            state,
            UpdateWithManifest(_result(start_url="https://ex.com/", icons=[{"src": "icon.png", "sizes": "1x1"}])),
        )
        assert state.manifest is not None
        assert state.manifest_id == "m1"
        assert state.site_service_workers == [{"id": 1}]
        assert [i.src for i in state.icons] == ["https://ex.com/icon.png"]
        assert state.suggestions == ["s1"]
        assert state.warnings == ["w1"]
        assert state.errors == []

    def test_falls_back_to_site_url_without_start_url(self):
        state = GeneratorState(url="https://site.com/")
        apply_mutation(state, UpdateWithManifest(_result(icons=[{"src": "icon.png"}])))
        assert state.icons[0].src == "https://site.com/icon.png"

    def test_missing_icons_gives_empty_list(self):
        state = GeneratorState()
        apply_mutation(state, UpdateWithManifest(_result(name="App")))
        assert state.icons == []


class TestOverwriteManifest:
    def test_replaces_manifest_and_icons_keeps_id(self):
        state = GeneratorState(manifest=Manifest(name="old"), manifest_id="m1", icons=[Icon(src="x")])
        result = MissingImagesResult.model_validate(
            {"content": {"name": "new", "icons": [{"src": "gen/192.png", "sizes": "192x192", "generated": True}]}}
        )
        apply_mutation(state, OverwriteManifest(result))
        assert state.manifest.name == "new"
        assert state.manifest_id == "m1"
        assert [i.src for i in state.icons] == ["gen/192.png"]
        assert state.icons[0].generated is True


class TestSetDefaultsManifest:
    def test_noop_without_manifest(self):
        state = GeneratorState()
        apply_mutation(state, SetDefaultsManifest(display="standalone", orientation="any"))
        assert state.manifest is None

    def test_fills_empty_values(self):
        state = GeneratorState(manifest=Manifest(display="", orientation=None, lang=None))
        apply_mutation(state, SetDefaultsManifest(display="fullscreen", orientation="any"))
        assert state.manifest.display == "fullscreen"
        assert state.manifest.orientation == "any"
        assert state.manifest.lang == ""

    def test_keeps_existing_values(self):
        state = GeneratorState(manifest=Manifest(display="browser", orientation="portrait", lang="en"))
        apply_mutation(state, SetDefaultsManifest(display="fullscreen", orientation="any"))
        assert state.manifest.display == "browser"
        assert state.manifest.orientation == "portrait"
        assert state.manifest.lang == "en"


class TestIconMutations:
    def test_update_icons_replaces_list(self):
        state = GeneratorState(icons=[Icon(src="a")])
        apply_mutation(state, UpdateIcons([Icon(src="b")]))
        assert [i.src for i in state.icons] == ["b"]

    def test_add_icon_appends(self):
        state = GeneratorState(icons=[Icon(src="a")])
        apply_mutation(state, AddIcon(Icon(src="b", sizes="16x16")))
        assert [i.src for i in state.icons] == ["a", "b"]


class TestAddAssets:
    def test_replaces_assets(self):
        state = GeneratorState(assets=[Asset(filename="old.png", data=b"1")])
        apply_mutation(state, AddAssets([Asset(filename="new.png", data=b"2")]))
        assert [a.filename for a in state.assets] == ["new.png"]


class TestResetStates:
    def test_returns_to_initial_except_assets(self):
        assets = [Asset(filename="a.png", data=b"x")]
        state = GeneratorState(
            url="https://a.com",
            error="e",
            manifest=Manifest(name="n"),
            manifest_id="m1",
            site_service_workers={"sw": 1},
            icons=[Icon(src="a")],
            suggestions=["s"],
            warnings=["w"],
            errors=["e"],
            assets=assets,
        )
        apply_mutation(state, ResetStates())
        assert state.model_dump(exclude={"assets"}) == GeneratorState().model_dump(exclude={"assets"})
        assert state.assets == assets


def test_every_kind_has_a_mutation():
    kinds = {
        UpdateLink.kind,
        UpdateError.kind,
        UpdateWithManifest.kind,
        OverwriteManifest.kind,
        SetDefaultsManifest.kind,
        UpdateIcons.kind,
        AddIcon.kind,
        AddAssets.kind,
        ResetStates.kind,
    }
    assert kinds == set(MutationKind)


def test_unknown_mutation_rejected():
    with pytest.raises(AssertionError):
        apply_mutation(GeneratorState(), object())  # type: ignore[arg-type]
