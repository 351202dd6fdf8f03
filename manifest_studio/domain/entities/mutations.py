"""Generator mutations - the only legal state transitions.

Each mutation is a frozen dataclass tagged with its MutationKind. `Mutation`
is the closed union of them and `apply_mutation` handles every member.
Mutations are synchronous and never fail.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, assert_never

from manifest_studio.domain.entities.generator_state import GeneratorState
from manifest_studio.domain.entities.manifest import (
    Asset,
    Icon,
    ManifestResult,
    MissingImagesResult,
)
from manifest_studio.domain.services.icon_normalizer import normalize_icons


class MutationKind(str, Enum):
    """Transition kinds."""

    UPDATE_LINK = "UPDATE_LINK"
    UPDATE_ERROR = "UPDATE_ERROR"
    UPDATE_WITH_MANIFEST = "UPDATE_WITH_MANIFEST"
    OVERWRITE_MANIFEST = "OVERWRITE_MANIFEST"
    SET_DEFAULTS_MANIFEST = "SET_DEFAULTS_MANIFEST"
    UPDATE_ICONS = "UPDATE_ICONS"
    ADD_ICON = "ADD_ICON"
    ADD_ASSETS = "ADD_ASSETS"
    RESET_STATES = "RESET_STATES"


@dataclass(frozen=True)
class UpdateLink:
    url: str
    kind: ClassVar[MutationKind] = MutationKind.UPDATE_LINK


@dataclass(frozen=True)
class UpdateError:
    error: str | None
    kind: ClassVar[MutationKind] = MutationKind.UPDATE_ERROR


@dataclass(frozen=True)
class UpdateWithManifest:
    result: ManifestResult
    kind: ClassVar[MutationKind] = MutationKind.UPDATE_WITH_MANIFEST


@dataclass(frozen=True)
class OverwriteManifest:
    result: MissingImagesResult
    kind: ClassVar[MutationKind] = MutationKind.OVERWRITE_MANIFEST


@dataclass(frozen=True)
class SetDefaultsManifest:
    """Fallback display/orientation taken from the app configuration."""

    display: str
    orientation: str
    kind: ClassVar[MutationKind] = MutationKind.SET_DEFAULTS_MANIFEST


@dataclass(frozen=True)
class UpdateIcons:
    icons: list[Icon]
    kind: ClassVar[MutationKind] = MutationKind.UPDATE_ICONS


@dataclass(frozen=True)
class AddIcon:
    icon: Icon
    kind: ClassVar[MutationKind] = MutationKind.ADD_ICON


@dataclass(frozen=True)
class AddAssets:
    assets: list[Asset] | None
    kind: ClassVar[MutationKind] = MutationKind.ADD_ASSETS


@dataclass(frozen=True)
class ResetStates:
    kind: ClassVar[MutationKind] = MutationKind.RESET_STATES


Mutation = (
    UpdateLink
    | UpdateError
    | UpdateWithManifest
    | OverwriteManifest
    | SetDefaultsManifest
    | UpdateIcons
    | AddIcon
    | AddAssets
    | ResetStates
)


def apply_mutation(state: GeneratorState, mutation: Mutation) -> None:
    """Apply a mutation to state in place."""
    if isinstance(mutation, UpdateLink):
        state.url = mutation.url
        state.error = None
    elif isinstance(mutation, UpdateError):
        state.error = mutation.error
    elif isinstance(mutation, UpdateWithManifest):
        _update_with_manifest(state, mutation.result)
    elif isinstance(mutation, OverwriteManifest):
        state.manifest = mutation.result.content
        state.icons = list(mutation.result.content.icons)
    elif isinstance(mutation, SetDefaultsManifest):
        _set_defaults(state, mutation)
    elif isinstance(mutation, UpdateIcons):
        state.icons = list(mutation.icons)
    elif isinstance(mutation, AddIcon):
        state.icons.append(mutation.icon)
    elif isinstance(mutation, AddAssets):
        state.assets = mutation.assets
    elif isinstance(mutation, ResetStates):
        _reset(state)
    else:
        assert_never(mutation)


def _update_with_manifest(state: GeneratorState, result: ManifestResult) -> None:
    content = result.content
    state.manifest = content
    state.manifest_id = result.id
    state.site_service_workers = result.site_service_workers
    base_url = content.start_url or state.url or ""
    state.icons = normalize_icons(list(content.icons), base_url)
    state.suggestions = result.suggestions
    state.warnings = result.warnings
    state.errors = result.errors


def _set_defaults(state: GeneratorState, defaults: SetDefaultsManifest) -> None:
    manifest = state.manifest
    if manifest is None:
        return
    # Empty strings count as missing
    manifest.lang = manifest.lang or ""
    manifest.display = manifest.display or defaults.display
    manifest.orientation = manifest.orientation or defaults.orientation


def _reset(state: GeneratorState) -> None:
    # assets survive a reset
    state.url = None
    state.error = None
    state.manifest = None
    state.manifest_id = None
    state.site_service_workers = None
    state.icons = []
    state.suggestions = None
    state.warnings = None
    state.errors = None
