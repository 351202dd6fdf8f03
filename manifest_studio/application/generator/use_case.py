"""Generator use case - actions that orchestrate the manifest workflow.

Actions validate input, call the manifest service or the image inspector,
then commit mutations to the store in a fixed order. Nothing is retried:
each invocation makes at most one attempt. Concurrent invocations are not
coordinated.
"""

import asyncio
import logging

from manifest_studio.application.generator.store import GeneratorStore
from manifest_studio.domain.entities.manifest import Icon, IconFile
from manifest_studio.domain.entities.mutations import (
    AddAssets,
    AddIcon,
    OverwriteManifest,
    ResetStates,
    SetDefaultsManifest,
    UpdateError,
    UpdateIcons,
    UpdateLink,
    UpdateWithManifest,
)
from manifest_studio.domain.errors import ManifestNotLoadedError, ManifestServiceError
from manifest_studio.domain.ports.config import StaticContentConfig
from manifest_studio.domain.ports.images import ImageInspectorPort
from manifest_studio.domain.ports.manifest_service import ManifestServicePort
from manifest_studio.domain.services.url_validator import is_valid_url
from manifest_studio.shared.cancellation import await_cancellable

logger = logging.getLogger(__name__)

INVALID_URL_ERROR = "Please provide a URL."
EMPTY_URL_ERROR = "Url is empty"


class GeneratorUseCase:
    """Workflow actions over a single GeneratorStore."""

    def __init__(
        self,
        store: GeneratorStore,
        manifest_service: ManifestServicePort,
        image_inspector: ImageInspectorPort,
        static_content: StaticContentConfig | None = None,
    ) -> None:
        self._store = store
        self._service = manifest_service
        self._images = image_inspector
        self._static_content = static_content or StaticContentConfig()

    @property
    def store(self) -> GeneratorStore:
        return self._store

    def update_link(self, url: str) -> None:
        """Set the site URL, adding https:// when no scheme is given."""
        if url and not url.startswith("http"):
            url = "https://" + url

        if not is_valid_url(url):
            self._store.commit(UpdateError(INVALID_URL_ERROR))
            return

        self._store.commit(UpdateLink(url))

    async def get_manifest_information(self, cancel: asyncio.Event | None = None) -> None:
        """Fetch the generated manifest for the current URL.

        With no URL set this records "Url is empty" and returns normally
        without contacting the service. Service failures are recorded in
        state.error and re-raised.
        """
        state = self._store.state
        if not state.url:
            self._store.commit(UpdateError(EMPTY_URL_ERROR))
            return

        logger.info("Requesting manifest for %s", state.url)
        try:
            result = await await_cancellable(self._service.create_manifest(state.url), cancel=cancel)
        except ManifestServiceError as e:
            logger.warning("Manifest request failed for %s: %s", state.url, e.message)
            self._store.commit(UpdateError(e.message))
            raise

        self._store.commit(UpdateWithManifest(result))
        self._store.commit(
            SetDefaultsManifest(
                display=self._static_content.default_display,
                orientation=self._static_content.default_orientation,
            )
        )

    def remove_icon(self, icon: Icon) -> None:
        """Remove the first icon whose src matches; no commit if none does."""
        icons = list(self._store.state.icons)
        index = next((i for i, existing in enumerate(icons) if existing.src == icon.src), -1)
        if index > -1:
            del icons[index]
            self._store.commit(UpdateIcons(icons))

    def reset_states(self) -> None:
        """Return the session to its initial state (generated assets are kept)."""
        self._store.commit(ResetStates())

    async def add_icon_from_url(self, new_icon_src: str, cancel: asyncio.Event | None = None) -> None:
        """Measure the image at new_icon_src and append it as an icon.

        Relative sources are resolved against the manifest start_url when a
        manifest is loaded, otherwise against the site URL.
        """
        src = new_icon_src
        if not src:
            return

        if src.startswith("/"):
            src = src[1:]

        if "http" not in src:
            state = self._store.state
            prefix = state.manifest.start_url if state.manifest else state.url
            src = (prefix or "") + src

        size = await self._images.measure_image(src, cancel=cancel)
        self._store.commit(AddIcon(Icon(src=src, sizes=size.sizes)))

    async def upload_icon(self, icon_file: IconFile, cancel: asyncio.Event | None = None) -> None:
        """Embed a local file as a data URI icon."""
        data_uri = await self._images.read_file_as_data_uri(icon_file, cancel=cancel)
        size = await self._images.measure_image(data_uri, cancel=cancel)
        self._store.commit(AddIcon(Icon(src=data_uri, sizes=size.sizes)))

    async def generate_missing_images(self, icon_file: IconFile, cancel: asyncio.Event | None = None) -> None:
        """Upload icon_file and replace manifest, icons and assets with the result.

        Service failures propagate to the caller without touching state.error.
        """
        manifest_id = self._store.state.manifest_id
        if not manifest_id:
            raise ManifestNotLoadedError("No manifest loaded; fetch manifest information first")

        logger.info("Generating missing images for manifest %s", manifest_id)
        result = await await_cancellable(
            self._service.generate_missing_images(manifest_id, icon_file),
            cancel=cancel,
        )
        self._store.commit(OverwriteManifest(result))
        self._store.commit(AddAssets(result.assets))
