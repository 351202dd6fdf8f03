"""Generator API routes - one manifest-generation session."""

import asyncio
import logging
import mimetypes

import httpx
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from fastapi.responses import Response
from sse_starlette.sse import EventSourceResponse

from manifest_studio.api.dependencies import get_generator_use_case, get_store, limiter
from manifest_studio.application.generator.dto import (
    IconSourceRequest,
    LinkRequest,
    StateEvent,
    StateResponse,
)
from manifest_studio.application.generator.store import GeneratorStore
from manifest_studio.application.generator.use_case import GeneratorUseCase
from manifest_studio.domain.entities.generator_state import GeneratorState
from manifest_studio.domain.entities.manifest import Icon, IconFile
from manifest_studio.domain.entities.mutations import Mutation
from manifest_studio.domain.errors import (
    ManifestNotLoadedError,
    ManifestServiceError,
    OperationCancelledError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generator", tags=["generator"])


async def _to_icon_file(upload: UploadFile) -> IconFile:
    return IconFile(
        filename=upload.filename or "icon",
        data=await upload.read(),
        content_type=upload.content_type,
    )


def _state(use_case: GeneratorUseCase) -> StateResponse:
    return StateResponse.from_state(use_case.store.state)


@router.get("/state")
async def get_state(store: GeneratorStore = Depends(get_store)) -> StateResponse:
    """Current session state."""
    return StateResponse.from_state(store.state)


@router.put("/link")
@limiter.limit("60/minute")
async def update_link(
    request: Request,
    body: LinkRequest,
    use_case: GeneratorUseCase = Depends(get_generator_use_case),
) -> StateResponse:
    """Set the site URL. Invalid input is reported in `error`, not as HTTP error."""
    use_case.update_link(body.url)
    return _state(use_case)


@router.post("/manifest")
@limiter.limit("20/minute")
async def get_manifest_information(
    request: Request,
    use_case: GeneratorUseCase = Depends(get_generator_use_case),
) -> StateResponse:
    """Fetch the generated manifest for the current URL."""
    try:
        await use_case.get_manifest_information()
    except ManifestServiceError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except (OperationCancelledError, TimeoutError):
        raise HTTPException(status_code=504, detail="Manifest request did not complete")
    return _state(use_case)


@router.post("/icons/url")
@limiter.limit("60/minute")
async def add_icon_from_url(
    request: Request,
    body: IconSourceRequest,
    use_case: GeneratorUseCase = Depends(get_generator_use_case),
) -> StateResponse:
    """Add an icon from a (possibly relative) URL."""
    try:
        await use_case.add_icon_from_url(body.src)
    except (OperationCancelledError, TimeoutError):
        raise HTTPException(status_code=504, detail="Image load did not complete")
    except (httpx.HTTPError, OSError, ValueError) as e:
        logger.info("Could not load icon %s: %s", body.src, e)
        raise HTTPException(status_code=422, detail="Could not load image")
    return _state(use_case)


@router.post("/icons/upload")
@limiter.limit("30/minute")
async def upload_icon(
    request: Request,
    file: UploadFile = File(...),
    use_case: GeneratorUseCase = Depends(get_generator_use_case),
) -> StateResponse:
    """Add an uploaded file as an embedded (data URI) icon."""
    icon_file = await _to_icon_file(file)
    try:
        await use_case.upload_icon(icon_file)
    except (OperationCancelledError, TimeoutError):
        raise HTTPException(status_code=504, detail="Image read did not complete")
    except (OSError, ValueError) as e:
        logger.info("Could not read uploaded icon %s: %s", icon_file.filename, e)
        raise HTTPException(status_code=422, detail="Could not read image")
    return _state(use_case)


@router.post("/icons/remove")
async def remove_icon(
    body: IconSourceRequest,
    use_case: GeneratorUseCase = Depends(get_generator_use_case),
) -> StateResponse:
    """Remove the first icon with the given src."""
    use_case.remove_icon(Icon(src=body.src))
    return _state(use_case)


@router.post("/missing-images")
@limiter.limit("10/minute")
async def generate_missing_images(
    request: Request,
    file: UploadFile = File(...),
    use_case: GeneratorUseCase = Depends(get_generator_use_case),
) -> StateResponse:
    """Upload a source icon and let the service generate the missing sizes."""
    icon_file = await _to_icon_file(file)
    try:
        await use_case.generate_missing_images(icon_file)
    except ManifestNotLoadedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ManifestServiceError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except (OperationCancelledError, TimeoutError):
        raise HTTPException(status_code=504, detail="Image generation did not complete")
    return _state(use_case)


@router.post("/reset")
async def reset_states(use_case: GeneratorUseCase = Depends(get_generator_use_case)) -> StateResponse:
    """Return the session to its initial state."""
    use_case.reset_states()
    return _state(use_case)


@router.get("/assets/{filename:path}")
async def download_asset(filename: str, store: GeneratorStore = Depends(get_store)) -> Response:
    """Download a generated asset."""
    for asset in store.state.assets or []:
        if asset.filename == filename:
            media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
            return Response(content=asset.data, media_type=media_type)
    raise HTTPException(status_code=404, detail="Asset not found")


def commit_event(mutation: Mutation, store: GeneratorStore) -> StateEvent:
    """SSE payload for a commit, built from a detached snapshot of the state."""
    return StateEvent(event_type=mutation.kind.value, state=StateResponse.from_state(store.snapshot()))


@router.get("/events", response_model=None)
async def state_events(store: GeneratorStore = Depends(get_store)) -> EventSourceResponse:
    """SSE stream: one event per committed mutation with the resulting state."""
    queue: asyncio.Queue[StateEvent] = asyncio.Queue()

    def on_commit(mutation: Mutation, state: GeneratorState) -> None:
        queue.put_nowait(commit_event(mutation, store))

    unsubscribe = store.subscribe(on_commit)

    async def event_generator():
        try:
            while True:
                evt = await queue.get()
                yield {"event": evt.event_type, "data": evt.model_dump_json()}
        finally:
            unsubscribe()

    return EventSourceResponse(event_generator())
