"""Application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from manifest_studio import __version__
from manifest_studio.api.container import get_container
from manifest_studio.api.dependencies import limiter
from manifest_studio.api.routes.config import router as config_router
from manifest_studio.api.routes.generator import router as generator_router
from manifest_studio.shared.logging import setup_logging

log = structlog.get_logger()


def _apply_logging_config(container):
    """Apply logging from container config (stdout + optional file)."""
    c = container.config
    setup_logging(
        level=c.log_level,
        file_path=c.log_file or "",
        rotation_max_mb=c.log_rotation_max_mb,
        rotation_backups=c.log_rotation_backups,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load config and set up logging. Shutdown: close HTTP clients."""
    container = get_container()
    _apply_logging_config(container)
    log.info(
        "startup_complete",
        manifest_service=container.config.manifest_service.base_url,
        images_headless=container.config.images.headless,
    )
    yield
    log.info("shutdown_begin")
    await get_container().aclose()
    log.info("shutdown_complete")


app = FastAPI(
    title="Manifest Studio",
    version=__version__,
    description="Generate and edit web app manifests for a site URL",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS
container = get_container()
app.add_middleware(
    CORSMiddleware,
    allow_origins=container.config.security.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(config_router)
app.include_router(generator_router)


@app.get("/health")
@limiter.limit("100/minute")
async def health(request: Request) -> dict:
    """Health check."""
    container = get_container()
    return {
        "status": "ok",
        "service": "manifest-studio",
        "manifest_service": container.config.manifest_service.base_url,
        "has_manifest": container.store.state.manifest is not None,
    }
