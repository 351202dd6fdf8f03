"""Config API - option lists used by the manifest editor."""

from fastapi import APIRouter, Depends

from manifest_studio.api.dependencies import get_config
from manifest_studio.domain.ports.config import AppConfig

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/static")
async def get_static_content(config: AppConfig = Depends(get_config)) -> dict:
    """Supported display modes, orientations and languages (first = default)."""
    static = config.static_content
    return {
        "displays": [d.model_dump() for d in static.displays],
        "orientations": [o.model_dump() for o in static.orientations],
        "languages": [lang.model_dump() for lang in static.languages],
    }


@router.get("")
async def get_config_route(config: AppConfig = Depends(get_config)) -> dict:
    """Non-secret runtime settings."""
    return {
        "manifest_service": {
            "base_url": config.manifest_service.base_url,
            "timeout": config.manifest_service.timeout,
        },
        "images": {
            "headless": config.images.headless,
            "timeout": config.images.timeout,
            "max_bytes": config.images.max_bytes,
        },
        "logging": {
            "level": config.log_level,
            "file": config.log_file or "",
        },
    }
