"""TOML configuration loader with env overrides."""

import logging
import os
import tomllib
from pathlib import Path

from manifest_studio.domain.ports.config import (
    AppConfig,
    ImagesConfig,
    ManifestServiceConfig,
    SecurityConfig,
    ServerConfig,
    StaticContentConfig,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _load_toml(path: Path) -> dict:
    """Load TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge(base: dict, override: dict) -> dict:
    """Shallow-merge override sections into base."""
    for key, value in override.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            base[key] = {**base[key], **value}
        else:
            base[key] = value
    return base


def _apply_env_overrides(config: dict) -> dict:
    """Apply environment variable overrides."""
    if api_url := os.getenv("MANIFEST_API_URL"):
        config.setdefault("manifest_service", {})["base_url"] = api_url.strip()
    if timeout := os.getenv("MANIFEST_API_TIMEOUT"):
        try:
            config.setdefault("manifest_service", {})["timeout"] = float(timeout)
        except ValueError:
            logger.warning("Invalid MANIFEST_API_TIMEOUT env value: %r, ignoring", timeout)
    if headless := os.getenv("IMAGES_HEADLESS"):
        config.setdefault("images", {})["headless"] = headless.strip().lower() in _TRUE_VALUES
    if port := os.getenv("PORT"):
        try:
            config.setdefault("server", {})["port"] = int(port)
        except ValueError:
            logger.warning("Invalid PORT env value: %r, ignoring", port)
    if level := os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level.upper()
    if path := os.getenv("LOG_FILE"):
        config.setdefault("logging", {})["file"] = path.strip()
    if origins := os.getenv("CORS_ORIGINS"):
        config.setdefault("security", {})["cors_origins"] = [o.strip() for o in origins.split(",")]
    if rate := os.getenv("RATE_LIMIT_PER_MINUTE"):
        try:
            config.setdefault("security", {})["rate_limit_requests_per_minute"] = int(rate)
        except ValueError:
            logger.warning("Invalid RATE_LIMIT_PER_MINUTE env value: %r, ignoring", rate)
    return config


def default_config_dir() -> Path:
    """Repository-level config/ directory."""
    return Path(__file__).resolve().parent.parent.parent.parent / "config"


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Load configuration from TOML files with env overrides.

    Loads default.toml, then development.toml if exists.
    """
    if config_dir is None:
        config_dir = default_config_dir()

    config: dict = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = _load_toml(default_path)

    dev_path = config_dir / "development.toml"
    if dev_path.exists():
        config = _merge(config, _load_toml(dev_path))

    config = _apply_env_overrides(config)

    logging_raw = config.get("logging") or {}
    return AppConfig(
        server=ServerConfig(**(config.get("server") or {})),
        manifest_service=ManifestServiceConfig(**(config.get("manifest_service") or {})),
        images=ImagesConfig(**(config.get("images") or {})),
        static_content=StaticContentConfig(**(config.get("static_content") or {})),
        security=SecurityConfig(**(config.get("security") or {})),
        log_level=logging_raw.get("level", "INFO"),
        log_file=(logging_raw.get("file") or "").strip(),
        log_rotation_max_mb=int(logging_raw.get("log_rotation_max_mb", 5)),
        log_rotation_backups=int(logging_raw.get("log_rotation_backups", 3)),
    )
