"""Config Port - application configuration models."""

from pydantic import BaseModel


class StaticContent(BaseModel):
    """Selectable option (display mode, orientation, language)."""

    code: str
    name: str


def _options(*names: str) -> list[StaticContent]:
    return [StaticContent(code=n, name=n) for n in names]


class StaticContentConfig(BaseModel):
    """Supported manifest option lists. First entry of each list is the default."""

    displays: list[StaticContent] = _options("fullscreen", "standalone", "minimal-ui", "browser")
    orientations: list[StaticContent] = _options(
        "any",
        "natural",
        "landscape",
        "landscape-primary",
        "landscape-secondary",
        "portrait",
        "portrait-primary",
        "portrait-secondary",
    )
    languages: list[StaticContent] = [
        StaticContent(code="", name="Not specified"),
        StaticContent(code="en", name="English"),
        StaticContent(code="es", name="Spanish"),
        StaticContent(code="fr", name="French"),
        StaticContent(code="de", name="German"),
    ]

    @property
    def default_display(self) -> str:
        """Name of the first display mode, or empty string."""
        return self.displays[0].name if self.displays else ""

    @property
    def default_orientation(self) -> str:
        """Name of the first orientation, or empty string."""
        return self.orientations[0].name if self.orientations else ""


class ManifestServiceConfig(BaseModel):
    """Manifest generation backend."""

    base_url: str = "http://localhost:5000"
    timeout: float = 60.0


class ImagesConfig(BaseModel):
    """Image inspector settings."""

    # No rendering surface: measure_image answers 0x0 without loading
    headless: bool = False
    timeout: float = 30.0
    # Remote icon downloads stop past this many bytes
    max_bytes: int = 5 * 1024 * 1024


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    cors_origins: list[str] = ["http://localhost:3000"]


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    manifest_service: ManifestServiceConfig = ManifestServiceConfig()
    images: ImagesConfig = ImagesConfig()
    static_content: StaticContentConfig = StaticContentConfig()
    security: SecurityConfig = SecurityConfig()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3
