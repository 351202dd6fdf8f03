"""Image capabilities (measurement, file embedding)."""

from manifest_studio.infrastructure.images.inspector import ImageInspector, decode_data_uri

__all__ = ["ImageInspector", "decode_data_uri"]
