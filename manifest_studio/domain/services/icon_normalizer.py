"""Icon URL normalization."""

from manifest_studio.domain.entities.manifest import Icon


def normalize_icons(icons: list[Icon], base_url: str) -> list[Icon]:
    """Prefix relative icon sources with base_url.

    Any src containing "http" is treated as absolute and left alone, so
    re-applying to an already normalized list changes nothing. Icons are
    updated in place; a new list is returned in the same order.
    """
    result: list[Icon] = []
    for icon in icons:
        if "http" not in icon.src:
            icon.src = base_url + icon.src
        result.append(icon)
    return result
