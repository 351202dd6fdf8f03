"""Site URL validation."""

import re

_SITE_URL_RE = re.compile(r'(http|https)://[^ "]+')


def is_valid_url(candidate: str | None) -> bool:
    """Return True for http(s) URLs with no spaces or double quotes."""
    if not candidate:
        return False
    return _SITE_URL_RE.fullmatch(candidate) is not None
