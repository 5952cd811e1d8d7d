"""Relative-path extraction.

Strips the configured base path and the index page from a URI's segments:

    http://example.com/foo/public/index.php/bar/baz
                       ────────── ───────── ───────
                       base path  index     relative path → "bar/baz"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from curi._base import configured_base_url

if TYPE_CHECKING:
    from curi._config import AppConfig
    from curi._uri import URI


def relative_path(uri: URI, config: AppConfig) -> str:
    """Return ``uri``'s path relative to the application base.

    The result has no leading or trailing slash and is ``""`` when nothing
    remains. Base segments are matched against the configured base URL, so
    the result does not depend on which host the request came in on.

    Raises:
        MissingConfigurationError: If no usable base URL is configured.
    """
    segments = uri.segments
    base_segments = configured_base_url(config).segments

    if segments[: len(base_segments)] == base_segments:
        segments = segments[len(base_segments) :]

    index_page = config.index_page.strip("/")
    if index_page and segments[:1] == (index_page,):
        segments = segments[1:]

    return "/".join(segments)
