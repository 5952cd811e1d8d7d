"""Current-URL building.

The current URL is assembled from three sources:

    resolved base URL   http://example.com:8080/foo/public/
    index page                                              index.php/
    extra path                                                        bar
    query (kept on the URI only)                                         ?baz=quip

The extra path is the part of the request path past the front controller.
It is found by stripping the script name, or failing that the script's
directory, from the start of the request path. This keeps subfolder
deployments (script not at the document root) working.

site_url() and base_url() build URLs for arbitrary application paths from
the same base, so ``site_url(uri_string()) == current_url()`` holds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import re2

from curi._base import resolve_base_url
from curi._uri import URI, normalize_path

if TYPE_CHECKING:
    from curi._config import AppConfig
    from curi._request import RequestMetadata

logger = logging.getLogger(__name__)

# scheme "://" at the very start; anything else is an application path.
_ABSOLUTE_RE = re2.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def build_current_url(config: AppConfig, request: RequestMetadata) -> URI:
    """Build the absolute URI for the request being handled.

    The request's query string is preserved verbatim on the returned URI.

    Raises:
        MissingConfigurationError: If no usable base URL is configured.
    """
    base = resolve_base_url(config, request)
    extra = extra_path(request.path, request.script_name)
    uri = base.with_path(_front_prefix(base, config) + extra.lstrip("/")).with_query(request.query)
    logger.debug("current URL for %r resolved to %s", request.request_uri, uri)
    return uri


def extra_path(request_path: str, script_name: str) -> str:
    """Return the part of ``request_path`` past the front controller.

    >>> extra_path("/foo/public/bar", "/foo/public/index.php")
    '/bar'
    >>> extra_path("/foo/public/index.php/bar", "/foo/public/index.php")
    '/bar'
    >>> extra_path("/assets/image.jpg", "/index.php")
    '/assets/image.jpg'
    """
    path = _absolute(normalize_path(request_path))
    script = normalize_path(script_name).rstrip("/")
    if script:
        script = _absolute(script)
        if _has_prefix(path, script):
            return path[len(script) :]
        directory = script.rsplit("/", 1)[0]
        if directory and _has_prefix(path, directory):
            return path[len(directory) :]
    return path


def site_url(
    config: AppConfig,
    request: RequestMetadata,
    path: str = "",
    scheme: str | None = None,
) -> URI:
    """Build an application URL: base URL + index page + ``path``.

    A query string or fragment in ``path`` is carried through. An absolute
    ``scheme://`` URL is returned unchanged.

    Raises:
        InvalidURIError: If ``path`` is not a valid URL reference.
        MissingConfigurationError: If no usable base URL is configured.
    """
    relative = _reference(path)
    if relative.is_absolute:
        return relative
    base = resolve_base_url(config, request)
    return _join(base, _front_prefix(base, config), relative, scheme)


def base_url(
    config: AppConfig,
    request: RequestMetadata,
    path: str = "",
    scheme: str | None = None,
) -> URI:
    """Build a URL under the base URL without the index page.

    Meant for assets and other files served outside the front controller.

    Raises:
        InvalidURIError: If ``path`` is not a valid URL reference.
        MissingConfigurationError: If no usable base URL is configured.
    """
    relative = _reference(path)
    if relative.is_absolute:
        return relative
    base = resolve_base_url(config, request)
    return _join(base, base.path, relative, scheme)


def _join(base: URI, prefix: str, relative: URI, scheme: str | None) -> URI:
    uri = base.with_path(prefix + relative.path.lstrip("/"))
    uri = uri.with_query(relative.query).with_fragment(relative.fragment)
    if scheme:
        uri = uri.with_scheme(scheme)
    return uri


def _front_prefix(base: URI, config: AppConfig) -> str:
    """Base path plus the index page segment, ending in a slash."""
    index_page = config.index_page.strip("/")
    if index_page:
        return f"{base.path}{index_page}/"
    return base.path


def _absolute(path: str) -> str:
    return path if path.startswith("/") else "/" + path


def _has_prefix(path: str, prefix: str) -> bool:
    """Segment-aware prefix test: ``/foo`` prefixes ``/foo/bar``, not ``/foobar``."""
    return path == prefix or path.startswith(prefix + "/")


def _reference(path: str) -> URI:
    """Parse ``path`` for site_url()/base_url().

    Only ``scheme://...`` is read as a full URL. Everything else is an
    application path, so a colon in its first segment (``2024:review``)
    is not mistaken for a scheme.
    """
    if _ABSOLUTE_RE.match(path):
        return URI.parse(path)
    return URI.parse("/" + path.lstrip("/"))
