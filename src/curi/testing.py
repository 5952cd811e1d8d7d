"""Test utilities for curi.

Builders that take the settings a test usually varies as keyword arguments
and fill in the rest, mirroring a typical single-host deployment:

- base URL ``http://example.com/``
- index page ``index.php``
- Host header ``example.com``, request-URI ``/``, script ``/index.php``

These are NOT framework adapters. Real applications should build
AppConfig and RequestMetadata from their own config and request objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from curi._config import AppConfig
from curi._context import RequestContext
from curi._request import RequestMetadata
from curi._uri import URI

if TYPE_CHECKING:
    from collections.abc import Iterable


def make_config(
    base_url: str = "http://example.com/",
    index_page: str = "index.php",
    allowed_hostnames: Iterable[str] = (),
) -> AppConfig:
    return AppConfig(
        base_url=base_url,
        index_page=index_page,
        allowed_hostnames=frozenset(allowed_hostnames),
    )


def make_request(
    host: str = "example.com",
    request_uri: str = "/",
    script_name: str = "/index.php",
    port: int | None = None,
) -> RequestMetadata:
    return RequestMetadata(
        host=host, port=port, request_uri=request_uri, script_name=script_name
    )


def make_context(
    *,
    base_url: str = "http://example.com/",
    index_page: str = "index.php",
    allowed_hostnames: Iterable[str] = (),
    host: str = "example.com",
    port: int | None = None,
    request_uri: str = "/",
    script_name: str = "/index.php",
    uri: str | URI | None = None,
) -> RequestContext:
    """Build a RequestContext in one call.

    ``uri`` injects an already-resolved current URI, bypassing the builder.

    >>> make_context(request_uri="/news/42").uri_string()
    'news/42'
    """
    if isinstance(uri, str):
        uri = URI.parse(uri)
    return RequestContext(
        config=make_config(base_url, index_page, allowed_hostnames),
        request=make_request(host, request_uri, script_name, port),
        uri=uri,
    )
