"""RequestContext — Per-request facade over URL resolution.

One RequestContext is created for each inbound request. It pairs the
configuration snapshot with the request snapshot and memoizes the current
URI on first access. The cache lives on the instance, so two requests
handled concurrently never share it.

    ctx = RequestContext(config, RequestMetadata.from_environ(environ))
    ctx.current_url()         # "http://example.com/index.php/news/42"
    ctx.uri_string()          # "news/42"
    ctx.url_is("news*")       # True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, overload

from curi._current import base_url as build_base_url
from curi._current import build_current_url
from curi._current import site_url as build_site_url
from curi._pattern import url_is as path_matches
from curi._relative import relative_path
from curi._request import RequestMetadata

if TYPE_CHECKING:
    from collections.abc import Mapping

    from curi._config import AppConfig
    from curi._pattern import UrlPattern
    from curi._uri import URI


@dataclass(slots=True)
class RequestContext:
    """URL helpers bound to one request.

    ``uri`` overrides the computed current URI. It exists for callers that
    already resolved the URI elsewhere (a router, a test) and want
    ``uri_string()`` and ``url_is()`` to work from it.
    """

    config: AppConfig
    request: RequestMetadata = field(default_factory=RequestMetadata.cli)
    uri: URI | None = None
    _current: URI | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_environ(cls, config: AppConfig, environ: Mapping[str, Any]) -> RequestContext:
        return cls(config, RequestMetadata.from_environ(environ))

    def current_uri(self) -> URI:
        """The current URI, computed once per context.

        Raises:
            MissingConfigurationError: If no usable base URL is configured.
        """
        if self._current is None:
            if self.uri is not None:
                self._current = self.uri
            else:
                self._current = build_current_url(self.config, self.request)
        return self._current

    @overload
    def current_url(self, as_object: Literal[False] = ...) -> str: ...

    @overload
    def current_url(self, as_object: Literal[True]) -> URI: ...

    def current_url(self, as_object: bool = False) -> str | URI:
        """The current URL as a string (query dropped) or as a URI (query kept)."""
        uri = self.current_uri()
        if as_object:
            return uri
        return str(uri.with_query(None).with_fragment(None))

    def uri_string(self) -> str:
        """The current path relative to the base URL and index page."""
        return relative_path(self.current_uri(), self.config)

    def url_is(self, pattern: str | UrlPattern) -> bool:
        """Test the current relative path against a glob-style pattern."""
        return path_matches(pattern, self.uri_string())

    def site_url(self, path: str = "", scheme: str | None = None) -> str:
        return str(build_site_url(self.config, self.request, path, scheme))

    def base_url(self, path: str = "", scheme: str | None = None) -> str:
        return str(build_base_url(self.config, self.request, path, scheme))
