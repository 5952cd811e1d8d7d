"""RequestMetadata — What the transport layer reported about a request.

Holds the host, port, raw request-URI and front-controller script name.
The request-URI is kept as it came off the wire (may include a query string);
the clean path and raw query are split out at construction time.

Nothing here reads process-wide state. Build one per request, either
directly, from a WSGI-style environ dict, or with ``cli()`` when there is
no live request at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from curi._uri import MAX_PORT, MIN_PORT, InvalidURIError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_SCRIPT_NAME = "/index.php"

# Left unescaped in paths: "/" plus the RFC 3986 pchar delimiters.
_PATH_SAFE = "/;=,:@!$&'()*+~"


@dataclass(frozen=True, slots=True)
class RequestMetadata:
    """Request snapshot used to build the current URL.

    ``host`` never includes a port; use ``split_host()`` on a raw Host
    header first.
    """

    host: str = ""
    port: int | None = None
    request_uri: str = "/"
    script_name: str = DEFAULT_SCRIPT_NAME

    # Computed fields, parsed from request_uri
    _path: str = field(init=False, repr=False, compare=False)
    _query: str | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.port is not None and not MIN_PORT <= self.port <= MAX_PORT:
            msg = f"port {self.port} is outside {MIN_PORT}-{MAX_PORT}"
            raise InvalidURIError(msg)

        raw = self.request_uri.split("#", 1)[0]
        if "?" in raw:
            path, query = raw.split("?", 1)
            object.__setattr__(self, "_path", path)
            object.__setattr__(self, "_query", query)
        else:
            object.__setattr__(self, "_path", raw)
            object.__setattr__(self, "_query", None)

    @property
    def path(self) -> str:
        """Request path without query string."""
        return self._path

    @property
    def query(self) -> str | None:
        """Raw query string, or None when the request had none."""
        return self._query

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> RequestMetadata:
        """Build from a WSGI/CGI-style environ mapping.

        Uses HTTP_HOST (falling back to SERVER_NAME), SERVER_PORT,
        REQUEST_URI (falling back to SCRIPT_NAME + PATH_INFO + QUERY_STRING)
        and SCRIPT_NAME. WSGI servers hand over SCRIPT_NAME and PATH_INFO
        percent-decoded, so both are quoted again
        to match the raw REQUEST_URI.
        """
        host, port = split_host(environ.get("HTTP_HOST") or environ.get("SERVER_NAME", ""))
        if port is None:
            port = _parse_port(environ.get("SERVER_PORT"))

        script_name = _quote_path(environ.get("SCRIPT_NAME") or DEFAULT_SCRIPT_NAME)
        request_uri = environ.get("REQUEST_URI")
        if not request_uri:
            path = (environ.get("SCRIPT_NAME") or "") + (environ.get("PATH_INFO") or "")
            request_uri = _quote_path(path) or "/"
            query = environ.get("QUERY_STRING")
            if query:
                request_uri = f"{request_uri}?{query}"

        return cls(host=host, port=port, request_uri=request_uri, script_name=script_name)

    @classmethod
    def cli(cls, request_uri: str = "/", script_name: str = DEFAULT_SCRIPT_NAME) -> RequestMetadata:
        """Metadata for command-line runs, where no request exists.

        The host is left empty so the configured base URL is used as-is.
        """
        return cls(host="", port=None, request_uri=request_uri, script_name=script_name)


def split_host(header: str) -> tuple[str, int | None]:
    """Split a Host header value into host and optional port.

    >>> split_host("example.com:8080")
    ('example.com', 8080)
    >>> split_host("[::1]")
    ('[::1]', None)
    """
    header = header.strip()
    if header.startswith("["):
        end = header.find("]")
        if end != -1:
            host, rest = header[: end + 1], header[end + 1 :]
            return host, _parse_port(rest[1:]) if rest.startswith(":") else None
    elif header.count(":") == 1:
        host, port = header.split(":", 1)
        return host, _parse_port(port)
    return header, None


def _parse_port(raw: Any) -> int | None:
    """Parse a port value; anything unusable is treated as absent."""
    if raw is None or raw == "":
        return None
    try:
        port = int(raw)
    except (TypeError, ValueError):
        return None
    if not MIN_PORT <= port <= MAX_PORT:
        return None
    return port


def _quote_path(path: str) -> str:
    """Re-escape a decoded WSGI path.

    >>> _quote_path("/a?b/my file")
    '/a%3Fb/my%20file'
    """
    # WSGI native strings carry the raw bytes as latin-1.
    try:
        raw = path.encode("latin-1")
    except UnicodeEncodeError:
        raw = path.encode("utf-8")
    return quote(raw, safe=_PATH_SAFE)
