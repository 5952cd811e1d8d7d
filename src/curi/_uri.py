"""URI — Immutable parsed URL with segment access and a canonical string form.

Parsing follows the RFC 3986 Appendix B decomposition:

    http://user@example.com:8080/foo/public/index.php/bar?baz=quip#top
    ────   ──── ─────────── ──── ────────────────────────── ──────── ───
    scheme user    host     port           path               query  fragment

The path is normalized at construction time:
- repeated slashes collapse to one
- dot segments are removed (RFC 3986 §5.2.4)
- a trailing slash is preserved

Segments are the non-empty pieces of the path and are 1-indexed for
positional access, so ``/foo//bar/`` has segments ``("foo", "bar")``.

The regex engine is ``google-re2``: the decomposition pattern runs in linear
time regardless of input, so hostile request lines cannot stall parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import re2

# RFC 3986 Appendix B, anchored.
_URI_RE = re2.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$")
_SCHEME_RE = re2.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_SLASHES_RE = re2.compile(r"/{2,}")

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}

MIN_PORT = 1
MAX_PORT = 65535


class CuriError(Exception):
    """Base class for all curi errors."""


class InvalidURIError(CuriError, ValueError):
    """A string is not a syntactically valid URL."""


class SegmentOutOfRangeError(CuriError, IndexError):
    """A 1-based segment index is outside the available segments."""

    def __init__(self, index: int, total: int) -> None:
        self.index = index
        self.total = total
        super().__init__(
            f"segment {index} is out of range (URI has {total} segments)"
        )


@dataclass(frozen=True, slots=True)
class URI:
    """A parsed URL.

    Build one with ``URI.parse()``. Direct construction is supported for
    callers that already hold the components; the path is normalized and the
    port is range-checked either way.

    Raises:
        InvalidURIError: If the port is outside 1-65535.
    """

    scheme: str = ""
    host: str = ""
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None
    user_info: str | None = None

    # Computed fields
    _segments: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.port is not None and not MIN_PORT <= self.port <= MAX_PORT:
            msg = f"port {self.port} is outside {MIN_PORT}-{MAX_PORT}"
            raise InvalidURIError(msg)
        object.__setattr__(self, "scheme", self.scheme.lower())
        object.__setattr__(self, "host", self.host.lower())
        # RFC 3986 §6.2.3: an explicit default port is the same URI as none.
        if self.port is not None and self.port == DEFAULT_PORTS.get(self.scheme):
            object.__setattr__(self, "port", None)

        path = normalize_path(self.path)
        if self.host and not path.startswith("/"):
            path = "/" + path
        object.__setattr__(self, "path", path)
        object.__setattr__(
            self, "_segments", tuple(s for s in path.split("/") if s)
        )

    @classmethod
    def parse(cls, text: str) -> URI:
        """Parse an absolute or relative URL string.

        Raises:
            InvalidURIError: If the string is not a valid URL.
        """
        if not isinstance(text, str):
            msg = f"expected str, got {type(text).__name__}"
            raise InvalidURIError(msg)
        if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7F for c in text):
            msg = f"URL contains whitespace or control characters: {text!r}"
            raise InvalidURIError(msg)

        m = _URI_RE.match(text)
        if m is None:  # pragma: no cover - the pattern accepts every string
            msg = f"malformed URL: {text!r}"
            raise InvalidURIError(msg)

        scheme, authority, path, query, fragment = m.groups()
        if scheme is not None and _SCHEME_RE.match(scheme) is None:
            msg = f"invalid scheme {scheme!r} in {text!r}"
            raise InvalidURIError(msg)

        user_info, host, port = None, "", None
        if authority is not None:
            user_info, host, port = _parse_authority(authority, text)

        return cls(
            scheme=scheme or "",
            host=host,
            port=port,
            path=path or "",
            query=query,
            fragment=fragment,
            user_info=user_info,
        )

    @property
    def segments(self) -> tuple[str, ...]:
        """Non-empty path segments, in order."""
        return self._segments

    @property
    def is_absolute(self) -> bool:
        return bool(self.scheme) and bool(self.host)

    @property
    def authority(self) -> str:
        """``[user_info@]host[:port]``."""
        if not self.host:
            return ""
        authority = self.host
        if self.user_info is not None:
            authority = f"{self.user_info}@{authority}"
        if self.port is not None:
            authority = f"{authority}:{self.port}"
        return authority

    def total_segments(self) -> int:
        return len(self._segments)

    def segment(self, number: int) -> str:
        """Return the segment at a 1-based position.

        Raises:
            SegmentOutOfRangeError: If ``number`` is below 1 or beyond the
                last segment.
        """
        if not 1 <= number <= len(self._segments):
            raise SegmentOutOfRangeError(number, len(self._segments))
        return self._segments[number - 1]

    def with_scheme(self, scheme: str) -> URI:
        return replace(self, scheme=scheme)

    def with_host(self, host: str) -> URI:
        return replace(self, host=host)

    def with_path(self, path: str) -> URI:
        return replace(self, path=path)

    def with_query(self, query: str | None) -> URI:
        return replace(self, query=query)

    def with_fragment(self, fragment: str | None) -> URI:
        return replace(self, fragment=fragment)

    def __str__(self) -> str:
        out = ""
        if self.scheme:
            out = f"{self.scheme}:"
        if self.host:
            out = f"{out}//{self.authority}"
        out += self.path
        if self.query is not None:
            out = f"{out}?{self.query}"
        if self.fragment is not None:
            out = f"{out}#{self.fragment}"
        return out


def _parse_authority(authority: str, text: str) -> tuple[str | None, str, int | None]:
    """Split ``[user_info@]host[:port]`` into its parts."""
    user_info = None
    if "@" in authority:
        user_info, authority = authority.rsplit("@", 1)

    host, port_text = authority, None
    if authority.startswith("["):
        # IPv6 literal: the port separator follows the closing bracket.
        end = authority.find("]")
        if end == -1:
            msg = f"unterminated IPv6 host in {text!r}"
            raise InvalidURIError(msg)
        host = authority[: end + 1]
        rest = authority[end + 1 :]
        if rest:
            if not rest.startswith(":"):
                msg = f"unexpected characters after IPv6 host in {text!r}"
                raise InvalidURIError(msg)
            port_text = rest[1:]
    elif ":" in authority:
        host, port_text = authority.rsplit(":", 1)

    if not host:
        msg = f"URL has an empty host: {text!r}"
        raise InvalidURIError(msg)

    port = None
    if port_text:
        if not port_text.isdigit():
            msg = f"invalid port {port_text!r} in {text!r}"
            raise InvalidURIError(msg)
        port = int(port_text)
        if not MIN_PORT <= port <= MAX_PORT:
            msg = f"port {port} is outside {MIN_PORT}-{MAX_PORT} in {text!r}"
            raise InvalidURIError(msg)
    return user_info, host, port


def normalize_path(path: str) -> str:
    """Collapse repeated slashes and remove dot segments.

    >>> normalize_path("/foo//bar/./baz/../")
    '/foo/bar/'
    """
    if not path:
        return ""
    return remove_dot_segments(_SLASHES_RE.sub("/", path))


def remove_dot_segments(path: str) -> str:
    """RFC 3986 §5.2.4 dot-segment removal."""
    out: list[str] = []
    while path:
        if path.startswith("../"):
            path = path[3:]
        elif path.startswith("./"):
            path = path[2:]
        elif path.startswith("/./"):
            path = path[2:]
        elif path == "/.":
            path = "/"
        elif path.startswith("/../"):
            path = path[3:]
            if out:
                out.pop()
        elif path == "/..":
            path = "/"
            if out:
                out.pop()
        elif path in (".", ".."):
            path = ""
        else:
            start = 1 if path.startswith("/") else 0
            end = path.find("/", start)
            if end == -1:
                end = len(path)
            out.append(path[:end])
            path = path[end:]
    return "".join(out)
