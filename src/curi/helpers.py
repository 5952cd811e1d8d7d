"""Module-level URL helpers for view and routing code.

The helpers read the active RequestContext from a ``contextvars.ContextVar``,
which is bound per thread and per asyncio task. Bind one for the duration of
a request with ``request_scope()``:

    with request_scope(RequestContext.from_environ(config, environ)):
        current_url()       # "http://example.com/index.php/news"
        url_is("news*")     # True

Calling a helper with no bound context raises NoActiveRequestError rather
than falling back to any process-wide default.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Literal, overload

from curi._uri import CuriError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from curi._context import RequestContext
    from curi._pattern import UrlPattern
    from curi._uri import URI

_active: ContextVar[RequestContext] = ContextVar("curi_request_context")


class NoActiveRequestError(CuriError):
    """A helper was called outside request_scope()."""


@contextmanager
def request_scope(ctx: RequestContext) -> Iterator[RequestContext]:
    """Bind ``ctx`` as the active request context for the enclosed block."""
    token = _active.set(ctx)
    try:
        yield ctx
    finally:
        _active.reset(token)


def active_context() -> RequestContext:
    """Return the bound RequestContext.

    Raises:
        NoActiveRequestError: If no context is bound.
    """
    try:
        return _active.get()
    except LookupError:
        msg = "no active request context; wrap the call in request_scope()"
        raise NoActiveRequestError(msg) from None


@overload
def current_url(as_object: Literal[False] = ...) -> str: ...


@overload
def current_url(as_object: Literal[True]) -> URI: ...


def current_url(as_object: bool = False) -> str | URI:
    return active_context().current_url(as_object)


def uri_string() -> str:
    return active_context().uri_string()


def url_is(pattern: str | UrlPattern) -> bool:
    return active_context().url_is(pattern)


def site_url(path: str = "", scheme: str | None = None) -> str:
    return active_context().site_url(path, scheme)


def base_url(path: str = "", scheme: str | None = None) -> str:
    return active_context().base_url(path, scheme)
