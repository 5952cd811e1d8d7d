"""Collaborator protocols.

curi does not own configuration or request state. Anything that exposes
the attributes below can be adapted into AppConfig / RequestMetadata with
``config_from`` and ``request_from``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from curi._config import AppConfig
from curi._request import RequestMetadata

if TYPE_CHECKING:
    from collections.abc import Iterable


@runtime_checkable
class ConfigProvider(Protocol):
    """Exposes the URL settings of an application."""

    @property
    def base_url(self) -> str: ...

    @property
    def index_page(self) -> str: ...

    @property
    def allowed_hostnames(self) -> Iterable[str]: ...


@runtime_checkable
class RequestProvider(Protocol):
    """Exposes what the transport layer reported about a request."""

    @property
    def host(self) -> str: ...

    @property
    def port(self) -> int | None: ...

    @property
    def request_uri(self) -> str: ...

    @property
    def script_name(self) -> str: ...


def config_from(provider: ConfigProvider) -> AppConfig:
    """Snapshot a provider into an AppConfig."""
    if isinstance(provider, AppConfig):
        return provider
    return AppConfig(
        base_url=provider.base_url,
        index_page=provider.index_page,
        allowed_hostnames=frozenset(provider.allowed_hostnames),
    )


def request_from(provider: RequestProvider) -> RequestMetadata:
    """Snapshot a provider into a RequestMetadata."""
    if isinstance(provider, RequestMetadata):
        return provider
    return RequestMetadata(
        host=provider.host,
        port=provider.port,
        request_uri=provider.request_uri,
        script_name=provider.script_name,
    )
