"""Host policy — May the request's Host be reflected into generated URLs?

The decision is a tagged union, in the same style as an xDS OnMatch:
- Allowed: the reported host is on the allow-list and replaces the
  base URL's host
- Fallback: the configured base URL is used unchanged

An unrecognized Host header must never leak into an absolute URL, so every
path that is not an exact allow-list hit ends in Fallback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from curi._config import AppConfig
    from curi._request import RequestMetadata

logger = logging.getLogger(__name__)

FallbackReason: TypeAlias = Literal["no_allowed_hostnames", "no_request_host", "host_not_allowed"]


@dataclass(frozen=True, slots=True)
class Allowed:
    """The request host is trusted and replaces the configured host."""

    host: str


@dataclass(frozen=True, slots=True)
class Fallback:
    """Use the configured base URL as-is."""

    reason: FallbackReason


HostPolicy: TypeAlias = Allowed | Fallback


def evaluate_host(config: AppConfig, request: RequestMetadata) -> HostPolicy:
    """Decide whether ``request.host`` may replace the base URL's host.

    Membership is an exact, case-sensitive string comparison.
    """
    if not config.allowed_hostnames:
        return Fallback("no_allowed_hostnames")
    if not request.host:
        logger.debug("no request host reported; using configured base URL")
        return Fallback("no_request_host")
    if request.host in config.allowed_hostnames:
        return Allowed(request.host)

    logger.warning(
        "request host %r is not in allowed_hostnames; using configured base URL",
        request.host,
    )
    return Fallback("host_not_allowed")
