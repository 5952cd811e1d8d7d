"""Base URL resolution.

Turns the configured base URL plus the host policy decision into the
absolute URL that every generated URL starts from. The result always has a
path ending in exactly one slash.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from curi._policy import Allowed, Fallback, evaluate_host
from curi._uri import URI, CuriError, InvalidURIError

if TYPE_CHECKING:
    from curi._config import AppConfig
    from curi._request import RequestMetadata

logger = logging.getLogger(__name__)


class MissingConfigurationError(CuriError):
    """No usable base URL is configured."""


def configured_base_url(config: AppConfig) -> URI:
    """Parse and validate ``config.base_url``, without host substitution.

    Raises:
        MissingConfigurationError: If the base URL is empty, unparsable, or
            lacks a scheme or host.
    """
    raw = config.base_url.strip()
    if not raw:
        msg = "base_url is not configured; a base URL is required to build URLs"
        raise MissingConfigurationError(msg)
    try:
        uri = URI.parse(raw)
    except InvalidURIError as e:
        msg = f"base_url {raw!r} is not a valid URL: {e}"
        raise MissingConfigurationError(msg) from e
    if not uri.is_absolute:
        msg = f"base_url {raw!r} must be absolute (scheme and host)"
        raise MissingConfigurationError(msg)
    return uri.with_path(uri.path.rstrip("/") + "/").with_query(None).with_fragment(None)


def resolve_base_url(config: AppConfig, request: RequestMetadata) -> URI:
    """Return the effective base URL for a request.

    Raises:
        MissingConfigurationError: If no usable base URL is configured.
    """
    base = configured_base_url(config)
    match evaluate_host(config, request):
        case Allowed(host=host):
            logger.debug("using allowed request host %r for base URL", host)
            return base.with_host(host)
        case Fallback():
            return base
    return base  # pragma: no cover
