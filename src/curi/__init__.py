"""curi — Current-URL resolution for server-side request pipelines.

Derives the absolute URL of the request being handled from the configured
base URL, the reported host and the reported request path, extracts the
path relative to the application base, and matches it against glob-style
patterns.

All public types are exported from this module for flat imports:

    from curi import AppConfig, RequestMetadata, RequestContext, URI
"""

__version__ = "0.1.0"

# Base URL resolution
from curi._base import MissingConfigurationError, configured_base_url, resolve_base_url

# Configuration
from curi._config import (
    DEFAULT_INDEX_PAGE,
    AppConfig,
    ConfigParseError,
    load_app_config,
    parse_app_config,
)

# Per-request facade
from curi._context import RequestContext

# Current-URL and site-URL building
from curi._current import base_url, build_current_url, extra_path, site_url

# Patterns
from curi._pattern import MAX_PATTERN_LENGTH, PatternTooLongError, UrlPattern, url_is

# Host policy
from curi._policy import Allowed, Fallback, HostPolicy, evaluate_host

# Relative paths
from curi._relative import relative_path

# Request metadata
from curi._request import RequestMetadata, split_host

# Collaborator protocols
from curi._types import ConfigProvider, RequestProvider, config_from, request_from

# URI value type and errors
from curi._uri import (
    URI,
    CuriError,
    InvalidURIError,
    SegmentOutOfRangeError,
    normalize_path,
)

__all__ = [
    # URI
    "URI",
    "normalize_path",
    # Errors
    "CuriError",
    "InvalidURIError",
    "SegmentOutOfRangeError",
    "MissingConfigurationError",
    "ConfigParseError",
    "PatternTooLongError",
    # Configuration
    "AppConfig",
    "DEFAULT_INDEX_PAGE",
    "parse_app_config",
    "load_app_config",
    # Request metadata
    "RequestMetadata",
    "split_host",
    # Protocols
    "ConfigProvider",
    "RequestProvider",
    "config_from",
    "request_from",
    # Host policy
    "Allowed",
    "Fallback",
    "HostPolicy",
    "evaluate_host",
    # Resolution
    "configured_base_url",
    "resolve_base_url",
    "build_current_url",
    "extra_path",
    "site_url",
    "base_url",
    "relative_path",
    # Patterns
    "UrlPattern",
    "url_is",
    "MAX_PATTERN_LENGTH",
    # Per-request facade
    "RequestContext",
]
