"""Application configuration consumed by URL resolution.

The configuration is an externally owned, read-only snapshot. It can be
built directly or loaded from a plain dict / YAML document:

    base_url: http://example.com/public
    index_page: index.php
    allowed_hostnames:
      - www.example.jp

Loading path:
  YAML file → load_app_config() → dict → parse_app_config() → AppConfig

Only types are checked here. Whether ``base_url`` is a usable absolute URL is
checked when the first URL is built (see ``curi._base``), so a partially
configured application can still start and run non-URL work.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from curi._uri import CuriError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

DEFAULT_INDEX_PAGE = "index.php"

_KNOWN_KEYS = frozenset({"base_url", "index_page", "allowed_hostnames"})


class ConfigParseError(CuriError):
    """Error parsing a config dict into an AppConfig."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """URL-related application settings.

    ``index_page`` names the front-controller script inserted into generated
    URLs; an empty string omits it. ``allowed_hostnames`` lists the request
    hosts that may replace the base URL's host.
    """

    base_url: str
    index_page: str = DEFAULT_INDEX_PAGE
    allowed_hostnames: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if "/" in self.index_page.strip("/"):
            msg = f"index_page must be a single path segment, got {self.index_page!r}"
            raise ValueError(msg)
        object.__setattr__(self, "index_page", self.index_page.strip("/"))

        # Accept any iterable of names; store a frozenset.
        if isinstance(self.allowed_hostnames, str):
            msg = "allowed_hostnames must be a collection of names, not a str"
            raise TypeError(msg)
        if not isinstance(self.allowed_hostnames, frozenset):
            object.__setattr__(
                self, "allowed_hostnames", frozenset(self.allowed_hostnames)
            )

    def with_overrides(
        self,
        *,
        base_url: str | None = None,
        index_page: str | None = None,
        allowed_hostnames: Iterable[str] | None = None,
    ) -> AppConfig:
        """Return a copy with the given settings replaced."""
        return AppConfig(
            base_url=self.base_url if base_url is None else base_url,
            index_page=self.index_page if index_page is None else index_page,
            allowed_hostnames=(
                self.allowed_hostnames
                if allowed_hostnames is None
                else frozenset(allowed_hostnames)
            ),
        )


def parse_app_config(data: dict[str, Any]) -> AppConfig:
    """Parse a dict into an AppConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        msg = f"unknown config field(s): {', '.join(map(repr, unknown))}"
        raise ConfigParseError(msg)

    if "base_url" not in data:
        msg = "missing required field 'base_url'"
        raise ConfigParseError(msg)
    base_url = data["base_url"]
    if not isinstance(base_url, str):
        msg = f"'base_url' must be a string, got {type(base_url).__name__}"
        raise ConfigParseError(msg)

    index_page = data.get("index_page", DEFAULT_INDEX_PAGE)
    if index_page is None:
        index_page = ""
    if not isinstance(index_page, str):
        msg = f"'index_page' must be a string, got {type(index_page).__name__}"
        raise ConfigParseError(msg)
    if "/" in index_page.strip("/"):
        msg = f"'index_page' must be a single path segment, got {index_page!r}"
        raise ConfigParseError(msg)

    return AppConfig(
        base_url=base_url.strip(),
        index_page=index_page,
        allowed_hostnames=_parse_hostnames(data.get("allowed_hostnames", [])),
    )


def _parse_hostnames(raw: Any) -> frozenset[str]:
    """Parse the allow-list. Accepts a list of strings or None."""
    if raw is None:
        return frozenset()
    if not isinstance(raw, list):
        msg = f"'allowed_hostnames' must be a list, got {type(raw).__name__}"
        raise ConfigParseError(msg)
    hostnames: set[str] = set()
    for i, name in enumerate(raw):
        if not isinstance(name, str) or not name:
            msg = f"allowed_hostnames[{i}] must be a non-empty string, got {name!r}"
            raise ConfigParseError(msg)
        hostnames.add(name)
    return frozenset(hostnames)


def load_app_config(path: Path) -> AppConfig:
    """Load an AppConfig from a YAML file.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a valid config.
    """
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"invalid YAML in {path}: {e}"
        raise ConfigParseError(msg) from e
    if data is None:
        msg = f"{path} is empty"
        raise ConfigParseError(msg)
    return parse_app_config(data)
