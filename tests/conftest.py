"""Conformance fixture loader for curi.

Loads YAML fixtures from tests/fixtures/ and converts them to request
contexts for parametrized testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from curi import RequestContext
from curi.testing import make_config, make_request

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@dataclass
class CurrentUrlCase:
    """A single deployment from the current-URL fixtures."""

    name: str
    doc: dict[str, Any]
    expect: dict[str, Any]

    def new_context(self) -> RequestContext:
        """A fresh context, so no test sees another test's cached URI."""
        return _build_context(self.doc)


# ─── YAML → curi type conversion ────────────────────────────────────────────


def _build_context(doc: dict[str, Any]) -> RequestContext:
    config_spec = doc.get("config") or {}
    request_spec = doc.get("request") or {}
    config = make_config(
        base_url=config_spec.get("base_url", "http://example.com/"),
        index_page=config_spec.get("index_page", "index.php"),
        allowed_hostnames=config_spec.get("allowed_hostnames", ()),
    )
    request = make_request(
        host=request_spec.get("host", "example.com"),
        request_uri=request_spec.get("request_uri", "/"),
        script_name=request_spec.get("script_name", "/index.php"),
        port=request_spec.get("port"),
    )
    return RequestContext(config, request)


# ─── Fixture loading ────────────────────────────────────────────────────────


def load_current_url_fixtures() -> list[CurrentUrlCase]:
    """Load every document of tests/fixtures/current_url.yaml."""
    cases: list[CurrentUrlCase] = []
    with (FIXTURES_DIR / "current_url.yaml").open() as f:
        for doc in yaml.safe_load_all(f):
            if doc is None:
                continue
            cases.append(
                CurrentUrlCase(
                    name=doc["name"],
                    doc=doc,
                    expect=doc["expect"],
                )
            )
    return cases
