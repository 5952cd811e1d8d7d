"""Tests for RequestMetadata and Host header splitting."""

from __future__ import annotations

import pytest

from curi import InvalidURIError, RequestMetadata, split_host


class TestRequestMetadata:
    def test_path_and_query_split(self) -> None:
        request = RequestMetadata(request_uri="/foo/public/bar?baz=quip")
        assert request.path == "/foo/public/bar"
        assert request.query == "baz=quip"

    def test_no_query(self) -> None:
        request = RequestMetadata(request_uri="/foo")
        assert request.path == "/foo"
        assert request.query is None

    def test_empty_query_kept(self) -> None:
        assert RequestMetadata(request_uri="/foo?").query == ""

    def test_fragment_ignored(self) -> None:
        request = RequestMetadata(request_uri="/foo?a=1#frag")
        assert request.path == "/foo"
        assert request.query == "a=1"

    def test_defaults(self) -> None:
        request = RequestMetadata()
        assert request.host == ""
        assert request.request_uri == "/"
        assert request.script_name == "/index.php"

    def test_invalid_port(self) -> None:
        with pytest.raises(InvalidURIError):
            RequestMetadata(port=0)

    def test_cli(self) -> None:
        request = RequestMetadata.cli("/jobs/run")
        assert request.host == ""
        assert request.port is None
        assert request.path == "/jobs/run"

    def test_equality_ignores_computed_fields(self) -> None:
        assert RequestMetadata(request_uri="/a?b") == RequestMetadata(request_uri="/a?b")


class TestFromEnviron:
    def test_request_uri(self) -> None:
        request = RequestMetadata.from_environ(
            {
                "HTTP_HOST": "example.com",
                "SERVER_PORT": "8080",
                "REQUEST_URI": "/foo/public/bar?baz=quip",
                "SCRIPT_NAME": "/foo/public/index.php",
            }
        )
        assert request == RequestMetadata(
            host="example.com",
            port=8080,
            request_uri="/foo/public/bar?baz=quip",
            script_name="/foo/public/index.php",
        )

    def test_port_in_host_header_wins(self) -> None:
        request = RequestMetadata.from_environ(
            {"HTTP_HOST": "example.com:8443", "SERVER_PORT": "80"}
        )
        assert request.host == "example.com"
        assert request.port == 8443

    def test_server_name_fallback(self) -> None:
        request = RequestMetadata.from_environ({"SERVER_NAME": "internal.example"})
        assert request.host == "internal.example"

    def test_wsgi_style_path(self) -> None:
        request = RequestMetadata.from_environ(
            {
                "HTTP_HOST": "example.com",
                "SCRIPT_NAME": "/app",
                "PATH_INFO": "/news/42",
                "QUERY_STRING": "page=2",
            }
        )
        assert request.request_uri == "/app/news/42?page=2"
        assert request.script_name == "/app"

    def test_decoded_question_mark_stays_in_path(self) -> None:
        request = RequestMetadata.from_environ(
            {"HTTP_HOST": "example.com", "PATH_INFO": "/a?b/c", "QUERY_STRING": "x=1"}
        )
        assert request.request_uri == "/a%3Fb/c?x=1"
        assert request.path == "/a%3Fb/c"
        assert request.query == "x=1"

    def test_decoded_space_is_quoted(self) -> None:
        request = RequestMetadata.from_environ(
            {"HTTP_HOST": "example.com", "SCRIPT_NAME": "/my app", "PATH_INFO": "/my file"}
        )
        assert request.request_uri == "/my%20app/my%20file"
        assert request.script_name == "/my%20app"

    def test_wsgi_latin1_path_is_utf8_escaped(self) -> None:
        # "é" as UTF-8 bytes, decoded to a native string as latin-1
        request = RequestMetadata.from_environ({"PATH_INFO": "/cafÃ©"})
        assert request.request_uri == "/caf%C3%A9"

    def test_raw_request_uri_not_requoted(self) -> None:
        request = RequestMetadata.from_environ({"REQUEST_URI": "/a%3Fb?x=1"})
        assert request.request_uri == "/a%3Fb?x=1"

    def test_empty_environ(self) -> None:
        request = RequestMetadata.from_environ({})
        assert request.host == ""
        assert request.port is None
        assert request.request_uri == "/"
        assert request.script_name == "/index.php"

    def test_garbage_port_ignored(self) -> None:
        request = RequestMetadata.from_environ({"HTTP_HOST": "example.com", "SERVER_PORT": "http"})
        assert request.port is None


class TestSplitHost:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("example.com", ("example.com", None)),
            ("example.com:8080", ("example.com", 8080)),
            (" example.com ", ("example.com", None)),
            ("example.com:", ("example.com", None)),
            ("example.com:99999", ("example.com", None)),
            ("[::1]", ("[::1]", None)),
            ("[::1]:8080", ("[::1]", 8080)),
            ("", ("", None)),
        ],
    )
    def test_split(self, header: str, expected: tuple[str, int | None]) -> None:
        assert split_host(header) == expected
