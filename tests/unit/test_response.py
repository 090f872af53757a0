"""
Unit tests for HTTP response building.
"""

import pytest

from bauhauswiki.http.response import (
    HTTPResponse,
    ResponseBuilder,
    HTTPStatus,
    html_page,
    see_other,
    error_response,
    not_found,
    method_not_allowed,
    internal_error,
    format_http_date,
)


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse(status=HTTPStatus.OK)
        assert response.status_line == "HTTP/1.1 200 OK"

        response = HTTPResponse(status=HTTPStatus.SEE_OTHER)
        assert response.status_line == "HTTP/1.1 303 See Other"

    def test_to_bytes_includes_headers(self):
        """Test that to_bytes includes all headers."""
        response = HTTPResponse(
            status=HTTPStatus.OK,
            headers={"X-Custom": "value"},
            body=b"test",
        )

        result = response.to_bytes()

        assert result.startswith(b"HTTP/1.1 200 OK\r\n")
        assert b"X-Custom: value\r\n" in result
        assert b"Content-Length: 4\r\n" in result
        assert b"Server: BauhausWiki/1.0\r\n" in result
        assert b"Date: " in result
        assert result.endswith(b"\r\n\r\ntest")

    def test_content_length_counts_bytes(self):
        """Non-ASCII bodies are measured after encoding."""
        response = ResponseBuilder().html("é").build()

        assert b"Content-Length: 2\r\n" in response.to_bytes()

    def test_custom_server_name(self):
        result = HTTPResponse().to_bytes(server_name="TestWiki/0.1")

        assert b"Server: TestWiki/0.1\r\n" in result

    def test_to_bytes_does_not_modify_headers(self):
        response = HTTPResponse(body=b"x")
        response.to_bytes()

        assert response.headers == {}

    def test_set_header_chaining(self):
        """Test method chaining for headers."""
        response = (HTTPResponse()
            .set_header("X-One", "1")
            .set_header("X-Two", "2"))

        assert response.headers == {"X-One": "1", "X-Two": "2"}


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_default_status(self):
        assert ResponseBuilder().build().status == HTTPStatus.OK

    def test_html_body(self):
        response = ResponseBuilder().html("<h1>Bauhaus</h1>").build()

        assert response.headers["Content-Type"] == "text/html; charset=utf-8"
        assert response.body == b"<h1>Bauhaus</h1>"

    def test_css_body(self):
        response = ResponseBuilder().css("body { margin: 0; }").build()

        assert response.headers["Content-Type"] == "text/css; charset=utf-8"
        assert response.text == "body { margin: 0; }"

    def test_text_body(self):
        response = ResponseBuilder().text("plain").build()

        assert response.headers["Content-Type"] == "text/plain; charset=utf-8"
        assert response.body == b"plain"

    def test_redirect(self):
        response = ResponseBuilder().redirect("/wiki/bauhaus").build()

        assert response.status == HTTPStatus.SEE_OTHER
        assert response.headers["Location"] == "/wiki/bauhaus"
        assert response.body == b""

    def test_method_chaining(self):
        response = (ResponseBuilder()
            .status(HTTPStatus.NOT_FOUND)
            .header("X-Test", "yes")
            .body("gone")
            .build())

        assert response.status == HTTPStatus.NOT_FOUND
        assert response.headers["X-Test"] == "yes"
        assert response.body == b"gone"


class TestConvenienceFunctions:
    """Tests for convenience response functions."""

    def test_html_page(self):
        response = html_page("<p>hi</p>")

        assert response.status == HTTPStatus.OK
        assert response.headers["Content-Type"].startswith("text/html")

    def test_see_other(self):
        response = see_other("/wiki/main")

        assert response.status == 303
        assert response.headers["Location"] == "/wiki/main"

    @pytest.mark.parametrize("status,phrase", [
        (HTTPStatus.BAD_REQUEST, "Bad Request"),
        (HTTPStatus.NOT_FOUND, "Not Found"),
        (HTTPStatus.METHOD_NOT_ALLOWED, "Method Not Allowed"),
        (HTTPStatus.INTERNAL_SERVER_ERROR, "Internal Server Error"),
    ])
    def test_error_body_is_phrase(self, status, phrase):
        response = error_response(status)

        assert response.status == status
        assert response.text == phrase
        assert response.headers["Content-Type"] == "text/plain; charset=utf-8"

    def test_shortcuts(self):
        assert not_found().status == 404
        assert internal_error().status == 500

    def test_method_not_allowed_with_allow_header(self):
        response = method_not_allowed(["GET", "POST"])

        assert response.status == 405
        assert response.headers["Allow"] == "GET, POST"

    def test_method_not_allowed_without_methods(self):
        assert "Allow" not in method_not_allowed([]).headers


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_status_phrases(self):
        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.SEE_OTHER.phrase == "See Other"
        assert HTTPStatus.NOT_FOUND.phrase == "Not Found"

    def test_status_categories(self):
        assert HTTPStatus.SEE_OTHER.is_redirect
        assert not HTTPStatus.OK.is_redirect
        assert HTTPStatus.NOT_FOUND.is_error
        assert HTTPStatus.INTERNAL_SERVER_ERROR.is_error
        assert not HTTPStatus.OK.is_error


class TestFormatHTTPDate:
    """Tests for HTTP date formatting."""

    def test_format(self):
        from datetime import datetime, timezone

        dt = datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

        assert format_http_date(dt) == "Thu, 15 Jan 2026 12:30:45 GMT"
