"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds the responses the wiki sends back, framed per RFC 7230.

=============================================================================
RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     WIKI RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 303 See Other\r\n                   ← status line        │
    │    Location: /wiki/bauhaus\r\n                  ← headers            │
    │    Content-Length: 0\r\n                                             │
    │    Date: Mon, 19 Oct 2026 12:00:00 GMT\r\n                           │
    │    Server: BauhausWiki/1.0\r\n                                       │
    │    Connection: close\r\n                                             │
    │    \r\n                                         ← separator          │
    │    (body)                                                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
RESPONSE KINDS
=============================================================================

    Page         200  text/html; charset=utf-8     html_page()
    Stylesheet   200  text/css; charset=utf-8      ResponseBuilder().css()
    Redirect     303  Location header, no body     see_other()
    Error        4xx  text/plain, phrase as body   error_response(), not_found()

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Union

from .status_codes import HTTPStatus


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    Use ResponseBuilder or the convenience functions below to build one.

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        Handler returns          to_bytes()              Socket sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes

    =========================================================================
    """

    status: HTTPStatus = HTTPStatus.OK       # HTTP status code (enum)
    headers: Dict[str, str] = field(default_factory=dict)  # Response headers
    body: bytes = b""                        # Response body
    version: str = "HTTP/1.1"                # HTTP version

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 (handy in tests and logs)."""
        return self.body.decode("utf-8", errors="replace")

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a response header. Returns self for method chaining."""
        self.headers[name] = value
        return self

    def to_bytes(self, server_name: str = "BauhausWiki/1.0") -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        =====================================================================
        SERIALIZATION FORMAT
        =====================================================================

            HTTP/1.1 200 OK\r\n               ← Status line
            Content-Type: text/html; ...\r\n
            Content-Length: 1832\r\n          ← Auto-calculated
            Date: Mon, 19 Oct 2026 ...\r\n    ← Auto-added
            Server: BauhausWiki/1.0\r\n       ← Auto-added
            \r\n                              ← Empty line (separator)
            <!DOCTYPE html>...                ← Body bytes

        =====================================================================

        Args:
            server_name: Server identifier for Server header.

        Returns:
            Complete HTTP response as bytes ready for socket.sendall()
        """
        # Copy headers to avoid modifying original
        response_headers = dict(self.headers)

        # Content-Length: client knows where the body ends
        if "Content-Length" not in response_headers:
            response_headers["Content-Length"] = str(len(self.body))

        if "Date" not in response_headers:
            response_headers["Date"] = format_http_date(datetime.now(timezone.utc))

        if "Server" not in response_headers:
            response_headers["Server"] = server_name

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")

        # Empty line separates headers from body
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

    ==========================================================================
    USAGE EXAMPLES
    ==========================================================================

        # Rendered wiki page
        response = ResponseBuilder().html(page).build()

        # Stylesheet
        response = ResponseBuilder().css(STYLESHEET).build()

        # Redirect after saving
        response = ResponseBuilder().redirect("/wiki/bauhaus").build()

    Each method returns `self`, except build().

    ==========================================================================
    """

    def __init__(self):
        self._status = HTTPStatus.OK           # Default to 200 OK
        self._headers: Dict[str, str] = {}     # Headers to set
        self._body: bytes = b""                # Response body

    # =========================================================================
    # STATUS AND HEADERS
    # =========================================================================

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the HTTP status code."""
        self._status = status
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        """Add a single response header."""
        self._headers[name] = value
        return self

    def content_type(self, content_type: str) -> "ResponseBuilder":
        """Set the Content-Type header."""
        return self.header("Content-Type", content_type)

    # =========================================================================
    # BODY METHODS
    # =========================================================================

    def body(self, body: Union[str, bytes]) -> "ResponseBuilder":
        """
        Set the response body (raw bytes or string).

        Strings are encoded as UTF-8.
        """
        if isinstance(body, str):
            self._body = body.encode("utf-8")
        else:
            self._body = body
        return self

    def text(self, text: str) -> "ResponseBuilder":
        """Set a plain text response body."""
        return self.content_type("text/plain; charset=utf-8").body(text)

    def html(self, html: str) -> "ResponseBuilder":
        """Set an HTML response body."""
        return self.content_type("text/html; charset=utf-8").body(html)

    def css(self, css: str) -> "ResponseBuilder":
        """Set a stylesheet response body."""
        return self.content_type("text/css; charset=utf-8").body(css)

    # =========================================================================
    # REDIRECT METHODS
    # =========================================================================

    def redirect(self, location: str) -> "ResponseBuilder":
        """
        Create a 303 See Other redirect.

        =====================================================================
        REDIRECT AFTER SAVE
        =====================================================================

        After POST /save/bauhaus the browser loads the article with a
        GET: 303 means "see the result at this other URL, using GET".

            POST /save/bauhaus  ──►  303 Location: /wiki/bauhaus
            GET  /wiki/bauhaus  ──►  200 (rendered article)

        =====================================================================
        """
        self._status = HTTPStatus.SEE_OTHER
        self._headers["Location"] = location
        return self

    # =========================================================================
    # BUILD METHODS
    # =========================================================================

    def build(self) -> HTTPResponse:
        """Build and return the HTTPResponse object."""
        return HTTPResponse(
            status=self._status,
            headers=self._headers,
            body=self._body,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Mon, 19 Oct 2026 12:00:00 GMT

    HTTP dates are always in GMT (UTC), never local time.
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# Quick one-liners for the responses handlers return.
#
#     return html_page(article_page(...))
#     return see_other("/wiki/bauhaus")
#     return not_found()
#
# =============================================================================

def html_page(html: str) -> HTTPResponse:
    """Create a 200 OK response carrying an HTML page."""
    return ResponseBuilder().html(html).build()


def see_other(location: str) -> HTTPResponse:
    """Create a 303 See Other redirect to ``location``."""
    return ResponseBuilder().redirect(location).build()


def error_response(status: HTTPStatus) -> HTTPResponse:
    """
    Create an error response whose body is the reason phrase.

        HTTP/1.1 404 Not Found
        Content-Type: text/plain; charset=utf-8
        ...

        Not Found
    """
    return ResponseBuilder().status(status).text(status.phrase).build()


def not_found() -> HTTPResponse:
    """Create a 404 Not Found response."""
    return error_response(HTTPStatus.NOT_FOUND)


def method_not_allowed(allowed_methods: list[str]) -> HTTPResponse:
    """
    Create a 405 Method Not Allowed response.

    Includes the Allow header listing valid methods (RFC 7231 requirement)
    when they are known.
    """
    response = error_response(HTTPStatus.METHOD_NOT_ALLOWED)
    if allowed_methods:
        response.set_header("Allow", ", ".join(allowed_methods))
    return response


def internal_error() -> HTTPResponse:
    """Create a 500 Internal Server Error response."""
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR)
