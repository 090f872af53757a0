"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses the raw bytes of one wiki request into an HTTPRequest object.

=============================================================================
REQUEST ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     WIKI REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  ┌─ REQUEST LINE ─────────────────────────────────────────────────┐ │
    │  │                                                                 │ │
    │  │    POST /save/bauhaus HTTP/1.1\r\n                              │ │
    │  │    ──┬─ ──────┬────── ────┬───                                  │ │
    │  │      │        │           │                                     │ │
    │  │   Method   Target     Version (optional)                       │ │
    │  │                                                                 │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ HEADERS ──────────────────────────────────────────────────────┐ │
    │  │    Host: localhost:24439\r\n                                    │ │
    │  │    Content-Type: application/x-www-form-urlencoded\r\n          │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ EMPTY LINE (separator) ───────────────────────────────────────┐ │
    │  │    \r\n                                                         │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    │  ┌─ BODY (optional) ──────────────────────────────────────────────┐ │
    │  │    content=The+Bauhaus+was+a+German+art+school...               │ │
    │  └─────────────────────────────────────────────────────────────────┘ │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
A DELIBERATELY SMALL GRAMMAR
=============================================================================

The wiki reads a request ONCE from the socket and parses whatever arrived.
That shapes the parser:

1. NO CONTENT-LENGTH FRAMING:
   The body is simply everything after the first \r\n\r\n.
   A truncated body is accepted as-is.

2. LENIENT REQUEST LINE:
   Only METHOD and TARGET are required. The version token is optional
   and is not validated.

3. LENIENT HEADERS:
   Lines without a colon are skipped instead of rejected.

4. ONLY TWO METHODS:
   GET reads, POST saves. Anything else → 405 Method Not Allowed.

=============================================================================
ERROR MAPPING
=============================================================================

    Empty request                       → HTTPParseError(400)
    Request line with < 2 tokens        → HTTPParseError(400)
    Method other than GET / POST        → HTTPParseError(405)

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict

from .forms import extract_body, extract_param, split_target


class HTTPParseError(Exception):
    """
    Raised when a request cannot be turned into an HTTPRequest.

    Carries the HTTP status code the client should receive:

        400 Bad Request         - Empty or malformed request line
        405 Method Not Allowed  - Method other than GET or POST
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code  # HTTP status to return


@dataclass
class HTTPRequest:
    """
    Represents a parsed wiki request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         "GET" or "POST"

        target:         The request target exactly as sent
                        "/search?q=bauhaus"

        path:           Target without query string, NOT percent-decoded
                        "/search"  /  "/wiki/form_follows_function"

        query_string:   Raw text after the first "?" (may be empty)
                        "q=bauhaus"

        version:        Version token if present, else "HTTP/1.1"

        headers:        Header dict with LOWERCASE keys

        body:           Text after the first blank line (may be empty)

        path_params:    Filled in by the router
                        "/wiki/*key" with "/wiki/bauhaus" → {"key": "bauhaus"}

        client_address: (ip, port) of the peer, used for access logs

        raw:            The request text as decoded from the socket

    =========================================================================
    """

    # Core request line components
    method: str                          # GET or POST
    path: str                            # Request path without query string
    target: str = ""                     # Path plus "?query" as sent
    query_string: str = ""               # Raw query string
    version: str = "HTTP/1.1"            # Version token (informational)

    # Parsed components
    headers: Dict[str, str] = field(default_factory=dict)  # Header name → value
    body: str = ""                       # Raw body text

    # Router-injected parameters
    path_params: Dict[str, str] = field(default_factory=dict)

    # Metadata
    client_address: tuple[str, int] = ("", 0)  # (IP, port) of client
    raw: str = ""                        # Original request text

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def user_agent(self) -> str:
        """Get the User-Agent header value."""
        return self.headers.get("user-agent", "")

    # =========================================================================
    # ACCESSOR METHODS
    # =========================================================================

    def get_header(self, name: str, default: str = "") -> str:
        """
        Get a header value (case-insensitive lookup).

        Example:
            request.get_header("Content-Type")
            # Works because headers are stored lowercase
        """
        return self.headers.get(name.lower(), default)

    def get_query(self, name: str) -> str:
        """
        Get a decoded query parameter.

        Example:
            # Target: /search?q=form+follows+function
            request.get_query("q")  # Returns "form follows function"

        Returns:
            Decoded value, or "" when the parameter is absent.
        """
        return extract_param(self.query_string, name)

    def get_form(self, name: str) -> str:
        """
        Get a decoded form field from the urlencoded body.

        Example:
            # Body: content=Hello%2C+world
            request.get_form("content")  # Returns "Hello, world"

        Returns:
            Decoded value, or "" when the field is absent.
        """
        return extract_param(self.body, name)


class RequestParser:
    """
    Parses raw request bytes into HTTPRequest objects.

    ==========================================================================
    PARSER ARCHITECTURE
    ==========================================================================

        Raw Request Bytes (one read, up to buffer_size)
              │
              ▼
        ┌───────────────────────────────────────────────────────────────────┐
        │  REQUEST PARSER                                                   │
        ├───────────────────────────────────────────────────────────────────┤
        │                                                                    │
        │  1. Decode as UTF-8 (invalid bytes → U+FFFD) ───────────────────►│
        │     ▼                                                             │
        │  2. Split into lines, take the first ───────────────────────────►│
        │     │  No lines? → HTTPParseError(400)                           │
        │     ▼                                                             │
        │  3. Parse Request Line ─────────────────────────────────────────►│
        │     │  METHOD SP TARGET [SP VERSION]                              │
        │     │  < 2 tokens? → HTTPParseError(400)                         │
        │     │  Not GET/POST? → HTTPParseError(405)                       │
        │     ▼                                                             │
        │  4. Parse Headers (until first blank line) ─────────────────────►│
        │     ▼                                                             │
        │  5. Extract Body (after first \r\n\r\n) ────────────────────────►│
        │     ▼                                                             │
        │  6. Build HTTPRequest Object ───────────────────────────────────►│
        │                                                                    │
        └───────────────────────────────────────────────────────────────────┘

    ==========================================================================
    """

    VALID_METHODS = {
        "GET",      # Read pages
        "POST",     # Save articles
    }

    def parse(
        self,
        data: bytes,
        client_address: tuple[str, int] = ("", 0)
    ) -> HTTPRequest:
        """
        Parse raw request data into an HTTPRequest object.

        Args:
            data: Raw request bytes from the socket.
            client_address: Client's (ip, port) tuple for logging.

        Returns:
            Parsed HTTPRequest object.

        Raises:
            HTTPParseError: If the request line is missing or malformed,
                            or the method is not supported.
        """
        text = data.decode("utf-8", errors="replace")

        # =====================================================================
        # STEP 1: Split into lines
        # =====================================================================
        # Lines end with \n; a trailing \r is stripped so bare-LF clients
        # parse the same way as CRLF clients.
        #
        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
        if not text or not lines:
            raise HTTPParseError("Empty request")

        # =====================================================================
        # STEP 2: Parse the request line (first line)
        # =====================================================================
        method, target, version = self._parse_request_line(lines[0])
        path, query_string = split_target(target)

        # =====================================================================
        # STEP 3: Parse headers (lines up to the first blank line)
        # =====================================================================
        headers = self._parse_headers(lines[1:])

        return HTTPRequest(
            method=method,
            path=path,
            target=target,
            query_string=query_string,
            version=version,
            headers=headers,
            body=extract_body(text),
            client_address=client_address,
            raw=text,
        )

    def _parse_request_line(self, line: str) -> tuple[str, str, str]:
        """
        Parse the request line.

            "GET /wiki/bauhaus HTTP/1.1"
             ─┬─ ──────┬────── ────┬───
              │        │           │
            Method   Target    Version

        Tokens are separated by any run of whitespace. Tokens after the
        version are ignored.

        Returns:
            Tuple of (method, target, version)

        Raises:
            HTTPParseError: If line is malformed or the method unsupported
        """
        parts = line.split()
        if len(parts) < 2:
            raise HTTPParseError(f"Invalid request line: {line!r}")

        method, target = parts[0], parts[1]
        version = parts[2] if len(parts) > 2 else "HTTP/1.1"

        if method not in self.VALID_METHODS:
            raise HTTPParseError(
                f"Unsupported method: {method}",
                status_code=405  # Method Not Allowed
            )

        return method, target, version

    def _parse_headers(self, lines: list[str]) -> Dict[str, str]:
        """
        Parse header lines into a dictionary with lowercase names.

        Parsing stops at the first empty line (the header/body separator).
        Lines without a colon are skipped. A repeated header keeps its
        values joined with ", ".
        """
        headers: Dict[str, str] = {}

        for line in lines:
            if not line:
                break  # End of headers

            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                continue  # Not a header line

            name = name.strip().lower()
            value = value.strip()

            if name in headers:
                headers[name] = f"{headers[name]}, {value}"
            else:
                headers[name] = value

        return headers


def parse_request(data: bytes, client_address: tuple[str, int] = ("", 0)) -> HTTPRequest:
    """
    Convenience function to parse a request.

    Uses a default RequestParser instance.
    """
    return RequestParser().parse(data, client_address)
