"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Turns bytes from a socket into requests, routes them, and turns responses
back into bytes.

    ┌─────────────────────────────────────────────────────────────────────┐
    │ request.py       bytes → HTTPRequest (400 / 405 on bad input)       │
    │ forms.py         query / form value extraction and decoding         │
    │ router.py        method + path → handler (404 / 405 on miss)        │
    │ response.py      HTTPResponse, ResponseBuilder, one-liners          │
    │ status_codes.py  the status codes the wiki answers with             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest, RequestParser, HTTPParseError, parse_request
from .response import (
    HTTPResponse,
    ResponseBuilder,
    # Convenience functions for common responses
    html_page,          # 200 OK, HTML
    see_other,          # 303 See Other
    error_response,     # any status, phrase as body
    not_found,          # 404 Not Found
    method_not_allowed, # 405 Method Not Allowed
    internal_error,     # 500 Internal Server Error
)
from .router import Router, Route, RouteMatch
from .status_codes import HTTPStatus
from .forms import url_decode, extract_param

__all__ = [
    # Request parsing
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "parse_request",

    # Response building
    "HTTPResponse",
    "ResponseBuilder",
    "html_page",
    "see_other",
    "error_response",
    "not_found",
    "method_not_allowed",
    "internal_error",

    # Routing
    "Router",
    "Route",
    "RouteMatch",

    # Status codes
    "HTTPStatus",

    # Form decoding
    "url_decode",
    "extract_param",
]
